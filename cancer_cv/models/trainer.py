"""Model registry and per-fold training glue."""

import numpy as np
from sklearn.neural_network import MLPClassifier
from sklearn.svm import SVC

from cancer_cv.models.classifiers import KernelNaiveBayes, NearestNeighborVote
from cancer_cv.utils import get_logger

log = get_logger(__name__)

# Model configurations: name -> (class, default kwargs)
MODEL_CONFIGS = {
    "knn": (
        NearestNeighborVote,
        {"n_neighbors": 10},
    ),
    "naive_bayes": (
        KernelNaiveBayes,
        {"bandwidth_adjust": 1.0},
    ),
    "svm": (
        SVC,
        {"kernel": "linear", "C": 5.0},
    ),
    "neural_network": (
        MLPClassifier,
        {
            "hidden_layer_sizes": (16, 8),
            "activation": "logistic",
            "solver": "lbfgs",
            "max_iter": 2000,
        },
    ),
}

# Estimators whose fit draws random numbers; they get the study seed
_SEEDED = {"svm", "neural_network"}


def build_model(name: str, params: dict | None = None, seed: int = 42):
    """Instantiate a registered model with its defaults overridden by ``params``."""
    if name not in MODEL_CONFIGS:
        raise ValueError(
            f"Unknown model '{name}'. Available: {list(MODEL_CONFIGS.keys())}"
        )
    cls, defaults = MODEL_CONFIGS[name]
    kwargs = {**defaults, **(params or {})}

    if name == "neural_network":
        layers = tuple(kwargs["hidden_layer_sizes"])
        if len(layers) != 2:
            raise ValueError(
                f"neural_network needs exactly two hidden layers, got {layers}"
            )
        kwargs["hidden_layer_sizes"] = layers
    if name in _SEEDED:
        kwargs.setdefault("random_state", seed)

    return cls(**kwargs)


class ModelTrainer:
    """Fits one registered model on a training fold and predicts its test fold."""

    def __init__(self, name: str, params: dict | None = None, seed: int = 42):
        self.name = name
        self.params = dict(params or {})
        self.seed = seed
        # Fail on unknown names/params before any fold runs
        build_model(name, self.params, seed)

    @staticmethod
    def list_available_models() -> list[str]:
        """Return all available model names."""
        return list(MODEL_CONFIGS.keys())

    def fit_predict(self, X_train: np.ndarray, y_train: np.ndarray,
                    X_test: np.ndarray) -> np.ndarray:
        """Train a fresh model and return class predictions for ``X_test``."""
        model = build_model(self.name, self.params, self.seed)
        log.debug("Fitting %s on %d rows", self.name, len(X_train))
        model.fit(X_train, y_train)
        return model.predict(X_test)
