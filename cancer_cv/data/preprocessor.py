"""Per-fold feature scaling."""

import numpy as np
from sklearn.preprocessing import MinMaxScaler, StandardScaler

from cancer_cv.config import SCALING_METHODS
from cancer_cv.utils import get_logger

log = get_logger(__name__)


class Preprocessor:
    """
    Scales one fold's features.

    Statistics are fitted on the training partition only and applied to both
    partitions, so nothing about the held-out rows leaks into training.
    """

    def __init__(self, scaling: str = "standard"):
        if scaling not in SCALING_METHODS:
            raise ValueError(
                f"Unknown scaling method: {scaling}. Available: {list(SCALING_METHODS)}"
            )
        self.scaling = scaling
        self.scaler = None

    def _make_scaler(self):
        if self.scaling == "standard":
            return StandardScaler()
        if self.scaling == "minmax":
            return MinMaxScaler()
        return None

    def run(self, X_train: np.ndarray, X_test: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Fit on ``X_train`` and return the scaled (train, test) pair."""
        self.scaler = self._make_scaler()
        if self.scaler is None:
            return np.asarray(X_train, dtype=float), np.asarray(X_test, dtype=float)

        X_train_scaled = self.scaler.fit_transform(X_train)
        X_test_scaled = self.scaler.transform(X_test)
        log.debug(
            "Applied %s scaling fitted on %d training rows",
            self.scaling, len(X_train),
        )
        return X_train_scaled, X_test_scaled
