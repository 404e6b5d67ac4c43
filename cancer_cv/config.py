"""Configuration constants and the validated experiment configuration."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_OUTPUT_DIR = "cancer_cv_output"

# Raw file layout: id, diagnosis, then 10 measurements x {mean, se, worst}
MEASUREMENTS = (
    "radius",
    "texture",
    "perimeter",
    "area",
    "smoothness",
    "compactness",
    "concavity",
    "concave_points",
    "symmetry",
    "fractal_dimension",
)
STATISTICS = ("mean", "se", "worst")
FEATURE_NAMES = tuple(f"{m}_{s}" for s in STATISTICS for m in MEASUREMENTS)
ID_COLUMN = "id"
LABEL_COLUMN = "diagnosis"
RAW_COLUMNS = (ID_COLUMN, LABEL_COLUMN) + FEATURE_NAMES

# Diagnosis labels; malignant is the positive class
POSITIVE_LABEL = "M"
NEGATIVE_LABEL = "B"
LABEL_ENCODING = {POSITIVE_LABEL: 1, NEGATIVE_LABEL: 0}
LABEL_NAMES = {POSITIVE_LABEL: "malignant", NEGATIVE_LABEL: "benign"}

# Experiment defaults
DEFAULT_SEED = 42
DEFAULT_FOLDS = 5
DEFAULT_K_MAX = 30
SCALING_METHODS = ("standard", "minmax", "none")
MODEL_NAMES = ("knn", "naive_bayes", "svm", "neural_network")

# Hyperparameter grids explored on top of the default single-run settings
SVM_GRID = {
    "kernel": ["linear", "poly", "rbf", "sigmoid"],
    "C": [0.1, 1.0, 5.0, 10.0],
}
NEURAL_NETWORK_GRID = {
    "hidden_layer_sizes": [(3, 2), (5, 3), (10, 5), (16, 8), (32, 16)],
}


class ExperimentConfig(BaseModel):
    """Every tunable knob of one study run, validated before any work starts."""

    data_path: str | None = Field(
        default=None,
        description="WDBC-format CSV file (null = bundled copy of the data)",
    )
    folds: int = Field(default=DEFAULT_FOLDS, ge=2)
    seed: int = Field(default=DEFAULT_SEED, ge=0)
    k_max: int = Field(default=DEFAULT_K_MAX, ge=1)
    scaling: str = Field(default="standard", pattern="^(standard|minmax|none)$")
    models: list[str] = Field(default_factory=lambda: list(MODEL_NAMES), min_length=1)
    run_sweeps: bool = True
    output_dir: str = DEFAULT_OUTPUT_DIR

    @field_validator("models")
    @classmethod
    def _known_models(cls, models: list[str]) -> list[str]:
        unknown = sorted(set(models) - set(MODEL_NAMES))
        if unknown:
            raise ValueError(f"Unknown models: {unknown}. Available: {list(MODEL_NAMES)}")
        return models
