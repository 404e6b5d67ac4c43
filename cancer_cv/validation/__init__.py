from cancer_cv.validation.cross_validation import (
    CrossValidator,
    CVResult,
    SweepResult,
    knn_table,
)
from cancer_cv.validation.folds import FoldPartition, fold_boundaries, partition

__all__ = [
    "CrossValidator",
    "CVResult",
    "SweepResult",
    "FoldPartition",
    "fold_boundaries",
    "knn_table",
    "partition",
]
