from cancer_cv.evaluation.evaluator import (
    ConfusionMatrix,
    FoldResult,
    MetricTriple,
    aggregate,
    confusion,
    evaluate_fold,
    metrics_from_confusion,
)
from cancer_cv.evaluation.reporter import Reporter

__all__ = [
    "ConfusionMatrix",
    "FoldResult",
    "MetricTriple",
    "Reporter",
    "aggregate",
    "confusion",
    "evaluate_fold",
    "metrics_from_confusion",
]
