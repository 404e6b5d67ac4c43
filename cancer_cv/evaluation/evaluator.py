"""Confusion matrices and the (accuracy, sensitivity, specificity) triple."""

from dataclasses import dataclass

import numpy as np
from sklearn.metrics import confusion_matrix

from cancer_cv.config import NEGATIVE_LABEL, POSITIVE_LABEL
from cancer_cv.utils import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ConfusionMatrix:
    """2x2 counts for one (model, fold) pair; the positive class is malignant."""

    tp: int
    fp: int
    fn: int
    tn: int
    positive: str = POSITIVE_LABEL
    negative: str = NEGATIVE_LABEL

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.fn + self.tn

    def as_table(self) -> list[list[int]]:
        """Rows are predicted classes, columns actual, positive first."""
        return [[self.tp, self.fp], [self.fn, self.tn]]


@dataclass(frozen=True)
class MetricTriple:
    accuracy: float
    sensitivity: float
    specificity: float

    @classmethod
    def mean(cls, triples) -> "MetricTriple":
        """Arithmetic mean of each metric across ``triples``."""
        triples = list(triples)
        if not triples:
            raise ValueError("Cannot average an empty sequence of metric triples")
        return cls(
            accuracy=float(np.mean([t.accuracy for t in triples])),
            sensitivity=float(np.mean([t.sensitivity for t in triples])),
            specificity=float(np.mean([t.specificity for t in triples])),
        )

    def as_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "sensitivity": self.sensitivity,
            "specificity": self.specificity,
        }

    def as_percentages(self, digits: int = 2) -> dict:
        return {k: round(v * 100, digits) for k, v in self.as_dict().items()}


@dataclass(frozen=True)
class FoldResult:
    fold: int
    confusion: ConfusionMatrix
    metrics: MetricTriple


def confusion(y_true, y_pred, positive: str = POSITIVE_LABEL,
              negative: str = NEGATIVE_LABEL) -> ConfusionMatrix:
    """
    Count predictions against truth over exactly two label values.

    Classes absent from either sequence still get their row and column,
    filled with zeros, so a fold where a model predicts only one class
    yields a valid 2x2 matrix.
    """
    y_true = np.asarray(y_true, dtype=object)
    y_pred = np.asarray(y_pred, dtype=object)
    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"Predicted and true labels differ in length: {len(y_pred)} != {len(y_true)}"
        )
    allowed = {positive, negative}
    unexpected = sorted({str(v) for v in np.concatenate([y_true, y_pred]) if v not in allowed})
    if unexpected:
        raise ValueError(
            f"Labels {unexpected} are outside the expected pair {sorted(allowed)}"
        )

    if len(y_true) == 0:
        return ConfusionMatrix(0, 0, 0, 0, positive, negative)

    # sklearn's layout is rows = actual, columns = predicted
    cm = confusion_matrix(y_true, y_pred, labels=[positive, negative])
    return ConfusionMatrix(
        tp=int(cm[0, 0]),
        fn=int(cm[0, 1]),
        fp=int(cm[1, 0]),
        tn=int(cm[1, 1]),
        positive=positive,
        negative=negative,
    )


def _rate(hits: int, misses: int) -> float:
    # No rows of that class: nothing was missed.
    total = hits + misses
    return hits / total if total else 1.0


def metrics_from_confusion(cm: ConfusionMatrix) -> MetricTriple:
    if cm.total == 0:
        raise ValueError("Cannot score an empty confusion matrix")
    return MetricTriple(
        accuracy=(cm.tp + cm.tn) / cm.total,
        sensitivity=_rate(cm.tp, cm.fn),
        specificity=_rate(cm.tn, cm.fp),
    )


def evaluate_fold(fold: int, y_true, y_pred, positive: str = POSITIVE_LABEL,
                  negative: str = NEGATIVE_LABEL) -> FoldResult:
    """Build a fresh :class:`FoldResult` for one fold's predictions."""
    cm = confusion(y_true, y_pred, positive, negative)
    metrics = metrics_from_confusion(cm)
    log.debug(
        "  fold %d: acc=%.4f sens=%.4f spec=%.4f (tp=%d fp=%d fn=%d tn=%d)",
        fold, metrics.accuracy, metrics.sensitivity, metrics.specificity,
        cm.tp, cm.fp, cm.fn, cm.tn,
    )
    return FoldResult(fold=fold, confusion=cm, metrics=metrics)


def aggregate(fold_results) -> MetricTriple:
    """Mean metric triple over folds; fold order does not matter."""
    return MetricTriple.mean(r.metrics for r in fold_results)
