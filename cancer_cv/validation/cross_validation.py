"""Cross-validation over a fixed partition and hyperparameter-grid sweeps."""

import time
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from sklearn.model_selection import ParameterGrid

from cancer_cv.config import DEFAULT_K_MAX
from cancer_cv.data.loader import WDBCDataset
from cancer_cv.data.preprocessor import Preprocessor
from cancer_cv.evaluation.evaluator import (
    FoldResult,
    MetricTriple,
    aggregate,
    evaluate_fold,
)
from cancer_cv.models.trainer import ModelTrainer
from cancer_cv.utils import get_logger
from cancer_cv.validation.folds import FoldPartition

log = get_logger(__name__)


@dataclass(frozen=True)
class CVResult:
    """Per-fold results for one (model, parameters) combination, in fold order."""

    model: str
    params: dict
    folds: tuple
    mean: MetricTriple
    accuracy_std: float
    elapsed_seconds: float = field(default=0.0, compare=False)

    def to_dict(self) -> dict:
        return {
            "model": self.model,
            "params": dict(self.params),
            "mean": self.mean.as_dict(),
            "mean_pct": self.mean.as_percentages(),
            "accuracy_std": self.accuracy_std,
            "folds": [
                {
                    "fold": r.fold,
                    "confusion_matrix": r.confusion.as_table(),
                    **r.metrics.as_dict(),
                }
                for r in self.folds
            ],
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }


@dataclass(frozen=True)
class SweepResult:
    """Ordered ``parameters -> CVResult`` records for one model."""

    model: str
    entries: tuple

    def best(self) -> CVResult:
        """Highest mean accuracy; the earliest grid point wins ties."""
        if not self.entries:
            raise ValueError(f"Sweep for '{self.model}' has no entries")
        return max(self.entries, key=lambda r: r.mean.accuracy)

    def to_frame(self, percentages: bool = True) -> pd.DataFrame:
        rows = []
        for r in self.entries:
            metrics = r.mean.as_percentages() if percentages else r.mean.as_dict()
            rows.append({**_flatten_params(r.params), **metrics})
        return pd.DataFrame(rows)

    def to_dict(self) -> dict:
        best = self.best()
        return {
            "model": self.model,
            "results": [
                {"params": dict(r.params), **r.mean.as_percentages()}
                for r in self.entries
            ],
            "best_params": dict(best.params),
            "best_pct": best.mean.as_percentages(),
        }


def _flatten_params(params: dict) -> dict:
    return {
        k: "x".join(map(str, v)) if isinstance(v, (tuple, list)) else v
        for k, v in params.items()
    }


class CrossValidator:
    """
    Runs models over one shared, read-only fold partition.

    For every fold the features are scaled with statistics from that fold's
    training rows, a fresh model is fitted, and the predictions are scored
    into an immutable :class:`FoldResult`.
    """

    def __init__(self, dataset: WDBCDataset, partition: FoldPartition,
                 scaling: str = "standard", seed: int = 42):
        if partition.n_samples != dataset.n_samples:
            raise ValueError(
                f"Partition covers {partition.n_samples} rows, "
                f"dataset has {dataset.n_samples}"
            )
        if partition.n_folds < 2:
            raise ValueError("Cross-validation needs at least 2 folds")
        self.dataset = dataset
        self.partition = partition
        self.scaling = scaling
        self.seed = seed
        Preprocessor(scaling)  # validate the method up front

    def run(self, model: str, params: dict | None = None) -> CVResult:
        """Cross-validate one model with one parameter setting."""
        trainer = ModelTrainer(model, params, seed=self.seed)
        X, y = self.dataset.X, self.dataset.labels

        t0 = time.time()
        fold_results: list[FoldResult] = []
        for fold, train_idx, test_idx in self.partition.splits():
            X_train, X_test = Preprocessor(self.scaling).run(X[train_idx], X[test_idx])
            y_pred = trainer.fit_predict(X_train, y[train_idx], X_test)
            fold_results.append(evaluate_fold(fold, y[test_idx], y_pred))
        elapsed = time.time() - t0

        mean = aggregate(fold_results)
        result = CVResult(
            model=model,
            params=dict(trainer.params),
            folds=tuple(fold_results),
            mean=mean,
            accuracy_std=float(np.std([r.metrics.accuracy for r in fold_results])),
            elapsed_seconds=elapsed,
        )
        log.info(
            "  %s %s: acc=%.2f%% sens=%.2f%% spec=%.2f%%",
            model, _flatten_params(result.params) or "(defaults)",
            mean.accuracy * 100, mean.sensitivity * 100, mean.specificity * 100,
        )
        return result

    def grid_sweep(self, model: str, grid) -> SweepResult:
        """
        Cross-validate ``model`` at every point of ``grid``.

        ``grid`` is a dict of parameter -> candidate values (or a list of
        such dicts), expanded with :class:`sklearn.model_selection.ParameterGrid`.
        """
        grids = [grid] if isinstance(grid, dict) else list(grid)
        if not grids or any(
            not g or any(len(values) == 0 for values in g.values()) for g in grids
        ):
            raise ValueError(f"Empty hyperparameter grid for '{model}'")
        points = list(ParameterGrid(grids))
        log.info("Sweeping %s over %d parameter settings", model, len(points))
        entries = tuple(self.run(model, params) for params in points)
        return SweepResult(model=model, entries=entries)

    def knn_sweep(self, k_values=None) -> SweepResult:
        """KNN over ``k_values`` (default 1..30), one row per k."""
        if k_values is None:
            k_values = range(1, DEFAULT_K_MAX + 1)
        k_values = [int(k) for k in k_values]
        if any(k < 1 for k in k_values):
            raise ValueError(f"k values must be >= 1, got {k_values}")
        return self.grid_sweep("knn", {"n_neighbors": k_values})


def knn_table(sweep: SweepResult) -> pd.DataFrame:
    """The KNN sweep as a k-indexed (accuracy, sensitivity, specificity) table."""
    return sweep.to_frame().rename(columns={"n_neighbors": "k"}).set_index("k")
