"""Seeded K-fold partitioning of row positions."""

import numbers
from dataclasses import dataclass

import numpy as np
from sklearn.utils import check_random_state


@dataclass(frozen=True, eq=False)
class FoldPartition:
    """A fixed assignment of every row to exactly one test fold."""

    n_samples: int
    n_folds: int
    seed: int
    permutation: np.ndarray
    folds: tuple

    @property
    def fold_sizes(self) -> list[int]:
        return [len(f) for f in self.folds]

    def _check_fold(self, fold: int) -> None:
        # negative positions would otherwise wrap around to the last folds
        if not 0 <= fold < self.n_folds:
            raise IndexError(f"Fold {fold} out of range for {self.n_folds} folds")

    def test_indices(self, fold: int) -> np.ndarray:
        self._check_fold(fold)
        return self.folds[fold]

    def train_indices(self, fold: int) -> np.ndarray:
        self._check_fold(fold)
        return np.concatenate(
            [f for i, f in enumerate(self.folds) if i != fold]
        ) if self.n_folds > 1 else np.empty(0, dtype=int)

    def splits(self):
        """Yield ``(fold, train_indices, test_indices)`` in fold order."""
        for i in range(self.n_folds):
            yield i, self.train_indices(i), self.test_indices(i)

    def summary(self) -> dict:
        return {
            "n_samples": self.n_samples,
            "n_folds": self.n_folds,
            "seed": self.seed,
            "fold_sizes": self.fold_sizes,
        }


def fold_boundaries(n_samples: int, n_folds: int) -> list[tuple[int, int]]:
    """
    Contiguous ``[start, stop)`` ranges covering ``n_samples`` positions.

    The first ``n_samples % n_folds`` folds get one extra row, so sizes never
    differ by more than one (569 rows in 5 folds: 114, 114, 114, 114, 113).
    """
    base, extra = divmod(n_samples, n_folds)
    bounds = []
    start = 0
    for i in range(n_folds):
        stop = start + base + (1 if i < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


def partition(n_samples: int, n_folds: int = 5, seed: int = 42) -> FoldPartition:
    """
    Shuffle ``range(n_samples)`` with ``seed`` and slice it into ``n_folds``
    contiguous folds. The same seed always gives the same partition.
    """
    if not isinstance(n_folds, numbers.Integral) or isinstance(n_folds, bool):
        raise TypeError(f"n_folds must be an integer, got {n_folds!r}")
    if not isinstance(n_samples, numbers.Integral) or n_samples < 0:
        raise ValueError(f"n_samples must be a non-negative integer, got {n_samples!r}")
    if n_folds <= 0:
        raise ValueError(f"n_folds must be positive, got {n_folds}")
    if n_folds > n_samples:
        raise ValueError(
            f"Cannot split {n_samples} samples into {n_folds} folds"
        )

    rng = check_random_state(seed)
    permutation = rng.permutation(n_samples)
    permutation.flags.writeable = False

    folds = []
    for start, stop in fold_boundaries(n_samples, n_folds):
        fold = permutation[start:stop].copy()
        fold.flags.writeable = False
        folds.append(fold)

    return FoldPartition(
        n_samples=int(n_samples),
        n_folds=int(n_folds),
        seed=seed,
        permutation=permutation,
        folds=tuple(folds),
    )
