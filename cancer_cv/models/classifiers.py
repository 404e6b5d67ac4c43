"""
Classifiers that scikit-learn does not ship in the form the study needs.

Both follow the estimator protocol (``fit`` / ``predict`` / ``predict_proba``)
so the trainer can treat them like any library model.
"""

import numpy as np
from scipy.special import logsumexp
from scipy.stats import iqr
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.metrics.pairwise import euclidean_distances
from sklearn.neighbors import KernelDensity


class NearestNeighborVote(ClassifierMixin, BaseEstimator):
    """
    Majority vote among the k nearest training rows (Euclidean distance).

    Ties in the vote go to whichever tied class owns the closest neighbour.
    Neighbours at equal distance are ordered by their position in the
    training set, so predictions are fully deterministic. ``n_neighbors``
    larger than the training set is clamped to the training-set size.
    """

    def __init__(self, n_neighbors: int = 10):
        self.n_neighbors = n_neighbors

    def fit(self, X, y):
        if self.n_neighbors < 1:
            raise ValueError(f"n_neighbors must be >= 1, got {self.n_neighbors}")
        X = np.asarray(X, dtype=float)
        y = np.asarray(y)
        if len(X) == 0:
            raise ValueError("Cannot fit on an empty training set")
        self.classes_, self._codes = np.unique(y, return_inverse=True)
        self._X = X
        self.n_neighbors_ = min(self.n_neighbors, len(X))
        return self

    def _neighbors(self, X) -> np.ndarray:
        dist = euclidean_distances(np.asarray(X, dtype=float), self._X)
        order = np.argsort(dist, axis=1, kind="stable")
        return self._codes[order[:, : self.n_neighbors_]]

    def predict_proba(self, X) -> np.ndarray:
        neighbors = self._neighbors(X)
        counts = np.stack(
            [np.bincount(row, minlength=len(self.classes_)) for row in neighbors]
        )
        return counts / self.n_neighbors_

    def predict(self, X) -> np.ndarray:
        neighbors = self._neighbors(X)
        winners = np.empty(len(neighbors), dtype=int)
        for i, row in enumerate(neighbors):
            counts = np.bincount(row, minlength=len(self.classes_))
            tied = np.flatnonzero(counts == counts.max())
            if len(tied) == 1:
                winners[i] = tied[0]
            else:
                # row is already in distance order
                winners[i] = next(c for c in row if c in tied)
        return self.classes_[winners]


def silverman_bandwidth(x: np.ndarray) -> float:
    """
    Silverman's rule of thumb, ``0.9 * min(sd, IQR / 1.34) * n ** -0.2``.

    Falls back to the standard deviation, then ``|x[0]|``, then 1 when the
    spread estimate is zero, so constant columns still get a usable kernel.
    """
    x = np.asarray(x, dtype=float)
    n = len(x)
    hi = float(np.std(x, ddof=1)) if n > 1 else 0.0
    lo = min(hi, float(iqr(x)) / 1.34)
    if not lo > 0:
        lo = hi or abs(float(x[0])) or 1.0
    return 0.9 * lo * n ** -0.2


class KernelNaiveBayes(ClassifierMixin, BaseEstimator):
    """
    Naive Bayes with per-feature Gaussian kernel density likelihoods.

    Each (class, feature) pair gets its own one-dimensional KDE whose
    bandwidth comes from :func:`silverman_bandwidth` (scaled by
    ``bandwidth_adjust``). Prediction maximises
    ``log prior + sum of per-feature log likelihoods``.
    """

    def __init__(self, bandwidth_adjust: float = 1.0):
        self.bandwidth_adjust = bandwidth_adjust

    def fit(self, X, y):
        if self.bandwidth_adjust <= 0:
            raise ValueError(f"bandwidth_adjust must be positive, got {self.bandwidth_adjust}")
        X = np.asarray(X, dtype=float)
        y = np.asarray(y)
        self.classes_, codes = np.unique(y, return_inverse=True)
        self.class_log_prior_ = np.log(np.bincount(codes) / len(y))
        self.densities_ = []
        for c in range(len(self.classes_)):
            X_c = X[codes == c]
            per_feature = []
            for j in range(X.shape[1]):
                h = silverman_bandwidth(X_c[:, j]) * self.bandwidth_adjust
                per_feature.append(
                    KernelDensity(kernel="gaussian", bandwidth=h).fit(X_c[:, [j]])
                )
            self.densities_.append(per_feature)
        return self

    def _joint_log_likelihood(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        jll = np.empty((len(X), len(self.classes_)))
        for c, per_feature in enumerate(self.densities_):
            log_lik = sum(
                kde.score_samples(X[:, [j]]) for j, kde in enumerate(per_feature)
            )
            jll[:, c] = self.class_log_prior_[c] + log_lik
        return jll

    def predict_log_proba(self, X) -> np.ndarray:
        jll = self._joint_log_likelihood(X)
        return jll - logsumexp(jll, axis=1, keepdims=True)

    def predict_proba(self, X) -> np.ndarray:
        return np.exp(self.predict_log_proba(X))

    def predict(self, X) -> np.ndarray:
        return self.classes_[np.argmax(self._joint_log_likelihood(X), axis=1)]
