"""Exploratory data analysis: descriptive statistics, correlations and PCA."""

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.decomposition import PCA
from sklearn.preprocessing import StandardScaler

from cancer_cv.config import LABEL_NAMES, NEGATIVE_LABEL, POSITIVE_LABEL
from cancer_cv.data.loader import WDBCDataset
from cancer_cv.utils import get_logger

log = get_logger(__name__)

HIGH_CORRELATION = 0.9
VARIANCE_TARGETS = (0.90, 0.95)


class DataExplorer:
    """Summarises the measurement table before any model is trained."""

    def __init__(self, n_top: int = 10):
        self.n_top = n_top
        self.report = {}

    def run(self, dataset: WDBCDataset) -> dict:
        """
        Run full exploratory analysis on a dataset.

        Returns a dict of analysis sections, each JSON-serialisable once
        NumPy scalars are converted.
        """
        df = dataset.features
        labels = pd.Series(dataset.labels)
        encoded = pd.Series(dataset.encoded_labels, name="diagnosis")

        log.info("Running exploratory data analysis on %d samples", len(df))

        self.report = {
            "basic_stats": self._basic_stats(df),
            "class_means": self._class_means(df, labels),
            "class_balance": self._class_balance(labels),
            "feature_correlations": self._correlations(df),
            "diagnosis_correlations": self._diagnosis_correlations(df, encoded),
            "top_discriminative_features": self._discriminative_features(df, labels),
            "pca": self._pca(df),
        }

        log.info("EDA complete: %d analysis sections generated", len(self.report))
        return self.report

    def _basic_stats(self, df: pd.DataFrame) -> dict:
        desc = df.describe()
        return {
            "shape": list(df.shape),
            "summary": desc.to_dict(),
            "missing_values": int(df.isnull().sum().sum()),
        }

    def _class_means(self, df: pd.DataFrame, labels: pd.Series) -> dict:
        """Per-diagnosis feature means."""
        means = df.groupby(labels.to_numpy()).mean()
        return {
            LABEL_NAMES[label]: row.to_dict()
            for label, row in means.iterrows()
        }

    def _class_balance(self, labels: pd.Series) -> dict:
        """Analyze target class distribution."""
        counts = labels.map(LABEL_NAMES).value_counts()
        proportions = labels.map(LABEL_NAMES).value_counts(normalize=True)
        imbalance_ratio = counts.max() / counts.min() if len(counts) > 1 else float("inf")

        balance_status = "balanced" if imbalance_ratio < 1.5 else (
            "moderate_imbalance" if imbalance_ratio < 3.0 else "severe_imbalance"
        )

        log.info(
            "Class balance: %s (ratio=%.2f)", balance_status, imbalance_ratio
        )

        return {
            "counts": counts.to_dict(),
            "proportions": proportions.to_dict(),
            "imbalance_ratio": float(imbalance_ratio),
            "status": balance_status,
        }

    def _correlations(self, df: pd.DataFrame) -> dict:
        """Find feature pairs whose Pearson correlation exceeds the threshold."""
        corr = df.corr()
        features = list(df.columns)

        pairs = []
        for i in range(len(features)):
            for j in range(i + 1, len(features)):
                r = corr.iloc[i, j]
                if abs(r) > HIGH_CORRELATION:
                    pairs.append({
                        "feature_1": features[i],
                        "feature_2": features[j],
                        "correlation": round(float(r), 4),
                    })

        pairs.sort(key=lambda x: abs(x["correlation"]), reverse=True)
        log.info(
            "Found %d highly correlated feature pairs (|r|>%.1f)",
            len(pairs), HIGH_CORRELATION,
        )

        return {
            "highly_correlated_pairs": pairs,
            "n_highly_correlated": len(pairs),
        }

    def _diagnosis_correlations(self, df: pd.DataFrame, encoded: pd.Series) -> list[dict]:
        """Correlation of every feature with the 0/1 diagnosis, strongest first."""
        r = df.corrwith(encoded.set_axis(df.index))
        ranked = r.reindex(r.abs().sort_values(ascending=False).index)
        return [
            {"feature": name, "correlation": round(float(value), 4)}
            for name, value in ranked.items()
        ]

    def _discriminative_features(self, df: pd.DataFrame, labels: pd.Series) -> list[dict]:
        """
        Rank features by discriminative power using a t-test between classes.
        """
        malignant = df[labels.to_numpy() == POSITIVE_LABEL]
        benign = df[labels.to_numpy() == NEGATIVE_LABEL]
        if malignant.empty or benign.empty:
            log.warning("Discriminative analysis requires both diagnoses to be present")
            return []

        results = []
        for feat in df.columns:
            t_stat, p_val = stats.ttest_ind(malignant[feat], benign[feat])
            sd = df[feat].std()
            effect_size = abs(malignant[feat].mean() - benign[feat].mean()) / sd if sd > 0 else 0.0

            results.append({
                "feature": feat,
                "t_statistic": round(float(t_stat), 4),
                "p_value": float(p_val),
                "effect_size": round(float(effect_size), 4),
            })

        results.sort(key=lambda x: abs(x["t_statistic"]), reverse=True)
        top_n = results[: self.n_top]

        log.info("Top discriminative features:")
        for i, r in enumerate(top_n[:5]):
            log.info(
                "  %d. %s (t=%.2f, d=%.2f, p=%.2e)",
                i + 1, r["feature"], r["t_statistic"],
                r["effect_size"], r["p_value"],
            )

        return top_n

    def _pca(self, df: pd.DataFrame) -> dict:
        """Principal components of the standardized features."""
        scaled = StandardScaler().fit_transform(df.to_numpy())
        pca = PCA().fit(scaled)
        ratios = pca.explained_variance_ratio_
        cumulative = np.cumsum(ratios)

        needed = {
            f"{int(target * 100)}%": min(int(np.searchsorted(cumulative, target) + 1), len(ratios))
            for target in VARIANCE_TARGETS
        }
        loadings = pd.Series(pca.components_[0], index=df.columns)
        top_loadings = loadings.reindex(
            loadings.abs().sort_values(ascending=False).index
        )[: self.n_top]

        log.info(
            "PCA: PC1 explains %.1f%%, PC1+PC2 %.1f%%; %s components for 95%% variance",
            ratios[0] * 100, cumulative[min(1, len(cumulative) - 1)] * 100, needed["95%"],
        )

        return {
            "explained_variance_ratio": [round(float(v), 6) for v in ratios],
            "cumulative_variance": [round(float(v), 6) for v in cumulative],
            "components_for_variance": needed,
            "pc1_top_loadings": [
                {"feature": name, "loading": round(float(value), 4)}
                for name, value in top_loadings.items()
            ],
        }
