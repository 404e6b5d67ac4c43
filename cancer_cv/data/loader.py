"""Dataset loading and label encoding for the WDBC measurements."""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.datasets import load_breast_cancer

from cancer_cv.config import (
    FEATURE_NAMES,
    ID_COLUMN,
    LABEL_COLUMN,
    LABEL_ENCODING,
    LABEL_NAMES,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    RAW_COLUMNS,
)
from cancer_cv.utils import get_logger

log = get_logger(__name__)

EXPECTED_SAMPLES = 569


def _load_bundled() -> pd.DataFrame:
    """Map scikit-learn's bundled copy of WDBC onto the raw file layout."""
    raw = load_breast_cancer()
    df = pd.DataFrame(raw.data, columns=list(FEATURE_NAMES))
    # sklearn codes 0 = malignant, 1 = benign
    names = np.asarray(raw.target_names)[raw.target]
    df.insert(0, LABEL_COLUMN, np.where(names == "malignant", POSITIVE_LABEL, NEGATIVE_LABEL))
    df.insert(0, ID_COLUMN, np.arange(1, len(df) + 1))
    return df


# Registry of datasets that ship with the installed libraries
DATASET_REGISTRY = {
    "wdbc": {
        "loader": _load_bundled,
        "description": "Wisconsin Diagnostic Breast Cancer (569 samples, 30 features)",
    },
}


def encode_labels(labels) -> np.ndarray:
    """Recode ``M``/``B`` diagnoses as 1/0, rejecting anything else."""
    labels = np.asarray(labels, dtype=object)
    unknown = sorted({str(v) for v in labels if v not in LABEL_ENCODING})
    if unknown:
        raise ValueError(
            f"Unrecognized diagnosis label(s) {unknown}; "
            f"expected one of {sorted(LABEL_ENCODING)}"
        )
    return np.array([LABEL_ENCODING[v] for v in labels], dtype=int)


def decode_labels(codes) -> np.ndarray:
    """Inverse of :func:`encode_labels`."""
    inverse = {code: label for label, code in LABEL_ENCODING.items()}
    codes = np.asarray(codes)
    unknown = sorted({int(c) for c in codes if int(c) not in inverse})
    if unknown:
        raise ValueError(f"Unrecognized label code(s) {unknown}; expected 0 or 1")
    return np.array([inverse[int(c)] for c in codes], dtype=object)


def _read_only(values: np.ndarray) -> np.ndarray:
    values = np.array(values, copy=True)
    values.flags.writeable = False
    return values


@dataclass(frozen=True, eq=False)
class WDBCDataset:
    """
    Validated observations, immutable after load.

    ``X`` holds the 30 features in file order and ``labels`` the categorical
    diagnosis (``M``/``B``); both arrays are read-only.
    """

    X: np.ndarray
    labels: np.ndarray
    ids: np.ndarray
    feature_names: tuple = FEATURE_NAMES
    source: str = "unknown"
    metadata: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        X = np.asarray(self.X, dtype=float)
        if X.ndim != 2 or X.shape[1] != len(self.feature_names):
            raise ValueError(
                f"Expected a (n, {len(self.feature_names)}) feature matrix, got {X.shape}"
            )
        if len(self.labels) != len(X) or len(self.ids) != len(X):
            raise ValueError("Features, labels and ids must have the same number of rows")
        object.__setattr__(self, "X", _read_only(X))
        object.__setattr__(self, "labels", _read_only(np.asarray(self.labels, dtype=object)))
        object.__setattr__(self, "ids", _read_only(np.asarray(self.ids)))

    @property
    def n_samples(self) -> int:
        return len(self.X)

    @property
    def encoded_labels(self) -> np.ndarray:
        return encode_labels(self.labels)

    @property
    def features(self) -> pd.DataFrame:
        return pd.DataFrame(self.X, columns=list(self.feature_names))

    def frame(self) -> pd.DataFrame:
        """Features plus a categorical diagnosis column."""
        df = self.features
        df[LABEL_COLUMN] = pd.Categorical(
            self.labels, categories=[NEGATIVE_LABEL, POSITIVE_LABEL]
        )
        return df


class DatasetLoader:
    """Loads and validates the breast-mass measurement table."""

    @staticmethod
    def list_available() -> list[str]:
        """Return names of all bundled datasets."""
        return list(DATASET_REGISTRY.keys())

    def load(self, path: str | None = None) -> WDBCDataset:
        """
        Load the study data.

        With ``path`` the file is read as headerless CSV in the raw WDBC
        layout ``[id, diagnosis, 30 features]``; without it the bundled copy
        is used. Either way the table goes through the same validation.
        """
        if path is None:
            return self.load_bundled()
        return self.load_csv(path)

    def load_bundled(self, name: str = "wdbc") -> WDBCDataset:
        if name not in DATASET_REGISTRY:
            raise ValueError(
                f"Unknown dataset '{name}'. "
                f"Available: {self.list_available()}"
            )
        entry = DATASET_REGISTRY[name]
        log.info("Loading bundled dataset: %s", name)
        log.info("Description: %s", entry["description"])
        raw = entry["loader"]().astype(str)
        return self._build(raw, source=f"bundled:{name}")

    def load_csv(self, path: str) -> WDBCDataset:
        log.info("Loading CSV from: %s", path)
        if not Path(path).is_file():
            raise FileNotFoundError(f"Data file not found: {path}")
        try:
            raw = pd.read_csv(path, header=None, dtype=str, skipinitialspace=True)
        except pd.errors.EmptyDataError as e:
            raise ValueError(f"Data file is empty: {path}") from e
        except pd.errors.ParserError as e:
            raise ValueError(f"Malformed data file {path}: {e}") from e
        return self._build(raw, source=str(path))

    def _build(self, raw: pd.DataFrame, source: str) -> WDBCDataset:
        if raw.shape[1] != len(RAW_COLUMNS):
            raise ValueError(
                f"Expected {len(RAW_COLUMNS)} columns (id, diagnosis, "
                f"{len(FEATURE_NAMES)} features), found {raw.shape[1]}"
            )
        raw = raw.copy()
        raw.columns = list(RAW_COLUMNS)

        missing = raw.isnull()
        if missing.any().any():
            row, col = next(zip(*np.nonzero(missing.to_numpy())))
            raise ValueError(
                f"Missing value at row {row + 1}, column '{RAW_COLUMNS[col]}'"
            )

        labels = raw[LABEL_COLUMN].str.strip()
        bad = ~labels.isin(list(LABEL_ENCODING))
        if bad.any():
            row = int(np.flatnonzero(bad.to_numpy())[0])
            raise ValueError(
                f"Unrecognized diagnosis '{labels.iloc[row]}' at row {row + 1}; "
                f"expected '{POSITIVE_LABEL}' or '{NEGATIVE_LABEL}'"
            )

        features = raw[list(FEATURE_NAMES)].apply(pd.to_numeric, errors="coerce")
        non_numeric = ~np.isfinite(features.to_numpy(dtype=float))
        if non_numeric.any():
            row, col = next(zip(*np.nonzero(non_numeric)))
            name = FEATURE_NAMES[col]
            raise ValueError(
                f"Non-numeric value '{raw[name].iloc[row]}' at row {row + 1}, "
                f"column '{name}'"
            )

        counts = labels.value_counts()
        metadata = {
            "source": source,
            "n_samples": len(raw),
            "n_features": len(FEATURE_NAMES),
            "positive_label": LABEL_NAMES[POSITIVE_LABEL],
            "negative_label": LABEL_NAMES[NEGATIVE_LABEL],
            "class_distribution": {
                LABEL_NAMES[k]: int(v) for k, v in counts.items()
            },
        }
        dataset = WDBCDataset(
            X=features.to_numpy(dtype=float),
            labels=labels.to_numpy(dtype=object),
            ids=raw[ID_COLUMN].to_numpy(dtype=object),
            source=source,
            metadata=metadata,
        )

        log.info(
            "Loaded %d samples with %d features",
            metadata["n_samples"],
            metadata["n_features"],
        )
        if dataset.n_samples != EXPECTED_SAMPLES:
            log.warning(
                "Expected %d observations for WDBC, found %d",
                EXPECTED_SAMPLES, dataset.n_samples,
            )
        return dataset
