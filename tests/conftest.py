import numpy as np
import pytest

from cancer_cv.config import FEATURE_NAMES
from cancer_cv.data import DatasetLoader, WDBCDataset
from cancer_cv.validation import partition


@pytest.fixture(scope="session")
def wdbc():
    """The bundled 569-row dataset."""
    return DatasetLoader().load()


@pytest.fixture(scope="session")
def wdbc_partition(wdbc):
    return partition(wdbc.n_samples, 5, seed=42)


@pytest.fixture
def synthetic_dataset():
    """Two well-separated clusters, 30 rows per class."""
    rng = np.random.RandomState(0)
    n = 30
    malignant = rng.normal(loc=2.0, scale=0.5, size=(n, len(FEATURE_NAMES)))
    benign = rng.normal(loc=-2.0, scale=0.5, size=(n, len(FEATURE_NAMES)))
    X = np.vstack([malignant, benign])
    labels = np.array(["M"] * n + ["B"] * n, dtype=object)
    return WDBCDataset(X=X, labels=labels, ids=np.arange(2 * n), source="synthetic")


def _raw_row(row_id, label, values):
    return ",".join([str(row_id), label] + [repr(float(v)) for v in values])


@pytest.fixture
def write_wdbc_csv(tmp_path):
    """Write rows in the raw headerless layout and return the file path."""
    def _write(rows, name="wdbc.data"):
        path = tmp_path / name
        path.write_text("\n".join(rows) + "\n")
        return str(path)
    return _write


@pytest.fixture
def valid_rows():
    rng = np.random.RandomState(1)
    return [
        _raw_row(842302 + i, label, rng.uniform(0.01, 30.0, size=len(FEATURE_NAMES)))
        for i, label in enumerate(["M", "B", "B", "M"])
    ]
