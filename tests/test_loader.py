import dataclasses
import re

import numpy as np
import pytest

from cancer_cv.config import FEATURE_NAMES
from cancer_cv.data import DatasetLoader, decode_labels, encode_labels


def test_bundled_dataset_shape(wdbc):
    assert wdbc.n_samples == 569
    assert wdbc.X.shape == (569, 30)
    assert wdbc.feature_names == FEATURE_NAMES
    assert wdbc.metadata["class_distribution"] == {"benign": 357, "malignant": 212}
    assert not np.isnan(wdbc.X).any()


def test_bundled_dataset_keeps_file_column_order(wdbc):
    # First WDBC record: 842302, M, 17.99, 10.38, 122.8, 1001, ...
    assert wdbc.labels[0] == "M"
    assert wdbc.X[0, :4].tolist() == [17.99, 10.38, 122.8, 1001.0]
    assert wdbc.features.columns[0] == "radius_mean"
    assert wdbc.features.columns[-1] == "fractal_dimension_worst"


def test_dataset_is_immutable(wdbc):
    with pytest.raises(ValueError):
        wdbc.X[0, 0] = 0.0
    with pytest.raises(ValueError):
        wdbc.labels[0] = "B"
    with pytest.raises(dataclasses.FrozenInstanceError):
        wdbc.X = None


def test_label_round_trip(wdbc):
    codes = wdbc.encoded_labels
    assert set(codes.tolist()) == {0, 1}
    assert (codes[wdbc.labels == "M"] == 1).all()
    np.testing.assert_array_equal(decode_labels(codes), wdbc.labels)


@pytest.mark.parametrize("bad", ["m", "X", "", "malignant"])
def test_encode_rejects_unknown_labels(bad):
    with pytest.raises(ValueError, match="Unrecognized diagnosis"):
        encode_labels(["M", bad])


def test_decode_rejects_unknown_codes():
    with pytest.raises(ValueError):
        decode_labels([0, 1, 2])


def test_frame_has_categorical_diagnosis(wdbc):
    df = wdbc.frame()
    assert list(df["diagnosis"].cat.categories) == ["B", "M"]
    assert df.shape == (569, 31)


def test_load_csv(write_wdbc_csv, valid_rows):
    ds = DatasetLoader().load(write_wdbc_csv(valid_rows))
    assert ds.n_samples == 4
    assert ds.labels.tolist() == ["M", "B", "B", "M"]
    assert ds.ids.tolist() == ["842302", "842303", "842304", "842305"]


def test_csv_round_trip_matches_bundled(wdbc, write_wdbc_csv):
    rows = [
        ",".join([str(i), label] + [repr(float(v)) for v in values])
        for i, label, values in zip(wdbc.ids, wdbc.labels, wdbc.X)
    ]
    ds = DatasetLoader().load(write_wdbc_csv(rows))
    np.testing.assert_array_equal(ds.X, wdbc.X)
    np.testing.assert_array_equal(ds.labels, wdbc.labels)


def test_wrong_column_count(write_wdbc_csv, valid_rows):
    rows = [r.rsplit(",", 1)[0] for r in valid_rows]
    with pytest.raises(ValueError, match="Expected 32 columns"):
        DatasetLoader().load(write_wdbc_csv(rows))


def test_short_row_is_reported(write_wdbc_csv, valid_rows):
    valid_rows[2] = valid_rows[2].rsplit(",", 1)[0]
    with pytest.raises(ValueError, match="Missing value at row 3"):
        DatasetLoader().load(write_wdbc_csv(valid_rows))


def test_non_numeric_feature(write_wdbc_csv, valid_rows):
    parts = valid_rows[1].split(",")
    parts[5] = "abc"
    valid_rows[1] = ",".join(parts)
    with pytest.raises(ValueError, match="Non-numeric value 'abc' at row 2, column 'area_mean'"):
        DatasetLoader().load(write_wdbc_csv(valid_rows))


@pytest.mark.parametrize("value", ["inf", "-inf", "1e999"])
def test_infinite_feature_is_rejected(write_wdbc_csv, valid_rows, value):
    parts = valid_rows[1].split(",")
    parts[5] = value
    valid_rows[1] = ",".join(parts)
    expected = re.escape(f"Non-numeric value '{value}' at row 2, column 'area_mean'")
    with pytest.raises(ValueError, match=expected):
        DatasetLoader().load(write_wdbc_csv(valid_rows))


def test_unrecognized_label_is_not_coerced(write_wdbc_csv, valid_rows):
    valid_rows[3] = valid_rows[3].replace(",M,", ",X,", 1)
    with pytest.raises(ValueError, match="Unrecognized diagnosis 'X' at row 4"):
        DatasetLoader().load(write_wdbc_csv(valid_rows))


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        DatasetLoader().load("/nonexistent/wdbc.data")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.data"
    path.write_text("")
    with pytest.raises(ValueError, match="empty"):
        DatasetLoader().load(str(path))


def test_unknown_bundled_dataset():
    with pytest.raises(ValueError, match="Unknown dataset"):
        DatasetLoader().load_bundled("lung")
