from cancer_cv.data.loader import (
    DatasetLoader,
    WDBCDataset,
    decode_labels,
    encode_labels,
)
from cancer_cv.data.preprocessor import Preprocessor

__all__ = [
    "DatasetLoader",
    "WDBCDataset",
    "Preprocessor",
    "encode_labels",
    "decode_labels",
]
