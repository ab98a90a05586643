"""📥 Dataset loading and normalization."""

from .loader import dataset_name, load_csv, load_datasets, sample_datasets
from .normalize import (
    normalize_column_name,
    normalize_columns,
    normalize_text,
    normalize_text_columns,
    parse_numeric_columns,
    report_nulls,
)

__all__ = [
    "dataset_name",
    "load_csv",
    "load_datasets",
    "sample_datasets",
    "normalize_column_name",
    "normalize_columns",
    "normalize_text",
    "normalize_text_columns",
    "parse_numeric_columns",
    "report_nulls",
]
