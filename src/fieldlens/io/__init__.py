"""Dataset readers for CSV, JSON, Parquet and SAS files."""

from fieldlens.io.readers import (
    SUPPORTED_FORMATS,
    DatasetReadError,
    dataframe_to_rows,
    read_dataframe,
    read_dataset,
)

__all__ = [
    "read_dataset",
    "read_dataframe",
    "dataframe_to_rows",
    "DatasetReadError",
    "SUPPORTED_FORMATS",
]
