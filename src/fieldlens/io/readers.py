"""Tabular file readers with metadata extraction.

Reads CSV, JSON, Parquet (pandas) and SAS .sas7bdat (pyreadstat) files into
row-oriented datasets ready for profiling, alongside a DatasetMetadata
describing the file.

CSV cells are read as text with empty cells kept as ``""``, so the profiler
sees the file exactly as written and tells empty strings from missing values.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyreadstat
from loguru import logger

from fieldlens.models.metadata import ColumnMetadata, DatasetMetadata
from fieldlens.models.values import Row

SUPPORTED_FORMATS: dict[str, str] = {
    ".csv": "csv",
    ".json": "json",
    ".parquet": "parquet",
    ".sas7bdat": "sas",
}


class DatasetReadError(Exception):
    """Raised when a file cannot be read as a dataset."""


def _read_frame(
    filepath: Path, file_format: str
) -> tuple[pd.DataFrame, dict[str, str], str | None]:
    """Read ``filepath`` into a DataFrame, column labels and encoding."""
    if file_format == "csv":
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False, encoding="utf-8")
        return df, {}, "utf-8"
    if file_format == "json":
        df = pd.read_json(filepath, orient="records", dtype=False, convert_dates=False)
        return df, {}, "utf-8"
    if file_format == "parquet":
        return pd.read_parquet(filepath), {}, None

    df, meta = pyreadstat.read_sas7bdat(str(filepath))
    labels = {name: label or "" for name, label in meta.column_names_to_labels.items()}
    return df, labels, meta.file_encoding


def read_dataframe(filepath: str | Path) -> tuple[pd.DataFrame, DatasetMetadata]:
    """Read a supported file into a DataFrame with structured metadata.

    Args:
        filepath: Path to a .csv, .json, .parquet or .sas7bdat file.

    Returns:
        Tuple of (DataFrame, DatasetMetadata).

    Raises:
        DatasetReadError: If the file is missing, has an unsupported
            extension, or cannot be parsed.
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise DatasetReadError(f"File not found: {filepath}")

    file_format = SUPPORTED_FORMATS.get(filepath.suffix.lower())
    if file_format is None:
        supported = ", ".join(sorted(SUPPORTED_FORMATS))
        raise DatasetReadError(
            f"Unsupported file type {filepath.suffix!r} (expected one of {supported})"
        )

    logger.info("Reading {} file: {}", file_format, filepath.name)
    try:
        df, labels, encoding = _read_frame(filepath, file_format)
    except (OSError, ValueError, UnicodeDecodeError, pyreadstat.ReadstatError) as e:
        raise DatasetReadError(f"Cannot read {filepath.name}: {e}") from e

    df.columns = [str(c) for c in df.columns]
    meta = DatasetMetadata(
        filename=filepath.name,
        file_format=file_format,
        row_count=len(df),
        col_count=len(df.columns),
        columns=[
            ColumnMetadata(name=name, dtype=str(df[name].dtype), label=labels.get(name, ""))
            for name in df.columns
        ],
        file_encoding=encoding,
    )

    logger.info("Read {}: {} rows x {} cols", filepath.name, meta.row_count, meta.col_count)
    return df, meta


def dataframe_to_rows(df: pd.DataFrame) -> list[Row]:
    """Convert a DataFrame to a list of row mappings.

    Missing values (NaN, None, NaT) are kept as-is; the profiler reads them
    as absent.
    """
    return df.to_dict(orient="records")


def read_dataset(filepath: str | Path) -> tuple[list[Row], DatasetMetadata]:
    """Read a supported file as a row-oriented dataset.

    Raises:
        DatasetReadError: See ``read_dataframe``.
    """
    df, meta = read_dataframe(filepath)
    return dataframe_to_rows(df), meta
