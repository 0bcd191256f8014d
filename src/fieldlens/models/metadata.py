"""Source file metadata models.

These models describe a tabular file as it was read into memory, before any
profiling is performed.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ColumnMetadata(BaseModel):
    """Metadata for a single column in a source file."""

    name: str = Field(..., description="Column name as stored in the file")
    dtype: str = Field(..., description="Storage type reported by the reader (e.g. 'int64')")
    label: str = Field(default="", description="Column label, where the format carries one")


class DatasetMetadata(BaseModel):
    """Metadata for an entire source file."""

    filename: str = Field(..., description="Source filename (e.g., 'orders.csv')")
    file_format: str = Field(..., description="Reader used: csv, json, parquet or sas")
    row_count: int = Field(..., ge=0, description="Number of rows in the dataset")
    col_count: int = Field(..., ge=0, description="Number of columns in the dataset")
    columns: list[ColumnMetadata] = Field(
        default_factory=list, description="Ordered list of column metadata"
    )
    file_encoding: str | None = Field(
        default=None, description="Character encoding of the file"
    )

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]
