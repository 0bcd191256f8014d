"""Field profiling result models.

These models represent the output of the profiling entry point: one
``FieldProfile`` per requested field, wrapped in a ``ProfilingResult``.
Profiles are frozen; presentation and export code only read them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fieldlens.models.numeric import NumericStats
from fieldlens.models.quality import QualityMetrics
from fieldlens.models.strings import StringStats
from fieldlens.models.temporal import TemporalStats

NULL_ENTRY_LABEL = "(NULL/Empty)"


class FieldKind(StrEnum):
    NUMERIC = "numeric"
    STRING = "string"
    DATE = "date"
    NONE = "none"


class ValueDistribution(BaseModel):
    """Frequency distribution entry for a single value."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="The observed value (as string)")
    count: int = Field(..., ge=0, description="Number of occurrences")
    percentage: float = Field(
        ..., ge=0.0, le=100.0, description="Percentage of total rows, 2 decimals"
    )


class TypeCheck(BaseModel):
    """Counters kept when a kind analyzer rejected the column."""

    model_config = ConfigDict(frozen=True)

    attempted_kind: FieldKind
    valid_count: int = Field(..., ge=0, description="Values accepted by the analyzer")
    invalid_count: int = Field(..., ge=0, description="Present values the analyzer rejected")
    null_count: int = Field(..., ge=0)


class FieldProfile(BaseModel):
    """Profile of a single field.

    Carries at most one kind-specific statistics block, always a quality
    block (unless profiling the field failed), and the capped value
    distribution.
    """

    model_config = ConfigDict(frozen=True)

    field_name: str = Field(..., description="Field name")
    kind: FieldKind = Field(default=FieldKind.NONE, description="Detected field kind")
    total_rows: int = Field(..., ge=0, description="Rows in the field")
    unique_values: int = Field(
        default=0, ge=0, description="Distinct non-null values, including those past the cap"
    )
    null_count: int = Field(default=0, ge=0, description="Absent or empty values")
    distribution: list[ValueDistribution] = Field(
        default_factory=list, description="Value counts, most frequent first"
    )
    truncated: bool = Field(
        default=False, description="More distinct values were seen than the distribution tracks"
    )
    truncated_at: int = Field(default=1000, ge=1, description="Distribution cap in effect")
    quality: QualityMetrics | None = None
    numeric: NumericStats | None = None
    string: StringStats | None = None
    temporal: TemporalStats | None = None
    type_check: TypeCheck | None = None
    error: str | None = Field(default=None, description="Why profiling this field failed")

    @model_validator(mode="after")
    def _one_stats_block(self) -> FieldProfile:
        blocks = {
            FieldKind.NUMERIC: self.numeric,
            FieldKind.STRING: self.string,
            FieldKind.DATE: self.temporal,
        }
        present = [kind for kind, block in blocks.items() if block is not None]
        if len(present) > 1:
            raise ValueError(f"Field {self.field_name!r} has several statistics blocks: {present}")
        if present and present[0] is not self.kind:
            raise ValueError(
                f"Field {self.field_name!r} is {self.kind.value} but carries "
                f"{present[0].value} statistics"
            )
        return self

    @property
    def stats(self) -> NumericStats | StringStats | TemporalStats | None:
        """The kind-specific statistics block, if any."""
        return self.numeric or self.string or self.temporal


class ProfilingResult(BaseModel):
    """Result of one profiling invocation."""

    model_config = ConfigDict(frozen=True)

    error: str | None = Field(default=None, description="Set only when the dataset is empty")
    fields: list[FieldProfile] = Field(default_factory=list)
