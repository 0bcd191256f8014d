"""Temporal (date/time) field analysis models.

Dates are naive ``datetime`` values; timezone-qualified inputs are converted
to UTC before the offset is dropped.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DateFormat(StrEnum):
    """Grammar a raw date value was written in."""

    ISO_8601 = "ISO_8601"
    ISO_DATE = "ISO_DATE"
    US_DATE = "US_DATE"
    EU_DATE = "EU_DATE"
    TIMESTAMP_MS = "TIMESTAMP_MS"
    TIMESTAMP_S = "TIMESTAMP_S"
    YYYYMMDD = "YYYYMMDD"
    OTHER = "OTHER"

    @property
    def description(self) -> str:
        return _FORMAT_DESCRIPTIONS[self]


_FORMAT_DESCRIPTIONS: dict[DateFormat, str] = {
    DateFormat.ISO_8601: "ISO 8601 with time",
    DateFormat.ISO_DATE: "ISO 8601 date (YYYY-MM-DD)",
    DateFormat.US_DATE: "US format (M/D/YYYY)",
    DateFormat.EU_DATE: "EU format (D.M.YYYY)",
    DateFormat.TIMESTAMP_MS: "Unix timestamp (milliseconds)",
    DateFormat.TIMESTAMP_S: "Unix timestamp (seconds)",
    DateFormat.YYYYMMDD: "Compact format (YYYYMMDD)",
    DateFormat.OTHER: "Mixed or other format",
}


class TrendType(StrEnum):
    INSUFFICIENT_DATA = "insufficient_data"
    CONSTANT = "constant"
    STRONG_GROWTH = "strong_growth"
    MODERATE_GROWTH = "moderate_growth"
    STRONG_DECLINE = "strong_decline"
    MODERATE_DECLINE = "moderate_decline"


class DateFormatDetection(BaseModel):
    model_config = ConfigDict(frozen=True)

    dominant_format: DateFormat
    description: str
    format_counts: dict[DateFormat, int] = Field(default_factory=dict)
    confidence: float = Field(
        ..., ge=0.0, le=1.0, description="Dominant-format samples / samples inspected"
    )


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    earliest: datetime | None = None
    latest: datetime | None = None
    span_days: int = Field(default=0, ge=0)
    span_description: str = "No valid dates"
    format: DateFormatDetection | None = None


class PeriodCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: str
    count: int = Field(..., ge=1)


class TemporalDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    by_year: list[PeriodCount] = Field(default_factory=list)
    by_month: list[PeriodCount] = Field(default_factory=list)
    by_day_of_week: list[PeriodCount] = Field(default_factory=list)
    by_quarter: list[PeriodCount] = Field(default_factory=list)


class DateGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_date: datetime
    to_date: datetime
    days: int = Field(..., ge=0, description="Whole days between the two dates")


class GapAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_gaps: bool = False
    gap_count: int = Field(default=0, ge=0)
    largest_gap: DateGap | None = None
    gaps: list[DateGap] = Field(default_factory=list, description="First 10 gaps")
    coverage: float = Field(default=100.0, ge=0.0, le=100.0)
    expected_dates: int | None = None
    actual_dates: int | None = None


class TrendAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_trend: bool = False
    trend_type: TrendType
    description: str
    slope: float | None = None
    group_unit: str | None = Field(default=None, description="day, week or month")
    period_count: int = Field(default=0, ge=0)


class TemporalQuality(BaseModel):
    model_config = ConfigDict(frozen=True)

    null_count: int = Field(..., ge=0)
    invalid_date_count: int = Field(..., ge=0)
    valid_date_count: int = Field(..., ge=0)
    total_rows: int = Field(..., ge=0)
    valid_percentage: float = Field(default=0.0, ge=0.0, le=100.0)


class TemporalStats(BaseModel):
    """Statistics block for a date field.

    When ``is_date`` is False only ``quality`` is populated.
    """

    model_config = ConfigDict(frozen=True)

    is_date: bool
    range: DateRange | None = None
    distribution: TemporalDistribution | None = None
    gaps: GapAnalysis | None = None
    trends: TrendAnalysis | None = None
    quality: TemporalQuality
