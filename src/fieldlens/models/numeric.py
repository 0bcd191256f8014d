"""Numeric field statistics models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DescriptiveStats(BaseModel):
    """Location and size of a numeric column."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(..., description="Smallest value")
    max: float = Field(..., description="Largest value")
    mean: float | None = Field(..., description="Arithmetic mean; None when it overflows")
    median: float = Field(..., description="50th percentile (R-7)")
    mode: list[float] = Field(
        default_factory=list,
        description="Most frequent values, ascending; empty when every value is distinct",
    )
    sum: float | None = Field(..., description="Sum of all values; None when it overflows")
    count: int = Field(..., ge=0, description="Number of numeric values")


class SpreadStats(BaseModel):
    """Dispersion of a numeric column."""

    model_config = ConfigDict(frozen=True)

    range: float = Field(..., ge=0.0, description="max - min")
    variance: float | None = Field(..., description="Sample variance (n-1 denominator)")
    std_dev: float | None = Field(..., description="Square root of the sample variance")
    iqr: float = Field(..., ge=0.0, description="Interquartile range, q3 - q1")


class Quartiles(BaseModel):
    model_config = ConfigDict(frozen=True)

    q1: float
    q2: float
    q3: float


class Percentiles(BaseModel):
    model_config = ConfigDict(frozen=True)

    p10: float
    p25: float
    p50: float
    p75: float
    p90: float


class DistributionShape(BaseModel):
    """Quantiles and moments describing the distribution shape."""

    model_config = ConfigDict(frozen=True)

    quartiles: Quartiles
    percentiles: Percentiles
    skewness: float | None = Field(
        default=None, description="Adjusted sample skewness; None for n < 3 or zero spread"
    )
    kurtosis: float | None = Field(
        default=None, description="Sample excess kurtosis; None for n < 4 or zero spread"
    )


class OutlierSummary(BaseModel):
    """Values outside the 1.5 x IQR fences."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    values: list[float] = Field(
        default_factory=list, description="First 100 outliers in ascending order"
    )
    lower_bound: float | None = None
    upper_bound: float | None = None


class NumericQualityCounters(BaseModel):
    model_config = ConfigDict(frozen=True)

    null_count: int = Field(..., ge=0, description="Absent or empty values")
    non_numeric_count: int = Field(..., ge=0, description="Present values that are not numbers")
    total_rows: int = Field(..., ge=0)


class NumericStats(BaseModel):
    """Statistics block for a numeric field.

    When ``is_numeric`` is False only ``numeric_count`` and ``quality`` are
    populated.
    """

    model_config = ConfigDict(frozen=True)

    is_numeric: bool
    numeric_count: int = Field(default=0, ge=0)
    descriptive: DescriptiveStats | None = None
    spread: SpreadStats | None = None
    distribution: DistributionShape | None = None
    outliers: OutlierSummary | None = None
    quality: NumericQualityCounters
