"""Data quality metric models.

Quality metrics are computed for every profiled field regardless of its
detected kind: completeness, cardinality, uniqueness, distribution evenness
and an overall score.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class CardinalityLevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class QualityLevel(StrEnum):
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class StatusColor(StrEnum):
    """Display color attached to quality and cardinality results."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    BLUE = "blue"


class Completeness(BaseModel):
    """How much of the field is populated.

    ``fill_rate`` additionally discounts empty strings, separating "missing"
    from "present but blank".
    """

    model_config = ConfigDict(frozen=True)

    non_null_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    fill_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    missing_count: int = Field(default=0, ge=0)
    missing_percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    empty_string_count: int = Field(default=0, ge=0)
    empty_string_percentage: float = Field(default=0.0, ge=0.0, le=100.0)


class Cardinality(BaseModel):
    model_config = ConfigDict(frozen=True)

    ratio: float = Field(..., ge=0.0, description="Distinct values / total rows")
    level: CardinalityLevel
    classification: str = Field(..., description="e.g. 'High Cardinality'")
    color: StatusColor
    recommendation: str


class DuplicateValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str
    count: int = Field(..., ge=2)
    percentage: float = Field(..., ge=0.0, le=100.0, description="Share of total rows")


class Uniqueness(BaseModel):
    model_config = ConfigDict(frozen=True)

    unique_percentage: float = Field(default=0.0, ge=0.0)
    duplicate_count: int = Field(
        default=0, ge=0, description="Occurrences of values that appear more than once"
    )
    duplicate_percentage: float = Field(default=0.0, ge=0.0)
    duplicated_distinct_values: int = Field(default=0, ge=0)
    top_duplicates: list[DuplicateValue] = Field(
        default_factory=list, description="Up to 10 most repeated values"
    )


class DistributionEvenness(BaseModel):
    """Shannon entropy and Pielou's evenness of the value frequencies."""

    model_config = ConfigDict(frozen=True)

    evenness_score: float = Field(default=0.0, ge=0.0)
    shannon_entropy: float = Field(default=0.0, ge=0.0)
    max_entropy: float = Field(default=0.0, ge=0.0)
    is_skewed: bool = False
    skewness: str = Field(
        default="N/A", description="Evenness label, 'Very Even' .. 'Highly Skewed'"
    )


class QualityAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    quality_score: int = Field(..., ge=0, le=100)
    quality_level: QualityLevel
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    color: StatusColor


class QualityMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    completeness: Completeness
    cardinality: Cardinality
    uniqueness: Uniqueness
    distribution: DistributionEvenness
    assessment: QualityAssessment
