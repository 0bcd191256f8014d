"""String field analysis models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LengthStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(default=0, ge=0)
    max: int = Field(default=0, ge=0)
    average: float = Field(default=0.0, ge=0.0, description="Mean length, 2 decimals")
    most_common: int = Field(default=0, ge=0, description="Most frequent length")
    most_common_count: int = Field(default=0, ge=0)
    distribution: dict[int, int] = Field(
        default_factory=dict, description="Length -> number of values"
    )


class AffixCount(BaseModel):
    """A recurring prefix or suffix."""

    model_config = ConfigDict(frozen=True)

    text: str
    count: int = Field(..., ge=2)
    percentage: float = Field(..., ge=0.0, description="Share of string values")


class CharacterComposition(BaseModel):
    """Character classes as percentages of all characters scanned."""

    model_config = ConfigDict(frozen=True)

    alphanumeric_percentage: float = 0.0
    alphabetic_percentage: float = 0.0
    numeric_percentage: float = 0.0
    special_char_percentage: float = 0.0
    whitespace_percentage: float = 0.0
    leading_whitespace_count: int = 0
    trailing_whitespace_count: int = 0
    non_ascii_count: int = 0
    non_ascii_percentage: float = 0.0


class CaseAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    uppercase_count: int = 0
    lowercase_count: int = 0
    mixed_case_count: int = 0
    title_case_count: int = 0
    uppercase_percentage: float = 0.0
    lowercase_percentage: float = 0.0
    mixed_case_percentage: float = 0.0
    title_case_percentage: float = 0.0


class FormatMatch(BaseModel):
    """Result of one structured-format detector."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    samples: list[str] = Field(default_factory=list, description="Up to 5 matching values")
    breakdown: dict[str, int] = Field(
        default_factory=dict, description="Matches per country or sub-pattern"
    )


class FormatDetection(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: FormatMatch
    phone: FormatMatch
    national_id: FormatMatch
    url: FormatMatch
    date_string: FormatMatch


class StringStats(BaseModel):
    """Statistics block for a string field.

    When ``is_string`` is False only ``null_count`` is meaningful.
    """

    model_config = ConfigDict(frozen=True)

    is_string: bool
    value_count: int = Field(default=0, ge=0)
    null_count: int = Field(default=0, ge=0)
    length_stats: LengthStats | None = None
    prefixes: list[AffixCount] = Field(default_factory=list)
    suffixes: list[AffixCount] = Field(default_factory=list)
    character_composition: CharacterComposition | None = None
    case_analysis: CaseAnalysis | None = None
    format_detection: FormatDetection | None = None
