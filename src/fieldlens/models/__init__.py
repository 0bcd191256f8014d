"""Pydantic data models shared across all fieldlens components.

All models are re-exported here for convenient imports:
    from fieldlens.models import FieldProfile, QualityMetrics, NumericStats
"""

from fieldlens.models.metadata import ColumnMetadata, DatasetMetadata
from fieldlens.models.numeric import (
    DescriptiveStats,
    DistributionShape,
    NumericQualityCounters,
    NumericStats,
    OutlierSummary,
    Percentiles,
    Quartiles,
    SpreadStats,
)
from fieldlens.models.profiling import (
    NULL_ENTRY_LABEL,
    FieldKind,
    FieldProfile,
    ProfilingResult,
    TypeCheck,
    ValueDistribution,
)
from fieldlens.models.quality import (
    Cardinality,
    CardinalityLevel,
    Completeness,
    DistributionEvenness,
    DuplicateValue,
    QualityAssessment,
    QualityLevel,
    QualityMetrics,
    StatusColor,
    Uniqueness,
)
from fieldlens.models.strings import (
    AffixCount,
    CaseAnalysis,
    CharacterComposition,
    FormatDetection,
    FormatMatch,
    LengthStats,
    StringStats,
)
from fieldlens.models.temporal import (
    DateFormat,
    DateFormatDetection,
    DateGap,
    DateRange,
    GapAnalysis,
    PeriodCount,
    TemporalDistribution,
    TemporalQuality,
    TemporalStats,
    TrendAnalysis,
    TrendType,
)
from fieldlens.models.values import CellValue, Dataset, Row, ValueKind

__all__ = [
    # values
    "CellValue",
    "ValueKind",
    "Row",
    "Dataset",
    # metadata
    "ColumnMetadata",
    "DatasetMetadata",
    # profiling
    "NULL_ENTRY_LABEL",
    "FieldKind",
    "FieldProfile",
    "ProfilingResult",
    "TypeCheck",
    "ValueDistribution",
    # numeric
    "DescriptiveStats",
    "DistributionShape",
    "NumericQualityCounters",
    "NumericStats",
    "OutlierSummary",
    "Percentiles",
    "Quartiles",
    "SpreadStats",
    # quality
    "Cardinality",
    "CardinalityLevel",
    "Completeness",
    "DistributionEvenness",
    "DuplicateValue",
    "QualityAssessment",
    "QualityLevel",
    "QualityMetrics",
    "StatusColor",
    "Uniqueness",
    # strings
    "AffixCount",
    "CaseAnalysis",
    "CharacterComposition",
    "FormatDetection",
    "FormatMatch",
    "LengthStats",
    "StringStats",
    # temporal
    "DateFormat",
    "DateFormatDetection",
    "DateGap",
    "DateRange",
    "GapAnalysis",
    "PeriodCount",
    "TemporalDistribution",
    "TemporalQuality",
    "TemporalStats",
    "TrendAnalysis",
    "TrendType",
]
