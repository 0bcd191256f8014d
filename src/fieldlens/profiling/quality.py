"""Data quality metrics for any field.

Computes completeness, cardinality, uniqueness, distribution evenness and an
overall 0-100 quality score. The score and its issue/warning lists follow fixed
thresholds:

    non-null < 50%   -> -40, issue      | non-null < 90%   -> -10, warning
    fill rate < 50%  -> -20, issue      | fill rate < 80%  -> -5, warning
    skewed and evenness < 0.3 -> -5, warning

Level is Good (>= 80), Fair (>= 50) or Poor.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

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
from fieldlens.models.values import to_cells

HIGH_CARDINALITY_RATIO = 0.8
LOW_CARDINALITY_RATIO = 0.05
# Binary and ternary fields are low cardinality whatever their ratio.
LOW_CARDINALITY_MAX_UNIQUE = 3

SKEWED_EVENNESS = 0.5
HIGHLY_SKEWED_EVENNESS = 0.3

TOP_DUPLICATES = 10

_LOW_CARDINALITY = (
    CardinalityLevel.LOW,
    "Low Cardinality",
    StatusColor.GREEN,
    "Good dimension candidate. Suitable for filtering, grouping, and categorical analysis.",
)
_MEDIUM_CARDINALITY = (
    CardinalityLevel.MEDIUM,
    "Medium Cardinality",
    StatusColor.YELLOW,
    "Good for filtering and grouping operations. Balanced selectivity for analysis.",
)
_HIGH_CARDINALITY = (
    CardinalityLevel.HIGH,
    "High Cardinality",
    StatusColor.BLUE,
    "Potential identifier/key field. Consider using as a primary key or unique identifier.",
)

# (minimum evenness, label), checked top down
_EVENNESS_LABELS: tuple[tuple[float, str], ...] = (
    (0.8, "Very Even"),
    (0.6, "Moderately Even"),
    (0.4, "Slightly Skewed"),
    (0.2, "Moderately Skewed"),
)


def compute_completeness(
    total_rows: int, null_count: int, empty_string_count: int
) -> Completeness:
    """Non-null share and fill rate.

    Args:
        total_rows: Rows in the field.
        null_count: Absent values (None / NaN).
        empty_string_count: Present values equal to ``""``.
    """
    if total_rows == 0:
        return Completeness()
    non_null = total_rows - null_count
    populated = non_null - empty_string_count
    return Completeness(
        non_null_percentage=non_null / total_rows * 100,
        fill_rate=populated / total_rows * 100,
        missing_count=null_count,
        missing_percentage=null_count / total_rows * 100,
        empty_string_count=empty_string_count,
        empty_string_percentage=empty_string_count / total_rows * 100,
    )


def classify_cardinality(ratio: float, unique_count: int) -> Cardinality:
    """Place a field in the Low / Medium / High cardinality tier."""
    if unique_count <= LOW_CARDINALITY_MAX_UNIQUE:
        tier = _LOW_CARDINALITY
    elif ratio > HIGH_CARDINALITY_RATIO:
        tier = _HIGH_CARDINALITY
    elif ratio < LOW_CARDINALITY_RATIO:
        tier = _LOW_CARDINALITY
    else:
        tier = _MEDIUM_CARDINALITY
    level, classification, color, recommendation = tier
    return Cardinality(
        ratio=ratio,
        level=level,
        classification=classification,
        color=color,
        recommendation=recommendation,
    )


def compute_uniqueness(
    total_rows: int, unique_count: int, frequency_table: Mapping[str, int]
) -> Uniqueness:
    """Duplicate counts and the most repeated values."""
    if total_rows == 0:
        return Uniqueness()

    duplicate_count = 0
    duplicated_distinct = 0
    for count in frequency_table.values():
        if count > 1:
            duplicate_count += count
            duplicated_distinct += 1

    repeated = [(value, count) for value, count in frequency_table.items() if count > 1]
    repeated.sort(key=lambda item: item[1], reverse=True)
    top = [
        DuplicateValue(value=value, count=count, percentage=round(count / total_rows * 100, 2))
        for value, count in repeated[:TOP_DUPLICATES]
    ]

    return Uniqueness(
        unique_percentage=unique_count / total_rows * 100,
        duplicate_count=duplicate_count,
        duplicate_percentage=duplicate_count / total_rows * 100,
        duplicated_distinct_values=duplicated_distinct,
        top_duplicates=top,
    )


def compute_evenness(frequency_table: Mapping[str, int]) -> DistributionEvenness:
    """Shannon entropy and Pielou's evenness ``J = H / log2(k)``."""
    total = sum(frequency_table.values())
    if total == 0 or not frequency_table:
        return DistributionEvenness()

    entropy = 0.0
    for count in frequency_table.values():
        p = count / total
        if p > 0:
            entropy -= p * math.log2(p)
    # -0.0 for a single distinct value
    entropy = abs(entropy)

    max_entropy = math.log2(len(frequency_table))
    evenness = entropy / max_entropy if max_entropy > 0 else 0.0

    label = "Highly Skewed"
    for minimum, name in _EVENNESS_LABELS:
        if evenness >= minimum:
            label = name
            break

    return DistributionEvenness(
        evenness_score=evenness,
        shannon_entropy=entropy,
        max_entropy=max_entropy,
        is_skewed=evenness < SKEWED_EVENNESS,
        skewness=label,
    )


def _is_highly_skewed(distribution: DistributionEvenness) -> bool:
    return distribution.is_skewed and distribution.evenness_score < HIGHLY_SKEWED_EVENNESS


def quality_color(completeness: Completeness, distribution: DistributionEvenness) -> StatusColor:
    """Traffic-light color for the field."""
    if completeness.non_null_percentage < 50 or completeness.fill_rate < 30:
        return StatusColor.RED
    if (
        completeness.non_null_percentage < 90
        or completeness.fill_rate < 80
        or _is_highly_skewed(distribution)
    ):
        return StatusColor.YELLOW
    return StatusColor.GREEN


def assess_quality(
    completeness: Completeness, distribution: DistributionEvenness
) -> QualityAssessment:
    """Overall score, level, issues and warnings."""
    issues: list[str] = []
    warnings: list[str] = []
    score = 100

    if completeness.non_null_percentage < 50:
        issues.append("Critical: More than 50% of values are missing")
        score -= 40
    elif completeness.non_null_percentage < 90:
        warnings.append(f"{completeness.missing_percentage:.1f}% of values are missing")
        score -= 10

    if completeness.fill_rate < 50:
        issues.append("Critical: Low fill rate with many empty strings")
        score -= 20
    elif completeness.fill_rate < 80:
        warnings.append(f"Fill rate is {completeness.fill_rate:.1f}% (many empty strings)")
        score -= 5

    if _is_highly_skewed(distribution):
        warnings.append(f"Distribution is {distribution.skewness.lower()}")
        score -= 5

    score = max(0, min(100, score))
    if score >= 80:
        level = QualityLevel.GOOD
    elif score >= 50:
        level = QualityLevel.FAIR
    else:
        level = QualityLevel.POOR

    return QualityAssessment(
        quality_score=score,
        quality_level=level,
        issues=issues,
        warnings=warnings,
        color=quality_color(completeness, distribution),
    )


def compute_quality(
    values: Sequence[object],
    unique_count: int,
    null_count: int,
    frequency_table: Mapping[str, int],
) -> QualityMetrics:
    """Compute every quality metric for one field.

    Args:
        values: Column values (raw or CellValue); used for the row total and
            the empty-string count.
        unique_count: Distinct non-null values in the whole column.
        null_count: Absent values (empty strings are counted separately).
        frequency_table: Value -> count over non-null, non-empty values.

    Returns:
        QualityMetrics. An empty column yields zeroed metrics.
    """
    cells = to_cells(values)
    total_rows = len(cells)
    empty_string_count = sum(1 for cell in cells if cell.is_empty)

    ratio = unique_count / total_rows if total_rows > 0 else 0.0
    completeness = compute_completeness(total_rows, null_count, empty_string_count)
    distribution = compute_evenness(frequency_table)

    return QualityMetrics(
        completeness=completeness,
        cardinality=classify_cardinality(ratio, unique_count),
        uniqueness=compute_uniqueness(total_rows, unique_count, frequency_table),
        distribution=distribution,
        assessment=assess_quality(completeness, distribution),
    )
