"""Field type classification.

Decides whether a column is predominantly numeric, string or date-like by
testing a strided sample of its non-null values against per-kind predicates.
A kind applies when the matching share of sampled non-null values reaches
the kind's threshold.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from loguru import logger

from fieldlens.config import (
    DATE_THRESHOLD,
    DEFAULT_SAMPLE_SIZE,
    NUMERIC_THRESHOLD,
    STRING_THRESHOLD,
    ProfilingConfig,
)
from fieldlens.models.profiling import FieldKind
from fieldlens.models.values import CellValue, ValueKind, to_cells
from fieldlens.profiling.dates import parse_date


def sample_values(
    values: Sequence[CellValue], sample_size: int = DEFAULT_SAMPLE_SIZE
) -> Sequence[CellValue]:
    """Take every ``step``-th value, ``step = max(1, n // min(n, sample_size))``.

    The stride keeps detection cost bounded on very large columns while
    covering the whole column rather than its head.
    """
    n = len(values)
    if n == 0:
        return values
    step = max(1, n // min(n, sample_size))
    return values[::step]


def match_ratio(
    values: Sequence[object],
    predicate: Callable[[CellValue], bool],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> float | None:
    """Share of sampled non-null values satisfying ``predicate``.

    Returns:
        The ratio, or None when the sample holds no non-null values.
    """
    cells = values if _all_cells(values) else to_cells(values)
    non_null = 0
    matches = 0
    for cell in sample_values(cells, sample_size):  # type: ignore[arg-type]
        if cell.is_null:
            continue
        non_null += 1
        if predicate(cell):
            matches += 1
    if non_null == 0:
        return None
    return matches / non_null


def _all_cells(values: Sequence[object]) -> bool:
    return all(isinstance(v, CellValue) for v in values)


def is_numeric_value(cell: CellValue) -> bool:
    return cell.is_numeric


def is_string_value(cell: CellValue) -> bool:
    """True unless the value is a pure numeric representation."""
    if cell.kind is ValueKind.DATE:
        return False
    return not cell.is_pure_numeric_text


def is_date_value(cell: CellValue) -> bool:
    return parse_date(cell) is not None


def is_numeric_field(
    values: Sequence[object],
    threshold: float = NUMERIC_THRESHOLD,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> bool:
    """Check whether a column is predominantly numeric.

    Args:
        values: Column values (raw or CellValue).
        threshold: Minimum share of sampled non-null values that must be numbers.
        sample_size: Target sample size.
    """
    ratio = match_ratio(values, is_numeric_value, sample_size)
    return ratio is not None and ratio >= threshold


def is_string_field(
    values: Sequence[object],
    threshold: float = STRING_THRESHOLD,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> bool:
    """Check whether a column is predominantly non-numeric text."""
    ratio = match_ratio(values, is_string_value, sample_size)
    return ratio is not None and ratio >= threshold


def is_date_field(
    values: Sequence[object],
    threshold: float = DATE_THRESHOLD,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> bool:
    """Check whether a column is predominantly parseable dates."""
    ratio = match_ratio(values, is_date_value, sample_size)
    return ratio is not None and ratio >= threshold


def detect_field_kind(
    values: Sequence[object], config: ProfilingConfig | None = None
) -> FieldKind:
    """Classify a column as numeric, date, string or none.

    Numeric is tested first so numeric-looking dates (epochs, ``YYYYMMDD``)
    stay numeric; date is tested before string because date text is also
    non-numeric text.

    Args:
        values: Column values (raw or CellValue).
        config: Thresholds and sample size; defaults when omitted.

    Returns:
        The detected FieldKind.
    """
    config = config or ProfilingConfig()
    cells = values if _all_cells(values) else to_cells(values)
    sample = sample_values(cells, config.sample_size)  # type: ignore[arg-type]

    if is_numeric_field(sample, config.numeric_threshold, len(sample) or 1):
        kind = FieldKind.NUMERIC
    elif is_date_field(sample, config.date_threshold, len(sample) or 1):
        kind = FieldKind.DATE
    elif is_string_field(sample, config.string_threshold, len(sample) or 1):
        kind = FieldKind.STRING
    else:
        kind = FieldKind.NONE

    logger.debug("Classified {} sampled values as {}", len(sample), kind.value)
    return kind
