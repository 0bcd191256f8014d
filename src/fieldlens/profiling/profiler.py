"""Field profiler for in-memory datasets.

Profiles each requested field of a row-oriented dataset: classifies the
field, runs the matching kind analyzer, always runs the quality analyzer, and
builds a capped value-frequency distribution.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from fieldlens.config import ProfilingConfig
from fieldlens.models.profiling import (
    NULL_ENTRY_LABEL,
    FieldKind,
    FieldProfile,
    ProfilingResult,
    TypeCheck,
    ValueDistribution,
)
from fieldlens.models.values import CellValue, Dataset, column_values
from fieldlens.profiling.classifier import detect_field_kind
from fieldlens.profiling.numeric import compute_numeric_stats
from fieldlens.profiling.quality import compute_quality
from fieldlens.profiling.strings import compute_string_stats
from fieldlens.profiling.temporal import compute_temporal_stats

NO_DATA_ERROR = "No data available for profiling"


def build_frequency_table(cells: Sequence[CellValue]) -> dict[str, int]:
    """Count non-null values by canonical text, in first-seen order."""
    table: dict[str, int] = {}
    for cell in cells:
        if cell.is_null:
            continue
        key = cell.text
        table[key] = table.get(key, 0) + 1
    return table


def build_distribution(
    frequency_table: dict[str, int],
    null_count: int,
    total_rows: int,
    max_unique_values: int,
) -> list[ValueDistribution]:
    """Distribution entries for the first ``max_unique_values`` values seen.

    Entries are ordered by count descending; equal counts keep first-seen
    order. The ``(NULL/Empty)`` entry, when present, always comes last.
    """
    tracked = list(frequency_table.items())[:max_unique_values]
    tracked.sort(key=lambda item: item[1], reverse=True)

    entries = [
        ValueDistribution(value=value, count=count, percentage=round(count / total_rows * 100, 2))
        for value, count in tracked
    ]
    if null_count > 0:
        entries.append(
            ValueDistribution(
                value=NULL_ENTRY_LABEL,
                count=null_count,
                percentage=round(null_count / total_rows * 100, 2),
            )
        )
    return entries


def _run_analyzer(
    kind: FieldKind, cells: Sequence[CellValue], config: ProfilingConfig
) -> tuple[dict[str, object], TypeCheck | None]:
    """Run the analyzer for ``kind``.

    Returns:
        Profile keyword arguments for the statistics block, and a TypeCheck
        when the analyzer rejected the column.
    """
    if kind is FieldKind.NUMERIC:
        numeric = compute_numeric_stats(cells, config.numeric_threshold)
        if numeric.is_numeric:
            return {"numeric": numeric}, None
        counters = numeric.quality
        return {}, TypeCheck(
            attempted_kind=kind,
            valid_count=numeric.numeric_count,
            invalid_count=counters.non_numeric_count,
            null_count=counters.null_count,
        )

    if kind is FieldKind.DATE:
        temporal = compute_temporal_stats(cells, config.date_threshold)
        if temporal.is_date:
            return {"temporal": temporal}, None
        counters = temporal.quality
        return {}, TypeCheck(
            attempted_kind=kind,
            valid_count=counters.valid_date_count,
            invalid_count=counters.invalid_date_count,
            null_count=counters.null_count,
        )

    if kind is FieldKind.STRING:
        string = compute_string_stats(cells)
        if string.is_string:
            return {"string": string}, None
        return {}, TypeCheck(
            attempted_kind=kind,
            valid_count=string.value_count,
            invalid_count=0,
            null_count=string.null_count,
        )

    return {}, None


def profile_field(
    data: Dataset, field_name: str, config: ProfilingConfig | None = None
) -> FieldProfile:
    """Profile a single field of a non-empty dataset.

    Args:
        data: Rows of the dataset. Rows missing the field read as absent.
        field_name: Field to profile.
        config: Thresholds and distribution cap; defaults when omitted.

    Returns:
        FieldProfile. When the analyzer for the detected kind rejects the
        column, the kind falls back to ``none`` and ``type_check`` records
        the analyzer's counters.
    """
    config = config or ProfilingConfig()
    cells = column_values(data, field_name)
    total_rows = len(cells)

    frequency_table = build_frequency_table(cells)
    null_count = sum(1 for cell in cells if cell.is_null)
    absent_count = sum(1 for cell in cells if cell.is_absent)
    unique_count = len(frequency_table)

    quality = compute_quality(cells, unique_count, absent_count, frequency_table)

    kind = detect_field_kind(cells, config)
    stats, type_check = _run_analyzer(kind, cells, config)
    if type_check is not None:
        logger.warning(
            "Field {} looked {} but the analyzer rejected it ({} valid, {} invalid)",
            field_name,
            kind.value,
            type_check.valid_count,
            type_check.invalid_count,
        )
        kind = FieldKind.NONE
    logger.debug("Field {}: kind={}, {} distinct values", field_name, kind.value, unique_count)

    return FieldProfile(
        field_name=field_name,
        kind=kind,
        total_rows=total_rows,
        unique_values=unique_count,
        null_count=null_count,
        distribution=build_distribution(
            frequency_table, null_count, total_rows, config.max_unique_values
        ),
        truncated=unique_count > config.max_unique_values,
        truncated_at=config.max_unique_values,
        quality=quality,
        type_check=type_check,
        **stats,
    )


def profile_fields(
    data: Dataset,
    field_names: Sequence[str],
    max_unique_values: int | None = None,
    config: ProfilingConfig | None = None,
) -> ProfilingResult:
    """Profile the requested fields of a dataset.

    Args:
        data: Rows of the dataset, each a mapping of field name to value.
        field_names: Fields to profile, in output order.
        max_unique_values: Distribution cap; overrides ``config`` when given.
        config: Profiling configuration; defaults when omitted.

    Returns:
        ProfilingResult with one FieldProfile per requested field. An empty
        dataset yields a result carrying only ``error``. A field whose
        profiling raised carries ``error`` and kind ``none``; the remaining
        fields are still profiled.
    """
    if not data:
        logger.warning("Profiling skipped: dataset has no rows")
        return ProfilingResult(error=NO_DATA_ERROR)

    config = config or ProfilingConfig()
    if max_unique_values is not None:
        config = ProfilingConfig.model_validate(
            {**config.model_dump(), "max_unique_values": max_unique_values}
        )

    logger.info("Profiling {} fields over {} rows", len(field_names), len(data))

    profiles: list[FieldProfile] = []
    for field_name in field_names:
        try:
            profiles.append(profile_field(data, field_name, config))
        except Exception as e:
            logger.exception("Profiling field {} failed", field_name)
            profiles.append(
                FieldProfile(
                    field_name=field_name,
                    kind=FieldKind.NONE,
                    total_rows=len(data),
                    truncated_at=config.max_unique_values,
                    error=str(e) or type(e).__name__,
                )
            )

    by_kind: dict[str, int] = {}
    for profile in profiles:
        by_kind[profile.kind.value] = by_kind.get(profile.kind.value, 0) + 1
    logger.info("Profiled {} fields: {}", len(profiles), by_kind)

    return ProfilingResult(fields=profiles)


def should_warn_large_dataset(row_count: int, threshold: int | None = None) -> bool:
    """True when ``row_count`` exceeds the large-dataset threshold."""
    if threshold is None:
        threshold = ProfilingConfig().large_dataset_warning_rows
    return row_count > threshold
