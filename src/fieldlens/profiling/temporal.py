"""Temporal field analysis.

Range and span, calendar distribution, gap detection and trend
classification for date columns. Dates are the naive datetimes produced by
``parse_date``; spans and gaps are measured in whole days (floor).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timedelta

from fieldlens.config import DATE_THRESHOLD
from fieldlens.models.temporal import (
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
from fieldlens.models.values import to_cells
from fieldlens.profiling.dates import detect_date_format, parse_date

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
# Indexed by datetime.weekday(), Monday = 0
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

GAP_TOLERANCE = 1.5
MAX_REPORTED_GAPS = 10

CONSTANT_TREND_SLOPE = 0.05
STRONG_TREND_SLOPE = 0.2

_ONE_DAY = timedelta(days=1)


def _whole_days(delta: timedelta) -> int:
    return delta // _ONE_DAY


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'s' if n > 1 else ''}"


def describe_span(span_days: int) -> str:
    """Readable span using 7-day weeks, 30-day months and 365-day years.

    Examples:
        >>> describe_span(0)
        'Single day'
        >>> describe_span(10)
        '1 week, 3 days'
        >>> describe_span(400)
        '1 year, 1 month'
    """
    if span_days == 0:
        return "Single day"
    if span_days < 7:
        return _plural(span_days, "day")
    if span_days < 31:
        weeks, days = divmod(span_days, 7)
        text = _plural(weeks, "week")
        return f"{text}, {_plural(days, 'day')}" if days else text
    if span_days < 365:
        return _plural(span_days // 30, "month")
    years, rest = divmod(span_days, 365)
    months = rest // 30
    text = _plural(years, "year")
    return f"{text}, {_plural(months, 'month')}" if months else text


def calculate_date_range(dates: Sequence[datetime], raw_values: Sequence[object]) -> DateRange:
    """Earliest and latest date, span and the dominant raw format."""
    if not dates:
        return DateRange()
    earliest = min(dates)
    latest = max(dates)
    span_days = _whole_days(latest - earliest)
    return DateRange(
        earliest=earliest,
        latest=latest,
        span_days=span_days,
        span_description=describe_span(span_days),
        format=detect_date_format(raw_values),
    )


def calculate_temporal_distribution(dates: Sequence[datetime]) -> TemporalDistribution:
    """Counts by year, month name, weekday and quarter; empty buckets omitted."""
    by_year: Counter[int] = Counter(d.year for d in dates)
    by_month: Counter[int] = Counter(d.month for d in dates)
    by_weekday: Counter[int] = Counter(d.weekday() for d in dates)
    by_quarter: Counter[tuple[int, int]] = Counter((d.year, (d.month - 1) // 3 + 1) for d in dates)

    return TemporalDistribution(
        by_year=[PeriodCount(period=str(year), count=by_year[year]) for year in sorted(by_year)],
        by_month=[
            PeriodCount(period=name, count=by_month[i])
            for i, name in enumerate(MONTH_NAMES, start=1)
            if by_month[i]
        ],
        by_day_of_week=[
            PeriodCount(period=name, count=by_weekday[i])
            for i, name in enumerate(DAY_NAMES)
            if by_weekday[i]
        ],
        by_quarter=[
            PeriodCount(period=f"Q{quarter} {year}", count=by_quarter[(year, quarter)])
            for year, quarter in sorted(by_quarter)
        ],
    )


def detect_date_gaps(dates: Sequence[datetime], expected_gap_days: int = 1) -> GapAnalysis:
    """Find intervals longer than 1.5x the expected spacing.

    Args:
        dates: Parsed dates in any order.
        expected_gap_days: Expected spacing between consecutive dates.

    Returns:
        GapAnalysis with the total gap count, the largest gap, the first 10
        gaps in chronological order, and coverage of the expected date grid.
    """
    if len(dates) < 2:
        return GapAnalysis()

    ordered = sorted(dates)
    expected = timedelta(days=expected_gap_days)
    gaps: list[DateGap] = []
    largest: DateGap | None = None
    largest_delta = timedelta(0)

    for previous, current in zip(ordered, ordered[1:]):
        delta = current - previous
        if delta > expected * GAP_TOLERANCE:
            gap = DateGap(from_date=previous, to_date=current, days=_whole_days(delta))
            gaps.append(gap)
            if largest is None or delta > largest_delta:
                largest, largest_delta = gap, delta

    span_days = _whole_days(ordered[-1] - ordered[0])
    expected_dates = span_days // expected_gap_days + 1
    actual_dates = len(set(ordered))

    return GapAnalysis(
        has_gaps=bool(gaps),
        gap_count=len(gaps),
        largest_gap=largest,
        gaps=gaps[:MAX_REPORTED_GAPS],
        coverage=min(100.0, actual_dates / expected_dates * 100),
        expected_dates=expected_dates,
        actual_dates=actual_dates,
    )


def _bucket_size(span_days: int) -> tuple[int, str]:
    if span_days <= 31:
        return 1, "day"
    if span_days <= 365:
        return 7, "week"
    return 30, "month"


def _least_squares_slope(xs: Sequence[float], ys: Sequence[float]) -> float:
    n = len(xs)
    mean_x = sum(xs) / n
    mean_y = sum(ys) / n
    numerator = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))
    denominator = sum((x - mean_x) ** 2 for x in xs)
    return numerator / denominator if denominator else 0.0


def analyze_trend(dates: Sequence[datetime]) -> TrendAnalysis:
    """Classify the volume trend of dates over time.

    Dates are bucketed by day (span up to 31 days), week (up to a year) or
    30-day month. The least-squares slope of bucket count against bucket
    index, relative to the mean count, decides the trend.
    """
    if len(dates) < 3:
        return TrendAnalysis(
            trend_type=TrendType.INSUFFICIENT_DATA,
            description="Insufficient data for trend analysis",
        )

    ordered = sorted(dates)
    base = ordered[0]
    size, unit = _bucket_size(_whole_days(ordered[-1] - base))
    buckets: Counter[int] = Counter(_whole_days(d - base) // size for d in ordered)

    if len(buckets) < 2:
        return TrendAnalysis(
            trend_type=TrendType.CONSTANT,
            description="Constant distribution over time",
        )

    periods = sorted(buckets)
    counts = [buckets[p] for p in periods]
    slope = _least_squares_slope(periods, counts)
    relative = abs(slope) / (sum(counts) / len(counts))

    if relative < CONSTANT_TREND_SLOPE:
        trend, description = TrendType.CONSTANT, "Relatively constant over time"
    elif slope > 0:
        if relative >= STRONG_TREND_SLOPE:
            trend, description = TrendType.STRONG_GROWTH, "Strong growth trend detected"
        else:
            trend, description = TrendType.MODERATE_GROWTH, "Moderate growth trend detected"
    elif relative >= STRONG_TREND_SLOPE:
        trend, description = TrendType.STRONG_DECLINE, "Strong decline trend detected"
    else:
        trend, description = TrendType.MODERATE_DECLINE, "Moderate decline trend detected"

    return TrendAnalysis(
        has_trend=trend is not TrendType.CONSTANT,
        trend_type=trend,
        description=description,
        slope=slope,
        group_unit=unit,
        period_count=len(periods),
    )


def compute_temporal_stats(
    values: Sequence[object], threshold: float = DATE_THRESHOLD
) -> TemporalStats:
    """Compute temporal statistics for a date column.

    Args:
        values: Column values (raw or CellValue).
        threshold: Minimum parsed share of non-null values.

    Returns:
        TemporalStats. ``is_date`` is False, with quality counters only, when
        the parsed share is below ``threshold``.
    """
    cells = to_cells(values)
    dates: list[datetime] = []
    raw_values: list[object] = []
    null_count = 0
    invalid_count = 0

    for cell in cells:
        if cell.is_null:
            null_count += 1
            continue
        raw_values.append(cell)
        parsed = parse_date(cell)
        if parsed is None:
            invalid_count += 1
        else:
            dates.append(parsed)

    total_rows = len(cells)
    quality = TemporalQuality(
        null_count=null_count,
        invalid_date_count=invalid_count,
        valid_date_count=len(dates),
        total_rows=total_rows,
        valid_percentage=len(dates) / total_rows * 100 if total_rows else 0.0,
    )

    non_null = len(dates) + invalid_count
    if non_null == 0 or len(dates) / non_null < threshold:
        return TemporalStats(is_date=False, quality=quality)

    return TemporalStats(
        is_date=True,
        range=calculate_date_range(dates, raw_values),
        distribution=calculate_temporal_distribution(dates),
        gaps=detect_date_gaps(dates),
        trends=analyze_trend(dates),
        quality=quality,
    )
