"""Tests for temporal field analysis."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from fieldlens.models.temporal import DateFormat, TrendType
from fieldlens.profiling.temporal import (
    analyze_trend,
    calculate_temporal_distribution,
    compute_temporal_stats,
    describe_span,
    detect_date_gaps,
)


def _day(n: int) -> datetime:
    return datetime(2024, 1, 1) + timedelta(days=n)


class TestDescribeSpan:
    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (0, "Single day"),
            (1, "1 day"),
            (3, "3 days"),
            (7, "1 week"),
            (10, "1 week, 3 days"),
            (45, "1 month"),
            (60, "2 months"),
            (365, "1 year"),
            (400, "1 year, 1 month"),
            (800, "2 years, 2 months"),
        ],
    )
    def test_descriptions(self, days: int, expected: str) -> None:
        assert describe_span(days) == expected


class TestTemporalDistribution:
    def test_buckets_in_calendar_order(self) -> None:
        dates = [datetime(2024, 1, 1), datetime(2024, 4, 15), datetime(2023, 12, 31)]
        result = calculate_temporal_distribution(dates)
        assert [(p.period, p.count) for p in result.by_year] == [("2023", 1), ("2024", 2)]
        assert [p.period for p in result.by_month] == ["January", "April", "December"]
        assert [(p.period, p.count) for p in result.by_day_of_week] == [
            ("Monday", 2),
            ("Sunday", 1),
        ]
        assert [p.period for p in result.by_quarter] == ["Q4 2023", "Q1 2024", "Q2 2024"]

    def test_empty(self) -> None:
        result = calculate_temporal_distribution([])
        assert result.by_year == []


class TestGapDetection:
    def test_single_gap(self) -> None:
        dates = [datetime(2024, 1, 1), datetime(2024, 1, 2), datetime(2024, 1, 10)]
        result = detect_date_gaps(dates)
        assert result.has_gaps
        assert result.gap_count == 1
        assert result.largest_gap.days == 8
        assert result.largest_gap.from_date == datetime(2024, 1, 2)
        assert result.expected_dates == 10
        assert result.actual_dates == 3
        assert result.coverage == pytest.approx(30.0)

    def test_unsorted_input(self) -> None:
        dates = [datetime(2024, 1, 10), datetime(2024, 1, 1), datetime(2024, 1, 2)]
        assert detect_date_gaps(dates).gap_count == 1

    def test_contiguous_days(self) -> None:
        result = detect_date_gaps([_day(i) for i in range(5)])
        assert not result.has_gaps
        assert result.coverage == 100.0

    def test_reports_first_ten_gaps(self) -> None:
        result = detect_date_gaps([_day(i * 3) for i in range(15)])
        assert result.gap_count == 14
        assert len(result.gaps) == 10

    def test_too_few_dates(self) -> None:
        result = detect_date_gaps([datetime(2024, 1, 1)])
        assert not result.has_gaps
        assert result.coverage == 100.0
        assert result.expected_dates is None


class TestTrendAnalysis:
    def test_growth(self) -> None:
        dates = [_day(i) for i in range(40) for _ in range(i + 1)]
        result = analyze_trend(dates)
        assert result.has_trend
        assert result.trend_type in (TrendType.STRONG_GROWTH, TrendType.MODERATE_GROWTH)
        assert result.group_unit == "week"

    def test_moderate_decline(self) -> None:
        dates = [_day(i) for i in range(10) for _ in range(10 - i)]
        result = analyze_trend(dates)
        assert result.trend_type is TrendType.MODERATE_DECLINE
        assert result.slope == pytest.approx(-1.0)
        assert result.group_unit == "day"

    def test_relatively_constant(self) -> None:
        result = analyze_trend([_day(i) for i in range(10)])
        assert result.trend_type is TrendType.CONSTANT
        assert result.description == "Relatively constant over time"
        assert not result.has_trend

    def test_single_bucket(self) -> None:
        result = analyze_trend([_day(0)] * 3)
        assert result.trend_type is TrendType.CONSTANT
        assert result.description == "Constant distribution over time"

    def test_insufficient_data(self) -> None:
        result = analyze_trend([_day(0), _day(1)])
        assert result.trend_type is TrendType.INSUFFICIENT_DATA


class TestComputeTemporalStats:
    def test_date_column(self) -> None:
        result = compute_temporal_stats(["2024-01-01", "2024-01-02", "2024-01-10", None])
        assert result.is_date
        assert result.range.span_days == 9
        assert result.range.span_description == "1 week, 2 days"
        assert result.range.format.dominant_format is DateFormat.ISO_DATE
        assert result.range.format.confidence == 1.0
        assert result.gaps.gap_count == 1
        assert result.quality.null_count == 1
        assert result.quality.valid_percentage == pytest.approx(75.0)

    def test_below_threshold(self) -> None:
        result = compute_temporal_stats(["2024-01-01", "2024-01-02", None, "bad"])
        assert not result.is_date
        assert result.range is None
        assert result.quality.invalid_date_count == 1
        assert result.quality.valid_date_count == 2
        assert result.quality.valid_percentage == pytest.approx(50.0)

    def test_threshold_argument(self) -> None:
        result = compute_temporal_stats(["2024-01-01", "2024-01-02", "bad"], threshold=0.6)
        assert result.is_date
