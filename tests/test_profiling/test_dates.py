"""Tests for date parsing and date-format detection."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from fieldlens.models.temporal import DateFormat
from fieldlens.profiling.dates import classify_date_format, detect_date_format, parse_date


class TestParseDate:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-03-05", datetime(2024, 3, 5)),
            ("2024-03-05T10:30:00", datetime(2024, 3, 5, 10, 30)),
            ("2024-03-05T10:30:00Z", datetime(2024, 3, 5, 10, 30)),
            ("2024-03-05T12:00:00+02:00", datetime(2024, 3, 5, 10, 0)),
            ("1700000000000", datetime(2023, 11, 14, 22, 13, 20)),
            ("1700000000", datetime(2023, 11, 14, 22, 13, 20)),
            ("20240305", datetime(2024, 3, 5)),
            ("3/5/2024", datetime(2024, 3, 5)),
            ("5.3.2024", datetime(2024, 3, 5)),
            ("March 5, 2024", datetime(2024, 3, 5)),
        ],
    )
    def test_supported_grammars(self, value: str, expected: datetime) -> None:
        assert parse_date(value) == expected

    def test_native_date(self) -> None:
        assert parse_date(date(2024, 1, 2)) == datetime(2024, 1, 2)

    def test_native_datetime_kept(self) -> None:
        assert parse_date(datetime(2024, 1, 2, 8, 0)) == datetime(2024, 1, 2, 8, 0)

    @pytest.mark.parametrize("value", ["2024-02-30", "2/30/2024", "31.02.2024"])
    def test_impossible_dates_rejected(self, value: str) -> None:
        assert parse_date(value) is None

    @pytest.mark.parametrize("value", [None, "", "not a date", "12345", True])
    def test_non_dates(self, value: object) -> None:
        assert parse_date(value) is None

    def test_fallback_year_out_of_range(self) -> None:
        assert parse_date("January 5, 1850") is None

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:30:00-01:00"]
    )
    def test_offset_beyond_datetime_range(self, value: str) -> None:
        assert parse_date(value) is None

    def test_aware_native_datetime_beyond_range(self) -> None:
        value = datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=2)))
        assert parse_date(value) is None


class TestClassifyDateFormat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-01", DateFormat.ISO_DATE),
            ("2024-01-01T10:00:00", DateFormat.ISO_8601),
            ("1/2/2024", DateFormat.US_DATE),
            ("1.2.2024", DateFormat.EU_DATE),
            ("1700000000000", DateFormat.TIMESTAMP_MS),
            ("1700000000", DateFormat.TIMESTAMP_S),
            ("20240101", DateFormat.YYYYMMDD),
            ("March 5, 2024", DateFormat.OTHER),
        ],
    )
    def test_grammars(self, value: str, expected: DateFormat) -> None:
        assert classify_date_format(value) is expected

    def test_native_datetime_with_time(self) -> None:
        assert classify_date_format(datetime(2024, 1, 1, 9, 30)) is DateFormat.ISO_8601

    def test_native_date(self) -> None:
        assert classify_date_format(date(2024, 1, 1)) is DateFormat.ISO_DATE


class TestDetectDateFormat:
    def test_dominant_format_and_confidence(self) -> None:
        result = detect_date_format(["2024-01-01", "2024-01-02", "1/2/2024", None, ""])
        assert result.dominant_format is DateFormat.ISO_DATE
        assert result.description == "ISO 8601 date (YYYY-MM-DD)"
        assert result.format_counts[DateFormat.US_DATE] == 1
        assert result.confidence == pytest.approx(0.6667)

    def test_inspects_first_hundred_values(self) -> None:
        result = detect_date_format(["2024-01-01"] * 150)
        assert result.format_counts[DateFormat.ISO_DATE] == 100
        assert result.confidence == 1.0

    def test_no_values(self) -> None:
        result = detect_date_format([])
        assert result.dominant_format is DateFormat.OTHER
        assert result.confidence == 0.0
