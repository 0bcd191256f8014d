"""Tests for field type classification."""

from __future__ import annotations

from fieldlens.config import ProfilingConfig
from fieldlens.models.profiling import FieldKind
from fieldlens.models.values import to_cells
from fieldlens.profiling.classifier import (
    detect_field_kind,
    is_date_field,
    is_numeric_field,
    is_string_field,
    sample_values,
)


class TestSampleValues:
    def test_strided_sample_of_large_column(self) -> None:
        cells = to_cells(range(5000))
        sample = sample_values(cells, 1000)
        assert len(sample) == 1000
        assert sample[1].raw == 5

    def test_small_column_kept_whole(self) -> None:
        cells = to_cells(range(10))
        assert len(sample_values(cells, 1000)) == 10

    def test_empty_column(self) -> None:
        assert len(sample_values([], 1000)) == 0


class TestIsNumericField:
    def test_numbers_and_numeric_text(self) -> None:
        assert is_numeric_field([1, 2, "3", None, ""])

    def test_mostly_text(self) -> None:
        assert not is_numeric_field(["a", "b", 1])

    def test_booleans_are_not_numeric(self) -> None:
        assert not is_numeric_field([True, False, True])

    def test_all_null(self) -> None:
        assert not is_numeric_field([None, ""])

    def test_threshold_boundary(self) -> None:
        values = [str(i) for i in range(9)] + ["x"]
        assert is_numeric_field(values, threshold=0.9)
        assert not is_numeric_field(values, threshold=0.95)


class TestIsStringField:
    def test_non_canonical_numbers_are_strings(self) -> None:
        assert is_string_field(["007", "abc"])

    def test_canonical_numbers_are_not_strings(self) -> None:
        assert not is_string_field(["1", "2"])


class TestIsDateField:
    def test_iso_dates(self) -> None:
        assert is_date_field(["2024-01-01", "2024-02-01", None])

    def test_words(self) -> None:
        assert not is_date_field(["apple", "banana"])


class TestDetectFieldKind:
    def test_numeric(self) -> None:
        assert detect_field_kind([1, 2, 3]) is FieldKind.NUMERIC

    def test_date(self) -> None:
        assert detect_field_kind(["2024-01-01", "2024-02-01"]) is FieldKind.DATE

    def test_string(self) -> None:
        assert detect_field_kind(["apple", "banana"]) is FieldKind.STRING

    def test_all_null_is_none(self) -> None:
        assert detect_field_kind([None, None, ""]) is FieldKind.NONE

    def test_compact_dates_stay_numeric(self) -> None:
        assert detect_field_kind(["20240101", "20240102"]) is FieldKind.NUMERIC

    def test_mixed_column_is_none(self) -> None:
        values = ["1", "2", "3", "4", "5", "6", "7", "8", "x", "y"]
        assert detect_field_kind(values) is FieldKind.NONE

    def test_config_threshold_applies(self) -> None:
        values = ["1", "2", "3", "4", "5", "6", "7", "8", "x", "y"]
        config = ProfilingConfig(numeric_threshold=0.8)
        assert detect_field_kind(values, config) is FieldKind.NUMERIC
