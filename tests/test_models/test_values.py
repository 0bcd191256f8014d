"""Tests for cell value tagging and canonical text forms."""

from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd

from fieldlens.models.values import CellValue, ValueKind, column_values, format_number, to_cells


class TestCellValueKinds:
    def test_none_is_absent(self) -> None:
        assert CellValue.of(None).is_absent

    def test_nan_is_absent(self) -> None:
        assert CellValue.of(float("nan")).is_absent

    def test_nat_is_absent(self) -> None:
        assert CellValue.of(pd.NaT).is_absent

    def test_bool_is_boolean_not_number(self) -> None:
        cell = CellValue.of(True)
        assert cell.kind is ValueKind.BOOLEAN
        assert cell.number is None
        assert cell.text == "true"

    def test_numpy_scalar_unwrapped(self) -> None:
        cell = CellValue.of(np.int64(5))
        assert cell.kind is ValueKind.NUMBER
        assert cell.raw == 5

    def test_date_kind_and_text(self) -> None:
        cell = CellValue.of(date(2024, 1, 5))
        assert cell.kind is ValueKind.DATE
        assert cell.text == "2024-01-05"

    def test_pandas_timestamp_is_date(self) -> None:
        assert CellValue.of(pd.Timestamp("2024-01-05")).kind is ValueKind.DATE

    def test_already_wrapped_passes_through(self) -> None:
        cell = CellValue.of("x")
        assert CellValue.of(cell) is cell


class TestNullSemantics:
    def test_empty_string_is_null_but_not_absent(self) -> None:
        cell = CellValue.of("")
        assert cell.is_empty
        assert cell.is_null
        assert not cell.is_absent

    def test_whitespace_is_not_empty(self) -> None:
        assert not CellValue.of(" ").is_null


class TestNumberConversion:
    def test_trimmed_text_converts(self) -> None:
        assert CellValue.of(" 12 ").number == 12.0

    def test_digit_separator_rejected(self) -> None:
        assert CellValue.of("1_000").number is None

    def test_infinity_rejected(self) -> None:
        assert CellValue.of("inf").number is None
        assert CellValue.of(float("inf")).number is None

    def test_integral_float_text(self) -> None:
        assert CellValue.of(1.0).text == "1"
        assert format_number(2.5) == "2.5"


class TestPureNumericText:
    def test_plain_integer_text(self) -> None:
        assert CellValue.of("12").is_pure_numeric_text

    def test_leading_zeros_not_pure(self) -> None:
        assert not CellValue.of("007").is_pure_numeric_text

    def test_exponent_not_pure(self) -> None:
        assert not CellValue.of("1e3").is_pure_numeric_text

    def test_number_kind_is_pure(self) -> None:
        assert CellValue.of(3.5).is_pure_numeric_text


class TestColumnHelpers:
    def test_missing_key_reads_absent(self) -> None:
        cells = column_values([{"a": 1}, {}], "a")
        assert [c.kind for c in cells] == [ValueKind.NUMBER, ValueKind.ABSENT]

    def test_to_cells_wraps_all(self) -> None:
        cells = to_cells([1, "a", None])
        assert [c.kind for c in cells] == [ValueKind.NUMBER, ValueKind.TEXT, ValueKind.ABSENT]

    def test_datetime_text_is_iso(self) -> None:
        assert CellValue.of(datetime(2024, 1, 5, 10, 30)).text == "2024-01-05T10:30:00"
