"""Tests for JSON and inline-load script export."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from fieldlens.export.exporters import (
    escape_inline_value,
    export_inline_script,
    export_to_json,
    generate_inline_script,
    get_delimiter,
)
from fieldlens.models.profiling import FieldProfile, ProfilingResult
from fieldlens.profiling.profiler import profile_fields

GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


@pytest.fixture
def cities() -> ProfilingResult:
    rows = [{"city": "Oslo"}, {"city": "Oslo"}, {"city": "Bergen"}, {"city": None}]
    return profile_fields(rows, ["city"])


class TestDelimiters:
    def test_known_choice(self) -> None:
        assert get_delimiter("pipe").char == "|"
        assert get_delimiter("Semicolon").description == "Semicolon (;)"

    def test_unknown_falls_back_to_tab(self) -> None:
        config = get_delimiter("colon")
        assert config.char == "\t"
        assert config.escape == "\\t"

    def test_escape_value(self) -> None:
        assert escape_inline_value("a|b", "|") == "a b"
        assert escape_inline_value("one\r\ntwo", "\t") == "one two"


class TestGenerateInlineScript:
    def test_full_layout(self, cities: ProfilingResult) -> None:
        script = generate_inline_script(
            cities.fields, "cities.csv", delimiter="pipe", generated_at=GENERATED_AT
        )
        assert script.splitlines() == [
            "// Field Profiling Data Export",
            "// Generated: 2024-01-02T03:04:05+00:00",
            "// Source: cities.csv",
            "// Delimiter: Pipe (|)",
            "// ",
            "// This script loads value distribution data for analyzed fields",
            "//",
            "",
            "// Field: city",
            "// Total Rows: 4",
            "// Unique Values: 2",
            "",
            "[city_Distribution]:",
            "LOAD * INLINE [",
            "Value|Count|Percentage",
            "Oslo|2|50.00",
            "Bergen|1|25.00",
            "(NULL/Empty)|1|25.00",
            "] (Delimiter is '|');",
            "",
        ]

    def test_tab_delimiter(self, cities: ProfilingResult) -> None:
        script = generate_inline_script(cities.fields, "cities.csv", generated_at=GENERATED_AT)
        assert "Value\tCount\tPercentage" in script
        assert "] (Delimiter is '\\t');" in script
        assert "// Delimiter: Tab" in script

    def test_max_rows(self, cities: ProfilingResult) -> None:
        script = generate_inline_script(
            cities.fields, "cities.csv", delimiter="comma", max_rows=1, generated_at=GENERATED_AT
        )
        assert "// Max rows per field: 1" in script
        assert "// NOTE: Exporting top 1 values out of 3 total" in script
        assert "Oslo,2,50.00" in script
        assert "Bergen" not in script

    def test_truncation_warning(self) -> None:
        rows = [{"v": f"v{i}"} for i in range(5)]
        result = profile_fields(rows, ["v"], max_unique_values=2)
        script = generate_inline_script(result.fields, "v.csv", generated_at=GENERATED_AT)
        assert "// WARNING: Distribution truncated to top 2 values" in script

    def test_truncation_warning_counts_exported_entries(self) -> None:
        rows: list[dict[str, object]] = [{"v": f"v{i}"} for i in range(5)]
        rows.append({"v": None})
        result = profile_fields(rows, ["v"], max_unique_values=2)
        script = generate_inline_script(result.fields, "v.csv", generated_at=GENERATED_AT)
        assert "// WARNING: Distribution truncated to top 3 values" in script

    def test_thousands_separators(self) -> None:
        profile = FieldProfile(field_name="big", total_rows=1_234_567, unique_values=1000)
        script = generate_inline_script([profile], "big.csv", generated_at=GENERATED_AT)
        assert "// Total Rows: 1,234,567" in script
        assert "// Unique Values: 1,000" in script

    def test_values_escaped(self) -> None:
        rows = [{"v": "a;b"}, {"v": "a;b"}]
        result = profile_fields(rows, ["v"])
        script = generate_inline_script(
            result.fields, "v.csv", delimiter="semicolon", generated_at=GENERATED_AT
        )
        assert "a b;2;100.00" in script


class TestFileExport:
    def test_export_to_json(self, cities: ProfilingResult, tmp_path: Path) -> None:
        path = export_to_json(cities, tmp_path / "out" / "profile.json")
        data = json.loads(path.read_text())
        assert data["error"] is None
        assert data["fields"][0]["field_name"] == "city"
        assert data["fields"][0]["kind"] == "string"

    def test_export_inline_script(self, cities: ProfilingResult, tmp_path: Path) -> None:
        path = export_inline_script(cities.fields, "cities.csv", tmp_path / "cities.qvs")
        text = path.read_text()
        assert text.startswith("// Field Profiling Data Export")
        assert "[city_Distribution]:" in text
