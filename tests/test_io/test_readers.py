"""Tests for tabular file readers."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from fieldlens.io.readers import DatasetReadError, read_dataframe, read_dataset
from fieldlens.models.values import CellValue


class TestReadCsv:
    def test_rows_and_metadata(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.csv"
        path.write_text("id,name,score\n1,Ann,3.5\n2,,4\n")
        rows, meta = read_dataset(path)

        assert meta.filename == "scores.csv"
        assert meta.file_format == "csv"
        assert meta.row_count == 2
        assert meta.col_count == 3
        assert meta.column_names == ["id", "name", "score"]
        assert rows[0] == {"id": "1", "name": "Ann", "score": "3.5"}

    def test_empty_cells_stay_empty_strings(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.csv"
        path.write_text("id,name\n1,\n")
        rows, _ = read_dataset(path)
        assert rows[0]["name"] == ""
        assert CellValue.of(rows[0]["name"]).is_empty


class TestReadJson:
    def test_records(self, tmp_path: Path) -> None:
        path = tmp_path / "items.json"
        path.write_text(json.dumps([{"a": 1, "b": "x"}, {"a": None, "b": "y"}]))
        rows, meta = read_dataset(path)
        assert meta.file_format == "json"
        assert meta.row_count == 2
        assert rows[0]["b"] == "x"
        assert CellValue.of(rows[1]["a"]).is_absent

    def test_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "items.json"
        path.write_text("{not json")
        with pytest.raises(DatasetReadError, match="Cannot read"):
            read_dataset(path)


class TestReadParquet:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data.parquet"
        pd.DataFrame({"n": [1.5, None], "s": ["a", "b"]}).to_parquet(path)
        df, meta = read_dataframe(path)
        assert meta.file_format == "parquet"
        assert meta.columns[0].dtype == "float64"
        rows, _ = read_dataset(path)
        assert CellValue.of(rows[1]["n"]).is_absent


class TestReadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DatasetReadError, match="not found"):
            read_dataset(tmp_path / "missing.csv")

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"
        path.write_text("a,b\n")
        with pytest.raises(DatasetReadError, match="Unsupported file type"):
            read_dataset(path)

    def test_empty_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(DatasetReadError):
            read_dataset(path)
