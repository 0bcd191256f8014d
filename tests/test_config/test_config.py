"""Tests for profiling configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from fieldlens.config import (
    DATE_THRESHOLD,
    NUMERIC_THRESHOLD,
    STRING_THRESHOLD,
    ConfigError,
    ProfilingConfig,
)


class TestDefaults:
    def test_thresholds(self) -> None:
        config = ProfilingConfig()
        assert config.numeric_threshold == NUMERIC_THRESHOLD == 0.9
        assert config.string_threshold == STRING_THRESHOLD == 0.8
        assert config.date_threshold == DATE_THRESHOLD == 0.8

    def test_caps(self) -> None:
        config = ProfilingConfig()
        assert config.max_unique_values == 1000
        assert config.sample_size == 1000
        assert config.large_dataset_warning_rows == 100_000

    def test_frozen(self) -> None:
        config = ProfilingConfig()
        with pytest.raises(ValidationError):
            config.max_unique_values = 5


class TestFromFile:
    def test_loads_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_unique_values": 50, "date_threshold": 0.6}))
        config = ProfilingConfig.from_file(path)
        assert config.max_unique_values == 50
        assert config.date_threshold == 0.6
        assert config.numeric_threshold == 0.9

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            ProfilingConfig.from_file(tmp_path / "nope.json")

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_unique_values": 0}))
        with pytest.raises(ConfigError, match="Invalid config"):
            ProfilingConfig.from_file(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_unique": 10}))
        with pytest.raises(ConfigError):
            ProfilingConfig.from_file(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            ProfilingConfig.from_file(path)
