"""Profiling configuration.

The classification thresholds are named constants so every call site reads
the same value. ``ProfilingConfig`` bundles them with the distribution cap and
the large-dataset warning threshold; the CLI builds one from options or from a
JSON file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Share of sampled non-null values that must match for a field to take a kind.
NUMERIC_THRESHOLD = 0.9
STRING_THRESHOLD = 0.8
# One date threshold for classification and for the temporal analyzer.
DATE_THRESHOLD = 0.8

DEFAULT_MAX_UNIQUE_VALUES = 1000
DEFAULT_SAMPLE_SIZE = 1000
LARGE_DATASET_WARNING_ROWS = 100_000


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded."""


class ProfilingConfig(BaseModel):
    """Fixed configuration for one profiling run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_unique_values: int = Field(
        default=DEFAULT_MAX_UNIQUE_VALUES,
        ge=1,
        description="Distinct values tracked in each distribution table (first seen)",
    )
    numeric_threshold: float = Field(default=NUMERIC_THRESHOLD, gt=0.0, le=1.0)
    string_threshold: float = Field(default=STRING_THRESHOLD, gt=0.0, le=1.0)
    date_threshold: float = Field(default=DATE_THRESHOLD, gt=0.0, le=1.0)
    sample_size: int = Field(
        default=DEFAULT_SAMPLE_SIZE, ge=1, description="Target sample size for type detection"
    )
    large_dataset_warning_rows: int = Field(
        default=LARGE_DATASET_WARNING_ROWS,
        ge=0,
        description="Row count above which callers should confirm before profiling",
    )

    @classmethod
    def from_file(cls, path: str | Path) -> ProfilingConfig:
        """Load a configuration from a JSON file.

        Raises:
            ConfigError: If the file is missing or does not validate.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
