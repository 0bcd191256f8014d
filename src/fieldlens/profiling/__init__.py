"""Field profiling: type classification, kind analyzers and quality metrics."""

from fieldlens.profiling.dates import detect_date_format, parse_date
from fieldlens.profiling.profiler import profile_field, profile_fields, should_warn_large_dataset

__all__ = [
    "profile_fields",
    "profile_field",
    "should_warn_large_dataset",
    "parse_date",
    "detect_date_format",
]
