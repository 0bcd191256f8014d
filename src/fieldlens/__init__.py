"""fieldlens: column profiling for in-memory tabular data."""

from fieldlens.profiling import profile_fields

__version__ = "0.1.0"

__all__ = ["__version__", "profile_fields"]
