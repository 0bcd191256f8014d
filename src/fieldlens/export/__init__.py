"""Profiling result exporters (JSON and inline-load script)."""

from fieldlens.export.exporters import (
    DELIMITERS,
    export_inline_script,
    export_to_json,
    generate_inline_script,
)

__all__ = ["export_to_json", "generate_inline_script", "export_inline_script", "DELIMITERS"]
