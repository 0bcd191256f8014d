"""Export profiling results to JSON and inline-load script formats.

Provides:
- export_to_json: Pydantic serialization of a ProfilingResult to a JSON file
- generate_inline_script: Script text with one ``LOAD * INLINE`` table per field
  holding its value distribution
- export_inline_script: generate_inline_script written to a file
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from fieldlens.models.profiling import FieldProfile, ProfilingResult


@dataclass(frozen=True)
class DelimiterConfig:
    char: str
    escape: str
    description: str


DELIMITERS: dict[str, DelimiterConfig] = {
    "tab": DelimiterConfig(char="\t", escape="\\t", description="Tab"),
    "pipe": DelimiterConfig(char="|", escape="|", description="Pipe (|)"),
    "comma": DelimiterConfig(char=",", escape=",", description="Comma (,)"),
    "semicolon": DelimiterConfig(char=";", escape=";", description="Semicolon (;)"),
}
DEFAULT_DELIMITER = "tab"


def get_delimiter(choice: str) -> DelimiterConfig:
    """Delimiter settings for ``choice``; unknown choices fall back to tab."""
    return DELIMITERS.get(choice.lower(), DELIMITERS[DEFAULT_DELIMITER])


def escape_inline_value(value: str, delimiter: str) -> str:
    """Make a value safe for one inline table cell.

    Examples:
        >>> escape_inline_value("a|b", "|")
        'a b'
        >>> escape_inline_value("line1\\r\\nline2", "\\t")
        'line1 line2'
    """
    return value.replace(delimiter, " ").replace("\n", " ").replace("\r", "")


def export_to_json(result: ProfilingResult, output_path: Path) -> Path:
    """Export a profiling result to JSON via Pydantic serialization.

    Args:
        result: The profiling result to export.
        output_path: File path to write the JSON output.

    Returns:
        The path written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Exported profiling result to JSON: {path}", path=output_path)
    return output_path


def _field_block(profile: FieldProfile, delimiter: DelimiterConfig, max_rows: int) -> list[str]:
    entries = profile.distribution
    lines = [
        f"// Field: {profile.field_name}",
        f"// Total Rows: {profile.total_rows:,}",
        f"// Unique Values: {profile.unique_values:,}",
    ]
    if profile.truncated:
        lines.append(f"// WARNING: Distribution truncated to top {len(entries)} values")
    if 0 < max_rows < len(entries):
        lines.append(f"// NOTE: Exporting top {max_rows} values out of {len(entries)} total")
        entries = entries[:max_rows]

    d = delimiter.char
    lines.append("")
    lines.append(f"[{profile.field_name}_Distribution]:")
    lines.append("LOAD * INLINE [")
    lines.append(f"Value{d}Count{d}Percentage")
    for entry in entries:
        value = escape_inline_value(entry.value, d)
        lines.append(f"{value}{d}{entry.count}{d}{entry.percentage:.2f}")
    lines.append(f"] (Delimiter is '{delimiter.escape}');")
    lines.append("")
    return lines


def generate_inline_script(
    profiles: Sequence[FieldProfile],
    source_name: str,
    delimiter: str = DEFAULT_DELIMITER,
    max_rows: int = 0,
    generated_at: datetime | None = None,
) -> str:
    """Render field distributions as inline-load script text.

    Args:
        profiles: Field profiles to export, in output order.
        source_name: Name of the profiled source, shown in the header.
        delimiter: One of ``tab``, ``pipe``, ``comma`` or ``semicolon``.
        max_rows: Maximum distribution rows per field; 0 exports all.
        generated_at: Timestamp for the header; the current UTC time when
            omitted.

    Returns:
        The script text.
    """
    config = get_delimiter(delimiter)
    generated_at = generated_at or datetime.now(UTC)

    lines = [
        "// Field Profiling Data Export",
        f"// Generated: {generated_at.isoformat()}",
        f"// Source: {source_name}",
        f"// Delimiter: {config.description}",
    ]
    if max_rows > 0:
        lines.append(f"// Max rows per field: {max_rows}")
    lines.extend(
        [
            "// ",
            "// This script loads value distribution data for analyzed fields",
            "//",
            "",
        ]
    )
    for profile in profiles:
        lines.extend(_field_block(profile, config, max_rows))
    return "\n".join(lines) + "\n"


def export_inline_script(
    profiles: Sequence[FieldProfile],
    source_name: str,
    output_path: Path,
    delimiter: str = DEFAULT_DELIMITER,
    max_rows: int = 0,
) -> Path:
    """Write ``generate_inline_script`` output to ``output_path``.

    Returns:
        The path written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    script = generate_inline_script(profiles, source_name, delimiter=delimiter, max_rows=max_rows)
    output_path.write_text(script, encoding="utf-8")
    logger.info("Exported inline script for {} fields: {path}", len(profiles), path=output_path)
    return output_path
