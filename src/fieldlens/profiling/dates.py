"""Date parsing and date-format detection.

Deterministic parsers for the date grammars found in tabular exports:
- ISO 8601 dates and date-times (optional fraction and ``Z``/offset)
- Unix epoch timestamps in milliseconds (13 digits) and seconds (10 digits)
- Compact ``YYYYMMDD``
- US ``M/D/YYYY`` and EU ``D.M.YYYY``
- A generic fallback for long-form text such as "March 5, 2024"

All functions are pure: no wall-clock reads, no locale lookups.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from dateutil import parser as dateutil_parser

from fieldlens.models.temporal import DateFormat, DateFormatDetection
from fieldlens.models.values import CellValue, ValueKind

# Regex patterns for date grammar detection
_PATTERN_ISO_8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d{3})?(Z|[+-]\d{2}:\d{2})?)?$"
)
_PATTERN_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_PATTERN_US_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_PATTERN_EU_DATE = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")
_PATTERN_TIMESTAMP_MS = re.compile(r"^\d{13}$")
_PATTERN_TIMESTAMP_S = re.compile(r"^\d{10}$")
_PATTERN_YYYYMMDD = re.compile(r"^(\d{4})(\d{2})(\d{2})$")

# The fallback parser only sees text that names its year explicitly, so
# dateutil never fills the year in from a default.
_PATTERN_HAS_YEAR = re.compile(r"(?<!\d)\d{4}(?!\d)")
_PATTERN_NUMBER_ONLY = re.compile(r"^[+-]?[\d.,\s]+$")

FALLBACK_MIN_YEAR = 1900
FALLBACK_MAX_YEAR = 2100

# Fills missing components in fallback parses; never read from the clock.
_FALLBACK_DEFAULT = datetime(2000, 1, 1)

_UNIX_EPOCH = datetime(1970, 1, 1)

FORMAT_SAMPLE_LIMIT = 100


def _to_naive_utc(value: datetime) -> datetime | None:
    """Drop tzinfo after converting aware datetimes to UTC.

    Returns None when the UTC instant falls outside the datetime range.
    """
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(UTC).replace(tzinfo=None)
    except OverflowError:
        return None


def _safe_date(year: int, month: int, day: int) -> datetime | None:
    """Build a midnight datetime, or None when the components are not a real date."""
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def _parse_iso(s: str) -> datetime | None:
    try:
        return _to_naive_utc(datetime.fromisoformat(s))
    except ValueError:
        return None


def _parse_epoch(s: str, *, milliseconds: bool) -> datetime | None:
    ticks = int(s)
    delta = timedelta(milliseconds=ticks) if milliseconds else timedelta(seconds=ticks)
    try:
        return _UNIX_EPOCH + delta
    except OverflowError:
        return None


def _parse_fallback(s: str) -> datetime | None:
    if not _PATTERN_HAS_YEAR.search(s) or _PATTERN_NUMBER_ONLY.match(s):
        return None
    try:
        parsed = dateutil_parser.parse(s, default=_FALLBACK_DEFAULT)
    except (ValueError, OverflowError):
        return None
    parsed = _to_naive_utc(parsed)
    if parsed is None:
        return None
    if FALLBACK_MIN_YEAR <= parsed.year <= FALLBACK_MAX_YEAR:
        return parsed
    return None


def parse_date(value: object) -> datetime | None:
    """Parse one value into a naive datetime.

    Grammars are tried in order until one succeeds: native date objects,
    ISO 8601, millisecond epoch, second epoch, ``YYYYMMDD``, US ``M/D/YYYY``,
    EU ``D.M.YYYY``, then a generic fallback accepted only for years in
    [1900, 2100]. Impossible calendar dates (e.g. ``2024-02-30``) are
    rejected, not rolled over.

    Args:
        value: Raw value or CellValue.

    Returns:
        Parsed datetime, or None for absent, empty or unparseable input.

    Examples:
        >>> parse_date("2024-03-05")
        datetime.datetime(2024, 3, 5, 0, 0)
        >>> parse_date("3/5/2024")
        datetime.datetime(2024, 3, 5, 0, 0)
        >>> parse_date("not a date") is None
        True
    """
    cell = CellValue.of(value)
    if cell.is_null:
        return None
    if cell.kind is ValueKind.DATE:
        raw = cell.raw
        if isinstance(raw, datetime):
            return _to_naive_utc(raw)
        return datetime(raw.year, raw.month, raw.day)  # type: ignore[union-attr]
    if cell.kind is ValueKind.BOOLEAN:
        return None

    s = cell.text.strip()

    if _PATTERN_ISO_8601.match(s):
        parsed = _parse_iso(s)
        if parsed is not None:
            return parsed

    if _PATTERN_TIMESTAMP_MS.match(s):
        parsed = _parse_epoch(s, milliseconds=True)
        if parsed is not None:
            return parsed

    if _PATTERN_TIMESTAMP_S.match(s):
        parsed = _parse_epoch(s, milliseconds=False)
        if parsed is not None:
            return parsed

    m = _PATTERN_YYYYMMDD.match(s)
    if m:
        parsed = _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        if parsed is not None:
            return parsed

    m = _PATTERN_US_DATE.match(s)
    if m:
        parsed = _safe_date(int(m.group(3)), int(m.group(1)), int(m.group(2)))
        if parsed is not None:
            return parsed

    m = _PATTERN_EU_DATE.match(s)
    if m:
        parsed = _safe_date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
        if parsed is not None:
            return parsed

    return _parse_fallback(s)


def classify_date_format(value: object) -> DateFormat:
    """Name the grammar of one non-null value.

    ``ISO_DATE`` is checked before ``ISO_8601`` because it is more specific.
    Native date objects report ``ISO_DATE`` unless they carry a time of day.
    """
    cell = CellValue.of(value)
    if cell.kind is ValueKind.DATE:
        raw = cell.raw
        if isinstance(raw, datetime) and raw.time() != datetime.min.time():
            return DateFormat.ISO_8601
        return DateFormat.ISO_DATE

    s = cell.text.strip()
    if _PATTERN_ISO_DATE.match(s):
        return DateFormat.ISO_DATE
    if _PATTERN_ISO_8601.match(s):
        return DateFormat.ISO_8601
    if _PATTERN_US_DATE.match(s):
        return DateFormat.US_DATE
    if _PATTERN_EU_DATE.match(s):
        return DateFormat.EU_DATE
    if _PATTERN_TIMESTAMP_MS.match(s):
        return DateFormat.TIMESTAMP_MS
    if _PATTERN_TIMESTAMP_S.match(s):
        return DateFormat.TIMESTAMP_S
    if _PATTERN_YYYYMMDD.match(s):
        return DateFormat.YYYYMMDD
    return DateFormat.OTHER


def detect_date_format(values: Iterable[object]) -> DateFormatDetection:
    """Find the dominant date grammar among the first non-null values.

    Inspects up to the first 100 non-null values. Ties go to the grammar
    listed first in ``DateFormat``.

    Args:
        values: Raw values or CellValues, in column order.

    Returns:
        DateFormatDetection with per-format counts and a confidence equal to
        the dominant count divided by the number of values inspected.
    """
    counts: dict[DateFormat, int] = {fmt: 0 for fmt in DateFormat}
    sampled = 0
    for value in values:
        if sampled >= FORMAT_SAMPLE_LIMIT:
            break
        cell = CellValue.of(value)
        if cell.is_null:
            continue
        sampled += 1
        counts[classify_date_format(cell)] += 1

    dominant = DateFormat.OTHER
    max_count = 0
    for fmt, count in counts.items():
        if count > max_count:
            max_count = count
            dominant = fmt

    return DateFormatDetection(
        dominant_format=dominant,
        description=dominant.description,
        format_counts=counts,
        confidence=round(max_count / sampled, 4) if sampled else 0.0,
    )
