"""String field pattern analysis.

Length statistics, recurring prefixes and suffixes, character and case
composition, and detection of structured formats (email, URL, phone numbers,
national identifier numbers and date-like strings).
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from fieldlens.models.strings import (
    AffixCount,
    CaseAnalysis,
    CharacterComposition,
    FormatDetection,
    FormatMatch,
    LengthStats,
    StringStats,
)
from fieldlens.models.values import to_cells

MIN_AFFIX_LENGTH = 2
MAX_AFFIX_LENGTH = 10
MIN_AFFIX_OCCURRENCES = 2
TOP_AFFIXES = 10
MAX_FORMAT_SAMPLES = 5

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")

_HAS_LETTER = re.compile(r"[a-zA-Z]")
_HAS_UPPER = re.compile(r"[A-Z]")
_HAS_LOWER = re.compile(r"[a-z]")
_WHITESPACE_RUN = re.compile(r"\s+")

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_URL = re.compile(
    r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$", re.IGNORECASE | re.ASCII
)

_SEP = r"[-.\s]?"

# Checked in order; the first matching country wins.
PHONE_PATTERNS: dict[str, re.Pattern[str]] = {
    "US": re.compile(rf"^(\+1{_SEP})?\(?\d{{3}}\)?{_SEP}\d{{3}}{_SEP}\d{{4}}$"),
    "UK": re.compile(rf"^(\+44{_SEP})?(\d{{4}}{_SEP}\d{{6}}|\d{{5}}{_SEP}\d{{5}})$"),
    "DE": re.compile(rf"^(\+49{_SEP}\d{{2,4}}{_SEP}\d{{5,8}}|0\d{{2,4}}{_SEP}\d{{5,8}})$"),
    "FR": re.compile(
        rf"^(\+33{_SEP}\d{_SEP}\d{{2}}{_SEP}\d{{2}}{_SEP}\d{{2}}{_SEP}\d{{2}}"
        rf"|0\d{_SEP}\d{{2}}{_SEP}\d{{2}}{_SEP}\d{{2}}{_SEP}\d{{2}})$"
    ),
    "NL": re.compile(rf"^(\+31{_SEP}\d{{1,2}}{_SEP}\d{{8}}|0\d{_SEP}\d{{8}})$"),
    "BE": re.compile(rf"^(\+32{_SEP}\d{{1,2}}{_SEP}\d{{6,7}}|0\d{{1,2}}{_SEP}\d{{6,7}})$"),
    "SE": re.compile(rf"^(\+46{_SEP}\d{{2,3}}{_SEP}\d{{6,7}}|0\d{{2,3}}{_SEP}\d{{6,7}})$"),
    "DK": re.compile(rf"^(\+45{_SEP})?\d{{8}}$"),
    "FI": re.compile(rf"^(\+358{_SEP}\d{{1,2}}{_SEP}\d{{6,8}}|0\d{{1,2}}{_SEP}\d{{6,8}})$"),
    "generic": re.compile(rf"^\+\d{{1,3}}{_SEP}\d{{4,14}}$"),
}

# National identifier numbers; only tried when no phone pattern matched.
NATIONAL_ID_PATTERNS: dict[str, re.Pattern[str]] = {
    "US": re.compile(r"^\d{3}-?\d{2}-?\d{4}$"),
    "UK": re.compile(r"^[A-Z]{2}\d{6}[A-Z]$"),
    "DE": re.compile(r"^\d{8}[A-Z]\d{3}$"),
    "FR": re.compile(r"^[12]\d{2}(0[1-9]|1[0-2])\d{10}$"),
    "NL": re.compile(r"^\d{9}$"),
    "BE": re.compile(r"^\d{2}\.\d{2}\.\d{2}-\d{3}\.\d{2}$"),
    "SE": re.compile(r"^\d{6}-?\d{4}$"),
    "DK": re.compile(r"^\d{6}-?\d{4}$"),
    "FI": re.compile(r"^\d{6}[-+A]?\d{3}[0-9A-Z]$"),
}

DATE_STRING_PATTERNS: dict[str, re.Pattern[str]] = {
    "ISO 8601": re.compile(
        r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d{1,3})?(Z|[+-]\d{2}:\d{2})?)?$"
    ),
    "US format": re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}$"),
    "EU format": re.compile(r"^\d{1,2}\.\d{1,2}\.\d{2,4}$"),
    "Long format": re.compile(r"^\w{3,9}\s+\d{1,2},?\s+\d{4}$", re.ASCII),
}


def _percent(part: int, whole: int, digits: int = 2) -> float:
    return round(part / whole * 100, digits) if whole else 0.0


def compute_length_stats(strings: Sequence[str]) -> LengthStats:
    """Length range, mean and histogram."""
    if not strings:
        return LengthStats()
    lengths = [len(s) for s in strings]
    histogram = Counter(lengths)
    # first length to reach the maximal frequency, in order of appearance
    most_common, most_common_count = 0, 0
    for length, count in histogram.items():
        if count > most_common_count:
            most_common, most_common_count = length, count
    return LengthStats(
        min=min(lengths),
        max=max(lengths),
        average=round(sum(lengths) / len(lengths), 2),
        most_common=most_common,
        most_common_count=most_common_count,
        distribution=dict(histogram),
    )


def _top_affixes(counter: Counter[str], total: int) -> list[AffixCount]:
    frequent = [(text, count) for text, count in counter.items() if count >= MIN_AFFIX_OCCURRENCES]
    frequent.sort(key=lambda item: item[1], reverse=True)
    return [
        AffixCount(text=text, count=count, percentage=_percent(count, total))
        for text, count in frequent[:TOP_AFFIXES]
    ]


def detect_prefixes(strings: Sequence[str]) -> list[AffixCount]:
    """Prefixes of length 2..10 shared by at least two values, top 10."""
    counter: Counter[str] = Counter()
    for s in strings:
        for length in range(MIN_AFFIX_LENGTH, min(len(s), MAX_AFFIX_LENGTH) + 1):
            counter[s[:length]] += 1
    return _top_affixes(counter, len(strings))


def detect_suffixes(strings: Sequence[str]) -> list[AffixCount]:
    """Suffixes of length 2..10 shared by at least two values, top 10."""
    counter: Counter[str] = Counter()
    for s in strings:
        for length in range(MIN_AFFIX_LENGTH, min(len(s), MAX_AFFIX_LENGTH) + 1):
            counter[s[-length:]] += 1
    return _top_affixes(counter, len(strings))


def analyze_character_composition(strings: Sequence[str]) -> CharacterComposition:
    """Character classes as a share of every character scanned.

    Alphanumeric means ASCII letters and digits; whitespace is any Unicode
    whitespace; everything else is special. Non-ASCII characters are counted
    independently of the other classes.
    """
    total = alphanumeric = alphabetic = numeric = special = whitespace = 0
    leading = trailing = non_ascii = 0

    for s in strings:
        total += len(s)
        if s and s[0].isspace():
            leading += 1
        if s and s[-1].isspace():
            trailing += 1
        for ch in s:
            if ch in _ASCII_LETTERS:
                alphanumeric += 1
                alphabetic += 1
            elif ch in _ASCII_DIGITS:
                alphanumeric += 1
                numeric += 1
            elif ch.isspace():
                whitespace += 1
            else:
                special += 1
            if ord(ch) > 127:
                non_ascii += 1

    return CharacterComposition(
        alphanumeric_percentage=_percent(alphanumeric, total, 1),
        alphabetic_percentage=_percent(alphabetic, total, 1),
        numeric_percentage=_percent(numeric, total, 1),
        special_char_percentage=_percent(special, total, 1),
        whitespace_percentage=_percent(whitespace, total, 1),
        leading_whitespace_count=leading,
        trailing_whitespace_count=trailing,
        non_ascii_count=non_ascii,
        non_ascii_percentage=_percent(non_ascii, total, 1),
    )


def _is_title_case(s: str) -> bool:
    for word in _WHITESPACE_RUN.split(s):
        if not word:
            continue
        if not ("A" <= word[0] <= "Z") or _HAS_UPPER.search(word[1:]):
            return False
    return True


def analyze_case(strings: Sequence[str]) -> CaseAnalysis:
    """Upper / lower / mixed / title case counts; letterless values are skipped."""
    upper = lower = mixed = title = 0
    for s in strings:
        if not _HAS_LETTER.search(s):
            continue
        has_upper = bool(_HAS_UPPER.search(s))
        has_lower = bool(_HAS_LOWER.search(s))
        if has_upper and not has_lower:
            upper += 1
        elif has_lower and not has_upper:
            lower += 1
        else:
            mixed += 1
            if _is_title_case(s):
                title += 1

    total = len(strings)
    return CaseAnalysis(
        uppercase_count=upper,
        lowercase_count=lower,
        mixed_case_count=mixed,
        title_case_count=title,
        uppercase_percentage=_percent(upper, total, 1),
        lowercase_percentage=_percent(lower, total, 1),
        mixed_case_percentage=_percent(mixed, total, 1),
        title_case_percentage=_percent(title, total, 1),
    )


@dataclass
class _FormatTally:
    count: int = 0
    samples: list[str] = field(default_factory=list)
    breakdown: Counter[str] = field(default_factory=Counter)

    def add(self, value: str, key: str | None = None) -> None:
        self.count += 1
        if len(self.samples) < MAX_FORMAT_SAMPLES:
            self.samples.append(value)
        if key is not None:
            self.breakdown[key] += 1

    def result(self, total: int) -> FormatMatch:
        return FormatMatch(
            count=self.count,
            percentage=_percent(self.count, total),
            samples=self.samples,
            breakdown=dict(self.breakdown),
        )


def _first_match(patterns: dict[str, re.Pattern[str]], value: str) -> str | None:
    for name, pattern in patterns.items():
        if pattern.match(value):
            return name
    return None


def detect_formats(strings: Sequence[str]) -> FormatDetection:
    """Run every structured-format detector over the trimmed values.

    Email, URL and date-string detectors are independent. Phone numbers are
    checked before national identifiers, and a value that matched a phone
    pattern is never also counted as an identifier.
    """
    email = _FormatTally()
    url = _FormatTally()
    phone = _FormatTally()
    national_id = _FormatTally()
    date_string = _FormatTally()

    for raw in strings:
        value = raw.strip()

        if _EMAIL.match(value):
            email.add(value)
        if _URL.match(value):
            url.add(value)

        country = _first_match(PHONE_PATTERNS, value)
        if country is not None:
            phone.add(value, country)
        else:
            country = _first_match(NATIONAL_ID_PATTERNS, value)
            if country is not None:
                national_id.add(value, country)

        pattern_name = _first_match(DATE_STRING_PATTERNS, value)
        if pattern_name is not None:
            date_string.add(value, pattern_name)

    total = len(strings)
    return FormatDetection(
        email=email.result(total),
        phone=phone.result(total),
        national_id=national_id.result(total),
        url=url.result(total),
        date_string=date_string.result(total),
    )


def compute_string_stats(values: Sequence[object]) -> StringStats:
    """Compute pattern statistics for a string column.

    Args:
        values: Column values (raw or CellValue). Absent and empty values are
            counted as nulls; everything else is analyzed in its text form.

    Returns:
        StringStats; ``is_string`` is False when the column has no non-null
        values.
    """
    strings: list[str] = []
    null_count = 0
    for cell in to_cells(values):
        if cell.is_null:
            null_count += 1
        else:
            strings.append(cell.text)

    if not strings:
        return StringStats(is_string=False, null_count=null_count)

    return StringStats(
        is_string=True,
        value_count=len(strings),
        null_count=null_count,
        length_stats=compute_length_stats(strings),
        prefixes=detect_prefixes(strings),
        suffixes=detect_suffixes(strings),
        character_composition=analyze_character_composition(strings),
        case_analysis=analyze_case(strings),
        format_detection=detect_formats(strings),
    )
