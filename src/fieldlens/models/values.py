"""Cell value model for in-memory datasets.

A dataset is a sequence of rows, each row a mapping of field name to a raw
Python value. Every raw value is wrapped in a ``CellValue`` that records which
kind of value it is, so the analyzers discriminate on ``kind`` instead of
probing types at every call site.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

Row = Mapping[str, object]
Dataset = Sequence[Row]


class ValueKind(StrEnum):
    """Tag of a cell value."""

    ABSENT = "absent"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"


def format_number(number: float) -> str:
    """Render a number the way it appears in distribution tables.

    Integral floats drop their fractional part (``1.0`` -> ``"1"``) so that
    ``1`` and ``1.0`` share one distribution entry.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(2.5)
        '2.5'
    """
    if isinstance(number, float) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return str(number)


@dataclass(frozen=True, slots=True)
class CellValue:
    """One tagged cell value.

    ``raw`` keeps the original object; ``kind`` says how to read it.
    """

    kind: ValueKind
    raw: object

    @classmethod
    def of(cls, raw: object) -> CellValue:
        """Tag a raw Python value."""
        if isinstance(raw, CellValue):
            return raw
        if raw is None:
            return cls(ValueKind.ABSENT, None)
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            if isinstance(raw, float) and math.isnan(raw):
                return cls(ValueKind.ABSENT, None)
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, (date, datetime)):
            # pandas.NaT is a datetime subclass that compares unequal to itself
            if raw != raw:  # noqa: PLR0124
                return cls(ValueKind.ABSENT, None)
            return cls(ValueKind.DATE, raw)
        if isinstance(raw, str):
            return cls(ValueKind.TEXT, raw)
        # numpy scalars and other number-likes
        if hasattr(raw, "item"):
            return cls.of(raw.item())
        return cls(ValueKind.TEXT, str(raw))

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    @property
    def is_empty(self) -> bool:
        """Present but blank (the empty string)."""
        return self.kind is ValueKind.TEXT and self.raw == ""

    @property
    def is_null(self) -> bool:
        """Absent or empty: the values shown as ``(NULL/Empty)``."""
        return self.is_absent or self.is_empty

    @property
    def text(self) -> str:
        """Canonical string form of the value."""
        if self.kind is ValueKind.ABSENT:
            return ""
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.raw else "false"
        if self.kind is ValueKind.NUMBER:
            return format_number(self.raw)  # type: ignore[arg-type]
        if self.kind is ValueKind.DATE:
            return self.raw.isoformat()  # type: ignore[union-attr]
        return str(self.raw)

    @property
    def number(self) -> float | None:
        """The finite number this value converts to, or None.

        Numbers convert directly; text converts after trimming surrounding
        whitespace. Booleans, dates and blank text never convert.
        """
        if self.kind is ValueKind.NUMBER:
            number = float(self.raw)  # type: ignore[arg-type]
        elif self.kind is ValueKind.TEXT:
            stripped = str(self.raw).strip()
            # float() accepts "1_000"; a digit separator is not a number here
            if not stripped or "_" in stripped:
                return None
            try:
                number = float(stripped)
            except ValueError:
                return None
        else:
            return None
        if not math.isfinite(number):
            return None
        return number

    @property
    def is_numeric(self) -> bool:
        return self.number is not None

    @property
    def is_pure_numeric_text(self) -> bool:
        """True when the value is exactly the canonical rendering of a number.

        ``"12"`` and ``"1.5"`` are pure numeric text; ``"007"``, ``"1e3"`` and
        ``" 12"`` are not.
        """
        number = self.number
        if number is None:
            return False
        if self.kind is ValueKind.NUMBER:
            return True
        return self.text == format_number(number)


def to_cells(values: Iterable[object]) -> list[CellValue]:
    """Wrap raw values as CellValues (already-wrapped values pass through)."""
    return [CellValue.of(v) for v in values]


def column_values(data: Dataset, field_name: str) -> list[CellValue]:
    """Extract one field as a list of CellValues.

    Rows missing the key read as absent.
    """
    return [CellValue.of(row.get(field_name)) for row in data]
