# ABOUTME: PartialDate, a calendar date whose year, month and day are each optional.
# ABOUTME: Lets "I read this in 2018" stay distinct from "January 1, 2018".

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

_PARTIAL_DATE_RE = re.compile(
    r"^(?P<year>\d{4})(?:[-/](?P<month>\d{1,2})(?:[-/](?P<day>\d{1,2}))?)?$",
    re.ASCII,
)

_YEAR_RANGE = (1, 9999)
_MONTH_RANGE = (1, 12)
_DAY_RANGE = (1, 31)


def _in_range(value: Any, bounds: tuple[int, int]) -> bool:
    # bool is an int subclass; JSON true/false is never a date part
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return bounds[0] <= value <= bounds[1]


def _component(value: Any, bounds: tuple[int, int]) -> int | None:
    return value if _in_range(value, bounds) else None


@dataclass(frozen=True)
class PartialDate:
    """A date where any of year, month and day may be unknown."""

    year: int | None = None
    month: int | None = None
    day: int | None = None

    def __post_init__(self) -> None:
        parts = (("year", _YEAR_RANGE), ("month", _MONTH_RANGE), ("day", _DAY_RANGE))
        for name, bounds in parts:
            value = getattr(self, name)
            if value is not None and not _in_range(value, bounds):
                msg = f"{name} must be an int in {bounds[0]}..{bounds[1]}, got {value!r}"
                raise ValueError(msg)

    @classmethod
    def from_date(cls, value: date) -> "PartialDate":
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def parse(cls, text: str) -> "PartialDate | None":
        """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` (``/`` also accepted).

        Returns None for anything else, including out-of-range months or days.
        """
        m = _PARTIAL_DATE_RE.match(text.strip())
        if not m:
            return None
        year = int(m.group("year"))
        month = int(m.group("month")) if m.group("month") else None
        day = int(m.group("day")) if m.group("day") else None
        if not _in_range(year, _YEAR_RANGE):
            return None
        if month is not None and not _in_range(month, _MONTH_RANGE):
            return None
        if day is not None and not _in_range(day, _DAY_RANGE):
            return None
        return cls(year=year, month=month, day=day)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PartialDate":
        """Build from a ``{year, month, day}`` mapping; bad parts become absent."""
        return cls(
            year=_component(data.get("year"), _YEAR_RANGE),
            month=_component(data.get("month"), _MONTH_RANGE),
            day=_component(data.get("day"), _DAY_RANGE),
        )

    def to_dict(self) -> dict[str, int]:
        result: dict[str, int] = {}
        if self.year is not None:
            result["year"] = self.year
        if self.month is not None:
            result["month"] = self.month
        if self.day is not None:
            result["day"] = self.day
        return result

    @property
    def is_empty(self) -> bool:
        return self.year is None and self.month is None and self.day is None

    def to_datetime(self) -> datetime | None:
        """Widen to a full timestamp, defaulting a missing month or day to 1."""
        if self.year is None:
            return None
        try:
            return datetime(self.year, self.month or 1, self.day or 1)
        except ValueError:
            return None

    def __str__(self) -> str:
        if self.year is None:
            return "unknown"
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
            if self.day is not None:
                text += f"-{self.day:02d}"
        return text
