"""Release date detection in file and folder names."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .models import DateParts

# Tried in order; the first shape with a valid calendar date wins.
_DATE_SHAPES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("yyyy-mm-dd", re.compile(r"(?<!\d)(\d{4})[.\-](\d{2})[.\-](\d{2})(?!\d)")),
    ("yy-mm-dd", re.compile(r"(?<!\d)(\d{2})[.\-](\d{2})[.\-](\d{2})(?!\d)")),
    ("yyyymmdd", re.compile(r"(?<!\d)((?:19|20)\d{2})(\d{2})(\d{2})(?!\d)")),
)


@dataclass(frozen=True, slots=True)
class DateMatch:
    """A date located in text together with the span it occupied."""

    parts: DateParts
    start: int
    end: int
    shape: str

    def strip_from(self, text: str) -> str:
        """Return ``text`` with the matched date replaced by a space."""
        return f"{text[: self.start]} {text[self.end :]}"


def find_date(text: str) -> Optional[DateMatch]:
    """Locate the first date in ``text`` by shape priority.

    Two-digit years are promoted to ``20YY``. Matches whose month or day fall
    outside the calendar range are passed over.
    """
    for shape, pattern in _DATE_SHAPES:
        for match in pattern.finditer(text):
            year, month, day = (int(group) for group in match.groups())
            if shape == "yy-mm-dd":
                year += 2000
            if 1 <= month <= 12 and 1 <= day <= 31:
                return DateMatch(
                    parts=DateParts(year=year, month=month, day=day),
                    start=match.start(),
                    end=match.end(),
                    shape=shape,
                )
    return None


__all__ = ["DateMatch", "find_date"]
