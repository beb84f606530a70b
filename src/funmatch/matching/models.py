"""Data models produced by extraction and scoring."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DateParts(BaseModel):
    """Calendar date found in a name."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int

    @property
    def compact(self) -> str:
        """Return the six-digit ``YYMMDD`` form used for matching."""
        return f"{self.year % 100:02d}{self.month:02d}{self.day:02d}"


class ExtractionResult(BaseModel):
    """Keywords, studio, and date pulled from one name.

    Attributes:
        keywords: Filtered tokens, first-occurrence order, no duplicates.
        studio: Detected studio name, if any.
        date_compact: Six-digit ``YYMMDD`` token, if a date was found.
        date_raw: The date as a year/month/day triple.
    """

    model_config = ConfigDict(frozen=True)

    keywords: Tuple[str, ...] = ()
    studio: Optional[str] = None
    date_compact: Optional[str] = None
    date_raw: Optional[DateParts] = None

    @property
    def is_empty(self) -> bool:
        """True when nothing usable for matching was extracted."""
        return not self.keywords and self.date_compact is None

    def with_keywords(self, extra: Iterable[str]) -> "ExtractionResult":
        """Return a copy with ``extra`` appended to the keywords, skipping duplicates."""
        merged = list(self.keywords)
        for token in extra:
            if token and token not in merged:
                merged.append(token)
        return self.model_copy(update={"keywords": tuple(merged)})


class ScoredCandidate(BaseModel):
    """A library entry that scored at or above the listing threshold.

    Attributes:
        target_path: Absolute path of the scored entry.
        display_name: Name shown in listings.
        parent_folder: Folder containing the entry.
        score: Sum of the component scores.
        matched_terms: Labels describing which components contributed.
        inferred_studio: Studio label guessed from the name, used for learning only.
    """

    target_path: str
    display_name: str
    parent_folder: str = ""
    score: int = Field(ge=0)
    matched_terms: List[str] = Field(default_factory=list)
    inferred_studio: Optional[str] = None


__all__ = ["DateParts", "ExtractionResult", "ScoredCandidate"]
