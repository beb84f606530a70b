"""Pick a single video from the library by free-text query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from funmatch.library.models import LibraryEntry

from .scoring import contains_token


@dataclass(frozen=True, slots=True)
class TargetMatch:
    """The best video for a query and how many query parts it contained."""

    entry: LibraryEntry
    hits: int


def count_hits(query_parts: Sequence[str], name: str) -> int:
    """Count the query parts found in ``name``, one point per part."""
    folded = name.lower()
    hits = 0
    for part in query_parts:
        if contains_token(name, part) or part.lower() in folded:
            hits += 1
    return hits


def resolve_target(query: str, videos: Sequence[LibraryEntry]) -> Optional[TargetMatch]:
    """Return the video whose name contains the most query parts.

    Ties go to the earliest video in library order. ``None`` means no video
    contains any part of the query.
    """
    parts = query.split()
    if not parts:
        return None

    best: Optional[TargetMatch] = None
    for entry in videos:
        hits = count_hits(parts, entry.display_name)
        if best is None or hits > best.hits:
            best = TargetMatch(entry=entry, hits=hits)

    if best is None or best.hits == 0:
        return None
    return best


__all__ = ["TargetMatch", "count_hits", "resolve_target"]
