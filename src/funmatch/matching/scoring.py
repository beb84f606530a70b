"""Weighted scoring of library candidates against extracted metadata."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from funmatch.config.models import MatchingSettings
from funmatch.library.models import LibraryEntry, clean_name
from funmatch.studios import StudioRegistry

from .models import ExtractionResult, ScoredCandidate

_NON_DIGIT = re.compile(r"\D+")
# Word characters are Unicode letters and digits, matching clean_name.
_WORD_CHAR = r"[^\W_]"


def contains_token(name: str, keyword: str) -> bool:
    """True when ``keyword`` occurs in ``name`` bounded by non-alphanumerics or the ends."""
    pattern = rf"(?<!{_WORD_CHAR}){re.escape(keyword.lower())}(?!{_WORD_CHAR})"
    return re.search(pattern, name.lower()) is not None


class ScoringEngine:
    """Score and rank library entries for one extraction result.

    Each component is computed independently and summed, so scores never go
    negative and adding a keyword can only keep or raise a candidate's total.
    """

    def __init__(
        self,
        settings: MatchingSettings,
        registry: Optional[StudioRegistry] = None,
    ) -> None:
        self._settings = settings
        self._registry = registry

    def score(self, extraction: ExtractionResult, entry: LibraryEntry) -> tuple[int, list[str]]:
        """Return the total score of ``entry`` and the terms that contributed."""
        settings = self._settings
        name = entry.display_name
        folded = name.lower()
        total = 0
        terms: list[str] = []

        if extraction.date_compact and extraction.date_compact in _NON_DIGIT.sub("", name):
            total += settings.date_points
            terms.append(f"date:{extraction.date_compact}")

        if extraction.studio and extraction.studio.lower() in folded:
            total += settings.studio_points
            terms.append(f"studio:{extraction.studio}")

        clean = (entry.normalized_name or clean_name(name)).lower()
        for keyword in extraction.keywords:
            lowered = keyword.lower()
            if contains_token(name, lowered):
                total += settings.exact_points
                terms.append(f"exact:{keyword}")
            elif lowered in folded:
                total += settings.partial_points
                terms.append(f"partial:{keyword}")
            else:
                compact = clean_name(lowered)
                if compact and compact in clean:
                    if len(compact) >= settings.strong_keyword_length:
                        total += settings.clean_strong_points
                    else:
                        total += settings.clean_weak_points
                    terms.append(f"clean:{keyword}")

        return total, terms

    def rank(
        self,
        extraction: ExtractionResult,
        entries: Iterable[LibraryEntry],
        *,
        limit: Optional[int] = None,
        infer_studios: bool = False,
    ) -> list[ScoredCandidate]:
        """Score every entry and return those at or above the threshold.

        Args:
            extraction: Metadata to match against.
            entries: Candidate library in scan order.
            limit: Maximum number of candidates to return.
            infer_studios: Attach a guessed studio label to each candidate.

        Returns:
            list[ScoredCandidate]: Candidates by descending score; equal scores
            keep library order.
        """
        candidates: list[ScoredCandidate] = []
        for entry in entries:
            total, terms = self.score(extraction, entry)
            if total < self._settings.min_score:
                continue
            inferred = None
            if infer_studios and self._registry is not None:
                inferred = self._registry.infer(entry.display_name)
            candidates.append(
                ScoredCandidate(
                    target_path=entry.full_path,
                    display_name=entry.display_name,
                    parent_folder=entry.parent_folder,
                    score=total,
                    matched_terms=terms,
                    inferred_studio=inferred,
                )
            )

        candidates.sort(key=lambda candidate: candidate.score, reverse=True)
        if limit is not None:
            return candidates[:limit]
        return candidates


__all__ = ["ScoringEngine", "contains_token"]
