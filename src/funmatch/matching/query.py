"""Read-only check queries against the script library."""

from __future__ import annotations

from typing import Sequence

from funmatch.library.models import LibraryEntry

from .extractor import MetadataExtractor
from .models import ExtractionResult, ScoredCandidate
from .scoring import ScoringEngine


def check_query(
    query: str,
    scripts: Sequence[LibraryEntry],
    *,
    extractor: MetadataExtractor,
    engine: ScoringEngine,
    limit: int = 10,
) -> tuple[ExtractionResult, list[ScoredCandidate]]:
    """Score ``scripts`` as if ``query`` were the name of a video with no path.

    Nothing is copied, recorded, or learned.

    Returns:
        tuple[ExtractionResult, list[ScoredCandidate]]: The metadata derived
        from the query and at most ``limit`` ranked candidates.
    """
    extraction = extractor.extract(query.strip())
    return extraction, engine.rank(extraction, scripts, limit=limit)


__all__ = ["check_query"]
