"""Keyword, studio, and date extraction from noisy file names."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Optional

from funmatch.config.models import MatchingSettings
from funmatch.studios import StudioRegistry

from .dates import find_date
from .models import ExtractionResult
from .normalizer import TextNormalizer

LOGGER = logging.getLogger(__name__)


class MetadataExtractor:
    """Turn a display name and its location into matching metadata.

    The extractor runs studio detection and date detection against the raw
    folder-plus-name text before any normalization, then tokenizes the
    normalized remainder into keywords.
    """

    def __init__(
        self,
        settings: MatchingSettings,
        registry: StudioRegistry,
        normalizer: Optional[TextNormalizer] = None,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._normalizer = normalizer or TextNormalizer(settings.cleanup_patterns)
        self._stop_words = {word.lower() for word in settings.stop_words}
        self._ignored_numbers = set(settings.ignored_numbers)

    @property
    def registry(self) -> StudioRegistry:
        return self._registry

    def extract(self, name: str, path: str = "") -> ExtractionResult:
        """Extract keywords, studio, and date from ``name``.

        Args:
            name: Display name of the video, or a free-text query.
            path: Absolute path of the video; empty for free-text queries, in
                which case no parent folder text takes part in detection.

        Returns:
            ExtractionResult: Metadata for scoring. An empty result (no keywords,
            no date) means nothing usable was found.
        """
        parent = PurePath(path).parent.name if path else ""
        text = f"{parent} {name}".strip()

        studio = self._registry.detect(text)
        date = find_date(text)
        if date is not None:
            text = date.strip_from(text)

        studio_name = studio.name if studio else None
        keywords: list[str] = []
        seen: set[str] = set()
        candidates = self._normalizer.normalize(text).split()
        if studio is not None and studio.number:
            candidates.insert(0, studio.number)
        for token in candidates:
            if not self._keep(token, studio_name):
                continue
            folded = token.lower()
            if folded in seen:
                continue
            seen.add(folded)
            keywords.append(token)

        result = ExtractionResult(
            keywords=tuple(keywords),
            studio=studio_name,
            date_compact=date.parts.compact if date else None,
            date_raw=date.parts if date else None,
        )
        LOGGER.debug("Extracted %s from %r", result, name)
        return result

    def _keep(self, token: str, studio: Optional[str]) -> bool:
        folded = token.lower()
        if studio and folded in studio.lower():
            return False
        if folded in self._stop_words:
            return False
        if token.isdigit():
            return token not in self._ignored_numbers and len(token) > 1
        return len(token) >= self._settings.min_keyword_length


__all__ = ["MetadataExtractor"]
