"""Text normalization applied before keyword tokenization."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

LOGGER = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[._\-]+")
_ROOT_PREFIX = re.compile(r"^\s*(?:[A-Za-z]:)?[\\/]+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class CleanupRule:
    """A single case-insensitive replacement applied during normalization."""

    pattern: re.Pattern[str]
    replacement: str = " "

    @classmethod
    def compile(cls, expression: str, replacement: str = " ") -> "CleanupRule":
        return cls(re.compile(expression, re.IGNORECASE), replacement)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class TextNormalizer:
    """Strip separators, root prefixes, and configured noise from raw names.

    Rules run in the order given; each sees the output of the previous one.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self._rules: list[CleanupRule] = []
        for expression in patterns:
            try:
                self._rules.append(CleanupRule.compile(expression))
            except re.error as exc:
                LOGGER.warning("Ignoring invalid cleanup pattern %r: %s", expression, exc)

    @property
    def rules(self) -> Sequence[CleanupRule]:
        return tuple(self._rules)

    def normalize(self, text: str) -> str:
        """Return ``text`` ready for whitespace tokenization.

        Args:
            text: Raw folder and file name text.

        Returns:
            str: Normalized text with single spaces between words.
        """
        if not text:
            return ""
        cleaned = _SEPARATORS.sub(" ", text)
        cleaned = _ROOT_PREFIX.sub(" ", cleaned)
        for rule in self._rules:
            cleaned = rule.apply(cleaned)
        return _WHITESPACE.sub(" ", cleaned).strip()


__all__ = ["CleanupRule", "TextNormalizer"]
