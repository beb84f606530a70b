"""Ordered studio registry with first-match detection and learning."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Sequence

LOGGER = logging.getLogger(__name__)

_NUMBER_AFTER = re.compile(r"^[\s._\-]*(\d+)(?![\d]|[.\-]\d)")
_NUMBER_BEFORE = re.compile(r"(?<![\d.\-])(\d+)[\s._\-]*$")
_LEADING_LABEL = re.compile(r"^\s*([A-Za-z0-9]+)\s*[\s._\-]")
_TOKEN_START = re.compile(r"(?:^|[-_])\s*$")
_TOKEN_END = re.compile(r"^\s*(?:[-_]|$)")


def _is_delimited(compiled: re.Pattern[str], text: str) -> bool:
    """True when a match of ``compiled`` is bounded by hyphens, underscores, or the ends."""
    for match in compiled.finditer(text):
        if match.end() == match.start():
            continue
        if _TOKEN_START.search(text[: match.start()]) and _TOKEN_END.match(text[match.end() :]):
            return True
    return False


@dataclass(frozen=True, slots=True)
class StudioMatch:
    """Result of studio detection.

    Attributes:
        name: Registry name of the detected studio.
        pattern: Pattern that matched.
        number: Numeric token directly adjacent to the match, such as a studio id.
    """

    name: str
    pattern: str
    number: Optional[str] = None


class StudioRegistry:
    """Ordered collection of ``(studio name, detection patterns)`` pairs.

    Detection walks studios in insertion order and stops at the first studio
    with any matching pattern; it never looks for a better match further on.
    """

    def __init__(self, entries: Iterable[tuple[str, Sequence[str]]] = ()) -> None:
        self._entries: list[tuple[str, list[str]]] = []
        self._compiled: dict[str, Optional[re.Pattern[str]]] = {}
        for name, patterns in entries:
            for pattern in patterns:
                self.learn(name, pattern)
            if name not in self.names():
                self._entries.append((name, []))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "StudioRegistry":
        return cls(mapping.items())

    def as_mapping(self) -> dict[str, list[str]]:
        """Return a JSON-ready ordered mapping of studio names to patterns."""
        return {name: list(patterns) for name, patterns in self._entries}

    def names(self) -> list[str]:
        return [name for name, _ in self._entries]

    def patterns_for(self, name: str) -> list[str]:
        for entry_name, patterns in self._entries:
            if entry_name == name:
                return list(patterns)
        return []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        return iter((name, list(patterns)) for name, patterns in self._entries)

    def detect(self, text: str) -> Optional[StudioMatch]:
        """Return the first studio whose patterns match ``text``.

        A number separated from the match only by separators (``CzechVR_741``
        or ``741 CzechVR``) is captured as the studio number.
        """
        for name, patterns in self._entries:
            for pattern in patterns:
                compiled = self._compile(pattern)
                if compiled is None:
                    continue
                match = compiled.search(text)
                if match is None:
                    continue
                number = _NUMBER_AFTER.match(text[match.end() :])
                if number is None:
                    number = _NUMBER_BEFORE.search(text[: match.start()])
                return StudioMatch(
                    name=name,
                    pattern=pattern,
                    number=number.group(1) if number else None,
                )
        return None

    def infer(self, candidate_name: str) -> Optional[str]:
        """Guess which studio produced ``candidate_name``.

        Known patterns are tried as a name prefix or as a token delimited by
        hyphens or underscores. Failing that, the leading alphanumeric run
        before the first separator is returned as an unregistered label.
        """
        for name, patterns in self._entries:
            for pattern in patterns:
                compiled = self._compile(pattern)
                if compiled is None:
                    continue
                if compiled.match(candidate_name) or _is_delimited(compiled, candidate_name):
                    return name

        leading = _LEADING_LABEL.match(candidate_name)
        if leading and not leading.group(1).isdigit():
            return leading.group(1)
        return None

    def learn(self, name: str, pattern: str) -> bool:
        """Append ``pattern`` under ``name``, creating the studio when new.

        Returns:
            bool: False when the studio already carries the pattern.
        """
        for entry_name, patterns in self._entries:
            if entry_name == name:
                if pattern in patterns:
                    return False
                patterns.append(pattern)
                return True
        self._entries.append((name, [pattern]))
        return True

    def _compile(self, pattern: str) -> Optional[re.Pattern[str]]:
        if pattern not in self._compiled:
            try:
                self._compiled[pattern] = re.compile(pattern, re.IGNORECASE)
            except re.error as exc:
                LOGGER.warning("Ignoring invalid studio pattern %r: %s", pattern, exc)
                self._compiled[pattern] = None
        return self._compiled[pattern]


__all__ = ["StudioMatch", "StudioRegistry"]
