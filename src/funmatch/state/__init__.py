"""Processed-video history for the funmatch CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import MissingLibraryError, StateError

LOGGER = logging.getLogger(__name__)


class HistoryStore:
    """Line-delimited log of video paths that need no further matching."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the history log.
        """
        self._path = path
        self._entries: set[str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> set[str]:
        """Return every recorded path.

        Returns:
            set[str]: Recorded video paths; empty when the log does not exist.

        Raises:
            StateError: If the log exists but cannot be read.
        """
        return set(self._loaded())

    def __contains__(self, path: object) -> bool:
        return str(path) in self._loaded()

    def append(self, path: str) -> bool:
        """Record ``path`` unless it is already present.

        Returns:
            bool: True when a new line was written.

        Raises:
            StateError: If the log cannot be written.
        """
        entries = self._loaded()
        if path in entries:
            return False
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(f"{path}\n")
        except OSError as exc:
            raise StateError(f"Could not append to history log {self._path}: {exc}") from exc
        entries.add(path)
        LOGGER.info("Recorded %s in history.", path)
        return True

    def _loaded(self) -> set[str]:
        if self._entries is not None:
            return self._entries
        entries: set[str] = set()
        if self._path.exists():
            try:
                text = self._path.read_text(encoding="utf-8")
            except OSError as exc:
                raise StateError(f"Could not read history log {self._path}: {exc}") from exc
            entries = {line.strip() for line in text.splitlines() if line.strip()}
        self._entries = entries
        return entries


__all__ = ["HistoryStore", "MissingLibraryError", "StateError"]
