"""JSON persistence for scanned library entries."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from funmatch.state.errors import MissingLibraryError, StateError

from .models import LibraryEntry


class LibraryCache:
    """Store the video and script populations between runs."""

    def __init__(self, directory: Path) -> None:
        """Initialize the cache.

        Args:
            directory: Directory holding ``videos.json`` and ``scripts.json``.
        """
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def save_videos(self, entries: Sequence[LibraryEntry]) -> Path:
        return self._save("videos", entries)

    def save_scripts(self, entries: Sequence[LibraryEntry]) -> Path:
        return self._save("scripts", entries)

    def load_videos(self) -> list[LibraryEntry]:
        return self._load("videos")

    def load_scripts(self) -> list[LibraryEntry]:
        return self._load("scripts")

    def _save(self, kind: str, entries: Sequence[LibraryEntry]) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._directory / f"{kind}.json"
        payload = {
            "scanned_at": datetime.now(timezone.utc).isoformat(),
            "entries": [entry.model_dump(mode="json") for entry in entries],
        }
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    def _load(self, kind: str) -> list[LibraryEntry]:
        """Return cached entries of ``kind``.

        Raises:
            MissingLibraryError: If the library has never been scanned.
            StateError: If the cache file cannot be parsed.
        """
        path = self._directory / f"{kind}.json"
        if not path.exists():
            raise MissingLibraryError(f"No {kind} cache at {path}. Run `funmatch scan` first.")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return [LibraryEntry.model_validate(item) for item in data["entries"]]
        except (json.JSONDecodeError, KeyError, TypeError, ValidationError) as exc:
            raise StateError(f"Invalid {kind} cache data: {exc}") from exc


__all__ = ["LibraryCache"]
