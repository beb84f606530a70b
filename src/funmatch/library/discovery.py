"""Library discovery utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from .models import LibraryEntry

LOGGER = logging.getLogger(__name__)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


class LibraryScanner:
    """Discover video or script files under one or more roots."""

    def __init__(
        self,
        *,
        extensions: Iterable[str],
        recursive: bool = True,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.extensions = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
        self.recursive = recursive
        self._excluded_prefixes: list[Path] = []
        self._excluded_names: set[str] = set()
        for value in exclude_paths:
            if "/" in value or "\\" in value:
                self._excluded_prefixes.append(Path(value).expanduser().resolve())
            else:
                self._excluded_names.add(value.lower())

    def scan(self, roots: Iterable[Path]) -> list[LibraryEntry]:
        """Return entries for every matching file under ``roots``, in scan order."""
        entries: list[LibraryEntry] = []
        seen: set[Path] = set()
        for root in roots:
            root = root.expanduser().resolve()
            if not root.exists():
                LOGGER.warning("Library root %s does not exist; skipping.", root)
                continue
            for path in self._iter_files(root):
                if path in seen:
                    continue
                seen.add(path)
                entries.append(LibraryEntry.from_path(path))
        return entries

    def _iter_files(self, root: Path) -> Iterator[Path]:
        if root.is_file():
            if root.suffix.lower() in self.extensions:
                yield root
            return

        try:
            children = sorted(root.iterdir(), key=lambda child: child.name.lower())
        except OSError as exc:
            LOGGER.warning("Cannot list %s: %s", root, exc)
            return

        for child in children:
            if _is_hidden(Path(child.name)) or self._is_excluded(child):
                continue
            if child.is_dir():
                if self.recursive:
                    yield from self._iter_files(child)
                continue
            if child.is_file() and child.suffix.lower() in self.extensions:
                yield child

    def _is_excluded(self, path: Path) -> bool:
        if path.name.lower() in self._excluded_names:
            return True
        return any(path == prefix or prefix in path.parents for prefix in self._excluded_prefixes)


__all__ = ["LibraryScanner"]
