"""Companion script copying."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import CopyError

LOGGER = logging.getLogger(__name__)


class FileCopier:
    """Copy a chosen script to a video's companion-script path, overwriting."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def copy(self, source: Path, destination: Path) -> None:
        """Copy ``source`` to ``destination``.

        Args:
            source: Script file selected by the user.
            destination: Companion-script path of the video.

        Raises:
            CopyError: If the source vanished or the destination is not writable.
        """
        if self.dry_run:
            LOGGER.info("Dry run: would copy %s -> %s", source, destination)
            return
        if not source.is_file():
            raise CopyError(f"Source script is missing: {source}")
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise CopyError(f"Could not copy {source} -> {destination}: {exc}") from exc
        LOGGER.info("Copied %s -> %s", source, destination)


__all__ = ["FileCopier"]
