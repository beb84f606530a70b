"""Library entry data models."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

_NON_ALNUM = re.compile(r"[\W_]+")


def clean_name(value: str) -> str:
    """Return ``value`` with every non-alphanumeric character removed, case preserved.

    Letters and digits are Unicode-aware, so accented names keep their letters.
    """
    return _NON_ALNUM.sub("", value)


class LibraryEntry(BaseModel):
    """A scanned video or script file.

    Attributes:
        display_name: File name shown to the user and used for matching.
        full_path: Absolute path of the file.
        normalized_name: Alphanumeric-only projection of the file stem.
        parent_folder: Name of the directory containing the file.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    full_path: str
    normalized_name: str
    parent_folder: str = ""

    @classmethod
    def from_path(cls, path: Path) -> "LibraryEntry":
        """Build an entry describing ``path``."""
        return cls(
            display_name=path.name,
            full_path=str(path),
            normalized_name=clean_name(path.stem),
            parent_folder=path.parent.name,
        )

    @property
    def path(self) -> Path:
        return Path(self.full_path)

    def companion_script_path(self, extension: str = ".funscript") -> Path:
        """Return where this video's companion script lives."""
        return self.path.with_suffix(extension)


__all__ = ["LibraryEntry", "clean_name"]
