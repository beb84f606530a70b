"""JSON persistence for the studio registry."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import StudioRegistryError
from .registry import StudioRegistry

LOGGER = logging.getLogger(__name__)

DEFAULT_STUDIOS: dict[str, list[str]] = {
    "CzechVR": [r"czech[\s._\-]*vr"],
    "VRBangers": [r"vr[\s._\-]*bangers"],
    "BaDoinkVR": [r"badoink[\s._\-]*vr", r"(?<![a-z0-9])badoink(?![a-z0-9])"],
    "WankzVR": [r"wankz[\s._\-]*vr"],
    "VRHush": [r"vr[\s._\-]*hush"],
    "SLROriginals": [r"slr[\s._\-]*originals"],
}


class StudioStore:
    """Load and persist the studio registry as an ordered JSON object."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StudioRegistry:
        """Return the persisted registry.

        A missing file yields the default registry. An unreadable or malformed
        file yields an empty registry so matching proceeds without studio
        detection.
        """
        if not self._path.exists():
            return StudioRegistry.from_mapping(DEFAULT_STUDIOS)

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.warning("Studio registry %s is unreadable (%s); continuing without it.", self._path, exc)
            return StudioRegistry()

        if not isinstance(data, dict) or not all(
            isinstance(patterns, list) and all(isinstance(item, str) for item in patterns)
            for patterns in data.values()
        ):
            LOGGER.warning("Studio registry %s has an unexpected shape; continuing without it.", self._path)
            return StudioRegistry()

        return StudioRegistry.from_mapping(data)

    def save(self, registry: StudioRegistry) -> None:
        """Replace the registry file with the full contents of ``registry``.

        Raises:
            StudioRegistryError: If the file cannot be written.
        """
        payload = json.dumps(registry.as_mapping(), indent=2, ensure_ascii=False)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(payload + "\n", encoding="utf-8")
        except OSError as exc:
            raise StudioRegistryError(f"Could not write studio registry {self._path}: {exc}") from exc


__all__ = ["DEFAULT_STUDIOS", "StudioStore"]
