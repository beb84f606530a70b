"""Studio registry: detection patterns, inference, and persistence."""

from .errors import StudioRegistryError
from .registry import StudioMatch, StudioRegistry
from .store import DEFAULT_STUDIOS, StudioStore

__all__ = [
    "DEFAULT_STUDIOS",
    "StudioMatch",
    "StudioRegistry",
    "StudioRegistryError",
    "StudioStore",
]
