"""Video and script library: entries, scanning, and caching."""

from .cache import LibraryCache
from .discovery import LibraryScanner
from .models import LibraryEntry, clean_name

__all__ = ["LibraryCache", "LibraryEntry", "LibraryScanner", "clean_name"]
