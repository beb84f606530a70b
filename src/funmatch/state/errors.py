"""State management errors."""


class StateError(Exception):
    """Base exception for history and library cache operations."""


class MissingLibraryError(StateError):
    """Raised when no library cache is available; run `funmatch scan` first."""
