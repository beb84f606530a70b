"""Session errors."""


class CopyError(Exception):
    """Raised when a companion script cannot be copied next to its video."""
