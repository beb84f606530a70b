"""Studio registry errors."""


class StudioRegistryError(Exception):
    """Raised when the studio registry cannot be persisted."""
