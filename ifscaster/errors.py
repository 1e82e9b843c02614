"""Error types raised by the IFS editor core."""


class IfsError(Exception):
    """Base class for all ifscaster errors."""


class InvalidSelectionError(IfsError):
    """The active index does not point at a transformation."""


class EmptySetError(IfsError):
    """Removing a transformation would leave the set empty."""


class ConfigError(IfsError):
    """A configuration or key-binding file could not be used."""
