# Exception types raised by the LFU cache


class LFUCacheError(Exception):
    """Base class for every error raised by LFUCache."""


class InvalidConfigurationError(LFUCacheError, ValueError):
    """Capacity or eviction factor rejected at construction time."""


class KeyAlreadyExistsError(LFUCacheError, KeyError):
    """Insert of a key that is already resident."""


class KeyNotFoundError(LFUCacheError, KeyError):
    """Lookup of a key that is not resident."""


class EmptyCacheError(LFUCacheError, LookupError):
    """Least-frequent query on a cache holding no entries."""
