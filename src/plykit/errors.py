"""
Exception hierarchy for plykit.

UsageError is a violated precondition on the caller's side.
SourceIOError is what decoders raise when the underlying source fails;
plykit never wraps or retries it.
"""


class PlyError(Exception):
    """Base class for all plykit errors."""
    pass


class UsageError(PlyError):
    """Raised when a precondition of the data model or an algorithm is violated."""
    pass


class SourceIOError(PlyError, OSError):
    """Raised by an element source when reading from its backing stream fails."""
    pass


class ConfigError(PlyError):
    """Raised when a configuration document is invalid."""
    pass
