"""
Error types raised by the memo engine.

Every error the engine reports derives from MemoEngineError so callers can
catch the whole family at the UI boundary.
"""


class MemoEngineError(Exception):
    """Base class for memo engine errors."""


class ValidationError(MemoEngineError, ValueError):
    """A draft, patch or argument is not acceptable."""


class NotFoundError(MemoEngineError, KeyError):
    """A memo or image attachment id does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return str(self.args[0]) if self.args else ""


class StorageReadError(MemoEngineError):
    """Persisted bytes exist but cannot be parsed as a memo collection."""


class StorageWriteError(MemoEngineError):
    """The storage provider rejected or failed a write."""


__all__ = [
    "MemoEngineError",
    "ValidationError",
    "NotFoundError",
    "StorageReadError",
    "StorageWriteError",
]
