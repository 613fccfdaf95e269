"""
Memo Engine - storage and calendar aggregation for a personal memo app.

This package owns the canonical memo collection, serializes every
read-modify-write against a single persisted value, and derives the
filtered list and calendar month views shown by the app.
"""

# Client interface (main entry point)
from memo_engine.client.memo_engine import MemoEngine

# Factory for wiring components
from memo_engine.factories.engine_factory import EngineComponents, MemoEngineFactory

# Domain models and errors
from memo_engine.domains.memos import ImageAttachment, MemoDraft, MemoPatch, MemoRecord
from memo_engine.domains.calendar import CalendarCell, CalendarMonth, MonthCursor
from memo_engine.domains.errors import (
    MemoEngineError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)

# Storage adapters
from memo_engine.adapters.memory_adapter import InMemoryStorageAdapter
from memo_engine.adapters.file_adapter import FileStorageAdapter
from memo_engine.adapters.mongodb_adapter import MongoDBAdapter

# Package metadata
__all__ = [
    # Main client interface
    "MemoEngine",
    # Factories
    "MemoEngineFactory",
    "EngineComponents",
    # Domain
    "MemoRecord",
    "MemoDraft",
    "MemoPatch",
    "ImageAttachment",
    "CalendarCell",
    "CalendarMonth",
    "MonthCursor",
    # Errors
    "MemoEngineError",
    "ValidationError",
    "NotFoundError",
    "StorageReadError",
    "StorageWriteError",
    # Adapters
    "InMemoryStorageAdapter",
    "FileStorageAdapter",
    "MongoDBAdapter",
]
