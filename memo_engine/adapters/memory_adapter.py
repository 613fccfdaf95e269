"""
In-memory adapter for the memo engine.

Holds values in a dictionary for the lifetime of the process. Used as the
default store and in tests.
"""
from typing import Dict, Optional

from memo_engine.interfaces.providers.data_storage import KeyValueStorageProvider


class InMemoryStorageAdapter(KeyValueStorageProvider):
    """Dictionary-backed implementation of KeyValueStorageProvider."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> bool:
        self._data[key] = bytes(value)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
