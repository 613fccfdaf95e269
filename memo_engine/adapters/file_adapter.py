"""
File system adapter for the memo engine.

Each key is stored as one file under a base directory. Writes go to a
temporary file in the same directory which then replaces the target, so a
reader sees either the old or the new value, never a partial one.
"""
import logging
import os
import re
import tempfile
from typing import Optional

from memo_engine.interfaces.providers.data_storage import KeyValueStorageProvider

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorageAdapter(KeyValueStorageProvider):
    """File-per-key implementation of KeyValueStorageProvider."""

    def __init__(self, base_path: str, suffix: str = ".json"):
        self.base_path = base_path
        self.suffix = suffix
        os.makedirs(self.base_path, exist_ok=True)

    def get_path(self, key: str) -> str:
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.base_path, f"{key}{self.suffix}")

    def get(self, key: str) -> Optional[bytes]:
        path = self.get_path(key)
        if not os.path.exists(path):
            return None
        with open(path, "rb") as f:
            return f.read()

    def set(self, key: str, value: bytes) -> bool:
        path = self.get_path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Error writing {path}: {e}")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            return False
        return True

    def delete(self, key: str) -> bool:
        path = self.get_path(key)
        if not os.path.exists(path):
            return False
        os.unlink(path)
        return True
