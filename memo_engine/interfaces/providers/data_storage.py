from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageProvider(ABC):
    """Interface for key/value byte stores."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> bool:
        """Replace the value stored under key. Returns False on failure."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if something was removed."""
        pass
