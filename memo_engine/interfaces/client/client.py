from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Union

from memo_engine.domains.calendar import CalendarMonth
from memo_engine.domains.memos import MemoDraft, MemoPatch, MemoRecord


class MemoEngine(ABC):
    """Interface for the MemoEngine client."""

    @abstractmethod
    async def refresh(self) -> List[MemoRecord]:
        """Reload the snapshot from storage."""
        pass

    @abstractmethod
    async def create_memo(self, draft: Union[MemoDraft, Dict[str, Any]]) -> MemoRecord:
        """Create a memo."""
        pass

    @abstractmethod
    async def update_memo(
        self, memo_id: str, patch: Union[MemoPatch, Dict[str, Any]]
    ) -> MemoRecord:
        """Update a memo."""
        pass

    @abstractmethod
    async def toggle_like(self, memo_id: str) -> MemoRecord:
        """Pin or unpin a memo."""
        pass

    @abstractmethod
    async def delete_memos(self, memo_ids: Iterable[str]) -> int:
        """Delete memos by id."""
        pass

    @abstractmethod
    def list_memos(self, query: str = "", category: str = "All") -> List[MemoRecord]:
        """Filtered, sorted view of the current snapshot."""
        pass

    @abstractmethod
    def categories(self) -> List[str]:
        """Category filter options for the current snapshot."""
        pass

    @abstractmethod
    def calendar(self, year: Optional[int] = None, month: Optional[int] = None) -> CalendarMonth:
        """Month grid for the current snapshot."""
        pass
