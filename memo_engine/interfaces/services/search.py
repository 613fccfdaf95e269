from abc import ABC, abstractmethod
from typing import List, Sequence

from memo_engine.domains.memos import MemoRecord


class SearchService(ABC):
    """Interface for deriving display lists from a memo snapshot."""

    @abstractmethod
    def search(
        self, snapshot: Sequence[MemoRecord], query: str = "", category: str = "All"
    ) -> List[MemoRecord]:
        """Filter and sort a snapshot for display.

        Args:
            snapshot: Memo collection to derive from
            query: Case-insensitive text matched against title and content
            category: Category name or the "All" sentinel

        Returns:
            Matching memos, pinned first, newest first
        """
        pass

    @abstractmethod
    def categories(self, snapshot: Sequence[MemoRecord]) -> List[str]:
        """Return "All" followed by distinct non-empty categories."""
        pass
