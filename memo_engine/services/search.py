"""
Search service implementation.

Derives the memo list shown to the user from a snapshot: category and text
filtering followed by pinned-first, newest-first ordering. No side effects.
"""
from typing import Iterable, List, Sequence

from memo_engine.domains.memos import MemoRecord
from memo_engine.interfaces.services.search import SearchService as SearchServiceInterface

ALL_CATEGORIES = "All"


def matches(memo: MemoRecord, query: str = "", category: str = ALL_CATEGORIES) -> bool:
    """Return True if memo passes the category and text filters."""
    if category != ALL_CATEGORIES and memo.category != category:
        return False
    if not query:
        return True
    needle = query.lower()
    return needle in memo.title.lower() or needle in memo.content.lower()


def sort_memos(memos: Iterable[MemoRecord]) -> List[MemoRecord]:
    """Pinned memos first, then descending timestamp. Stable for ties."""
    return sorted(memos, key=lambda memo: (not memo.is_liked, -memo.timestamp))


class SearchService(SearchServiceInterface):
    """Service for filtering, sorting and listing categories of memos."""

    def search(
        self, snapshot: Sequence[MemoRecord], query: str = "", category: str = ALL_CATEGORIES
    ) -> List[MemoRecord]:
        return sort_memos(memo for memo in snapshot if matches(memo, query, category))

    def categories(self, snapshot: Sequence[MemoRecord]) -> List[str]:
        """Return "All" followed by categories in order of first appearance."""
        seen = {}
        for memo in snapshot:
            if memo.category and memo.category not in seen:
                seen[memo.category] = None
        return [ALL_CATEGORIES] + [c for c in seen if c != ALL_CATEGORIES]


__all__ = ["ALL_CATEGORIES", "SearchService", "matches", "sort_memos"]
