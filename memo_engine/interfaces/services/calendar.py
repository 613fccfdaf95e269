from abc import ABC, abstractmethod
from datetime import date
from typing import AbstractSet, Dict, List, Optional, Sequence, Union

from memo_engine.domains.calendar import CalendarMonth
from memo_engine.domains.memos import MemoRecord


class CalendarService(ABC):
    """Interface for month grid layout and memo date bucketing."""

    @abstractmethod
    def build_month(
        self,
        year: int,
        month: int,
        snapshot: Sequence[MemoRecord] = (),
        highlighted_days: Optional[AbstractSet[int]] = None,
    ) -> CalendarMonth:
        """Build the 42 cell grid for a 0-indexed month.

        Args:
            year: Calendar year
            month: Month, 0-indexed
            snapshot: Memos used for per-cell counts
            highlighted_days: Weekday indices to flag as highlighted

        Returns:
            The month grid
        """
        pass

    @abstractmethod
    def memo_counts_by_date(self, snapshot: Sequence[MemoRecord]) -> Dict[str, int]:
        """Count memos per local date key."""
        pass

    @abstractmethod
    def memos_on_date(
        self, snapshot: Sequence[MemoRecord], target: Union[str, date]
    ) -> List[MemoRecord]:
        """Return memos whose local date equals target, keeping snapshot order."""
        pass
