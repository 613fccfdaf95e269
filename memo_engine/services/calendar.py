"""
Calendar service implementation.

Lays out a month as a fixed grid of 42 cells (six weeks of seven days) and
buckets memos by the local calendar date of their timestamp.

Weekday indices are Sunday-first: 0 is Sunday and 6 is Saturday.
"""
import calendar
import logging
from collections import Counter
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import AbstractSet, Dict, List, Optional, Sequence, Union

from memo_engine.domains.calendar import (
    GRID_SIZE,
    WEEKDAYS,
    CalendarCell,
    CalendarMonth,
    MonthCursor,
)
from memo_engine.domains.errors import ValidationError
from memo_engine.domains.memos import MemoRecord
from memo_engine.interfaces.services.calendar import CalendarService as CalendarServiceInterface

logger = logging.getLogger(__name__)


def _check_month(year: int, month: int) -> None:
    if not 0 <= month <= 11:
        raise ValidationError(f"Month must be between 0 and 11, got {month}")
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}")


def days_in_month(year: int, month: int) -> int:
    """Number of days in a 0-indexed month of the Gregorian calendar."""
    _check_month(year, month)
    return calendar.monthrange(year, month + 1)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Sunday-first weekday index of day 1 of a 0-indexed month."""
    _check_month(year, month)
    # calendar.monthrange is Monday-first
    return (calendar.monthrange(year, month + 1)[0] + 1) % WEEKDAYS


def date_key(value: Union[date, datetime]) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def memo_date_key(memo: MemoRecord) -> Optional[str]:
    """Local-time YYYY-MM-DD key of a memo's timestamp.

    Returns None when the timestamp has no representable local date.
    """
    try:
        return date_key(datetime.fromtimestamp(memo.timestamp / 1000))
    except (ValueError, OverflowError, OSError) as e:
        logger.warning(f"Memo {memo.id} has an undatable timestamp {memo.timestamp}: {e}")
        return None


class CalendarService(CalendarServiceInterface):
    """Service for month grids and memo-per-day lookups."""

    def build_month(
        self,
        year: int,
        month: int,
        snapshot: Sequence[MemoRecord] = (),
        highlighted_days: Optional[AbstractSet[int]] = None,
    ) -> CalendarMonth:
        """Build the 42 cell grid for a 0-indexed month.

        Leading cells come from the previous month, then every day of the
        month, then days of the next month until the grid is full. Column 0
        is Sunday.

        Raises:
            ValidationError: If the month, or a neighbouring month, lies
                outside the years datetime.date supports
        """
        if (year, month) <= (MINYEAR, 0) or (year, month) >= (MAXYEAR, 11):
            raise ValidationError(
                f"Months from {MINYEAR}-02 to {MAXYEAR}-11 are supported, got {year}-{month + 1:02d}"
            )
        total = days_in_month(year, month)
        cursor = MonthCursor(year=year, month=month)
        prev_cursor = cursor.previous()
        next_cursor = cursor.next()

        first = first_weekday_of_month(year, month)
        prev_total = days_in_month(prev_cursor.year, prev_cursor.month)
        counts = self.memo_counts_by_date(snapshot)
        highlighted = highlighted_days or frozenset()

        days = []
        for i in range(first):
            days.append((prev_cursor, prev_total - first + 1 + i, "prev"))
        for day in range(1, total + 1):
            days.append((cursor, day, "current"))
        for day in range(1, GRID_SIZE - len(days) + 1):
            days.append((next_cursor, day, "next"))

        cells: List[CalendarCell] = []
        for index, (owner, day, position) in enumerate(days):
            key = date_key(date(owner.year, owner.month + 1, day))
            weekday = index % WEEKDAYS
            cells.append(
                CalendarCell(
                    year=owner.year,
                    month=owner.month,
                    day=day,
                    position=position,
                    weekday=weekday,
                    date_key=key,
                    memo_count=counts.get(key, 0),
                    highlighted=weekday in highlighted,
                )
            )

        return CalendarMonth(
            year=year,
            month=month,
            days_in_month=total,
            first_weekday=first,
            cells=cells,
        )

    def memo_counts_by_date(self, snapshot: Sequence[MemoRecord]) -> Dict[str, int]:
        keys = (memo_date_key(memo) for memo in snapshot)
        return dict(Counter(key for key in keys if key is not None))

    def memos_on_date(
        self, snapshot: Sequence[MemoRecord], target: Union[str, date]
    ) -> List[MemoRecord]:
        """Return memos dated target, in snapshot order.

        Args:
            snapshot: Memo collection, usually already sorted for display
            target: A YYYY-MM-DD key or a date

        Returns:
            Matching memos; the snapshot's order is not changed
        """
        key = target if isinstance(target, str) else date_key(target)
        result = [memo for memo in snapshot if memo_date_key(memo) == key]
        logger.debug(f"{len(result)} memo(s) on {key}")
        return result

    def previous_month(self, year: int, month: int) -> MonthCursor:
        return MonthCursor(year=year, month=month).previous()

    def next_month(self, year: int, month: int) -> MonthCursor:
        return MonthCursor(year=year, month=month).next()


__all__ = [
    "CalendarService",
    "date_key",
    "days_in_month",
    "first_weekday_of_month",
    "memo_date_key",
]
