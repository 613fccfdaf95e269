"""
Weekday highlight preference.

Holds the set of weekday indices (0=Sunday .. 6=Saturday) drawn in the
alternate style. Lives only for the session.
"""
from typing import FrozenSet, Iterable, Optional

from memo_engine.domains.errors import ValidationError

DEFAULT_HIGHLIGHTED_DAYS = frozenset({5, 6})


def _check_weekday(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 6:
        raise ValidationError(f"Weekday index must be an integer 0-6, got {index!r}")
    return index


class DayHighlightSet:
    """Toggleable set of highlighted weekday indices."""

    def __init__(self, days: Optional[Iterable[int]] = None):
        initial = DEFAULT_HIGHLIGHTED_DAYS if days is None else days
        self._days = {_check_weekday(day) for day in initial}

    def toggle(self, index: int) -> bool:
        """Add index if absent, remove it if present.

        Returns:
            True if the day is highlighted after the call
        """
        _check_weekday(index)
        if index in self._days:
            self._days.remove(index)
            return False
        self._days.add(index)
        return True

    def reset(self) -> None:
        self._days = set(DEFAULT_HIGHLIGHTED_DAYS)

    @property
    def days(self) -> FrozenSet[int]:
        return frozenset(self._days)

    def __contains__(self, index: object) -> bool:
        return index in self._days

    def __iter__(self):
        return iter(sorted(self._days))

    def __len__(self) -> int:
        return len(self._days)


__all__ = ["DEFAULT_HIGHLIGHTED_DAYS", "DayHighlightSet"]
