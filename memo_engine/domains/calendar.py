"""
Calendar domain models.

These models describe the fixed 6x7 month grid and the month cursor used to
step between months.
"""
from typing import List, Literal

from pydantic import BaseModel, Field

GRID_SIZE = 42
WEEKDAYS = 7

MonthPosition = Literal["prev", "current", "next"]


class MonthCursor(BaseModel):
    """A (year, month) pair with 0-indexed month."""

    model_config = {"frozen": True}

    year: int
    month: int = Field(..., ge=0, le=11, description="0-indexed month")

    def previous(self) -> "MonthCursor":
        if self.month == 0:
            return MonthCursor(year=self.year - 1, month=11)
        return MonthCursor(year=self.year, month=self.month - 1)

    def next(self) -> "MonthCursor":
        if self.month == 11:
            return MonthCursor(year=self.year + 1, month=0)
        return MonthCursor(year=self.year, month=self.month + 1)


class CalendarCell(BaseModel):
    """One of the 42 positions of a month grid."""

    year: int
    month: int = Field(..., ge=0, le=11)
    day: int = Field(..., ge=1, le=31)
    position: MonthPosition
    weekday: int = Field(..., ge=0, le=6, description="0=Sunday")
    date_key: str = Field(..., description="YYYY-MM-DD")
    memo_count: int = 0
    highlighted: bool = False


class CalendarMonth(BaseModel):
    """Grid layout for one month."""

    year: int
    month: int = Field(..., ge=0, le=11)
    days_in_month: int
    first_weekday: int = Field(..., ge=0, le=6)
    cells: List[CalendarCell]

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}"

    @property
    def weeks(self) -> List[List[CalendarCell]]:
        """Cells split into rows of seven."""
        return [self.cells[i:i + WEEKDAYS] for i in range(0, len(self.cells), WEEKDAYS)]

    def current_cells(self) -> List[CalendarCell]:
        return [cell for cell in self.cells if cell.position == "current"]


__all__ = [
    "GRID_SIZE",
    "WEEKDAYS",
    "MonthPosition",
    "MonthCursor",
    "CalendarCell",
    "CalendarMonth",
]
