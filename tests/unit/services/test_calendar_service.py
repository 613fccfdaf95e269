"""
Tests for the CalendarService implementation.

This module tests the 42 cell month layout, month arithmetic and the
bucketing of memos by local date.
"""
from datetime import date, datetime

import pytest
from hypothesis import given, strategies as st

from memo_engine.domains import GRID_SIZE, MemoRecord, ValidationError
from memo_engine.services.calendar import (
    CalendarService,
    date_key,
    days_in_month,
    first_weekday_of_month,
    memo_date_key,
)

service = CalendarService()


def local_ms(*args):
    return int(datetime(*args).timestamp() * 1000)


def memo(id, timestamp):
    return MemoRecord(id=id, title=id, timestamp=timestamp)


# ---------------------
# Month arithmetic
# ---------------------


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2024, 1, 29),
        (2023, 1, 28),
        (1900, 1, 28),
        (2000, 1, 29),
        (2024, 0, 31),
        (2024, 3, 30),
        (2024, 11, 31),
    ],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_first_weekday_is_sunday_based():
    # 2024-09-01 was a Sunday, 2024-03-01 a Friday
    assert first_weekday_of_month(2024, 8) == 0
    assert first_weekday_of_month(2024, 2) == 5


def test_invalid_month():
    with pytest.raises(ValidationError):
        days_in_month(2024, 12)
    with pytest.raises(ValidationError):
        first_weekday_of_month(2024, -1)


def test_previous_and_next_month():
    assert service.previous_month(2024, 0).model_dump() == {"year": 2023, "month": 11}
    assert service.next_month(2024, 11).model_dump() == {"year": 2025, "month": 0}
    assert service.next_month(2024, 4).model_dump() == {"year": 2024, "month": 5}


# ---------------------
# Grid layout
# ---------------------


def test_february_2024_grid():
    grid = service.build_month(2024, 1)
    current = grid.current_cells()
    assert grid.days_in_month == 29
    assert [c.day for c in current] == list(range(1, 30))
    # 2024-02-01 was a Thursday
    assert grid.first_weekday == 4
    prev = [c for c in grid.cells if c.position == "prev"]
    assert [c.day for c in prev] == [28, 29, 30, 31]
    assert all(c.month == 0 and c.year == 2024 for c in prev)
    nxt = [c for c in grid.cells if c.position == "next"]
    assert [c.day for c in nxt] == list(range(1, 10))
    assert nxt[0].date_key == "2024-03-01"


def test_month_starting_on_sunday_has_no_leading_cells():
    grid = service.build_month(2024, 8)
    assert grid.cells[0].position == "current"
    assert grid.cells[0].day == 1


def test_january_leading_cells_come_from_previous_year():
    grid = service.build_month(2025, 0)
    # 2025-01-01 was a Wednesday
    assert [c.date_key for c in grid.cells[:3]] == ["2024-12-29", "2024-12-30", "2024-12-31"]


def test_december_trailing_cells_roll_into_next_year():
    grid = service.build_month(2024, 11)
    assert grid.cells[-1].position == "next"
    assert grid.cells[-1].year == 2025
    assert grid.cells[-1].month == 0


def test_highlighted_weekdays():
    grid = service.build_month(2024, 1, highlighted_days={5, 6})
    for cell in grid.cells:
        actual = date(cell.year, cell.month + 1, cell.day)
        assert cell.weekday == actual.isoweekday() % 7
        assert cell.highlighted is (actual.weekday() in {4, 5})


def test_friday_and_saturday_are_highlighted():
    grid = service.build_month(2024, 1, highlighted_days={5, 6})
    by_key = {c.date_key: c for c in grid.cells}
    # 2024-02-01 was a Thursday
    assert (by_key["2024-02-01"].weekday, by_key["2024-02-01"].highlighted) == (4, False)
    assert (by_key["2024-02-02"].weekday, by_key["2024-02-02"].highlighted) == (5, True)
    assert (by_key["2024-02-03"].weekday, by_key["2024-02-03"].highlighted) == (6, True)
    assert (by_key["2024-02-04"].weekday, by_key["2024-02-04"].highlighted) == (0, False)
    # leading cells from January
    assert (by_key["2024-01-28"].weekday, by_key["2024-01-28"].highlighted) == (0, False)
    assert [c.weekday for c in grid.cells[:7]] == list(range(7))


def test_no_highlights_by_default():
    assert not any(c.highlighted for c in service.build_month(2024, 1).cells)


@given(st.integers(min_value=1601, max_value=9998), st.integers(min_value=0, max_value=11))
def test_grid_size_property(year, month):
    grid = service.build_month(year, month)
    assert len(grid.cells) == GRID_SIZE
    assert len(grid.current_cells()) == days_in_month(year, month)
    assert [c.position for c in grid.cells] == sorted(
        (c.position for c in grid.cells), key=["prev", "current", "next"].index
    )
    for index, cell in enumerate(grid.cells):
        actual = date(cell.year, cell.month + 1, cell.day)
        assert cell.weekday == index % 7
        assert cell.weekday == actual.isoweekday() % 7
        assert cell.date_key == actual.isoformat()


# ---------------------
# Memo bucketing
# ---------------------


def test_date_key_uses_local_date():
    ts = local_ms(2024, 3, 15, 9, 0)
    assert memo_date_key(memo("x", ts)) == "2024-03-15"


@pytest.mark.parametrize("hour, minute", [(0, 0), (9, 0), (23, 59)])
def test_date_key_ignores_time_of_day(hour, minute):
    assert memo_date_key(memo("x", local_ms(2024, 3, 15, hour, minute))) == "2024-03-15"


def test_date_key_formats():
    assert date_key(date(2024, 1, 5)) == "2024-01-05"


def test_memo_counts_by_date():
    snapshot = [
        memo("a", local_ms(2024, 3, 15, 9)),
        memo("b", local_ms(2024, 3, 15, 22)),
        memo("c", local_ms(2024, 3, 16, 1)),
    ]
    assert service.memo_counts_by_date(snapshot) == {"2024-03-15": 2, "2024-03-16": 1}
    assert service.memo_counts_by_date([]) == {}


def test_grid_cells_carry_counts():
    snapshot = [
        memo("a", local_ms(2024, 3, 15, 9)),
        memo("b", local_ms(2024, 3, 15, 22)),
        memo("c", local_ms(2024, 2, 29, 12)),
    ]
    grid = service.build_month(2024, 2, snapshot)
    by_key = {c.date_key: c.memo_count for c in grid.cells}
    assert by_key["2024-03-15"] == 2
    # leading cell from February
    assert by_key["2024-02-29"] == 1
    assert by_key["2024-03-01"] == 0


def test_memos_on_date_keeps_snapshot_order():
    snapshot = [
        memo("late", local_ms(2024, 3, 15, 20)),
        memo("other", local_ms(2024, 3, 14, 20)),
        memo("early", local_ms(2024, 3, 15, 8)),
    ]
    assert [m.id for m in service.memos_on_date(snapshot, "2024-03-15")] == ["late", "early"]
    assert [m.id for m in service.memos_on_date(snapshot, date(2024, 3, 14))] == ["other"]
    assert service.memos_on_date(snapshot, "2024-03-16") == []


def test_build_month_rejects_invalid_month():
    with pytest.raises(ValidationError):
        service.build_month(2024, 12)


@pytest.mark.parametrize("year, month", [(1, 0), (9999, 11), (0, 5), (10000, 0)])
def test_build_month_rejects_unrepresentable_months(year, month):
    with pytest.raises(ValidationError):
        service.build_month(year, month)


def test_build_month_at_calendar_edges():
    assert service.build_month(1, 1).cells[0].date_key == "0001-01-28"
    assert service.build_month(9999, 10).cells[-1].date_key.startswith("9999-12-")


# ---------------------
# Undatable timestamps
# ---------------------

FAR_FUTURE_MS = 400_000_000_000_000


def test_undatable_timestamp_has_no_date_key():
    assert memo_date_key(memo("far", FAR_FUTURE_MS)) is None


def test_undatable_memo_is_left_out_of_calendar_views():
    snapshot = [memo("far", FAR_FUTURE_MS), memo("a", local_ms(2024, 3, 15, 9))]
    assert service.memo_counts_by_date(snapshot) == {"2024-03-15": 1}
    grid = service.build_month(2024, 2, snapshot)
    assert sum(c.memo_count for c in grid.cells) == 1
    assert [m.id for m in service.memos_on_date(snapshot, "2024-03-15")] == ["a"]
