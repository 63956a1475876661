from datetime import date

from schedule_layout.windows import (
    DateWindow,
    month_grid_window,
    month_window,
    shift_anchor,
    start_of_week,
    week_window,
)


def test_week_window_starts_on_sunday_by_default() -> None:
    window = week_window(date(2025, 3, 5))

    assert window == DateWindow(date(2025, 3, 2), date(2025, 3, 8))
    assert len(window.days()) == 7


def test_week_window_monday_start() -> None:
    assert start_of_week(date(2025, 3, 2), week_starts_on=0) == date(2025, 2, 24)
    assert week_window(date(2025, 3, 5), week_starts_on=0).start == date(2025, 3, 3)


def test_month_and_grid_windows() -> None:
    month = month_window(date(2025, 2, 14))
    grid = month_grid_window(date(2025, 2, 14))

    assert month == DateWindow(date(2025, 2, 1), date(2025, 2, 28))
    assert grid == DateWindow(date(2025, 1, 26), date(2025, 3, 1))
    assert len(grid.days()) % 7 == 0


def test_shift_anchor() -> None:
    assert shift_anchor(date(2025, 3, 5), "week", -1) == date(2025, 2, 26)
    assert shift_anchor(date(2025, 1, 31), "month", 1) == date(2025, 2, 28)
    assert shift_anchor(date(2025, 1, 15), "month", -1) == date(2024, 12, 15)
    assert shift_anchor(date(2024, 12, 15), "month", 13) == date(2026, 1, 15)


def test_windows_stop_at_the_last_representable_day() -> None:
    last = date.max

    assert week_window(last).end == last
    assert month_grid_window(last).end == last
    assert DateWindow(date(9999, 12, 25), last).days()[-1] == last
    assert len(month_window(last).days()) == 31


def test_windows_stop_at_the_first_representable_day() -> None:
    assert start_of_week(date.min) == date.min
    assert month_grid_window(date.min).start == date.min
