from datetime import datetime, timedelta, timezone

import pytest

from checkin_tracker.history import SessionHistory
from checkin_tracker.models import DayCell, Session, SessionRecord
from checkin_tracker.projector import (
    attended_days,
    classify_day,
    days_in_month,
    goal_percent,
    goal_progress,
    month_grid,
)


def history_on_days(*days: int) -> SessionHistory:
    history = SessionHistory()
    for day in days:
        start = datetime(2026, 2, day, 9, 0, tzinfo=timezone.utc)
        history.append(SessionRecord(id=f"d{day}", start=start, end=start + timedelta(hours=1)))
    return history


def test_attended_days_includes_open_session() -> None:
    history = history_on_days(3, 17)
    open_session = Session(started_at=datetime(2026, 2, 20, 7, 0, tzinfo=timezone.utc))

    assert attended_days(history, open_session) == {3, 17, 20}
    assert attended_days(history, None) == {3, 17}


def test_attended_days_is_recomputed_each_call() -> None:
    history = history_on_days(3, 17)
    open_session = Session(started_at=datetime(2026, 2, 20, 7, 0, tzinfo=timezone.utc))

    first = attended_days(history, open_session)
    second = attended_days(history, open_session)
    assert first == second

    first.add(31)
    assert attended_days(history, open_session) == {3, 17, 20}

    start = datetime(2026, 2, 25, 9, 0, tzinfo=timezone.utc)
    history.append(SessionRecord(id="new", start=start, end=start + timedelta(minutes=5)))
    assert attended_days(history, open_session) == {3, 17, 20, 25}


def test_goal_progress_is_clamped() -> None:
    assert goal_progress(set(range(1, 26)), 20) == 1.0
    assert goal_percent(set(range(1, 26)), 20) == 100
    assert goal_percent({1, 2, 3}, 20) == 15
    assert goal_progress(set(), 20) == 0.0


def test_goal_percent_rounds_half_up() -> None:
    assert goal_percent({1}, 8) == 13


def test_goal_progress_rejects_non_positive_goal() -> None:
    with pytest.raises(ValueError):
        goal_progress({1}, 0)


def test_classify_day_flags_are_independent() -> None:
    assert classify_day(10, {10}, 10) == DayCell(day=10, attended=True, today=True, future=False)
    assert classify_day(11, {10}, 10) == DayCell(day=11, attended=False, today=False, future=True)
    assert classify_day(2, set(), 10) == DayCell(day=2, attended=False, today=False, future=False)


def test_month_grid_covers_every_day() -> None:
    cells = month_grid(28, {1, 14}, 14)

    assert [cell.day for cell in cells] == list(range(1, 29))
    assert [cell.day for cell in cells if cell.attended] == [1, 14]
    assert [cell.day for cell in cells if cell.today] == [14]
    assert sum(cell.future for cell in cells) == 14


def test_days_in_month() -> None:
    assert days_in_month(2026, 2) == 28
    assert days_in_month(2028, 2) == 29
    assert days_in_month(2026, 10) == 31
