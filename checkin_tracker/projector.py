from __future__ import annotations

import calendar
import math
from collections.abc import Collection

from .history import DayOfMonth, SessionHistory, day_of_month
from .models import DayCell, Session

DEFAULT_GOAL_SESSIONS = 20


def attended_days(
    history: SessionHistory,
    open_session: Session | None = None,
    day_of: DayOfMonth = day_of_month,
) -> set[int]:
    """Days of the month with at least one started session, open or closed.

    Recomputed on every call; history and the open session may have changed
    since the last one.
    """
    days = history.session_days(day_of)
    if open_session is not None:
        days.add(day_of(open_session.started_at))
    return days


def goal_progress(attended: Collection[int], goal_sessions: int = DEFAULT_GOAL_SESSIONS) -> float:
    if goal_sessions <= 0:
        raise ValueError("goal_sessions must be positive")
    return min(len(attended) / goal_sessions, 1.0)


def goal_percent(attended: Collection[int], goal_sessions: int = DEFAULT_GOAL_SESSIONS) -> int:
    return math.floor(goal_progress(attended, goal_sessions) * 100 + 0.5)


def classify_day(day: int, attended: Collection[int], today: int) -> DayCell:
    return DayCell(
        day=day,
        attended=day in attended,
        today=day == today,
        future=day > today,
    )


def month_grid(month_length: int, attended: Collection[int], today: int) -> list[DayCell]:
    return [classify_day(day, attended, today) for day in range(1, month_length + 1)]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]
