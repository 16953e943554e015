from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from .history import SessionHistory
from .models import DayCell, Session, SessionRecord
from .projector import DEFAULT_GOAL_SESSIONS, attended_days, days_in_month, goal_percent, month_grid
from .timer import SessionTimer


class AttendanceState:
    """One member's attendance: an open-session timer plus completed history.

    All mutation goes through ``check_in``/``check_out``; everything else is
    derived from the current snapshot on each call.
    """

    def __init__(
        self,
        tz: ZoneInfo,
        *,
        goal_sessions: int = DEFAULT_GOAL_SESSIONS,
        timer: SessionTimer | None = None,
        history: SessionHistory | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if goal_sessions <= 0:
            raise ValueError("goal_sessions must be positive")

        self.tz = tz
        self.goal_sessions = goal_sessions
        self.timer = timer or SessionTimer()
        self.history = history if history is not None else SessionHistory()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def open_session(self) -> Session | None:
        return self.timer.session

    def local_day(self, value: datetime) -> int:
        return value.astimezone(self.tz).day

    def check_in(self) -> Session:
        session = self.timer.check_in()
        self.logger.debug("Checked in at %s", session.started_at.isoformat())
        return session

    def check_out(self) -> SessionRecord:
        record = self.timer.check_out()
        self.history.append(record)
        self.logger.debug("Checked out: record=%s", record.id)
        return record

    def attended_days(self) -> set[int]:
        return attended_days(self.history, self.open_session, day_of=self.local_day)

    def progress_percent(self) -> int:
        return goal_percent(self.attended_days(), self.goal_sessions)

    def calendar(self, now: datetime | None = None) -> list[DayCell]:
        local_now = (now or self.timer.clock()).astimezone(self.tz)
        month_length = days_in_month(local_now.year, local_now.month)
        return month_grid(month_length, self.attended_days(), local_now.day)

    def close(self) -> None:
        self.timer.close()
