from __future__ import annotations

import asyncio
import logging
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from discord.ext import tasks

from .models import Session, SessionRecord

TICK_SECONDS = 1.0

ElapsedListener = Callable[[int], None]


class AttendanceError(Exception):
    """Base class for check-in/check-out precondition failures."""


class AlreadyActive(AttendanceError):
    pass


class NoActiveSession(AttendanceError):
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_elapsed(total_seconds: int) -> str:
    """Render a duration as HH:MM:SS; hours keep counting past 24."""
    safe_seconds = max(0, int(total_seconds))
    hours, remainder = divmod(safe_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


class SessionTimer:
    """Tracks one open session and pushes its elapsed seconds once per tick.

    Wall-clock time is only used to stamp ``started_at``; elapsed time is
    measured on the monotonic clock so clock adjustments never make it jump
    backwards.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        monotonic: Callable[[], float] = time.monotonic,
        tick_seconds: float = TICK_SECONDS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.clock = clock
        self.monotonic = monotonic
        self.tick_seconds = tick_seconds
        self.logger = logger or logging.getLogger(__name__)

        self.elapsed_seconds = 0
        self._session: Session | None = None
        self._anchor = 0.0
        self._ticker: tasks.Loop | None = None
        self._listeners: list[ElapsedListener] = []

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def is_ticking(self) -> bool:
        return self._ticker is not None and self._ticker.is_running()

    def subscribe(self, listener: ElapsedListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ElapsedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def elapsed(self) -> int:
        if self._session is None:
            return 0
        return max(0, int(self.monotonic() - self._anchor))

    def check_in(self) -> Session:
        if self._session is not None:
            raise AlreadyActive("A session is already active")

        self._session = Session(started_at=self.clock())
        self._anchor = self.monotonic()
        self.elapsed_seconds = 0
        self._start_ticking(self._session)
        return self._session

    def check_out(self, session: Session | None = None) -> SessionRecord:
        current = self._session
        if current is None:
            raise NoActiveSession("No session is active")
        if session is not None and session is not current:
            raise NoActiveSession("Given session is not the active one")

        # Stop ticking first so no update can land after the record exists.
        self._stop_ticking()
        delta = timedelta(seconds=self.monotonic() - self._anchor)
        # Records always span a positive interval, even on coarse clocks.
        delta = max(delta, timedelta(microseconds=1))

        self._session = None
        self.elapsed_seconds = 0
        return SessionRecord(
            id=uuid.uuid4().hex,
            start=current.started_at,
            end=current.started_at + delta,
        )

    def close(self) -> None:
        self._stop_ticking()
        self._listeners.clear()

    def _start_ticking(self, session: Session) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.logger.debug("No running event loop; elapsed time will be computed on demand")
            return

        ticker = tasks.loop(seconds=self.tick_seconds)(self._tick)
        ticker.start(session)
        self._ticker = ticker

    def _stop_ticking(self) -> None:
        ticker = self._ticker
        if ticker is None:
            return
        self._ticker = None
        ticker.cancel()

    async def _tick(self, session: Session) -> None:
        # A ticker left over from an earlier session must never publish.
        if session is not self._session:
            return

        elapsed = max(self.elapsed_seconds, self.elapsed())
        self.elapsed_seconds = elapsed
        for listener in list(self._listeners):
            try:
                listener(elapsed)
            except Exception:
                self.logger.exception("Elapsed listener %r failed", listener)
