from datetime import datetime, timedelta, timezone

import pytest

from checkin_tracker.timer import SessionTimer

START = datetime(2026, 2, 17, 18, 30, 0, tzinfo=timezone.utc)


class FakeMonotonic:
    def __init__(self, value: float = 1000.0) -> None:
        self.value = value

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture
def timer(clock: FakeClock, monotonic: FakeMonotonic) -> SessionTimer:
    return SessionTimer(clock=clock, monotonic=monotonic, tick_seconds=0.01)
