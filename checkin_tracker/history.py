from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterator

from .models import SessionRecord

DayOfMonth = Callable[[datetime], int]

_MS_PER_MINUTE = 60_000


def day_of_month(value: datetime) -> int:
    return value.day


def duration_minutes(record: SessionRecord) -> int:
    """Whole minutes spanned by a record, halves rounding up."""
    total_ms = (record.end - record.start) // timedelta(milliseconds=1)
    return (total_ms + _MS_PER_MINUTE // 2) // _MS_PER_MINUTE


class SessionHistory:
    """Append-only log of completed sessions, newest first."""

    def __init__(self, records: list[SessionRecord] | None = None) -> None:
        self._records: list[SessionRecord] = []
        for record in records or []:
            self.append(record)

    def __iter__(self) -> Iterator[SessionRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[SessionRecord, ...]:
        return tuple(self._records)

    def append(self, record: SessionRecord) -> None:
        self._records.insert(0, record)

    def count(self) -> int:
        return len(self._records)

    def duration_minutes(self, record: SessionRecord) -> int:
        return duration_minutes(record)

    def total_minutes(self) -> int:
        return sum(duration_minutes(record) for record in self._records)

    def session_days(self, day_of: DayOfMonth = day_of_month) -> set[int]:
        return {day_of(record.start) for record in self._records}
