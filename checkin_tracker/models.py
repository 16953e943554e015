from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Session:
    started_at: datetime


@dataclass(frozen=True, slots=True)
class SessionRecord:
    id: str
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("start and end must be timezone-aware")
        if self.end <= self.start:
            raise ValueError("Session record must end after it starts")


@dataclass(frozen=True, slots=True)
class DayCell:
    day: int
    attended: bool
    today: bool
    future: bool
