from __future__ import annotations

from datetime import datetime

from .history import duration_minutes
from .models import DayCell
from .state import AttendanceState
from .timer import format_elapsed

GRID_WIDTH = 7
HISTORY_LIMIT = 5


def format_day_cell(cell: DayCell) -> str:
    """Check mark for attended days, dots for days still ahead, brackets around today."""
    if cell.attended:
        label = "✓ "
    elif cell.future:
        label = "··"
    else:
        label = f"{cell.day:2}"

    if cell.today:
        return f"[{label}]"
    return f" {label} "


class AttendanceReporter:
    def build_calendar_lines(self, cells: list[DayCell]) -> list[str]:
        lines = []
        for offset in range(0, len(cells), GRID_WIDTH):
            row = cells[offset:offset + GRID_WIDTH]
            lines.append("".join(format_day_cell(cell) for cell in row).rstrip())
        return lines

    def build_history_lines(self, state: AttendanceState, limit: int = HISTORY_LIMIT) -> list[str]:
        lines = []
        for record in state.history.records[:limit]:
            local_start = record.start.astimezone(state.tz)
            lines.append(
                f"- {local_start.date().isoformat()} • {local_start.strftime('%H:%M')}: "
                f"`{duration_minutes(record)}m`"
            )
        return lines

    def build_attendance_content(
        self,
        display_name: str,
        state: AttendanceState,
        now: datetime | None = None,
    ) -> str:
        header = f"**Attendance - {display_name}**"
        session = state.open_session

        if session is None:
            status_line = "Status: Off-Duty"
        else:
            started_local = session.started_at.astimezone(state.tz)
            status_line = (
                f"Status: Session Active since {started_local.strftime('%H:%M')} "
                f"(`{format_elapsed(state.timer.elapsed())}`)"
            )

        attended = state.attended_days()
        progress_line = (
            f"Goal: {len(attended)}/{state.goal_sessions} sessions "
            f"({state.progress_percent()}% progress)"
        )

        sections = [header, status_line, progress_line, "```"]
        sections.extend(self.build_calendar_lines(state.calendar(now)))
        sections.append("```")

        history_lines = self.build_history_lines(state)
        if history_lines:
            sections.append("Recent sessions:")
            sections.extend(history_lines)
        elif session is None:
            sections.append("No sessions logged yet.")

        return "\n".join(sections)
