from __future__ import annotations

import logging
from datetime import date, datetime

import discord
from discord.ext import commands
from dotenv import load_dotenv

from .commands import register_commands
from .config import Config, load_config
from .history import duration_minutes
from .reporter import AttendanceReporter
from .state import AttendanceState
from .timer import format_elapsed, utc_now
from .wellness import FoodLog, MoodLog, WellnessLog, goal_percent, mood_emoji


class CheckinBot(commands.Bot):
    def __init__(self, config: Config) -> None:
        intents = discord.Intents.none()
        intents.guilds = True

        super().__init__(command_prefix="!", intents=intents)

        self.config = config
        self.reporter = AttendanceReporter()
        self.states: dict[str, AttendanceState] = {}
        self.wellness: dict[str, WellnessLog] = {}

        self.logger = logging.getLogger("checkin-tracker-bot")

    async def setup_hook(self) -> None:
        register_commands(self)
        await self.tree.sync(guild=discord.Object(id=self.config.guild_id))

    async def on_ready(self) -> None:
        self.logger.info("Connected as %s (%s)", self.user, self.user.id if self.user else "unknown")

    def state_for(self, user_id: str) -> AttendanceState:
        # States are created lazily on a member's first command.
        state = self.states.get(user_id)
        if state is None:
            state = AttendanceState(self.config.timezone, goal_sessions=self.config.goal_sessions)
            self.states[user_id] = state
        return state

    def active_session_count(self) -> int:
        return sum(1 for state in self.states.values() if state.open_session is not None)

    def check_in_member(self, user_id: str) -> str:
        session = self.state_for(user_id).check_in()
        self.logger.info("Session started: user=%s", user_id)
        started_local = session.started_at.astimezone(self.config.timezone)
        return f"Checked in at `{started_local.strftime('%H:%M')}`. Have a good session!"

    def check_out_member(self, user_id: str) -> str:
        state = self.state_for(user_id)
        record = state.check_out()
        minutes = duration_minutes(record)
        self.logger.info("Session ended: user=%s minutes=%s", user_id, minutes)
        elapsed = format_elapsed(int((record.end - record.start).total_seconds()))
        return (
            f"Checked out after `{elapsed}` ({minutes}m). "
            f"Monthly progress: {state.progress_percent()}%."
        )

    def attendance_card(self, user_id: str, display_name: str, now: datetime | None = None) -> str:
        return self.reporter.build_attendance_content(display_name, self.state_for(user_id), now)

    def wellness_for(self, user_id: str) -> WellnessLog:
        log = self.wellness.get(user_id)
        if log is None:
            log = WellnessLog()
            self.wellness[user_id] = log
        return log

    def local_today(self) -> date:
        return utc_now().astimezone(self.config.timezone).date()

    def log_food_member(
        self,
        user_id: str,
        name: str,
        *,
        calories: float,
        protein: float = 0,
        carbs: float = 0,
        fat: float = 0,
        day: date | None = None,
    ) -> str:
        wellness = self.wellness_for(user_id)
        entry = FoodLog(day or self.local_today(), name, calories, protein, carbs, fat)
        totals = wellness.add_food(entry)
        goals = wellness.goals
        self.logger.info("Food logged: user=%s calories=%s", user_id, calories)
        return (
            f"Logged {name}. Today: `{round(totals.calories)}/{round(goals.calories)} kcal` "
            f"({round(goal_percent(totals.calories, goals.calories))}%), "
            f"P {round(totals.protein)}/{round(goals.protein)}g, "
            f"C {round(totals.carbs)}/{round(goals.carbs)}g, "
            f"F {round(totals.fat)}/{round(goals.fat)}g."
        )

    def log_water_member(self, user_id: str, amount_ml: int, day: date | None = None) -> str:
        wellness = self.wellness_for(user_id)
        today = day or self.local_today()
        total = wellness.add_water(today, amount_ml)
        left = wellness.water_left(today)
        if left == 0:
            return f"Water: `{total}/{wellness.water_goal_ml}ml`. Goal reached, stay hydrated!"
        return f"Water: `{total}/{wellness.water_goal_ml}ml`. Only {left}ml left to goal."

    def log_mood_member(self, user_id: str, rating: int, note: str = "", day: date | None = None) -> str:
        average = self.wellness_for(user_id).add_mood(MoodLog(day or self.local_today(), rating, note))
        return f"Mood logged {mood_emoji(rating)}. Average mood: `{average:.1f}` {mood_emoji(round(average))}"

    def toggle_symptom_member(self, user_id: str, symptom: str, day: date | None = None) -> str:
        active = self.wellness_for(user_id).toggle_symptom(day or self.local_today(), symptom)
        if not active:
            return "No symptoms logged for today."
        return f"Today's symptoms: {', '.join(active)}"

    def release_timers(self) -> None:
        for state in self.states.values():
            state.close()

    async def close(self) -> None:
        self.release_timers()
        await super().close()


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    load_dotenv()

    config = load_config()
    configure_logging(config.log_level)

    bot = CheckinBot(config=config)
    bot.run(config.discord_token, log_handler=None)


if __name__ == "__main__":
    main()
