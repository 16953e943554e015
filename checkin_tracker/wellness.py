"""Per-member nutrition, mood and cycle logs with their derived totals."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date

DEFAULT_WATER_GOAL_ML = 2000
WATER_SERVING_ML = 250

SYMPTOMS = ("Cramps", "Headache", "Bloating", "Acne", "Fatigue", "Cravings", "Happy", "Mood Swings")
FLOWS = ("none", "light", "medium", "heavy")

_MOOD_EMOJIS = ("😫", "😔", "😐", "🙂", "🤩")
_NEUTRAL_EMOJI = "😐"


@dataclass(frozen=True, slots=True)
class FoodLog:
    day: date
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True, slots=True)
class MoodLog:
    day: date
    rating: int
    note: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.rating <= 5:
            raise ValueError("Mood rating must be between 1 and 5")


@dataclass(frozen=True, slots=True)
class CycleLog:
    day: date
    symptoms: tuple[str, ...] = ()
    flow: str = "none"

    def __post_init__(self) -> None:
        if self.flow not in FLOWS:
            raise ValueError(f"Unknown flow: {self.flow}")


@dataclass(frozen=True, slots=True)
class MacroGoals:
    calories: float = 2200
    protein: float = 150
    carbs: float = 250
    fat: float = 70


@dataclass(frozen=True, slots=True)
class MacroTotals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


def daily_totals(logs: Iterable[FoodLog]) -> MacroTotals:
    calories = protein = carbs = fat = 0.0
    for log in logs:
        calories += log.calories
        protein += log.protein
        carbs += log.carbs
        fat += log.fat
    return MacroTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def goal_percent(current: float, goal: float) -> float:
    """Share of a goal reached, clamped to 100."""
    if goal <= 0:
        raise ValueError("goal must be positive")
    return min(current / goal * 100, 100.0)


def water_remaining(intake_ml: int, goal_ml: int = DEFAULT_WATER_GOAL_ML) -> int:
    return max(0, goal_ml - intake_ml)


def average_mood(logs: Iterable[MoodLog]) -> float:
    ratings = [log.rating for log in logs]
    if not ratings:
        return 0.0
    return round(sum(ratings) / len(ratings), 1)


def mood_emoji(rating: int) -> str:
    if 1 <= rating <= 5:
        return _MOOD_EMOJIS[rating - 1]
    return _NEUTRAL_EMOJI


def toggle_symptom(logs: list[CycleLog], day: date, symptom: str) -> list[CycleLog]:
    """Return a new log list with ``symptom`` flipped on or off for ``day``."""
    for index, log in enumerate(logs):
        if log.day != day:
            continue
        if symptom in log.symptoms:
            symptoms = tuple(item for item in log.symptoms if item != symptom)
        else:
            symptoms = (*log.symptoms, symptom)
        return [*logs[:index], replace(log, symptoms=symptoms), *logs[index + 1:]]

    return [*logs, CycleLog(day=day, symptoms=(symptom,))]


def symptoms_on(logs: Iterable[CycleLog], day: date) -> tuple[str, ...]:
    for log in logs:
        if log.day == day:
            return log.symptoms
    return ()


@dataclass
class WellnessLog:
    """One member's food, water, mood and cycle entries, held in memory."""

    goals: MacroGoals = field(default_factory=MacroGoals)
    water_goal_ml: int = DEFAULT_WATER_GOAL_ML
    food: list[FoodLog] = field(default_factory=list)
    moods: list[MoodLog] = field(default_factory=list)
    cycle: list[CycleLog] = field(default_factory=list)
    water_ml: dict[date, int] = field(default_factory=dict)

    def add_food(self, log: FoodLog) -> MacroTotals:
        self.food.insert(0, log)
        return self.totals_for(log.day)

    def totals_for(self, day: date) -> MacroTotals:
        return daily_totals(log for log in self.food if log.day == day)

    def add_water(self, day: date, amount_ml: int = WATER_SERVING_ML) -> int:
        if amount_ml <= 0:
            raise ValueError("amount_ml must be positive")
        self.water_ml[day] = self.water_ml.get(day, 0) + amount_ml
        return self.water_ml[day]

    def water_left(self, day: date) -> int:
        return water_remaining(self.water_ml.get(day, 0), self.water_goal_ml)

    def add_mood(self, log: MoodLog) -> float:
        self.moods.insert(0, log)
        return average_mood(self.moods)

    def toggle_symptom(self, day: date, symptom: str) -> tuple[str, ...]:
        self.cycle = toggle_symptom(self.cycle, day, symptom)
        return symptoms_on(self.cycle, day)
