"""Statistics service for meal entries."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from fitness_tracker.domain.meals import MealEntry
from fitness_tracker.domain.stats import DailyTotals, PeriodSummary
from fitness_tracker.services.meals import MealRepository

DECEMBER = 12


@dataclass
class StatsService:
    """Service for computing user stats by timezone."""

    repository: MealRepository

    def get_today(self, user_id: UUID, timezone_name: str) -> DailyTotals:
        """Return today's totals in the user's timezone."""
        today = _local_today(timezone_name)
        entries = self.repository.list_meal_entries(user_id, today)
        return _aggregate_day(today, entries)

    def get_week(self, user_id: UUID, timezone_name: str) -> PeriodSummary:
        """Return week-to-date totals and averages."""
        today = _local_today(timezone_name)
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=7)
        entries = self.repository.list_meal_entries_between(user_id, start, end)
        return _aggregate_period(start, 7, entries)

    def get_month(self, user_id: UUID, timezone_name: str) -> PeriodSummary:
        """Return month-to-date totals and averages."""
        today = _local_today(timezone_name)
        start = today.replace(day=1)
        if start.month == DECEMBER:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        days = (end - start).days
        entries = self.repository.list_meal_entries_between(user_id, start, end)
        return _aggregate_period(start, days, entries)

    def get_history(self, user_id: UUID, limit: int = 10) -> list[MealEntry]:
        """Return recent meal entries."""
        return self.repository.list_recent_meal_entries(user_id, limit)


def _local_today(timezone_name: str) -> date:
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def _aggregate_day(day: date, entries: list[MealEntry]) -> DailyTotals:
    matching = [entry for entry in entries if entry.date == day]
    return DailyTotals(
        day=day,
        calories=math.fsum(entry.calories for entry in matching),
        protein_g=math.fsum(entry.protein_g for entry in matching),
        fats_g=math.fsum(entry.fats_g for entry in matching),
        carbs_g=math.fsum(entry.carbs_g for entry in matching),
    )


def _aggregate_period(
    start: date, days: int, entries: list[MealEntry]
) -> PeriodSummary:
    daily = [
        _aggregate_day(start + timedelta(days=offset), entries)
        for offset in range(days)
    ]
    total_days = max(len(daily), 1)
    return PeriodSummary(
        daily=daily,
        avg_calories=math.fsum(day.calories for day in daily) / total_days,
        avg_protein_g=math.fsum(day.protein_g for day in daily) / total_days,
        avg_fats_g=math.fsum(day.fats_g for day in daily) / total_days,
        avg_carbs_g=math.fsum(day.carbs_g for day in daily) / total_days,
    )
