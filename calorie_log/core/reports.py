"""Report Generation - Pure functions for generating reports.

All functions are pure: same input always produces same output, no side effects.
"""

from datetime import date, timedelta

from .models import Day, DaySummary
from .macros import day_total_calories, day_total_protein, net_calories


WEEK_DAYS = 7


def generate_day_summary(day: Day, bmr: float) -> DaySummary:
    """Generate a summary for a single day's log.

    Args:
        day: The day to summarize
        bmr: Basal metabolic rate used for the net calorie figure

    Returns:
        DaySummary with totals for the day
    """
    return DaySummary(
        date=day.date,
        total_calories=round(day_total_calories(day), 1),
        total_protein=round(day_total_protein(day), 1),
        entry_count=len(day.foods),
        workout=day.workout,
        net_calories=round(net_calories(day, bmr), 1),
    )


def generate_week_window(days: list[Day], current_date: date, bmr: float) -> list[DaySummary]:
    """Summarize the seven days ending on ``current_date``.

    Always returns exactly seven summaries in ascending date order. Dates
    with no recorded day get zero totals and a net figure of ``-bmr``.

    Args:
        days: All recorded days (any order)
        current_date: Last date of the window (inclusive)
        bmr: Basal metabolic rate used for net calories

    Returns:
        List of seven DaySummary rows
    """
    by_date = {}
    for day in days:
        by_date.setdefault(day.date, day)

    window_start = current_date - timedelta(days=WEEK_DAYS - 1)
    summaries = []
    for offset in range(WEEK_DAYS):
        the_date = window_start + timedelta(days=offset)
        day = by_date.get(the_date)
        if day is None:
            day = Day(date=the_date)
        summaries.append(generate_day_summary(day, bmr))

    return summaries


def count_workouts(summaries: list[DaySummary]) -> int:
    """Number of days in the summaries that have a workout."""
    return sum(1 for s in summaries if s.workout is not None)
