"""Tracker - The application state for one run of the calorie log.

Owns every recorded day, the current-day selection, the user profile and
the persistence path. Every mutating operation writes the full log to disk
before returning. A failed save propagates after the in-memory change has
already happened; memory and disk may then disagree until the next save.
"""

import logging
from datetime import date, timedelta
from pathlib import Path

from ..core import day_log
from ..core.errors import DateNotFound, LookupFailure, NoDaysRecorded
from ..core.macros import calculate_bmi, calculate_bmr, calculate_recommended_protein
from ..core.models import Day, DaySummary, FoodEntry, FoodMatch, UserProfile, Workout
from ..core.reports import count_workouts, generate_week_window
from ..core.search import FuzzyScorer, SubsequenceScorer, search_foods
from .nutrition_client import NutritionLookup
from .storage import load_days, save_days


logger = logging.getLogger(__name__)


class Tracker:
    """Registry of recorded days plus the user's profile."""

    def __init__(
        self,
        path: str | Path,
        today: date | None = None,
        profile: UserProfile | None = None,
        scorer: FuzzyScorer | None = None,
        nutrition: NutritionLookup | None = None,
    ) -> None:
        """Load the day log, seeding today's day if there is no history.

        Args:
            path: Location of the day log file
            today: Date used to seed an empty log (defaults to the system date)
            profile: User body measurements (defaults to UserProfile())
            scorer: Fuzzy matcher for food search
            nutrition: Online nutrition lookup, or None to disable it

        Raises:
            PersistenceFailure: If an existing log cannot be read
            ParseFailure: If an existing log is malformed
        """
        self.path = Path(path)
        self.days: list[Day] = load_days(self.path)
        if not self.days:
            seed = today or date.today()
            logger.info("Empty history, starting with %s", seed)
            self.days.append(Day(date=seed))
        self.current_day_index = 0
        self._just_registered = False
        self.profile = profile or UserProfile()
        self.scorer = scorer or SubsequenceScorer()
        self.nutrition = nutrition

    # ==================== Current Day ====================

    @property
    def current_day(self) -> Day:
        """The day that mutations apply to.

        Raises:
            NoDaysRecorded: If the registry holds no days
        """
        if not 0 <= self.current_day_index < len(self.days):
            raise NoDaysRecorded()
        return self.days[self.current_day_index]

    @property
    def current_day_number(self) -> int:
        """1-based position of the current day, for display."""
        return self.current_day_index + 1

    def change_day(self, target: date) -> Day:
        """Select an already recorded day.

        Raises:
            DateNotFound: If no day has that date (selection is unchanged)
        """
        for index, day in enumerate(self.days):
            if day.date == target:
                self.current_day_index = index
                self._just_registered = False
                logger.info("Changed to day %s", target)
                return day
        raise DateNotFound(target)

    def register_day(self) -> Day:
        """Record the day after the current one and select it.

        Nothing changes if that date is already recorded, or if the previous
        call registered a day and nothing was changed since. Repeated calls
        are a no-op after the first.

        If the save fails, the new day stays in memory and selected but is
        not marked as just registered, so calling again registers the day
        after it.

        Returns:
            The current day after the call

        Raises:
            PersistenceFailure: If the log file cannot be written
        """
        if self._just_registered:
            logger.debug("Day %s was just registered", self.current_day.date)
            return self.current_day

        next_date = self.current_day.date + timedelta(days=1)
        if any(day.date == next_date for day in self.days):
            logger.debug("Day %s already registered", next_date)
            return self.current_day

        self.days.append(Day(date=next_date))
        self.current_day_index = len(self.days) - 1
        logger.info("Registered day %s", next_date)
        self.save()
        self._just_registered = True
        return self.current_day

    # ==================== Foods ====================

    def add_food(self, entry: FoodEntry, quantity: float) -> FoodEntry:
        """Add a food to the current day and save."""
        added = day_log.add_food(self.current_day, entry, quantity)
        logger.info("Added %s x%s to %s", entry.name, quantity, self.current_day.date)
        self.save()
        return added

    def add_food_manually(self, entry: FoodEntry) -> FoodEntry:
        """Add a single serving of a food to the current day and save."""
        return self.add_food(entry, 1.0)

    def remove_food(self, index: int) -> FoodEntry:
        """Remove the food at ``index`` from the current day and save.

        Raises:
            InvalidIndex: If the index is out of range (nothing is saved)
        """
        removed = day_log.remove_food(self.current_day, index)
        logger.info("Removed %s from %s", removed.name, self.current_day.date)
        self.save()
        return removed

    def reset_day(self) -> None:
        """Clear the current day's foods and save. The workout is kept."""
        day_log.reset_day(self.current_day)
        logger.info("Reset day %s", self.current_day.date)
        self.save()

    def all_foods(self) -> list[FoodEntry]:
        """Every food logged on every day."""
        return [food for day in self.days for food in day.foods]

    def search_food(self, query: str) -> list[FoodMatch]:
        """Fuzzy search food names across the whole history."""
        return search_foods(self.days, query, self.scorer)

    def search_and_add_food(self, query: str) -> list[FoodEntry]:
        """Look up foods online and add each one to the current day.

        Lookup failures are logged and reported as an empty list so the
        caller can fall back to manual entry.

        Returns:
            The foods that were added
        """
        if self.nutrition is None:
            logger.info("Online lookup not configured")
            return []

        try:
            results = self.nutrition.search(query)
        except LookupFailure as e:
            logger.warning("Lookup failed, falling back to manual entry: %s", str(e))
            return []

        added = []
        for info in results:
            # Macros cover the whole looked-up serving, so it counts as one
            food = FoodEntry(
                name=info.name,
                unit=f"{info.quantity:g} {info.unit}",
                protein=info.protein,
                fat=info.fat,
                carbs=info.carbs,
            )
            added.append(self.add_food(food, 1.0))
        return added

    # ==================== Workouts ====================

    def add_workout(self, workout: Workout) -> None:
        """Set the current day's workout, replacing any previous one, and save."""
        day_log.add_workout(self.current_day, workout)
        logger.info(
            "Workout %s (%d min) on %s",
            workout.workout_type.value,
            workout.duration,
            self.current_day.date,
        )
        self.save()

    # ==================== Reports & Metrics ====================

    def week_window(self) -> list[DaySummary]:
        """Summaries for the current day and the six days before it."""
        return generate_week_window(self.days, self.current_day.date, self.calculate_bmr())

    def workouts_this_week(self) -> int:
        """Number of days with a workout in the current week window."""
        return count_workouts(self.week_window())

    def set_user_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def calculate_bmi(self) -> float:
        return calculate_bmi(self.profile)

    def calculate_bmr(self) -> float:
        return calculate_bmr(self.profile)

    def calculate_recommended_protein(self, workouts_per_week: int) -> float:
        return calculate_recommended_protein(self.profile.weight_kg, workouts_per_week)

    # ==================== Persistence ====================

    def save(self) -> None:
        """Write every day to the log file.

        Raises:
            PersistenceFailure: If the file cannot be written
        """
        self._just_registered = False
        save_days(self.path, self.days)
