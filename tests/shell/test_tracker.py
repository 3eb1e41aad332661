"""Tests for the Tracker registry, using a real day log file under tmp_path."""

import pytest
from datetime import date
from unittest.mock import MagicMock, patch

from calorie_log.core.errors import (
    DateNotFound,
    InvalidIndex,
    LookupFailure,
    NoDaysRecorded,
    ParseFailure,
    PersistenceFailure,
)
from calorie_log.core.models import (
    Day,
    FoodEntry,
    Gender,
    NutritionInfo,
    UserProfile,
    Workout,
    WorkoutType,
)
from calorie_log.shell.storage import load_days, save_days
from calorie_log.shell.tracker import Tracker


TODAY = date(2024, 1, 10)


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "calories.json"


@pytest.fixture
def tracker(log_path):
    return Tracker(log_path, today=TODAY)


def chicken():
    return FoodEntry(name="Chicken", protein=20, fat=5, carbs=0)


class TestConstruction:
    """Tests for loading and seeding."""

    def test_seeds_today_when_empty(self, tracker):
        """An empty history starts with one day for today."""
        assert [d.date for d in tracker.days] == [TODAY]
        assert tracker.current_day.date == TODAY
        assert tracker.current_day_number == 1

    def test_loads_existing_history(self, log_path):
        """Existing days are loaded and the first one is current."""
        save_days(log_path, [Day(date=date(2024, 1, 1)), Day(date=date(2024, 1, 2))])

        tracker = Tracker(log_path, today=TODAY)

        assert [d.date for d in tracker.days] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert tracker.current_day.date == date(2024, 1, 1)

    def test_malformed_file_fails(self, log_path):
        """A corrupt log aborts construction."""
        log_path.write_text("[{]")
        with pytest.raises(ParseFailure):
            Tracker(log_path, today=TODAY)

    def test_no_days_recorded(self, tracker):
        """A broken current index reports NoDaysRecorded."""
        tracker.days.clear()
        with pytest.raises(NoDaysRecorded):
            tracker.current_day


class TestFoods:
    """Tests for food operations."""

    def test_add_food_persists(self, tracker, log_path):
        """Adding a food saves the whole log."""
        tracker.add_food(chicken(), 2.0)

        saved = load_days(log_path)
        assert saved[0].foods[0].name == "Chicken"
        assert saved[0].foods[0].quantity == 2.0

    def test_duplicate_name_accumulates(self, tracker):
        """Re-adding a name raises its quantity without a new entry."""
        tracker.add_food(chicken(), 1.0)
        tracker.add_food(chicken(), 1.5)

        assert len(tracker.current_day.foods) == 1
        assert tracker.current_day.foods[0].quantity == 2.5

    def test_add_food_manually_single_serving(self, tracker):
        """Manual entries are added as one serving."""
        tracker.add_food_manually(FoodEntry(name="Toast", quantity=4, carbs=15))
        assert tracker.current_day.foods[0].quantity == 1.0

    def test_remove_food_persists(self, tracker, log_path):
        tracker.add_food(chicken(), 1.0)
        tracker.remove_food(0)

        assert tracker.current_day.foods == []
        assert load_days(log_path)[0].foods == []

    def test_remove_invalid_index(self, tracker):
        with pytest.raises(InvalidIndex):
            tracker.remove_food(3)

    def test_reset_day_keeps_workout(self, tracker, log_path):
        """Reset clears foods but not the workout."""
        tracker.add_food(chicken(), 1.0)
        tracker.add_workout(Workout(workout_type=WorkoutType.CARDIO, duration=30, calories_burnt=100))

        tracker.reset_day()

        saved = load_days(log_path)[0]
        assert saved.foods == []
        assert saved.workout.calories_burnt == 100

    def test_all_foods_spans_days(self, tracker):
        tracker.add_food(chicken(), 1.0)
        tracker.register_day()
        tracker.add_food(FoodEntry(name="Rice", carbs=45), 1.0)

        assert [f.name for f in tracker.all_foods()] == ["Chicken", "Rice"]

    def test_search_across_history(self, tracker):
        """Search finds foods from days other than the current one."""
        tracker.add_food(chicken(), 1.0)
        tracker.register_day()

        results = tracker.search_food("chick")

        assert [m.food.name for m in results] == ["Chicken"]


class TestSaveFailure:
    """Mutations are kept in memory when the save fails."""

    def test_mutation_not_rolled_back(self, tracker):
        with patch("calorie_log.shell.tracker.save_days", side_effect=PersistenceFailure("disk full")):
            with pytest.raises(PersistenceFailure):
                tracker.add_food(chicken(), 1.0)

        assert [f.name for f in tracker.current_day.foods] == ["Chicken"]

    def test_register_day_save_failure(self, tracker):
        """The new day stays selected and a retry registers the next one."""
        with patch("calorie_log.shell.tracker.save_days", side_effect=PersistenceFailure("disk full")):
            with pytest.raises(PersistenceFailure):
                tracker.register_day()

        assert tracker.current_day.date == date(2024, 1, 11)

        tracker.register_day()

        assert [d.date for d in tracker.days] == [TODAY, date(2024, 1, 11), date(2024, 1, 12)]
        assert [d.date for d in load_days(tracker.path)] == [TODAY, date(2024, 1, 11), date(2024, 1, 12)]


class TestSearchAndAddFood:
    """Tests for the online lookup path."""

    def test_adds_each_result_as_one_serving(self, tracker):
        nutrition = MagicMock()
        nutrition.search.return_value = [
            NutritionInfo(name="apple", quantity=2, unit="medium", calories=190,
                          protein=1, fat=0.6, carbs=50.2),
            NutritionInfo(name="chicken", quantity=200, unit="g", calories=330,
                          protein=62, fat=7.2, carbs=0),
        ]
        tracker.nutrition = nutrition

        added = tracker.search_and_add_food("2 apples, 200 grams of chicken")

        nutrition.search.assert_called_once_with("2 apples, 200 grams of chicken")
        assert [f.name for f in added] == ["apple", "chicken"]
        assert all(f.quantity == 1.0 for f in tracker.current_day.foods)
        assert tracker.current_day.foods[0].unit == "2 medium"

    def test_lookup_failure_returns_empty(self, tracker):
        """Lookup errors fall back to an empty result."""
        nutrition = MagicMock()
        nutrition.search.side_effect = LookupFailure("timeout")
        tracker.nutrition = nutrition

        assert tracker.search_and_add_food("apple") == []
        assert tracker.current_day.foods == []

    def test_not_configured_returns_empty(self, tracker):
        assert tracker.search_and_add_food("apple") == []


class TestDays:
    """Tests for change_day and register_day."""

    def test_register_day_selects_next_date(self, tracker, log_path):
        day = tracker.register_day()

        assert day.date == date(2024, 1, 11)
        assert tracker.current_day.date == date(2024, 1, 11)
        assert tracker.current_day_number == 2
        assert [d.date for d in load_days(log_path)] == [TODAY, date(2024, 1, 11)]

    def test_register_day_twice_in_a_row(self, tracker):
        """Registering twice without other changes adds one day."""
        tracker.register_day()
        tracker.register_day()

        assert [d.date for d in tracker.days] == [TODAY, date(2024, 1, 11)]
        assert tracker.current_day.date == date(2024, 1, 11)

    def test_register_day_existing_date(self, tracker):
        """Registering from a day whose successor exists changes nothing."""
        tracker.register_day()
        tracker.change_day(TODAY)
        tracker.register_day()

        assert len(tracker.days) == 2
        assert tracker.current_day.date == TODAY

    def test_register_day_after_logging(self, tracker):
        """Logging on the new day lets the next call advance again."""
        tracker.register_day()
        tracker.add_food(chicken(), 1.0)
        tracker.register_day()

        assert [d.date for d in tracker.days] == [TODAY, date(2024, 1, 11), date(2024, 1, 12)]

    def test_change_day(self, tracker):
        tracker.register_day()
        tracker.change_day(TODAY)
        assert tracker.current_day.date == TODAY

    def test_change_day_not_found(self, tracker):
        """Unknown dates fail and keep the current day."""
        tracker.register_day()
        index = tracker.current_day_index

        with pytest.raises(DateNotFound):
            tracker.change_day(date(2023, 5, 5))

        assert tracker.current_day_index == index


class TestReportsAndMetrics:
    """Tests for week window and body metrics."""

    def test_week_window_always_seven(self, tracker):
        tracker.add_food(chicken(), 1.0)

        window = tracker.week_window()

        assert len(window) == 7
        assert window[-1].date == TODAY
        assert window[-1].total_calories == 125
        assert sum(s.total_calories for s in window[:-1]) == 0

    def test_workouts_this_week(self, tracker):
        tracker.add_workout(Workout(workout_type=WorkoutType.WEIGHT_LIFTING, duration=60, calories_burnt=220))
        tracker.register_day()
        tracker.add_workout(Workout(workout_type=WorkoutType.CARDIO, duration=30, calories_burnt=100))

        assert tracker.workouts_this_week() == 2

    def test_default_bmi(self, tracker):
        assert tracker.calculate_bmi() == pytest.approx(24.38, abs=0.01)

    def test_set_user_profile(self, tracker):
        tracker.set_user_profile(UserProfile(height_cm=165, weight_kg=60, age=30, gender=Gender.FEMALE))

        assert tracker.calculate_bmr() == pytest.approx(447.593 + 9.247 * 60 + 3.098 * 165 - 4.330 * 30)
        assert tracker.calculate_recommended_protein(4) == pytest.approx(72)
