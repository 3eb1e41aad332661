"""Interactive menu for the calorie log.

Every menu entry is a Command member dispatched through HANDLERS. Input is
read through a PromptProvider so the menu can be driven by a script in tests.
"""

import logging
import math
from datetime import datetime
from enum import Enum
from typing import Callable, Protocol

from pydantic import ValidationError

from ..core.errors import CalorieLogError, DateNotFound
from ..core.macros import bmi_category, daily_calorie_needs, food_calories, new_workout
from ..core.models import FoodEntry, Gender, UserProfile, WorkoutType
from ..core.reports import generate_day_summary
from .tracker import Tracker


logger = logging.getLogger(__name__)

GRAPH_WIDTH = 50


class Command(Enum):
    ADD_FOOD = "Add food"
    REMOVE_FOOD = "Remove food"
    ADD_WORKOUT = "Add workout"
    RESET_DAY = "Reset day"
    REGISTER_DAY = "Register day"
    SHOW_DAY = "Show current day"
    SEARCH_FOOD = "Search food"
    CHANGE_DAY = "Change day"
    WEEK_REPORT = "Show week calories"
    SET_PROFILE = "Set user info"
    BMI = "Calculate BMI"
    BMR = "Calculate BMR"
    EXIT = "Exit"


class PromptProvider(Protocol):
    """Source of typed user input."""

    def text(self, prompt: str, allow_empty: bool = False) -> str: ...

    def number(self, prompt: str) -> float: ...

    def integer(self, prompt: str) -> int: ...

    def select(self, prompt: str, options: list[str]) -> int: ...


class ConsolePrompt:
    """PromptProvider reading from standard input.

    Malformed numbers and out-of-range menu choices are reported and asked
    again rather than aborting the command.
    """

    def __init__(self, input_func: Callable[[str], str] | None = None) -> None:
        self._input = input_func or input

    def text(self, prompt: str, allow_empty: bool = False) -> str:
        while True:
            value = self._input(f"{prompt}: ").strip()
            if value or allow_empty:
                return value

    def number(self, prompt: str) -> float:
        while True:
            raw = self.text(prompt)
            try:
                value = float(raw)
            except ValueError:
                value = None
            if value is not None and math.isfinite(value):
                return value
            print(f"'{raw}' is not a number, please try again.")

    def integer(self, prompt: str) -> int:
        while True:
            raw = self.text(prompt)
            try:
                return int(raw)
            except ValueError:
                print(f"'{raw}' is not a whole number, please try again.")

    def select(self, prompt: str, options: list[str]) -> int:
        print(prompt)
        for i, option in enumerate(options, 1):
            print(f"  {i}. {option}")
        while True:
            raw = self.text("Choose an option")
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return int(raw) - 1
            print("Invalid choice, please try again.")


# ==================== Food Commands ====================


def _describe(food: FoodEntry) -> str:
    return f"{food.name} x{food.quantity:g} {food.unit} ({food_calories(food):g} calories)"


def _enter_new_food(prompt: PromptProvider) -> FoodEntry | None:
    name = prompt.text("Enter food name (or leave empty to go back)", allow_empty=True)
    if not name:
        return None
    protein = prompt.number("Enter protein (grams)")
    fat = prompt.number("Enter fat (grams)")
    carbs = prompt.number("Enter carbs (grams)")
    return FoodEntry(name=name, protein=protein, fat=fat, carbs=carbs)


def _search_and_select_food(tracker: Tracker, prompt: PromptProvider) -> FoodEntry | None:
    query = prompt.text("Enter food name to search")
    results = tracker.search_food(query)
    if not results:
        print("No matching foods found.")
        return None

    choices = [f"{m.food.name} (Match score: {m.score})" for m in results]
    choices.append("Go back")
    selection = prompt.select("Select a food or go back", choices)
    if selection == len(results):
        return None
    return results[selection].food


def _add_with_quantity(tracker: Tracker, prompt: PromptProvider, food: FoodEntry) -> None:
    quantity = prompt.number("Enter quantity consumed")
    tracker.add_food(food, quantity)
    print("Food added successfully!")


def add_food(tracker: Tracker, prompt: PromptProvider) -> None:
    choices = [
        "Search for existing food",
        "Look up food online",
        "Enter new food",
        "Go back",
    ]
    while True:
        selection = prompt.select("How do you want to add food?", choices)
        if selection == 0:
            food = _search_and_select_food(tracker, prompt)
            if food is not None:
                _add_with_quantity(tracker, prompt, food)
        elif selection == 1:
            query = prompt.text("Describe what you ate")
            added = tracker.search_and_add_food(query)
            if added:
                for food in added:
                    print(f"Added {_describe(food)}")
            else:
                print("No foods found online. Please enter the food manually.")
                food = _enter_new_food(prompt)
                if food is not None:
                    _add_with_quantity(tracker, prompt, food)
        elif selection == 2:
            food = _enter_new_food(prompt)
            if food is not None:
                _add_with_quantity(tracker, prompt, food)
        else:
            return


def remove_food(tracker: Tracker, prompt: PromptProvider) -> None:
    while True:
        foods = tracker.current_day.foods
        choices = [_describe(f) for f in foods]
        choices.append("Go back")
        selection = prompt.select("Select a food to remove or go back", choices)
        if selection == len(foods):
            return
        tracker.remove_food(selection)
        print("Food removed successfully!")


def search_food(tracker: Tracker, prompt: PromptProvider) -> None:
    while True:
        query = prompt.text("Enter search query (or leave empty to go back)", allow_empty=True)
        if not query:
            return
        results = tracker.search_food(query)
        if not results:
            print("No foods found matching the query.")
            continue
        print("Search results:")
        for m in results:
            print(f"  - {_describe(m.food)} [Match score: {m.score}]")


# ==================== Day Commands ====================


def add_workout(tracker: Tracker, prompt: PromptProvider) -> None:
    types = [WorkoutType.WEIGHT_LIFTING, WorkoutType.CARDIO]
    workout_type = types[prompt.select("Select workout type", ["Weight Lifting", "Cardio"])]

    durations = ["30 min", "60 min", "90 min", "120 min", "Other"]
    index = prompt.select("Select workout duration", durations)
    if index < 4:
        duration = (index + 1) * 30
    else:
        duration = prompt.integer("Enter custom duration (in minutes)")

    cardio_calories = None
    if workout_type == WorkoutType.CARDIO:
        cardio_calories = prompt.integer("Enter calories burnt during cardio")

    tracker.add_workout(new_workout(workout_type, duration, cardio_calories))
    print("Workout added successfully!")


def reset_day(tracker: Tracker, prompt: PromptProvider) -> None:
    tracker.reset_day()
    print("Day reset successfully!")


def register_day(tracker: Tracker, prompt: PromptProvider) -> None:
    day = tracker.register_day()
    print(f"Current day is now {day.date}")


def show_current_day(tracker: Tracker, prompt: PromptProvider) -> None:
    day = tracker.current_day
    summary = generate_day_summary(day, tracker.calculate_bmr())
    print(f"Current day: {day.date}")
    print(f"Total calories: {summary.total_calories:g}")
    print(f"Total protein: {summary.total_protein:g} g")
    print("Foods consumed:")
    for food in day.foods:
        print(f"  - {_describe(food)}")
    if day.workout is not None:
        print(
            f"Workout: {day.workout.workout_type.value}, {day.workout.duration} min, "
            f"{day.workout.calories_burnt} calories burnt"
        )
    print(f"Net calories: {summary.net_calories:+.0f}")


def change_day(tracker: Tracker, prompt: PromptProvider) -> None:
    raw = prompt.text("Enter date (YYYY-MM-DD)")
    try:
        target = datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        print("Invalid date format. Please use YYYY-MM-DD.")
        return

    try:
        tracker.change_day(target)
    except DateNotFound:
        print(f"No day recorded for {target}.")
        return
    print(f"Changed to day: {target}")


def show_week_report(tracker: Tracker, prompt: PromptProvider) -> None:
    week = tracker.week_window()
    print("Calories and workouts in the last 7 days:")
    for s in week:
        line = f"  {s.date} : {s.total_calories:g} calories"
        if s.workout is not None:
            line += f" (Workout: {s.workout.duration} min {s.workout.workout_type.value})"
        line += f" Net: {s.net_calories:+.0f} calories"
        print(line)

    max_calories = max(s.total_calories for s in week)
    scale = GRAPH_WIDTH / max_calories if max_calories > 0 else 0
    print("Week Calorie Graph:")
    for s in week:
        bar = "#" * round(s.total_calories * scale)
        line = f"  {s.date} : {bar} {s.total_calories:g}"
        if s.workout is not None:
            line += f" ({s.workout.calories_burnt})"
        print(line)


# ==================== Profile Commands ====================


def set_user_info(tracker: Tracker, prompt: PromptProvider) -> None:
    height = prompt.number("Enter your height (cm)")
    weight = prompt.number("Enter your weight (kg)")
    age = prompt.integer("Enter your age")
    genders = [Gender.MALE, Gender.FEMALE]
    gender = genders[prompt.select("Select your gender", [g.value for g in genders])]
    try:
        profile = UserProfile(height_cm=height, weight_kg=weight, age=age, gender=gender)
    except ValidationError as e:
        problems = ", ".join(f"{err['loc'][0]} {err['msg']}" for err in e.errors())
        print(f"Invalid user information ({problems}). Profile unchanged.")
        return
    tracker.set_user_profile(profile)
    print("User information updated successfully!")


def show_bmi(tracker: Tracker, prompt: PromptProvider) -> None:
    bmi = tracker.calculate_bmi()
    print(f"Your BMI: {bmi:.2f}")
    print(f"BMI Category: {bmi_category(bmi)}")


def show_bmr(tracker: Tracker, prompt: PromptProvider) -> None:
    bmr = tracker.calculate_bmr()
    print(f"Your Basal Metabolic Rate (BMR): {bmr:.2f} calories/day")
    print("Estimated daily calorie needs:")
    for label, calories in daily_calorie_needs(bmr):
        print(f"  {label}: {calories:.2f} calories")

    workouts = tracker.workouts_this_week()
    protein = tracker.calculate_recommended_protein(workouts)
    print(f"Recommended protein: {protein:.1f} g/day ({workouts} workouts this week)")


HANDLERS: dict[Command, Callable[[Tracker, PromptProvider], None]] = {
    Command.ADD_FOOD: add_food,
    Command.REMOVE_FOOD: remove_food,
    Command.ADD_WORKOUT: add_workout,
    Command.RESET_DAY: reset_day,
    Command.REGISTER_DAY: register_day,
    Command.SHOW_DAY: show_current_day,
    Command.SEARCH_FOOD: search_food,
    Command.CHANGE_DAY: change_day,
    Command.WEEK_REPORT: show_week_report,
    Command.SET_PROFILE: set_user_info,
    Command.BMI: show_bmi,
    Command.BMR: show_bmr,
}


def run(tracker: Tracker, prompt: PromptProvider) -> None:
    """Show the main menu until the user exits.

    Errors from a single command are reported and the menu is shown again.
    """
    commands = list(Command)
    while True:
        print()
        print(f"Calorie Tracker - Day {tracker.current_day_number} ({tracker.current_day.date})")
        command = commands[prompt.select("Choose an option", [c.value for c in commands])]
        if command is Command.EXIT:
            return

        try:
            HANDLERS[command](tracker, prompt)
        except CalorieLogError as e:
            logger.warning("%s failed: %s", command.name, str(e))
            print(f"Error: {e}")
