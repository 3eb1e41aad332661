"""Day Log - In-place mutations of a single day's record."""

from .errors import InvalidIndex
from .models import Day, FoodEntry, Workout


def add_food(day: Day, entry: FoodEntry, quantity: float) -> FoodEntry:
    """Add a food to the day.

    If a food with the exact same name is already logged, its quantity is
    increased by ``quantity``. Otherwise a copy of ``entry`` is appended with
    its quantity set to ``quantity``.

    Args:
        day: The day to mutate
        entry: The food to add
        quantity: Servings eaten

    Returns:
        The entry now held by the day
    """
    for existing in day.foods:
        if existing.name == entry.name:
            existing.quantity += quantity
            return existing

    new_entry = entry.model_copy(update={"quantity": quantity})
    day.foods.append(new_entry)
    return new_entry


def remove_food(day: Day, index: int) -> FoodEntry:
    """Remove and return the food at ``index``.

    Raises:
        InvalidIndex: If the index is outside the food list
    """
    if not 0 <= index < len(day.foods):
        raise InvalidIndex(index, len(day.foods))
    return day.foods.pop(index)


def add_workout(day: Day, workout: Workout) -> None:
    """Set the day's workout, replacing any previous one."""
    day.workout = workout


def reset_day(day: Day) -> None:
    """Clear the day's foods. The date and workout are kept."""
    day.foods.clear()
