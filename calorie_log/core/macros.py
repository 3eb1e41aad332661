"""Macro Calculations - Pure functions for nutrition and body metric math.

All functions are pure: same input always produces same output, no side effects.
"""

from .models import Day, FoodEntry, Gender, UserProfile, Workout, WorkoutType


# Calories burnt for common weight lifting session lengths (minutes -> kcal)
WEIGHT_LIFTING_CALORIES = {30: 120, 60: 220, 90: 330, 120: 440}
WEIGHT_LIFTING_KCAL_PER_MINUTE = 3.67

ACTIVITY_LEVELS = [
    ("Sedentary (little to no exercise)", 1.2),
    ("Light exercise (1-3 days/week)", 1.375),
    ("Moderate exercise (3-5 days/week)", 1.55),
    ("Heavy exercise (6-7 days/week)", 1.725),
    ("Very heavy exercise (twice per day)", 1.9),
]


def calculate_calories_from_macros(protein: float, fat: float, carbs: float) -> float:
    """Calculate calories from macronutrients.

    Uses standard conversion: 4 cal/g protein, 4 cal/g carbs, 9 cal/g fat.

    Args:
        protein: Grams of protein
        fat: Grams of fat
        carbs: Grams of carbohydrates

    Returns:
        Estimated calories rounded to one decimal
    """
    return round(protein * 4 + fat * 9 + carbs * 4, 1)


def food_calories(entry: FoodEntry) -> float:
    """Calories for an entry: per-serving macro energy times quantity."""
    per_serving = calculate_calories_from_macros(entry.protein, entry.fat, entry.carbs)
    return round(per_serving * entry.quantity, 1)


def food_protein(entry: FoodEntry) -> float:
    """Protein for an entry, scaled by quantity like its calories."""
    return entry.protein * entry.quantity


def derive_carbs(calories: float, protein: float, fat: float) -> float:
    """Back out carbohydrates from total calories when a source omits them.

    Args:
        calories: Total calories reported for the food
        protein: Grams of protein
        fat: Grams of fat

    Returns:
        Grams of carbohydrates rounded to one decimal
    """
    return round((calories - protein * 4 - fat * 9) / 4, 1)


def weightlifting_calories(duration: int) -> int:
    """Estimate calories burnt lifting weights for ``duration`` minutes."""
    if duration in WEIGHT_LIFTING_CALORIES:
        return WEIGHT_LIFTING_CALORIES[duration]
    return round(duration * WEIGHT_LIFTING_KCAL_PER_MINUTE)


def new_workout(
    workout_type: WorkoutType, duration: int, cardio_calories: int | None = None
) -> Workout:
    """Create a workout with its calories burnt filled in.

    Weight lifting is estimated from the duration. Cardio takes the
    user-supplied figure and stays at 0 until one is given.
    """
    if workout_type == WorkoutType.WEIGHT_LIFTING:
        calories_burnt = weightlifting_calories(duration)
    else:
        calories_burnt = cardio_calories or 0

    return Workout(workout_type=workout_type, duration=duration, calories_burnt=calories_burnt)


def set_cardio_calories(workout: Workout, calories: int) -> Workout:
    """Return the workout with calories replaced, for cardio workouts only."""
    if workout.workout_type != WorkoutType.CARDIO:
        return workout
    return workout.model_copy(update={"calories_burnt": calories})


def day_total_calories(day: Day) -> float:
    """Sum of calories over all foods of a day."""
    return sum(food_calories(f) for f in day.foods)


def day_total_protein(day: Day) -> float:
    """Sum of protein over all foods of a day."""
    return sum(food_protein(f) for f in day.foods)


def net_calories(day: Day, bmr: float) -> float:
    """Energy balance for a day: consumed - burnt by workout - BMR.

    Positive value = caloric surplus
    Negative value = caloric deficit
    """
    burnt = day.workout.calories_burnt if day.workout is not None else 0
    return day_total_calories(day) - burnt - bmr


def calculate_bmi(profile: UserProfile) -> float:
    """Body mass index: weight in kg divided by squared height in meters."""
    height_m = profile.height_cm / 100
    return profile.weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    """Map a BMI value to its standard category name."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25.0:
        return "Normal weight"
    if bmi < 30.0:
        return "Overweight"
    return "Obese"


def calculate_bmr(profile: UserProfile) -> float:
    """Basal metabolic rate using the revised Harris-Benedict equation.

    Args:
        profile: The user's body measurements

    Returns:
        Estimated calories burnt per day at rest
    """
    w, h, a = profile.weight_kg, profile.height_cm, profile.age
    if profile.gender == Gender.MALE:
        return 88.362 + 13.397 * w + 4.799 * h - 5.677 * a
    return 447.593 + 9.247 * w + 3.098 * h - 4.330 * a


def daily_calorie_needs(bmr: float) -> list[tuple[str, float]]:
    """Estimated daily calorie needs for each activity level."""
    return [(label, bmr * factor) for label, factor in ACTIVITY_LEVELS]


def calculate_recommended_protein(weight_kg: float, workouts_per_week: int) -> float:
    """Recommended daily protein in grams for a training frequency.

    Args:
        weight_kg: Body weight in kilograms
        workouts_per_week: Number of workouts in a week

    Returns:
        Grams of protein per day
    """
    if workouts_per_week <= 1:
        factor = 0.8
    elif workouts_per_week <= 3:
        factor = 1.0
    elif workouts_per_week <= 5:
        factor = 1.2
    else:
        factor = 1.4
    return weight_kg * factor
