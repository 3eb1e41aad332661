"""Core Data Models - Pydantic models for type safety.

Models are plain value objects. Arithmetic lives in macros.py and in-place
day mutations live in day_log.py.
"""

from datetime import date as DateType
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class WorkoutType(str, Enum):
    """Kind of workout recorded for a day."""

    WEIGHT_LIFTING = "WeightLifting"
    CARDIO = "Cardio"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class FoodEntry(BaseModel):
    """A single food eaten on a day.

    Macros are per one reference serving; ``quantity`` multiplies them.
    """

    name: str = Field(description="Name of the food (used for matching and search)")
    quantity: float = Field(default=1.0, description="Serving multiplier")
    unit: str = Field(default="serving", description="Display-only serving unit")
    protein: float = Field(default=0.0, description="Protein in grams per serving")
    fat: float = Field(default=0.0, description="Fat in grams per serving")
    carbs: float = Field(default=0.0, description="Carbohydrates in grams per serving")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def calories(self) -> float:
        """Calories per serving, derived from macros (4/9/4 kcal per gram)."""
        return round(self.protein * 4 + self.fat * 9 + self.carbs * 4, 1)


class Workout(BaseModel):
    """The single workout recorded for a day."""

    workout_type: WorkoutType
    duration: int = Field(description="Duration in minutes")
    calories_burnt: int = Field(default=0, description="Estimated calories burnt")


class Day(BaseModel):
    """One calendar date's food and workout log."""

    date: DateType = Field(description="Date of this log (YYYY-MM-DD)")
    foods: list[FoodEntry] = Field(default_factory=list)
    workout: Optional[Workout] = None


class UserProfile(BaseModel):
    """Body measurements used for BMI, BMR and protein targets."""

    height_cm: float = Field(default=180.0, gt=0, description="Height in centimeters")
    weight_kg: float = Field(default=79.0, gt=0, description="Weight in kilograms")
    age: int = Field(default=22, ge=0, description="Age in years")
    gender: Gender = Gender.MALE


class DaySummary(BaseModel):
    """Summary for a single day in the weekly window."""

    date: DateType
    total_calories: float = 0.0
    total_protein: float = 0.0
    entry_count: int = 0
    workout: Optional[Workout] = None
    net_calories: float = 0.0


class FoodMatch(BaseModel):
    """A previously logged food matched by a search query."""

    food: FoodEntry
    score: int


class NutritionInfo(BaseModel):
    """A food record returned by the online nutrition lookup."""

    name: str
    quantity: float
    unit: str
    calories: float
    protein: float
    fat: float
    carbs: float
