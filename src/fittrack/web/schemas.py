"""Request bodies for the REST API."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..models.entries import ExerciseEntry, MealType, WorkoutType, to_local_naive


def to_changes(body: BaseModel) -> dict:
    """Fields the client actually sent, ready for ``dataclasses.replace``.

    Dates are stored in local wall-clock time, so an offset is converted away.
    """
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    if "date" in changes:
        changes["date"] = to_local_naive(changes["date"])
    return changes


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    email: str = ""
    display_name: str = ""


class GoalsRequest(BaseModel):
    target_weight: float | None = Field(None, ge=0)
    target_daily_calories: int | None = Field(None, ge=0)
    target_daily_protein: float | None = Field(None, ge=0)
    target_weekly_workouts: int | None = Field(None, ge=0)


class WeightCreate(BaseModel):
    weight: float = Field(gt=0)
    date: datetime | None = None
    notes: str = ""


class WeightUpdate(BaseModel):
    weight: float | None = Field(None, gt=0)
    date: datetime | None = None
    notes: str | None = None


class NutritionCreate(BaseModel):
    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    meal_type: MealType
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    serving_size: str = ""
    date: datetime | None = None


class NutritionUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    calories: int | None = Field(None, ge=0)
    meal_type: MealType | None = None
    protein: float | None = Field(None, ge=0)
    carbs: float | None = Field(None, ge=0)
    fat: float | None = Field(None, ge=0)
    serving_size: str | None = None
    date: datetime | None = None


class ExerciseIn(BaseModel):
    name: str = Field(min_length=1)
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    weight: float | None = Field(None, ge=0)
    duration: int | None = Field(None, ge=0)
    notes: str = ""

    def to_entry(self) -> ExerciseEntry:
        return ExerciseEntry(
            name=self.name,
            sets=self.sets,
            reps=self.reps,
            weight=self.weight,
            duration=self.duration,
            notes=self.notes,
        )


class WorkoutCreate(BaseModel):
    name: str = Field(min_length=1)
    type: WorkoutType
    duration: int = Field(gt=0)
    date: datetime | None = None
    notes: str = ""
    exercises: list[ExerciseIn] = Field(min_length=1)


class WorkoutUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    type: WorkoutType | None = None
    duration: int | None = Field(None, gt=0)
    date: datetime | None = None
    notes: str | None = None
    exercises: list[ExerciseIn] | None = Field(None, min_length=1)
