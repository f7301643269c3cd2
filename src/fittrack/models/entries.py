"""Logged entry models: weight readings, meals and workouts."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MealType(str, Enum):
    """Meal slot a nutrition entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class WorkoutType(str, Enum):
    """Workout category."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    HIIT = "hiit"
    SPORT = "sport"
    OTHER = "other"


# Chart colors per workout type
WORKOUT_TYPE_COLORS = {
    WorkoutType.STRENGTH.value: "#1a56db",
    WorkoutType.CARDIO.value: "#f59e0b",
    WorkoutType.FLEXIBILITY.value: "#15803d",
    WorkoutType.HIIT.value: "#ef4444",
    WorkoutType.SPORT.value: "#8b5cf6",
    WorkoutType.OTHER.value: "#6b7280",
}


def parse_datetime(value: datetime | str | None) -> datetime:
    """Parse an ISO date/datetime string; None means now.

    Values carrying a UTC offset are converted to naive local wall-clock
    time, which is how entry dates are stored.
    """
    if value is None:
        return datetime.now()
    if isinstance(value, str):
        # Accept a trailing Z from browser clients
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return to_local_naive(value)


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _optional_float(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass
class WeightEntry:
    """A single body-weight reading (kg)."""

    user_id: int
    weight: float
    date: datetime = field(default_factory=datetime.now)
    notes: str = ""
    id: int | None = None

    def validate(self) -> None:
        if self.weight <= 0:
            raise ValueError("Weight must be positive")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "weight": self.weight,
            "date": self.date.isoformat(),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WeightEntry":
        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            weight=float(data["weight"]),
            date=parse_datetime(data.get("date")),
            notes=data.get("notes") or "",
        )


@dataclass
class NutritionEntry:
    """A logged food item with calories and macros (grams)."""

    user_id: int
    name: str
    calories: int
    meal_type: MealType
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    serving_size: str = ""
    date: datetime = field(default_factory=datetime.now)
    id: int | None = None

    def validate(self) -> None:
        if not self.name.strip():
            raise ValueError("Food name is required")
        if self.calories < 0:
            raise ValueError("Calories must be non-negative")
        for macro in ("protein", "carbs", "fat"):
            if getattr(self, macro) < 0:
                raise ValueError(f"{macro.capitalize()} must be non-negative")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "serving_size": self.serving_size,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "meal_type": self.meal_type.value,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "NutritionEntry":
        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            serving_size=data.get("serving_size") or "",
            calories=int(data["calories"]),
            # Macros may arrive as decimal strings
            protein=float(data.get("protein") or 0),
            carbs=float(data.get("carbs") or 0),
            fat=float(data.get("fat") or 0),
            meal_type=MealType(data["meal_type"]),
            date=parse_datetime(data.get("date")),
        )


@dataclass
class ExerciseEntry:
    """One exercise performed within a workout."""

    name: str
    sets: int
    reps: int
    weight: float | None = None  # in kg
    duration: int | None = None  # minutes, for cardio exercises
    notes: str = ""
    workout_id: int | None = None
    id: int | None = None

    def validate(self) -> None:
        if not self.name.strip():
            raise ValueError("Exercise name is required")
        if self.sets <= 0:
            raise ValueError("Sets must be positive")
        if self.reps <= 0:
            raise ValueError("Reps must be positive")
        if self.weight is not None and self.weight < 0:
            raise ValueError("Exercise weight must be non-negative")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "duration": self.duration,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseEntry":
        return cls(
            id=data.get("id"),
            workout_id=data.get("workout_id"),
            name=data["name"],
            sets=int(data["sets"]),
            reps=int(data["reps"]),
            weight=_optional_float(data.get("weight")),
            duration=data.get("duration"),
            notes=data.get("notes") or "",
        )

    def get_display(self) -> str:
        """Short form like '3x5 @ 80kg'."""
        text = f"{self.sets}x{self.reps}"
        if self.weight:
            text += f" @ {self.weight:g}kg"
        return text


@dataclass
class WorkoutEntry:
    """A workout session owning zero or more exercises."""

    user_id: int
    name: str
    type: WorkoutType
    duration: int  # minutes
    date: datetime = field(default_factory=datetime.now)
    notes: str = ""
    exercises: list[ExerciseEntry] = field(default_factory=list)
    id: int | None = None

    def validate(self) -> None:
        if not self.name.strip():
            raise ValueError("Workout name is required")
        if self.duration <= 0:
            raise ValueError("Duration must be positive")
        for exercise in self.exercises:
            exercise.validate()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "type": self.type.value,
            "duration": self.duration,
            "date": self.date.isoformat(),
            "notes": self.notes,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "WorkoutEntry":
        return cls(
            id=id if id is not None else data.get("id"),
            user_id=data["user_id"],
            name=data["name"],
            type=WorkoutType(data["type"]),
            duration=int(data["duration"]),
            date=parse_datetime(data.get("date")),
            notes=data.get("notes") or "",
            exercises=[ExerciseEntry.from_dict(ex) for ex in data.get("exercises", [])],
        )
