"""Data models for fit-track."""

from .activity import ActivityLogEntry, ActivityRecord, ActivityType
from .entries import (
    ExerciseEntry,
    MealType,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from .user import GoalSet, User

__all__ = [
    "ActivityLogEntry",
    "ActivityRecord",
    "ActivityType",
    "ExerciseEntry",
    "GoalSet",
    "MealType",
    "NutritionEntry",
    "User",
    "WeightEntry",
    "WorkoutEntry",
    "WorkoutType",
]
