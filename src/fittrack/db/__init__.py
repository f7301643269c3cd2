"""Database layer for fit-track."""

from .engine import connect, get_db_path, init_db
from .repositories import (
    ActivityLogRepository,
    GoalRepository,
    NutritionEntryRepository,
    UserRepository,
    WeightEntryRepository,
    WorkoutEntryRepository,
)

__all__ = [
    "ActivityLogRepository",
    "connect",
    "get_db_path",
    "GoalRepository",
    "init_db",
    "NutritionEntryRepository",
    "UserRepository",
    "WeightEntryRepository",
    "WorkoutEntryRepository",
]
