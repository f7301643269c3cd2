"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from fittrack.db import UserRepository, init_db
from fittrack.models.entries import (
    ExerciseEntry,
    MealType,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from fittrack.models.user import GoalSet, User

# A Wednesday; the current week starts Monday 2024-01-08
NOW = datetime(2024, 1, 10, 12, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def initialized_db(temp_db_path):
    """A temporary database with the schema and one user (id 1)."""

    async def setup():
        await init_db(temp_db_path)
        await UserRepository(temp_db_path).create(
            User(username="tester", password_hash="not-a-real-hash")
        )

    asyncio.run(setup())
    return temp_db_path


@pytest.fixture
def sample_goals():
    return GoalSet(
        user_id=1,
        target_weight=75.0,
        target_daily_calories=2500,
        target_daily_protein=150.0,
        target_weekly_workouts=5,
    )


@pytest.fixture
def sample_weights():
    """Two readings a week apart: 80 kg then 79 kg."""
    return [
        WeightEntry(user_id=1, weight=80.0, date=datetime(2024, 1, 1, 8, 0), id=1),
        WeightEntry(user_id=1, weight=79.0, date=datetime(2024, 1, 8, 8, 0), id=2),
    ]


@pytest.fixture
def sample_meals():
    """2200 kcal on 2024-01-10 and 900 kcal the day before."""
    return [
        NutritionEntry(
            user_id=1, name="Oatmeal", calories=350, meal_type=MealType.BREAKFAST,
            protein=12, carbs=60, fat=6, date=datetime(2024, 1, 10, 8, 0), id=1,
        ),
        NutritionEntry(
            user_id=1, name="Chicken salad", calories=850, meal_type=MealType.LUNCH,
            protein=60, carbs=40, fat=20, date=datetime(2024, 1, 10, 13, 0), id=2,
        ),
        NutritionEntry(
            user_id=1, name="Pasta", calories=1000, meal_type=MealType.DINNER,
            protein=30, carbs=120, fat=25, date=datetime(2024, 1, 10, 19, 0), id=3,
        ),
        NutritionEntry(
            user_id=1, name="Pizza", calories=900, meal_type=MealType.DINNER,
            protein=35, carbs=100, fat=35, date=datetime(2024, 1, 9, 19, 0), id=4,
        ),
    ]


@pytest.fixture
def sample_workouts():
    """Two strength sessions and one run; two of them in the current week."""
    return [
        WorkoutEntry(
            user_id=1, name="Push day", type=WorkoutType.STRENGTH, duration=60,
            date=datetime(2024, 1, 2, 18, 0), id=1,
            exercises=[ExerciseEntry(name="Bench Press", sets=3, reps=5, weight=75.0)],
        ),
        WorkoutEntry(
            user_id=1, name="Morning run", type=WorkoutType.CARDIO, duration=30,
            date=datetime(2024, 1, 9, 7, 0), id=2,
            exercises=[ExerciseEntry(name="Run", sets=1, reps=1, duration=30)],
        ),
        WorkoutEntry(
            user_id=1, name="Leg day", type=WorkoutType.STRENGTH, duration=50,
            date=datetime(2024, 1, 8, 18, 0), id=3,
            exercises=[
                ExerciseEntry(name="Back Squat", sets=5, reps=5, weight=100.0),
                ExerciseEntry(name="Deadlift", sets=1, reps=5, weight=140.0),
            ],
        ),
    ]
