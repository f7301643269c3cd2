"""Tests for data models."""

from datetime import datetime, timedelta, timezone

import bcrypt
import pytest

from fittrack import config
from fittrack.auth import hash_password
from fittrack.models.activity import ActivityLogEntry, ActivityType
from fittrack.models.entries import (
    ExerciseEntry,
    MealType,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
    parse_datetime,
)
from fittrack.models.user import GoalSet, User


class TestWeightEntry:
    """Tests for WeightEntry model."""

    def test_round_trip(self):
        entry = WeightEntry(user_id=1, weight=80.5, date=datetime(2024, 1, 1, 8), notes="am")
        restored = WeightEntry.from_dict(entry.to_dict())
        assert restored == entry

    def test_weight_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            WeightEntry(user_id=1, weight=0).validate()

    def test_from_dict_parses_strings(self):
        entry = WeightEntry.from_dict(
            {"user_id": 1, "weight": "79.4", "date": "2024-01-08T07:30:00"}
        )
        assert entry.weight == 79.4
        assert entry.date == datetime(2024, 1, 8, 7, 30)
        assert entry.notes == ""

    def test_from_dict_converts_utc_to_local(self):
        entry = WeightEntry.from_dict(
            {"user_id": 1, "weight": 79.4, "date": "2024-01-08T07:30:00Z"}
        )
        expected = datetime(2024, 1, 8, 7, 30, tzinfo=timezone.utc).astimezone()
        assert entry.date == expected.replace(tzinfo=None)
        assert entry.date.tzinfo is None


class TestNutritionEntry:
    """Tests for NutritionEntry model."""

    def test_from_dict_macros_as_strings(self):
        entry = NutritionEntry.from_dict(
            {
                "user_id": 1,
                "name": "Rice",
                "calories": "200",
                "protein": "4.5",
                "carbs": "",
                "meal_type": "lunch",
            }
        )
        assert entry.calories == 200
        assert entry.protein == 4.5
        assert entry.carbs == 0.0
        assert entry.meal_type == MealType.LUNCH

    def test_validation(self):
        with pytest.raises(ValueError, match="name"):
            NutritionEntry(user_id=1, name=" ", calories=10, meal_type=MealType.SNACK).validate()
        with pytest.raises(ValueError, match="Calories"):
            NutritionEntry(user_id=1, name="X", calories=-1, meal_type=MealType.SNACK).validate()
        with pytest.raises(ValueError, match="Fat"):
            NutritionEntry(
                user_id=1, name="X", calories=1, meal_type=MealType.SNACK, fat=-2
            ).validate()

    def test_to_dict(self):
        data = NutritionEntry(
            user_id=1, name="Apple", calories=95, meal_type=MealType.SNACK,
            date=datetime(2024, 1, 1, 15),
        ).to_dict()
        assert data["meal_type"] == "snack"
        assert data["date"] == "2024-01-01T15:00:00"


class TestWorkoutEntry:
    """Tests for WorkoutEntry and ExerciseEntry models."""

    def test_exercise_display(self):
        assert ExerciseEntry(name="Squat", sets=5, reps=5, weight=100.0).get_display() == (
            "5x5 @ 100kg"
        )
        assert ExerciseEntry(name="Pull-up", sets=3, reps=8).get_display() == "3x8"

    def test_round_trip_with_exercises(self):
        workout = WorkoutEntry(
            user_id=1, name="Pull day", type=WorkoutType.STRENGTH, duration=55,
            date=datetime(2024, 1, 3, 18),
            exercises=[
                ExerciseEntry(name="Row", sets=4, reps=8, weight=60.0),
                ExerciseEntry(name="Curl", sets=3, reps=12),
            ],
        )
        restored = WorkoutEntry.from_dict(workout.to_dict())
        assert restored == workout
        assert restored.exercises[1].weight is None

    def test_validation_covers_exercises(self):
        workout = WorkoutEntry(
            user_id=1, name="Bad", type=WorkoutType.HIIT, duration=20,
            exercises=[ExerciseEntry(name="Burpee", sets=0, reps=10)],
        )
        with pytest.raises(ValueError, match="Sets"):
            workout.validate()

    def test_duration_must_be_positive(self):
        with pytest.raises(ValueError, match="Duration"):
            WorkoutEntry(user_id=1, name="Walk", type=WorkoutType.CARDIO, duration=0).validate()


class TestParseDatetime:
    def test_none_is_now(self):
        before = datetime.now()
        assert parse_datetime(None) >= before

    def test_date_only(self):
        assert parse_datetime("2024-01-05") == datetime(2024, 1, 5)

    def test_passthrough(self):
        moment = datetime(2024, 1, 5, 9)
        assert parse_datetime(moment) is moment

    def test_utc_string_becomes_local_time(self):
        expected = datetime(2024, 1, 10, 23, 30, tzinfo=timezone.utc).astimezone()
        assert parse_datetime("2024-01-10T23:30:00Z") == expected.replace(tzinfo=None)

    def test_offset_string_becomes_local_time(self):
        offset = timezone(timedelta(hours=-5))
        expected = datetime(2024, 1, 10, 18, 30, tzinfo=offset).astimezone()
        parsed = parse_datetime("2024-01-10T18:30:00-05:00")
        assert parsed == expected.replace(tzinfo=None)
        assert parsed.tzinfo is None

    def test_aware_datetime_becomes_local_time(self):
        moment = datetime(2024, 1, 10, 23, 30, tzinfo=timezone.utc)
        assert parse_datetime(moment) == moment.astimezone().replace(tzinfo=None)


class TestUserAndGoals:
    """Tests for User and GoalSet models."""

    def test_user_dict_hides_hash(self):
        data = User(username="sam", password_hash="secret").to_dict()
        assert "password_hash" not in data
        assert data["display_name"] == "sam"

    def test_goal_fallbacks(self):
        goals = GoalSet(user_id=1, target_daily_calories=2000)
        assert goals.calorie_goal == 2000
        assert goals.weight_goal == config.DEFAULT_WEIGHT_GOAL
        assert goals.protein_goal == config.DEFAULT_PROTEIN_GOAL
        assert goals.workout_goal == config.DEFAULT_WORKOUT_GOAL

    def test_zero_targets_fall_back_to_defaults(self):
        goals = GoalSet(
            user_id=1,
            target_weight=0,
            target_daily_calories=0,
            target_daily_protein=0,
            target_weekly_workouts=0,
        )
        assert goals.weight_goal == config.DEFAULT_WEIGHT_GOAL
        assert goals.calorie_goal == config.DEFAULT_CALORIE_GOAL
        assert goals.protein_goal == config.DEFAULT_PROTEIN_GOAL
        assert goals.workout_goal == config.DEFAULT_WORKOUT_GOAL

    def test_defaults(self):
        goals = GoalSet.defaults(7)
        assert goals.user_id == 7
        assert goals.to_dict()["effective"]["calories"] == config.DEFAULT_CALORIE_GOAL

    def test_negative_target_rejected(self):
        with pytest.raises(ValueError, match="target_weekly_workouts"):
            GoalSet(user_id=1, target_weekly_workouts=-1).validate()


class TestActivityLogEntry:
    def test_to_dict(self):
        entry = ActivityLogEntry(
            user_id=1,
            activity_type=ActivityType.NUTRITION,
            description="Added Apple",
            values={"calories": 95},
            date=datetime(2024, 1, 1, 12),
        )
        data = entry.to_dict()
        assert data["activity_type"] == "nutrition"
        assert data["values"] == {"calories": 95}


class TestPasswords:
    def test_hash_is_bcrypt(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert bcrypt.checkpw(b"correct horse", hashed.encode("utf-8"))
        assert not bcrypt.checkpw(b"wrong", hashed.encode("utf-8"))

    def test_long_password_truncated(self):
        hashed = hash_password("x" * 100)
        assert bcrypt.checkpw(b"x" * 72, hashed.encode("utf-8"))
