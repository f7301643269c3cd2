"""Tests for TrackerService."""

import asyncio
import csv
import io
from datetime import date, datetime

import bcrypt
import pytest

from fittrack.models.entries import (
    ExerciseEntry,
    MealType,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from fittrack.services import TrackerService


@pytest.fixture
def service(initialized_db, now):
    return TrackerService(initialized_db, clock=lambda: now)


@pytest.fixture
def populated(service, sample_weights, sample_meals, sample_workouts):
    """Store the sample entries (ids assigned by the database)."""

    async def store():
        for entry in sample_weights:
            entry.id = None
            await service.add_weight(entry)
        for entry in sample_meals:
            entry.id = None
            await service.add_meal(entry)
        for entry in sample_workouts:
            entry.id = None
            await service.add_workout(entry)

    asyncio.run(store())
    return service


class TestAccounts:
    def test_register_hashes_password(self, service):
        user = asyncio.run(service.register_user("alex", "s3cret-pw", email="a@example.com"))
        assert user.username == "alex"
        assert bcrypt.checkpw(b"s3cret-pw", user.password_hash.encode("utf-8"))

    def test_duplicate_username(self, service):
        with pytest.raises(ValueError, match="already exists"):
            asyncio.run(service.register_user("tester", "whatever"))

    def test_concurrent_registration_rejected(self, service, monkeypatch):
        """A name taken between the lookup and the insert still fails cleanly."""

        async def not_found(username):
            return None

        monkeypatch.setattr(service.users, "get_by_username", not_found)
        with pytest.raises(ValueError, match="Username already exists"):
            asyncio.run(service.register_user("tester", "whatever"))


class TestGoals:
    def test_defaults_without_saved_goals(self, service):
        goals = asyncio.run(service.get_goals(1))
        assert goals.id is None
        assert goals.calorie_goal == 2500

    def test_set_then_patch(self, service):
        async def scenario():
            first = await service.set_goals(1, target_weight=70.0, target_daily_calories=2000)
            patched = await service.update_goals(1, {"target_weekly_workouts": 3})
            return first, patched

        first, patched = asyncio.run(scenario())
        assert patched.id == first.id
        assert patched.target_weight == 70.0
        assert patched.workout_goal == 3

    def test_patch_without_goals_creates_set(self, service):
        goals = asyncio.run(service.update_goals(1, {"target_weight": 68.0}))
        assert goals.id is not None
        assert goals.target_weight == 68.0
        assert goals.target_daily_calories == 2500

    def test_invalid_goal(self, service):
        with pytest.raises(ValueError):
            asyncio.run(service.set_goals(1, target_daily_calories=-5))


class TestEntries:
    """Tests for entry bookkeeping."""

    def test_update_is_partial(self, service):
        async def scenario():
            entry = await service.add_weight(
                WeightEntry(user_id=1, weight=80.0, date=datetime(2024, 1, 9), notes="am")
            )
            return await service.update_weight(1, entry.id, {"weight": 79.2})

        updated = asyncio.run(scenario())
        assert updated.weight == 79.2
        assert updated.notes == "am"

    def test_invalid_update_rejected(self, service):
        async def scenario():
            entry = await service.add_weight(WeightEntry(user_id=1, weight=80.0))
            await service.update_weight(1, entry.id, {"weight": -3})

        with pytest.raises(ValueError):
            asyncio.run(scenario())

    def test_other_users_entries_are_hidden(self, service):
        async def scenario():
            other = await service.register_user("other", "password1")
            entry = await service.add_meal(
                NutritionEntry(
                    user_id=other.id, name="Soup", calories=200, meal_type=MealType.LUNCH
                )
            )
            return (
                await service.get_meal(1, entry.id),
                await service.delete_meal(1, entry.id),
                await service.get_meal(other.id, entry.id),
            )

        hidden, deleted, visible = asyncio.run(scenario())
        assert hidden is None
        assert deleted is False
        assert visible is not None

    def test_missing_entries(self, service):
        assert asyncio.run(service.update_meal(1, 999, {"calories": 1})) is None
        assert asyncio.run(service.delete_workout(1, 999)) is False

    def test_workout_update_replaces_exercises(self, service):
        async def scenario():
            workout = await service.add_workout(
                WorkoutEntry(
                    user_id=1, name="Push", type=WorkoutType.STRENGTH, duration=45,
                    exercises=[ExerciseEntry(name="Bench Press", sets=3, reps=5, weight=80.0)],
                )
            )
            renamed = await service.update_workout(1, workout.id, {"name": "Push A"})
            replaced = await service.update_workout(
                1, workout.id, {},
                exercises=[ExerciseEntry(name="Dips", sets=3, reps=10)],
            )
            return renamed, replaced

        renamed, replaced = asyncio.run(scenario())
        assert renamed.name == "Push A"
        assert [ex.name for ex in renamed.exercises] == ["Bench Press"]
        assert [ex.name for ex in replaced.exercises] == ["Dips"]

    def test_mutations_are_audited(self, service):
        async def scenario():
            entry = await service.add_weight(WeightEntry(user_id=1, weight=80.0))
            await service.update_weight(1, entry.id, {"weight": 79.0})
            await service.delete_weight(1, entry.id)
            return await service.audit_log(1)

        log = asyncio.run(scenario())
        assert [e.description for e in log] == [
            "Weight entry deleted",
            "Weight entry updated",
            "Weight entry recorded",
        ]


class TestViews:
    """Tests for views computed from stored entries."""

    def test_dashboard(self, populated):
        dashboard = asyncio.run(populated.dashboard_metrics(1))
        assert dashboard["metrics"] == {"calories": 2200, "weight": 79.0, "workouts": 2}

    def test_list_weights_and_meals(self, populated):
        weights = asyncio.run(populated.list_weights(1, "all"))
        assert [w["weight"] for w in weights] == [79.0, 80.0]
        meals = asyncio.run(populated.list_meals(1, "today"))
        assert {m.name for m in meals} == {"Oatmeal", "Chicken salad", "Pasta"}

    def test_list_workouts_by_type(self, populated):
        cardio = asyncio.run(populated.list_workouts(1, "cardio"))
        assert [w.name for w in cardio] == ["Morning run"]
        with pytest.raises(ValueError):
            asyncio.run(populated.list_workouts(1, "yoga"))

    def test_statistics(self, populated):
        stats = asyncio.run(populated.statistics_summary(1))
        assert stats["total_workouts"] == 3
        assert stats["weight_change"] == -1.0

    def test_workout_performance(self, populated):
        rows = asyncio.run(populated.workout_performance(1))
        assert [r["date"] for r in rows] == ["Jan 02", "Jan 08"]

    def test_recent_activities(self, populated):
        recent = asyncio.run(populated.recent_activities(1, limit=3))
        assert [r["title"] for r in recent] == [
            "Pasta (dinner)",
            "Chicken salad (lunch)",
            "Oatmeal (breakfast)",
        ]

    def test_history_pages(self, populated):
        page = asyncio.run(
            populated.history(1, "nutrition", date(2024, 1, 9), date(2024, 1, 10), page=2, per_page=3)
        )
        assert page["total"] == 4
        assert [e["title"] for e in page["entries"]] == ["Pizza (dinner)"]

    def test_export(self, populated):
        filename, content = asyncio.run(populated.export_history(1, "workout"))
        assert filename == "fit-track-history-2024-01-10.csv"
        rows = list(csv.reader(io.StringIO(content)))
        assert len(rows) == 4
        assert rows[1][2] == "Morning run"
