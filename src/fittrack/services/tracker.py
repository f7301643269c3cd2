"""Tracker service: entry bookkeeping and derived views for one user at a time."""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from .. import config
from ..analytics import reports
from ..analytics.activity_feed import (
    compile_feed,
    export_filename,
    filter_feed,
    paginate_feed,
    to_csv,
)
from ..auth import hash_password
from ..db.engine import get_db_path
from ..db.repositories import (
    ActivityLogRepository,
    GoalRepository,
    NutritionEntryRepository,
    UserRepository,
    WeightEntryRepository,
    WorkoutEntryRepository,
)
from ..models.activity import ActivityLogEntry, ActivityRecord, ActivityType
from ..models.entries import (
    ExerciseEntry,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from ..models.user import GoalSet, User

logger = logging.getLogger(__name__)

# Number of entries pulled for a CSV export
EXPORT_LIMIT = 1000


class TrackerService:
    """Reads a user's rows through the repositories and computes views over them.

    Every mutation is also written to the activity log. ``clock`` supplies
    the reference "now" for all date windows.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db_path = db_path or get_db_path()
        self.clock = clock
        self.users = UserRepository(self.db_path)
        self.goals = GoalRepository(self.db_path)
        self.weights = WeightEntryRepository(self.db_path)
        self.meals = NutritionEntryRepository(self.db_path)
        self.workouts = WorkoutEntryRepository(self.db_path)
        self.activity_log = ActivityLogRepository(self.db_path)

    # Users and goals

    async def register_user(
        self,
        username: str,
        password: str,
        email: str = "",
        display_name: str = "",
    ) -> User:
        """Create an account. Raises ValueError if the username is taken."""
        if await self.users.get_by_username(username):
            raise ValueError("Username already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            email=email,
            display_name=display_name,
        )
        user.id = await self.users.create(user)
        logger.info("Registered user %s (id=%s)", username, user.id)
        return await self.users.get(user.id)

    async def get_user(self, user_id: int) -> User | None:
        return await self.users.get(user_id)

    async def get_goals(self, user_id: int) -> GoalSet:
        """The active goal set, or the configured defaults when none is saved."""
        goal = await self.goals.get_active(user_id)
        return goal or GoalSet.defaults(user_id)

    async def set_goals(self, user_id: int, **targets) -> GoalSet:
        """Save a new active goal set, replacing the current one."""
        goal = GoalSet(user_id=user_id, **targets)
        goal.validate()
        goal.id = await self.goals.create(goal)
        logger.info("New goal set %s for user %s", goal.id, user_id)
        return await self.goals.get_active(user_id)

    async def update_goals(self, user_id: int, changes: dict) -> GoalSet:
        """Patch the active goal set in place (creating one if needed)."""
        current = await self.goals.get_active(user_id)
        if current is None:
            defaults = GoalSet.defaults(user_id)
            targets = {
                "target_weight": defaults.target_weight,
                "target_daily_calories": defaults.target_daily_calories,
                "target_daily_protein": defaults.target_daily_protein,
                "target_weekly_workouts": defaults.target_weekly_workouts,
            }
            targets.update(changes)
            return await self.set_goals(user_id, **targets)

        updated = replace(current, **changes)
        updated.validate()
        await self.goals.update(updated)
        return await self.goals.get_active(user_id)

    # Weight entries

    async def add_weight(self, entry: WeightEntry) -> WeightEntry:
        entry.validate()
        entry.id = await self.weights.create(entry)
        await self._log(
            entry.user_id,
            ActivityType.WEIGHT,
            "Weight entry recorded",
            {"weight": entry.weight, "date": entry.date.date().isoformat()},
        )
        return entry

    async def get_weight(self, user_id: int, entry_id: int) -> WeightEntry | None:
        entry = await self.weights.get(entry_id)
        return entry if entry and entry.user_id == user_id else None

    async def list_weights(self, user_id: int, window: str = "all") -> list[dict]:
        """Readings for a window preset, newest first, with change vs previous."""
        entries = await self.weights.list_for_user(user_id)
        return reports.weight_history(entries, window, self.clock())

    async def update_weight(
        self, user_id: int, entry_id: int, changes: dict
    ) -> WeightEntry | None:
        entry = await self.get_weight(user_id, entry_id)
        if entry is None:
            return None
        updated = replace(entry, **changes)
        updated.validate()
        await self.weights.update(updated)
        await self._log(
            user_id,
            ActivityType.WEIGHT,
            "Weight entry updated",
            {"weight": updated.weight, "date": updated.date.date().isoformat()},
        )
        return updated

    async def delete_weight(self, user_id: int, entry_id: int) -> bool:
        entry = await self.get_weight(user_id, entry_id)
        if entry is None or not await self.weights.delete(entry_id):
            return False
        await self._log(
            user_id,
            ActivityType.WEIGHT,
            "Weight entry deleted",
            {"weight": entry.weight, "date": entry.date.date().isoformat()},
        )
        return True

    # Nutrition entries

    async def add_meal(self, entry: NutritionEntry) -> NutritionEntry:
        entry.validate()
        entry.id = await self.meals.create(entry)
        await self._log(
            entry.user_id,
            ActivityType.NUTRITION,
            f"Added {entry.name}",
            {
                "food": entry.name,
                "calories": entry.calories,
                "protein": entry.protein,
                "date": entry.date.date().isoformat(),
            },
        )
        return entry

    async def get_meal(self, user_id: int, entry_id: int) -> NutritionEntry | None:
        entry = await self.meals.get(entry_id)
        return entry if entry and entry.user_id == user_id else None

    async def list_meals(self, user_id: int, window: str = "today") -> list[NutritionEntry]:
        start, end = reports.resolve_preset(window, self.clock())
        return await self.meals.list_for_user(user_id, start, end)

    async def update_meal(
        self, user_id: int, entry_id: int, changes: dict
    ) -> NutritionEntry | None:
        entry = await self.get_meal(user_id, entry_id)
        if entry is None:
            return None
        updated = replace(entry, **changes)
        updated.validate()
        await self.meals.update(updated)
        await self._log(
            user_id,
            ActivityType.NUTRITION,
            f"Updated {updated.name}",
            {
                "food": updated.name,
                "calories": updated.calories,
                "protein": updated.protein,
                "date": updated.date.date().isoformat(),
            },
        )
        return updated

    async def delete_meal(self, user_id: int, entry_id: int) -> bool:
        entry = await self.get_meal(user_id, entry_id)
        if entry is None or not await self.meals.delete(entry_id):
            return False
        await self._log(
            user_id,
            ActivityType.NUTRITION,
            f"Deleted {entry.name}",
            {
                "food": entry.name,
                "calories": entry.calories,
                "date": entry.date.date().isoformat(),
            },
        )
        return True

    # Workouts

    async def add_workout(self, workout: WorkoutEntry) -> WorkoutEntry:
        workout.validate()
        workout.id = await self.workouts.create(workout)
        await self._log(
            workout.user_id,
            ActivityType.WORKOUT,
            workout.name,
            {
                "type": workout.type.value,
                "duration": workout.duration,
                "exercises": len(workout.exercises),
                "date": workout.date.date().isoformat(),
            },
        )
        return await self.workouts.get(workout.id)

    async def get_workout(self, user_id: int, workout_id: int) -> WorkoutEntry | None:
        workout = await self.workouts.get(workout_id)
        return workout if workout and workout.user_id == user_id else None

    async def list_workouts(
        self, user_id: int, type_filter: str = "all"
    ) -> list[WorkoutEntry]:
        workout_type = None if type_filter == "all" else WorkoutType(type_filter)
        return await self.workouts.list_for_user(user_id, workout_type=workout_type)

    async def update_workout(
        self,
        user_id: int,
        workout_id: int,
        changes: dict,
        exercises: list[ExerciseEntry] | None = None,
    ) -> WorkoutEntry | None:
        """Patch a workout; a given exercise list replaces the existing one."""
        workout = await self.get_workout(user_id, workout_id)
        if workout is None:
            return None
        updated = replace(workout, **changes)
        if exercises is not None:
            updated.exercises = exercises
        updated.validate()
        await self.workouts.update(updated, replace_exercises=exercises is not None)
        await self._log(
            user_id,
            ActivityType.WORKOUT,
            f"Updated workout: {updated.name}",
            {
                "type": updated.type.value,
                "duration": updated.duration,
                "date": updated.date.date().isoformat(),
            },
        )
        return await self.workouts.get(workout_id)

    async def delete_workout(self, user_id: int, workout_id: int) -> bool:
        workout = await self.get_workout(user_id, workout_id)
        if workout is None or not await self.workouts.delete(workout_id):
            return False
        await self._log(
            user_id,
            ActivityType.WORKOUT,
            f"Deleted workout: {workout.name}",
            {"type": workout.type.value, "date": workout.date.date().isoformat()},
        )
        return True

    # Derived views

    async def _load_all(
        self, user_id: int
    ) -> tuple[list[WeightEntry], list[NutritionEntry], list[WorkoutEntry]]:
        return (
            await self.weights.list_for_user(user_id),
            await self.meals.list_for_user(user_id),
            await self.workouts.list_for_user(user_id),
        )

    async def weight_summary(self, user_id: int) -> dict:
        entries = await self.weights.list_for_user(user_id)
        return reports.weight_summary(entries, await self.get_goals(user_id))

    async def nutrition_summary(self, user_id: int) -> dict:
        entries = await self.meals.list_for_user(user_id)
        return reports.nutrition_summary(
            entries, await self.get_goals(user_id), self.clock()
        )

    async def weekly_calories(self, user_id: int) -> list[dict]:
        entries = await self.meals.list_for_user(user_id)
        return reports.weekly_calories(entries, self.clock())

    async def macro_distribution(self, user_id: int) -> dict:
        entries = await self.meals.list_for_user(user_id)
        return reports.macro_distribution(entries, self.clock())

    async def workout_summary(self, user_id: int) -> dict:
        entries = await self.workouts.list_for_user(user_id)
        return reports.workout_summary(
            entries, await self.get_goals(user_id), self.clock()
        )

    async def workout_type_distribution(self, user_id: int) -> list[dict]:
        entries = await self.workouts.list_for_user(user_id)
        return reports.workout_type_distribution(entries)

    async def weekly_workout_duration(self, user_id: int) -> list[dict]:
        entries = await self.workouts.list_for_user(user_id)
        return reports.weekly_workout_duration(entries, self.clock())

    async def dashboard_metrics(self, user_id: int) -> dict:
        weights, meals, workouts = await self._load_all(user_id)
        return reports.dashboard_metrics(
            weights, meals, workouts, await self.get_goals(user_id), self.clock()
        )

    async def weekly_progress(self, user_id: int) -> list[dict]:
        weights = await self.weights.list_for_user(user_id)
        meals = await self.meals.list_for_user(user_id)
        return reports.weekly_progress(weights, meals, self.clock())

    async def statistics_summary(self, user_id: int) -> dict:
        weights, meals, workouts = await self._load_all(user_id)
        return reports.statistics_summary(weights, meals, workouts, self.clock())

    async def weight_trend(self, user_id: int, period: str = "3m") -> list[dict]:
        entries = await self.weights.list_for_user(user_id)
        return reports.weight_trend(entries, period, self.clock())

    async def workout_consistency(self, user_id: int, period: str = "3m") -> list[dict]:
        entries = await self.workouts.list_for_user(user_id)
        return reports.workout_consistency(
            entries, period, await self.get_goals(user_id), self.clock()
        )

    async def nutrition_weight_correlation(self, user_id: int) -> list[dict]:
        weights = await self.weights.list_for_user(user_id)
        meals = await self.meals.list_for_user(user_id)
        return reports.nutrition_weight_correlation(weights, meals, self.clock())

    async def workout_performance(self, user_id: int) -> list[dict]:
        entries = await self.workouts.list_for_user(
            user_id, workout_type=WorkoutType.STRENGTH
        )
        return reports.workout_performance(entries)

    async def goal_progress(self, user_id: int) -> dict:
        weights, meals, workouts = await self._load_all(user_id)
        return reports.goal_progress(
            weights, meals, workouts, await self.get_goals(user_id), self.clock()
        )

    # Activity feed

    async def feed(
        self,
        user_id: int,
        activity_type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int | None = None,
    ) -> list[ActivityRecord]:
        weights, meals, workouts = await self._load_all(user_id)
        records = compile_feed(weights, meals, workouts)
        records = filter_feed(records, activity_type, date_from, date_to)
        return records[:limit] if limit is not None else records

    async def recent_activities(self, user_id: int, limit: int = 10) -> list[dict]:
        weights, meals, workouts = await self._load_all(user_id)
        return [r.to_dict() for r in compile_feed(weights, meals, workouts, limit)]

    async def history(
        self,
        user_id: int,
        activity_type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        page: int = 1,
        per_page: int = 10,
    ) -> dict:
        records = await self.feed(user_id, activity_type, date_from, date_to)
        return paginate_feed(records, page, per_page)

    async def export_history(
        self,
        user_id: int,
        activity_type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the filtered history."""
        records = await self.feed(
            user_id, activity_type, date_from, date_to, limit=EXPORT_LIMIT
        )
        filename = export_filename(config.APP_NAME, self.clock().date())
        logger.info("Exporting %d activity records for user %s", len(records), user_id)
        return filename, to_csv(records)

    async def audit_log(self, user_id: int, limit: int = 10) -> list[ActivityLogEntry]:
        return await self.activity_log.list_recent(user_id, limit)

    async def _log(
        self,
        user_id: int,
        activity_type: ActivityType,
        description: str,
        values: dict,
    ) -> None:
        await self.activity_log.create(
            ActivityLogEntry(
                user_id=user_id,
                activity_type=activity_type,
                description=description,
                values=values,
                date=self.clock(),
            )
        )
        logger.info("%s (user %s)", description, user_id)
