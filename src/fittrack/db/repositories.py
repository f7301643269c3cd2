"""Data access layer for fit-track."""

import json
import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.activity import ActivityLogEntry, ActivityType
from ..models.entries import (
    ExerciseEntry,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from ..models.user import GoalSet, User
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _window_clause(start: datetime | None, end: datetime | None) -> tuple[str, list]:
    """Build an inclusive date filter fragment for the entry tables."""
    clause = ""
    params: list = []
    if start is not None:
        clause += " AND date >= ?"
        params.append(start.isoformat())
    if end is not None:
        clause += " AND date <= ?"
        params.append(end.isoformat())
    return clause, params


class UserRepository:
    """Repository for user accounts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user: User) -> int:
        """Create a new user.

        Raises:
            ValueError: If the username is already taken
        """
        async with connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    """
                    INSERT INTO users (username, password_hash, email, display_name)
                    VALUES (?, ?, ?, ?)
                    """,
                    (user.username, user.password_hash, user.email, user.display_name),
                )
            except aiosqlite.IntegrityError as e:
                raise ValueError("Username already exists") from e
            await db.commit()
            logger.debug("Created user %s (id=%s)", user.username, cursor.lastrowid)
            return cursor.lastrowid

    async def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def list_all(self) -> list[User]:
        """List all users."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM users ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def delete(self, user_id: int) -> bool:
        """Delete a user and, through cascades, everything they logged."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        """Convert a database row to a User."""
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            email=row["email"] or "",
            display_name=row["display_name"] or "",
            created_at=_parse_timestamp(row["created_at"]),
        )


class GoalRepository:
    """Repository for user goal sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, goal: GoalSet) -> int:
        """Create a new active goal set, deactivating the user's previous one."""
        async with connect(self.db_path) as db:
            await db.execute(
                "UPDATE user_goals SET is_active = 0 WHERE user_id = ? AND is_active = 1",
                (goal.user_id,),
            )
            logger.debug("Deactivated previous goal sets for user %s", goal.user_id)
            cursor = await db.execute(
                """
                INSERT INTO user_goals
                (user_id, target_weight, target_daily_calories, target_daily_protein,
                 target_weekly_workouts, is_active)
                VALUES (?, ?, ?, ?, ?, 1)
                """,
                (
                    goal.user_id,
                    goal.target_weight,
                    goal.target_daily_calories,
                    goal.target_daily_protein,
                    goal.target_weekly_workouts,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get_active(self, user_id: int) -> GoalSet | None:
        """Get the user's active goal set."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM user_goals
                WHERE user_id = ? AND is_active = 1
                ORDER BY id DESC LIMIT 1
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_goal(row)

    async def update(self, goal: GoalSet) -> None:
        """Update target values of an existing goal set."""
        if goal.id is None:
            raise ValueError("Goal set must have an ID to update")

        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE user_goals SET
                    target_weight = ?, target_daily_calories = ?,
                    target_daily_protein = ?, target_weekly_workouts = ?
                WHERE id = ?
                """,
                (
                    goal.target_weight,
                    goal.target_daily_calories,
                    goal.target_daily_protein,
                    goal.target_weekly_workouts,
                    goal.id,
                ),
            )
            await db.commit()

    def _row_to_goal(self, row: aiosqlite.Row) -> GoalSet:
        """Convert a database row to a GoalSet."""
        return GoalSet(
            id=row["id"],
            user_id=row["user_id"],
            target_weight=row["target_weight"],
            target_daily_calories=row["target_daily_calories"],
            target_daily_protein=row["target_daily_protein"],
            target_weekly_workouts=row["target_weekly_workouts"],
            is_active=bool(row["is_active"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class WeightEntryRepository:
    """Repository for body-weight readings."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, entry: WeightEntry) -> int:
        """Store a weight reading."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO weight_entries (user_id, weight, date, notes)
                VALUES (?, ?, ?, ?)
                """,
                (entry.user_id, entry.weight, entry.date.isoformat(), entry.notes),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, entry_id: int) -> WeightEntry | None:
        """Get a weight reading by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM weight_entries WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def list_for_user(
        self,
        user_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[WeightEntry]:
        """List a user's readings in ``[start, end]``, newest first."""
        clause, params = _window_clause(start, end)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT * FROM weight_entries WHERE user_id = ?{clause} "
                "ORDER BY date DESC, id DESC",
                (user_id, *params),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def update(self, entry: WeightEntry) -> None:
        """Update an existing reading."""
        if entry.id is None:
            raise ValueError("Weight entry must have an ID to update")

        async with connect(self.db_path) as db:
            await db.execute(
                "UPDATE weight_entries SET weight = ?, date = ?, notes = ? WHERE id = ?",
                (entry.weight, entry.date.isoformat(), entry.notes, entry.id),
            )
            await db.commit()

    async def delete(self, entry_id: int) -> bool:
        """Delete a reading. Returns False if it did not exist."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM weight_entries WHERE id = ?", (entry_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_entry(self, row: aiosqlite.Row) -> WeightEntry:
        """Convert a database row to a WeightEntry."""
        return WeightEntry.from_dict(dict(row))


class NutritionEntryRepository:
    """Repository for logged food items."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, entry: NutritionEntry) -> int:
        """Store a food item."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO nutrition_entries
                (user_id, name, serving_size, calories, protein, carbs, fat, meal_type, date)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.user_id,
                    entry.name,
                    entry.serving_size,
                    entry.calories,
                    entry.protein,
                    entry.carbs,
                    entry.fat,
                    entry.meal_type.value,
                    entry.date.isoformat(),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, entry_id: int) -> NutritionEntry | None:
        """Get a food item by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM nutrition_entries WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def list_for_user(
        self,
        user_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[NutritionEntry]:
        """List a user's food items in ``[start, end]``, newest first."""
        clause, params = _window_clause(start, end)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT * FROM nutrition_entries WHERE user_id = ?{clause} "
                "ORDER BY date DESC, id DESC",
                (user_id, *params),
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def update(self, entry: NutritionEntry) -> None:
        """Update an existing food item."""
        if entry.id is None:
            raise ValueError("Nutrition entry must have an ID to update")

        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE nutrition_entries SET
                    name = ?, serving_size = ?, calories = ?, protein = ?,
                    carbs = ?, fat = ?, meal_type = ?, date = ?
                WHERE id = ?
                """,
                (
                    entry.name,
                    entry.serving_size,
                    entry.calories,
                    entry.protein,
                    entry.carbs,
                    entry.fat,
                    entry.meal_type.value,
                    entry.date.isoformat(),
                    entry.id,
                ),
            )
            await db.commit()

    async def delete(self, entry_id: int) -> bool:
        """Delete a food item. Returns False if it did not exist."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM nutrition_entries WHERE id = ?", (entry_id,)
            )
            await db.commit()
            return cursor.rowcount > 0

    def _row_to_entry(self, row: aiosqlite.Row) -> NutritionEntry:
        """Convert a database row to a NutritionEntry."""
        return NutritionEntry.from_dict(dict(row))


class WorkoutEntryRepository:
    """Repository for workouts and their exercises."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, workout: WorkoutEntry) -> int:
        """Store a workout together with its exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO workout_entries (user_id, name, type, duration, date, notes)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    workout.user_id,
                    workout.name,
                    workout.type.value,
                    workout.duration,
                    workout.date.isoformat(),
                    workout.notes,
                ),
            )
            workout_id = cursor.lastrowid
            await self._insert_exercises(db, workout_id, workout.exercises)
            await db.commit()
            logger.debug(
                "Created workout %s with %d exercises", workout_id, len(workout.exercises)
            )
            return workout_id

    async def get(self, workout_id: int) -> WorkoutEntry | None:
        """Get a workout, with exercises, by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM workout_entries WHERE id = ?", (workout_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            exercises = await self._fetch_exercises(db, [workout_id])
            return self._row_to_workout(row, exercises.get(workout_id, []))

    async def list_for_user(
        self,
        user_id: int,
        workout_type: WorkoutType | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[WorkoutEntry]:
        """List a user's workouts, with exercises, newest first."""
        clause, params = _window_clause(start, end)
        if workout_type is not None:
            clause += " AND type = ?"
            params.append(workout_type.value)

        async with connect(self.db_path) as db:
            cursor = await db.execute(
                f"SELECT * FROM workout_entries WHERE user_id = ?{clause} "
                "ORDER BY date DESC, id DESC",
                (user_id, *params),
            )
            rows = await cursor.fetchall()
            exercises = await self._fetch_exercises(db, [row["id"] for row in rows])
            return [
                self._row_to_workout(row, exercises.get(row["id"], [])) for row in rows
            ]

    async def update(self, workout: WorkoutEntry, replace_exercises: bool = False) -> None:
        """Update a workout; optionally replace its exercise list."""
        if workout.id is None:
            raise ValueError("Workout must have an ID to update")

        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE workout_entries SET
                    name = ?, type = ?, duration = ?, date = ?, notes = ?
                WHERE id = ?
                """,
                (
                    workout.name,
                    workout.type.value,
                    workout.duration,
                    workout.date.isoformat(),
                    workout.notes,
                    workout.id,
                ),
            )
            if replace_exercises:
                await db.execute(
                    "DELETE FROM exercise_entries WHERE workout_id = ?", (workout.id,)
                )
                await self._insert_exercises(db, workout.id, workout.exercises)
            await db.commit()

    async def delete(self, workout_id: int) -> bool:
        """Delete a workout; its exercises go with it."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM workout_entries WHERE id = ?", (workout_id,)
            )
            await db.commit()
            logger.debug("Deleted workout %s and its exercises", workout_id)
            return cursor.rowcount > 0

    async def _insert_exercises(
        self,
        db: aiosqlite.Connection,
        workout_id: int,
        exercises: list[ExerciseEntry],
    ) -> None:
        for exercise in exercises:
            cursor = await db.execute(
                """
                INSERT INTO exercise_entries
                (workout_id, name, sets, reps, weight, duration, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout_id,
                    exercise.name,
                    exercise.sets,
                    exercise.reps,
                    exercise.weight,
                    exercise.duration,
                    exercise.notes,
                ),
            )
            exercise.id = cursor.lastrowid
            exercise.workout_id = workout_id

    async def _fetch_exercises(
        self, db: aiosqlite.Connection, workout_ids: list[int]
    ) -> dict[int, list[ExerciseEntry]]:
        """Load exercises for several workouts in one query."""
        if not workout_ids:
            return {}
        placeholders = ", ".join("?" for _ in workout_ids)
        cursor = await db.execute(
            f"SELECT * FROM exercise_entries WHERE workout_id IN ({placeholders}) "
            "ORDER BY id",
            workout_ids,
        )
        rows = await cursor.fetchall()
        grouped: dict[int, list[ExerciseEntry]] = {}
        for row in rows:
            grouped.setdefault(row["workout_id"], []).append(
                ExerciseEntry.from_dict(dict(row))
            )
        return grouped

    def _row_to_workout(
        self, row: aiosqlite.Row, exercises: list[ExerciseEntry]
    ) -> WorkoutEntry:
        """Convert a database row to a WorkoutEntry."""
        workout = WorkoutEntry.from_dict(dict(row))
        workout.exercises = exercises
        return workout


class ActivityLogRepository:
    """Repository for the audit trail of entry changes."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, entry: ActivityLogEntry) -> int:
        """Append an audit record."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO activity_log (user_id, date, activity_type, description, "values")
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    entry.user_id,
                    entry.date.isoformat(),
                    entry.activity_type.value,
                    entry.description,
                    json.dumps(entry.values),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_recent(self, user_id: int, limit: int = 10) -> list[ActivityLogEntry]:
        """Most recent audit records for a user."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                SELECT * FROM activity_log WHERE user_id = ?
                ORDER BY date DESC, id DESC LIMIT ?
                """,
                (user_id, limit),
            )
            rows = await cursor.fetchall()
            return [
                ActivityLogEntry(
                    id=row["id"],
                    user_id=row["user_id"],
                    date=datetime.fromisoformat(row["date"]),
                    activity_type=ActivityType(row["activity_type"]),
                    description=row["description"],
                    values=json.loads(row["values"] or "{}"),
                )
                for row in rows
            ]
