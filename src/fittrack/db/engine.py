"""Database engine setup and initialization."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from .. import config

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        if config.DB_PATH:
            return Path(config.DB_PATH)
        data_dir = config.DATA_DIR
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fittrack.db"


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection with foreign keys enforced and Row access."""
    async with aiosqlite.connect(db_path) as db:
        # Required per connection for ON DELETE CASCADE
        await db.execute("PRAGMA foreign_keys = ON")
        db.row_factory = aiosqlite.Row
        yield db


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    cursor = await db.execute("PRAGMA table_info(exercise_entries)")
    columns = await cursor.fetchall()
    exercise_columns = {col[1] for col in columns}

    # Cardio duration and notes were added after the first release
    if "duration" not in exercise_columns:
        await db.execute("ALTER TABLE exercise_entries ADD COLUMN duration INTEGER")
    if "notes" not in exercise_columns:
        await db.execute("ALTER TABLE exercise_entries ADD COLUMN notes TEXT DEFAULT ''")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    logger.info("Initializing database at %s", db_path)

    async with connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                email TEXT DEFAULT '',
                display_name TEXT DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Goal sets; only one row per user has is_active = 1
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_goals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                target_weight REAL,
                target_daily_calories INTEGER,
                target_daily_protein REAL,
                target_weekly_workouts INTEGER,
                is_active INTEGER DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS weight_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                weight REAL NOT NULL CHECK (weight > 0),
                date TIMESTAMP NOT NULL,
                notes TEXT DEFAULT '',
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS nutrition_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                serving_size TEXT DEFAULT '',
                calories INTEGER NOT NULL CHECK (calories >= 0),
                protein REAL DEFAULT 0,
                carbs REAL DEFAULT 0,
                fat REAL DEFAULT 0,
                meal_type TEXT NOT NULL,
                date TIMESTAMP NOT NULL,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                duration INTEGER NOT NULL CHECK (duration > 0),
                date TIMESTAMP NOT NULL,
                notes TEXT DEFAULT '',
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                workout_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                sets INTEGER NOT NULL,
                reps INTEGER NOT NULL,
                weight REAL,
                FOREIGN KEY (workout_id) REFERENCES workout_entries(id) ON DELETE CASCADE
            )
        """)

        # Audit trail of create/update/delete operations
        await db.execute("""
            CREATE TABLE IF NOT EXISTS activity_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                date TIMESTAMP NOT NULL,
                activity_type TEXT NOT NULL,
                description TEXT NOT NULL,
                "values" TEXT DEFAULT '{}',
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_weight_entries_user_date
            ON weight_entries(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_nutrition_entries_user_date
            ON nutrition_entries(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_entries_user_date
            ON workout_entries(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_entries_workout
            ON exercise_entries(workout_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_user_goals_user
            ON user_goals(user_id, is_active)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_activity_log_user_date
            ON activity_log(user_id, date)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)
