"""User account and goal models."""

from dataclasses import dataclass
from datetime import datetime

from .. import config


@dataclass
class User:
    """A user account."""

    username: str
    password_hash: str
    email: str = ""
    display_name: str = ""
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Public representation; never includes the password hash."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "display_name": self.display_name or self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class GoalSet:
    """Target values a user tracks progress against.

    Any target left as None or 0 falls back to the configured default when
    read through the ``*_goal`` properties, so views always have a number to
    work with. A stored 0 therefore means "not set".
    """

    user_id: int
    target_weight: float | None = None  # in kg
    target_daily_calories: int | None = None
    target_daily_protein: float | None = None  # in grams
    target_weekly_workouts: int | None = None
    is_active: bool = True
    id: int | None = None
    created_at: datetime | None = None

    @property
    def weight_goal(self) -> float:
        return float(self.target_weight or config.DEFAULT_WEIGHT_GOAL)

    @property
    def calorie_goal(self) -> int:
        return self.target_daily_calories or config.DEFAULT_CALORIE_GOAL

    @property
    def protein_goal(self) -> float:
        return float(self.target_daily_protein or config.DEFAULT_PROTEIN_GOAL)

    @property
    def workout_goal(self) -> int:
        return self.target_weekly_workouts or config.DEFAULT_WORKOUT_GOAL

    def validate(self) -> None:
        for name in (
            "target_weight",
            "target_daily_calories",
            "target_daily_protein",
            "target_weekly_workouts",
        ):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "target_weight": self.target_weight,
            "target_daily_calories": self.target_daily_calories,
            "target_daily_protein": self.target_daily_protein,
            "target_weekly_workouts": self.target_weekly_workouts,
            "is_active": self.is_active,
            "effective": {
                "weight": self.weight_goal,
                "calories": self.calorie_goal,
                "protein": self.protein_goal,
                "workouts": self.workout_goal,
            },
        }

    @classmethod
    def defaults(cls, user_id: int) -> "GoalSet":
        """Goal set used when a user has never saved one."""
        return cls(
            user_id=user_id,
            target_weight=config.DEFAULT_WEIGHT_GOAL,
            target_daily_calories=config.DEFAULT_CALORIE_GOAL,
            target_daily_protein=config.DEFAULT_PROTEIN_GOAL,
            target_weekly_workouts=config.DEFAULT_WORKOUT_GOAL,
        )
