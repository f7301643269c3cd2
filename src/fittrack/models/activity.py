"""Unified activity models for history and recent-activity views."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ActivityType(str, Enum):
    """Kind of entry an activity was derived from."""

    WEIGHT = "weight"
    NUTRITION = "nutrition"
    WORKOUT = "workout"


@dataclass
class ActivityRecord:
    """Uniform projection of a weight, nutrition or workout entry."""

    id: int | None
    type: ActivityType
    timestamp: datetime
    title: str
    metric: str
    value: str | int | float
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "date": self.timestamp.strftime("%b %d, %Y"),
            "time": self.timestamp.strftime("%H:%M"),
            "title": self.title,
            "metric": self.metric,
            "value": self.value,
            "notes": self.notes,
        }


@dataclass
class ActivityLogEntry:
    """Persisted audit record written when entries are created, edited or deleted."""

    user_id: int
    activity_type: ActivityType
    description: str
    values: dict = field(default_factory=dict)
    date: datetime = field(default_factory=datetime.now)
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "activity_type": self.activity_type.value,
            "description": self.description,
            "values": self.values,
            "date": self.date.isoformat(),
        }
