"""Unified activity feed across weight, nutrition and workout entries."""

import csv
import io
from collections.abc import Sequence
from datetime import date, datetime

from ..models.activity import ActivityRecord, ActivityType
from ..models.entries import NutritionEntry, WeightEntry, WorkoutEntry

CSV_HEADER = ["Date", "ActivityType", "Description", "Values"]


def format_number(value: float | int) -> str:
    """Render 80.0 as '80' and 80.5 as '80.5', keeping every logged digit."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def weight_to_record(entry: WeightEntry) -> ActivityRecord:
    return ActivityRecord(
        id=entry.id,
        type=ActivityType.WEIGHT,
        timestamp=entry.date,
        title="Weight Log",
        metric="Weight",
        value=f"{format_number(entry.weight)} kg",
        notes=entry.notes,
    )


def nutrition_to_record(entry: NutritionEntry) -> ActivityRecord:
    return ActivityRecord(
        id=entry.id,
        type=ActivityType.NUTRITION,
        timestamp=entry.date,
        title=f"{entry.name} ({entry.meal_type.value})",
        metric="Calories",
        value=entry.calories,
        notes="",
    )


def workout_to_record(entry: WorkoutEntry) -> ActivityRecord:
    return ActivityRecord(
        id=entry.id,
        type=ActivityType.WORKOUT,
        timestamp=entry.date,
        title=entry.name,
        metric="Duration",
        value=f"{entry.duration} minutes",
        notes=entry.notes,
    )


def compile_feed(
    weight_entries: Sequence[WeightEntry],
    nutrition_entries: Sequence[NutritionEntry],
    workout_entries: Sequence[WorkoutEntry],
    limit: int | None = None,
) -> list[ActivityRecord]:
    """Merge all entry kinds into one newest-first feed.

    Records with equal timestamps keep their input order (weights, then
    meals, then workouts, each in the order given).
    """
    records = (
        [weight_to_record(e) for e in weight_entries]
        + [nutrition_to_record(e) for e in nutrition_entries]
        + [workout_to_record(e) for e in workout_entries]
    )
    # sorted() is stable, including with reverse=True
    records = sorted(records, key=lambda r: r.timestamp, reverse=True)
    if limit is not None:
        records = records[: max(limit, 0)]
    return records


def filter_feed(
    feed: Sequence[ActivityRecord],
    activity_type: ActivityType | str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ActivityRecord]:
    """Keep records of one type and/or within an inclusive calendar-date range."""
    if isinstance(activity_type, str):
        activity_type = None if activity_type == "all" else ActivityType(activity_type)
    if isinstance(date_from, datetime):
        date_from = date_from.date()
    if isinstance(date_to, datetime):
        date_to = date_to.date()

    result = []
    for record in feed:
        if activity_type is not None and record.type != activity_type:
            continue
        day = record.timestamp.date()
        if date_from is not None and day < date_from:
            continue
        if date_to is not None and day > date_to:
            continue
        result.append(record)
    return result


def paginate_feed(feed: Sequence[ActivityRecord], page: int = 1, per_page: int = 10) -> dict:
    """Slice a feed into one page (1-based)."""
    page = max(page, 1)
    per_page = max(per_page, 1)
    start = (page - 1) * per_page
    return {
        "entries": [r.to_dict() for r in feed[start : start + per_page]],
        "total": len(feed),
        "page": page,
        "per_page": per_page,
    }


def to_csv(feed: Sequence[ActivityRecord]) -> str:
    """Render a feed as CSV with RFC 4180 quoting of free-text fields."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in feed:
        values = f"{record.metric}: {record.value}"
        if record.notes:
            values += f" ({record.notes})"
        writer.writerow(
            [
                record.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                record.type.value,
                record.title,
                values,
            ]
        )
    return buffer.getvalue()


def export_filename(app_name: str, today: date) -> str:
    return f"{app_name}-history-{today.isoformat()}.csv"
