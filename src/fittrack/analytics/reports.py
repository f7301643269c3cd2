"""Dashboard, summary and statistics views built from the aggregation primitives.

Each view takes already-fetched entries for one user, the user's goal set
and a reference ``now``, and returns JSON-ready dicts and lists.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

from ..models.entries import (
    WORKOUT_TYPE_COLORS,
    NutritionEntry,
    WeightEntry,
    WorkoutEntry,
    WorkoutType,
)
from ..models.user import GoalSet
from .aggregation import (
    average_daily,
    bucket_by_day_of_week,
    bucket_by_week,
    carry_forward_missing_days,
    count_over_window,
    day_bounds,
    distribution_by_category,
    entries_in_window,
    latest_value,
    percentage_of_goal,
    round_half_up,
    start_of_day,
    sum_over_window,
    timestamp_of,
    week_start,
    weight_change_over_window,
    weight_goal_progress,
)

WINDOW_PRESETS = (
    "today",
    "yesterday",
    "week",
    "month",
    "30days",
    "90days",
    "6months",
    "year",
    "all",
)

# Statistics period -> (days of history, weeks of buckets)
PERIODS = {
    "1m": (30, 4),
    "3m": (90, 12),
    "6m": (180, 26),
    "1y": (365, 52),
    "all": (None, 12),
}

CORRELATION_WEEKS = 12
PERFORMANCE_WORKOUTS = 7

# Substrings identifying the tracked main lifts
MAIN_LIFTS = {
    "bench_press": ("bench", "chest press"),
    "squat": ("squat", "leg press"),
    "deadlift": ("deadlift",),
}


def resolve_preset(name: str, now: datetime) -> tuple[datetime | None, datetime | None]:
    """Map a named preset to an inclusive ``(start, end)`` window."""
    _, end_of_today = day_bounds(now)
    rolling_days = {"30days": 30, "90days": 90, "6months": 180, "year": 365}

    if name == "today":
        return day_bounds(now)
    if name == "yesterday":
        return day_bounds(now - timedelta(days=1))
    if name == "week":
        return week_start(now), end_of_today
    if name == "month":
        return start_of_day(now).replace(day=1), end_of_today
    if name in rolling_days:
        return now - timedelta(days=rolling_days[name]), end_of_today
    if name == "all":
        return None, None
    raise ValueError(f"Unknown window preset: {name}")


def resolve_period(period: str) -> tuple[int | None, int]:
    """Map a statistics period code to (days, weeks)."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")
    return PERIODS[period]


def _newest_first(entries: Sequence) -> list:
    return sorted(entries, key=timestamp_of, reverse=True)


def _weight(entry: WeightEntry) -> float:
    return entry.weight


def _calories(entry: NutritionEntry) -> int:
    return entry.calories


def _protein(entry: NutritionEntry) -> float:
    return entry.protein


def _duration(entry: WorkoutEntry) -> int:
    return entry.duration


def _workout_type(entry: WorkoutEntry) -> str:
    return entry.type.value


# Weight

def weight_history(
    entries: Sequence[WeightEntry], window: str, now: datetime
) -> list[dict]:
    """Readings in the window, newest first, each with its change vs the prior reading."""
    start, end = resolve_preset(window, now)
    readings = _newest_first(entries_in_window(entries, start, end))

    history = []
    for i, entry in enumerate(readings):
        item = entry.to_dict()
        if i + 1 < len(readings):
            item["change"] = round_half_up(entry.weight - readings[i + 1].weight, 1)
        else:
            item["change"] = None
        history.append(item)
    return history


def weight_summary(entries: Sequence[WeightEntry], goals: GoalSet) -> dict:
    current = latest_value(entries, _weight)
    progress = 0
    if len(entries) > 1:
        initial = min(entries, key=timestamp_of).weight
        progress = weight_goal_progress(initial, current, goals.weight_goal)
    return {
        "current": current,
        "goal": goals.weight_goal,
        "progress": progress,
    }


def weight_trend(
    entries: Sequence[WeightEntry], period: str, now: datetime
) -> list[dict]:
    days, _ = resolve_period(period)
    start = now - timedelta(days=days) if days is not None else None
    readings = sorted(entries_in_window(entries, start, None), key=timestamp_of)
    return [
        {"date": timestamp_of(e).strftime("%b %d"), "weight": e.weight}
        for e in readings
    ]


# Nutrition

def nutrition_summary(
    entries: Sequence[NutritionEntry], goals: GoalSet, now: datetime
) -> dict:
    """Today's calorie and protein totals against the daily goals."""
    start, end = day_bounds(now)
    calories = sum_over_window(entries, start, end, _calories)
    protein = round_half_up(sum_over_window(entries, start, end, _protein), 1)
    return {
        "calories": calories,
        "protein": protein,
        "calorie_goal": goals.calorie_goal,
        "protein_goal": goals.protein_goal,
        "calorie_progress": percentage_of_goal(calories, goals.calorie_goal),
        "protein_progress": percentage_of_goal(protein, goals.protein_goal),
    }


def weekly_calories(entries: Sequence[NutritionEntry], now: datetime) -> list[dict]:
    return bucket_by_day_of_week(entries, week_start(now), _calories, key="calories")


def macro_distribution(entries: Sequence[NutritionEntry], now: datetime) -> dict:
    """Today's protein, carbs and fat totals in grams."""
    start, end = day_bounds(now)
    return {
        macro: round_half_up(
            sum_over_window(entries, start, end, lambda e, m=macro: getattr(e, m)), 1
        )
        for macro in ("protein", "carbs", "fat")
    }


# Workouts

def workout_summary(
    entries: Sequence[WorkoutEntry], goals: GoalSet, now: datetime
) -> dict:
    weekly = count_over_window(entries, week_start(now), day_bounds(now)[1])

    most_frequent = "-"
    best = 0
    for label, count in distribution_by_category(entries, _workout_type).items():
        if count > best:
            most_frequent, best = label, count

    if entries:
        last_workout = max(entries, key=timestamp_of)
        last = {
            "name": last_workout.name,
            "date": last_workout.date.strftime("%b %d, %Y"),
        }
    else:
        last = {"name": "-", "date": "No recent workouts"}

    return {
        "weekly": weekly,
        "goal": goals.workout_goal,
        "progress": percentage_of_goal(weekly, goals.workout_goal),
        "most_frequent": most_frequent.capitalize(),
        "last": last,
    }


def workout_type_distribution(entries: Sequence[WorkoutEntry]) -> list[dict]:
    """Pie-chart items per workout type."""
    return [
        {
            "name": label.capitalize(),
            "value": count,
            "color": WORKOUT_TYPE_COLORS.get(label, WORKOUT_TYPE_COLORS["other"]),
        }
        for label, count in distribution_by_category(entries, _workout_type).items()
    ]


def weekly_workout_duration(entries: Sequence[WorkoutEntry], now: datetime) -> list[dict]:
    return bucket_by_day_of_week(entries, week_start(now), _duration, key="duration")


def workout_consistency(
    entries: Sequence[WorkoutEntry], period: str, goals: GoalSet, now: datetime
) -> list[dict]:
    """Workouts per week against the weekly goal."""
    _, weeks = resolve_period(period)
    buckets = bucket_by_week(entries, weeks, lambda e: 1, aggregator=len, now=now)
    result = []
    for bucket in buckets:
        start = datetime.fromisoformat(bucket["week_start"])
        result.append(
            {
                "week": f"Week of {start:%b} {start.day}",
                "workouts": bucket["value"],
                "goal": goals.workout_goal,
            }
        )
    return result


def workout_performance(entries: Sequence[WorkoutEntry]) -> list[dict]:
    """Main-lift working weights from the most recent strength workouts, oldest first."""
    strength = [e for e in _newest_first(entries) if e.type == WorkoutType.STRENGTH]

    rows = []
    for workout in strength[:PERFORMANCE_WORKOUTS]:
        row = {"date": workout.date.strftime("%b %d")}
        for lift, patterns in MAIN_LIFTS.items():
            match = next(
                (
                    ex
                    for ex in workout.exercises
                    if any(p in ex.name.lower() for p in patterns)
                ),
                None,
            )
            row[lift] = float(match.weight) if match and match.weight else None
        rows.append(row)

    rows.reverse()
    return rows


# Combined views

def dashboard_metrics(
    weights: Sequence[WeightEntry],
    meals: Sequence[NutritionEntry],
    workouts: Sequence[WorkoutEntry],
    goals: GoalSet,
    now: datetime,
) -> dict:
    weight = weight_summary(weights, goals)
    nutrition = nutrition_summary(meals, goals, now)
    training = workout_summary(workouts, goals, now)
    return {
        "metrics": {
            "calories": nutrition["calories"],
            "weight": weight["current"],
            "workouts": training["weekly"],
        },
        "goals": {
            "calories": nutrition["calorie_goal"],
            "weight": weight["goal"],
            "workouts": training["goal"],
        },
        "progress": {
            "calories": nutrition["calorie_progress"],
            "weight": weight["progress"],
            "workouts": training["progress"],
        },
    }


def weekly_progress(
    weights: Sequence[WeightEntry],
    meals: Sequence[NutritionEntry],
    now: datetime,
) -> list[dict]:
    """Calories per day and the day's weight (carried forward) for the current week."""
    monday = week_start(now)
    calories = bucket_by_day_of_week(meals, monday, _calories, key="calories")

    daily_weight = []
    for offset in range(7):
        start, end = day_bounds(monday + timedelta(days=offset))
        readings = entries_in_window(weights, start, end)
        daily_weight.append(latest_value(readings, _weight, default=None))

    for bucket, weight in zip(calories, carry_forward_missing_days(daily_weight)):
        bucket["weight"] = weight
    return calories


def statistics_summary(
    weights: Sequence[WeightEntry],
    meals: Sequence[NutritionEntry],
    workouts: Sequence[WorkoutEntry],
    now: datetime,
) -> dict:
    """Headline numbers: totals, overall weight change and 7-day daily averages."""
    recent_meals = entries_in_window(meals, now - timedelta(days=7), None)
    return {
        "total_workouts": len(workouts),
        "weight_change": round_half_up(weight_change_over_window(weights, None, None), 1),
        "avg_calories": average_daily(recent_meals, _calories),
        "avg_protein": average_daily(recent_meals, _protein),
    }


def nutrition_weight_correlation(
    weights: Sequence[WeightEntry],
    meals: Sequence[NutritionEntry],
    now: datetime,
) -> list[dict]:
    """Average daily calories next to that week's weight change, last 12 weeks."""
    calories = bucket_by_week(
        meals,
        CORRELATION_WEEKS,
        lambda e: e,
        aggregator=lambda week: average_daily(week, _calories),
        now=now,
    )
    changes = bucket_by_week(
        weights,
        CORRELATION_WEEKS,
        lambda e: e,
        aggregator=lambda week: round_half_up(
            weight_change_over_window(week, None, None), 1
        ),
        now=now,
    )
    return [
        {
            "week": f"Week {i + 1}",
            "week_start": cal["week_start"],
            "calories": cal["value"],
            "weight_change": change["value"],
        }
        for i, (cal, change) in enumerate(zip(calories, changes))
    ]


def goal_progress(
    weights: Sequence[WeightEntry],
    meals: Sequence[NutritionEntry],
    workouts: Sequence[WorkoutEntry],
    goals: GoalSet,
    now: datetime,
) -> dict:
    weight = weight_summary(weights, goals)
    nutrition = nutrition_summary(meals, goals, now)
    training = workout_summary(workouts, goals, now)
    return {
        "weight": {
            "current": weight["current"],
            "goal": weight["goal"],
            "progress": weight["progress"],
        },
        "calories": {
            "current": nutrition["calories"],
            "goal": nutrition["calorie_goal"],
            "progress": nutrition["calorie_progress"],
        },
        "protein": {
            "current": nutrition["protein"],
            "goal": nutrition["protein_goal"],
            "progress": nutrition["protein_progress"],
        },
        "workouts": {
            "current": training["weekly"],
            "goal": training["goal"],
            "progress": training["progress"],
        },
    }
