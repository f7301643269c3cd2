"""Pure aggregation primitives behind the dashboard and statistics views.

Every function here works on already-fetched, in-memory collections, never
mutates its input and never raises on empty input: an empty collection
yields a zero-valued result of the usual shape. Weeks start on Monday.

Entries may be model instances (anything with a ``date`` attribute) or plain
mappings with a ``"date"`` key. Numeric fields may be decimal strings, as
some stores return them; they are parsed before any arithmetic.
"""

import math
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any

DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

Extractor = Callable[[Any], Any]
Aggregator = Callable[[list], Any]


def to_number(value: Any) -> int | float:
    """Parse a stored numeric value; None and empty strings count as 0."""
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return float(value)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator (0.5 goes up), not like ``round()``."""
    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def timestamp_of(entry: Any) -> datetime:
    """Return an entry's timestamp as a naive datetime."""
    value = entry["date"] if isinstance(entry, Mapping) else entry.date
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time.min)
    return value


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Inclusive first and last instant of the day containing ``moment``."""
    start = start_of_day(moment)
    return start, start + timedelta(days=1) - timedelta(microseconds=1)


def week_start(moment: datetime) -> datetime:
    """Monday 00:00 of the week containing ``moment``."""
    return start_of_day(moment) - timedelta(days=moment.weekday())


def in_window(
    moment: datetime, window_start: datetime | None, window_end: datetime | None
) -> bool:
    """Inclusive window test; a None bound is open."""
    if window_start is not None and moment < window_start:
        return False
    if window_end is not None and moment > window_end:
        return False
    return True


def entries_in_window(
    entries: Iterable[Any],
    window_start: datetime | None,
    window_end: datetime | None,
) -> list:
    """Entries whose timestamp falls in ``[window_start, window_end]``, order kept."""
    return [e for e in entries if in_window(timestamp_of(e), window_start, window_end)]


def latest_value(entries: Iterable[Any], extractor: Extractor, default: Any = 0) -> Any:
    """Value of the entry with the greatest timestamp, or ``default``."""
    latest = None
    latest_ts = None
    for entry in entries:
        ts = timestamp_of(entry)
        if latest_ts is None or ts > latest_ts:
            latest, latest_ts = entry, ts
    if latest is None:
        return default
    return to_number(extractor(latest))


def sum_over_window(
    entries: Iterable[Any],
    window_start: datetime | None,
    window_end: datetime | None,
    extractor: Extractor,
) -> int | float:
    total = 0
    for entry in entries_in_window(entries, window_start, window_end):
        total += to_number(extractor(entry))
    return total


def count_over_window(
    entries: Iterable[Any],
    window_start: datetime | None,
    window_end: datetime | None,
) -> int:
    return len(entries_in_window(entries, window_start, window_end))


def percentage_of_goal(current: Any, goal: Any) -> int:
    """Progress towards ``goal`` as a whole percentage clamped to 0-100.

    A zero or negative goal yields 0.
    """
    current = to_number(current)
    goal = to_number(goal)
    if goal <= 0:
        return 0
    return max(0, min(100, round_half_up(current / goal * 100)))


def weight_goal_progress(initial: Any, current: Any, goal: Any) -> int:
    """Goal percentage for a weight target: current distance over starting distance."""
    initial, current, goal = to_number(initial), to_number(current), to_number(goal)
    return percentage_of_goal(abs(current - goal), abs(initial - goal))


def bucket_by_day_of_week(
    entries: Iterable[Any],
    window_start: datetime,
    extractor: Extractor,
    key: str = "value",
) -> list[dict]:
    """Sum ``extractor`` per day over the 7 days starting at ``window_start``.

    Always returns seven ``{"day": "Mon", key: total}`` items, Mon..Sun when
    ``window_start`` is a Monday. Entries outside the window are ignored.
    """
    first_day = window_start.date()
    buckets = [{"day": DAY_LABELS[(first_day.weekday() + i) % 7], key: 0} for i in range(7)]
    for entry in entries:
        offset = (timestamp_of(entry).date() - first_day).days
        if 0 <= offset < 7:
            buckets[offset][key] += to_number(extractor(entry))
    return buckets


def bucket_by_week(
    entries: Iterable[Any],
    number_of_weeks: int,
    extractor: Extractor,
    aggregator: Aggregator = sum,
    now: datetime | None = None,
) -> list[dict]:
    """Aggregate entries into Monday-Sunday weeks ending with the current week.

    Returns ``number_of_weeks`` items ``{"week_start": "YYYY-MM-DD", "value": ...}``,
    most recent last. ``aggregator`` receives the list of extracted values
    for a week and must accept an empty list.
    """
    if number_of_weeks <= 0:
        return []
    now = now or datetime.now()
    first_week = week_start(now) - timedelta(weeks=number_of_weeks - 1)
    grouped: list[list] = [[] for _ in range(number_of_weeks)]
    for entry in entries:
        index = (timestamp_of(entry).date() - first_week.date()).days // 7
        if 0 <= index < number_of_weeks:
            grouped[index].append(extractor(entry))
    return [
        {
            "week_start": (first_week + timedelta(weeks=i)).date().isoformat(),
            "value": aggregator(values),
        }
        for i, values in enumerate(grouped)
    ]


def distribution_by_category(
    entries: Iterable[Any], category_extractor: Extractor
) -> dict[str, int]:
    """Count entries per category label, in order of first appearance."""
    counts = Counter(category_extractor(entry) for entry in entries)
    return {label: count for label, count in counts.items() if count > 0}


def _weight_of(entry: Any) -> Any:
    return entry["weight"] if isinstance(entry, Mapping) else entry.weight


def weight_change_over_window(
    entries: Iterable[Any],
    window_start: datetime | None,
    window_end: datetime | None,
    extractor: Extractor = _weight_of,
) -> int | float:
    """Latest minus earliest reading in the window (positive = gained).

    Fewer than two readings in the window gives 0.
    """
    in_range = sorted(
        entries_in_window(entries, window_start, window_end), key=timestamp_of
    )
    if len(in_range) < 2:
        return 0
    return to_number(extractor(in_range[-1])) - to_number(extractor(in_range[0]))


def carry_forward_missing_days(week_buckets: Sequence[Any]) -> list:
    """Fill days without a reading (None) with the last observed value, else 0."""
    filled = []
    previous = 0
    for value in week_buckets:
        if value is None:
            filled.append(previous)
        else:
            filled.append(value)
            previous = value
    return filled


def average_daily(entries: Iterable[Any], extractor: Extractor) -> int:
    """Mean per logged day of ``extractor`` totals, rounded to a whole number."""
    daily: dict[date, float] = {}
    for entry in entries:
        day = timestamp_of(entry).date()
        daily[day] = daily.get(day, 0) + to_number(extractor(entry))
    if not daily:
        return 0
    return round_half_up(sum(daily.values()) / len(daily))
