"""Derived metrics: aggregation primitives, views and the activity feed."""

from .activity_feed import compile_feed, export_filename, filter_feed, paginate_feed, to_csv
from .aggregation import (
    bucket_by_day_of_week,
    bucket_by_week,
    carry_forward_missing_days,
    count_over_window,
    distribution_by_category,
    latest_value,
    percentage_of_goal,
    sum_over_window,
    weight_change_over_window,
)

__all__ = [
    "bucket_by_day_of_week",
    "bucket_by_week",
    "carry_forward_missing_days",
    "compile_feed",
    "count_over_window",
    "distribution_by_category",
    "export_filename",
    "filter_feed",
    "latest_value",
    "paginate_feed",
    "percentage_of_goal",
    "sum_over_window",
    "to_csv",
    "weight_change_over_window",
]
