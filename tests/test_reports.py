"""Tests for dashboard and statistics views."""

from datetime import datetime

import pytest

from fittrack.analytics import reports
from fittrack.models.entries import WORKOUT_TYPE_COLORS, WeightEntry
from fittrack.models.user import GoalSet


class TestPresets:
    """Tests for named date windows."""

    def test_today(self, now):
        start, end = reports.resolve_preset("today", now)
        assert start == datetime(2024, 1, 10)
        assert end.date() == now.date()

    def test_yesterday(self, now):
        start, end = reports.resolve_preset("yesterday", now)
        assert start == datetime(2024, 1, 9)
        assert end < datetime(2024, 1, 10)

    def test_week_and_month(self, now):
        assert reports.resolve_preset("week", now)[0] == datetime(2024, 1, 8)
        assert reports.resolve_preset("month", now)[0] == datetime(2024, 1, 1)

    def test_rolling(self, now):
        assert reports.resolve_preset("30days", now)[0] == datetime(2023, 12, 11, 12, 0)

    def test_all_is_open(self, now):
        assert reports.resolve_preset("all", now) == (None, None)

    def test_unknown_preset(self, now):
        with pytest.raises(ValueError, match="Unknown window preset"):
            reports.resolve_preset("fortnight", now)

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            reports.resolve_period("2w")


class TestWeightViews:
    def test_history_newest_first_with_change(self, sample_weights, now):
        history = reports.weight_history(sample_weights, "all", now)
        assert [h["weight"] for h in history] == [79.0, 80.0]
        assert history[0]["change"] == -1.0
        assert history[1]["change"] is None

    def test_history_window(self, sample_weights, now):
        history = reports.weight_history(sample_weights, "week", now)
        assert len(history) == 1
        assert history[0]["change"] is None

    def test_summary(self, sample_weights, sample_goals):
        summary = reports.weight_summary(sample_weights, sample_goals)
        assert summary == {"current": 79.0, "goal": 75.0, "progress": 80}

    def test_summary_single_reading(self, sample_weights, sample_goals):
        summary = reports.weight_summary(sample_weights[:1], sample_goals)
        assert summary["current"] == 80.0
        assert summary["progress"] == 0

    def test_summary_empty(self, sample_goals):
        assert reports.weight_summary([], sample_goals)["current"] == 0

    def test_trend_oldest_first(self, sample_weights, now):
        trend = reports.weight_trend(list(reversed(sample_weights)), "1m", now)
        assert trend == [
            {"date": "Jan 01", "weight": 80.0},
            {"date": "Jan 08", "weight": 79.0},
        ]


class TestNutritionViews:
    def test_summary_counts_today_only(self, sample_meals, sample_goals, now):
        summary = reports.nutrition_summary(sample_meals, sample_goals, now)
        assert summary["calories"] == 2200
        assert summary["calorie_progress"] == 88
        assert summary["protein"] == 102.0
        assert summary["protein_progress"] == 68
        assert summary["calorie_goal"] == 2500

    def test_weekly_calories(self, sample_meals, now):
        week = reports.weekly_calories(sample_meals, now)
        assert [d["calories"] for d in week] == [0, 900, 2200, 0, 0, 0, 0]
        assert week[0]["day"] == "Mon"

    def test_macro_distribution(self, sample_meals, now):
        assert reports.macro_distribution(sample_meals, now) == {
            "protein": 102.0,
            "carbs": 220.0,
            "fat": 51.0,
        }


class TestWorkoutViews:
    def test_summary(self, sample_workouts, sample_goals, now):
        summary = reports.workout_summary(sample_workouts, sample_goals, now)
        assert summary["weekly"] == 2
        assert summary["progress"] == 40
        assert summary["most_frequent"] == "Strength"
        assert summary["last"] == {"name": "Morning run", "date": "Jan 09, 2024"}

    def test_summary_without_workouts(self, sample_goals, now):
        summary = reports.workout_summary([], sample_goals, now)
        assert summary["weekly"] == 0
        assert summary["progress"] == 0
        assert summary["most_frequent"] == "-"
        assert summary["last"]["name"] == "-"

    def test_type_distribution(self, sample_workouts):
        assert reports.workout_type_distribution(sample_workouts) == [
            {"name": "Strength", "value": 2, "color": WORKOUT_TYPE_COLORS["strength"]},
            {"name": "Cardio", "value": 1, "color": WORKOUT_TYPE_COLORS["cardio"]},
        ]

    def test_weekly_duration(self, sample_workouts, now):
        week = reports.weekly_workout_duration(sample_workouts, now)
        assert [d["duration"] for d in week] == [50, 30, 0, 0, 0, 0, 0]

    def test_consistency(self, sample_workouts, sample_goals, now):
        weeks = reports.workout_consistency(sample_workouts, "1m", sample_goals, now)
        assert [w["week"] for w in weeks] == [
            "Week of Dec 18",
            "Week of Dec 25",
            "Week of Jan 1",
            "Week of Jan 8",
        ]
        assert [w["workouts"] for w in weeks] == [0, 0, 1, 2]
        assert all(w["goal"] == 5 for w in weeks)

    def test_performance_tracks_main_lifts(self, sample_workouts):
        rows = reports.workout_performance(sample_workouts)
        assert rows == [
            {"date": "Jan 02", "bench_press": 75.0, "squat": None, "deadlift": None},
            {"date": "Jan 08", "bench_press": None, "squat": 100.0, "deadlift": 140.0},
        ]


class TestCombinedViews:
    def test_dashboard_metrics(
        self, sample_weights, sample_meals, sample_workouts, sample_goals, now
    ):
        dashboard = reports.dashboard_metrics(
            sample_weights, sample_meals, sample_workouts, sample_goals, now
        )
        assert dashboard["metrics"] == {"calories": 2200, "weight": 79.0, "workouts": 2}
        assert dashboard["goals"] == {"calories": 2500, "weight": 75.0, "workouts": 5}
        assert dashboard["progress"] == {"calories": 88, "weight": 80, "workouts": 40}

    def test_weekly_progress_carries_weight_forward(self, sample_weights, sample_meals, now):
        week = reports.weekly_progress(sample_weights, sample_meals, now)
        assert len(week) == 7
        assert [d["weight"] for d in week] == [79.0] * 7
        assert week[2]["calories"] == 2200

    def test_weekly_progress_leading_days_are_zero(self, sample_meals, now):
        weights = [WeightEntry(user_id=1, weight=78.0, date=datetime(2024, 1, 10, 7))]
        week = reports.weekly_progress(weights, sample_meals, now)
        assert [d["weight"] for d in week] == [0, 0, 78.0, 78.0, 78.0, 78.0, 78.0]

    def test_statistics_summary(self, sample_weights, sample_meals, sample_workouts, now):
        stats = reports.statistics_summary(sample_weights, sample_meals, sample_workouts, now)
        assert stats == {
            "total_workouts": 3,
            "weight_change": -1.0,
            "avg_calories": 1550,
            "avg_protein": 69,
        }

    def test_nutrition_weight_correlation(self, sample_weights, sample_meals, now):
        weeks = reports.nutrition_weight_correlation(sample_weights, sample_meals, now)
        assert len(weeks) == reports.CORRELATION_WEEKS
        assert weeks[-1]["week"] == "Week 12"
        assert weeks[-1]["week_start"] == "2024-01-08"
        assert weeks[-1]["calories"] == 1550
        assert weeks[0]["calories"] == 0

    def test_goal_progress(
        self, sample_weights, sample_meals, sample_workouts, sample_goals, now
    ):
        progress = reports.goal_progress(
            sample_weights, sample_meals, sample_workouts, sample_goals, now
        )
        assert progress["weight"] == {"current": 79.0, "goal": 75.0, "progress": 80}
        assert progress["calories"]["progress"] == 88
        assert progress["protein"]["current"] == 102.0
        assert progress["workouts"] == {"current": 2, "goal": 5, "progress": 40}

    def test_default_goals_apply(self, sample_meals, now):
        goals = GoalSet(user_id=1)
        summary = reports.nutrition_summary(sample_meals, goals, now)
        assert summary["calorie_goal"] == 2500
