# =============================================================================
# lib/wellness_stats.py - Health Tracking Statistics
# =============================================================================
# Pure functions over weight logs, activities, sleep logs and health goals
# as they come out of the health_* tables. Every function takes `today` so
# windows are reproducible in tests.
#
# Windows:
# - weight trend, activity and sleep stats use the last 7 days (today - 7
#   through today, inclusive)
# - weekly/monthly weight change look back from the most recent log
# =============================================================================

from datetime import date, datetime, timedelta, timezone
from typing import Any

import pandas as pd

from lib.utils import parse_date

# Minutes per week recommended by the WHO, used when no activity goal exists
DEFAULT_WEEKLY_ACTIVITY_MINUTES = 150
TREND_MIN_SAMPLES = 3
SLEEP_QUALITY_SCORES = {"poor": 1, "normal": 2, "good": 3}
NEUTRAL_SLEEP_QUALITY = 2
RECOMMENDED_SLEEP_HOURS = (7, 9)


def _timestamp(value: Any) -> datetime:
    """Aware datetime; naive values are taken as UTC."""
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _week_start(day: date) -> date:
    """Sunday that opens the week containing `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def sleep_minutes(bedtime: Any, wake_time: Any) -> int:
    """
    Whole minutes between bedtime and wake time.

    A non-positive difference means the times wrapped past midnight, so a
    day is added.
    """
    minutes = int((_timestamp(wake_time) - _timestamp(bedtime)).total_seconds() / 60)
    if minutes <= 0:
        minutes += 24 * 60
    return minutes


def _active_goal(goals: list[dict[str, Any]], goal_type: str) -> dict[str, Any] | None:
    return next((g for g in goals if g.get("goal_type") == goal_type and g.get("is_active", True)), None)


# =============================================================================
# Weight
# =============================================================================

def _weight_slope_per_week(weights: list[float]) -> float:
    """Least-squares slope over sample index, scaled to a week of daily samples."""
    if len(weights) < 2:
        return 0.0
    x = pd.Series(range(len(weights)), dtype="float64")
    y = pd.Series(weights, dtype="float64")
    return float(x.cov(y) / x.var()) * 7


def _weekly_changes(ascending: list[dict[str, Any]]) -> list[float]:
    """Last minus first weight inside each Sunday-based week."""
    df = pd.DataFrame({
        "week": [_week_start(_timestamp(log["recorded_at"]).date()) for log in ascending],
        "weight": [float(log["weight"]) for log in ascending],
    })
    buckets = df.groupby("week", sort=True)["weight"].agg(["first", "last"])
    return (buckets["last"] - buckets["first"]).tolist()


def weight_stats(
    logs: list[dict[str, Any]],
    goals: list[dict[str, Any]],
    today: date,
) -> dict[str, Any] | None:
    """
    Summary of the weight history, or None without logs.

    The current weight is the newest log of today, else the newest log.
    With an active weight goal the summary adds progress (0..1 from the
    first log towards the target), the weight expected today on a straight
    line to the target date, and the weeks left at the current trend.
    """
    if not logs:
        return None

    newest_first = sorted(logs, key=lambda log: _timestamp(log["recorded_at"]), reverse=True)
    ascending = list(reversed(newest_first))
    day_of = [_timestamp(log["recorded_at"]).date() for log in newest_first]
    weights = [float(log["weight"]) for log in newest_first]

    today_weights = [w for w, d in zip(weights, day_of) if d == today]
    yesterday_weights = [w for w, d in zip(weights, day_of) if d == today - timedelta(days=1)]
    current = today_weights[0] if today_weights else weights[0]

    recent = [w for w, d in zip(weights, day_of) if d >= today - timedelta(days=7)]
    trend = None
    if len(recent) >= TREND_MIN_SAMPLES:
        newest, oldest = recent[0], recent[-1]
        trend = "up" if newest > oldest else "down" if newest < oldest else "stable"

    def change_since(days: int) -> float | None:
        cutoff = day_of[0] - timedelta(days=days)
        earlier = next((w for w, d in zip(weights, day_of) if d <= cutoff), None)
        return round(current - earlier, 2) if earlier is not None else None

    slope = _weight_slope_per_week([float(log["weight"]) for log in ascending])
    changes = _weekly_changes(ascending)

    stats = {
        "current": current,
        "min": min(weights),
        "max": max(weights),
        "avg": round(sum(weights) / len(weights), 2),
        "trend": trend,
        "change_from_start": round(current - weights[-1], 2),
        "change_from_yesterday": round(current - yesterday_weights[-1], 2) if yesterday_weights else None,
        "today_count": len(today_weights),
        "weekly_change": change_since(7),
        "monthly_change": change_since(30),
        "trend_kg_per_week": round(slope, 3),
        "best_week_change": round(min(changes), 2) if changes else None,
        "worst_week_change": round(max(changes), 2) if changes else None,
        "goal_target": None,
        "goal_date": None,
        "goal_progress": None,
        "goal_expected_today": None,
        "goal_delta_from_expected": None,
        "eta_weeks_to_goal": None,
    }

    goal = _active_goal(goals, "weight")
    if goal is None:
        return stats

    target = float(goal["target_value"])
    baseline = float(ascending[0]["weight"])
    stats["goal_target"] = target
    stats["goal_date"] = parse_date(goal.get("target_date"))

    if target != baseline:
        progress = 1 - (target - current) / (target - baseline)
        stats["goal_progress"] = round(min(1.0, max(0.0, progress)), 3)

    start_day = day_of[-1]
    goal_day = stats["goal_date"]
    if goal_day is not None and goal_day != start_day:
        elapsed = (min(max(today, start_day), goal_day) - start_day).days
        expected = baseline + (target - baseline) * elapsed / (goal_day - start_day).days
        stats["goal_expected_today"] = round(expected, 2)
        stats["goal_delta_from_expected"] = round(current - expected, 2)

    remaining = target - current
    if slope != 0 and (remaining > 0) == (slope > 0) and remaining != 0:
        stats["eta_weeks_to_goal"] = round(abs(remaining / slope), 1)

    return stats


# =============================================================================
# Activity & Sleep
# =============================================================================

def activity_stats(
    activities: list[dict[str, Any]],
    goals: list[dict[str, Any]],
    today: date,
) -> dict[str, Any]:
    """Totals of the last 7 days against the weekly minutes goal."""
    since = today - timedelta(days=7)
    week = [a for a in activities if (parse_date(a.get("activity_date")) or date.min) >= since]

    total_minutes = sum(int(a.get("duration_minutes") or 0) for a in week)
    goal = _active_goal(goals, "activity")
    weekly_goal = float(goal["target_value"]) if goal and goal.get("target_value") else DEFAULT_WEEKLY_ACTIVITY_MINUTES

    counts: dict[str, int] = {}
    for activity in week:
        counts[activity["activity_type"]] = counts.get(activity["activity_type"], 0) + 1
    # max() keeps the first of equal counts, i.e. the most recent type
    most_frequent = max(counts, key=counts.get) if counts else None

    return {
        "total_duration": total_minutes,
        "total_calories": sum(float(a.get("calories_burned") or 0) for a in week),
        "total_distance_km": round(sum(float(a.get("distance_km") or 0) for a in week), 2),
        "activities_count": len(week),
        "weekly_goal": weekly_goal,
        "weekly_progress": round(min(total_minutes / weekly_goal * 100, 100.0), 1),
        "most_frequent_type": most_frequent,
    }


def sleep_stats(logs: list[dict[str, Any]], today: date) -> dict[str, Any] | None:
    """Averages over nights of the last 7 days, or None when there are none."""
    since = today - timedelta(days=7)
    week = [log for log in logs if (parse_date(log.get("sleep_date")) or date.min) >= since]
    if not week:
        return None

    durations = [int(log["duration_minutes"]) for log in week]
    scores = [SLEEP_QUALITY_SCORES[log["quality"]] for log in week if log.get("quality") in SLEEP_QUALITY_SCORES]

    return {
        "avg_duration": round(sum(durations) / len(durations), 1),
        "avg_quality": round(sum(scores) / len(scores), 2) if scores else NEUTRAL_SLEEP_QUALITY,
        "total_nights": len(week),
        "best_night": max(durations),
        "worst_night": min(durations),
    }


# =============================================================================
# Insights
# =============================================================================

def build_insights(
    weight: dict[str, Any] | None,
    activity: dict[str, Any] | None,
    sleep: dict[str, Any] | None,
) -> list[dict[str, Any]]:
    """Short Portuguese messages about the weight trend, weekly activity and sleep."""
    insights = []

    if weight and weight["trend"] in ("up", "down"):
        change = abs(weight["change_from_start"] or 0)
        if weight["trend"] == "up":
            insights.append({
                "type": "weight",
                "title": "Tendência de Peso",
                "description": f"Seu peso aumentou {change:.1f} kg nos últimos dias",
                "icon": "↗️",
                "severity": "warning",
            })
        else:
            insights.append({
                "type": "weight",
                "title": "Tendência de Peso",
                "description": f"Você perdeu {change:.1f} kg nos últimos dias",
                "icon": "↘️",
                "severity": "success",
            })

    if activity:
        if activity["weekly_progress"] >= 100:
            insights.append({
                "type": "activity",
                "title": "Meta de Atividade Atingida!",
                "description": f"Parabéns! Você completou {activity['total_duration']} minutos esta semana",
                "icon": "🎯",
                "severity": "success",
            })
        elif activity["weekly_progress"] < 50:
            missing = activity["weekly_goal"] - activity["total_duration"]
            insights.append({
                "type": "activity",
                "title": "Atenção às Atividades",
                "description": (
                    f"Você está em {activity['weekly_progress']:.0f}% da meta semanal. "
                    f"Faltam {missing:.0f} minutos"
                ),
                "icon": "⚡",
                "severity": "warning",
            })

    if sleep:
        hours = sleep["avg_duration"] / 60
        low, high = RECOMMENDED_SLEEP_HOURS
        if hours < low:
            insights.append({
                "type": "sleep",
                "title": "Sono Insuficiente",
                "description": f"Você está dormindo {hours:.1f}h por noite. Recomendado: {low}-{high}h",
                "icon": "😴",
                "severity": "warning",
            })
        elif hours <= high:
            insights.append({
                "type": "sleep",
                "title": "Sono Adequado",
                "description": f"Ótimo! Você está dormindo {hours:.1f}h por noite",
                "icon": "😊",
                "severity": "success",
            })

    return insights
