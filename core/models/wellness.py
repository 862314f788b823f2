# =============================================================================
# core/models/wellness.py - Health Tracking Schemas
# =============================================================================
# Weight logs, physical activities, sleep logs and health goals, plus the
# computed summary (stats and insights).
#
# Validation rules enforced here:
# - weight in (0, 500] kg; durations and targets strictly positive
# - calories and distance non-negative
# - sleep bedtime and wake time are both required on creation
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Literal
from uuid import UUID

from pydantic import Field

from .common import CamelModel, PatchModel


class ActivityType(str, Enum):
    WALKING = "walking"
    GYM = "gym"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    SPORT = "sport"
    YOGA = "yoga"
    RUNNING = "running"
    OTHER = "other"


class ActivityIntensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SleepQuality(str, Enum):
    POOR = "poor"
    NORMAL = "normal"
    GOOD = "good"


class HealthGoalType(str, Enum):
    WEIGHT = "weight"
    ACTIVITY = "activity"
    SLEEP = "sleep"


ACTIVITY_LABELS = {
    ActivityType.WALKING: "Caminhada",
    ActivityType.GYM: "Academia",
    ActivityType.CYCLING: "Ciclismo",
    ActivityType.SWIMMING: "Natação",
    ActivityType.SPORT: "Esporte",
    ActivityType.YOGA: "Yoga",
    ActivityType.RUNNING: "Corrida",
    ActivityType.OTHER: "Outro",
}


# =============================================================================
# Weight Logs
# =============================================================================

class WeightLogCreate(CamelModel):
    """A weigh-in. recordedAt defaults to now."""

    weight: float = Field(..., gt=0, le=500, description="Kilograms")
    recorded_at: dt.datetime | None = None
    note: str | None = Field(default=None, max_length=500)


class WeightLogUpdate(PatchModel):
    non_nullable = ("weight", "recorded_at")

    weight: float | None = Field(default=None, gt=0, le=500)
    recorded_at: dt.datetime | None = None
    note: str | None = Field(default=None, max_length=500)


class WeightLogResponse(CamelModel):
    id: UUID
    weight: float
    recorded_at: dt.datetime
    note: str | None = None
    created_at: dt.datetime | None = None


# =============================================================================
# Activities
# =============================================================================

class ActivityCreate(CamelModel):
    """A workout or other activity. activityDate defaults to today."""

    activity_type: ActivityType
    duration_minutes: int = Field(..., gt=0, le=24 * 60)
    distance_km: float | None = Field(default=None, ge=0)
    intensity: ActivityIntensity | None = None
    calories_burned: float | None = Field(default=None, ge=0)
    activity_date: dt.date | None = None
    notes: str | None = None


class ActivityUpdate(PatchModel):
    non_nullable = ("activity_type", "duration_minutes", "activity_date")

    activity_type: ActivityType | None = None
    duration_minutes: int | None = Field(default=None, gt=0, le=24 * 60)
    distance_km: float | None = Field(default=None, ge=0)
    intensity: ActivityIntensity | None = None
    calories_burned: float | None = Field(default=None, ge=0)
    activity_date: dt.date | None = None
    notes: str | None = None


class ActivityResponse(CamelModel):
    id: UUID
    activity_type: ActivityType
    duration_minutes: int
    distance_km: float | None = None
    intensity: ActivityIntensity | None = None
    calories_burned: float | None = None
    activity_date: dt.date
    notes: str | None = None
    created_at: dt.datetime | None = None


# =============================================================================
# Sleep Logs
# =============================================================================

class SleepLogCreate(CamelModel):
    """
    A night of sleep.

    sleepDate is the date of the night and defaults to yesterday. The stored
    duration is derived from bedtime and wakeTime.
    """

    sleep_date: dt.date | None = None
    bedtime: dt.datetime
    wake_time: dt.datetime
    quality: SleepQuality | None = None
    notes: str | None = None


class SleepLogUpdate(PatchModel):
    non_nullable = ("sleep_date", "bedtime", "wake_time")

    sleep_date: dt.date | None = None
    bedtime: dt.datetime | None = None
    wake_time: dt.datetime | None = None
    quality: SleepQuality | None = None
    notes: str | None = None


class SleepLogResponse(CamelModel):
    id: UUID
    sleep_date: dt.date
    bedtime: dt.datetime
    wake_time: dt.datetime
    duration_minutes: int
    quality: SleepQuality | None = None
    notes: str | None = None
    created_at: dt.datetime | None = None


# =============================================================================
# Goals
# =============================================================================

class HealthGoalCreate(CamelModel):
    """
    A target: kilograms for weight, minutes per week for activity, hours
    per night for sleep.
    """

    goal_type: HealthGoalType
    target_value: float = Field(..., gt=0)
    target_date: dt.date | None = None


class HealthGoalUpdate(PatchModel):
    """The goal type is fixed after creation."""

    non_nullable = ("target_value", "is_active")

    target_value: float | None = Field(default=None, gt=0)
    target_date: dt.date | None = None
    is_active: bool | None = None


class HealthGoalResponse(CamelModel):
    id: UUID
    goal_type: HealthGoalType
    target_value: float
    target_date: dt.date | None = None
    is_active: bool = True
    created_at: dt.datetime | None = None


# =============================================================================
# Summary
# =============================================================================

class WeightStats(CamelModel):
    current: float
    min: float
    max: float
    avg: float
    trend: Literal["up", "down", "stable"] | None = None
    change_from_start: float
    change_from_yesterday: float | None = None
    today_count: int = 0
    weekly_change: float | None = None
    monthly_change: float | None = None
    trend_kg_per_week: float = 0.0
    best_week_change: float | None = None
    worst_week_change: float | None = None
    goal_target: float | None = None
    goal_date: dt.date | None = None
    goal_progress: float | None = None
    goal_expected_today: float | None = None
    goal_delta_from_expected: float | None = None
    eta_weeks_to_goal: float | None = None


class ActivityStats(CamelModel):
    total_duration: int
    total_calories: float
    total_distance_km: float
    activities_count: int
    weekly_goal: float
    weekly_progress: float
    most_frequent_type: ActivityType | None = None


class SleepStats(CamelModel):
    avg_duration: float
    avg_quality: float
    total_nights: int
    best_night: int
    worst_night: int


class HealthInsight(CamelModel):
    type: Literal["weight", "activity", "sleep", "general"]
    title: str
    description: str
    icon: str
    severity: Literal["info", "warning", "success"] | None = None


class HealthSummary(CamelModel):
    weight: WeightStats | None = None
    activity: ActivityStats
    sleep: SleepStats | None = None
    insights: list[HealthInsight] = Field(default_factory=list)
