"""Time context resolution for the Medication Reminder.

Converts the current instant into the localized view every other component
works from: zone-adjusted hour and minute, weekday label, display string and
the period of the day.
"""

import enum
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field

DEFAULT_TIMEZONE = "Asia/Tokyo"

# Indexed by datetime.weekday(): Monday is 0
WEEKDAY_LABELS = ("月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日", "日曜日")


class Period(enum.Enum):
    """Period of the day, derived from the local hour"""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


GREETINGS: Mapping[Period, str] = {
    Period.MORNING: "おはようございます！☀️",
    Period.AFTERNOON: "こんにちは！🌤️",
    Period.EVENING: "こんばんは！🌙",
}


class TimeContext(BaseModel):
    """Localized view of a single instant. Built once per run."""

    instant: datetime = Field(..., description="Absolute instant (UTC)")
    zone: str = Field(..., description="IANA time zone name")
    local_hour: int = Field(..., ge=0, le=23)
    local_minute: int = Field(..., ge=0, le=59)
    weekday_label: str = Field(..., description="Localized weekday, e.g. 日曜日")
    formatted_datetime: str = Field(..., description="YYYY/MM/DD HH:MM in the target zone")
    period: Period

    class Config:
        frozen = True


def classify_period(hour: int) -> Period:
    """Half-open cutoffs: 12 and 18 belong to the later period."""
    if hour < 12:
        return Period.MORNING
    if hour < 18:
        return Period.AFTERNOON
    return Period.EVENING


def resolve_time_context(
    now: Optional[datetime] = None,
    zone: str = DEFAULT_TIMEZONE,
    weekday_labels: Sequence[str] = WEEKDAY_LABELS,
) -> TimeContext:
    """Resolve an instant into a TimeContext for the given zone.

    Args:
        now: Instant to resolve; defaults to the system clock. Naive values are read as UTC.
        zone: IANA zone name the schedule is evaluated in
        weekday_labels: Seven labels, Monday first

    Returns:
        TimeContext for the instant

    Raises:
        zoneinfo.ZoneInfoNotFoundError: If the zone is unknown (fatal for the run)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    local = now.astimezone(ZoneInfo(zone))

    return TimeContext(
        instant=now.astimezone(timezone.utc),
        zone=zone,
        local_hour=local.hour,
        local_minute=local.minute,
        weekday_label=weekday_labels[local.weekday()],
        formatted_datetime=local.strftime("%Y/%m/%d %H:%M"),
        period=classify_period(local.hour),
    )


def greeting_for(period: Period, greetings: Mapping[Period, str] = GREETINGS) -> str:
    return greetings[period]
