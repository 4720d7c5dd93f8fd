"""
Domain subpackage for the timezone feature.
"""

from .models import (
    DSTValidationResult,
    MeetingTimeSummary,
    MeetingWindow,
    ParticipantLocalTime,
    ParticipantTimezone,
    SchedulingTimezoneContext,
    TimezonedTime,
    TimezoneInfo,
    TimezoneSource,
    ZoneTime,
)

__all__ = [
    "DSTValidationResult",
    "MeetingTimeSummary",
    "MeetingWindow",
    "ParticipantLocalTime",
    "ParticipantTimezone",
    "SchedulingTimezoneContext",
    "TimezonedTime",
    "TimezoneInfo",
    "TimezoneSource",
    "ZoneTime",
]
