"""
Timezone feature package.

Detects the timezone a message was written in, converts proposed meeting
times between zones with DST checks, and describes a meeting window for every
participant. Catalog, extractors, resolver, converter and coordinator live
side by side; ``service`` wires them around the canonical zone.
"""

from .domain.models import (  # noqa: F401
    DSTValidationResult,
    MeetingTimeSummary,
    MeetingWindow,
    ParticipantTimezone,
    TimezonedTime,
    TimezoneInfo,
    TimezoneSource,
)
from .service import (  # noqa: F401
    TimezoneService,
    annotate_email,
    convert_time,
    convert_timezoned_times,
    convert_to_canonical_timezone,
    describe_meeting_time,
    detect_participant_timezones,
    detect_timezone,
    timezone_service,
    validate_dst_transition,
)
