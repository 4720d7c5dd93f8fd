"""
Timezone service for scheduling email threads.
Wires detection, conversion and meeting descriptions around the configured
canonical zone (the calendar owner's zone, where every booking happens).
"""

from collections.abc import Mapping, Sequence

from assistant.config import settings
from assistant.infrastructure.observability.logging import get_logger
from assistant.models.domain.email_domain import InboundEmail

from .converter import TimeConverter
from .coordinator import MeetingTimeCoordinator
from .domain.models import (
    DSTValidationResult,
    MeetingTimeSummary,
    MeetingWindow,
    ParticipantTimezone,
    SchedulingTimezoneContext,
    TimezonedTime,
    TimezoneInfo,
)
from .extractors import OffsetZoneGuesser, guess_zone_for_offset
from .resolver import ParticipantTimezoneResolver, TimezoneResolver

logger = get_logger(__name__)


class TimezoneService:
    """
    Facade over the timezone components.

    Every operation is a pure computation over its inputs, so a single
    instance can be shared by concurrent message workers.
    """

    def __init__(
        self,
        canonical_zone: str | None = None,
        offset_guesser: OffsetZoneGuesser = guess_zone_for_offset,
    ):
        self.resolver = TimezoneResolver(
            canonical_zone or settings.CANONICAL_TIMEZONE, offset_guesser
        )
        self.canonical_zone = self.resolver.canonical_zone
        self.participant_resolver = ParticipantTimezoneResolver(self.resolver)
        self.converter = TimeConverter(self.canonical_zone)
        self.coordinator = MeetingTimeCoordinator(self.canonical_zone)

    def detect_timezone(self, headers: Mapping[str, str], content: str) -> TimezoneInfo:
        return self.resolver.detect(headers, content)

    def detect_participant_timezones(
        self,
        participants: Sequence[str],
        headers: Mapping[str, str],
        content: str,
        names: Mapping[str, str] | None = None,
    ) -> list[ParticipantTimezone]:
        return self.participant_resolver.resolve_all(participants, headers, content, names)

    def convert_time(self, time: str, from_zone: str, to_zone: str) -> str:
        return self.converter.convert(time, from_zone, to_zone)

    def convert_to_canonical_timezone(self, time: str, from_zone: str) -> str:
        return self.converter.convert_to_canonical(time, from_zone)

    def convert_timezoned_times(
        self,
        times: MeetingWindow | Mapping[str, str],
        sender_zone: TimezoneInfo,
        participant_zones: Sequence[ParticipantTimezone],
    ) -> list[TimezonedTime]:
        if isinstance(times, Mapping):
            times = MeetingWindow(start=times["start"], end=times["end"])
        return self.converter.convert_timezoned_times(times, sender_zone, participant_zones)

    def validate_dst_transition(self, time: str, zone: str) -> DSTValidationResult:
        return self.converter.validate_dst_transition(time, zone)

    def describe_meeting_time(
        self,
        window: MeetingWindow,
        sender_zone: TimezoneInfo | None = None,
        participant_zones: Sequence[ParticipantTimezone] | None = None,
    ) -> MeetingTimeSummary:
        return self.coordinator.describe(window, sender_zone, participant_zones)

    def annotate_email(
        self, email: InboundEmail, proposed_window: MeetingWindow
    ) -> SchedulingTimezoneContext:
        """
        Run the full timezone pass for one inbound message.

        Detects the sender zone, assigns participant zones, validates the
        proposed boundaries against DST rules, expands them into canonical and
        participant local times and describes the canonical window.

        Args:
            email: Inbound message with decoded body
            proposed_window: Start/end as the sender wrote them (sender's zone)

        Returns:
            SchedulingTimezoneContext: Inputs for the reply and booking steps
        """
        sender_zone = self.resolver.detect(email.raw_headers, email.body)
        participant_zones = self.participant_resolver.assign(
            email.participants(), sender_zone, email.participant_names()
        )

        start_check = self.converter.validate_dst_transition(proposed_window.start, sender_zone.zone)
        end_check = self.converter.validate_dst_transition(proposed_window.end, sender_zone.zone)

        timezoned_times = self.converter.convert_timezoned_times(
            proposed_window, sender_zone, participant_zones
        )
        canonical_window = MeetingWindow(
            start=timezoned_times[0].converted_to_canonical_timezone,
            end=timezoned_times[1].converted_to_canonical_timezone,
        )
        summary = self.coordinator.describe(canonical_window, sender_zone, participant_zones)

        context = SchedulingTimezoneContext(
            sender_timezone=sender_zone,
            participant_timezones=tuple(participant_zones),
            proposed_window=proposed_window,
            canonical_window=canonical_window,
            timezoned_times=tuple(timezoned_times),
            start_check=start_check,
            end_check=end_check,
            summary=summary,
        )

        if context.requires_confirmation:
            logger.warning(
                "Proposed meeting time needs confirmation",
                message_id=email.message_id,
                zone=sender_zone.zone,
                start_warning=start_check.warning,
                end_warning=end_check.warning,
            )
        else:
            logger.info(
                "Email timezone annotation complete",
                message_id=email.message_id,
                zone=sender_zone.zone,
                source=sender_zone.source.value,
                participants=len(participant_zones),
            )

        return context


# Singleton instance for application use
timezone_service = TimezoneService()


# Convenience functions for easy import
def detect_timezone(headers: Mapping[str, str], content: str) -> TimezoneInfo:
    """Detect the sender's timezone for a message."""
    return timezone_service.detect_timezone(headers, content)


def detect_participant_timezones(
    participants: Sequence[str], headers: Mapping[str, str], content: str
) -> list[ParticipantTimezone]:
    """Assign a timezone to every participant, in input order."""
    return timezone_service.detect_participant_timezones(participants, headers, content)


def convert_time(time: str, from_zone: str, to_zone: str) -> str:
    """Convert a "YYYY-MM-DD HH:mm" time between zones (input returned on failure)."""
    return timezone_service.convert_time(time, from_zone, to_zone)


def convert_to_canonical_timezone(time: str, from_zone: str) -> str:
    """Convert a "YYYY-MM-DD HH:mm" time into the canonical zone."""
    return timezone_service.convert_to_canonical_timezone(time, from_zone)


def convert_timezoned_times(
    times: MeetingWindow | Mapping[str, str],
    sender_zone: TimezoneInfo,
    participant_zones: Sequence[ParticipantTimezone],
) -> list[TimezonedTime]:
    """Expand start/end into canonical and per-participant local times."""
    return timezone_service.convert_timezoned_times(times, sender_zone, participant_zones)


def validate_dst_transition(time: str, zone: str) -> DSTValidationResult:
    """Check a local time against the zone's DST transitions."""
    return timezone_service.validate_dst_transition(time, zone)


def describe_meeting_time(
    window: MeetingWindow,
    sender_zone: TimezoneInfo | None = None,
    participant_zones: Sequence[ParticipantTimezone] | None = None,
) -> MeetingTimeSummary:
    """Describe a canonical-zone meeting window for every zone involved."""
    return timezone_service.describe_meeting_time(window, sender_zone, participant_zones)


def annotate_email(email: InboundEmail, proposed_window: MeetingWindow) -> SchedulingTimezoneContext:
    """Run the full timezone pass for one inbound message."""
    return timezone_service.annotate_email(email, proposed_window)
