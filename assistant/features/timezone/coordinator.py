"""
Meeting time descriptions for outbound messages.

Turns one meeting window, expressed in the canonical zone, into the text
fragments a reply needs: the booked time, the sender's local time, each other
zone involved, and a per-participant breakdown. Nothing is booked here.
"""

from collections.abc import Sequence
from datetime import datetime

import pytz
from pytz.exceptions import UnknownTimeZoneError

from assistant.infrastructure.observability.logging import get_logger

from .catalog import normalize_zone
from .converter import localize, parse_local_time
from .domain.models import (
    MeetingTimeSummary,
    MeetingWindow,
    ParticipantLocalTime,
    ParticipantTimezone,
    TimezoneInfo,
    ZoneTime,
)

logger = get_logger(__name__)


def _clock(value: datetime) -> str:
    return value.strftime("%I:%M %p").lstrip("0")


def _day(value: datetime) -> str:
    return f"{value:%a, %b} {value.day}"


def format_window(start: datetime, end: datetime) -> str:
    """'Tue, Aug 12, 12:00 PM - 1:00 PM PDT' (end day repeated if it differs)."""
    start_text = f"{_day(start)}, {_clock(start)}"
    if end.date() != start.date():
        end_text = f"{_day(end)}, {_clock(end)}"
    else:
        end_text = _clock(end)
    return f"{start_text} - {end_text} {end.tzname()}"


class MeetingTimeCoordinator:
    def __init__(self, canonical_zone: str):
        self.canonical_zone = canonical_zone

    def describe(
        self,
        window: MeetingWindow,
        sender_zone: TimezoneInfo | None = None,
        participant_zones: Sequence[ParticipantTimezone] | None = None,
    ) -> MeetingTimeSummary:
        """
        Describe a canonical-zone meeting window for every zone involved.

        Zones shared by several participants are listed once, and the sender's
        own zone never appears among the other zones. Missing participants,
        unknown zones or an unparseable window all degrade towards showing
        just the canonical time.
        """
        try:
            start = localize(parse_local_time(window.start), self.canonical_zone)
            end = localize(parse_local_time(window.end), self.canonical_zone)
        except (AttributeError, ValueError, OverflowError, UnknownTimeZoneError) as e:
            logger.warning(
                "Could not parse meeting window, describing it verbatim",
                start=window.start,
                end=window.end,
                error=str(e),
            )
            return MeetingTimeSummary(
                canonical=ZoneTime(self.canonical_zone, f"{window.start} - {window.end}")
            )

        canonical = ZoneTime(self.canonical_zone, format_window(start, end))
        if not participant_zones:
            return MeetingTimeSummary(canonical=canonical)

        try:
            return self._describe_zones(canonical, start, end, sender_zone, participant_zones)
        except OverflowError as e:
            logger.warning(
                "Meeting window leaves the supported date range in another zone",
                start=window.start,
                end=window.end,
                error=str(e),
            )
            return MeetingTimeSummary(canonical=canonical)

    def _describe_zones(
        self,
        canonical: ZoneTime,
        start: datetime,
        end: datetime,
        sender_zone: TimezoneInfo | None,
        participant_zones: Sequence[ParticipantTimezone],
    ) -> MeetingTimeSummary:
        def in_zone(zone: str) -> str:
            tz = pytz.timezone(zone)
            return format_window(start.astimezone(tz), end.astimezone(tz))

        canonical_zone = normalize_zone(self.canonical_zone)
        sender = None
        sender_zone_name = normalize_zone(sender_zone.zone) if sender_zone else None
        if sender_zone_name is None:
            sender_zone_name = canonical_zone
        elif sender_zone_name != canonical_zone:
            sender = ZoneTime(sender_zone_name, in_zone(sender_zone_name))

        known = []
        for participant in participant_zones:
            zone = normalize_zone(participant.timezone.zone)
            if zone:
                known.append((participant, zone))
        if len(known) < len(participant_zones):
            logger.warning(
                "Skipping participants with unknown timezones",
                skipped=len(participant_zones) - len(known),
            )

        other_zones = tuple(
            ZoneTime(zone, in_zone(zone))
            for zone in dict.fromkeys(zone for _, zone in known)
            if zone != sender_zone_name
        )
        participants = tuple(
            ParticipantLocalTime(email=p.email, local_time=in_zone(zone), timezone=zone)
            for p, zone in known
        )

        return MeetingTimeSummary(
            canonical=canonical,
            sender=sender,
            other_zones=other_zones,
            participants=participants,
        )
