"""
Wall-clock conversion between IANA zones.

All times are naive "YYYY-MM-DD HH:mm" strings interpreted in a named zone.
Conversion fails open: a time that cannot be converted is returned as-is so
it is visibly unconverted rather than silently wrong.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

import pytz
from pytz.exceptions import AmbiguousTimeError, NonExistentTimeError, UnknownTimeZoneError

from assistant.infrastructure.observability.logging import get_logger

from .domain.models import (
    DSTValidationResult,
    MeetingWindow,
    ParticipantLocalTime,
    ParticipantTimezone,
    TimezonedTime,
    TimezoneInfo,
)

logger = get_logger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M"


def parse_local_time(local_time: str) -> datetime:
    """Parse a naive "YYYY-MM-DD HH:mm" string. Raises ValueError."""
    return datetime.strptime(local_time.strip(), TIME_FORMAT)


def format_local_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def localize(naive: datetime, zone: str) -> datetime:
    """
    Attach ``zone`` to a naive wall-clock time.

    Gap times resolve with the pre-transition offset and overlap times pick
    the standard-time occurrence; use validate_dst_transition to detect both.
    """
    tz = pytz.timezone(zone)
    return tz.normalize(tz.localize(naive, is_dst=False))


def _exists_unambiguously(naive: datetime, tz) -> bool:
    try:
        tz.localize(naive, is_dst=None)
    except (NonExistentTimeError, AmbiguousTimeError, OverflowError):
        return False
    return True


class TimeConverter:
    """Converts naive local times between zones with DST checks."""

    def __init__(self, canonical_zone: str):
        self.canonical_zone = canonical_zone

    def try_convert(self, local_time: str, from_zone: str, to_zone: str) -> str | None:
        """
        Re-render a wall-clock time from ``from_zone`` in ``to_zone``.

        Returns None when the time or a zone cannot be parsed, or when the
        result falls outside the representable date range.
        """
        try:
            instant = localize(parse_local_time(local_time), from_zone)
            return format_local_time(instant.astimezone(pytz.timezone(to_zone)))
        except (AttributeError, ValueError, OverflowError, UnknownTimeZoneError) as e:
            logger.warning(
                "Time conversion failed",
                time=local_time,
                from_zone=from_zone,
                to_zone=to_zone,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def convert(self, local_time: str, from_zone: str, to_zone: str) -> str:
        """Like try_convert, but returns the input unchanged on failure."""
        converted = self.try_convert(local_time, from_zone, to_zone)
        return local_time if converted is None else converted

    def convert_to_canonical(self, local_time: str, from_zone: str) -> str:
        return self.convert(local_time, from_zone, self.canonical_zone)

    def validate_dst_transition(self, local_time: str, zone: str) -> DSTValidationResult:
        """
        Check a naive local time against the zone's DST transitions.

        Spring-forward gap times do not exist. When such a time sits exactly
        on the hour, moving it one hour later usually lands on the first valid
        time after the jump, which is offered as ``adjusted_time``. Fall-back
        overlap times occur twice and are reported without an adjustment.

        Args:
            local_time: Naive "YYYY-MM-DD HH:mm" time
            zone: IANA zone the time is expressed in

        Returns:
            DSTValidationResult: ``is_valid`` is False for gap, overlap,
            unparseable and out-of-range input
        """
        try:
            naive = parse_local_time(local_time)
            tz = pytz.timezone(zone)
        except (AttributeError, ValueError, OverflowError, UnknownTimeZoneError) as e:
            return DSTValidationResult(is_valid=False, warning=f"Error validating time: {e}")

        try:
            tz.localize(naive, is_dst=None)
        except NonExistentTimeError:
            if naive.minute == 0:
                adjusted = naive + timedelta(hours=1)
                if _exists_unambiguously(adjusted, tz):
                    logger.info(
                        "Adjusted time for DST spring forward",
                        time=local_time,
                        adjusted_time=format_local_time(adjusted),
                        zone=zone,
                    )
                    return DSTValidationResult(
                        is_valid=False,
                        adjusted_time=format_local_time(adjusted),
                        warning="Time adjusted for DST spring forward transition",
                    )
            logger.warning("Time falls in DST spring forward gap", time=local_time, zone=zone)
            return DSTValidationResult(
                is_valid=False, warning="Invalid time during DST spring forward transition"
            )
        except AmbiguousTimeError:
            logger.warning("Time is ambiguous during DST fall back", time=local_time, zone=zone)
            return DSTValidationResult(
                is_valid=False,
                warning="Ambiguous time during DST fall back transition; it occurs twice",
            )
        except OverflowError as e:
            logger.warning("Time is outside the supported range", time=local_time, zone=zone)
            return DSTValidationResult(is_valid=False, warning=f"Error validating time: {e}")

        return DSTValidationResult(is_valid=True)

    def convert_timezoned_times(
        self,
        original_times: MeetingWindow,
        sender_zone: TimezoneInfo,
        participant_zones: Sequence[ParticipantTimezone],
    ) -> list[TimezonedTime]:
        """Expand a sender's start/end into canonical and per-participant times."""
        results = []
        for original_time in (original_times.start, original_times.end):
            participant_local_times = tuple(
                ParticipantLocalTime(
                    email=participant.email,
                    local_time=self.convert(
                        original_time, sender_zone.zone, participant.timezone.zone
                    ),
                    timezone=participant.timezone.zone,
                )
                for participant in participant_zones
            )
            results.append(
                TimezonedTime(
                    original_time=original_time,
                    original_timezone=sender_zone.zone,
                    converted_to_canonical_timezone=self.convert_to_canonical(
                        original_time, sender_zone.zone
                    ),
                    participant_local_times=participant_local_times,
                )
            )
        return results
