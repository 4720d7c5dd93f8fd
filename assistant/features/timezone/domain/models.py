"""
Domain models for the timezone feature.

Immutable value objects produced while processing a single inbound message:
detection results, per-participant assignments, multi-zone time expansions
and DST validation outcomes. They carry no behaviour beyond invariant checks
and serialisation so the extractors, converter and routes can share them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TimezoneSource(str, Enum):
    """Where in the message a timezone clue was found."""

    HEADER = "header"
    SIGNATURE = "signature"
    CONTENT = "content"
    FALLBACK = "fallback"


@dataclass(frozen=True, slots=True)
class TimezoneInfo:
    """Result of one detection attempt."""

    zone: str  # IANA identifier, e.g. "America/New_York"
    confidence: float
    source: TimezoneSource

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        is_fallback = self.source == TimezoneSource.FALLBACK
        if is_fallback != (self.confidence == 0.0):
            raise ValueError("fallback source and zero confidence must go together")

    @property
    def is_fallback(self) -> bool:
        return self.source == TimezoneSource.FALLBACK

    def to_dict(self) -> dict[str, Any]:
        return {
            "zone": self.zone,
            "confidence": self.confidence,
            "source": self.source.value,
        }


@dataclass(frozen=True, slots=True)
class ParticipantTimezone:
    """Associates a participant address with a detected timezone."""

    email: str
    timezone: TimezoneInfo
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "email": self.email,
            "name": self.name,
            "timezone": self.timezone.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ParticipantLocalTime:
    email: str
    local_time: str
    timezone: str

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email, "local_time": self.local_time, "timezone": self.timezone}


@dataclass(frozen=True, slots=True)
class TimezonedTime:
    """
    One instant rendered for every audience.

    All fields denote the same instant; only zone and wall-clock text differ.
    """

    original_time: str
    original_timezone: str
    converted_to_canonical_timezone: str
    participant_local_times: tuple[ParticipantLocalTime, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_time": self.original_time,
            "original_timezone": self.original_timezone,
            "converted_to_canonical_timezone": self.converted_to_canonical_timezone,
            "participant_local_times": [p.to_dict() for p in self.participant_local_times],
        }


@dataclass(frozen=True, slots=True)
class DSTValidationResult:
    """
    Outcome of checking a naive local time against a zone's transition rules.

    ``is_valid=False`` without ``adjusted_time`` means the time is ambiguous or
    does not exist and needs a human to disambiguate it.
    """

    is_valid: bool
    adjusted_time: str | None = None
    warning: str | None = None

    def __post_init__(self):
        if self.is_valid and self.adjusted_time is not None:
            raise ValueError("a valid time cannot carry an adjusted time")

    @property
    def needs_disambiguation(self) -> bool:
        return not self.is_valid and self.adjusted_time is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "adjusted_time": self.adjusted_time,
            "warning": self.warning,
        }


@dataclass(frozen=True, slots=True)
class MeetingWindow:
    """Naive "YYYY-MM-DD HH:mm" start and end of a proposed meeting."""

    start: str
    end: str

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True, slots=True)
class ZoneTime:
    zone: str
    display: str

    def to_dict(self) -> dict[str, str]:
        return {"zone": self.zone, "display": self.display}


@dataclass(frozen=True, slots=True)
class MeetingTimeSummary:
    """Text fragments describing one meeting window across zones."""

    canonical: ZoneTime
    sender: ZoneTime | None = None
    other_zones: tuple[ZoneTime, ...] = ()
    participants: tuple[ParticipantLocalTime, ...] = ()

    def render(self) -> str:
        lines = [f"{self.canonical.display} ({self.canonical.zone})"]
        if self.sender:
            lines.append(f"Your time: {self.sender.display} ({self.sender.zone})")
        if self.other_zones:
            lines.append("Other time zones:")
            lines.extend(f"  - {z.display} ({z.zone})" for z in self.other_zones)
        if self.participants:
            lines.append("Participants:")
            lines.extend(f"  - {p.email}: {p.local_time}" for p in self.participants)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "canonical": self.canonical.to_dict(),
            "sender": self.sender.to_dict() if self.sender else None,
            "other_zones": [z.to_dict() for z in self.other_zones],
            "participants": [p.to_dict() for p in self.participants],
            "text": self.render(),
        }


@dataclass(frozen=True, slots=True)
class SchedulingTimezoneContext:
    """Everything the reply step needs to talk about one proposed meeting."""

    sender_timezone: TimezoneInfo
    participant_timezones: tuple[ParticipantTimezone, ...]
    proposed_window: MeetingWindow
    canonical_window: MeetingWindow
    timezoned_times: tuple[TimezonedTime, ...]
    start_check: DSTValidationResult
    end_check: DSTValidationResult
    summary: MeetingTimeSummary

    @property
    def requires_confirmation(self) -> bool:
        """True when a proposed boundary falls in a DST gap or overlap."""
        return not (self.start_check.is_valid and self.end_check.is_valid)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sender_timezone": self.sender_timezone.to_dict(),
            "participant_timezones": [p.to_dict() for p in self.participant_timezones],
            "proposed_window": self.proposed_window.to_dict(),
            "canonical_window": self.canonical_window.to_dict(),
            "timezoned_times": [t.to_dict() for t in self.timezoned_times],
            "start_check": self.start_check.to_dict(),
            "end_check": self.end_check.to_dict(),
            "requires_confirmation": self.requires_confirmation,
            "summary": self.summary.to_dict(),
        }
