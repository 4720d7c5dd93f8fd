"""
Timezone resolution for inbound messages.

Combines the evidence extractors under a priority-then-threshold policy and
spreads the result across a message's participants.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from assistant.infrastructure.observability.logging import get_logger, log_timezone_detection

from . import extractors
from .catalog import normalize_zone
from .domain.models import ParticipantTimezone, TimezoneInfo, TimezoneSource
from .extractors import OffsetZoneGuesser, guess_zone_for_offset

logger = get_logger(__name__)

# Minimum confidence for each source to short-circuit the remaining checks
HEADER_THRESHOLD = 0.8
SIGNATURE_THRESHOLD = 0.7
CONTENT_THRESHOLD = 0.7

# Tie-break order when no source clears its threshold (lower wins)
SOURCE_PRIORITY = {
    TimezoneSource.HEADER: 0,
    TimezoneSource.SIGNATURE: 1,
    TimezoneSource.CONTENT: 2,
}


class TimezoneConfigurationError(Exception):
    """Raised when the configured canonical zone is unusable."""

    def __init__(self, message: str, zone: str | None = None):
        super().__init__(message)
        self.zone = zone


class TimezoneResolver:
    """
    Picks a single best-effort timezone for a message.

    Headers are trusted first, then the signature, then the body, each only
    when confident enough. If nothing clears its threshold, the strongest
    weak candidate is used, and with no evidence at all the canonical zone is
    returned as a zero-confidence fallback.
    """

    def __init__(
        self,
        canonical_zone: str,
        offset_guesser: OffsetZoneGuesser = guess_zone_for_offset,
    ):
        zone = normalize_zone(canonical_zone)
        if zone is None:
            raise TimezoneConfigurationError(
                f"Canonical timezone is not a known IANA zone: {canonical_zone}",
                zone=canonical_zone,
            )
        self.canonical_zone = zone
        self.offset_guesser = offset_guesser

    def fallback(self) -> TimezoneInfo:
        return TimezoneInfo(self.canonical_zone, 0.0, TimezoneSource.FALLBACK)

    def detect(self, headers: Mapping[str, str] | None, content: str | None) -> TimezoneInfo:
        """
        Detect the sender's timezone.

        Args:
            headers: Flat header mapping (names matched case-insensitively)
            content: Already-decoded plain-text body

        Returns:
            TimezoneInfo: Never None; falls back to the canonical zone
        """
        headers = headers or {}
        content = content or ""
        candidates: list[TimezoneInfo] = []

        header_zone = extractors.from_headers(headers, self.offset_guesser)
        if header_zone:
            if header_zone.confidence >= HEADER_THRESHOLD:
                return self._decided(header_zone, "header_threshold")
            candidates.append(header_zone)

        signature_zone = extractors.from_signature(content, self.offset_guesser)
        if signature_zone:
            if signature_zone.confidence >= SIGNATURE_THRESHOLD:
                return self._decided(signature_zone, "signature_threshold")
            candidates.append(signature_zone)

        content_zone = extractors.from_content(content)
        if content_zone:
            if content_zone.confidence >= CONTENT_THRESHOLD:
                return self._decided(content_zone, "content_threshold")
            candidates.append(content_zone)

        if candidates:
            best = max(
                candidates,
                key=lambda c: (c.confidence, -SOURCE_PRIORITY[c.source]),
            )
            return self._decided(best, "best_candidate")

        return self._decided(self.fallback(), "fallback")

    def _decided(self, result: TimezoneInfo, rule: str) -> TimezoneInfo:
        logger.debug(
            "Timezone resolved",
            zone=result.zone,
            confidence=result.confidence,
            source=result.source.value,
            rule=rule,
        )
        return result


class ParticipantTimezoneResolver:
    """
    Assigns a timezone to every participant of a message.

    There is no per-participant evidence yet, so everyone inherits the
    sender's zone. Callers always get one entry per address in input order.
    """

    def __init__(self, resolver: TimezoneResolver):
        self.resolver = resolver

    def resolve_all(
        self,
        participants: Sequence[str],
        headers: Mapping[str, str] | None,
        content: str | None,
        names: Mapping[str, str] | None = None,
    ) -> list[ParticipantTimezone]:
        sender_zone = self.resolver.detect(headers, content)
        return self.assign(participants, sender_zone, names)

    def assign(
        self,
        participants: Sequence[str],
        sender_zone: TimezoneInfo,
        names: Mapping[str, str] | None = None,
    ) -> list[ParticipantTimezone]:
        """Give every participant the already-detected sender zone."""
        names = names or {}

        log_timezone_detection(
            sender_zone.zone,
            sender_zone.confidence,
            sender_zone.source.value,
            participants=len(participants),
        )

        return [
            ParticipantTimezone(email=email, timezone=sender_zone, name=names.get(email))
            for email in participants
        ]
