"""
Timezone evidence extractors.

Each extractor inspects one evidence source of an inbound message (headers,
signature block, free-text body) and returns at most one candidate. Deciding
which candidate to trust is left to the resolver.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Protocol

import pytz

from .catalog import (
    CITY_TIMEZONES,
    OFFSET_PREFERRED_ZONES,
    REGION_TIMEZONES,
    TIMEZONE_ABBREVIATIONS,
    catalog_zones,
    normalize_zone,
)
from .domain.models import TimezoneInfo, TimezoneSource

HEADER_ZONE_CONFIDENCE = 0.9
HEADER_ABBREVIATION_CONFIDENCE = 0.7
OFFSET_CONFIDENCE = 0.6
ABBREVIATION_CONFIDENCE = 0.8
PLACE_CONFIDENCE = 0.7

SIGNATURE_MARKERS = ("--", "Best regards", "Sincerely", "Thanks")

MAX_OFFSET_MINUTES = 14 * 60


def _alternation(keys) -> str:
    # Longest first so multi-word names win over their prefixes
    return "|".join(re.escape(k) for k in sorted(keys, key=len, reverse=True))


_ABBREVIATIONS = _alternation(TIMEZONE_ABBREVIATIONS)
_PLACES = _alternation([*CITY_TIMEZONES, *REGION_TIMEZONES])
_CITIES = _alternation(CITY_TIMEZONES)

# "utc"/"gmt" directly followed by an offset are offsets, not abbreviations
_NOT_OFFSET = r"(?!\s*[+-]\d)"

# "3pm", "3 PM", "15:00", "3:00 pm"
_CLOCK = r"(?<![\d:])\d{1,2}(?::\d{2}\s*(?:am|pm)?|\s*(?:am|pm))"

DATE_OFFSET_PATTERN = re.compile(r"([+-])(\d{2})(\d{2})(?:\s*\([^)]*\))?\s*$")
DATE_ABBREVIATION_PATTERN = re.compile(r"\b([A-Z]{3,5})\s*$")

ABBREVIATION_PATTERN = re.compile(rf"\b({_ABBREVIATIONS})\b{_NOT_OFFSET}")
CITY_PATTERN = re.compile(rf"\b({_CITIES})\b")
UTC_OFFSET_PATTERN = re.compile(r"\b(?:utc|gmt)\s*([+-])\s*(\d{1,2})(?::?(\d{2}))?\b")

CONTENT_ABBREVIATION_PATTERN = re.compile(rf"{_CLOCK}\s*({_ABBREVIATIONS})\b{_NOT_OFFSET}")
CONTENT_PLACE_PATTERN = re.compile(rf"{_CLOCK}\s+({_PLACES})\b(?:\s+time)?")


class OffsetZoneGuesser(Protocol):
    """Policy that picks a plausible zone for a bare UTC offset."""

    def __call__(self, offset_minutes: int, reference: datetime | None = None) -> str | None: ...


def _offset_at(zone: str, reference: datetime) -> timedelta | None:
    return reference.astimezone(pytz.timezone(zone)).utcoffset()


def guess_zone_for_offset(offset_minutes: int, reference: datetime | None = None) -> str | None:
    """
    Best-effort zone for a UTC offset observed at ``reference``.

    Offsets are shared by many zones, so this is a guess: the preferred zone
    for the offset, then catalog zones, then the tz database's common zones,
    each only if it actually has that offset at ``reference``. Whole-hour
    offsets nobody matches fall back to the fixed ``Etc/GMT`` zones.

    Args:
        offset_minutes: Offset east of UTC in minutes (-480 for -0800)
        reference: Instant at which the offset was observed (default: now)

    Returns:
        IANA zone name, or None when no zone can carry the offset
    """
    if abs(offset_minutes) > MAX_OFFSET_MINUTES:
        return None

    reference = reference or datetime.now(UTC)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)
    target = timedelta(minutes=offset_minutes)

    candidates = []
    preferred = OFFSET_PREFERRED_ZONES.get(offset_minutes)
    if preferred:
        candidates.append(preferred)
    candidates.extend(catalog_zones())
    candidates.extend(pytz.common_timezones)

    for zone in dict.fromkeys(candidates):
        if _offset_at(zone, reference) == target:
            return zone

    hours, minutes = divmod(offset_minutes, 60)
    if minutes == 0 and -12 <= hours <= 14:
        # Etc/GMT names use inverted POSIX signs
        return "UTC" if hours == 0 else f"Etc/GMT{-hours:+d}"
    return None


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted and value:
            return value.strip()
    return None


def _date_header_instant(date_header: str) -> datetime | None:
    try:
        return parsedate_to_datetime(date_header)
    except (TypeError, ValueError, IndexError):
        return None


def from_headers(
    headers: Mapping[str, str],
    offset_guesser: OffsetZoneGuesser = guess_zone_for_offset,
) -> TimezoneInfo | None:
    """
    Detect timezone from message headers.

    An explicit ``X-Timezone`` header wins. Otherwise the trailing offset or
    abbreviation of the ``Date`` header is used; offsets only identify a zone
    loosely, so they get the lowest confidence.
    """
    if not headers:
        return None

    explicit = normalize_zone(_get_header(headers, "X-Timezone"))
    if explicit:
        return TimezoneInfo(explicit, HEADER_ZONE_CONFIDENCE, TimezoneSource.HEADER)

    date_header = _get_header(headers, "Date")
    if not date_header:
        return None

    offset_match = DATE_OFFSET_PATTERN.search(date_header)
    if offset_match:
        sign, hours, minutes = offset_match.groups()
        offset = int(hours) * 60 + int(minutes)
        zone = offset_guesser(-offset if sign == "-" else offset, _date_header_instant(date_header))
        if zone:
            return TimezoneInfo(zone, OFFSET_CONFIDENCE, TimezoneSource.HEADER)
        return None

    abbreviation_match = DATE_ABBREVIATION_PATTERN.search(date_header)
    if abbreviation_match:
        zone = TIMEZONE_ABBREVIATIONS.get(abbreviation_match.group(1).lower())
        if zone:
            return TimezoneInfo(zone, HEADER_ABBREVIATION_CONFIDENCE, TimezoneSource.HEADER)

    return None


def signature_block(text: str) -> str | None:
    """Text from the last sign-off marker to the end, or None if unsigned."""
    if not text:
        return None
    start = max(text.rfind(marker) for marker in SIGNATURE_MARKERS)
    if start == -1:
        return None
    return text[start:]


def from_signature(
    text: str,
    offset_guesser: OffsetZoneGuesser = guess_zone_for_offset,
) -> TimezoneInfo | None:
    """Detect timezone from the signature block of a message body."""
    block = signature_block(text)
    if block is None:
        return None
    signature = block.lower()

    match = ABBREVIATION_PATTERN.search(signature)
    if match:
        return TimezoneInfo(
            TIMEZONE_ABBREVIATIONS[match.group(1)], ABBREVIATION_CONFIDENCE, TimezoneSource.SIGNATURE
        )

    match = CITY_PATTERN.search(signature)
    if match:
        return TimezoneInfo(
            CITY_TIMEZONES[match.group(1)], PLACE_CONFIDENCE, TimezoneSource.SIGNATURE
        )

    match = UTC_OFFSET_PATTERN.search(signature)
    if match:
        sign, hours, minutes = match.groups()
        offset = int(hours) * 60 + int(minutes or 0)
        zone = offset_guesser(-offset if sign == "-" else offset)
        if zone:
            return TimezoneInfo(zone, OFFSET_CONFIDENCE, TimezoneSource.SIGNATURE)

    return None


def from_content(text: str) -> TimezoneInfo | None:
    """Detect timezone from zone-qualified times in the body ("3pm EST")."""
    if not text:
        return None
    content = text.lower()

    match = CONTENT_ABBREVIATION_PATTERN.search(content)
    if match:
        return TimezoneInfo(
            TIMEZONE_ABBREVIATIONS[match.group(1)], ABBREVIATION_CONFIDENCE, TimezoneSource.CONTENT
        )

    match = CONTENT_PLACE_PATTERN.search(content)
    if match:
        place = match.group(1)
        zone = REGION_TIMEZONES.get(place) or CITY_TIMEZONES[place]
        return TimezoneInfo(zone, PLACE_CONFIDENCE, TimezoneSource.CONTENT)

    return None


def has_explicit_timezone(text: str) -> bool:
    """True when the text pins a time to a zone, e.g. "2 PM Eastern time"."""
    return from_content(text) is not None
