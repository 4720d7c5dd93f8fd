"""
Static timezone reference data.

Read-only lookup tables shared by every extractor. Keys are lower-case so
callers can match against lower-cased message text.
"""

from types import MappingProxyType

import pytz
from pytz.exceptions import UnknownTimeZoneError

TIMEZONE_ABBREVIATIONS = MappingProxyType(
    {
        "pst": "America/Los_Angeles",
        "pdt": "America/Los_Angeles",
        "est": "America/New_York",
        "edt": "America/New_York",
        "cst": "America/Chicago",
        "cdt": "America/Chicago",
        "mst": "America/Denver",
        "mdt": "America/Denver",
        "gmt": "Europe/London",
        "utc": "UTC",
        "bst": "Europe/London",
        "cet": "Europe/Paris",
        "cest": "Europe/Paris",
        "jst": "Asia/Tokyo",
        "ist": "Asia/Kolkata",
        "aest": "Australia/Sydney",
        "aedt": "Australia/Sydney",
    }
)

CITY_TIMEZONES = MappingProxyType(
    {
        "new york": "America/New_York",
        "nyc": "America/New_York",
        "los angeles": "America/Los_Angeles",
        "la": "America/Los_Angeles",
        "san francisco": "America/Los_Angeles",
        "sf": "America/Los_Angeles",
        "chicago": "America/Chicago",
        "denver": "America/Denver",
        "london": "Europe/London",
        "paris": "Europe/Paris",
        "tokyo": "Asia/Tokyo",
        "sydney": "Australia/Sydney",
        "mumbai": "Asia/Kolkata",
        "bangalore": "Asia/Kolkata",
        "singapore": "Asia/Singapore",
        "hong kong": "Asia/Hong_Kong",
        "beijing": "Asia/Shanghai",
        "toronto": "America/Toronto",
        "vancouver": "America/Vancouver",
    }
)

# Spoken US region names ("2 PM Pacific time")
REGION_TIMEZONES = MappingProxyType(
    {
        "pacific": "America/Los_Angeles",
        "eastern": "America/New_York",
        "central": "America/Chicago",
        "mountain": "America/Denver",
    }
)

# UTC offset in minutes -> zone tried first when guessing from a bare offset
OFFSET_PREFERRED_ZONES = MappingProxyType(
    {
        -600: "Pacific/Honolulu",
        -480: "America/Los_Angeles",
        -420: "America/Denver",
        -360: "America/Chicago",
        -300: "America/New_York",
        -240: "America/New_York",
        0: "Europe/London",
        60: "Europe/Paris",
        120: "Europe/Paris",
        330: "Asia/Kolkata",
        480: "Asia/Singapore",
        540: "Asia/Tokyo",
        600: "Australia/Sydney",
        660: "Australia/Sydney",
    }
)


def catalog_zones() -> list[str]:
    """Distinct zones referenced by the catalog, in first-seen order."""
    zones = [
        *TIMEZONE_ABBREVIATIONS.values(),
        *CITY_TIMEZONES.values(),
        *REGION_TIMEZONES.values(),
    ]
    return list(dict.fromkeys(zones))


def normalize_zone(zone: str | None) -> str | None:
    """
    Canonical spelling of an IANA zone identifier, or None if it is unknown.

    Lookup is case-insensitive, the same way ``pytz.timezone`` resolves
    names, so "america/new_york" normalizes to "America/New_York".
    """
    if not zone or not isinstance(zone, str):
        return None
    try:
        return pytz.timezone(zone.strip()).zone
    except UnknownTimeZoneError:
        return None


def is_known_zone(zone: str | None) -> bool:
    """True when ``zone`` names a zone in the IANA tz database."""
    return normalize_zone(zone) is not None
