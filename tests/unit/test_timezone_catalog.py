import pytest

from assistant.features.timezone.catalog import (
    CITY_TIMEZONES,
    TIMEZONE_ABBREVIATIONS,
    catalog_zones,
    is_known_zone,
    normalize_zone,
)


@pytest.mark.parametrize(
    "zone, expected",
    [
        ("America/New_York", "America/New_York"),
        ("america/new_york", "America/New_York"),
        ("EUROPE/LONDON", "Europe/London"),
        ("utc", "UTC"),
        ("Mars/Base", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_zone(zone, expected):
    assert normalize_zone(zone) == expected


def test_is_known_zone_matches_normalization():
    assert is_known_zone("asia/tokyo")
    assert not is_known_zone("Asia/Atlantis")


def test_catalog_zones_are_all_known():
    zones = catalog_zones()

    assert len(zones) == len(set(zones))
    assert all(normalize_zone(zone) == zone for zone in zones)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        TIMEZONE_ABBREVIATIONS["xyz"] = "UTC"
    with pytest.raises(TypeError):
        CITY_TIMEZONES["atlantis"] = "UTC"
