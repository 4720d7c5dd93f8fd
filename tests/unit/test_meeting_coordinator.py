from datetime import datetime

import pytest
import pytz

from assistant.features.timezone.coordinator import MeetingTimeCoordinator, format_window
from assistant.features.timezone.domain.models import MeetingWindow, TimezoneInfo, TimezoneSource

WINDOW = MeetingWindow(start="2025-08-12 12:00", end="2025-08-12 13:00")


@pytest.fixture
def coordinator():
    return MeetingTimeCoordinator("America/Los_Angeles")


def test_format_window_same_day():
    tz = pytz.timezone("America/Los_Angeles")
    start = tz.localize(datetime(2025, 8, 12, 12, 0))
    end = tz.localize(datetime(2025, 8, 12, 13, 0))

    assert format_window(start, end) == "Tue, Aug 12, 12:00 PM - 1:00 PM PDT"


def test_format_window_spanning_midnight():
    tz = pytz.timezone("Asia/Tokyo")
    start = tz.localize(datetime(2025, 8, 12, 23, 30))
    end = tz.localize(datetime(2025, 8, 13, 0, 30))

    assert format_window(start, end) == "Tue, Aug 12, 11:30 PM - Wed, Aug 13, 12:30 AM JST"


def test_describe_without_participants_shows_canonical_only(coordinator, new_york_sender):
    summary = coordinator.describe(WINDOW, new_york_sender, [])

    assert summary.canonical.zone == "America/Los_Angeles"
    assert summary.canonical.display == "Tue, Aug 12, 12:00 PM - 1:00 PM PDT"
    assert summary.sender is None
    assert summary.other_zones == ()
    assert summary.participants == ()
    assert summary.render() == "Tue, Aug 12, 12:00 PM - 1:00 PM PDT (America/Los_Angeles)"


def test_describe_deduplicates_zones(coordinator, new_york_sender, make_participant):
    participants = [
        make_participant("a@example.com", "America/Chicago"),
        make_participant("b@example.com", "America/Chicago"),
        make_participant("c@example.com", "America/New_York"),
        make_participant("d@example.com", "America/Los_Angeles"),
    ]

    summary = coordinator.describe(WINDOW, new_york_sender, participants)

    assert summary.sender.zone == "America/New_York"
    assert summary.sender.display == "Tue, Aug 12, 3:00 PM - 4:00 PM EDT"
    assert [z.zone for z in summary.other_zones] == ["America/Chicago", "America/Los_Angeles"]
    assert summary.other_zones[0].display == "Tue, Aug 12, 2:00 PM - 3:00 PM CDT"
    assert [p.email for p in summary.participants] == [
        "a@example.com",
        "b@example.com",
        "c@example.com",
        "d@example.com",
    ]


def test_describe_omits_canonical_when_sender_is_canonical(coordinator, make_participant):
    sender = TimezoneInfo("America/Los_Angeles", 0.8, TimezoneSource.SIGNATURE)
    participants = [
        make_participant("a@example.com", "America/Los_Angeles"),
        make_participant("b@example.com", "Europe/London"),
    ]

    summary = coordinator.describe(WINDOW, sender, participants)

    assert summary.sender is None
    assert [z.zone for z in summary.other_zones] == ["Europe/London"]
    assert summary.other_zones[0].display == "Tue, Aug 12, 8:00 PM - 9:00 PM BST"


def test_describe_skips_unknown_participant_zones(coordinator, new_york_sender, make_participant):
    participants = [
        make_participant("a@example.com", "Mars/Base"),
        make_participant("b@example.com", "Asia/Tokyo"),
    ]

    summary = coordinator.describe(WINDOW, new_york_sender, participants)

    assert [p.email for p in summary.participants] == ["b@example.com"]
    assert summary.participants[0].local_time == "Wed, Aug 13, 4:00 AM - 5:00 AM JST"


def test_describe_unparseable_window_degrades(coordinator, new_york_sender, make_participant):
    summary = coordinator.describe(
        MeetingWindow(start="soon", end="later"),
        new_york_sender,
        [make_participant("a@example.com", "Asia/Tokyo")],
    )

    assert summary.canonical.display == "soon - later"
    assert summary.sender is None
    assert summary.other_zones == ()


def test_render_lists_every_section(coordinator, new_york_sender, make_participant):
    summary = coordinator.describe(
        WINDOW, new_york_sender, [make_participant("a@example.com", "Europe/Paris")]
    )

    text = summary.render()

    assert text.splitlines()[0] == "Tue, Aug 12, 12:00 PM - 1:00 PM PDT (America/Los_Angeles)"
    assert "Your time: Tue, Aug 12, 3:00 PM - 4:00 PM EDT (America/New_York)" in text
    assert "Other time zones:" in text
    assert "  - a@example.com: Tue, Aug 12, 9:00 PM - 10:00 PM CEST" in text


def test_describe_normalizes_zone_spelling(coordinator, make_participant):
    sender = TimezoneInfo("america/new_york", 0.8, TimezoneSource.SIGNATURE)
    participants = [
        make_participant("a@example.com", "america/new_york"),
        make_participant("b@example.com", "EUROPE/LONDON"),
        make_participant("c@example.com", "Europe/London"),
    ]

    summary = coordinator.describe(WINDOW, sender, participants)

    assert summary.sender.zone == "America/New_York"
    assert [z.zone for z in summary.other_zones] == ["Europe/London"]
    assert [p.timezone for p in summary.participants] == [
        "America/New_York",
        "Europe/London",
        "Europe/London",
    ]


def test_describe_window_at_calendar_limit_degrades(
    coordinator, new_york_sender, make_participant
):
    summary = coordinator.describe(
        MeetingWindow(start="9999-12-31 22:00", end="9999-12-31 23:00"),
        new_york_sender,
        [make_participant("a@example.com", "Asia/Tokyo")],
    )

    assert summary.canonical.zone == "America/Los_Angeles"
    assert summary.sender is None
    assert summary.participants == ()
