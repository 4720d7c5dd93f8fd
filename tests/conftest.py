import pytest

from assistant.features.timezone.domain.models import (
    ParticipantTimezone,
    TimezoneInfo,
    TimezoneSource,
)
from assistant.features.timezone.service import TimezoneService

CANONICAL_ZONE = "America/Los_Angeles"


@pytest.fixture
def service():
    return TimezoneService(canonical_zone=CANONICAL_ZONE)


@pytest.fixture
def make_participant():
    def _make(email: str, zone: str, confidence: float = 0.8, source=TimezoneSource.SIGNATURE):
        return ParticipantTimezone(email=email, timezone=TimezoneInfo(zone, confidence, source))

    return _make


@pytest.fixture
def new_york_sender():
    return TimezoneInfo("America/New_York", 0.9, TimezoneSource.HEADER)
