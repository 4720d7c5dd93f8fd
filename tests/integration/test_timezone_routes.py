"""
Tests for the timezone HTTP endpoints.
"""

from fastapi.testclient import TestClient

from assistant.config import settings
from assistant.main import app

client = TestClient(app)


def test_detect_endpoint():
    response = client.post(
        "/timezone/detect",
        json={
            "headers": {"X-Timezone": "America/New_York"},
            "content": "Meeting at 3 PM PST",
            "participants": ["john@example.com", "jane@example.com"],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["timezone"] == {"zone": "America/New_York", "confidence": 0.9, "source": "header"}
    assert [p["email"] for p in data["participants"]] == ["john@example.com", "jane@example.com"]
    assert data["participants"][1]["timezone"]["zone"] == "America/New_York"
    assert data["has_explicit_timezone"] is True


def test_detect_endpoint_fallback():
    response = client.post("/timezone/detect", json={"content": "Can we meet tomorrow?"})

    assert response.status_code == 200
    data = response.json()
    assert data["timezone"]["source"] == "fallback"
    assert data["timezone"]["confidence"] == 0.0
    assert data["participants"] == []


def test_convert_endpoint():
    response = client.post(
        "/timezone/convert",
        json={
            "time": "2025-08-12 15:00",
            "from_zone": "America/New_York",
            "to_zone": "America/Los_Angeles",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converted_time"] == "2025-08-12 12:00"
    assert data["converted"] is True


def test_convert_endpoint_defaults_to_canonical_zone():
    response = client.post(
        "/timezone/convert", json={"time": "2025-08-12 18:00", "from_zone": "Europe/London"}
    )

    assert response.status_code == 200
    assert response.json()["to_zone"] == settings.CANONICAL_TIMEZONE


def test_convert_endpoint_malformed_time():
    response = client.post(
        "/timezone/convert",
        json={
            "time": "not-a-time",
            "from_zone": "America/New_York",
            "to_zone": "America/Los_Angeles",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converted_time"] == "not-a-time"
    assert data["converted"] is False


def test_convert_endpoint_lower_case_zone():
    response = client.post(
        "/timezone/convert",
        json={
            "time": "2025-08-12 15:00",
            "from_zone": "america/new_york",
            "to_zone": "America/Los_Angeles",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converted_time"] == "2025-08-12 12:00"
    assert data["converted"] is True


def test_convert_endpoint_out_of_range_time():
    response = client.post(
        "/timezone/convert",
        json={
            "time": "9999-12-31 23:00",
            "from_zone": "America/Los_Angeles",
            "to_zone": "Asia/Tokyo",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["converted_time"] == "9999-12-31 23:00"
    assert data["converted"] is False


def test_validate_dst_endpoint():
    response = client.post(
        "/timezone/validate-dst", json={"time": "2025-03-09 02:00", "zone": "America/New_York"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is False
    assert data["adjusted_time"] == "2025-03-09 03:00"


def test_coordinate_endpoint():
    response = client.post(
        "/timezone/coordinate",
        json={
            "headers": {
                "From": "Sam <sam@example.com>",
                "To": "owner@example.com",
                "Date": "Mon, 11 Aug 2025 09:12:00 -0400",
            },
            "content": "Could we do 3:00 PM EST on Tuesday?",
            "start": "2025-08-12 15:00",
            "end": "2025-08-12 16:00",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["sender_timezone"]["zone"] == "America/New_York"
    assert data["sender_timezone"]["source"] == "content"
    assert len(data["timezoned_times"]) == 2
    assert data["timezoned_times"][0]["participant_local_times"][0]["email"] == "sam@example.com"
    assert data["requires_confirmation"] is False
    assert "Your time:" in data["summary"]


def test_coordinate_endpoint_requires_window():
    response = client.post("/timezone/coordinate", json={"content": "hi"})

    assert response.status_code == 422


def test_validate_dst_endpoint_out_of_range_time():
    response = client.post(
        "/timezone/validate-dst", json={"time": "9999-12-31 23:30", "zone": "Asia/Tokyo"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is False
    assert data["warning"].startswith("Error validating time")
