# assistant/models/api/timezone_request.py
"""
Timezone API request models.
Used by routes for input validation.
"""

from pydantic import BaseModel, Field


class DetectTimezoneRequest(BaseModel):
    """Request for detecting a message's timezone."""

    headers: dict[str, str] = Field(default_factory=dict, description="Flat message headers")
    content: str = Field(default="", description="Decoded plain-text body")
    participants: list[str] = Field(
        default_factory=list, description="Participant addresses to assign zones to"
    )


class ConvertTimeRequest(BaseModel):
    """Request for converting a wall-clock time between zones."""

    time: str = Field(..., description='Local time as "YYYY-MM-DD HH:mm"')
    from_zone: str = Field(..., description="IANA zone the time is expressed in")
    to_zone: str | None = Field(
        default=None, description="Target IANA zone (default: canonical zone)"
    )


class ValidateDSTRequest(BaseModel):
    """Request for checking a local time against DST transitions."""

    time: str = Field(..., description='Local time as "YYYY-MM-DD HH:mm"')
    zone: str = Field(..., description="IANA zone the time is expressed in")


class CoordinateMeetingRequest(BaseModel):
    """Request for annotating a proposed meeting from an inbound message."""

    headers: dict[str, str] = Field(default_factory=dict, description="Flat message headers")
    content: str = Field(default="", description="Decoded plain-text body")
    start: str = Field(..., description='Proposed start in the sender\'s zone, "YYYY-MM-DD HH:mm"')
    end: str = Field(..., description='Proposed end in the sender\'s zone, "YYYY-MM-DD HH:mm"')
