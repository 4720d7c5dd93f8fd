# assistant/models/api/timezone_response.py
"""
Timezone API response models.
Used by routes for output formatting.
"""

from pydantic import BaseModel, Field


class TimezoneInfoResponse(BaseModel):
    """Response model for a detected timezone."""

    zone: str = Field(..., description="IANA zone identifier")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Heuristic trust score")
    source: str = Field(..., description="header, signature, content or fallback")


class ParticipantTimezoneResponse(BaseModel):
    email: str = Field(..., description="Participant address")
    name: str | None = Field(None, description="Display name when known")
    timezone: TimezoneInfoResponse


class DetectTimezoneResponse(BaseModel):
    """Response for timezone detection."""

    timezone: TimezoneInfoResponse
    participants: list[ParticipantTimezoneResponse] = Field(default_factory=list)
    has_explicit_timezone: bool = Field(..., description="Body pins a time to a zone")


class ConvertTimeResponse(BaseModel):
    """Response for time conversion. ``converted`` is false when the input was returned as-is."""

    time: str
    from_zone: str
    to_zone: str
    converted_time: str
    converted: bool


class DSTValidationResponse(BaseModel):
    is_valid: bool
    adjusted_time: str | None = None
    warning: str | None = None


class ParticipantLocalTimeResponse(BaseModel):
    email: str
    local_time: str
    timezone: str


class TimezonedTimeResponse(BaseModel):
    original_time: str
    original_timezone: str
    converted_to_canonical_timezone: str
    participant_local_times: list[ParticipantLocalTimeResponse] = Field(default_factory=list)


class CoordinateMeetingResponse(BaseModel):
    """Response for meeting coordination across zones."""

    sender_timezone: TimezoneInfoResponse
    canonical_timezone: str = Field(..., description="Zone bookings are made in")
    canonical_start: str
    canonical_end: str
    timezoned_times: list[TimezonedTimeResponse]
    start_check: DSTValidationResponse
    end_check: DSTValidationResponse
    requires_confirmation: bool = Field(
        ..., description="A boundary falls in a DST gap or overlap"
    )
    summary: str = Field(..., description="Human-readable multi-zone description")
