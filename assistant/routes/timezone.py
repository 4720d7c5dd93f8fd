"""
Timezone API Routes
HTTP endpoints exposing timezone detection, conversion and meeting coordination.
Data problems never produce errors here: the service fails open and the
responses say so.
"""

from fastapi import APIRouter

from assistant.features.timezone.domain.models import MeetingWindow, TimezoneInfo
from assistant.features.timezone.extractors import has_explicit_timezone
from assistant.features.timezone.service import timezone_service
from assistant.infrastructure.observability.logging import get_logger
from assistant.models.api.timezone_request import (
    ConvertTimeRequest,
    CoordinateMeetingRequest,
    DetectTimezoneRequest,
    ValidateDSTRequest,
)
from assistant.models.api.timezone_response import (
    ConvertTimeResponse,
    CoordinateMeetingResponse,
    DetectTimezoneResponse,
    DSTValidationResponse,
    ParticipantTimezoneResponse,
    TimezonedTimeResponse,
    TimezoneInfoResponse,
)
from assistant.models.domain.email_domain import InboundEmail

logger = get_logger(__name__)

router = APIRouter(prefix="/timezone", tags=["timezone"])


def _timezone_response(info: TimezoneInfo) -> TimezoneInfoResponse:
    return TimezoneInfoResponse(**info.to_dict())


@router.post("/detect", response_model=DetectTimezoneResponse)
async def detect_timezone(request: DetectTimezoneRequest):
    """Detect the sender's timezone and spread it across participants."""
    sender_zone = timezone_service.detect_timezone(request.headers, request.content)
    participants = timezone_service.participant_resolver.assign(request.participants, sender_zone)

    return DetectTimezoneResponse(
        timezone=_timezone_response(sender_zone),
        participants=[
            ParticipantTimezoneResponse(
                email=p.email, name=p.name, timezone=_timezone_response(p.timezone)
            )
            for p in participants
        ],
        has_explicit_timezone=has_explicit_timezone(request.content),
    )


@router.post("/convert", response_model=ConvertTimeResponse)
async def convert_time(request: ConvertTimeRequest):
    """Convert a wall-clock time, into the canonical zone unless a target is given."""
    to_zone = request.to_zone or timezone_service.canonical_zone
    converted_time = timezone_service.converter.try_convert(
        request.time, request.from_zone, to_zone
    )
    converted = converted_time is not None
    if not converted:
        logger.info(
            "Conversion request returned input unchanged",
            time=request.time,
            from_zone=request.from_zone,
            to_zone=to_zone,
        )

    return ConvertTimeResponse(
        time=request.time,
        from_zone=request.from_zone,
        to_zone=to_zone,
        converted_time=converted_time if converted else request.time,
        converted=converted,
    )


@router.post("/validate-dst", response_model=DSTValidationResponse)
async def validate_dst(request: ValidateDSTRequest):
    """Check a local time against the zone's DST transitions."""
    result = timezone_service.validate_dst_transition(request.time, request.zone)
    return DSTValidationResponse(**result.to_dict())


@router.post("/coordinate", response_model=CoordinateMeetingResponse)
async def coordinate_meeting(request: CoordinateMeetingRequest):
    """Annotate a proposed meeting with canonical and per-participant local times."""
    email = InboundEmail(request.headers, request.content)
    context = timezone_service.annotate_email(
        email, MeetingWindow(start=request.start, end=request.end)
    )

    logger.debug(
        "Meeting coordinated",
        zone=context.sender_timezone.zone,
        participants=len(context.participant_timezones),
        requires_confirmation=context.requires_confirmation,
    )

    return CoordinateMeetingResponse(
        sender_timezone=_timezone_response(context.sender_timezone),
        canonical_timezone=timezone_service.canonical_zone,
        canonical_start=context.canonical_window.start,
        canonical_end=context.canonical_window.end,
        timezoned_times=[TimezonedTimeResponse(**t.to_dict()) for t in context.timezoned_times],
        start_check=DSTValidationResponse(**context.start_check.to_dict()),
        end_check=DSTValidationResponse(**context.end_check.to_dict()),
        requires_confirmation=context.requires_confirmation,
        summary=context.summary.render(),
    )
