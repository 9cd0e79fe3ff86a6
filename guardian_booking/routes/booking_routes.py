from datetime import date as date_type, datetime, time as time_type

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator

from guardian_booking.core.context import BookingContext, get_context
from guardian_booking.models.appointment import (
    AppointmentCategory,
    AppointmentDuration,
    AppointmentRequest,
)
from guardian_booking.models.catalog import SchoolRepresentative, Student
from guardian_booking.rules.validation import BLOCKED_WEEKDAYS, ValidationResult
from guardian_booking.rules.workflow import SUBMITTING_MESSAGE, BookingFlow, BookingSelections, FlowStep

router = APIRouter(tags=['booking'])


class CategoryOptionResponse(BaseModel):
    category: AppointmentCategory
    display_name: str
    description: str


class DurationOptionResponse(BaseModel):
    duration: AppointmentDuration
    display_name: str


class BookingOptionsResponse(BaseModel):
    minimum_date: datetime
    maximum_date: datetime
    blocked_weekdays: list[int]
    time_slots: list[time_type]
    durations: list[DurationOptionResponse]
    categories: list[CategoryOptionResponse]


class StartFlowRequest(BaseModel):
    student_id: str

    @field_validator('student_id')
    @classmethod
    def validate_student_id(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Student is required.')
        return normalized


class UpdateSelectionsRequest(BaseModel):
    representative_id: str | None = None
    date: date_type | None = None
    time: time_type | None = None
    duration: AppointmentDuration | None = None
    category: AppointmentCategory | None = None
    purpose: str | None = None

    @field_validator('representative_id')
    @classmethod
    def validate_representative_id(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None


class FlowStateResponse(BaseModel):
    step: FlowStep
    step_number: int
    title: str
    student: Student | None = None
    representatives: list[SchoolRepresentative]
    selections: BookingSelections
    can_advance: bool
    message: str | None = None
    sentence_count: int
    submitted: bool
    appointment: AppointmentRequest | None = None


def get_flow(context: BookingContext = Depends(get_context)) -> BookingFlow:
    if context.active_flow is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='No appointment request is in progress.',
        )
    return context.active_flow


def build_flow_state(flow: BookingFlow) -> FlowStateResponse:
    guard = flow.can_advance()
    return FlowStateResponse(
        step=flow.step,
        step_number=flow.step.step_number,
        title=flow.step.title,
        student=flow.student,
        representatives=flow.representatives,
        selections=flow.selections,
        can_advance=guard.is_valid and not flow.is_submitted,
        message=flow.error_message,
        sentence_count=flow.sentence_count,
        submitted=flow.is_submitted,
        appointment=flow.created_appointment,
    )


@router.get('/options', response_model=BookingOptionsResponse)
def get_booking_options(context: BookingContext = Depends(get_context)):
    validator = context.validator
    return BookingOptionsResponse(
        minimum_date=validator.get_minimum_date(),
        maximum_date=validator.get_maximum_date(),
        blocked_weekdays=sorted(BLOCKED_WEEKDAYS),
        time_slots=[slot.time() for slot in validator.get_available_time_slots()],
        durations=[
            DurationOptionResponse(duration=duration, display_name=duration.display_name)
            for duration in AppointmentDuration
        ],
        categories=[
            CategoryOptionResponse(
                category=category,
                display_name=category.display_name,
                description=category.description,
            )
            for category in AppointmentCategory
        ],
    )


@router.get('/availability', response_model=ValidationResult)
def check_availability(
    day: date_type = Query(...),
    slot_time: time_type | None = Query(default=None, alias='time'),
    context: BookingContext = Depends(get_context),
):
    date_validation = context.validator.is_date_available(day)
    if not date_validation.is_valid or slot_time is None:
        return date_validation
    return context.validator.is_time_available(slot_time)


@router.post('/flow', response_model=FlowStateResponse, status_code=status.HTTP_201_CREATED)
def start_flow(data: StartFlowRequest, context: BookingContext = Depends(get_context)):
    if context.catalog.get_student(data.student_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Student not found.',
        )

    active_flow = context.active_flow
    if active_flow is not None and active_flow.is_submitting:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=SUBMITTING_MESSAGE,
        )

    flow = BookingFlow(context)
    eligibility = flow.select_student(data.student_id)
    if not eligibility.is_valid:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=eligibility.error_message,
        )

    context.active_flow = flow
    return build_flow_state(flow)


@router.get('/flow', response_model=FlowStateResponse)
def get_flow_state(flow: BookingFlow = Depends(get_flow)):
    return build_flow_state(flow)


@router.patch('/flow/selections', response_model=FlowStateResponse)
def update_selections(data: UpdateSelectionsRequest, flow: BookingFlow = Depends(get_flow)):
    if flow.is_submitted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='This appointment request has already been submitted.',
        )

    if data.representative_id is not None:
        result = flow.select_representative(data.representative_id)
        if not result.is_valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=result.error_message,
            )

    # Date, time and purpose are kept even when they fail their rule so the
    # guardian sees the message next to what they picked.
    if data.date is not None:
        flow.select_date(data.date)
    if data.time is not None:
        flow.select_time(data.time)
    if data.duration is not None:
        flow.select_duration(data.duration)
    if data.category is not None:
        flow.select_category(data.category)
    if data.purpose is not None:
        flow.set_purpose(data.purpose)

    return build_flow_state(flow)


@router.post('/flow/forward', response_model=FlowStateResponse)
async def move_forward(flow: BookingFlow = Depends(get_flow)):
    outcome = await flow.forward()
    if not outcome.accepted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=outcome.message,
        )
    return build_flow_state(flow)


@router.post('/flow/back', response_model=FlowStateResponse)
def move_back(flow: BookingFlow = Depends(get_flow)):
    outcome = flow.back()
    if not outcome.accepted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=outcome.message,
        )
    return build_flow_state(flow)


@router.delete('/flow', status_code=status.HTTP_204_NO_CONTENT)
def discard_flow(context: BookingContext = Depends(get_context)):
    if context.active_flow is not None:
        context.active_flow.discard()
        context.active_flow = None
