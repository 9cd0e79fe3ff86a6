import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from guardian_booking.core.context import BookingContext, get_context
from guardian_booking.models.appointment import AppointmentRequest, AppointmentStatus
from guardian_booking.services.notifications import NotificationError

router = APIRouter(tags=['appointments'])

logger = logging.getLogger(__name__)


class UpdateStatusRequest(BaseModel):
    status: AppointmentStatus


class EligibilityResponse(BaseModel):
    student_id: str
    can_create_appointment: bool
    message: str | None = None
    active_appointment: AppointmentRequest | None = None


def get_appointment_or_404(appointment_id: str, context: BookingContext) -> AppointmentRequest:
    appointment = context.repository.get_appointment(appointment_id)
    if appointment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Appointment not found.',
        )
    return appointment


def notify_status_change(context: BookingContext, appointment: AppointmentRequest) -> None:
    notifier = context.notifier
    try:
        if not appointment.status.is_active:
            notifier.cancel_notifications(appointment.id)
        notifier.schedule_status_update(appointment, appointment.status)
        if appointment.status == AppointmentStatus.APPROVED:
            notifier.schedule_reminder(appointment)
    except NotificationError:
        logger.exception('Could not schedule status notifications for appointment %s', appointment.id)


@router.get('', response_model=list[AppointmentRequest])
def list_appointments(
    student_id: str | None = Query(default=None),
    context: BookingContext = Depends(get_context),
):
    if student_id is None:
        return context.repository.get_all_appointments()

    normalized_student_id = student_id.strip()
    if not normalized_student_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Student is required.',
        )
    return context.repository.get_appointments(normalized_student_id)


@router.get('/eligibility/{student_id}', response_model=EligibilityResponse)
def get_eligibility(student_id: str, context: BookingContext = Depends(get_context)):
    result = context.validator.can_create_appointment(student_id)
    return EligibilityResponse(
        student_id=student_id,
        can_create_appointment=result.is_valid,
        message=result.error_message,
        active_appointment=context.repository.get_active_appointment(student_id),
    )


@router.get('/{appointment_id}', response_model=AppointmentRequest)
def get_appointment(appointment_id: str, context: BookingContext = Depends(get_context)):
    return get_appointment_or_404(appointment_id, context)


@router.patch('/{appointment_id}/status', response_model=AppointmentRequest)
def update_appointment_status(
    appointment_id: str,
    data: UpdateStatusRequest,
    context: BookingContext = Depends(get_context),
):
    appointment = get_appointment_or_404(appointment_id, context)

    transition = context.validator.can_change_status(appointment, data.status)
    if not transition.is_valid:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=transition.error_message,
        )

    updated = context.repository.update_status(appointment_id, data.status)
    notify_status_change(context, updated)
    return updated
