import pytest
from fastapi import HTTPException

from guardian_booking.models.appointment import AppointmentStatus
from guardian_booking.routes.appointment_routes import (
    UpdateStatusRequest,
    get_appointment,
    get_eligibility,
    list_appointments,
    update_appointment_status,
)


def test_list_appointments_newest_first(seeded_context) -> None:
    appointments = list_appointments(student_id=None, context=seeded_context)

    assert [appointment.id for appointment in appointments] == ['appointment_1', 'appointment_2']


def test_list_appointments_for_student(seeded_context) -> None:
    appointments = list_appointments(student_id=' student_3 ', context=seeded_context)

    assert [appointment.id for appointment in appointments] == ['appointment_2']


def test_list_appointments_rejects_blank_student(seeded_context) -> None:
    with pytest.raises(HTTPException) as exception_info:
        list_appointments(student_id='   ', context=seeded_context)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Student is required.'


def test_get_appointment_returns_not_found_when_missing(seeded_context) -> None:
    with pytest.raises(HTTPException) as exception_info:
        get_appointment(appointment_id='missing', context=seeded_context)

    assert exception_info.value.status_code == 404
    assert exception_info.value.detail == 'Appointment not found.'


def test_get_eligibility_reports_active_request(seeded_context) -> None:
    eligibility = get_eligibility(student_id='student_1', context=seeded_context)

    assert eligibility.can_create_appointment is False
    assert eligibility.active_appointment.id == 'appointment_1'

    assert get_eligibility(student_id='student_2', context=seeded_context).can_create_appointment is True


def test_update_status_approves_and_schedules_notifications(seeded_context, clock) -> None:
    updated = update_appointment_status(
        appointment_id='appointment_1',
        data=UpdateStatusRequest(status=AppointmentStatus.APPROVED),
        context=seeded_context,
    )

    assert updated.status == AppointmentStatus.APPROVED
    assert updated.updated_at == clock()
    identifiers = {item.identifier for item in seeded_context.notifier.scheduled}
    assert identifiers == {'appointment_status_appointment_1_approved', 'appointment_reminder_appointment_1'}


def test_update_status_rejects_illegal_transition(seeded_context) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_appointment_status(
            appointment_id='appointment_2',
            data=UpdateStatusRequest(status=AppointmentStatus.PENDING),
            context=seeded_context,
        )

    assert exception_info.value.status_code == 409
    assert exception_info.value.detail == 'An appointment that is approved cannot be marked pending.'


def test_update_status_returns_not_found_when_missing(seeded_context) -> None:
    with pytest.raises(HTTPException) as exception_info:
        update_appointment_status(
            appointment_id='missing',
            data=UpdateStatusRequest(status=AppointmentStatus.CANCELLED),
            context=seeded_context,
        )

    assert exception_info.value.status_code == 404


def test_cancelling_releases_student(seeded_context) -> None:
    update_appointment_status(
        appointment_id='appointment_1',
        data=UpdateStatusRequest(status=AppointmentStatus.CANCELLED),
        context=seeded_context,
    )

    assert get_eligibility(student_id='student_1', context=seeded_context).can_create_appointment is True


def test_cancelling_approved_request_clears_its_notifications(seeded_context) -> None:
    for new_status in (AppointmentStatus.APPROVED, AppointmentStatus.CANCELLED):
        update_appointment_status(
            appointment_id='appointment_1',
            data=UpdateStatusRequest(status=new_status),
            context=seeded_context,
        )

    assert seeded_context.notifier.scheduled == []


def test_rejecting_request_keeps_only_the_rejection_alert(seeded_context) -> None:
    appointment = get_appointment(appointment_id='appointment_1', context=seeded_context)
    seeded_context.notifier.schedule_confirmation(appointment)

    update_appointment_status(
        appointment_id='appointment_1',
        data=UpdateStatusRequest(status=AppointmentStatus.REJECTED),
        context=seeded_context,
    )

    identifiers = [item.identifier for item in seeded_context.notifier.scheduled]
    assert identifiers == ['appointment_status_appointment_1_rejected']
