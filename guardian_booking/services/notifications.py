import logging
from collections.abc import Callable
from datetime import datetime, time, timedelta

from pydantic import BaseModel

from guardian_booking.models.appointment import AppointmentRequest, AppointmentStatus

logger = logging.getLogger(__name__)

SUBMITTED_CATEGORY = 'APPOINTMENT_SUBMITTED'
STATUS_UPDATE_CATEGORY = 'APPOINTMENT_STATUS_UPDATE'
REMINDER_CATEGORY = 'APPOINTMENT_REMINDER'
REMINDER_TIME = time(18, 0)


class NotificationError(Exception):
    """Raised when a notification could not be scheduled."""


class ScheduledNotification(BaseModel):
    identifier: str
    appointment_id: str
    category: str
    title: str
    body: str
    deliver_at: datetime


def _describe_slot(appointment: AppointmentRequest) -> str:
    return f"{appointment.date.strftime('%b %d, %Y')} at {appointment.time.strftime('%I:%M %p').lstrip('0')}"


class AppointmentNotifier:
    """Queues guardian-facing notifications about appointment requests.

    Nothing is delivered from here; the queue is what a push or email
    gateway would consume. Scheduling under an identifier that is already
    queued replaces the earlier entry.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._scheduled: dict[str, ScheduledNotification] = {}

    @property
    def scheduled(self) -> list[ScheduledNotification]:
        return sorted(self._scheduled.values(), key=lambda item: item.deliver_at)

    def _schedule(self, notification: ScheduledNotification) -> ScheduledNotification:
        self._scheduled[notification.identifier] = notification
        logger.info(
            'Scheduled %s notification %s for %s',
            notification.category,
            notification.identifier,
            notification.deliver_at.isoformat(),
        )
        return notification

    def schedule_confirmation(self, appointment: AppointmentRequest) -> ScheduledNotification:
        student_name = appointment.student_name or 'your student'
        return self._schedule(
            ScheduledNotification(
                identifier=f'appointment_submitted_{appointment.id}',
                appointment_id=appointment.id,
                category=SUBMITTED_CATEGORY,
                title='Appointment Request Submitted',
                body=f'Your appointment request for {student_name} has been submitted successfully.',
                deliver_at=self._clock() + timedelta(seconds=1),
            )
        )

    def schedule_status_update(
        self,
        appointment: AppointmentRequest,
        new_status: AppointmentStatus,
    ) -> ScheduledNotification | None:
        student_name = appointment.student_name or 'your student'
        representative_name = appointment.representative_name or 'the representative'

        if new_status == AppointmentStatus.APPROVED:
            title = 'Appointment Approved'
            body = (
                f'Your appointment with {representative_name} for {student_name} '
                f'has been approved for {_describe_slot(appointment)}.'
            )
        elif new_status == AppointmentStatus.REJECTED:
            title = 'Appointment Declined'
            body = (
                f'Your appointment request for {student_name} has been declined. '
                'Please try scheduling a different time.'
            )
        else:
            return None

        return self._schedule(
            ScheduledNotification(
                identifier=f'appointment_status_{appointment.id}_{new_status.value}',
                appointment_id=appointment.id,
                category=STATUS_UPDATE_CATEGORY,
                title=title,
                body=body,
                deliver_at=self._clock() + timedelta(seconds=1),
            )
        )

    def schedule_reminder(self, appointment: AppointmentRequest) -> ScheduledNotification | None:
        if appointment.status != AppointmentStatus.APPROVED:
            return None

        deliver_at = datetime.combine(appointment.date - timedelta(days=1), REMINDER_TIME)
        if deliver_at <= self._clock():
            return None

        student_name = appointment.student_name or 'your student'
        representative_name = appointment.representative_name or 'the representative'
        return self._schedule(
            ScheduledNotification(
                identifier=f'appointment_reminder_{appointment.id}',
                appointment_id=appointment.id,
                category=REMINDER_CATEGORY,
                title='Upcoming Appointment',
                body=(
                    f'Reminder: You have an appointment with {representative_name} tomorrow at '
                    f"{appointment.time.strftime('%I:%M %p').lstrip('0')} for {student_name}."
                ),
                deliver_at=deliver_at,
            )
        )

    def cancel_notifications(self, appointment_id: str) -> None:
        """Drop every queued notification for ``appointment_id``, status alerts included."""
        identifiers = [
            identifier
            for identifier, notification in self._scheduled.items()
            if notification.appointment_id == appointment_id
        ]
        for identifier in identifiers:
            del self._scheduled[identifier]
            logger.info('Cancelled notification %s', identifier)
