import logging
from collections.abc import Callable
from datetime import datetime, time, timedelta

from guardian_booking.models.appointment import AppointmentRequest, AppointmentStatus

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def get_week_start(now: datetime) -> datetime:
    """Midnight of the most recent Sunday on or before ``now``."""
    days_since_sunday = (now.weekday() + 1) % DAYS_PER_WEEK
    return datetime.combine(now.date() - timedelta(days=days_since_sunday), time.min)


class AppointmentRepository:
    """In-memory, insertion-ordered store of appointment requests.

    Entries are only appended or have their status changed in place; nothing
    is ever removed. Eligibility rules live in the validator, not here.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._appointments: list[AppointmentRequest] = []

    def __len__(self) -> int:
        return len(self._appointments)

    def add_appointment(self, appointment: AppointmentRequest) -> None:
        self._appointments.append(appointment)
        logger.info(
            'Stored appointment request %s for student %s (%s)',
            appointment.id,
            appointment.student_id,
            appointment.status.value,
        )

    def get_appointment(self, appointment_id: str) -> AppointmentRequest | None:
        return next((item for item in self._appointments if item.id == appointment_id), None)

    def get_active_appointment(self, student_id: str) -> AppointmentRequest | None:
        return next(
            (item for item in self._appointments if item.student_id == student_id and item.status.is_active),
            None,
        )

    def has_active_appointment(self, student_id: str) -> bool:
        return self.get_active_appointment(student_id) is not None

    def get_appointments_this_week(self, student_id: str) -> list[AppointmentRequest]:
        week_start = get_week_start(self._clock())
        week_end = week_start + timedelta(days=DAYS_PER_WEEK)

        return [
            item for item in self._appointments
            if item.student_id == student_id and week_start <= item.created_at < week_end
        ]

    def has_appointment_this_week(self, student_id: str) -> bool:
        return bool(self.get_appointments_this_week(student_id))

    def get_appointments(self, student_id: str) -> list[AppointmentRequest]:
        return [item for item in self._appointments if item.student_id == student_id]

    def get_all_appointments(self) -> list[AppointmentRequest]:
        return sorted(self._appointments, key=lambda item: item.created_at, reverse=True)

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> AppointmentRequest | None:
        appointment = self.get_appointment(appointment_id)
        if appointment is None:
            return None

        previous_status = appointment.status
        appointment.status = status
        appointment.updated_at = self._clock()
        logger.info(
            'Appointment %s moved from %s to %s',
            appointment_id,
            previous_status.value,
            status.value,
        )
        return appointment
