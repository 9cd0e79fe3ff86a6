"""Booking rules: which days and times are offerable and who may submit what.

Every check returns a :class:`ValidationResult`. Checks stop at the first
violated rule and never raise for a rule violation.
"""

from collections.abc import Callable, Iterator
from datetime import date, datetime, time, timedelta

from pydantic import BaseModel, ConfigDict

from guardian_booking.models.appointment import (
    AppointmentCategory,
    AppointmentDuration,
    AppointmentRequest,
    AppointmentStatus,
)
from guardian_booking.stores.appointments import AppointmentRepository
from guardian_booking.stores.catalog import CatalogStore

OPEN_TIME = time(7, 30)
CLOSE_TIME = time(11, 0)
SLOT_INCREMENT_MINUTES = 30
BOOKING_RANGE_DAYS = 30
# date.weekday() numbering, Monday == 0
BLOCKED_WEEKDAYS = {
    4: 'Fridays',
    5: 'Saturdays',
}
SENTENCE_TERMINATORS = '.!?'
MIN_PURPOSE_SENTENCES = 2
MIN_PURPOSE_LENGTH = 20


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error_message: str | None = None

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str) -> 'ValidationResult':
        return cls(is_valid=False, error_message=message)


def minutes_of_day(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def calendar_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def iterate_slot_starts(start_time: datetime, end_time: datetime) -> Iterator[datetime]:
    current = start_time
    while current < end_time:
        yield current
        current += timedelta(minutes=SLOT_INCREMENT_MINUTES)


class TimeSlotMenu:
    """The day's slot starts; each iteration walks the window afresh."""

    def __init__(self, day: date) -> None:
        self.day = day

    def __iter__(self) -> Iterator[datetime]:
        return iterate_slot_starts(
            datetime.combine(self.day, OPEN_TIME),
            datetime.combine(self.day, CLOSE_TIME),
        )

    def __len__(self) -> int:
        return (minutes_of_day(CLOSE_TIME) - minutes_of_day(OPEN_TIME) + SLOT_INCREMENT_MINUTES - 1) // SLOT_INCREMENT_MINUTES


class AppointmentValidator:
    """Gating rules for appointment requests, evaluated against a clock."""

    def __init__(
        self,
        catalog: CatalogStore,
        repository: AppointmentRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.catalog = catalog
        self.repository = repository
        self.clock = clock

    def today(self) -> date:
        return self.clock().date()

    # Dates

    def is_date_available(self, value: date | datetime) -> ValidationResult:
        today = self.today()
        selected_day = calendar_day(value)

        if selected_day <= today:
            return ValidationResult.invalid('Same-day bookings are not allowed. Please select a future date.')

        if selected_day > today + timedelta(days=BOOKING_RANGE_DAYS):
            return ValidationResult.invalid(
                f'Appointments can only be scheduled up to {BOOKING_RANGE_DAYS} days in advance.'
            )

        blocked_label = BLOCKED_WEEKDAYS.get(selected_day.weekday())
        if blocked_label:
            return ValidationResult.invalid(f'Appointments are not available on {blocked_label}.')

        return ValidationResult.valid()

    def is_blocked_day(self, value: date | datetime) -> bool:
        return calendar_day(value).weekday() in BLOCKED_WEEKDAYS

    def get_minimum_date(self) -> datetime:
        return datetime.combine(self.today() + timedelta(days=1), time.min)

    def get_maximum_date(self) -> datetime:
        return datetime.combine(self.today() + timedelta(days=BOOKING_RANGE_DAYS), time.min)

    # Times

    def is_time_available(self, value: time | datetime) -> ValidationResult:
        selected_minutes = minutes_of_day(value)

        if selected_minutes < minutes_of_day(OPEN_TIME):
            return ValidationResult.invalid('Appointments are available from 7:30 AM. Please select a later time.')

        if selected_minutes >= minutes_of_day(CLOSE_TIME):
            return ValidationResult.invalid(
                'Appointments are only available until 11:00 AM. Please select an earlier time.'
            )

        return ValidationResult.valid()

    def get_available_time_slots(self) -> TimeSlotMenu:
        return TimeSlotMenu(self.today())

    # Students

    def can_create_appointment(self, student_id: str) -> ValidationResult:
        student = self.catalog.get_student(student_id)

        if self.repository.has_active_appointment(student_id):
            if student is None:
                return ValidationResult.invalid('This student already has an active appointment request.')
            return ValidationResult.invalid(
                f'{student.name} already has an active appointment request. '
                'Please wait until the current request is resolved.'
            )

        if self.repository.has_appointment_this_week(student_id):
            if student is None:
                return ValidationResult.invalid(
                    "You've already scheduled an appointment for this student this week."
                )
            return ValidationResult.invalid(
                f"You've already scheduled an appointment for {student.name} this week. "
                'Only one appointment per student is allowed per calendar week.'
            )

        return ValidationResult.valid()

    # Purpose

    @staticmethod
    def count_sentences(text: str) -> int:
        # Punctuation tally, so "..." counts three times.
        return sum(1 for character in text.strip() if character in SENTENCE_TERMINATORS)

    def validate_purpose(self, text: str) -> ValidationResult:
        trimmed = text.strip()

        if not trimmed:
            return ValidationResult.invalid('Please describe the purpose of your meeting.')

        if self.count_sentences(trimmed) < MIN_PURPOSE_SENTENCES:
            return ValidationResult.invalid(
                f'Please provide at least {MIN_PURPOSE_SENTENCES} complete sentences '
                'describing the purpose of your meeting.'
            )

        if len(trimmed) < MIN_PURPOSE_LENGTH:
            return ValidationResult.invalid(
                'Please provide more detail about the purpose of your meeting '
                f'(minimum {MIN_PURPOSE_LENGTH} characters).'
            )

        return ValidationResult.valid()

    # Whole request

    def validate_appointment(
        self,
        student_id: str,
        representative_id: str | None,
        day: date | datetime | None,
        start_time: time | datetime | None,
        duration: AppointmentDuration | None,
        category: AppointmentCategory | None,
        purpose: str,
    ) -> ValidationResult:
        student_validation = self.can_create_appointment(student_id)
        if not student_validation.is_valid:
            return student_validation

        if representative_id is None:
            return ValidationResult.invalid('Please select a school representative.')

        if day is None:
            return ValidationResult.invalid('Please select a date for your appointment.')
        date_validation = self.is_date_available(day)
        if not date_validation.is_valid:
            return date_validation

        if start_time is None:
            return ValidationResult.invalid('Please select a time for your appointment.')
        time_validation = self.is_time_available(start_time)
        if not time_validation.is_valid:
            return time_validation

        if duration is None:
            return ValidationResult.invalid('Please select a duration for your appointment.')

        if category is None:
            return ValidationResult.invalid('Please select a category for your appointment.')

        return self.validate_purpose(purpose)

    # Status changes

    def can_change_status(self, appointment: AppointmentRequest, new_status: AppointmentStatus) -> ValidationResult:
        if appointment.status.can_transition_to(new_status):
            return ValidationResult.valid()

        return ValidationResult.invalid(
            f'An appointment that is {appointment.status.value} cannot be marked {new_status.value}.'
        )
