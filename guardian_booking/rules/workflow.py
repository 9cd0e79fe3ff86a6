"""Five-step booking wizard: representative, date/time, category, purpose, confirm.

Forward moves are gated by :func:`can_advance`; back moves never re-validate
and never clear selections. Forward from the confirm step submits.
"""

import asyncio
import logging
from datetime import date as date_type, time as time_type
from enum import IntEnum

from pydantic import BaseModel

from guardian_booking.core.context import BookingContext
from guardian_booking.models.appointment import (
    AppointmentCategory,
    AppointmentDuration,
    AppointmentRequest,
)
from guardian_booking.models.catalog import RepresentativeTitle, SchoolRepresentative, Student
from guardian_booking.rules.validation import AppointmentValidator, ValidationResult
from guardian_booking.services.notifications import NotificationError

logger = logging.getLogger(__name__)

INCOMPLETE_SELECTION_MESSAGE = 'Please complete all required fields.'
ALREADY_SUBMITTED_MESSAGE = 'This appointment request has already been submitted.'
SUBMITTING_MESSAGE = 'Your appointment request is being submitted.'
DISCARDED_MESSAGE = 'This appointment request was discarded before it was submitted.'
SUBMITTED_MESSAGE = 'Your appointment request has been submitted successfully!'


class FlowStep(IntEnum):
    SELECT_REPRESENTATIVE = 0
    SELECT_DATE_TIME = 1
    SELECT_CATEGORY = 2
    ENTER_PURPOSE = 3
    CONFIRM = 4

    @property
    def title(self) -> str:
        return STEP_TITLES[self]

    @property
    def step_number(self) -> int:
        return self.value + 1


STEP_TITLES = {
    FlowStep.SELECT_REPRESENTATIVE: 'Select Representative',
    FlowStep.SELECT_DATE_TIME: 'Select Date & Time',
    FlowStep.SELECT_CATEGORY: 'Select Category',
    FlowStep.ENTER_PURPOSE: 'Meeting Purpose',
    FlowStep.CONFIRM: 'Confirm Request',
}


class BookingSelections(BaseModel):
    student_id: str | None = None
    representative_id: str | None = None
    date: date_type | None = None
    time: time_type | None = None
    duration: AppointmentDuration | None = AppointmentDuration.FIFTEEN_MINUTES
    category: AppointmentCategory | None = None
    purpose: str = ''


class FlowOutcome(BaseModel):
    accepted: bool
    step: FlowStep
    message: str | None = None
    appointment: AppointmentRequest | None = None


def can_advance(
    step: FlowStep,
    selections: BookingSelections,
    validator: AppointmentValidator,
    is_submitting: bool = False,
) -> ValidationResult:
    """Forward guard for ``step`` given the choices made so far."""
    if selections.student_id is None:
        return ValidationResult.invalid('Please select a student.')

    if step == FlowStep.SELECT_REPRESENTATIVE:
        if selections.representative_id is None:
            return ValidationResult.invalid('Please select a school representative.')
        return ValidationResult.valid()

    if step == FlowStep.SELECT_DATE_TIME:
        if selections.date is None or selections.time is None:
            return ValidationResult.invalid('Invalid date/time selection.')
        date_validation = validator.is_date_available(selections.date)
        if not date_validation.is_valid:
            return date_validation
        return validator.is_time_available(selections.time)

    if step == FlowStep.SELECT_CATEGORY:
        if selections.category is None:
            return ValidationResult.invalid('Please select a category for your appointment.')
        return ValidationResult.valid()

    if step == FlowStep.ENTER_PURPOSE:
        return validator.validate_purpose(selections.purpose)

    if is_submitting:
        return ValidationResult.invalid(SUBMITTING_MESSAGE)
    return ValidationResult.valid()


class BookingFlow:
    """One guardian's in-progress appointment request."""

    def __init__(self, context: BookingContext) -> None:
        self.context = context
        self.validator = context.validator
        self.is_submitting = False
        self.generation = 0
        self._reset()

    def _reset(self) -> None:
        # An in-flight submission compares this before writing.
        self.generation += 1
        self.step = FlowStep.SELECT_REPRESENTATIVE
        self.selections = self._default_selections()
        self.error_message: str | None = None
        self.created_appointment: AppointmentRequest | None = None

    def _default_selections(self) -> BookingSelections:
        first_slot = next(iter(self.validator.get_available_time_slots()))
        return BookingSelections(
            date=self.validator.get_minimum_date().date(),
            time=first_slot.time(),
        )

    @property
    def is_submitted(self) -> bool:
        return self.created_appointment is not None

    @property
    def student(self) -> Student | None:
        if self.selections.student_id is None:
            return None
        return self.context.catalog.get_student(self.selections.student_id)

    @property
    def representative(self) -> SchoolRepresentative | None:
        if self.selections.representative_id is None:
            return None
        return self.context.catalog.get_representative(self.selections.representative_id)

    @property
    def representatives(self) -> list[SchoolRepresentative]:
        student = self.student
        if student is None:
            return []
        return self.context.catalog.get_representatives(student.school_id)

    def representatives_by_title(self) -> dict[RepresentativeTitle, list[SchoolRepresentative]]:
        student = self.student
        if student is None:
            return {}
        return self.context.catalog.get_representatives_by_title(student.school_id)

    @property
    def sentence_count(self) -> int:
        return self.validator.count_sentences(self.selections.purpose)

    def _record(self, result: ValidationResult) -> ValidationResult:
        self.error_message = result.error_message
        return result

    # Selections

    def select_student(self, student_id: str) -> ValidationResult:
        student = self.context.catalog.get_student(student_id)
        if student is None:
            return self._record(ValidationResult.invalid('Cannot create appointment for this student.'))

        if student.id != self.selections.student_id:
            self.selections.student_id = student.id
            self.selections.representative_id = None
        return self._record(self.validator.can_create_appointment(student.id))

    def select_representative(self, representative_id: str) -> ValidationResult:
        representative = self.context.catalog.get_representative(representative_id)
        if representative is None:
            return self._record(ValidationResult.invalid('Please select a school representative.'))

        student = self.student
        if student is not None and representative.school_id != student.school_id:
            return self._record(
                ValidationResult.invalid(f"{representative.name} is not available at {student.school_name}.")
            )

        self.selections.representative_id = representative.id
        return self._record(ValidationResult.valid())

    def select_date(self, value: date_type) -> ValidationResult:
        self.selections.date = value
        return self._record(self.validator.is_date_available(value))

    def select_time(self, value: time_type) -> ValidationResult:
        self.selections.time = value
        return self._record(self.validator.is_time_available(value))

    def select_duration(self, duration: AppointmentDuration) -> None:
        self.selections.duration = duration

    def select_category(self, category: AppointmentCategory) -> None:
        self.selections.category = category

    def set_purpose(self, purpose: str) -> ValidationResult:
        self.selections.purpose = purpose
        return self._record(self.validator.validate_purpose(purpose))

    # Navigation

    def can_advance(self) -> ValidationResult:
        return can_advance(self.step, self.selections, self.validator, self.is_submitting)

    def _outcome(self, result: ValidationResult) -> FlowOutcome:
        self._record(result)
        return FlowOutcome(
            accepted=result.is_valid,
            step=self.step,
            message=result.error_message,
            appointment=self.created_appointment,
        )

    def back(self) -> FlowOutcome:
        if self.is_submitted:
            return self._outcome(ValidationResult.invalid(ALREADY_SUBMITTED_MESSAGE))

        if self.step > FlowStep.SELECT_REPRESENTATIVE:
            self.step = FlowStep(self.step - 1)
        return self._outcome(ValidationResult.valid())

    async def forward(self) -> FlowOutcome:
        if self.is_submitted:
            return self._outcome(ValidationResult.invalid(ALREADY_SUBMITTED_MESSAGE))

        guard = self.can_advance()
        if not guard.is_valid:
            return self._outcome(guard)

        if self.step == FlowStep.CONFIRM:
            return await self._submit()

        self.step = FlowStep(self.step + 1)
        return self._outcome(ValidationResult.valid())

    def discard(self) -> None:
        if self.selections.student_id is not None:
            logger.info('Discarded booking flow for student %s', self.selections.student_id)
        self._reset()

    # Submission

    async def _submit(self) -> FlowOutcome:
        generation = self.generation
        selections = self.selections
        student = self.student
        representative = self.representative

        if (
            student is None
            or representative is None
            or selections.date is None
            or selections.time is None
            or selections.duration is None
            or selections.category is None
        ):
            return self._outcome(ValidationResult.invalid(INCOMPLETE_SELECTION_MESSAGE))

        validation = self.validator.validate_appointment(
            student_id=student.id,
            representative_id=representative.id,
            day=selections.date,
            start_time=selections.time,
            duration=selections.duration,
            category=selections.category,
            purpose=selections.purpose,
        )
        if not validation.is_valid:
            logger.warning('Rejected appointment request for student %s: %s', student.id, validation.error_message)
            return self._outcome(validation)

        self.is_submitting = True
        try:
            await asyncio.sleep(self.context.submission_delay_seconds)

            if self.generation != generation:
                logger.info('Dropped submission for student %s after discard', student.id)
                return FlowOutcome(accepted=False, step=self.step, message=DISCARDED_MESSAGE)

            # Another flow for the same student may have committed meanwhile.
            eligibility = self.validator.can_create_appointment(student.id)
            if not eligibility.is_valid:
                logger.warning(
                    'Rejected appointment request for student %s: %s', student.id, eligibility.error_message
                )
                return self._outcome(eligibility)

            now = self.context.clock()
            appointment = AppointmentRequest(
                student_id=student.id,
                representative_id=representative.id,
                date=selections.date,
                time=selections.time,
                duration=selections.duration,
                category=selections.category,
                purpose=selections.purpose.strip(),
                created_at=now,
                updated_at=now,
                student_name=student.name,
                representative_name=representative.name,
                representative_title=representative.title,
                school_name=student.school_name,
            )
            self.context.repository.add_appointment(appointment)
        finally:
            self.is_submitting = False

        self.created_appointment = appointment
        try:
            self.context.notifier.schedule_confirmation(appointment)
        except NotificationError:
            logger.exception('Could not schedule confirmation for appointment %s', appointment.id)

        self.error_message = None
        return FlowOutcome(accepted=True, step=self.step, message=SUBMITTED_MESSAGE, appointment=appointment)
