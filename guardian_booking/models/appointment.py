"""Appointment model definitions."""

from datetime import date as date_type, datetime, time as time_type
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from guardian_booking.models.catalog import RepresentativeTitle


class AppointmentCategory(str, Enum):
    """Topic of a requested meeting."""

    ACADEMIC_PERFORMANCE = 'academic_performance'
    STUDENT_BEHAVIOR = 'student_behavior'
    ABSENCES = 'absences'
    ADVISORY = 'advisory'
    GRIEVANCE = 'grievance'
    OTHER = 'other'

    @property
    def display_name(self) -> str:
        return CATEGORY_DETAILS[self][0]

    @property
    def description(self) -> str:
        return CATEGORY_DETAILS[self][1]


CATEGORY_DETAILS = {
    AppointmentCategory.ACADEMIC_PERFORMANCE: (
        'Academic Performance',
        'Discuss grades, coursework, and academic progress',
    ),
    AppointmentCategory.STUDENT_BEHAVIOR: (
        'Student Behavior',
        'Address behavioral concerns or achievements',
    ),
    AppointmentCategory.ABSENCES: ('Absences', 'Discuss attendance issues or planned absences'),
    AppointmentCategory.ADVISORY: ('Advisory', 'General guidance and counseling'),
    AppointmentCategory.GRIEVANCE: ('Grievance', 'Report complaints or concerns'),
    AppointmentCategory.OTHER: ('Other', 'Other topics not listed above'),
}


class AppointmentDuration(int, Enum):
    """Meeting length in minutes."""

    TEN_MINUTES = 10
    FIFTEEN_MINUTES = 15
    TWENTY_MINUTES = 20
    THIRTY_MINUTES = 30

    @property
    def display_name(self) -> str:
        return f'{self.value} min'


class AppointmentStatus(str, Enum):
    """
    Appointment request lifecycle.

    Flow: pending -> approved -> completed
              |          \\-> cancelled
              |-> rejected
              |-> completed
              \\-> cancelled
    """

    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @property
    def is_active(self) -> bool:
        return self in ACTIVE_STATUSES

    def can_transition_to(self, new_status: 'AppointmentStatus') -> bool:
        return new_status in STATUS_TRANSITIONS[self]


ACTIVE_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.APPROVED})

STATUS_TRANSITIONS = {
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.APPROVED,
        AppointmentStatus.REJECTED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
    }),
    AppointmentStatus.APPROVED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED}),
    AppointmentStatus.REJECTED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


class AppointmentRequest(BaseModel):
    """A guardian's request to meet a school representative about one student.

    The name fields are snapshots taken at submission and are never refreshed
    from the catalog afterwards.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    student_id: str
    representative_id: str
    date: date_type
    time: time_type
    duration: AppointmentDuration
    category: AppointmentCategory
    purpose: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    student_name: str | None = None
    representative_name: str | None = None
    representative_title: RepresentativeTitle | None = None
    school_name: str | None = None
