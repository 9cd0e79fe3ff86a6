"""Reference data: schools, students, staff and the guardian profile."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RepresentativeTitle(str, Enum):
    PRINCIPAL = 'principal'
    VICE_PRINCIPAL = 'vice_principal'
    STUDENT_ADVISOR = 'student_advisor'

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


class School(BaseModel):
    """Represents a school the guardian's students attend."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    address: str
    logo_url: str | None = None


class Student(BaseModel):
    """Represents a student linked to the guardian."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    grade: str
    school_id: str
    school_name: str
    photo_url: str | None = None


class SchoolRepresentative(BaseModel):
    """Represents a staff member who can be booked for a meeting."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    title: RepresentativeTitle
    school_id: str
    photo_url: str | None = None
    email: str | None = None


class Parent(BaseModel):
    """Represents the guardian account holder."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    phone_number: str
    photo_url: str | None = None
    student_ids: tuple[str, ...] = ()
