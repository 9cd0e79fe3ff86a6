"""Read-only lookups over the guardian's schools, students and school staff."""

from collections.abc import Iterable

from pydantic import BaseModel

from guardian_booking.models.catalog import (
    Parent,
    RepresentativeTitle,
    School,
    SchoolRepresentative,
    Student,
)


class ProfileSummary(BaseModel):
    parent: Parent
    student_count: int
    school_count: int


class CatalogStore:
    """Holds the static reference data the booking flow selects from.

    Lookups that find nothing return ``None`` or an empty collection.
    """

    def __init__(
        self,
        schools: Iterable[School],
        students: Iterable[Student],
        representatives: Iterable[SchoolRepresentative],
        parent: Parent,
    ) -> None:
        self.schools = list(schools)
        self.students = list(students)
        self.representatives = list(representatives)
        self.parent = parent

    def get_school(self, school_id: str) -> School | None:
        return next((school for school in self.schools if school.id == school_id), None)

    def get_student(self, student_id: str) -> Student | None:
        return next((student for student in self.students if student.id == student_id), None)

    def get_representative(self, representative_id: str) -> SchoolRepresentative | None:
        return next(
            (representative for representative in self.representatives if representative.id == representative_id),
            None,
        )

    def get_representatives(self, school_id: str) -> list[SchoolRepresentative]:
        return [representative for representative in self.representatives if representative.school_id == school_id]

    def get_representatives_by_title(self, school_id: str) -> dict[RepresentativeTitle, list[SchoolRepresentative]]:
        grouped: dict[RepresentativeTitle, list[SchoolRepresentative]] = {}
        for representative in self.get_representatives(school_id):
            grouped.setdefault(representative.title, []).append(representative)
        return grouped

    def get_students_by_school(self) -> dict[str, list[Student]]:
        grouped: dict[str, list[Student]] = {}
        for student in self.students:
            grouped.setdefault(student.school_name, []).append(student)
        return grouped

    def get_students_for_parent(self) -> list[Student]:
        linked_ids = set(self.parent.student_ids)
        return [student for student in self.students if student.id in linked_ids]

    def get_profile_summary(self) -> ProfileSummary:
        students = self.get_students_for_parent()
        return ProfileSummary(
            parent=self.parent,
            student_count=len(students),
            school_count=len({student.school_id for student in students}),
        )
