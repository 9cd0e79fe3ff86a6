"""Demo reference data and sample appointment requests."""

from datetime import datetime, time, timedelta

from guardian_booking.models.appointment import (
    AppointmentCategory,
    AppointmentDuration,
    AppointmentRequest,
    AppointmentStatus,
)
from guardian_booking.models.catalog import (
    Parent,
    RepresentativeTitle,
    School,
    SchoolRepresentative,
    Student,
)
from guardian_booking.stores.appointments import AppointmentRepository
from guardian_booking.stores.catalog import CatalogStore

SCHOOLS = [
    School(id='school_1', name='Al Noor International School', address='123 Education Street, City Center'),
    School(id='school_2', name='Emirates Academy', address='456 Learning Avenue, Business Bay'),
]

STUDENTS = [
    Student(
        id='student_1',
        name='Ahmed Abdullah',
        grade='Grade 5',
        school_id='school_1',
        school_name='Al Noor International School',
    ),
    Student(
        id='student_2',
        name='Fatima Abdullah',
        grade='Grade 3',
        school_id='school_1',
        school_name='Al Noor International School',
    ),
    Student(
        id='student_3',
        name='Omar Abdullah',
        grade='Grade 7',
        school_id='school_2',
        school_name='Emirates Academy',
    ),
]

# (id, name, title, school id, email)
_STAFF = [
    ('rep_1', 'Dr. Sarah Hassan', RepresentativeTitle.PRINCIPAL, 'school_1', 's.hassan@alnoor.edu'),
    ('rep_2', 'Mr. Khalid Ahmed', RepresentativeTitle.VICE_PRINCIPAL, 'school_1', 'k.ahmed@alnoor.edu'),
    ('rep_3', 'Ms. Layla Ibrahim', RepresentativeTitle.VICE_PRINCIPAL, 'school_1', 'l.ibrahim@alnoor.edu'),
    ('rep_4', 'Mr. Hassan Ali', RepresentativeTitle.STUDENT_ADVISOR, 'school_1', 'h.ali@alnoor.edu'),
    ('rep_5', 'Ms. Nadia Mohammed', RepresentativeTitle.STUDENT_ADVISOR, 'school_1', 'n.mohammed@alnoor.edu'),
    ('rep_6', 'Dr. Mohammed Rashid', RepresentativeTitle.PRINCIPAL, 'school_2', 'm.rashid@emirates.edu'),
    ('rep_7', 'Ms. Aisha Khalifa', RepresentativeTitle.VICE_PRINCIPAL, 'school_2', 'a.khalifa@emirates.edu'),
    ('rep_8', 'Mr. Yusuf Nasser', RepresentativeTitle.VICE_PRINCIPAL, 'school_2', 'y.nasser@emirates.edu'),
    ('rep_9', 'Ms. Maryam Sultan', RepresentativeTitle.STUDENT_ADVISOR, 'school_2', 'm.sultan@emirates.edu'),
    ('rep_10', 'Mr. Faisal Abdullah', RepresentativeTitle.STUDENT_ADVISOR, 'school_2', 'f.abdullah@emirates.edu'),
]

REPRESENTATIVES = [
    SchoolRepresentative(id=rep_id, name=name, title=title, school_id=school_id, email=email)
    for rep_id, name, title, school_id, email in _STAFF
]

CURRENT_PARENT = Parent(
    id='parent_1',
    name='Allia Abduallah',
    email='allia.abdullah@email.com',
    phone_number='+1005846588',
    student_ids=('student_1', 'student_2', 'student_3'),
)


def build_demo_catalog() -> CatalogStore:
    return CatalogStore(SCHOOLS, STUDENTS, REPRESENTATIVES, CURRENT_PARENT)


def seed_demo_appointments(repository: AppointmentRepository, now: datetime) -> None:
    """Add one pending and one approved request so the eligibility rules have something to bite on."""
    pending_day = (now + timedelta(days=5)).date()
    approved_day = (now + timedelta(days=7)).date()

    repository.add_appointment(
        AppointmentRequest(
            id='appointment_1',
            student_id='student_1',
            representative_id='rep_1',
            date=pending_day,
            time=time(9, 0),
            duration=AppointmentDuration.FIFTEEN_MINUTES,
            category=AppointmentCategory.ACADEMIC_PERFORMANCE,
            purpose=(
                "I would like to discuss Ahmed's recent progress in mathematics. He seems to be struggling "
                'with fractions and I want to understand how we can support him better at home.'
            ),
            status=AppointmentStatus.PENDING,
            created_at=now - timedelta(days=2),
            updated_at=now - timedelta(days=2),
            student_name='Ahmed Abdullah',
            representative_name='Dr. Sarah Hassan',
            representative_title=RepresentativeTitle.PRINCIPAL,
            school_name='Al Noor International School',
        )
    )
    repository.add_appointment(
        AppointmentRequest(
            id='appointment_2',
            student_id='student_3',
            representative_id='rep_6',
            date=approved_day,
            time=time(10, 30),
            duration=AppointmentDuration.TWENTY_MINUTES,
            category=AppointmentCategory.ADVISORY,
            purpose=(
                "I need to discuss Omar's college preparation plans. We want to ensure he is on track with "
                'his extracurricular activities and coursework for university applications.'
            ),
            status=AppointmentStatus.APPROVED,
            created_at=now - timedelta(days=5),
            updated_at=now - timedelta(days=3),
            student_name='Omar Abdullah',
            representative_name='Dr. Mohammed Rashid',
            representative_title=RepresentativeTitle.PRINCIPAL,
            school_name='Emirates Academy',
        )
    )
