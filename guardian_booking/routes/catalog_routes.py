from fastapi import APIRouter, Depends, HTTPException, status

from guardian_booking.core.context import BookingContext, get_context
from guardian_booking.models.catalog import School, SchoolRepresentative, Student
from guardian_booking.stores.catalog import ProfileSummary

router = APIRouter(tags=['catalog'])


@router.get('/profile', response_model=ProfileSummary)
def get_profile(context: BookingContext = Depends(get_context)):
    return context.catalog.get_profile_summary()


@router.get('/students', response_model=list[Student])
def list_students(context: BookingContext = Depends(get_context)):
    return context.catalog.get_students_for_parent()


@router.get('/students/by-school', response_model=dict[str, list[Student]])
def list_students_by_school(context: BookingContext = Depends(get_context)):
    return context.catalog.get_students_by_school()


@router.get('/students/{student_id}', response_model=Student)
def get_student(student_id: str, context: BookingContext = Depends(get_context)):
    student = context.catalog.get_student(student_id)
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Student not found.',
        )
    return student


@router.get('/schools/{school_id}', response_model=School)
def get_school(school_id: str, context: BookingContext = Depends(get_context)):
    school = context.catalog.get_school(school_id)
    if school is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='School not found.',
        )
    return school


@router.get('/schools/{school_id}/representatives', response_model=list[SchoolRepresentative])
def list_representatives(school_id: str, context: BookingContext = Depends(get_context)):
    if context.catalog.get_school(school_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='School not found.',
        )
    return context.catalog.get_representatives(school_id)
