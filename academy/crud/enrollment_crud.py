# academy/crud/enrollment_crud.py
import logging
import math
from typing import List, Optional

from academy import config
from academy.crud import course_crud
from academy.crud.collection_crud import (
    apply_update, find_index, load_collection, new_id, save_collection,
)
from academy.exceptions import CourseFullError
from academy.schemas.enrollment_schema import Enrollment, EnrollmentCreate, EnrollmentUpdate
from academy.storage import ENROLLMENTS, Storage

logger = logging.getLogger(__name__)


def get_all_enrollments(store: Storage) -> List[Enrollment]:
    return load_collection(store, ENROLLMENTS, Enrollment)


def get_enrollment(store: Storage, enrollment_id: str) -> Optional[Enrollment]:
    for enrollment in get_all_enrollments(store):
        if enrollment.id == enrollment_id:
            return enrollment
    return None


def get_enrollments_by_student_id(store: Storage, student_id: str) -> List[Enrollment]:
    return [e for e in get_all_enrollments(store) if e.student_id == student_id]


def get_enrollments_by_course_id(store: Storage, course_id: str) -> List[Enrollment]:
    return [e for e in get_all_enrollments(store) if e.course_id == course_id]


def create_enrollment(store: Storage, enrollment_in: EnrollmentCreate) -> Enrollment:
    """
    Stores the enrollment and bumps the course's currentStudents by one,
    both inside a single storage transaction.

    A course id that does not resolve is stored as-is without touching any
    course. With ENFORCE_INVARIANTS on, a full course raises CourseFullError
    and nothing is written.
    """
    with store.transaction():
        course = course_crud.get_course(store, enrollment_in.course_id)
        if (
            course is not None
            and config.ENFORCE_INVARIANTS
            and course.current_students >= course.max_students
        ):
            logger.warning(f"Refused enrollment into full course {course.id}")
            raise CourseFullError(course.id, course.max_students)

        enrollments = get_all_enrollments(store)
        db_enrollment = Enrollment(**enrollment_in.model_dump(), id=new_id())
        enrollments.append(db_enrollment)
        save_collection(store, ENROLLMENTS, enrollments)

        if course is not None:
            course_crud.set_current_students(store, course.id, course.current_students + 1)
        else:
            logger.warning(
                f"Enrollment {db_enrollment.id} references unknown course {enrollment_in.course_id}"
            )

    logger.info(f"Created enrollment {db_enrollment.id} for student {db_enrollment.student_id}")
    return db_enrollment


def update_enrollment(
    store: Storage, enrollment_id: str, enrollment_update: EnrollmentUpdate
) -> Optional[Enrollment]:
    """Merges the given fields; paid/pending amounts are not recomputed."""
    with store.transaction():
        enrollments = get_all_enrollments(store)
        index = find_index(enrollments, enrollment_id)
        if index is None:
            return None
        enrollments[index] = apply_update(enrollments[index], enrollment_update)
        save_collection(store, ENROLLMENTS, enrollments)
        return enrollments[index]


def exceeds_pending(amount: float, pending_amount: float) -> bool:
    """amount > pending, treating float noise of the same figure as equal."""
    return amount > pending_amount and not math.isclose(amount, pending_amount)


def apply_payment(store: Storage, enrollment_id: str, amount: float) -> Optional[Enrollment]:
    """paid += amount; pending = total - paid. Both are rounded to cents."""
    with store.transaction():
        enrollment = get_enrollment(store, enrollment_id)
        if enrollment is None:
            return None
        new_paid = round(enrollment.paid_amount + amount, 2)
        new_pending = round(enrollment.total_amount - new_paid, 2)
        return update_enrollment(
            store,
            enrollment_id,
            EnrollmentUpdate(paid_amount=new_paid, pending_amount=new_pending),
        )
