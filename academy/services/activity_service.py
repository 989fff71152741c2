import math
from datetime import datetime, time, timezone
from typing import List, Optional

from academy.crud import course_crud, enrollment_crud, payment_crud, student_crud
from academy.schemas.course_schema import CourseOccupancy
from academy.schemas.enrollment_schema import SuggestedPayment
from academy.schemas.stats_schema import ActivityItem, OutstandingBalance
from academy.storage import Storage

UNKNOWN_COURSE = "Unknown course"
UNKNOWN_STUDENT = "Unknown student"


def _student_name(store: Storage, student_id: Optional[str]) -> str:
    student = student_crud.get_student(store, student_id) if student_id else None
    return student.full_name if student else UNKNOWN_STUDENT


def _course_name(store: Storage, course_id: Optional[str]) -> str:
    course = course_crud.get_course(store, course_id) if course_id else None
    return course.name if course else UNKNOWN_COURSE


def get_recent_activity(store: Storage, limit: int = 8, per_type: int = 5) -> List[ActivityItem]:
    """
    Latest payments and enrollments (at most `per_type` of each), newest first.
    Enrollments only carry a date, so they sort as midnight UTC of that day.
    Ties keep the newest-stored record first.
    """
    payments = payment_crud.get_all_payments(store)[-per_type:][::-1]
    enrollments = enrollment_crud.get_all_enrollments(store)[-per_type:][::-1]

    activity = [
        ActivityItem(
            type="payment",
            date=payment.created_at,
            description=(
                f"{_student_name(store, payment.student_id)} paid {payment.amount:,.2f} "
                f"for {_course_name(store, payment.course_id)}"
            ),
            amount=payment.amount,
        )
        for payment in payments
    ]
    activity += [
        ActivityItem(
            type="enrollment",
            date=datetime.combine(enrollment.enrollment_date, time.min, tzinfo=timezone.utc),
            description=(
                f"{_student_name(store, enrollment.student_id)} enrolled in "
                f"{_course_name(store, enrollment.course_id)}"
            ),
            amount=enrollment.total_amount,
        )
        for enrollment in enrollments
    ]

    activity.sort(key=lambda item: item.date, reverse=True)
    return activity[:limit]


def get_outstanding_balances(store: Storage, limit: int = 5) -> List[OutstandingBalance]:
    """Enrollments that still owe money, in storage order."""
    return [
        OutstandingBalance(
            enrollment_id=enrollment.id,
            student=_student_name(store, enrollment.student_id),
            course=_course_name(store, enrollment.course_id),
            amount=enrollment.pending_amount,
        )
        for enrollment in enrollment_crud.get_all_enrollments(store)
        if enrollment.pending_amount > 0
    ][:limit]


def get_course_occupancy(store: Storage) -> List[CourseOccupancy]:
    occupancy = []
    for course in course_crud.get_all_courses(store):
        ratio = course.current_students / course.max_students if course.max_students > 0 else 0.0
        occupancy.append(
            CourseOccupancy(
                course_id=course.id,
                name=course.name,
                current_students=course.current_students,
                max_students=course.max_students,
                occupancy=round(ratio, 4),
                is_full=course.current_students >= course.max_students,
            )
        )
    return occupancy


def suggest_installment(store: Storage, enrollment_id: str) -> Optional[SuggestedPayment]:
    """
    Suggested next payment: the pending balance split over the course modules,
    rounded up. None if the enrollment does not exist.
    """
    enrollment = enrollment_crud.get_enrollment(store, enrollment_id)
    if enrollment is None:
        return None

    pending = enrollment.pending_amount
    if pending <= 0:
        suggested = 0.0
    else:
        course = course_crud.get_course(store, enrollment.course_id)
        if course and course.modules > 0:
            suggested = float(math.ceil(pending / course.modules))
        else:
            suggested = pending

    return SuggestedPayment(
        enrollment_id=enrollment.id,
        pending_amount=pending,
        suggested_amount=suggested,
    )
