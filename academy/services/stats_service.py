from academy.crud import course_crud, enrollment_crud, payment_crud, student_crud
from academy.models.enums import CourseStatus
from academy.schemas.stats_schema import DashboardStats
from academy.storage import Storage


def get_stats(store: Storage) -> DashboardStats:
    """
    Dashboard totals, recomputed from every collection on each call.
    """
    courses = course_crud.get_all_courses(store)
    students = student_crud.get_all_students(store)
    enrollments = enrollment_crud.get_all_enrollments(store)
    payments = payment_crud.get_all_payments(store)

    return DashboardStats(
        total_courses=len(courses),
        total_students=len(students),
        total_enrollments=len(enrollments),
        total_revenue=sum(payment.amount for payment in payments),
        pending_payments=sum(enrollment.pending_amount for enrollment in enrollments),
        active_courses=sum(1 for course in courses if course.status == CourseStatus.active),
    )
