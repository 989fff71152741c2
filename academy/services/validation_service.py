"""
Field-level validation run by the API before any repository write.

Every validator returns a dict mapping the camelCase field name to a message.
An empty dict means the data is valid. Nothing here raises.
"""
import math
import re
from typing import Dict, Optional

from academy.crud import course_crud, enrollment_crud, student_crud
from academy.schemas.course_schema import CourseBase
from academy.schemas.enrollment_schema import EnrollmentBase, EnrollmentCreate
from academy.schemas.payment_schema import PaymentCreate
from academy.schemas.student_schema import StudentBase
from academy.storage import Storage

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[0-9\s\-()]{8,}$")

Errors = Dict[str, str]


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email.strip()))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(phone.strip()))


def validate_course(data: CourseBase, current_students: int = 0) -> Errors:
    """`current_students` is the enrollment count of the course being edited."""
    errors: Errors = {}

    if not data.name.strip():
        errors["name"] = "Course name is required"
    if not data.instructor.strip():
        errors["instructor"] = "Instructor is required"
    if data.price <= 0:
        errors["price"] = "Price must be greater than 0"
    if data.modules <= 0:
        errors["modules"] = "The course must have at least 1 module"
    if not data.start_date:
        errors["startDate"] = "Start date is required"
    if not data.end_date:
        errors["endDate"] = "End date is required"
    if data.start_date and data.end_date and data.start_date >= data.end_date:
        errors["endDate"] = "End date must be after the start date"
    if data.max_students <= 0:
        errors["maxStudents"] = "The course must allow at least 1 student"
    elif data.max_students < current_students:
        errors["maxStudents"] = f"The course already has {current_students} students enrolled"

    return errors


def validate_student(store: Storage, data: StudentBase, student_id: Optional[str] = None) -> Errors:
    """
    `student_id` is the student being edited; it is ignored by the
    email/document uniqueness checks.
    """
    errors: Errors = {}

    if not data.first_name.strip():
        errors["firstName"] = "First name is required"
    if not data.last_name.strip():
        errors["lastName"] = "Last name is required"

    if not data.email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(data.email):
        errors["email"] = "Email is not valid"

    if not data.phone.strip():
        errors["phone"] = "Phone is required"
    elif not is_valid_phone(data.phone):
        errors["phone"] = "Phone is not valid"

    if not data.document.strip():
        errors["document"] = "Document is required"
    if not data.birth_date:
        errors["birthDate"] = "Birth date is required"
    if not data.emergency_contact.strip():
        errors["emergencyContact"] = "Emergency contact is required"

    if not data.emergency_phone.strip():
        errors["emergencyPhone"] = "Emergency phone is required"
    elif not is_valid_phone(data.emergency_phone):
        errors["emergencyPhone"] = "Emergency phone is not valid"

    others = [s for s in student_crud.get_all_students(store) if s.id != student_id]
    if data.email and any(s.email == data.email for s in others):
        errors["email"] = "A student with this email already exists"
    if data.document and any(s.document == data.document for s in others):
        errors["document"] = "A student with this document already exists"

    return errors


def validate_enrollment(store: Storage, data: EnrollmentCreate) -> Errors:
    errors: Errors = {}

    if student_crud.get_student(store, data.student_id) is None:
        errors["studentId"] = "Student not found"

    course = course_crud.get_course(store, data.course_id)
    if course is None:
        errors["courseId"] = "Course not found"
    elif course.current_students >= course.max_students:
        errors["courseId"] = "The course has no places left"

    errors.update(validate_amounts(data))
    return errors


def validate_amounts(data: EnrollmentBase) -> Errors:
    """Checks 0 <= paid <= total and paid + pending == total."""
    errors: Errors = {}

    if data.total_amount <= 0:
        errors["totalAmount"] = "Total amount must be greater than 0"
    if data.paid_amount < 0:
        errors["paidAmount"] = "Paid amount cannot be negative"
    elif enrollment_crud.exceeds_pending(data.paid_amount, data.total_amount):
        errors["paidAmount"] = "Paid amount cannot exceed the total amount"
    elif not math.isclose(data.paid_amount + data.pending_amount, data.total_amount):
        errors["pendingAmount"] = "Paid and pending amounts must add up to the total amount"

    return errors


def validate_payment(store: Storage, data: PaymentCreate) -> Errors:
    errors: Errors = {}

    enrollment = None
    if not data.enrollment_id:
        errors["enrollmentId"] = "An enrollment must be selected"
    else:
        enrollment = enrollment_crud.get_enrollment(store, data.enrollment_id)
        if enrollment is None:
            errors["enrollmentId"] = "Enrollment not found"

    if data.amount <= 0:
        errors["amount"] = "Amount must be greater than 0"
    elif enrollment is not None and enrollment_crud.exceeds_pending(data.amount, enrollment.pending_amount):
        errors["amount"] = f"Amount cannot exceed the pending balance ({enrollment.pending_amount:,.2f})"

    if not data.payment_date:
        errors["paymentDate"] = "Payment date is required"
    if not data.description.strip():
        errors["description"] = "Description is required"

    return errors


def can_delete_student(store: Storage, student_id: str) -> Optional[str]:
    """Returns why the student cannot be deleted, or None."""
    if enrollment_crud.get_enrollments_by_student_id(store, student_id):
        return "A student with enrollments cannot be deleted"
    return None
