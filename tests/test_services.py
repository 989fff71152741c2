from datetime import date

import pytest

from academy.crud import course_crud, enrollment_crud, payment_crud, student_crud
from academy.models.enums import CourseStatus
from academy.schemas.course_schema import CourseUpdate
from academy.schemas.enrollment_schema import EnrollmentCreate
from academy.schemas.payment_schema import PaymentCreate
from academy.services import activity_service, seed_service, stats_service, validation_service
from academy.storage import COURSES, ENROLLMENTS, PAYMENTS, STUDENTS, MemoryStorage


def pay(store, enrollment, amount, description="Module payment"):
    return payment_crud.create_payment(
        store,
        PaymentCreate(
            enrollment_id=enrollment.id,
            student_id=enrollment.student_id,
            course_id=enrollment.course_id,
            amount=amount,
            description=description,
        ),
    )


# --- stats_service ---

def test_stats_on_empty_store(store):
    stats = stats_service.get_stats(store)

    assert stats.total_courses == 0
    assert stats.total_students == 0
    assert stats.total_enrollments == 0
    assert stats.total_revenue == 0
    assert stats.pending_payments == 0
    assert stats.active_courses == 0


def test_stats_fold_over_every_collection(store, course_in, course, student, enrollment):
    inactive = course_crud.create_course(store, course_in)
    course_crud.update_course(store, inactive.id, CourseUpdate(status=CourseStatus.inactive))
    pay(store, enrollment, 400)

    stats = stats_service.get_stats(store)

    assert stats.total_courses == 2
    assert stats.active_courses == 1
    assert stats.total_students == 1
    assert stats.total_enrollments == 1
    assert stats.total_revenue == 400
    assert stats.pending_payments == 600


def test_stats_serialise_with_camel_case(store):
    data = stats_service.get_stats(store).model_dump(by_alias=True)

    assert set(data) == {
        "totalCourses", "totalStudents", "totalEnrollments",
        "totalRevenue", "pendingPayments", "activeCourses",
    }


# --- validation_service ---

def test_valid_course_has_no_errors(course_in):
    assert validation_service.validate_course(course_in) == {}


def test_course_field_errors(course_in):
    bad = course_in.model_copy(update={
        "name": "  ",
        "instructor": "",
        "price": 0,
        "modules": 0,
        "end_date": course_in.start_date,
        "max_students": 0,
    })

    errors = validation_service.validate_course(bad)

    assert set(errors) == {"name", "instructor", "price", "modules", "endDate", "maxStudents"}
    assert errors["endDate"] == "End date must be after the start date"


def test_valid_student_has_no_errors(store, student_in):
    assert validation_service.validate_student(store, student_in) == {}


def test_student_format_and_required_errors(store, student_in):
    bad = student_in.model_copy(update={
        "first_name": "",
        "email": "not-an-email",
        "phone": "abc",
        "birth_date": None,
        "emergency_phone": "",
    })

    errors = validation_service.validate_student(store, bad)

    assert errors["firstName"] == "First name is required"
    assert errors["email"] == "Email is not valid"
    assert errors["phone"] == "Phone is not valid"
    assert errors["birthDate"] == "Birth date is required"
    assert errors["emergencyPhone"] == "Emergency phone is required"


def test_student_email_and_document_must_be_unique(store, student, student_in):
    errors = validation_service.validate_student(store, student_in)

    assert errors["email"] == "A student with this email already exists"
    assert errors["document"] == "A student with this document already exists"


def test_student_uniqueness_ignores_the_student_being_edited(store, student, student_in):
    assert validation_service.validate_student(store, student_in, student_id=student.id) == {}


def test_enrollment_validation(store, course, student):
    ok = EnrollmentCreate(student_id=student.id, course_id=course.id, total_amount=1000)
    assert validation_service.validate_enrollment(store, ok) == {}

    bad = EnrollmentCreate(
        student_id="missing",
        course_id="missing",
        total_amount=1000,
        paid_amount=100,
        pending_amount=100,
    )
    errors = validation_service.validate_enrollment(store, bad)
    assert set(errors) == {"studentId", "courseId", "pendingAmount"}


def test_enrollment_validation_rejects_full_course(store, course, student, enrollment):
    course_crud.update_course(store, course.id, CourseUpdate(max_students=1))
    data = EnrollmentCreate(student_id=student.id, course_id=course.id, total_amount=1000)

    assert validation_service.validate_enrollment(store, data)["courseId"] == "The course has no places left"


def test_payment_validation_bounds_amount_by_pending(store, enrollment):
    ok = PaymentCreate(enrollment_id=enrollment.id, amount=1000, description="Full payment")
    assert validation_service.validate_payment(store, ok) == {}

    too_much = PaymentCreate(enrollment_id=enrollment.id, amount=1000.01, description="Too much")
    assert "amount" in validation_service.validate_payment(store, too_much)


def test_payment_validation_required_fields(store):
    errors = validation_service.validate_payment(
        store, PaymentCreate(enrollment_id="", amount=0, description=" ")
    )

    assert errors == {
        "enrollmentId": "An enrollment must be selected",
        "amount": "Amount must be greater than 0",
        "description": "Description is required",
    }


def test_can_delete_student(store, student_in, student, enrollment):
    other = student_crud.create_student(
        store, student_in.model_copy(update={"email": "other@email.com", "document": "999"})
    )

    assert validation_service.can_delete_student(store, student.id) == "A student with enrollments cannot be deleted"
    assert validation_service.can_delete_student(store, other.id) is None


def test_course_capacity_cannot_drop_below_enrolled_students(course_in):
    smaller = course_in.model_copy(update={"max_students": 1})

    assert validation_service.validate_course(smaller, current_students=2) == {
        "maxStudents": "The course already has 2 students enrolled"
    }
    assert validation_service.validate_course(smaller, current_students=1) == {}


def test_enrollment_paid_cannot_exceed_total(store, course, student):
    data = EnrollmentCreate(student_id=student.id, course_id=course.id, total_amount=1000, paid_amount=1500)

    assert validation_service.validate_enrollment(store, data) == {
        "paidAmount": "Paid amount cannot exceed the total amount"
    }


def test_amounts_must_still_add_up_after_an_edit(enrollment):
    edited = enrollment.model_copy(update={"paid_amount": 5})

    assert validation_service.validate_amounts(edited) == {
        "pendingAmount": "Paid and pending amounts must add up to the total amount"
    }
    assert validation_service.validate_amounts(edited.model_copy(update={"pending_amount": 995})) == {}


def test_payment_of_exact_decimal_pending_is_valid(store, course, student):
    enrollment = enrollment_crud.create_enrollment(
        store,
        EnrollmentCreate(student_id=student.id, course_id=course.id, total_amount=0.3, paid_amount=0.1),
    )

    exact = PaymentCreate(enrollment_id=enrollment.id, amount=0.2, description="Last module")
    assert validation_service.validate_payment(store, exact) == {}


# --- activity_service ---

def test_recent_activity_is_newest_first(store, enrollment):
    pay(store, enrollment, 100)
    pay(store, enrollment, 200)

    activity = activity_service.get_recent_activity(store)

    assert [item.type for item in activity] == ["payment", "payment", "enrollment"]
    assert activity[0].amount == 200
    assert activity[0].description == "Ana Martinez paid 200.00 for X"
    assert activity[-1].description == "Ana Martinez enrolled in X"


def test_recent_activity_is_limited(store, enrollment):
    for _ in range(7):
        pay(store, enrollment, 10)

    activity = activity_service.get_recent_activity(store, limit=4)

    assert len(activity) == 4
    assert len(activity_service.get_recent_activity(store)) == 6


def test_recent_activity_names_unknown_references(store):
    payment_crud.create_payment(store, PaymentCreate(enrollment_id="missing", amount=5, description="?"))

    assert activity_service.get_recent_activity(store)[0].description == "Unknown student paid 5.00 for Unknown course"


def test_outstanding_balances_skip_settled_enrollments(store, course, student, enrollment):
    settled = enrollment_crud.create_enrollment(
        store,
        EnrollmentCreate(student_id=student.id, course_id=course.id, total_amount=500, paid_amount=500),
    )

    balances = activity_service.get_outstanding_balances(store)

    assert [b.enrollment_id for b in balances] == [enrollment.id]
    assert balances[0].student == "Ana Martinez"
    assert balances[0].course == "X"
    assert balances[0].amount == 1000
    assert settled.pending_amount == 0


def test_course_occupancy(store, course, enrollment):
    occupancy = activity_service.get_course_occupancy(store)

    assert len(occupancy) == 1
    assert occupancy[0].current_students == 1
    assert occupancy[0].occupancy == pytest.approx(0.1)
    assert occupancy[0].is_full is False


def test_suggest_installment_splits_pending_over_modules(store, enrollment):
    pay(store, enrollment, 1)

    suggestion = activity_service.suggest_installment(store, enrollment.id)

    assert suggestion.pending_amount == 999
    assert suggestion.suggested_amount == 500


def test_suggest_installment_without_pending_or_enrollment(store, enrollment):
    pay(store, enrollment, 1000)

    assert activity_service.suggest_installment(store, enrollment.id).suggested_amount == 0
    assert activity_service.suggest_installment(store, "missing") is None


# --- seed_service ---

def test_seed_fills_absent_collections():
    store = MemoryStorage()

    seed_service.seed_sample_data(store)

    courses = course_crud.get_all_courses(store)
    assert [c.current_students for c in courses] == [18, 15]
    assert len(student_crud.get_all_students(store)) == 2
    assert store.has(ENROLLMENTS) and store.load(ENROLLMENTS) == []
    assert store.has(PAYMENTS) and store.load(PAYMENTS) == []


def test_seed_leaves_existing_collections_alone():
    store = MemoryStorage()
    store.save(COURSES, [])
    store.save(STUDENTS, [])

    seed_service.seed_sample_data(store)
    seed_service.seed_sample_data(store)

    assert store.load(COURSES) == []
    assert store.load(STUDENTS) == []
