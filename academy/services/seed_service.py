import logging
from datetime import date

from academy.crud import course_crud, student_crud
from academy.models.enums import CourseStatus, DocumentType
from academy.schemas.course_schema import CourseCreate
from academy.schemas.student_schema import StudentCreate
from academy.storage import COURSES, ENROLLMENTS, PAYMENTS, STUDENTS, Storage

logger = logging.getLogger(__name__)

SAMPLE_COURSES = [
    {
        "course": CourseCreate(
            name="Full Stack Web Programming",
            description="Complete web development course with React, Node.js and databases",
            instructor="Prof. Maria Gonzalez",
            price=45000,
            modules=8,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 6, 30),
            max_students=25,
            status=CourseStatus.active,
        ),
        "current_students": 18,
    },
    {
        "course": CourseCreate(
            name="UX/UI Design",
            description="Foundations of user experience and interface design",
            instructor="Prof. Carlos Ruiz",
            price=35000,
            modules=6,
            start_date=date(2024, 2, 15),
            end_date=date(2024, 5, 15),
            max_students=20,
            status=CourseStatus.active,
        ),
        "current_students": 15,
    },
]

SAMPLE_STUDENTS = [
    StudentCreate(
        first_name="Ana",
        last_name="Martinez",
        email="ana.martinez@email.com",
        phone="+54 11 1234-5678",
        document="12345678",
        document_type=DocumentType.dni,
        address="Av. Corrientes 1234, CABA",
        birth_date=date(1995, 5, 15),
        emergency_contact="Pedro Martinez",
        emergency_phone="+54 11 8765-4321",
    ),
    StudentCreate(
        first_name="Juan",
        last_name="Perez",
        email="juan.perez@email.com",
        phone="+54 11 2345-6789",
        document="87654321",
        document_type=DocumentType.dni,
        address="Calle Falsa 123, CABA",
        birth_date=date(1992, 8, 22),
        emergency_contact="Maria Perez",
        emergency_phone="+54 11 9876-5432",
    ),
]


def seed_sample_data(store: Storage) -> None:
    """
    Fills collections that were never stored. Existing collections, even
    empty ones, are left alone.
    """
    with store.transaction():
        if not store.has(COURSES):
            for sample in SAMPLE_COURSES:
                course = course_crud.create_course(store, sample["course"])
                course_crud.set_current_students(store, course.id, sample["current_students"])
            logger.info(f"Seeded {len(SAMPLE_COURSES)} sample courses")

        if not store.has(STUDENTS):
            for student_in in SAMPLE_STUDENTS:
                student_crud.create_student(store, student_in)
            logger.info(f"Seeded {len(SAMPLE_STUDENTS)} sample students")

        for key in (ENROLLMENTS, PAYMENTS):
            if not store.has(key):
                store.save(key, [])
