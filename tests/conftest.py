import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from academy import config
from academy.crud import course_crud, enrollment_crud, student_crud
from academy.models.base_model import Base
from academy.schemas.course_schema import CourseCreate
from academy.schemas.enrollment_schema import EnrollmentCreate
from academy.schemas.student_schema import StudentCreate
from academy.storage import MemoryStorage, SqlStorage


@pytest.fixture(autouse=True)
def enforce_invariants(monkeypatch):
    monkeypatch.setattr(config, "ENFORCE_INVARIANTS", True)


@pytest.fixture
def store():
    return MemoryStorage()


@pytest.fixture
def sql_session_factory():
    # SQLite in-memory database shared by every session
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(params=["memory", "sql"])
def any_store(request, sql_session_factory):
    if request.param == "memory":
        return MemoryStorage()
    return SqlStorage(sql_session_factory)


@pytest.fixture
def course_in():
    return CourseCreate(
        name="X",
        description="Sample course",
        instructor="Prof. Maria Gonzalez",
        price=1000,
        modules=2,
        start_date=date(2024, 3, 1),
        end_date=date(2024, 6, 30),
        max_students=10,
    )


@pytest.fixture
def student_in():
    return StudentCreate(
        first_name="Ana",
        last_name="Martinez",
        email="ana.martinez@email.com",
        phone="+54 11 1234-5678",
        document="12345678",
        address="Av. Corrientes 1234",
        birth_date=date(1995, 5, 15),
        emergency_contact="Pedro Martinez",
        emergency_phone="+54 11 8765-4321",
    )


@pytest.fixture
def course(store, course_in):
    return course_crud.create_course(store, course_in)


@pytest.fixture
def student(store, student_in):
    return student_crud.create_student(store, student_in)


@pytest.fixture
def enrollment(store, student, course):
    return enrollment_crud.create_enrollment(
        store,
        EnrollmentCreate(
            student_id=student.id,
            course_id=course.id,
            enrollment_date=date(2024, 3, 1),
            total_amount=1000,
            paid_amount=0,
            pending_amount=1000,
        ),
    )
