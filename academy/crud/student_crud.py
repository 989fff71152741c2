import logging
from typing import List, Optional

from academy.crud.collection_crud import (
    apply_update, find_index, load_collection, new_id, save_collection, utc_now,
)
from academy.schemas.student_schema import Student, StudentCreate, StudentUpdate
from academy.storage import STUDENTS, Storage

logger = logging.getLogger(__name__)


def get_all_students(store: Storage) -> List[Student]:
    return load_collection(store, STUDENTS, Student)


def get_student(store: Storage, student_id: str) -> Optional[Student]:
    for student in get_all_students(store):
        if student.id == student_id:
            return student
    return None


def create_student(store: Storage, student_in: StudentCreate) -> Student:
    """
    Stores a new student. Email and document uniqueness are checked by the
    caller (validation_service.validate_student), not here.
    """
    with store.transaction():
        students = get_all_students(store)
        db_student = Student(**student_in.model_dump(), id=new_id(), created_at=utc_now())
        students.append(db_student)
        save_collection(store, STUDENTS, students)
    logger.info(f"Created student {db_student.id}")
    return db_student


def update_student(store: Storage, student_id: str, student_update: StudentUpdate) -> Optional[Student]:
    with store.transaction():
        students = get_all_students(store)
        index = find_index(students, student_id)
        if index is None:
            return None
        students[index] = apply_update(students[index], student_update)
        save_collection(store, STUDENTS, students)
        return students[index]


def delete_student(store: Storage, student_id: str) -> bool:
    # No enrollment check here: see validation_service.can_delete_student
    with store.transaction():
        students = get_all_students(store)
        remaining = [student for student in students if student.id != student_id]
        if len(remaining) == len(students):
            return False
        save_collection(store, STUDENTS, remaining)
    logger.info(f"Deleted student {student_id}")
    return True
