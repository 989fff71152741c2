import logging
from typing import List, Optional

from academy.crud.collection_crud import (
    apply_update, find_index, load_collection, new_id, save_collection, utc_now,
)
from academy.schemas.course_schema import Course, CourseCreate, CourseUpdate
from academy.storage import COURSES, Storage

logger = logging.getLogger(__name__)


def get_all_courses(store: Storage) -> List[Course]:
    return load_collection(store, COURSES, Course)


def get_course(store: Storage, course_id: str) -> Optional[Course]:
    for course in get_all_courses(store):
        if course.id == course_id:
            return course
    return None


def create_course(store: Storage, course_in: CourseCreate) -> Course:
    """Creates a course with a fresh id, no students and createdAt = now."""
    with store.transaction():
        courses = get_all_courses(store)
        db_course = Course(
            **course_in.model_dump(),
            id=new_id(),
            current_students=0,
            created_at=utc_now(),
        )
        courses.append(db_course)
        save_collection(store, COURSES, courses)
    logger.info(f"Created course {db_course.id} ({db_course.name})")
    return db_course


def update_course(store: Storage, course_id: str, course_update: CourseUpdate) -> Optional[Course]:
    with store.transaction():
        courses = get_all_courses(store)
        index = find_index(courses, course_id)
        if index is None:
            return None
        courses[index] = apply_update(courses[index], course_update)
        save_collection(store, COURSES, courses)
        return courses[index]


def set_current_students(store: Storage, course_id: str, current_students: int) -> Optional[Course]:
    """Writes the derived enrollment counter, which CourseUpdate does not expose."""
    with store.transaction():
        courses = get_all_courses(store)
        index = find_index(courses, course_id)
        if index is None:
            return None
        courses[index] = courses[index].model_copy(update={"current_students": current_students})
        save_collection(store, COURSES, courses)
        return courses[index]


def delete_course(store: Storage, course_id: str) -> bool:
    with store.transaction():
        courses = get_all_courses(store)
        remaining = [course for course in courses if course.id != course_id]
        if len(remaining) == len(courses):
            return False
        save_collection(store, COURSES, remaining)
    logger.info(f"Deleted course {course_id}")
    return True
