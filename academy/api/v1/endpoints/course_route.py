from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from academy.api.deps import ensure_valid, get_store
from academy.crud import course_crud, enrollment_crud
from academy.crud.collection_crud import apply_update
from academy.schemas import course_schema
from academy.schemas.enrollment_schema import Enrollment
from academy.services import activity_service, validation_service
from academy.storage import Storage

router = APIRouter()


@router.get("/", response_model=List[course_schema.Course], summary="List every course")
def get_all_courses(store: Storage = Depends(get_store)):
    return course_crud.get_all_courses(store)


@router.get(
    "/occupancy",
    response_model=List[course_schema.CourseOccupancy],
    summary="Enrolled students over capacity, per course",
)
def get_course_occupancy(store: Storage = Depends(get_store)):
    return activity_service.get_course_occupancy(store)


@router.get("/{course_id}", response_model=course_schema.Course, summary="Get a course by id")
def get_course(course_id: str, store: Storage = Depends(get_store)):
    course = course_crud.get_course(store, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.post(
    "/",
    response_model=course_schema.Course,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
)
def create_course(course_in: course_schema.CourseCreate, store: Storage = Depends(get_store)):
    ensure_valid(validation_service.validate_course(course_in))
    return course_crud.create_course(store, course_in)


@router.put("/{course_id}", response_model=course_schema.Course, summary="Update some fields of a course")
def update_course(
    course_id: str,
    course_update: course_schema.CourseUpdate,
    store: Storage = Depends(get_store),
):
    with store.transaction():
        course = course_crud.get_course(store, course_id)
        if not course:
            raise HTTPException(status_code=404, detail="Course not found")

        # Validate the record as it would look after the update
        ensure_valid(validation_service.validate_course(
            apply_update(course, course_update), current_students=course.current_students
        ))

        return course_crud.update_course(store, course_id, course_update)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a course")
def delete_course(course_id: str, store: Storage = Depends(get_store)):
    if not course_crud.delete_course(store, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return


@router.get(
    "/{course_id}/enrollments",
    response_model=List[Enrollment],
    summary="Enrollments of a course",
)
def get_course_enrollments(course_id: str, store: Storage = Depends(get_store)):
    if not course_crud.get_course(store, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return enrollment_crud.get_enrollments_by_course_id(store, course_id)
