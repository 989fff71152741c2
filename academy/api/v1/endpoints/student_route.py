from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from academy.api.deps import ensure_valid, get_store
from academy.crud import enrollment_crud, student_crud
from academy.crud.collection_crud import apply_update
from academy.schemas import student_schema
from academy.schemas.enrollment_schema import Enrollment
from academy.services import validation_service
from academy.storage import Storage

router = APIRouter()


@router.get("/", response_model=List[student_schema.Student], summary="List every student")
def get_all_students(store: Storage = Depends(get_store)):
    return student_crud.get_all_students(store)


@router.get("/{student_id}", response_model=student_schema.Student, summary="Get a student by id")
def get_student(student_id: str, store: Storage = Depends(get_store)):
    student = student_crud.get_student(store, student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.post(
    "/",
    response_model=student_schema.Student,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student",
)
def create_student(student_in: student_schema.StudentCreate, store: Storage = Depends(get_store)):
    """
    Email and document must not belong to another student.
    """
    with store.transaction():
        ensure_valid(validation_service.validate_student(store, student_in))
        return student_crud.create_student(store, student_in)


@router.put("/{student_id}", response_model=student_schema.Student, summary="Update some fields of a student")
def update_student(
    student_id: str,
    student_update: student_schema.StudentUpdate,
    store: Storage = Depends(get_store),
):
    with store.transaction():
        student = student_crud.get_student(store, student_id)
        if not student:
            raise HTTPException(status_code=404, detail="Student not found")

        merged = apply_update(student, student_update)
        ensure_valid(validation_service.validate_student(store, merged, student_id=student_id))

        return student_crud.update_student(store, student_id, student_update)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a student")
def delete_student(student_id: str, store: Storage = Depends(get_store)):
    """
    Refused with 409 while the student has enrollments.
    """
    with store.transaction():
        if not student_crud.get_student(store, student_id):
            raise HTTPException(status_code=404, detail="Student not found")

        reason = validation_service.can_delete_student(store, student_id)
        if reason:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=reason)

        student_crud.delete_student(store, student_id)
    return


@router.get(
    "/{student_id}/enrollments",
    response_model=List[Enrollment],
    summary="Enrollments of a student",
)
def get_student_enrollments(student_id: str, store: Storage = Depends(get_store)):
    if not student_crud.get_student(store, student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    return enrollment_crud.get_enrollments_by_student_id(store, student_id)
