from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from academy.api.deps import ensure_valid, get_store
from academy.crud import enrollment_crud, payment_crud
from academy.crud.collection_crud import apply_update
from academy.schemas import enrollment_schema
from academy.schemas.payment_schema import Payment
from academy.services import activity_service, validation_service
from academy.storage import Storage

router = APIRouter()


@router.get("/", response_model=List[enrollment_schema.Enrollment], summary="List every enrollment")
def get_all_enrollments(store: Storage = Depends(get_store)):
    return enrollment_crud.get_all_enrollments(store)


@router.get("/{enrollment_id}", response_model=enrollment_schema.Enrollment, summary="Get an enrollment by id")
def get_enrollment(enrollment_id: str, store: Storage = Depends(get_store)):
    enrollment = enrollment_crud.get_enrollment(store, enrollment_id)
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return enrollment


@router.post(
    "/",
    response_model=enrollment_schema.Enrollment,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll a student in a course",
)
def create_enrollment(
    enrollment_in: enrollment_schema.EnrollmentCreate,
    store: Storage = Depends(get_store),
):
    """
    Also increments the course's currentStudents.
    """
    with store.transaction():
        ensure_valid(validation_service.validate_enrollment(store, enrollment_in))
        return enrollment_crud.create_enrollment(store, enrollment_in)


@router.put(
    "/{enrollment_id}",
    response_model=enrollment_schema.Enrollment,
    summary="Update some fields of an enrollment",
)
def update_enrollment(
    enrollment_id: str,
    enrollment_update: enrollment_schema.EnrollmentUpdate,
    store: Storage = Depends(get_store),
):
    """
    Amounts are stored as given; the merged record must still satisfy
    0 <= paid <= total and paid + pending == total.
    """
    with store.transaction():
        enrollment = enrollment_crud.get_enrollment(store, enrollment_id)
        if not enrollment:
            raise HTTPException(status_code=404, detail="Enrollment not found")

        ensure_valid(validation_service.validate_amounts(apply_update(enrollment, enrollment_update)))

        return enrollment_crud.update_enrollment(store, enrollment_id, enrollment_update)


@router.get(
    "/{enrollment_id}/payments",
    response_model=List[Payment],
    summary="Payments recorded for an enrollment",
)
def get_enrollment_payments(enrollment_id: str, store: Storage = Depends(get_store)):
    if not enrollment_crud.get_enrollment(store, enrollment_id):
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return payment_crud.get_payments_by_enrollment_id(store, enrollment_id)


@router.get(
    "/{enrollment_id}/suggested-payment",
    response_model=enrollment_schema.SuggestedPayment,
    summary="Pending balance split over the course modules",
)
def get_suggested_payment(enrollment_id: str, store: Storage = Depends(get_store)):
    suggestion = activity_service.suggest_installment(store, enrollment_id)
    if not suggestion:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return suggestion
