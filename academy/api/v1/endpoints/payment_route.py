from fastapi import APIRouter, Depends, status
from typing import List, Optional

from academy.api.deps import ensure_valid, get_store
from academy.crud import enrollment_crud, payment_crud
from academy.schemas import payment_schema
from academy.services import validation_service
from academy.storage import Storage

router = APIRouter()


@router.get("/", response_model=List[payment_schema.Payment], summary="List payments")
def get_payments(enrollment_id: Optional[str] = None, store: Storage = Depends(get_store)):
    if enrollment_id:
        return payment_crud.get_payments_by_enrollment_id(store, enrollment_id)
    return payment_crud.get_all_payments(store)


@router.post(
    "/",
    response_model=payment_schema.Payment,
    status_code=status.HTTP_201_CREATED,
    summary="Record a payment against an enrollment",
)
def create_payment(payment_in: payment_schema.PaymentCreate, store: Storage = Depends(get_store)):
    """
    The amount may not exceed the enrollment's pending balance. Student and
    course ids are copied from the enrollment.
    """
    with store.transaction():
        ensure_valid(validation_service.validate_payment(store, payment_in))

        enrollment = enrollment_crud.get_enrollment(store, payment_in.enrollment_id)
        payment_in = payment_in.model_copy(
            update={"student_id": enrollment.student_id, "course_id": enrollment.course_id}
        )
        return payment_crud.create_payment(store, payment_in)
