import logging
from typing import List

from academy import config
from academy.crud import enrollment_crud
from academy.crud.collection_crud import load_collection, new_id, save_collection, utc_now
from academy.exceptions import PaymentExceedsBalanceError
from academy.schemas.payment_schema import Payment, PaymentCreate
from academy.storage import PAYMENTS, Storage

logger = logging.getLogger(__name__)


def get_all_payments(store: Storage) -> List[Payment]:
    return load_collection(store, PAYMENTS, Payment)


def get_payments_by_enrollment_id(store: Storage, enrollment_id: str) -> List[Payment]:
    return [p for p in get_all_payments(store) if p.enrollment_id == enrollment_id]


def create_payment(store: Storage, payment_in: PaymentCreate) -> Payment:
    """
    Records a payment and moves its amount from pending to paid on the
    enrollment, in one storage transaction.

    paid + pending == total only survives if amount <= pending. With
    ENFORCE_INVARIANTS on this is checked here and PaymentExceedsBalanceError
    is raised before anything is written; otherwise the caller must check it.
    A payment for an unknown enrollment is stored without other changes.
    """
    with store.transaction():
        enrollment = enrollment_crud.get_enrollment(store, payment_in.enrollment_id)
        if (
            enrollment is not None
            and config.ENFORCE_INVARIANTS
            and enrollment_crud.exceeds_pending(payment_in.amount, enrollment.pending_amount)
        ):
            logger.warning(
                f"Refused payment of {payment_in.amount} on enrollment {enrollment.id} "
                f"(pending {enrollment.pending_amount})"
            )
            raise PaymentExceedsBalanceError(enrollment.id, payment_in.amount, enrollment.pending_amount)

        payments = get_all_payments(store)
        db_payment = Payment(**payment_in.model_dump(), id=new_id(), created_at=utc_now())
        payments.append(db_payment)
        save_collection(store, PAYMENTS, payments)

        if enrollment is not None:
            enrollment_crud.apply_payment(store, enrollment.id, db_payment.amount)
        else:
            logger.warning(
                f"Payment {db_payment.id} references unknown enrollment {payment_in.enrollment_id}"
            )

    logger.info(f"Recorded payment {db_payment.id} of {db_payment.amount} on enrollment {db_payment.enrollment_id}")
    return db_payment
