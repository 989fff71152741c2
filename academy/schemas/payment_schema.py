from datetime import date, datetime
from typing import Optional
from pydantic import Field
from academy.models.enums import PaymentMethod
from academy.schemas.base_schema import CamelModel

class PaymentBase(CamelModel):
    enrollment_id: str
    student_id: Optional[str] = Field(None, description="Taken from the enrollment when omitted")
    course_id: Optional[str] = Field(None, description="Taken from the enrollment when omitted")
    amount: float = Field(..., examples=[5625])
    payment_date: date = Field(default_factory=date.today)
    payment_method: PaymentMethod = PaymentMethod.cash
    module: Optional[int] = Field(None, examples=[1])
    description: str = Field(..., examples=["Module 1 payment"])
    receipt_path: Optional[str] = None

class PaymentCreate(PaymentBase):
    pass

# No PaymentUpdate: payments are immutable once recorded.
class Payment(PaymentBase):
    id: str
    created_at: datetime
