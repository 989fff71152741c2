# academy/schemas/enrollment_schema.py
from datetime import date
from typing import Optional
from pydantic import Field, model_validator
from academy.models.enums import EnrollmentStatus
from academy.schemas.base_schema import CamelModel

class EnrollmentBase(CamelModel):
    student_id: str
    course_id: str
    enrollment_date: date = Field(default_factory=date.today, examples=["2024-03-01"])
    status: EnrollmentStatus = Field(EnrollmentStatus.active, description="active, completed, dropped")
    total_amount: float = Field(..., examples=[45000])
    paid_amount: float = Field(0, examples=[0])
    pending_amount: float = Field(..., examples=[45000])

class EnrollmentCreate(EnrollmentBase):
    pending_amount: Optional[float] = Field(None, description="Defaults to totalAmount - paidAmount")

    @model_validator(mode="after")
    def fill_pending_amount(self):
        if self.pending_amount is None:
            self.pending_amount = self.total_amount - self.paid_amount
        return self

class EnrollmentUpdate(CamelModel):
    """
    Paid and pending amounts are stored as given; keeping
    paid + pending == total is the caller's job.
    """
    student_id: Optional[str] = None
    course_id: Optional[str] = None
    enrollment_date: Optional[date] = None
    status: Optional[EnrollmentStatus] = None
    total_amount: Optional[float] = None
    paid_amount: Optional[float] = None
    pending_amount: Optional[float] = None

class Enrollment(EnrollmentBase):
    id: str

class SuggestedPayment(CamelModel):
    enrollment_id: str
    pending_amount: float
    suggested_amount: float
