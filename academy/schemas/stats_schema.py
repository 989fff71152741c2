from datetime import datetime
from typing import Literal
from pydantic import Field
from academy.schemas.base_schema import CamelModel

class DashboardStats(CamelModel):
    total_courses: int
    total_students: int
    total_enrollments: int
    total_revenue: float = Field(..., description="Sum of every payment amount")
    pending_payments: float = Field(..., description="Sum of every enrollment pending amount")
    active_courses: int

class ActivityItem(CamelModel):
    type: Literal["payment", "enrollment"]
    date: datetime
    description: str
    amount: float

class OutstandingBalance(CamelModel):
    enrollment_id: str
    student: str
    course: str
    amount: float
