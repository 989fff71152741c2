from datetime import date, datetime
from typing import Optional
from pydantic import Field
from academy.models.enums import CourseStatus
from academy.schemas.base_schema import CamelModel

class CourseBase(CamelModel):
    name: str = Field(..., examples=["Full Stack Web Development"])
    description: str = Field("", examples=["React, Node.js and databases"])
    instructor: str = Field(..., examples=["Prof. Maria Gonzalez"])
    price: float = Field(..., examples=[45000])
    modules: int = Field(..., examples=[8])
    start_date: date = Field(..., examples=["2024-03-01"])
    end_date: date = Field(..., examples=["2024-06-30"])
    max_students: int = Field(..., examples=[25])
    status: CourseStatus = Field(CourseStatus.active, description="active, inactive, completed")

class CourseCreate(CourseBase):
    pass

class CourseUpdate(CamelModel):
    """Fields left out (or sent as null) keep their stored value."""
    name: Optional[str] = None
    description: Optional[str] = None
    instructor: Optional[str] = None
    price: Optional[float] = None
    modules: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    max_students: Optional[int] = None
    status: Optional[CourseStatus] = None

class Course(CourseBase):
    id: str
    current_students: int = 0
    created_at: datetime

class CourseOccupancy(CamelModel):
    course_id: str
    name: str
    current_students: int
    max_students: int
    occupancy: float = Field(..., description="currentStudents / maxStudents")
    is_full: bool
