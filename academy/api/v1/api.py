# academy/api/v1/api.py
from fastapi import APIRouter

from academy.api.v1.endpoints.course_route import router as course_router
from academy.api.v1.endpoints.student_route import router as student_router
from academy.api.v1.endpoints.enrollment_route import router as enrollment_router
from academy.api.v1.endpoints.payment_route import router as payment_router
from academy.api.v1.endpoints.dashboard_route import router as dashboard_router

api_router = APIRouter()

api_router.include_router(course_router, prefix="/courses", tags=["Courses"])
api_router.include_router(student_router, prefix="/students", tags=["Students"])
api_router.include_router(enrollment_router, prefix="/enrollments", tags=["Enrollments"])
api_router.include_router(payment_router, prefix="/payments", tags=["Payments"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
