from fastapi import APIRouter

from kinderadmin.modules.directories.router import router as directories_router
from kinderadmin.modules.enrollment.router import router as enrollment_router
from kinderadmin.modules.notifications.router import router as notifications_router
from kinderadmin.modules.student_applications.admin_router import (
    router as admin_applications_router,
)
from kinderadmin.modules.student_applications.router import router as applications_router

api_router = APIRouter()

api_router.include_router(directories_router, prefix="/directories", tags=["Directories"])

api_router.include_router(
    applications_router, prefix="/student-applications", tags=["Student Applications"]
)

api_router.include_router(
    admin_applications_router,
    prefix="/admin/student-applications",
    tags=["Admin - Applications"],
)

api_router.include_router(enrollment_router, prefix="/enrollment", tags=["Enrollment"])

api_router.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
