"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.auth_routes import router as auth_router
from jobboard.api.routes.job_routes import router as job_router
from jobboard.api.routes.admin_routes import router as admin_router
from jobboard.api.routes.upload_routes import router as upload_router

# Main API router (mounted under /api)
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(job_router)
api_router.include_router(admin_router)

__all__ = ["api_router", "upload_router"]
