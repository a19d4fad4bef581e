"""
Admin Routes

GET /admin/applications - All applications with job and applicant details
"""

from typing import List

from fastapi import APIRouter, Depends

from jobboard.api.deps import get_application_service
from jobboard.core.auth import require_admin
from jobboard.core.sessions import SessionData
from jobboard.services.application_service import ApplicationService
from jobboard.schemas.schemas import ApplicationRecord, ErrorResponse

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get("/applications", response_model=List[ApplicationRecord])
def list_applications(
    admin: SessionData = Depends(require_admin),
    service: ApplicationService = Depends(get_application_service),
):
    return service.list_applications()
