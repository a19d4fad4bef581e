"""
Upload Routes

GET /uploads/{filename} - Download a stored resume
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from jobboard.api.deps import get_storage
from jobboard.schemas.schemas import ErrorResponse
from jobboard.utils.file_upload import ResumeStorage

router = APIRouter(prefix="/uploads", tags=["Uploads"], responses={404: {"model": ErrorResponse}})


@router.get("/{filename}")
def download_resume(filename: str, storage: ResumeStorage = Depends(get_storage)):
    return FileResponse(storage.resolve(filename))
