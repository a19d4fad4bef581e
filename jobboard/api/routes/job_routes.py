"""
Job Routes

GET /jobs - List all jobs, newest first
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (admin only)
POST /jobs/{job_id}/apply - Apply to job with a resume (logged-in users)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from jobboard.api.deps import get_application_service, get_job_service
from jobboard.core.auth import require_admin, require_auth
from jobboard.core.sessions import SessionData
from jobboard.services.application_service import ApplicationService
from jobboard.services.job_service import JobService
from jobboard.schemas.schemas import ErrorResponse, JobCreate, JobResponse, MessageResponse

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=List[JobResponse])
def list_jobs(service: JobService = Depends(get_job_service)):
    """List all job postings, most recent first."""
    return service.list_jobs()


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    """Get details of a specific job."""
    return service.get_job(job_id)


@router.post("", response_model=JobResponse, status_code=201)
def create_job(
    job: JobCreate,
    admin: SessionData = Depends(require_admin),
    service: JobService = Depends(get_job_service),
):
    """Create a new job posting. Only admins can create jobs."""
    return service.create_job(job.title, job.company, job.description, job.deadline)


@router.post("/{job_id}/apply", response_model=MessageResponse, status_code=201)
def apply_to_job(
    job_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    resume: Optional[UploadFile] = File(None),
    session: SessionData = Depends(require_auth),
    service: ApplicationService = Depends(get_application_service),
):
    """Apply to a job with a resume file. Requires login; closed jobs reject applications."""
    service.apply(job_id, session.user_id, name, email, phone, cover_letter, resume)
    return MessageResponse(message="Application submitted successfully")
