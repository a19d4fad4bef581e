"""
Application Service - job applications with resume uploads.

The resume lands on disk before the request is validated and the row is
written, and disk and database share no transaction. Whatever goes wrong
after the file is stored (bad job id, closed job, missing fields, failed
insert), the file is deleted before the error propagates, so no upload
outlives a failed application.
"""

import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import insert, select

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.sessions import utcnow
from jobboard.db.database import Database
from jobboard.db.schema import applications, jobs, users
from jobboard.utils.file_upload import ResumeStorage, StoredFile

logger = logging.getLogger(__name__)


def parse_job_id(raw) -> int:
    """Positive integer id, or ValidationError."""
    value = str(raw).strip() if raw is not None else ""
    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise ValidationError("Invalid job ID")
    return int(value)


def has_upload(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


class ApplicationService:
    def __init__(self, db: Database, storage: ResumeStorage):
        self.db = db
        self.storage = storage

    def apply(
        self,
        job_id,
        user_id: int,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        cover_letter: Optional[str],
        resume: Optional[UploadFile],
    ) -> int:
        """
        Submit an application for a job.

        Args:
            job_id: Raw job id from the URL
            user_id: Authenticated applicant
            name, email, phone, cover_letter: Form fields
            resume: Uploaded resume file

        Returns:
            The new application's id

        Raises:
            ValidationError, NotFoundError, or whatever the insert raises;
            the stored resume is removed first in every case.
        """
        stored: Optional[StoredFile] = self.storage.save(resume) if has_upload(resume) else None
        try:
            job_pk = parse_job_id(job_id)

            with self.db.connection() as conn:
                job = conn.execute(
                    select(jobs.c.id, jobs.c.deadline).where(jobs.c.id == job_pk)
                ).fetchone()
            if job is None:
                raise NotFoundError("Job not found")

            if job.deadline < utcnow():
                raise ValidationError("Application deadline has passed")

            fields = [name, email, phone, cover_letter]
            if not all(isinstance(f, str) and f.strip() for f in fields):
                raise ValidationError("Missing required fields")
            if stored is None:
                raise ValidationError("Resume file is required")

            with self.db.transaction() as conn:
                result = conn.execute(insert(applications).values(
                    job_id=job_pk,
                    user_id=user_id,
                    name=name.strip(),
                    email=email.strip(),
                    phone=phone.strip(),
                    cover_letter=cover_letter.strip(),
                    resume_path=stored.filename,
                    submitted_at=utcnow(),
                ))
                application_id = result.inserted_primary_key[0]
        except Exception:
            self.storage.discard(stored)
            raise

        logger.info("Application %s submitted for job %s by user %s", application_id, job_pk, user_id)
        return application_id

    def list_applications(self) -> List[dict]:
        """Every application, newest first, joined with its job and applicant."""
        query = (
            select(
                applications.c.id,
                applications.c.name,
                applications.c.email,
                applications.c.phone,
                applications.c.cover_letter,
                applications.c.resume_path,
                applications.c.submitted_at,
                jobs.c.id.label("job_id"),
                jobs.c.title.label("job_title"),
                jobs.c.company.label("job_company"),
                users.c.id.label("user_id"),
                users.c.email.label("user_email"),
                users.c.name.label("user_name"),
            )
            .select_from(
                applications
                .outerjoin(jobs, applications.c.job_id == jobs.c.id)
                .outerjoin(users, applications.c.user_id == users.c.id)
            )
            .order_by(applications.c.submitted_at.desc(), applications.c.id.desc())
        )
        with self.db.connection() as conn:
            return [dict(row._mapping) for row in conn.execute(query)]
