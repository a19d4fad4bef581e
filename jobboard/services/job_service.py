"""
Job Service - list, fetch and create job postings.
"""

import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import insert, select

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.sessions import utcnow
from jobboard.db.database import Database
from jobboard.db.schema import jobs

_datetime_adapter = TypeAdapter(datetime)
DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")

JOB_COLUMNS = (jobs.c.id, jobs.c.title, jobs.c.company, jobs.c.description, jobs.c.deadline, jobs.c.created_at)


def parse_deadline(value: Any) -> Optional[datetime]:
    """
    Parse a date/time (ISO 8601 string, date-only string or Unix timestamp).
    Returns naive UTC, or None if the value is not a date/time.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and DATE_ONLY.fullmatch(value.strip()):
        value = value.strip() + "T00:00:00"
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_job(row) -> dict:
    return {
        "id": row.id,
        "title": row.title,
        "company": row.company,
        "description": row.description,
        "deadline": row.deadline,
        "created_at": row.created_at,
    }


class JobService:
    def __init__(self, db: Database):
        self.db = db

    def list_jobs(self) -> List[dict]:
        """All jobs, newest first."""
        with self.db.connection() as conn:
            rows = conn.execute(
                select(*JOB_COLUMNS).order_by(jobs.c.created_at.desc(), jobs.c.id.desc())
            ).fetchall()
        return [format_job(r) for r in rows]

    def get_job(self, job_id: Any) -> dict:
        try:
            job_id = int(job_id)
        except (TypeError, ValueError):
            raise NotFoundError("Job not found")

        with self.db.connection() as conn:
            row = conn.execute(select(*JOB_COLUMNS).where(jobs.c.id == job_id)).fetchone()
        if row is None:
            raise NotFoundError("Job not found")
        return format_job(row)

    def create_job(self, title: Any, company: Any, description: Any, deadline: Any) -> dict:
        """Validate, trim and insert a posting. Returns the stored record."""
        if not title or not company or not description or not deadline:
            raise ValidationError("Missing required fields")
        if not all(isinstance(v, str) for v in (title, company, description)):
            raise ValidationError("Missing required fields")

        title, company, description = title.strip(), company.strip(), description.strip()
        if not title or not company or not description:
            raise ValidationError("Fields cannot be empty")

        deadline_value = parse_deadline(deadline)
        if deadline_value is None:
            raise ValidationError("Invalid deadline format")

        with self.db.transaction() as conn:
            result = conn.execute(insert(jobs).values(
                title=title, company=company, description=description,
                deadline=deadline_value, created_at=utcnow(),
            ))
            job_id = result.inserted_primary_key[0]
            row = conn.execute(select(*JOB_COLUMNS).where(jobs.c.id == job_id)).fetchone()

        return format_job(row)
