"""
Seed data - default admin account and two sample job postings.

Both steps check for existing rows first, so this runs on every startup.
"""

import logging
from datetime import timedelta

from sqlalchemy import func, insert, select

from jobboard.core.config import Settings
from jobboard.core.security import PasswordHasher
from jobboard.core.sessions import utcnow
from jobboard.db.database import Database
from jobboard.db.schema import jobs, users

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    ("Frontend Engineer", "Acme Corp", "Build UI components and improve UX.", 7),
    ("Backend Developer", "Globex", "Work on APIs and database performance.", 14),
]


def seed_admin(db: Database, hasher: PasswordHasher, settings: Settings) -> bool:
    """Create the default admin unless some admin exists. Returns True if created."""
    with db.transaction() as conn:
        admins = conn.execute(
            select(func.count()).select_from(users).where(users.c.role == "admin")
        ).scalar()
        if admins:
            return False
        conn.execute(insert(users).values(
            email=settings.admin_email,
            password_hash=hasher.hash(settings.admin_password),
            name="Admin User",
            role="admin",
            created_at=utcnow(),
        ))
    logger.info("Default admin created: %s", settings.admin_email)
    return True


def seed_jobs(db: Database) -> int:
    """Insert the sample postings into an empty jobs table. Returns rows added."""
    with db.transaction() as conn:
        if conn.execute(select(func.count()).select_from(jobs)).scalar():
            return 0
        now = utcnow()
        conn.execute(insert(jobs), [
            {
                "title": title,
                "company": company,
                "description": description,
                "deadline": now + timedelta(days=days),
                "created_at": now,
            }
            for title, company, description, days in SAMPLE_JOBS
        ])
    logger.info("Seeded %d sample jobs", len(SAMPLE_JOBS))
    return len(SAMPLE_JOBS)


def seed_data(db: Database, hasher: PasswordHasher, settings: Settings) -> None:
    seed_admin(db, hasher, settings)
    seed_jobs(db)
