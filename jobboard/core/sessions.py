"""
Server-side sessions.

A session is a row in the ``sessions`` table keyed by an opaque random token.
The client only ever sees the token (in an HTTP-only cookie). Sessions expire
a fixed interval after creation; there is no sliding refresh.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, insert, select

from jobboard.db.database import Database
from jobboard.db.schema import sessions

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC now, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class SessionData:
    token: str
    user_id: int
    role: str
    expires_at: datetime


class SessionStore:
    def __init__(self, db: Database, ttl: timedelta = timedelta(hours=24)):
        self.db = db
        self.ttl = ttl

    def create(self, user_id: int, role: str) -> SessionData:
        now = utcnow()
        data = SessionData(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            role=role,
            expires_at=now + self.ttl,
        )
        with self.db.transaction() as conn:
            conn.execute(insert(sessions).values(
                token=data.token, user_id=user_id, role=role,
                created_at=now, expires_at=data.expires_at,
            ))
        return data

    def get(self, token: Optional[str]) -> Optional[SessionData]:
        """Live session for a token, or None. Expired rows are removed on sight."""
        if not token:
            return None

        with self.db.connection() as conn:
            row = conn.execute(
                select(sessions.c.token, sessions.c.user_id, sessions.c.role, sessions.c.expires_at)
                .where(sessions.c.token == token)
            ).fetchone()

        if row is None:
            return None
        if row.expires_at <= utcnow():
            self.destroy(token)
            return None
        return SessionData(token=row.token, user_id=row.user_id, role=row.role, expires_at=row.expires_at)

    def destroy(self, token: Optional[str]) -> None:
        if not token:
            return
        with self.db.transaction() as conn:
            conn.execute(delete(sessions).where(sessions.c.token == token))

    def purge_expired(self) -> int:
        """Delete every expired session. Returns the number removed."""
        with self.db.transaction() as conn:
            result = conn.execute(delete(sessions).where(sessions.c.expires_at <= utcnow()))
        if result.rowcount:
            logger.info("Purged %d expired sessions", result.rowcount)
        return result.rowcount
