"""
Credential Service - user accounts and login sessions.

Passwords are only ever stored as bcrypt hashes, and the hash never leaves
this module. Unknown email and wrong password produce the same AuthError.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from jobboard.core.errors import AuthError, ConflictError, InternalError, ValidationError
from jobboard.core.security import PasswordHasher
from jobboard.core.sessions import SessionStore, utcnow
from jobboard.db.database import Database
from jobboard.db.schema import users

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def public_user(row) -> dict:
    """The user fields safe to hand to clients."""
    return {"id": row.id, "email": row.email, "name": row.name, "role": row.role}


class CredentialService:
    def __init__(self, db: Database, hasher: PasswordHasher, sessions: SessionStore):
        self.db = db
        self.hasher = hasher
        self.sessions = sessions

    def register(self, email: Optional[str], password: Optional[str], name: Optional[str]) -> Tuple[dict, str]:
        """Create a regular user and log them in. Returns (user, session token)."""
        if not email or not password or not name:
            raise ValidationError("Missing required fields")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        with self.db.connection() as conn:
            existing = conn.execute(select(users.c.id).where(users.c.email == email)).fetchone()
        if existing:
            raise ConflictError("Email already registered")

        password_hash = self.hasher.hash(password)
        try:
            with self.db.transaction() as conn:
                result = conn.execute(insert(users).values(
                    email=email, password_hash=password_hash, name=name,
                    role="user", created_at=utcnow(),
                ))
                user_id = result.inserted_primary_key[0]
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            raise ConflictError("Email already registered")

        session = self.sessions.create(user_id, "user")
        logger.info("Registered user %s", user_id)
        return {"id": user_id, "email": email, "name": name, "role": "user"}, session.token

    def login(self, email: Optional[str], password: Optional[str],
              previous_token: Optional[str] = None) -> Tuple[dict, str]:
        """Verify credentials and open a fresh session. Returns (user, session token)."""
        if not email or not password:
            raise ValidationError("Email and password required")

        with self.db.connection() as conn:
            row = conn.execute(
                select(users.c.id, users.c.email, users.c.password_hash, users.c.name, users.c.role)
                .where(users.c.email == email)
            ).fetchone()

        if row is None:
            self.hasher.dummy_verify()
            raise AuthError("Invalid email or password")
        if not self.hasher.verify(password, row.password_hash):
            raise AuthError("Invalid email or password")

        self.sessions.destroy(previous_token)
        session = self.sessions.create(row.id, row.role)
        return public_user(row), session.token

    def current_user(self, token: Optional[str]) -> dict:
        session = self.sessions.get(token)
        if session is None:
            raise AuthError("Not authenticated")

        with self.db.connection() as conn:
            row = conn.execute(
                select(users.c.id, users.c.email, users.c.name, users.c.role)
                .where(users.c.id == session.user_id)
            ).fetchone()

        if row is None:
            self.sessions.destroy(token)
            raise AuthError("User not found")
        return public_user(row)

    def logout(self, token: Optional[str]) -> None:
        try:
            self.sessions.destroy(token)
        except SQLAlchemyError as err:
            logger.error("Session destroy failed: %s", err)
            raise InternalError("Failed to logout") from err
