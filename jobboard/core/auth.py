"""
Session guards - FastAPI dependencies for protected routes.

Provides:
- get_current_session: live session from the cookie, or None
- require_auth: 401 unless logged in
- require_admin: 401 unless logged in, 403 unless the user is an admin
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select

from jobboard.api.deps import get_app_settings, get_db, get_session_store
from jobboard.core.config import Settings
from jobboard.core.errors import AuthError, AuthorizationError
from jobboard.core.sessions import SessionData, SessionStore
from jobboard.db.database import Database
from jobboard.db.schema import users


def get_session_token(request: Request, settings: Settings = Depends(get_app_settings)) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
) -> Optional[SessionData]:
    return store.get(token)


def require_auth(session: Optional[SessionData] = Depends(get_current_session)) -> SessionData:
    """
    Dependency - caller must hold a live session.

    Usage:
        @router.post("/protected")
        def route(session: SessionData = Depends(require_auth)):
            ...
    """
    if session is None:
        raise AuthError("Authentication required")
    return session


def require_admin(
    session: SessionData = Depends(require_auth),
    db: Database = Depends(get_db),
) -> SessionData:
    """Dependency - require admin role, re-read from the users table every request."""
    with db.connection() as conn:
        role = conn.execute(
            select(users.c.role).where(users.c.id == session.user_id)
        ).scalar()

    if role != "admin":
        raise AuthorizationError("Admin access required")
    return session
