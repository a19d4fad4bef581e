"""
Authentication Routes

POST /auth/register - Register new user (logs in immediately)
POST /auth/login - Login and get a session cookie
POST /auth/logout - Destroy the session
GET /auth/me - Get current user info
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from jobboard.api.deps import get_app_settings, get_credential_service
from jobboard.core.auth import get_session_token
from jobboard.core.config import Settings
from jobboard.services.credential_service import CredentialService
from jobboard.schemas.schemas import (
    RegisterRequest, LoginRequest, AuthResponse, MeResponse, MessageResponse, ErrorResponse
)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    # not Secure: the app may be served over plain HTTP
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        secure=False,
        samesite="lax",
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    request: RegisterRequest,
    response: Response,
    service: CredentialService = Depends(get_credential_service),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new user account. The new user is logged in right away."""
    user, token = service.register(request.email, request.password, request.name)
    set_session_cookie(response, token, settings)
    return AuthResponse(message="Registration successful", user=user)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    service: CredentialService = Depends(get_credential_service),
    settings: Settings = Depends(get_app_settings),
):
    """Login and receive a session cookie."""
    user, new_token = service.login(request.email, request.password, previous_token=token)
    set_session_cookie(response, new_token, settings)
    return AuthResponse(message="Login successful", user=user)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    service: CredentialService = Depends(get_credential_service),
    settings: Settings = Depends(get_app_settings),
):
    service.logout(token)
    response.delete_cookie(settings.session_cookie_name, httponly=True, samesite="lax")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
def get_me(
    token: Optional[str] = Depends(get_session_token),
    service: CredentialService = Depends(get_credential_service),
):
    """Get current authenticated user's info."""
    return MeResponse(user=service.current_user(token))
