"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Request fields are optional on purpose: missing or empty values are
reported by the services with the API's own error messages.
"""

from pydantic import BaseModel, Field
from typing import Optional, Any
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    user = "user"
    admin = "admin"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole

class AuthResponse(BaseModel):
    message: str
    user: UserResponse

class MeResponse(BaseModel):
    user: UserResponse


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    # deadline stays loose so unparseable values get a 400, not a 422
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[Any] = None

class JobResponse(BaseModel):
    id: int
    title: str
    company: str
    description: str
    deadline: datetime
    created_at: datetime = Field(serialization_alias="createdAt")


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationRecord(BaseModel):
    """One row of the admin applications view (application + job + applicant)."""
    id: int
    name: str
    email: str
    phone: str
    cover_letter: str
    resume_path: str
    submitted_at: datetime
    job_id: Optional[int] = None
    job_title: Optional[str] = None
    job_company: Optional[str] = None
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None


# ============================================================
# COMMON
# ============================================================

class MessageResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
    stack: Optional[str] = None

class HealthResponse(BaseModel):
    status: str
    database: str
