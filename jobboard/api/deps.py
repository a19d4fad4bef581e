"""
FastAPI dependencies that hand out the per-app resources created in main.py.
"""

from fastapi import Request

from jobboard.core.config import Settings
from jobboard.core.sessions import SessionStore
from jobboard.db.database import Database
from jobboard.services.application_service import ApplicationService
from jobboard.services.credential_service import CredentialService
from jobboard.services.job_service import JobService
from jobboard.utils.file_upload import ResumeStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_storage(request: Request) -> ResumeStorage:
    return request.app.state.storage


def get_credential_service(request: Request) -> CredentialService:
    state = request.app.state
    return CredentialService(state.db, state.hasher, state.sessions)


def get_job_service(request: Request) -> JobService:
    return JobService(request.app.state.db)


def get_application_service(request: Request) -> ApplicationService:
    state = request.app.state
    return ApplicationService(state.db, state.storage)
