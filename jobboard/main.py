"""
Job Board - Main Application

FastAPI backend with:
- SQL database for users, jobs, applications and sessions
- Cookie-based server-side sessions
- Resume uploads stored on local disk
- Static frontend served from PUBLIC_DIR

Run: uvicorn jobboard.main:app --reload
"""

import logging
import os
import traceback
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.api.routes import api_router, upload_router
from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import AppError
from jobboard.core.logging import setup_logging
from jobboard.core.security import PasswordHasher
from jobboard.core.sessions import SessionStore
from jobboard.db.database import Database
from jobboard.db.schema import bootstrap_schema
from jobboard.db.seed import seed_data
from jobboard.schemas.schemas import HealthResponse
from jobboard.utils.file_upload import ResumeStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database, bring the schema up to date and seed it; close on shutdown."""
    state = app.state
    state.db.connect()
    try:
        bootstrap_schema(state.db)
        if state.settings.seed_on_startup:
            seed_data(state.db, state.hasher, state.settings)
        state.sessions.purge_expired()
        state.storage.ensure_dir()
        yield
    finally:
        state.db.dispose()


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    def error_body(message: str, exc: Optional[Exception] = None) -> dict:
        body = {"error": message}
        if exc is not None and not settings.is_production:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return body

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = "Internal server error" if settings.is_production else (str(exc) or "Internal server error")
        return JSONResponse(status_code=500, content=error_body(message, exc))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Job Board",
        description="""
        Job postings, accounts and applications.

        ## Features
        - **Authentication**: cookie sessions for users and admins
        - **Jobs**: browse postings; admins create them
        - **Applications**: apply with a resume upload; admins review all applications
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    database = Database(settings.sqlalchemy_url, echo=settings.sql_echo)
    app.state.settings = settings
    app.state.db = database
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.sessions = SessionStore(database, ttl=timedelta(hours=settings.session_ttl_hours))
    app.state.storage = ResumeStorage(settings.upload_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # API routes must come before the static mount
    app.include_router(api_router, prefix="/api")
    app.include_router(upload_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        return HealthResponse(
            status="healthy",
            database="connected" if app.state.db.ping() else "disconnected",
        )

    # Serve the frontend (index.html at /) if it is present
    if os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()
