from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from app.api.v1.router import router as api_v1_router
from app.core.exceptions import (
    DuplicateVAError,
    InvalidLeadDataError,
    InvalidSettingsError,
    InvalidStatusTransitionError,
    LeadNotFoundError,
    MajorConditionIssueError,
    SpamDetectedError,
    VANotFoundError,
)
from app.core.config import settings as app_settings
from app.core.database import AsyncSessionLocal, init_db
from app.repositories.settings_repository import SettingsRepository

# Configure logging
logging.basicConfig(level=app_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables and the settings row before serving."""
    if app_settings.CREATE_TABLES_ON_STARTUP:
        await init_db()
        async with AsyncSessionLocal() as session:
            repo = SettingsRepository(session)
            await repo.get_settings()
            await repo.commit()
        logger.info("Database tables and settings row ready")
    yield


app = FastAPI(
    title="Car Flip Lead Desk",
    description="Lead intake and sale-pipeline tracking for VA-sourced vehicle flips",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware – restricted to configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in app_settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router)


@app.exception_handler(LeadNotFoundError)
async def lead_not_found_handler(request: Request, exc: LeadNotFoundError):
    logger.warning("Lead not found: %s", exc.detail)
    return JSONResponse(
        status_code=404,
        content={"detail": exc.detail, "type": "lead_not_found"},
    )


@app.exception_handler(VANotFoundError)
async def va_not_found_handler(request: Request, exc: VANotFoundError):
    logger.warning("VA not found: %s", exc.detail)
    return JSONResponse(
        status_code=404,
        content={"detail": exc.detail, "type": "va_not_found"},
    )


@app.exception_handler(DuplicateVAError)
async def duplicate_va_handler(request: Request, exc: DuplicateVAError):
    logger.warning("Duplicate VA: %s", exc.detail)
    return JSONResponse(
        status_code=409,
        content={"detail": exc.detail, "type": "duplicate_va"},
    )


@app.exception_handler(InvalidLeadDataError)
async def invalid_lead_data_handler(request: Request, exc: InvalidLeadDataError):
    logger.warning("Invalid lead data: %s", exc.detail)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.detail, "type": "invalid_lead_data"},
    )


@app.exception_handler(MajorConditionIssueError)
async def major_condition_issue_handler(
    request: Request, exc: MajorConditionIssueError
):
    logger.warning("Lead rejected for condition: %s", exc.errors)
    return JSONResponse(
        status_code=400,
        content={
            "detail": exc.detail,
            "errors": exc.errors,
            "type": "major_condition_issue",
        },
    )


@app.exception_handler(SpamDetectedError)
async def spam_detected_handler(request: Request, exc: SpamDetectedError):
    client = request.client.host if request.client else "unknown"
    logger.warning("Spam submission from %s", client)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.detail, "type": "spam_detected"},
    )


@app.exception_handler(InvalidStatusTransitionError)
async def invalid_status_transition_handler(
    request: Request, exc: InvalidStatusTransitionError
):
    logger.warning("Invalid status transition: %s", exc.detail)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.detail, "type": "invalid_status_transition"},
    )


@app.exception_handler(InvalidSettingsError)
async def invalid_settings_handler(request: Request, exc: InvalidSettingsError):
    logger.warning("Invalid settings: %s", exc.detail)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.detail, "type": "invalid_settings"},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Pydantic error dicts without the non-serialisable `ctx`, `url` and `input`."""
    return [
        {k: v for k, v in error.items() if k not in ("ctx", "url", "input")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Request validation error: %s", exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Request validation failed",
            "errors": jsonable_errors(exc),
            "type": "validation_error",
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected/unhandled exceptions.

    Returns a generic 500 response so that raw stack traces are never
    leaked to the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected internal error occurred. Please try again later.",
            "type": "internal_server_error",
        },
    )
