"""
Portfolio API.

FastAPI application serving user portfolios: registration, sessions,
profile documents, embedded projects and skill rankings.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from portfolio.config import settings, validate_security_settings
from portfolio.database import Database, init_db
from portfolio.errors import PortfolioError
from portfolio.logging_config import configure_logging
from portfolio.middleware.rate_limit import limiter
from portfolio.routers.auth import router as auth_router
from portfolio.routers.profile import router as profile_router
from portfolio.routers.projects import router as projects_router
from portfolio.routers.skills import router as skills_router

# Import models to register them with Base.metadata
from portfolio.models import Profile, User  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Migrate and open the pool on startup; release it on shutdown."""
    configure_logging(settings.log_level)
    validate_security_settings()
    # Startup: apply migrations, then open the shared connection pool
    await init_db()
    app.state.database = Database(settings.database_url)
    logger.info("Portfolio API started (%s)", settings.environment)
    yield
    # Shutdown
    await app.state.database.dispose()


app = FastAPI(
    title="Portfolio API",
    description="Personal portfolios for AI/ML practitioners",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(projects_router)
app.include_router(skills_router)


# --- Middleware ---


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag the request and its response with a fresh X-Request-ID."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# --- Exception Handlers ---


def _error_response(
    request: Request, status_code: int, error: dict[str, Any]
) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content={"error": {**error, "request_id": request_id}},
    )


REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _field_path(loc: tuple | list) -> str | None:
    """Dotted field path of a pydantic error location, without the request part."""
    return ".".join(str(part) for part in loc if part not in REQUEST_PARTS) or None


def _public_error(error: dict[str, Any]) -> dict[str, Any]:
    # Rejected input is never echoed back; ctx may hold exception objects
    public = {
        "type": error.get("type"),
        "msg": error.get("msg"),
        "loc": [str(part) for part in error.get("loc", ())],
    }
    if "ctx" in error:
        public["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
    return public


@app.exception_handler(PortfolioError)
async def portfolio_exception_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    """Render domain errors with their status code and error code."""
    return _error_response(request, exc.status_code, exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 VALIDATION_ERROR naming the first bad field."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _field_path(first.get("loc", ()))
    message = first.get("msg", "Validation error")

    error = {
        "code": "VALIDATION_ERROR",
        "message": f"{field}: {message}" if field else message,
        "details": [_public_error(e) for e in errors],
    }
    if field:
        error["field"] = field
    return _error_response(request, status.HTTP_400_BAD_REQUEST, error)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions; the real message is only shown in development."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path,
        extra={"request_id": request_id},
    )
    message = str(exc) if settings.is_development else "Something went wrong"
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"code": "INTERNAL_ERROR", "message": message},
    )


# --- Health Check ---


@app.get("/api/v1/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """Liveness probe; does not touch the database."""
    return {"status": "healthy"}
