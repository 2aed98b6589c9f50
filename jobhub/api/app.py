"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from jobhub.api.limiter import limiter
from jobhub.api.routes import applications, auth, jobs
from jobhub.config import settings
from jobhub.db.base import init_db
from jobhub.errors import AuthenticationError, JobHubError, ValidationError
from jobhub.storage import ensure_upload_dir

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Request locations FastAPI prefixes to field paths
_LOCATIONS = {"body", "query", "path", "header", "form", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database and upload directory on startup."""
    init_db()
    ensure_upload_dir()
    logger.info("JobHub API started")
    yield


async def jobhub_error_handler(request: Request, exc: JobHubError):
    """Map domain errors to their status codes."""
    content: dict = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        content["errors"] = exc.errors
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Return 400 with one message per invalid field."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATIONS]
        errors.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Log datastore failures; never leak their detail."""
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def create_app() -> FastAPI:
    """Build the API from the current settings.

    The upload directory is resolved here rather than at import, so settings
    changed before the call decide where /uploads is served from.
    """
    app = FastAPI(
        title="JobHub API",
        description="Job board backend: postings, applications and documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.limiter = limiter

    app.add_exception_handler(JobHubError, jobhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth.router, prefix="/auth", tags=["Auth"])
    app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
    app.include_router(applications.router, prefix="/applications", tags=["Applications"])
    app.add_api_route("/health", health_check, methods=["GET"])

    # Uploaded documents are served back under a fixed prefix
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    return app


app = create_app()
