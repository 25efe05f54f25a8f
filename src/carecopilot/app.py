"""
FastAPI application factory and main app configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.errors import APIError
from .api.routers import analyze, health, patients, session, transcribe
from .api.schemas.common import PipelineErrorResponse
from .api.utils.responses import fail
from .core.config import get_settings
from .core.exceptions import ConfigurationError
from .core.structured_logger import configure_logging
from .domain.errors import (
    AnalysisNotFoundError,
    DomainError,
    EmptyInputError,
    PatientNotFoundError,
    PipelineError,
)
from .middleware import PerformanceMiddleware, RequestIDMiddleware, SessionMiddleware

logger = logging.getLogger("carecopilot")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.logging)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.app_env} | Debug mode: {settings.debug}")
    if not settings.openai.is_configured:
        logger.warning(
            "OPENAI_API_KEY is not set: /analyze, /transcribe and visit recording "
            "will answer 503 until it is configured"
        )
    else:
        logger.info(f"OpenAI model: {settings.openai.model}")

    yield

    logger.info(f"Shutting down {settings.app_name}")


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""


def _error_response(request: Request, status_code: int, error: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=fail(request, error, message, details).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and infrastructure errors onto HTTP responses."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.error(f"APIError: {exc.code} ({exc.http_status}) {exc.message} | request_id={_request_id(request)}")
        return _error_response(request, exc.http_status, exc.code, exc.message, exc.details)

    @app.exception_handler(EmptyInputError)
    async def empty_input_handler(request: Request, exc: EmptyInputError):
        return _error_response(request, 400, exc.error_code, exc.message, exc.details)

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(request: Request, exc: PipelineError):
        logger.error(
            f"Pipeline error at step \"{exc.step.value}\": {exc.message} | request_id={_request_id(request)}"
        )
        return JSONResponse(
            status_code=500,
            content=PipelineErrorResponse(
                error="Pipeline error",
                message=exc.message,
                step=exc.step.value,
                request_id=_request_id(request),
                details=exc.details,
            ).model_dump(),
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error: {exc.message}")
        return _error_response(request, 503, "Configuration error", exc.message, exc.details)

    @app.exception_handler(PatientNotFoundError)
    @app.exception_handler(AnalysisNotFoundError)
    async def not_found_handler(request: Request, exc: DomainError):
        return _error_response(request, 404, exc.error_code or "NOT_FOUND", exc.message, exc.details)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return _error_response(request, 400, exc.error_code or "DOMAIN_ERROR", exc.message, exc.details)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _error_response(request, 400, "VALIDATION_ERROR", str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        logger.warning(
            f"ValidationError on {request.method} {request.url.path}: {error_details} "
            f"| request_id={_request_id(request)}"
        )
        error_messages = []
        for error in error_details:
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            msg = error.get("msg", "Validation error")
            error_messages.append(f"{loc}: {msg}")
        return _error_response(
            request,
            400,
            "INVALID_INPUT",
            f"Input validation failed: {'; '.join(error_messages)}",
            {"validation_errors": [{k: str(v) for k, v in e.items() if k in ("loc", "msg", "type")} for e in error_details]},
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {type(exc).__name__}: {exc} | request_id={_request_id(request)}", exc_info=exc)
        return _error_response(request, 500, "INTERNAL_ERROR", "An unexpected error occurred.")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="AI caregiver visit pipeline: transcript cleanup, clinical structuring, risk analysis and visit insights",
        version=settings.app_version,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
        lifespan=lifespan,
    )

    allow_headers = list(settings.cors.allowed_headers)
    for header in (settings.session.header_name, "X-Request-ID"):
        if "*" not in allow_headers and header not in allow_headers:
            allow_headers.append(header)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=False,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=allow_headers,
        max_age=600,
        expose_headers=[settings.session.header_name, "X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(SessionMiddleware, header_name=settings.session.header_name)
    app.add_middleware(PerformanceMiddleware)
    # Outermost, so every other middleware sees request.state.request_id.
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    app.include_router(analyze.router)
    app.include_router(transcribe.router)
    app.include_router(patients.router)
    app.include_router(session.router)

    register_exception_handlers(app)

    @app.get("/", tags=["health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.app_env,
            "status": "running",
            "docs": None if settings.is_production else "/docs",
            "endpoints": {
                "health": "/health",
                "analyze": "POST /analyze",
                "transcribe": "POST /transcribe",
                "patients": "GET|POST /patients",
                "active_patient": "GET|PUT /patients/active",
                "record_visit": "POST /patients/{patient_id}/analyses",
                "insights": "GET /patients/{patient_id}/insights?visit=N",
                "export": "GET /patients/{patient_id}/export?kind=emr|summary&visit=N",
                "session": "GET|PUT /session",
            },
        }

    return app


# Create the app instance
app = create_app()
