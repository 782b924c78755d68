import logging
import time
import traceback
import uuid

import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.core.logging_config import configure_logging
from portfolio_api.core.config import settings
from portfolio_api.core.exceptions import APIError, ValidationFailed
from portfolio_api.core.security import CredentialVerifier
from portfolio_api.db.base import Base
from portfolio_api.db.session import check_database, engine, pool_metrics
from portfolio_api.middleware.rate_limit import enforce_api_rate_limit
from portfolio_api.middleware.versioning import is_api_path, versioned_path
from portfolio_api.utils.response import api_error_response, error, utc_timestamp
from portfolio_api.utils.validation import format_errors
from portfolio_api.api.v1 import (
    analytics,
    articles,
    auth,
    experiences,
    messages,
    mindset,
    projects,
    seo,
    services,
    skills,
    testimonials,
)

API_VERSION = "1.0.0"

HTTP_ERROR_CODES = {
    400: "validation_error",
    401: "unauthorized",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    429: "rate_limited",
    502: "upstream_failure",
}

# --------------------------------------------------
# CONFIGURE LOGGING (FIRST)
# --------------------------------------------------
configure_logging()
logger = structlog.get_logger()

# --------------------------------------------------
# INITIALIZE SENTRY (ONLY IN PRODUCTION)
# --------------------------------------------------
if settings.is_production and settings.SENTRY_DSN:
    try:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=0.1,
            integrations=[
                FastApiIntegration(),
                SqlalchemyIntegration(),
            ],
        )
        logging.info("Sentry initialized successfully")
    except Exception as e:
        logging.warning(f"Failed to initialize Sentry: {e}")

# --------------------------------------------------
# CREATE FASTAPI APP
# --------------------------------------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=API_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
)


@app.on_event("startup")
def init_app_state():
    """Create tables and hash the admin password once, before serving."""
    Base.metadata.create_all(bind=engine)
    app.state.credential_verifier = CredentialVerifier(settings.ADMIN_PASSWORD)
    logger.info("startup_complete", environment=settings.ENVIRONMENT)


# Middleware below is listed innermost first: each one registered wraps the
# ones before it, so the request passes request-context, security headers,
# CORS, rate limit, version redirect, then the routers.

# --------------------------------------------------
# VERSION REDIRECT (/api/* -> /api/v1/*)
# --------------------------------------------------
@app.middleware("http")
async def redirect_unversioned_api(request: Request, call_next):
    target = versioned_path(request.url.path, request.url.query)
    if target is not None:
        # 307 keeps the method and body.
        return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return await call_next(request)


# --------------------------------------------------
# GENERAL API RATE LIMIT
# --------------------------------------------------
app.middleware("http")(enforce_api_rate_limit)

# --------------------------------------------------
# CORS MIDDLEWARE
# --------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        settings.API_KEY_HEADER,
        "X-Request-ID",
    ],
    expose_headers=[
        "X-Request-ID",
        "RateLimit-Limit",
        "RateLimit-Remaining",
        "RateLimit-Reset",
        "Retry-After",
    ],
    max_age=3600,
)


# --------------------------------------------------
# SECURITY HEADERS MIDDLEWARE
# --------------------------------------------------
def apply_security_headers(response):
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    return apply_security_headers(response)


# --------------------------------------------------
# REQUEST CONTEXT + LOGGING MIDDLEWARE
# --------------------------------------------------
@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.bind_contextvars(request_id=request_id)

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        # Answer here, while the request id is still bound; the global
        # handler would run outside this middleware.
        response = apply_security_headers(internal_error_response(request, exc))
    finally:
        structlog.contextvars.unbind_contextvars("request_id")

    if is_api_path(request.url.path):
        logger.info(
            "request_completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

    response.headers["X-Request-ID"] = request_id
    return response


# --------------------------------------------------
# INCLUDE ROUTERS
# --------------------------------------------------
app.include_router(auth.router, prefix=f"{settings.API_V1_STR}/auth", tags=["Authentication"])
app.include_router(projects.router, prefix=f"{settings.API_V1_STR}/projects", tags=["Projects"])
app.include_router(skills.router, prefix=f"{settings.API_V1_STR}/skills", tags=["Skills"])
app.include_router(experiences.router, prefix=f"{settings.API_V1_STR}/experiences", tags=["Experiences"])
app.include_router(testimonials.router, prefix=f"{settings.API_V1_STR}/testimonials", tags=["Testimonials"])
app.include_router(messages.router, prefix=f"{settings.API_V1_STR}/messages", tags=["Messages"])
app.include_router(seo.router, prefix=f"{settings.API_V1_STR}/seo", tags=["SEO"])
app.include_router(articles.router, prefix=f"{settings.API_V1_STR}/articles", tags=["Articles"])
app.include_router(analytics.router, prefix=f"{settings.API_V1_STR}/analytics", tags=["Analytics"])
app.include_router(mindset.router, prefix=f"{settings.API_V1_STR}/mindset", tags=["Mindset"])
app.include_router(services.router, prefix=f"{settings.API_V1_STR}/services", tags=["Services"])


# --------------------------------------------------
# HEALTH CHECK ENDPOINT
# --------------------------------------------------
@app.get("/health")
def health_check():
    body = {
        "status": "healthy",
        "database": "connected",
        "environment": settings.ENVIRONMENT,
        "timestamp": utc_timestamp(),
    }
    status_code = status.HTTP_200_OK
    detail_message = "Database connectivity check passed"

    try:
        check_database()
    except Exception as exc:
        logger.error("health_check_failed", error=str(exc))
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        body["status"] = "unhealthy"
        body["database"] = "disconnected"
        detail_message = f"Database connectivity check failed: {exc}"

    if not settings.is_production:
        body["details"] = {"message": detail_message, "pool": pool_metrics()}

    return JSONResponse(status_code=status_code, content=body)


@app.get(f"{settings.API_V1_STR}/")
def api_root():
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "docs": f"{settings.API_V1_STR}/docs",
        "version": API_VERSION,
    }


# --------------------------------------------------
# EXCEPTION HANDLERS
# --------------------------------------------------
@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    logger.info(
        "request_failed",
        path=request.url.path,
        status_code=exc.status_code,
        code=exc.code,
    )
    return api_error_response(exc)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail

    if isinstance(detail, str):
        message = detail
        errors = []
    elif isinstance(detail, dict):
        message = detail.get("message", "Request failed")
        errors = detail.get("errors", [])
    else:
        message = "Request failed"
        errors = []

    return error(
        message=message,
        errors=errors,
        status_code=exc.status_code,
        code=HTTP_ERROR_CODES.get(exc.status_code, "error"),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return api_error_response(ValidationFailed(format_errors(exc.errors(), skip_location=True)))


# --------------------------------------------------
# GLOBAL EXCEPTION HANDLER
# --------------------------------------------------
def internal_error_response(request: Request, exc: Exception):
    logger.exception(
        "unhandled_exception",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        error_type=type(exc).__name__,
        detail=str(exc),
    )

    extra = None
    if not settings.is_production:
        extra = {
            "detail": str(exc),
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }

    return error(
        message="Internal server error",
        errors=[{"type": type(exc).__name__}] if extra else [],
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="internal_error",
        extra=extra,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    return internal_error_response(request, exc)
