"""
FastAPI Application - Portfolio Backend API
"""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from folio import models  # noqa: F401 - registers tables on the metadata
from folio.config import settings
from folio.database import Base, SessionLocal, engine, get_db
from folio.errors import FolioError
from folio.observability.logging import configure_logging
from folio.observability.metrics import MetricsMiddleware, metrics_response
from folio.observability.tracing import configure_tracing
from folio.routers.auth import router as auth_router
from folio.routers.blogs import router as blogs_router
from folio.routers.contact import router as contact_router
from folio.routers.projects import router as projects_router
from folio.security import SecurityHeadersMiddleware, limiter
from folio.services.auth_service import AuthService

logger = logging.getLogger("folio")


# ==========================================
# Database Initialization & Seeding
# ==========================================
def init_database() -> None:
    Base.metadata.create_all(bind=engine)


def seed_admin() -> bool:
    """Create the configured admin account when a password is set."""
    if not settings.admin_password:
        return False
    with SessionLocal() as db:
        try:
            created = AuthService(db).ensure_admin(
                settings.admin_username, settings.admin_email, settings.admin_password
            )
        except FolioError as exc:
            logger.warning("Could not seed admin user: %s", exc.message)
            return False
    if created:
        logger.info("Created admin user: %s", settings.admin_username)
    return created


# ==========================================
# Application Lifespan
# ==========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application")
    init_database()
    seed_admin()
    logger.info("Application ready")
    yield
    logger.info("Shutting down application")
    engine.dispose()


configure_logging(settings.log_level.upper(), sql_echo=settings.db_echo)
IS_PROD = settings.is_production


# ==========================================
# Exception handlers
# ==========================================
async def folio_error_handler(request: Request, exc: FolioError):
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(
        {"success": False, "message": "Validation error", "errors": errors},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        {"success": False, "message": "Too many requests. Please retry shortly."},
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            {"message": "API route not found"},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return JSONResponse(
        {"success": False, "message": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    payload = {"success": False, "message": "Server error"}
    if not IS_PROD:
        payload["error"] = str(exc)
    return JSONResponse(payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# ==========================================
# FastAPI Application
# ==========================================
app = FastAPI(
    title="Portfolio Backend API",
    description="Projects, blog posts and contact messages for a personal portfolio",
    version="1.0.0",
    lifespan=lifespan,
    docs_url=None if IS_PROD else "/docs",
    redoc_url=None if IS_PROD else "/redoc",
    openapi_url=None if IS_PROD else "/openapi.json",
)
# Order: compression → rate-limit/metrics → security → correlation id
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(
    SecurityHeadersMiddleware,
    referrer_policy="no-referrer",
    frame_options="DENY",
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")
app.state.limiter = limiter
app.add_exception_handler(FolioError, folio_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_error_handler)
# CORS: strict allowlist
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Accept", "Content-Type", "Authorization"],
    )
# Optional tracing
if settings.enable_tracing and settings.otlp_endpoint:
    configure_tracing(
        app, engine, "folio-api", settings.otlp_endpoint, settings.otlp_headers
    )


# ==========================================
# Liveness, health & readiness
# ==========================================
@app.get("/", tags=["system"], summary="Liveness banner")
def root() -> dict:
    return {"message": "Portfolio Backend is Live!"}


@app.get("/healthz", tags=["system"], summary="Health check", response_model=dict)
def health_check(db: Session = Depends(get_db)) -> dict:
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Health check failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="unhealthy"
        ) from exc
    if IS_PROD:
        return {"status": "healthy"}
    return {"status": "healthy", "database": "connected", "version": app.version}


@app.get("/readyz", tags=["system"], summary="Readiness check", response_model=dict)
def readiness_check(db: Session = Depends(get_db)) -> dict:
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return {"status": "ready", "database": "connected"}


# ==========================================
# Metrics (Protected with HTTP Basic Auth)
# ==========================================
security = HTTPBasic(auto_error=False)


def verify_metrics_auth(
    credentials: HTTPBasicCredentials | None = Depends(security),
) -> str | None:
    """Verify HTTP Basic Auth credentials for the metrics endpoint."""
    if not settings.metrics_password:
        # No password configured: metrics stay open
        return credentials.username if credentials else None

    valid = credentials is not None and (
        secrets.compare_digest(credentials.username, settings.metrics_username)
        & secrets.compare_digest(credentials.password, settings.metrics_password)
    )
    if not valid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


@app.get("/metrics", include_in_schema=False)
def metrics(_: str | None = Depends(verify_metrics_auth)):
    """
    Prometheus metrics endpoint.

    Set METRICS_USERNAME and METRICS_PASSWORD to require HTTP Basic Auth.
    """
    return metrics_response()


# ==========================================
# Routers
# ==========================================
app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(blogs_router)
app.include_router(contact_router)
