### Description ###
# Warehouse API - Clean J Shipping Backend
# - API Server -
# Author: Bailey Dixon
# Date: 10/16/2026
# Python: 3.11
####################

"""
Warehouse API - Main Application

FastAPI application entry point that provides:
- Staff and customer session login
- Courier and warehouse API key authentication
- Admin API key management
- Tiered rate limiting
- Request logging and attribution
- OpenAPI documentation at /api/docs

Usage:
    # Development
    uvicorn warehouse_api.main:app --reload --port 5000

    # Production
    uvicorn warehouse_api.main:app --host 0.0.0.0 --port 5000
"""

import secrets
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from warehouse_api.config import get_api_settings, get_app_config, get_project_root
from warehouse_api.database import SessionLocal, engine, init_db
from warehouse_api.middleware import RequestLoggingMiddleware
from warehouse_api.middleware.rate_limit import (
    RateLimitExceededError,
    build_rate_limiter,
    rate_limit_exceeded_handler,
)
from warehouse_api.models import User
from warehouse_api.models.user import ROLE_ADMIN, STATUS_ACTIVE
from warehouse_api.principal import AccessDenied
from warehouse_api.routers import auth_router, courier_router, keys_router, staff_router, warehouse_router
from warehouse_api.schemas.responses import ErrorResponse, HealthResponse
from warehouse_api.services.errors import StoreUnavailable
from warehouse_api.utils.custom_logger import setup_logger

# Load settings
settings = get_api_settings()
logger = setup_logger("warehouse_api")


def _setup_initial_admin():
    """
    Create the first admin account on startup if none exist.

    Uses the `admin` section of config.yaml. Without a configured
    password_hash a random password is generated and displayed ONCE.
    """
    admin_config = get_app_config().admin
    db = SessionLocal()
    try:
        if db.query(User).filter(User.role == ROLE_ADMIN).count() > 0:
            return

        admin = User(
            user_code=admin_config.user_code,
            email=admin_config.email,
            first_name="System",
            last_name="Administrator",
            role=ROLE_ADMIN,
            account_status=STATUS_ACTIVE,
        )

        generated_password = None
        if admin_config.password_hash:
            admin.password_hash = admin_config.password_hash
        else:
            generated_password = secrets.token_urlsafe(12)
            admin.set_password(generated_password)

        db.add(admin)
        db.commit()
        logger.info(f"Created initial admin account {admin.user_code} ({admin.email})")

        if generated_password:
            print("\n" + "=" * 70)
            print("  INITIAL ADMIN ACCOUNT CREATED")
            print("=" * 70)
            print(f"\n  Email:    {admin.email}")
            print(f"  Password: {generated_password}\n")
            print("  IMPORTANT: Save this password now! It will NOT be shown again.")
            print("  Change it with POST /api/auth/change-password.\n")
            print("=" * 70 + "\n")

    finally:
        db.close()


def _check_pending_migrations():
    """
    Check for pending Alembic migrations on startup.

    Logs a warning if the database schema is not up to date.
    Does not block startup - just warns the administrator.
    """
    try:
        from alembic.config import Config
        from alembic.runtime.migration import MigrationContext
        from alembic.script import ScriptDirectory

        alembic_cfg = Config(str(get_project_root() / "alembic.ini"))
        script = ScriptDirectory.from_config(alembic_cfg)

        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()

        head_rev = script.get_current_head()

        if current_rev is None:
            logger.warning(
                "Database is not stamped with an Alembic revision. "
                "Run 'alembic stamp head' for an existing database or 'alembic upgrade head' for a new one."
            )
        elif current_rev != head_rev:
            logger.warning(
                f"Pending database migrations (current {current_rev}, latest {head_rev}). "
                "Run 'alembic upgrade head'."
            )
        else:
            logger.info(f"Database schema is up to date (revision: {current_rev})")

    except Exception as e:
        # Don't fail startup on migration check errors
        logger.warning(f"Could not check migrations: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: Initialize database, bootstrap admin, build rate limiter
    - Shutdown: Release rate limit counters
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"API documentation available at: http://localhost:{settings.port}/api/docs")

    init_db()
    app.state.app_db_connected = True

    _check_pending_migrations()
    _setup_initial_admin()

    app.state.rate_limiter = build_rate_limiter(
        settings.rate_limit_storage_uri, get_app_config().rate_limits
    )

    yield

    logger.info(f"Shutting down {settings.api_title}...")
    app.state.rate_limiter.reset()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## Clean J Shipping Warehouse API

### Authentication
- **Staff / customers**: `POST /api/auth/login` (or `/api/auth/customer/login`),
  then send `Authorization: Bearer <token>`
- **Warehouse integrations**: `X-API-Key: wh_live_...`
- **Courier portals**: `X-KCD-API-Key: kcd_live_...` or `Authorization: Bearer kcd_live_...`

### Rate Limiting
Requests are limited per tier (general, auth, api-key, upload, password-reset).
Over-limit requests get HTTP 429 with a `retryAfter` field and `Retry-After` header.
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
    """Single response boundary for authentication/authorization failures"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            code=exc.error.value,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(by_alias=True, exclude_none=True),
        headers=exc.headers,
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    """Infrastructure fault: details stay in the log"""
    logger.error(f"[{getattr(request.state, 'request_id', '-')}] {exc} ({exc.cause!r})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            code="store_unavailable",
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(by_alias=True, exclude_none=True),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            details=[{"message": str(exc)}] if settings.debug else None,
        ).model_dump(by_alias=True, exclude_none=True),
    )


# Health check endpoint
@app.get(
    "/health",
    tags=["System"],
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and app database connectivity",
)
async def health_check() -> HealthResponse:
    app_db_connected = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        app_db_connected = True
    except Exception as e:
        logger.error(f"Health check database probe failed: {e}")

    return HealthResponse(
        status="healthy" if app_db_connected else "degraded",
        version=settings.api_version,
        app_db_connected=app_db_connected,
    )


# Root endpoint
@app.get("/", tags=["System"], summary="API Info")
async def root():
    """API root - returns basic API information"""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/api/docs",
        "health": "/health",
    }


# Include routers
app.include_router(
    auth_router,
    prefix=f"{settings.api_prefix}/auth",
    tags=["Auth"],
)

app.include_router(
    keys_router,
    prefix=f"{settings.api_prefix}/admin",
    tags=["Admin - Key Management"],
)

app.include_router(
    staff_router,
    prefix=f"{settings.api_prefix}/admin",
    tags=["Admin - Staff"],
)

app.include_router(
    warehouse_router,
    prefix=f"{settings.api_prefix}/warehouse",
    tags=["Warehouse"],
)

app.include_router(
    courier_router,
    prefix=f"{settings.api_prefix}/Courier",
    tags=["Courier"],
)


# Entry point for running directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "warehouse_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
