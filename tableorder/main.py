"""
FastAPI Application Entry Point

Restaurant ordering backend.

Endpoints:
    - POST /admin/login: Admin login, returns a bearer token
    - /admin/menu...: Menu management (admin token required)
    - /admin/orders...: Order review and status changes (admin token required)
    - POST /users: Customer registration
    - GET /users/menu: Menu browsing
    - POST /users/orders: Place an order
    - GET /users/orders/{user_id}: A customer's orders
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tableorder.core.config import Settings, get_settings, setup_logging
from tableorder.core.exceptions import AppError
from tableorder.core.security import CredentialService
from tableorder.database import Database
from tableorder.routers import admin, users
from tableorder.schemas import HealthResponse
from tableorder.seed import seed_demo_data
from tableorder.services import AdminAuthService

logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    db: Database = app.state.db

    # Startup
    logger.info("=" * 60)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    await db.create_all()

    async with db.session() as session:
        auth = AdminAuthService(session, app.state.credentials)
        await auth.ensure_default_admin(
            settings.default_admin_username,
            settings.default_admin_password,
        )

    if settings.seed_demo_data:
        async with db.session() as session:
            await seed_demo_data(session)

    insecure = settings.validate_production_config()
    if insecure:
        if settings.is_development:
            logger.info(f"Using insecure development defaults: {insecure}")
        else:
            logger.warning(f"Insecure defaults in {settings.env_mode.value}: {insecure}")

    logger.info("Application ready")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await db.dispose()
    logger.info("Cleanup complete")


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters are reported as 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "invalid value")
        detail = f"{location}: {message}" if location else message
    else:
        detail = "invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request - {detail}"})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The storage handle and credential service are constructed here and
    stored on app.state; request handlers receive them through the
    dependencies in tableorder.dependencies.

    Args:
        settings: Configuration to use (defaults to get_settings())
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Restaurant ordering backend: menu management, customer orders and admin review.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.db = Database.from_settings(settings)
    app.state.credentials = CredentialService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(admin.router)
    app.include_router(users.router)

    # =========================================================================
    # ROOT & HEALTH ENDPOINTS
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        """API root with navigation links."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.env_mode.value,
            "documentation": "/docs",
            "health": "/health",
        }

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="System Health Check",
    )
    async def health_check(request: Request) -> HealthResponse:
        """Verify the database is reachable."""
        db_status = "healthy"
        try:
            await request.app.state.db.ping()
        except Exception as e:
            db_status = "unhealthy"
            logger.error(f"Database health check failed: {e}")

        return HealthResponse(
            status="operational" if db_status == "healthy" else "degraded",
            database=db_status,
            timestamp=datetime.now(),
        )

    return app


setup_logging()
app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tableorder.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )
