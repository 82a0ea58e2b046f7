# laundry_service/main.py
"""
Laundry Service - Main FastAPI Application
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging

from laundry_service import __version__
from laundry_service.api import routes
from laundry_service.config import Settings, settings as default_settings
from laundry_service.db.database import Database
from laundry_service.exceptions import OrderServiceError
from laundry_service.instrumentation import setup_tracing, instrument_app
from laundry_service.logging_config import setup_logging
from laundry_service.models.schemas import ErrorResponse
from laundry_service.services.notification_client import NotificationClient

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "Invalid request: " + "; ".join(problems)


def register_exception_handlers(app: FastAPI):
    """Render every failure as {success: false, error: message}"""

    @app.exception_handler(OrderServiceError)
    async def order_service_error_handler(request: Request, exc: OrderServiceError):
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return _error_response(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Service settings (defaults to environment/.env)
        database: Pre-built Database; one is created from settings.database_url otherwise
    """
    settings = settings or default_settings

    setup_logging(
        service_name=settings.service_name,
        log_level=settings.log_level,
        log_format=settings.log_format
    )

    owns_database = database is None
    db = database or Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events"""
        # Startup
        logger.info(f"Starting {settings.service_name}")
        logger.info(f"Environment: {settings.environment}")

        try:
            db.create_tables()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

        notification_client = NotificationClient(
            base_url=settings.notification_service_url,
            timeout=settings.notification_timeout
        )
        app.state.notification_client = notification_client
        logger.info(f"Notification Service URL: {settings.notification_service_url}")

        logger.info(f"{settings.service_name} started successfully")

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.service_name}")
        await notification_client.close()
        if owns_database:
            db.dispose()

    app = FastAPI(
        title="Laundry Service",
        description="Laundry order placement, tracking and status history",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = settings
    app.state.database = db

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if setup_tracing(settings) is not None:
        instrument_app(app, db.engine)

    register_exception_handlers(app)

    app.include_router(routes.router)
    app.include_router(routes.catalog_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        notifier = getattr(app.state, "notification_client", None)
        return {
            "status": "healthy",
            "service": settings.service_name,
            "version": __version__,
            "timestamp": datetime.utcnow().isoformat(),
            "notifications": "enabled" if notifier and notifier.is_enabled() else "disabled"
        }

    @app.get("/ready")
    def readiness_check():
        """Readiness check endpoint"""
        try:
            app.state.database.ping()

            return {
                "status": "ready",
                "service": settings.service_name,
                "database": "connected",
                "timestamp": datetime.utcnow().isoformat()
            }
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            return JSONResponse(
                status_code=503,
                content={
                    "status": "not_ready",
                    "service": settings.service_name,
                    "database": "disconnected",
                    "error": str(e),
                    "timestamp": datetime.utcnow().isoformat()
                }
            )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "ready": "/ready"
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "laundry_service.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=3000,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower()
    )
