"""
Main FastAPI application entry point.
"""
import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from starlette.middleware.base import BaseHTTPMiddleware

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    force=True
)

logger = logging.getLogger(__name__)

from config import Settings, get_settings, PLACEHOLDER_JWT_SECRET
from database import Base, build_engine, build_session_factory, register_models
from alembic_runner import run_migrations
from error_handlers import register_exception_handlers
from State_module.bootstrap import seed_reference_data
from Login_module.Utils.rate_limiter import RateLimitMiddleware, build_rate_limiter, get_client_ip
from Login_module.Utils.security_headers import SecurityHeadersMiddleware

# Routers
from Login_module.Auth_router import router as auth_router
from Service_module.Service_router import router as service_router
from State_module.State_router import router as state_router
from RTIApplication_module.RTIApplication_router import router as rti_application_router
from Consultation_module.Consultation_router import router as consultation_router
from Callback_module.Callback_router import router as callback_router
from Validation_module.Validation_router import router as validation_router

API_TITLE = "FileMyRTI API"
API_VERSION = "1.0.0"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses with status codes."""

    async def dispatch(self, request: Request, call_next):
        client_ip = get_client_ip(request)
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                f"{request.method} {request.url.path} | "
                f"Status: 500 (SERVER_ERROR) | "
                f"Error: {str(e)} | "
                f"Duration: {duration:.3f}s | "
                f"IP: {client_ip}"
            )
            raise

        duration = time.time() - start_time
        status_code = response.status_code
        if 200 <= status_code < 300:
            status_category = "SUCCESS"
        elif 300 <= status_code < 400:
            status_category = "REDIRECT"
        elif 400 <= status_code < 500:
            status_category = "CLIENT_ERROR"
        else:
            status_category = "SERVER_ERROR"

        logger.info(
            f"{request.method} {request.url.path} | "
            f"Status: {status_code} ({status_category}) | "
            f"Duration: {duration:.3f}s | "
            f"IP: {client_ip}"
        )
        return response


def initialize_database(settings: Settings, engine: Engine, session_factory) -> None:
    """
    Bring the schema up to date and seed reference data.
    Connection errors are logged; the app still starts and serves /health.
    """
    try:
        if settings.RUN_MIGRATIONS:
            logger.info("Running database migrations...")
            run_migrations(settings.database_url)
        else:
            logger.info("Migrations disabled, creating missing tables directly")
            Base.metadata.create_all(bind=engine)
    except OperationalError as e:
        logger.error(f"Failed to connect to database during migrations: {e}")
        logger.warning("Migrations will be retried on next startup")
        return
    except Exception as e:
        logger.error(f"Unexpected error during migrations: {e}", exc_info=True)
        return

    if settings.SEED_REFERENCE_DATA:
        logger.info("Seeding reference data...")
        seed_reference_data(session_factory)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    rate_limit_store=None,
) -> FastAPI:
    """
    Build the application. Settings, engine and rate-limit store can be passed
    in explicitly (tests do); otherwise they come from the environment.
    """
    settings = settings or get_settings()

    if settings.is_production and settings.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set in production")

    register_models()
    engine = engine or build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown."""
        logger.info(f"Starting {API_TITLE} ({settings.ENVIRONMENT})...")
        initialize_database(settings, engine, session_factory)
        logger.info("Application started successfully")
        yield
        logger.info("Shutting down application...")
        engine.dispose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    register_exception_handlers(app)

    # Middleware (last added runs first)
    app.add_middleware(RateLimitMiddleware, limiter=build_rate_limiter(settings, store=rate_limit_store))
    app.add_middleware(SecurityHeadersMiddleware, production=settings.is_production)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # Include routers
    app.include_router(auth_router)
    app.include_router(service_router)
    app.include_router(state_router)
    app.include_router(rti_application_router)
    app.include_router(consultation_router)
    app.include_router(callback_router)
    app.include_router(validation_router)

    @app.get("/")
    def root():
        """Root endpoint with API information."""
        return {
            "success": True,
            "message": API_TITLE,
            "data": {
                "version": API_VERSION,
                "endpoints": {
                    "auth": "/api/v1/auth",
                    "services": "/api/v1/services",
                    "states": "/api/v1/states",
                    "rti_applications": "/api/v1/rti-applications",
                    "consultations": "/api/v1/consultations",
                    "callback_requests": "/api/v1/callback-requests",
                    "validation_rules": "/api/v1/validation-rules",
                },
                "docs": "/docs",
                "redoc": "/redoc",
            },
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "success": True,
            "message": "healthy",
            "data": {"service": API_TITLE, "environment": settings.ENVIRONMENT},
        }

    return app


app = create_app()


# Run application
if __name__ == "__main__":
    import uvicorn

    # Configure uvicorn loggers
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    logger.info("Server will be available at: http://0.0.0.0:8030 (docs at /docs)")

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8030,
        reload=False,
        log_level="info",
        access_log=True,
    )
