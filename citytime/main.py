"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import pytz
import time
import structlog

from citytime.core.config import settings
from citytime.core.logging import configure_logging
from citytime.core.exceptions import CityTimeException, ConfigurationError
from citytime.core.security import add_security_headers, log_requests, get_cors_config, limiter
from citytime.api.v1.router import api_router
from citytime.api.v1.endpoints import conversion

# Configure structured logging
configure_logging()
logger = structlog.get_logger(__name__)


def check_supported_zones() -> None:
    """Fail fast when a configured zone is unknown to the timezone database."""
    unknown = [zone for zone in settings.conversion.supported_zones if zone not in pytz.all_timezones_set]
    if unknown:
        raise ConfigurationError("Unknown zones configured", details={"zones": unknown})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting City Time Converter", version=settings.app_version)

    try:
        check_supported_zones()
        logger.info(
            "Timezones loaded",
            zones=settings.conversion.supported_zones,
            default_source=settings.conversion.default_source_zone,
            strategy=settings.conversion.resolution_strategy,
        )
        yield

    except Exception as e:
        logger.error("Failed to start application", error=str(e), exc_info=True)
        raise

    finally:
        logger.info("Application shutdown completed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=settings.app_description,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    # Add rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Add middleware
    app.add_middleware(CORSMiddleware, **get_cors_config())
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.server.allowed_hosts)

    # Add security and logging middleware
    app.middleware("http")(add_security_headers)
    app.middleware("http")(log_requests)

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time to response headers."""
        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Process-Time"] = str(time.time() - start_time)
        return response

    @app.exception_handler(CityTimeException)
    async def city_time_exception_handler(request: Request, exc: CityTimeException):
        """Handle application exceptions, invalid input above all."""
        logger.warning(
            "CityTimeException",
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "error_code": exc.error_code,
                "details": exc.details,
            }
        )

    @app.exception_handler(pytz.UnknownTimeZoneError)
    async def unknown_timezone_handler(request: Request, exc: pytz.UnknownTimeZoneError):
        """Handle zone identifiers the timezone database does not know."""
        zone = exc.args[0] if exc.args else None
        logger.error(
            "Unknown timezone",
            zone=zone,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=400,
            content={
                "error": f"Unknown timezone: {zone}",
                "error_code": "UNKNOWN_TIMEZONE",
                "details": {"zone": zone},
            }
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        logger.warning(
            "HTTPException",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            method=request.method,
            exception_type=type(exc).__name__,
            exc_info=True
        )

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
            "timestamp": time.time(),
        }

    # Versioned API, plus the unversioned paths the front end calls
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(conversion.router, tags=["conversion"], include_in_schema=False)

    return app


# Create the application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "citytime.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.server.workers,
        reload=settings.debug,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
