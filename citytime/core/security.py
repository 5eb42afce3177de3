"""HTTP middleware: security headers, request logging, CORS and rate limits."""

import time
from typing import Dict, Any
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from citytime.core.config import settings
from citytime.core.logging import get_logger

logger = get_logger(__name__)

# Rate limiter, applied to every route through SlowAPIMiddleware
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit.default],
    enabled=settings.rate_limit.enabled,
)


# Security headers middleware
async def add_security_headers(request: Request, call_next):
    """
    Add security headers to responses.

    Args:
        request: FastAPI request
        call_next: Next middleware

    Returns:
        Response with security headers
    """
    response = await call_next(request)

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Content-Security-Policy"] = "default-src 'self'"

    return response


# Request logging middleware
async def log_requests(request: Request, call_next):
    """Log each request with its outcome and timing."""
    start_time = time.time()
    client_ip = get_remote_address(request)

    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
        query=str(request.url.query),
        client_ip=client_ip,
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time=time.time() - start_time,
        client_ip=client_ip,
    )

    return response


def get_cors_config() -> Dict[str, Any]:
    """
    Get CORS configuration.

    Returns:
        CORS configuration dictionary
    """
    return {
        "allow_origins": settings.cors.origins,
        "allow_credentials": settings.cors.allow_credentials,
        "allow_methods": settings.cors.allow_methods,
        "allow_headers": settings.cors.allow_headers,
        "expose_headers": ["X-Process-Time"],
    }
