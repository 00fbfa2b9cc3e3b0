"""Logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from quicklink.common.logging_config import get_logger

# Polled by load balancers; logged at DEBUG to keep INFO logs readable
QUIET_PATHS = frozenset({"/api/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response, with server errors at ERROR level."""
        start_time = time.perf_counter()
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        self.logger.log(level, f"Request: {request.method} {path} from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        if response.status_code >= 500:
            level = logging.ERROR

        self.logger.log(
            level,
            f"Response: {request.method} {path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms",
        )

        return response
