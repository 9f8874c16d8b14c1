"""
Employee API — Middleware Package
===================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    - Request ID: assigns X-Request-ID and exposes it to every log record
    - Logging:    one access line per request with status and duration

Responses travel back through the same chain in reverse, so the request
ID header is present on every response, errors included.
"""

from employee_api.middleware.logging import RequestLoggingMiddleware
from employee_api.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)

__all__ = [
    "RequestIDLogFilter",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "request_id_var",
]
