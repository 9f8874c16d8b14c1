"""
Employee API — Request Logging Middleware
===========================================

What:  One access log line per request: method, path, status, duration.
Who:   Applied to every request; runs inside RequestIDMiddleware so the
       request id is already set.

    GET /api/v1/employees/7c9e… 200 12.4ms [a1b2c3d4] from 127.0.0.1

Level follows the status: 5xx ERROR, 4xx WARNING, everything else INFO.
Health checks are not logged. Request bodies and the Authorization header
are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from employee_api.middleware.request_id import request_id_var

logger = logging.getLogger("employee_api.access")

SKIPPED_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            request_id_var.get(),
            client_ip,
        )
        return response
