"""
Inventory Service — Access Log Middleware
==========================================

What:  One line per request on the `inventory.access` logger.
How:   Times the request and logs method, path, status and duration with the
       request ID. Uploads (POST /register, PUT /inventory/{id}/photo) also
       report the declared body size, and 405 answers the methods the
       fallback policy allowed, so rejected clients can be diagnosed from the
       log alone.

Levels:
    5xx → ERROR (photo cache failures, unexpected errors)
    4xx → WARNING (unknown items, blank names, method not allowed)
    else → INFO

Request bodies and photo contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inventory_app.middleware.request_id import request_id_var

logger = logging.getLogger("inventory.access")


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the inventory API and the static forms."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        rid = request_id_var.get("")

        message = "%s %s %d %.1fms [%s]"
        args = [method, path, status, duration_ms, rid]

        body_size = request.headers.get("content-length")
        if method in ("POST", "PUT") and body_size:
            message += " in=%sB"
            args.append(body_size)
        if status == 405:
            message += " allow=%s"
            args.append(response.headers.get("allow", ""))

        logger.log(
            level_for(status),
            message,
            *args,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
