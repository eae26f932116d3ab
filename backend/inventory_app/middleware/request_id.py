"""
Inventory Service — Request ID Middleware
==========================================

What:  Tags every request with an ID that appears in the access log, in
       error bodies (`request_id`) and in the X-Request-ID response header.
How:   A client-sent X-Request-ID is reused when it is short and made of
       safe characters; otherwise a fresh 8-character ID is generated.
       The ID lives in a ContextVar read by the logging middleware and the
       exception handlers in main.py.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in log lines; anything else is replaced
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_request_id(value: str) -> str:
    """The client's ID if it is safe to log, else a generated one."""
    if value and _VALID_REQUEST_ID.match(value):
        return value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var for the request and echoes it back."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER, ""))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
