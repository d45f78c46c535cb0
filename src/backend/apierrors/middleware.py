"""Request ID middleware for api-errors.

Takes the caller's X-Request-ID when it is usable, otherwise generates a
UUID4. The ID is stored in a ContextVar so the error handlers can attach it
to log records, and is echoed back as a response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from apierrors.config import settings

MAX_REQUEST_ID_LENGTH = 128

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    return request_id_var.get()


def _incoming_request_id(request: Request) -> str | None:
    value = request.headers.get(settings.REQUEST_ID_HEADER, "").strip()
    if not value or len(value) > MAX_REQUEST_ID_LENGTH:
        return None
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets the request ID ContextVar and adds the X-Request-ID header to
    every response."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        req_id = _incoming_request_id(request) or str(uuid.uuid4())
        token = request_id_var.set(req_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[settings.REQUEST_ID_HEADER] = req_id
        return response
