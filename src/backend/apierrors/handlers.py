"""Global exception handlers that turn errors into HTTP responses.

Response body shape for every handled error:
  {"errors": {"<field>": "<message>", ...}}

A status 200 with a non-empty errors body is an invalid request, not a
success. Log messages are written to the server log only and are never part
of the body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from apierrors.config import settings
from apierrors.errors import ErrorResponse, ServerError, bad_request, invalid_request
from apierrors.middleware import get_request_id

log = logging.getLogger(__name__)

_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}
_JSON_INVALID = "json_invalid"


def _error_log_level() -> int:
    return getattr(logging, settings.ERROR_LOG_LEVEL.upper(), logging.WARNING)


def log_error_response(
    response: ErrorResponse, *, request_id: str = "", path: str = ""
) -> None:
    """Record a logged ErrorResponse. Field errors are not included."""
    if not response.should_log:
        return
    log.log(
        _error_log_level(),
        "HTTP %d %s [request_id=%s]: %s",
        response.http_code,
        path,
        request_id,
        response.log_message,
    )


def render_error_response(response: ErrorResponse) -> JSONResponse:
    headers = {}
    request_id = get_request_id()
    if request_id:
        headers[settings.REQUEST_ID_HEADER] = request_id
    return JSONResponse(
        status_code=response.http_code,
        content=response.to_body(),
        headers=headers,
    )


async def server_error_handler(request: Request, exc: ServerError) -> JSONResponse:
    log_error_response(
        exc.response,
        request_id=get_request_id(),
        path=f"{request.method} {request.url.path}",
    )
    return render_error_response(exc.response)


def _field_name(loc: tuple | list) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in _LOC_SOURCES:
        parts = parts[1:]
    return ".".join(parts)


def validation_errors(exc: RequestValidationError) -> dict[str, str]:
    """Flatten pydantic validation errors into field -> message pairs.

    When a field has several problems the last reported one is kept. An
    unparseable JSON body is reported under "body".
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        if error.get("type") == _JSON_INVALID:
            errors["body"] = error.get("msg", "invalid JSON")
            continue
        errors[_field_name(error.get("loc", ()))] = error.get("msg", "invalid value")
    return errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    malformed = any(error.get("type") == _JSON_INVALID for error in exc.errors())
    if settings.VALIDATION_AS_INVALID_REQUEST and not malformed:
        builder = invalid_request()
    else:
        builder = bad_request()
    return render_error_response(builder.with_errors(validation_errors(exc)).build())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServerError, server_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
