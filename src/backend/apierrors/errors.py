"""API error responses.

Service and router code signals a request that cannot be fulfilled by
building an ErrorResponse through one of the five status factories:

    raise ServerError(
        invalid_request().with_error("email", "must be present").build()
    )

invalid_request  -> 200  expected client-input problem, errors in the body
bad_request      -> 400  malformed, oversized or structurally invalid request
unauthorized     -> 401  authentication missing or failed
forbidden        -> 403  authenticated but not permitted
not_found        -> 404  resource missing or not disclosed

The global exception handler in handlers.py renders http_code and errors,
and logs log_message only when should_log is set. log_message never reaches
the client.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404


@dataclass(frozen=True)
class ErrorResponse:
    http_code: int
    errors: Mapping[str, str] = field(default_factory=dict)
    log_message: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.http_code, int) or not 100 <= self.http_code <= 599:
            msg = f"http_code must be a valid HTTP status, got {self.http_code}"
            raise ValueError(msg)
        if self.log_message is not None and (
            not isinstance(self.log_message, str) or not self.log_message.strip()
        ):
            msg = "log_message must be non-empty when provided"
            raise ValueError(msg)
        # Detach from the caller's dict so the value stays immutable.
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    def __hash__(self) -> int:
        return hash((self.http_code, tuple(self.errors.items()), self.log_message))

    @property
    def should_log(self) -> bool:
        """Whether the server should log this error."""
        return self.log_message is not None

    def to_body(self) -> dict[str, dict[str, str]]:
        """Client-facing JSON body. Never includes log_message."""
        return {"errors": dict(self.errors)}


class _ErrorResponseBuilder:
    """Accumulates field errors for a fixed status code.

    Obtain one from a status factory, never directly.
    """

    def __init__(self, http_code: int) -> None:
        self._http_code = http_code
        self._errors: dict[str, str] = {}

    @property
    def http_code(self) -> int:
        return self._http_code

    def with_error(self, field_name: str, message: str) -> "_ErrorResponseBuilder":
        self._errors[field_name] = message
        return self

    def with_errors(self, errors: Mapping[str, str]) -> "_ErrorResponseBuilder":
        for field_name, message in errors.items():
            self.with_error(field_name, message)
        return self

    def build(self) -> ErrorResponse:
        """Client-only error, not logged by the server."""
        return ErrorResponse(http_code=self._http_code, errors=self._errors)

    def build_with_log(self, message: str) -> ErrorResponse:
        """Client error that is also logged server-side with `message`.

        Raises ValueError if `message` is empty.
        """
        if not message or not message.strip():
            msg = "build_with_log requires a non-empty log message"
            raise ValueError(msg)
        return ErrorResponse(
            http_code=self._http_code, errors=self._errors, log_message=message
        )


def invalid_request() -> _ErrorResponseBuilder:
    """Something invalid but not unexpected about the request.

    A missing or invalid body field or query parameter. The response is a
    200 with the errors in the body.
    These are routine and normally built without a log message, though
    build_with_log is still permitted.
    """
    return _ErrorResponseBuilder(HTTP_OK)


def bad_request() -> _ErrorResponseBuilder:
    """400: malformed syntax, size too large or invalid framing."""
    return _ErrorResponseBuilder(HTTP_BAD_REQUEST)


def unauthorized() -> _ErrorResponseBuilder:
    """401: authentication is required and has failed or was not provided."""
    return _ErrorResponseBuilder(HTTP_UNAUTHORIZED)


def forbidden() -> _ErrorResponseBuilder:
    """403: the request was valid but the caller lacks permission."""
    return _ErrorResponseBuilder(HTTP_FORBIDDEN)


def not_found() -> _ErrorResponseBuilder:
    """404: no current representation exists, or it will not be disclosed."""
    return _ErrorResponseBuilder(HTTP_NOT_FOUND)


class ServerError(Exception):
    """Carries an ErrorResponse through FastAPI's exception handling."""

    def __init__(self, response: ErrorResponse) -> None:
        super().__init__(response.log_message or f"HTTP {response.http_code}")
        self.response = response

    @property
    def http_code(self) -> int:
        return self.response.http_code

    @property
    def errors(self) -> Mapping[str, str]:
        return self.response.errors

    @property
    def should_log(self) -> bool:
        return self.response.should_log
