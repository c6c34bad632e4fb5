r"""Exception taxonomy for REST client failures.

Every failure of the request pipeline is reported with a subclass of
``RestsonError``. Errors raised by the underlying libraries (httpx, the JSON
codec) are chained as ``__cause__`` so the original diagnostic is never
lost.
"""

from __future__ import annotations

__all__ = [
    "ClientIOError",
    "CodecError",
    "DeserializeParseError",
    "HttpClientError",
    "HttpError",
    "InvalidValueError",
    "RequestError",
    "RequestTimeoutError",
    "RestsonError",
    "SerializeParseError",
    "TransportError",
    "UrlError",
]


class RestsonError(Exception):
    r"""Base class of all the errors raised by the REST client.

    Args:
        message: A human-readable description of the failure.
    """

    description = "REST client error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.description
        super().__init__(self.message)


class HttpClientError(RestsonError):
    r"""Raised when the underlying HTTP client cannot be created."""

    description = "HTTP client creation failed"


class ClientIOError(RestsonError):
    r"""Raised when the blocking client cannot create its event loop."""

    description = "Failed to set up the blocking client event loop"


class UrlError(RestsonError):
    r"""Raised when the base URL or the final request URL is invalid.

    Path functions also raise it to reject parameters that do not map to
    a REST path.
    """

    description = "Failed to parse final URL"


class InvalidValueError(RestsonError, ValueError):
    r"""Raised when a configuration value is not legal (e.g. a header
    value with control characters)."""

    description = "Invalid parameter value"


class SerializeParseError(RestsonError):
    r"""Raised when the request data cannot be serialized to JSON."""

    description = "Failed to serialize data to JSON"


class DeserializeParseError(RestsonError):
    r"""Raised when the response body cannot be deserialized to the
    target type.

    Args:
        reason: The diagnostic reported by the JSON codec.
        body: The response body that failed to deserialize, after the
            body-wash function was applied.

    Example:
        ```pycon
        >>> from restson.exceptions import DeserializeParseError
        >>> err = DeserializeParseError("Expecting value", body="test")
        >>> err.body
        'test'
        >>> str(err)
        'Failed to deserialize data to target type: Expecting value'

        ```
    """

    description = "Failed to deserialize data to target type"

    def __init__(self, reason: str, body: str) -> None:
        super().__init__(f"{self.description}: {reason}")
        self.reason = reason
        self.body = body


class RequestError(RestsonError):
    r"""Raised when the outgoing request cannot be composed."""

    description = "Failed to make the outgoing request"


class TransportError(RestsonError):
    r"""Raised when the transport fails (connection refused, TLS
    failure, protocol error, ...)."""

    description = "Failed to make the outgoing request due to transport error"


class HttpError(RestsonError):
    r"""Raised when the server returns a non-success status.

    Args:
        status_code: The HTTP status code returned by the server.
        body: The raw response body, kept for diagnostics.

    Example:
        ```pycon
        >>> from restson.exceptions import HttpError
        >>> err = HttpError(418, "I'm a teapot")
        >>> err.status_code
        418
        >>> str(err)
        "Server returned non-success status: HTTP status 418: I'm a teapot"

        ```
    """

    description = "Server returned non-success status"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"{self.description}: HTTP status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class RequestTimeoutError(RestsonError):
    r"""Raised when the configured timeout elapses before the response is
    received."""

    description = "Request has timed out"


class CodecError(Exception):
    r"""Raised by JSON codecs when encoding or decoding fails.

    The client never lets it escape: it is re-raised as
    ``SerializeParseError`` or ``DeserializeParseError``.
    """
