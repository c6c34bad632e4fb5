r"""Validation utilities for client configuration values.

Values are validated when they are configured, so an invalid value fails
immediately instead of on the next request.
"""

from __future__ import annotations

__all__ = [
    "validate_base_url",
    "validate_header_name",
    "validate_header_value",
    "validate_timeout",
]

import re

import httpx

from restson.exceptions import InvalidValueError, UrlError

# RFC 7230 token characters
HEADER_NAME_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Visible ASCII characters, space and horizontal tab
HEADER_VALUE_PATTERN = re.compile(r"[\t\x20-\x7e]*")


def validate_base_url(url: str) -> httpx.URL:
    """Parse and validate the client base URL.

    Args:
        url: The base URL. It must be absolute (scheme and host).

    Returns:
        The parsed URL.

    Raises:
        UrlError: If the URL cannot be parsed or is not absolute.

    Example:
        ```pycon
        >>> from restson.core.validation import validate_base_url
        >>> validate_base_url("https://api.example.com/v1/")
        URL('https://api.example.com/v1/')
        >>> validate_base_url("api.example.com")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        restson.exceptions.UrlError: base URL must be absolute, got 'api.example.com'

        ```
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"invalid base URL {url!r}: {exc}"
        raise UrlError(msg) from exc
    if not parsed.scheme or not parsed.host:
        msg = f"base URL must be absolute, got {url!r}"
        raise UrlError(msg)
    return parsed


def validate_timeout(timeout: float | None) -> None:
    """Validate the request timeout.

    Args:
        timeout: Maximum seconds to wait for a response, or ``None`` for
            no timeout.

    Raises:
        InvalidValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from restson.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        restson.exceptions.InvalidValueError: timeout must be > 0, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise InvalidValueError(msg)


def validate_header_name(name: str) -> None:
    """Validate an HTTP header name.

    Raises:
        InvalidValueError: If the name is empty or contains characters
            that are not allowed in a header name.
    """
    if not isinstance(name, str) or not HEADER_NAME_PATTERN.fullmatch(name):
        msg = f"invalid header name {name!r}"
        raise InvalidValueError(msg)


def validate_header_value(value: str) -> None:
    """Validate an HTTP header value.

    Raises:
        InvalidValueError: If the value contains control characters or
            non-ASCII characters.
    """
    if not isinstance(value, str) or not HEADER_VALUE_PATTERN.fullmatch(value):
        msg = f"invalid header value {value!r}"
        raise InvalidValueError(msg)
