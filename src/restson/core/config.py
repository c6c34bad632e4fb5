r"""Configuration dataclass and defaults for the REST clients.

This module provides configuration constants and the immutable
configuration snapshot shared by ``AsyncRestClient`` and ``RestClient``.
Setters on the clients replace the snapshot instead of mutating it, so a
request always sees the configuration that was current when it started.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SEND_NULL_BODY",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "JSON_CONTENT_TYPE",
    "VERSION",
    "ClientConfig",
    "identity",
]

from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

import httpx

from restson.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable

try:
    VERSION = version("restson")
except PackageNotFoundError:  # pragma: no cover
    VERSION = "0.0.0"

# No timeout: requests wait until the transport completes
DEFAULT_TIMEOUT = None

# Bodies serialized to the JSON literal ``null`` are sent by default
DEFAULT_SEND_NULL_BODY = True

DEFAULT_USER_AGENT = f"restson/{VERSION}"

JSON_CONTENT_TYPE = "application/json"


def identity(body: str) -> str:
    r"""Return the response body unchanged (default body-wash
    function)."""
    return body


@dataclass(frozen=True)
class ClientConfig:
    """Configuration snapshot read by the request builder.

    Args:
        base_url: The absolute base URL the resource paths are joined to.
        auth: The pre-encoded ``Authorization`` header value, if any.
        headers: Custom headers added to every request.
        timeout: Maximum seconds to wait for a response, or ``None`` to
            wait indefinitely. Must be > 0 if provided.
        send_null_body: Whether a body serialized to ``null`` is sent.
        body_wash_fn: Function applied to the response body before it is
            deserialized.

    Example:
        ```pycon
        >>> from dataclasses import replace
        >>> import httpx
        >>> from restson.core.config import ClientConfig
        >>> config = ClientConfig(base_url=httpx.URL("https://api.example.com/"))
        >>> config.timeout is None
        True
        >>> replace(config, timeout=5.0).timeout
        5.0

        ```
    """

    base_url: httpx.URL
    auth: str | None = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    timeout: float | None = DEFAULT_TIMEOUT
    send_null_body: bool = DEFAULT_SEND_NULL_BODY
    body_wash_fn: Callable[[str], str] = identity

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            InvalidValueError: If the timeout is not positive.
        """
        validate_timeout(self.timeout)
