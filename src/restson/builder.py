r"""Fluent builder for the REST clients."""

from __future__ import annotations

__all__ = ["Builder"]

from typing import TYPE_CHECKING

from restson.client import RestClient
from restson.client_async import AsyncRestClient
from restson.core.config import DEFAULT_SEND_NULL_BODY, DEFAULT_TIMEOUT
from restson.core.validation import validate_timeout
from restson.resolvers import GaiResolver

if TYPE_CHECKING:
    from typing import Self

    import httpx

    from restson.codec import BaseCodec
    from restson.resolvers import Resolver


class Builder:
    r"""Builder collecting the construction options of a client.

    Defaults: no timeout, ``null`` bodies are sent, a new transport
    resolving names with ``GaiResolver``, and ``JsonCodec``.

    Example:
        ```pycon
        >>> from restson import Builder, MsgspecCodec
        >>> client = (
        ...     Builder()
        ...     .timeout(10.0)
        ...     .send_null_body(False)
        ...     .codec(MsgspecCodec())
        ...     .build("https://httpbin.org")
        ... )
        >>> client.config.send_null_body
        False

        ```
    """

    def __init__(self) -> None:
        self._timeout: float | None = DEFAULT_TIMEOUT
        self._send_null_body = DEFAULT_SEND_NULL_BODY
        self._client: httpx.AsyncClient | None = None
        self._resolver: type[Resolver] = GaiResolver
        self._codec: BaseCodec | None = None

    def timeout(self, timeout: float | None) -> Self:
        r"""Set the request timeout in seconds (default: no timeout).

        Raises:
            InvalidValueError: If the timeout is not positive.
        """
        validate_timeout(timeout)
        self._timeout = timeout
        return self

    def send_null_body(self, value: bool) -> Self:
        r"""Set whether a body serialized to ``null`` is sent (default:
        yes)."""
        self._send_null_body = value
        return self

    def with_client(self, client: httpx.AsyncClient) -> Self:
        r"""Send the requests with an existing ``httpx.AsyncClient``,
        e.g. to share its connection pool."""
        self._client = client
        return self

    def resolver(self, resolver: type[Resolver]) -> Self:
        r"""Set the resolver class of the transport created by the
        client. Ignored when ``with_client`` is used."""
        self._resolver = resolver
        return self

    def codec(self, codec: BaseCodec) -> Self:
        r"""Set the JSON codec (default: ``JsonCodec``)."""
        self._codec = codec
        return self

    def build(self, url: str) -> AsyncRestClient:
        r"""Create an ``AsyncRestClient`` with this configuration."""
        return AsyncRestClient(url, **self._options())

    def blocking(self, url: str) -> RestClient:
        r"""Create a blocking ``RestClient`` with this configuration."""
        return RestClient(url, **self._options())

    def _options(self) -> dict:
        return {
            "timeout": self._timeout,
            "send_null_body": self._send_null_body,
            "client": self._client,
            "resolver": self._resolver,
            "codec": self._codec,
        }
