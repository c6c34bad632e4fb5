r"""Asynchronous REST client.

This module provides ``AsyncRestClient``, which maps resource types to REST
paths, serializes request data to JSON, and deserializes responses into the
caller's target type. It is the core used by the blocking ``RestClient``.
"""

from __future__ import annotations

__all__ = ["AsyncRestClient"]

import base64
import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from restson.codec import JsonCodec
from restson.core.config import (
    DEFAULT_SEND_NULL_BODY,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from restson.core.decoder import decode_body
from restson.core.executor import RawResponse, execute_request
from restson.core.request_builder import build_request
from restson.core.validation import (
    validate_base_url,
    validate_header_name,
    validate_header_value,
)
from restson.exceptions import CodecError, HttpClientError, SerializeParseError
from restson.path import resolve_path
from restson.resolvers import GaiResolver, ResolvingTransport
from restson.response import Response

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

    from restson.builder import Builder
    from restson.codec import BaseCodec
    from restson.core.request_builder import Query
    from restson.resolvers import Resolver

T = TypeVar("T")
K = TypeVar("K")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRestClient:
    r"""Asynchronous REST client.

    Each verb resolves the REST path of a resource type, builds the request
    from the current configuration, sends it, and deserializes the response
    when the verb returns a body. Verbs without a ``capture`` variant
    discard the response body and only keep the headers.

    The configuration is an immutable snapshot: setters replace it, and a
    request uses the snapshot that was current when it started. Setters
    therefore never affect requests already in flight.

    Two transport setups are supported:

    **Owned transport**: no ``client`` is given. A new ``httpx.AsyncClient``
    resolving host names with ``resolver`` is created, and ``aclose()`` (or
    leaving the ``async with`` block) closes it.

    **Shared transport**: an ``httpx.AsyncClient`` is given. Its connection
    pool may be shared with other clients, and its lifecycle stays with the
    caller.

    Args:
        base_url: The absolute base URL of the REST API. It should end with
            ``/`` when resource paths are relative to a sub-path.
        timeout: Maximum seconds to wait for a response, or ``None`` to wait
            indefinitely. Must be > 0 if provided.
        send_null_body: Whether a body serialized to ``null`` is sent.
        client: Optional ``httpx.AsyncClient`` to send the requests with.
        resolver: The resolver class used by the owned transport. It is
            instantiated without arguments.
        codec: The JSON codec. If ``None``, ``JsonCodec`` is used.

    Raises:
        UrlError: If the base URL is not a valid absolute URL.
        HttpClientError: If the owned httpx client cannot be created.

    Example:
        ```pycon
        >>> import asyncio
        >>> from dataclasses import dataclass
        >>> from restson import AsyncRestClient, RestPath, rest_path
        >>> @dataclass
        ... class HttpBinAnything(RestPath):
        ...     method: str
        ...     url: str
        ...     @rest_path(None)
        ...     def _path(cls, _: None) -> str:
        ...         return "anything"
        ...
        >>> async def main():  # doctest: +SKIP
        ...     async with AsyncRestClient("https://httpbin.org") as client:
        ...         data = await client.get(HttpBinAnything)
        ...         print(data.url)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP
        https://httpbin.org/anything

        ```
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        send_null_body: bool = DEFAULT_SEND_NULL_BODY,
        client: httpx.AsyncClient | None = None,
        resolver: type[Resolver] = GaiResolver,
        codec: BaseCodec | None = None,
    ) -> None:
        self._config = ClientConfig(
            base_url=validate_base_url(base_url),
            timeout=timeout,
            send_null_body=send_null_body,
        )
        self._codec: BaseCodec = codec or JsonCodec()
        self._close_client = client is None
        self._client: httpx.AsyncClient = client or _build_http_client(resolver)
        logger.debug(f"new client for {self._config.base_url}")

    @classmethod
    def builder(cls) -> Builder:
        r"""Return a builder to configure a client.

        Example:
            ```pycon
            >>> from restson import AsyncRestClient
            >>> client = AsyncRestClient.builder().timeout(10.0).build("https://httpbin.org")
            >>> client.config.timeout
            10.0

            ```
        """
        from restson.builder import Builder

        return Builder()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        r"""Close the underlying httpx client if this client created it."""
        if self._close_client:
            await self._client.aclose()
            self._close_client = False

    @property
    def config(self) -> ClientConfig:
        r"""The current configuration snapshot."""
        return self._config

    ##################
    #     Setters    #
    ##################

    def set_send_null_body(self, send_null: bool) -> None:
        r"""Set whether a body serialized to ``null`` is sent in
        POST/PUT/PATCH/DELETE requests."""
        self._config = replace(self._config, send_null_body=send_null)

    def set_auth(self, user: str, password: str) -> None:
        r"""Set credentials for HTTP Basic authentication.

        The ``Authorization`` header value is encoded once, here, and
        reused by every subsequent request.
        """
        token = base64.b64encode(f"{user}:{password}".encode()).decode("ascii")
        self._config = replace(self._config, auth=f"Basic {token}")

    def set_body_wash_fn(self, func: Callable[[str], str]) -> None:
        r"""Set a function that cleans the response body up before it is
        deserialized."""
        self._config = replace(self._config, body_wash_fn=func)

    def set_timeout(self, timeout: float | None) -> None:
        r"""Set the request timeout in seconds (``None`` for no
        timeout).

        Raises:
            InvalidValueError: If the timeout is not positive.
        """
        self._config = replace(self._config, timeout=timeout)

    def set_header(self, name: str, value: str) -> None:
        r"""Set an HTTP header added to every subsequent request.

        Setting a header that is already set replaces its value. The
        header stays until ``clear_headers()`` is called.

        Raises:
            InvalidValueError: If the name or the value is not legal in
                an HTTP header.
        """
        validate_header_name(name)
        validate_header_value(value)
        headers = self._config.headers.copy()
        headers[name] = value
        self._config = replace(self._config, headers=headers)

    def clear_headers(self) -> None:
        r"""Clear all the headers set with ``set_header()``."""
        self._config = replace(self._config, headers=httpx.Headers())

    ################
    #     Verbs    #
    ################

    async def get(self, resource_type: type[T], params: Any = None) -> Response[T]:
        r"""Make a GET request and deserialize the response into
        ``resource_type``."""
        raw = await self._execute("GET", resource_type, params)
        return self._parse(raw, resource_type)

    async def get_with(self, resource_type: type[T], params: Any, query: Query) -> Response[T]:
        r"""Make a GET request with query parameters and deserialize the
        response into ``resource_type``."""
        raw = await self._execute("GET", resource_type, params, query=query)
        return self._parse(raw, resource_type)

    async def post(
        self, params: Any, data: Any, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a POST request.

        The REST path is resolved from ``resource_type``, or from the type
        of ``data`` when it is not given.
        """
        return await self._write("POST", params, data, resource_type=resource_type)

    async def post_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a POST request with query parameters."""
        return await self._write("POST", params, data, query, resource_type=resource_type)

    async def put(
        self, params: Any, data: Any, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PUT request."""
        return await self._write("PUT", params, data, resource_type=resource_type)

    async def put_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PUT request with query parameters."""
        return await self._write("PUT", params, data, query, resource_type=resource_type)

    async def patch(
        self, params: Any, data: Any, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PATCH request."""
        return await self._write("PATCH", params, data, resource_type=resource_type)

    async def patch_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PATCH request with query parameters."""
        return await self._write("PATCH", params, data, query, resource_type=resource_type)

    async def delete(self, resource_type: type, params: Any = None) -> Response[None]:
        r"""Make a DELETE request without body."""
        raw = await self._execute("DELETE", resource_type, params)
        return Response(body=None, headers=raw.headers)

    async def delete_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a DELETE request with a body and query parameters."""
        return await self._write("DELETE", params, data, query, resource_type=resource_type)

    async def post_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a POST request and deserialize the response into
        ``response_type``."""
        return await self._capture(
            "POST", params, data, response_type, resource_type=resource_type
        )

    async def post_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a POST request with query parameters and deserialize the
        response into ``response_type``."""
        return await self._capture(
            "POST", params, data, response_type, query, resource_type=resource_type
        )

    async def put_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a PUT request and deserialize the response into
        ``response_type``."""
        return await self._capture("PUT", params, data, response_type, resource_type=resource_type)

    async def put_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a PUT request with query parameters and deserialize the
        response into ``response_type``."""
        return await self._capture(
            "PUT", params, data, response_type, query, resource_type=resource_type
        )

    async def patch_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a PATCH request and deserialize the response into
        ``response_type``."""
        return await self._capture(
            "PATCH", params, data, response_type, resource_type=resource_type
        )

    async def patch_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a PATCH request with query parameters and deserialize the
        response into ``response_type``."""
        return await self._capture(
            "PATCH", params, data, response_type, query, resource_type=resource_type
        )

    async def delete_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a DELETE request with a body and deserialize the response
        into ``response_type``."""
        return await self._capture(
            "DELETE", params, data, response_type, resource_type=resource_type
        )

    async def delete_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a DELETE request with a body and query parameters and
        deserialize the response into ``response_type``."""
        return await self._capture(
            "DELETE", params, data, response_type, query, resource_type=resource_type
        )

    ###################
    #     Pipeline    #
    ###################

    async def _write(
        self,
        method: str,
        params: Any,
        data: Any,
        query: Query | None = None,
        *,
        resource_type: type | None,
    ) -> Response[None]:
        body = self._serialize(data)
        raw = await self._execute(
            method, resource_type or type(data), params, query=query, body=body
        )
        return Response(body=None, headers=raw.headers)

    async def _capture(
        self,
        method: str,
        params: Any,
        data: Any,
        response_type: type[K],
        query: Query | None = None,
        *,
        resource_type: type | None,
    ) -> Response[K]:
        body = self._serialize(data)
        raw = await self._execute(
            method, resource_type or type(data), params, query=query, body=body
        )
        return self._parse(raw, response_type)

    async def _execute(
        self,
        method: str,
        resource_type: type,
        params: Any,
        *,
        query: Query | None = None,
        body: str | None = None,
    ) -> RawResponse:
        config = self._config
        path = resolve_path(resource_type, params)
        request = build_request(config, method, path, query=query, body=body)
        raw = await execute_request(self._client, request, timeout=config.timeout)
        return replace(raw, text=config.body_wash_fn(raw.text))

    def _serialize(self, data: Any) -> str:
        try:
            return self._codec.encode(data)
        except CodecError as exc:
            msg = f"{SerializeParseError.description}: {exc}"
            raise SerializeParseError(msg) from exc

    def _parse(self, raw: RawResponse, target: type[K]) -> Response[K]:
        return Response(body=decode_body(raw.text, target, self._codec), headers=raw.headers)


def _build_http_client(resolver: type[Resolver]) -> httpx.AsyncClient:
    try:
        transport = ResolvingTransport(resolver())
        # the executor enforces the timeout, httpx waits indefinitely
        return httpx.AsyncClient(transport=transport, timeout=None)
    except (OSError, ValueError) as exc:
        msg = f"{HttpClientError.description}: {exc}"
        raise HttpClientError(msg) from exc
