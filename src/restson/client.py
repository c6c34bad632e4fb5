r"""Blocking REST client.

This module provides ``RestClient``, a synchronous facade over
``AsyncRestClient``. It owns a private event loop and runs each call to
completion on it, so callers do not have to manage asynchronous execution.
"""

from __future__ import annotations

__all__ = ["RestClient"]

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

from restson.client_async import AsyncRestClient
from restson.core.config import DEFAULT_SEND_NULL_BODY, DEFAULT_TIMEOUT
from restson.exceptions import ClientIOError
from restson.resolvers import GaiResolver

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType
    from typing import Self

    import httpx

    from restson.builder import Builder
    from restson.codec import BaseCodec
    from restson.core.config import ClientConfig
    from restson.core.request_builder import Query
    from restson.resolvers import Resolver
    from restson.response import Response

T = TypeVar("T")
K = TypeVar("K")


class RestClient:
    r"""Blocking REST client.

    Every verb blocks the calling thread until the wrapped
    ``AsyncRestClient`` call completes, and returns or raises exactly what
    the asynchronous call does. The arguments are the same as for
    ``AsyncRestClient``.

    The owned event loop is not thread-safe: an instance must not be used
    from several threads at once without external locking. The verbs
    cannot be called from a thread that is already running an event loop.
    Distinct instances are independent.

    Raises:
        UrlError: If the base URL is not a valid absolute URL.
        ClientIOError: If the event loop cannot be created.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from restson import RestClient, RestPath, rest_path
        >>> @dataclass
        ... class HttpBinAnything(RestPath):
        ...     method: str
        ...     url: str
        ...     @rest_path(None)
        ...     def _path(cls, _: None) -> str:
        ...         return "anything"
        ...
        >>> with RestClient("https://httpbin.org") as client:  # doctest: +SKIP
        ...     data = client.get(HttpBinAnything)
        ...     data.url
        ...
        'https://httpbin.org/anything'

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
        self._attach(
            AsyncRestClient(
                base_url,
                timeout=timeout,
                send_null_body=send_null_body,
                client=client,
                resolver=resolver,
                codec=codec,
            )
        )

    @classmethod
    def from_async(cls, client: AsyncRestClient) -> RestClient:
        r"""Wrap an existing asynchronous client.

        The asynchronous client should not have been used on another event
        loop, since its connections are bound to the loop that opened them.
        """
        blocking = cls.__new__(cls)
        blocking._attach(client)
        return blocking

    @classmethod
    def builder(cls) -> Builder:
        r"""Return a builder to configure a client; finish with
        ``Builder.blocking(url)``."""
        return AsyncRestClient.builder()

    def _attach(self, client: AsyncRestClient) -> None:
        try:
            self._loop = asyncio.new_event_loop()
        except OSError as exc:
            msg = f"{ClientIOError.description}: {exc}"
            raise ClientIOError(msg) from exc
        self._inner = client

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        r"""Close the wrapped client and the event loop."""
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self._inner.aclose())
        finally:
            self._loop.close()

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> ClientConfig:
        r"""The current configuration snapshot."""
        return self._inner.config

    def set_send_null_body(self, send_null: bool) -> None:
        r"""Set whether a body serialized to ``null`` is sent."""
        self._inner.set_send_null_body(send_null)

    def set_auth(self, user: str, password: str) -> None:
        r"""Set credentials for HTTP Basic authentication."""
        self._inner.set_auth(user, password)

    def set_body_wash_fn(self, func: Callable[[str], str]) -> None:
        r"""Set a function that cleans the response body up before it is
        deserialized."""
        self._inner.set_body_wash_fn(func)

    def set_timeout(self, timeout: float | None) -> None:
        r"""Set the request timeout in seconds (``None`` for no
        timeout)."""
        self._inner.set_timeout(timeout)

    def set_header(self, name: str, value: str) -> None:
        r"""Set an HTTP header added to every subsequent request."""
        self._inner.set_header(name, value)

    def clear_headers(self) -> None:
        r"""Clear all the headers set with ``set_header()``."""
        self._inner.clear_headers()

    def get(self, resource_type: type[T], params: Any = None) -> Response[T]:
        r"""Make a GET request."""
        return self._run(self._inner.get(resource_type, params))

    def get_with(self, resource_type: type[T], params: Any, query: Query) -> Response[T]:
        r"""Make a GET request with query parameters."""
        return self._run(self._inner.get_with(resource_type, params, query))

    def post(self, params: Any, data: Any, *, resource_type: type | None = None) -> Response[None]:
        r"""Make a POST request."""
        return self._run(self._inner.post(params, data, resource_type=resource_type))

    def post_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a POST request with query parameters."""
        return self._run(self._inner.post_with(params, data, query, resource_type=resource_type))

    def put(self, params: Any, data: Any, *, resource_type: type | None = None) -> Response[None]:
        r"""Make a PUT request."""
        return self._run(self._inner.put(params, data, resource_type=resource_type))

    def put_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PUT request with query parameters."""
        return self._run(self._inner.put_with(params, data, query, resource_type=resource_type))

    def patch(self, params: Any, data: Any, *, resource_type: type | None = None) -> Response[None]:
        r"""Make a PATCH request."""
        return self._run(self._inner.patch(params, data, resource_type=resource_type))

    def patch_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a PATCH request with query parameters."""
        return self._run(self._inner.patch_with(params, data, query, resource_type=resource_type))

    def delete(self, resource_type: type, params: Any = None) -> Response[None]:
        r"""Make a DELETE request without body."""
        return self._run(self._inner.delete(resource_type, params))

    def delete_with(
        self, params: Any, data: Any, query: Query, *, resource_type: type | None = None
    ) -> Response[None]:
        r"""Make a DELETE request with a body and query parameters."""
        return self._run(self._inner.delete_with(params, data, query, resource_type=resource_type))

    def post_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a POST request and capture the returned body."""
        return self._run(
            self._inner.post_capture(params, data, response_type, resource_type=resource_type)
        )

    def post_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a POST request with query parameters and capture the
        returned body."""
        return self._run(
            self._inner.post_capture_with(
                params, data, query, response_type, resource_type=resource_type
            )
        )

    def put_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a PUT request and capture the returned body."""
        return self._run(
            self._inner.put_capture(params, data, response_type, resource_type=resource_type)
        )

    def put_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a PUT request with query parameters and capture the
        returned body."""
        return self._run(
            self._inner.put_capture_with(
                params, data, query, response_type, resource_type=resource_type
            )
        )

    def patch_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a PATCH request and capture the returned body."""
        return self._run(
            self._inner.patch_capture(params, data, response_type, resource_type=resource_type)
        )

    def patch_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a PATCH request with query parameters and capture the
        returned body."""
        return self._run(
            self._inner.patch_capture_with(
                params, data, query, response_type, resource_type=resource_type
            )
        )

    def delete_capture(
        self, params: Any, data: Any, response_type: type[K], *, resource_type: type | None = None
    ) -> Response[K]:
        r"""Make a DELETE request with a body and capture the returned
        body."""
        return self._run(
            self._inner.delete_capture(params, data, response_type, resource_type=resource_type)
        )

    def delete_capture_with(
        self,
        params: Any,
        data: Any,
        query: Query,
        response_type: type[K],
        *,
        resource_type: type | None = None,
    ) -> Response[K]:
        r"""Make a DELETE request with a body and query parameters and
        capture the returned body."""
        return self._run(
            self._inner.delete_capture_with(
                params, data, query, response_type, resource_type=resource_type
            )
        )
