r"""DNS resolvers pluggable into the HTTP transport.

A resolver turns a host name into IP addresses. ``ResolvingTransport``
wraps an httpx transport so every request is sent to the address returned
by the resolver while the ``Host`` header and the TLS server name keep the
original host name.
"""

from __future__ import annotations

__all__ = ["GaiResolver", "Resolver", "ResolvingTransport"]

import asyncio
import ipaddress
import logging
import socket
from abc import ABC, abstractmethod

import httpx

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


class Resolver(ABC):
    """Abstract base class for DNS resolvers.

    Implementations must be constructible without arguments so the client
    builder can create them from their class.
    """

    @abstractmethod
    async def resolve(self, name: str, port: int) -> list[str]:
        """Resolve a host name.

        Args:
            name: The host name to resolve.
            port: The port the connection will use.

        Returns:
            The IP addresses of the host, preferred address first.

        Raises:
            OSError: If the name cannot be resolved.
        """


class GaiResolver(Resolver):
    """Resolver based on ``getaddrinfo``, run through the event loop's
    executor so it does not block other tasks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from restson.resolvers import GaiResolver
        >>> asyncio.run(GaiResolver().resolve("localhost", 80))  # doctest: +SKIP
        ['127.0.0.1']

        ```
    """

    async def resolve(self, name: str, port: int) -> list[str]:
        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(name, port, type=socket.SOCK_STREAM)
        return list(dict.fromkeys(info[4][0] for info in infos))


class ResolvingTransport(httpx.AsyncBaseTransport):
    """Transport resolving host names with a custom resolver.

    Args:
        resolver: The resolver used for host names. IP literals are sent
            as-is.
        transport: The wrapped transport. If ``None``, a new
            ``httpx.AsyncHTTPTransport`` is created.
    """

    def __init__(
        self, resolver: Resolver, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._resolver = resolver
        self._transport = transport or httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if not host or _is_ip_address(host):
            return await self._transport.handle_async_request(request)

        port = request.url.port or DEFAULT_PORTS.get(request.url.scheme, 80)
        try:
            addresses = await self._resolver.resolve(host, port)
        except OSError as exc:
            msg = f"failed to resolve {host}: {exc}"
            raise httpx.ConnectError(msg, request=request) from exc
        if not addresses:
            msg = f"failed to resolve {host}: no address returned"
            raise httpx.ConnectError(msg, request=request)

        address = addresses[0]
        logger.debug(f"resolved {host} to {address}")
        resolved = httpx.Request(
            method=request.method,
            url=request.url.copy_with(host=f"[{address}]" if ":" in address else address),
            headers=request.headers,
            stream=request.stream,
            extensions={**request.extensions, "sni_hostname": host},
        )
        # same header set as the original request, no framing headers added
        resolved.headers = request.headers.copy()
        return await self._transport.handle_async_request(resolved)

    async def aclose(self) -> None:
        await self._transport.aclose()


def _is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True
