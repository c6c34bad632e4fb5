from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from restson import AsyncRestClient, GaiResolver, Resolver, TransportError
from restson.resolvers import ResolvingTransport
from tests.helpers import HttpBinAnything, RequestRecorder, StaticResolver


class FailingResolver(Resolver):
    async def resolve(self, name: str, port: int) -> list[str]:
        msg = f"unknown host {name}"
        raise OSError(msg)


def make_transport(
    resolver: Resolver, recorder: RequestRecorder
) -> tuple[ResolvingTransport, httpx.AsyncClient]:
    transport = ResolvingTransport(resolver, httpx.MockTransport(recorder))
    return transport, httpx.AsyncClient(transport=transport)


##############################
#     Tests for Resolver     #
##############################


def test_resolver_is_abstract() -> None:
    with pytest.raises(TypeError):
        Resolver()


@pytest.mark.asyncio
async def test_gai_resolver_localhost() -> None:
    addresses = await GaiResolver().resolve("localhost", 80)
    assert addresses
    assert set(addresses) <= {"127.0.0.1", "::1"}


@pytest.mark.asyncio
async def test_gai_resolver_unknown_host() -> None:
    with pytest.raises(OSError):  # noqa: PT011
        await GaiResolver().resolve("unknown-host.invalid", 80)


########################################
#     Tests for ResolvingTransport     #
########################################


@pytest.mark.asyncio
async def test_resolving_transport_rewrites_host(recorder: RequestRecorder) -> None:
    resolver = StaticResolver()
    _, client = make_transport(resolver, recorder)
    await client.get("https://api.example.com/devices?a=1")
    request = recorder.last
    assert resolver.lookups == [("api.example.com", 443)]
    assert request.url == "https://10.0.0.7/devices?a=1"
    assert request.headers["Host"] == "api.example.com"
    assert request.extensions["sni_hostname"] == "api.example.com"


@pytest.mark.asyncio
async def test_resolving_transport_port(recorder: RequestRecorder) -> None:
    resolver = StaticResolver()
    _, client = make_transport(resolver, recorder)
    await client.get("http://api.example.com:8080/")
    assert resolver.lookups == [("api.example.com", 8080)]
    assert recorder.last.url == "http://10.0.0.7:8080/"
    assert recorder.last.headers["Host"] == "api.example.com:8080"


@pytest.mark.asyncio
async def test_resolving_transport_ipv6(recorder: RequestRecorder) -> None:
    _, client = make_transport(StaticResolver(["fe80::1"]), recorder)
    await client.get("http://api.example.com/")
    assert recorder.last.url.host == "fe80::1"


@pytest.mark.asyncio
async def test_resolving_transport_first_address(recorder: RequestRecorder) -> None:
    _, client = make_transport(StaticResolver(["10.0.0.1", "10.0.0.2"]), recorder)
    await client.get("http://api.example.com/")
    assert recorder.last.url.host == "10.0.0.1"


@pytest.mark.asyncio
async def test_resolving_transport_ip_literal(recorder: RequestRecorder) -> None:
    resolver = StaticResolver()
    _, client = make_transport(resolver, recorder)
    await client.get("http://192.168.1.1/")
    assert resolver.lookups == []
    assert recorder.last.url == "http://192.168.1.1/"


@pytest.mark.asyncio
async def test_resolving_transport_keeps_body(recorder: RequestRecorder) -> None:
    _, client = make_transport(StaticResolver(), recorder)
    await client.post("http://api.example.com/post", content=b'{"a":1}')
    assert recorder.last.content == b'{"a":1}'
    assert recorder.last.headers["Content-Length"] == "7"


@pytest.mark.asyncio
async def test_resolving_transport_resolution_failure(recorder: RequestRecorder) -> None:
    _, client = make_transport(FailingResolver(), recorder)
    with pytest.raises(httpx.ConnectError, match=r"failed to resolve api.example.com"):
        await client.get("http://api.example.com/")
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_resolving_transport_no_address(recorder: RequestRecorder) -> None:
    _, client = make_transport(StaticResolver([]), recorder)
    with pytest.raises(httpx.ConnectError, match=r"no address returned"):
        await client.get("http://api.example.com/")


@pytest.mark.asyncio
async def test_resolving_transport_aclose() -> None:
    inner = AsyncMock(spec=httpx.AsyncBaseTransport)
    transport = ResolvingTransport(StaticResolver(), inner)
    await transport.aclose()
    inner.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_resolution_failure_is_transport_error() -> None:
    client = AsyncRestClient(
        "http://api.example.com/",
        client=httpx.AsyncClient(
            transport=ResolvingTransport(FailingResolver(), httpx.MockTransport(RequestRecorder()))
        ),
    )
    with pytest.raises(TransportError, match=r"unknown host api.example.com"):
        await client.get(HttpBinAnything)


def test_client_uses_resolver_class() -> None:
    client = AsyncRestClient("http://api.example.com/", resolver=StaticResolver)
    transport = client._client._transport
    assert isinstance(transport, ResolvingTransport)
    assert isinstance(transport._resolver, StaticResolver)
