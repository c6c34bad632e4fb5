from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from restson import AsyncRestClient, RestClient
from tests.helpers import HTTPBIN_URL, RequestRecorder, httpbin_handler

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def httpbin_transport() -> httpx.MockTransport:
    """Create a transport answering like httpbin.org, without network
    access."""
    return httpx.MockTransport(httpbin_handler)


@pytest.fixture
def http_client(httpbin_transport: httpx.MockTransport) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient sending requests to the in-process
    httpbin."""
    return httpx.AsyncClient(transport=httpbin_transport, timeout=None)


@pytest.fixture
def client(http_client: httpx.AsyncClient) -> AsyncRestClient:
    """Create an AsyncRestClient for the in-process httpbin."""
    return AsyncRestClient(HTTPBIN_URL, client=http_client)


@pytest.fixture
def blocking_client(http_client: httpx.AsyncClient) -> Generator[RestClient, None, None]:
    """Create a RestClient for the in-process httpbin."""
    rest_client = RestClient(HTTPBIN_URL, client=http_client)
    yield rest_client
    rest_client.close()


@pytest.fixture
def recorder() -> RequestRecorder:
    """Create a mock transport handler recording the requests."""
    return RequestRecorder()


@pytest.fixture
def recording_client(recorder: RequestRecorder) -> AsyncRestClient:
    """Create an AsyncRestClient whose requests are recorded."""
    return AsyncRestClient(
        HTTPBIN_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(recorder), timeout=None),
    )
