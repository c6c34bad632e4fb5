r"""Integration tests for the blocking RestClient against httpbin.org.

These tests send real requests and are deselected by default, run them
with ``pytest -m integration``.
"""

from __future__ import annotations

import pytest

from restson import HttpError, RequestTimeoutError, RestClient
from tests.helpers import (
    HTTPBIN_URL,
    HttpBinAnything,
    HttpBinBasicAuth,
    HttpBinDelay,
    HttpBinPost,
    HttpBinPostResp,
    HttpBinStatus,
)

pytestmark = pytest.mark.integration


def test_get_with_query() -> None:
    with RestClient(HTTPBIN_URL) as client:
        data = client.get_with(HttpBinAnything, 1234, [("a", "2"), ("b", "abcd")])
    assert data.url == "https://httpbin.org/anything/1234?a=2&b=abcd"


def test_post() -> None:
    with RestClient(HTTPBIN_URL) as client:
        response = client.post(None, HttpBinPost(data="test data"))
    assert response.headers["content-type"] == "application/json"


def test_post_capture_with() -> None:
    with RestClient(HTTPBIN_URL) as client:
        data = client.post_capture_with(
            None, HttpBinPost(data="test data"), [("a", "2")], HttpBinPostResp
        )
    assert data.url == "https://httpbin.org/post?a=2"


def test_basic_auth() -> None:
    with RestClient(HTTPBIN_URL) as client:
        client.set_auth("username", "passwd")
        data = client.get(HttpBinBasicAuth, ("username", "passwd"))
    assert data.authenticated


def test_http_error() -> None:
    with RestClient(HTTPBIN_URL) as client, pytest.raises(HttpError) as exc_info:
        client.get(HttpBinStatus, 404)
    assert exc_info.value.status_code == 404


def test_timeout() -> None:
    with RestClient(HTTPBIN_URL, timeout=1.0) as client, pytest.raises(RequestTimeoutError):
        client.get(HttpBinDelay, 3)
