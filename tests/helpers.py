r"""Shared test helpers: resource types and an in-process httpbin.

The resource types mirror the httpbin.org endpoints. ``httpbin_handler``
emulates the subset of httpbin used by the unit tests so they run with
``httpx.MockTransport`` and no network access.
"""

from __future__ import annotations

__all__ = [
    "HTTPBIN_URL",
    "HttpBinAnything",
    "HttpBinBase64",
    "HttpBinBasicAuth",
    "HttpBinDelay",
    "HttpBinDelete",
    "HttpBinEcho",
    "HttpBinEmpty",
    "HttpBinInvalidUtf8",
    "HttpBinPatch",
    "HttpBinPatchResp",
    "HttpBinPost",
    "HttpBinPostResp",
    "HttpBinPut",
    "HttpBinPutResp",
    "HttpBinStatus",
    "HttpBinTyped",
    "HttpBinValue",
    "HttpMethod",
    "HttpRelativePath",
    "InvalidResource",
    "RequestRecorder",
    "StaticResolver",
    "httpbin_handler",
]

import asyncio
import base64
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx

from restson import Resolver, RestPath, UrlError, rest_path

HTTPBIN_URL = "https://httpbin.org"

# Methods accepted by the method-specific httpbin endpoints
METHOD_ENDPOINTS = {
    "/post": "POST",
    "/put": "PUT",
    "/patch": "PATCH",
    "/delete": "DELETE",
}


##########################
#     Resource types     #
##########################


@dataclass
class HttpBinAnything(RestPath):
    method: str
    url: str
    args: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    @rest_path(None)
    def _root(cls, _: None) -> str:
        return "anything"

    @rest_path(int)
    def _by_id(cls, item_id: int) -> str:
        return f"anything/{item_id}"

    @rest_path(tuple)
    def _by_pair(cls, pair: tuple[int, str]) -> str:
        return f"anything/{pair[0]}/{pair[1]}"


@dataclass
class HttpRelativePath(RestPath):
    url: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "test"


@dataclass
class HttpBinPost(RestPath):
    data: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "post"


@dataclass
class HttpBinPostResp:
    json: HttpBinPost
    url: str


@dataclass
class HttpBinPut(RestPath):
    data: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "put"


@dataclass
class HttpBinPutResp:
    json: HttpBinPut
    url: str


@dataclass
class HttpBinPatch(RestPath):
    data: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "patch"


@dataclass
class HttpBinPatchResp:
    json: HttpBinPatch
    url: str


@dataclass
class HttpBinDelete(RestPath):
    data: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "delete"


@dataclass
class HttpBinEcho(RestPath):
    r"""Echo of the request as seen by the server."""

    method: str
    url: str
    data: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "anything"


@dataclass
class HttpBinEmpty(RestPath):
    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "anything"


@dataclass
class HttpBinValue(RestPath):
    value: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "anything"


class HttpMethod(enum.Enum):
    GET = "GET"
    POST = "POST"


@dataclass
class HttpBinTyped(RestPath):
    r"""Echo decoded into enum, literal and optional fields."""

    method: HttpMethod
    args: dict[str, Literal["on", "off"]]
    json: HttpBinPost | None = None

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "anything"


class HttpBinStatus(RestPath):
    @rest_path(int)
    def _path(cls, status_code: int) -> str:
        return f"status/{status_code}"


class HttpBinDelay(RestPath):
    @rest_path(int)
    def _path(cls, seconds: int) -> str:
        return f"delay/{seconds}"


class HttpBinBase64(RestPath):
    @rest_path(str)
    def _path(cls, data: str) -> str:
        return f"base64/{data}"


@dataclass
class HttpBinBasicAuth(RestPath):
    authenticated: bool
    user: str

    @rest_path(tuple)
    def _path(cls, credentials: tuple[str, str]) -> str:
        return f"basic-auth/{credentials[0]}/{credentials[1]}"


@dataclass
class HttpBinInvalidUtf8(RestPath):
    text: str

    @rest_path(None)
    def _path(cls, _: None) -> str:
        return "invalid-utf8"


@dataclass
class InvalidResource(RestPath):
    data: str = ""

    @rest_path(None)
    def _not_found(cls, _: None) -> str:
        return "not_found"

    @rest_path(bool)
    def _flag(cls, valid: bool) -> str:
        if valid:
            return "path"
        msg = "invalid path parameters"
        raise UrlError(msg)


################################
#     In-process httpbin       #
################################


def _echo(request: httpx.Request) -> httpx.Response:
    data = request.content.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(data) if data else None
    except ValueError:
        parsed = None
    payload = {
        "args": dict(request.url.params),
        "data": data,
        "headers": {name.title(): value for name, value in request.headers.items()},
        "json": parsed,
        "method": request.method,
        "url": str(request.url),
    }
    return httpx.Response(200, json=payload, headers={"X-Request-Method": request.method})


async def httpbin_handler(request: httpx.Request) -> httpx.Response:
    r"""Answer a request the way httpbin.org does for the endpoints used
    in the tests.

    Args:
        request: The request sent by the client.

    Returns:
        The httpbin response. Unknown paths return 404.
    """
    path = request.url.path
    parts = path.strip("/").split("/")

    if path in METHOD_ENDPOINTS:
        if request.method != METHOD_ENDPOINTS[path]:
            return httpx.Response(405, text="Method Not Allowed")
        return _echo(request)
    if parts[0] == "anything":
        return _echo(request)
    if parts[0] == "status" and len(parts) == 2:
        status_code = int(parts[1])
        return httpx.Response(status_code, text=f"status {status_code}")
    if parts[0] == "delay" and len(parts) == 2:
        await asyncio.sleep(float(parts[1]))
        return _echo(request)
    if parts[0] == "base64" and len(parts) == 2:
        return httpx.Response(200, content=base64.urlsafe_b64decode(parts[1]))
    if parts[0] == "basic-auth" and len(parts) == 3:
        token = base64.b64encode(f"{parts[1]}:{parts[2]}".encode()).decode("ascii")
        if request.headers.get("Authorization") != f"Basic {token}":
            return httpx.Response(401)
        return httpx.Response(200, json={"authenticated": True, "user": parts[1]})
    if parts[0] == "invalid-utf8":
        return httpx.Response(200, content=b'{"text": "a\xffb"}')
    return httpx.Response(404, text="Not Found")


class RequestRecorder:
    r"""Mock transport handler recording the requests it receives.

    Args:
        status_code: The status code of every response.
        json_body: The JSON body of every response.
    """

    def __init__(self, status_code: int = 200, json_body: Any = None) -> None:
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._json_body = {} if json_body is None else json_body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, json=self._json_body)

    @property
    def last(self) -> httpx.Request:
        r"""The last recorded request."""
        return self.requests[-1]


class StaticResolver(Resolver):
    r"""Resolver returning fixed addresses and recording the lookups.

    Args:
        addresses: The addresses returned for every host name.
    """

    def __init__(self, addresses: list[str] | None = None) -> None:
        self.addresses = ["10.0.0.7"] if addresses is None else addresses
        self.lookups: list[tuple[str, int]] = []

    async def resolve(self, name: str, port: int) -> list[str]:
        self.lookups.append((name, port))
        return self.addresses
