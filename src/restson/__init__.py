r"""restson - Typed REST client with automatic JSON (de)serialization.

This package maps application-defined resource types to REST paths,
serializes request data to JSON and deserializes responses into typed
values. Built on top of the httpx library, it provides an asynchronous
client and a blocking facade with identical semantics.

Key Features:
    - Resource types declare their REST paths per parameter type
    - GET, POST, PUT, PATCH and DELETE, with query parameters
    - ``capture`` variants deserializing the body of write requests
    - HTTP Basic authentication, custom headers and request timeout
    - Optional suppression of ``null`` request bodies
    - Body-wash function applied before deserialization
    - Pluggable JSON codecs (standard library or msgspec) and DNS resolvers
    - Structured error taxonomy keeping status code and body

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
    ...     data = client.get(HttpBinAnything).into_inner()
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRestClient",
    "BaseCodec",
    "Builder",
    "ClientIOError",
    "DeserializeParseError",
    "GaiResolver",
    "HttpClientError",
    "HttpError",
    "InvalidValueError",
    "JsonCodec",
    "MsgspecCodec",
    "Query",
    "RequestError",
    "RequestTimeoutError",
    "Resolver",
    "Response",
    "RestClient",
    "RestPath",
    "RestsonError",
    "SerializeParseError",
    "TransportError",
    "UrlError",
    "__version__",
    "rest_path",
]

from importlib.metadata import PackageNotFoundError, version

from restson.builder import Builder
from restson.client import RestClient
from restson.client_async import AsyncRestClient
from restson.codec import BaseCodec, JsonCodec, MsgspecCodec
from restson.core.request_builder import Query
from restson.exceptions import (
    ClientIOError,
    DeserializeParseError,
    HttpClientError,
    HttpError,
    InvalidValueError,
    RequestError,
    RequestTimeoutError,
    RestsonError,
    SerializeParseError,
    TransportError,
    UrlError,
)
from restson.path import RestPath, rest_path
from restson.resolvers import GaiResolver, Resolver
from restson.response import Response

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
