r"""Construction of the outgoing HTTP requests.

This module turns a resolved REST path, optional query parameters and an
optional serialized body into an ``httpx.Request``, applying the client
configuration (authentication, custom headers, null-body policy). No
network I/O happens here.
"""

from __future__ import annotations

__all__ = ["Query", "build_request", "build_url"]

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import httpx

from restson.core.config import DEFAULT_USER_AGENT, JSON_CONTENT_TYPE
from restson.exceptions import RequestError, UrlError

if TYPE_CHECKING:
    from restson.core.config import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)

# Query parameters as (name, value) pairs; order is kept and names may repeat
Query = Sequence[tuple[str, str]]

NULL_BODY = "null"


def build_url(base_url: httpx.URL, path: str, query: Query | None = None) -> httpx.URL:
    """Join a REST path to the base URL and append query parameters.

    The path is joined with RFC 3986 semantics, so the base URL must end
    with ``/`` for the path to be appended to its last segment instead of
    replacing it.

    Args:
        base_url: The client base URL.
        path: The REST path returned by the resource type.
        query: Optional query parameters, appended in order.

    Returns:
        The request URL.

    Raises:
        UrlError: If the joined URL is invalid.

    Example:
        ```pycon
        >>> import httpx
        >>> from restson.core.request_builder import build_url
        >>> build_url(httpx.URL("http://x.test/"), "anything", [("a", "2"), ("b", "abcd")])
        URL('http://x.test/anything?a=2&b=abcd')
        >>> build_url(httpx.URL("http://x.test/api/"), "test")
        URL('http://x.test/api/test')

        ```
    """
    try:
        url = base_url.join(path)
        if query:
            params = url.params
            for name, value in query:
                params = params.add(name, value)
            url = url.copy_with(params=params)
    except httpx.InvalidURL as exc:
        msg = f"failed to build URL from {str(base_url)!r} and {path!r}: {exc}"
        raise UrlError(msg) from exc
    return url


def build_request(
    config: ClientConfig,
    method: str,
    path: str,
    query: Query | None = None,
    body: str | None = None,
) -> httpx.Request:
    """Build the request for one REST call.

    Headers are applied in this order, later ones winning: content
    headers of the JSON body, ``Authorization``, custom headers, and
    finally the default ``User-Agent`` if none was set.

    Args:
        config: The configuration snapshot of the client.
        method: The HTTP method.
        path: The REST path returned by the resource type.
        query: Optional query parameters.
        body: Optional serialized JSON body. A ``"null"`` body is dropped
            when ``config.send_null_body`` is false.

    Returns:
        The request, ready to be sent.

    Raises:
        UrlError: If the request URL is invalid.
        RequestError: If the headers cannot be composed.
    """
    url = build_url(config.base_url, path, query)
    headers = httpx.Headers()
    content = None

    if body is not None and (config.send_null_body or body != NULL_BODY):
        content = body.encode("utf-8")
        headers["Content-Length"] = str(len(content))
        headers["Content-Type"] = JSON_CONTENT_TYPE
        logger.debug(f"set request body: {body}")

    if config.auth is not None:
        headers["Authorization"] = config.auth

    for name, value in config.headers.multi_items():
        headers[name] = value

    if "User-Agent" not in headers:
        headers["User-Agent"] = DEFAULT_USER_AGENT

    try:
        request = httpx.Request(method, url, headers=headers, content=content)
    except (TypeError, ValueError) as exc:
        msg = f"failed to build {method} request to {url}: {exc}"
        raise RequestError(msg) from exc

    if content is None and "Content-Length" not in headers:
        # no body: the request carries no framing header for it
        request.headers.pop("Content-Length", None)
    return request
