r"""Execution of HTTP requests and classification of their outcome.

The request is sent through the httpx client, optionally raced against a
timer, and the outcome is mapped to the error taxonomy: timeout, transport
failure, non-success status, or a successful ``RawResponse``.
"""

from __future__ import annotations

__all__ = ["RawResponse", "execute_request"]

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

from restson.exceptions import HttpError, RequestTimeoutError, TransportError
from restson.utils.structured_logging import log_structured

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Response received from the server, before deserialization.

    Args:
        status_code: The HTTP status code.
        headers: The response headers.
        text: The response body decoded as UTF-8, invalid byte sequences
            being replaced.
    """

    status_code: int
    headers: httpx.Headers
    text: str

    @property
    def is_success(self) -> bool:
        """Whether the status code is 2xx."""
        return 200 <= self.status_code < 300


async def execute_request(
    client: httpx.AsyncClient,
    request: httpx.Request,
    *,
    timeout: float | None = None,
) -> RawResponse:
    """Send a request and classify the outcome.

    When a timeout is given, the send is raced against a timer. If the
    timer wins, the in-flight send is cancelled and its result is
    discarded.

    Args:
        client: The httpx client used to send the request.
        request: The request to send.
        timeout: Maximum seconds to wait for the whole response, or
            ``None`` to wait indefinitely.

    Returns:
        The successful response.

    Raises:
        RequestTimeoutError: If the timeout elapses first, or the
            transport reports a timeout.
        TransportError: If the transport fails.
        HttpError: If the server returns a non-success status.
    """
    logger.debug(f"{request.method} {request.url}")
    logger.debug(f"request headers: {request.headers}")

    start_time = time.monotonic()
    if timeout is None:
        response = await _send(client, request)
    else:
        try:
            response = await asyncio.wait_for(_send(client, request), timeout)
        except asyncio.TimeoutError as exc:
            msg = f"{request.method} request to {request.url} timed out after {timeout}s"
            raise RequestTimeoutError(msg) from exc

    log_structured(
        logger,
        logging.DEBUG,
        "request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code,
        elapsed_ms=round((time.monotonic() - start_time) * 1000, 3),
    )

    if not response.is_success:
        logger.error(f'server returned "{response.status_code}" error')
        raise HttpError(response.status_code, response.text)

    logger.debug(f"response headers: {response.headers}")
    logger.debug(f"response body: {response.text}")
    return response


async def _send(client: httpx.AsyncClient, request: httpx.Request) -> RawResponse:
    try:
        response = await client.send(request)
    except httpx.TimeoutException as exc:
        msg = f"{request.method} request to {request.url} timed out: {exc}"
        raise RequestTimeoutError(msg) from exc
    except httpx.RequestError as exc:
        msg = f"{request.method} request to {request.url} failed: {exc}"
        raise TransportError(msg) from exc

    return RawResponse(
        status_code=response.status_code,
        headers=response.headers,
        text=response.content.decode("utf-8", errors="replace"),
    )
