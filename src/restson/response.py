r"""Response type returned by the REST client verbs."""

from __future__ import annotations

__all__ = ["Response"]

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

T = TypeVar("T")


@dataclass(frozen=True)
class Response(Generic[T]):
    """Deserialized body and headers of a successful response.

    Attribute lookups that the response itself does not define fall
    through to the body, so ``response.url`` reads ``response.body.url``.
    The response attributes ``body`` and ``headers`` and the method
    ``into_inner`` shadow body fields with the same name: a body field
    named ``headers`` is read with ``response.body.headers``.

    Args:
        body: The deserialized body, or ``None`` for verbs that discard
            the response body.
        headers: The headers sent by the server.

    Example:
        ```pycon
        >>> import httpx
        >>> from restson import Response
        >>> response = Response(body={"id": 1}, headers=httpx.Headers({"X-Id": "1"}))
        >>> response.into_inner()
        {'id': 1}
        >>> response.headers["x-id"]
        '1'

        ```
    """

    body: T
    headers: httpx.Headers

    def into_inner(self) -> T:
        """Return the deserialized body."""
        return self.body

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or "body" not in self.__dict__:
            raise AttributeError(name)
        return getattr(self.__dict__["body"], name)
