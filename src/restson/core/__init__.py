r"""Core request pipeline shared by the async and blocking clients.

This package contains the configuration snapshot, validation helpers,
the request builder, the transport executor and the response decoder.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SEND_NULL_BODY",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "Query",
    "RawResponse",
    "build_request",
    "build_url",
    "decode_body",
    "execute_request",
    "validate_base_url",
    "validate_header_name",
    "validate_header_value",
    "validate_timeout",
]

from restson.core.config import (
    DEFAULT_SEND_NULL_BODY,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ClientConfig,
)
from restson.core.decoder import decode_body
from restson.core.executor import RawResponse, execute_request
from restson.core.request_builder import Query, build_request, build_url
from restson.core.validation import (
    validate_base_url,
    validate_header_name,
    validate_header_value,
    validate_timeout,
)
