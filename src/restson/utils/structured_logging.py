r"""Structured logging for machine-readable request logs.

The request executor emits one structured record per completed exchange
with the ``method``, ``url``, ``status_code`` and ``elapsed_ms`` fields. The
records are plain ``logging`` records, so they render as text with the
usual formatters and as JSON with ``StructuredFormatter``.

Example:
    Enable JSON logs for restson and tag them with a correlation ID:

    ```python
    import logging
    from restson.utils.structured_logging import (
        StructuredFormatter,
        clear_correlation_id,
        set_correlation_id,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("restson")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    set_correlation_id("job-42")
    try:
        client.get(Device, 1234)
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "restson_correlation_id", default=None
)

# Attributes every LogRecord has; anything else was passed with ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Example:
        ```pycon
        >>> from restson.utils.structured_logging import get_correlation_id
        >>> get_correlation_id() is None
        True

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID added to the structured records of the
    current context (thread or asyncio task).

    Args:
        correlation_id: The correlation ID, e.g. a request or trace ID.
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Formatter rendering each record as a JSON object.

    The object holds ``timestamp`` (ISO 8601, UTC), ``level``, ``logger``,
    ``message``, ``module``, ``function`` and ``line``, the correlation ID
    when one is set, the formatted exception if any, and every field given
    through ``extra``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from restson.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord(
        ...     "restson", logging.INFO, __file__, 1, "done", None, None
        ... )
        >>> record.status_code = 200
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["status_code"]
        ('done', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            data["correlation_id"] = correlation_id
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        data.update(
            {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}
        )
        return json.dumps(data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log a message with structured fields.

    Args:
        logger: The logger to use.
        level: The log level, e.g. ``logging.DEBUG``.
        message: The log message.
        **fields: Fields attached to the record.
    """
    logger.log(level, message, extra=fields)
