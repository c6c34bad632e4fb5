r"""JSON codec based on the standard library ``json`` module."""

from __future__ import annotations

__all__ = ["JsonCodec"]

import json
from typing import Any

import msgspec

from restson.codec.base import BaseCodec
from restson.exceptions import CodecError


class JsonCodec(BaseCodec):
    """JSON codec using the standard library ``json`` module for the text
    format.

    Data is turned into builtin types with ``msgspec.to_builtins`` before
    encoding, so dataclasses, enums and datetimes are supported. Decoding
    parses the text with ``json.loads`` and converts the document into the
    target type with ``msgspec.convert``: dataclasses (unknown keys are
    ignored), ``msgspec.Struct`` types, containers, unions, ``Literal``
    and ``Enum`` types are validated and built recursively.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from restson.codec import JsonCodec
        >>> @dataclass
        ... class Point:
        ...     x: int
        ...     y: int
        ...
        >>> codec = JsonCodec()
        >>> codec.encode(Point(x=1, y=2))
        '{"x":1,"y":2}'
        >>> codec.decode('{"x": 1, "y": 2, "z": 3}', Point)
        Point(x=1, y=2)

        ```
    """

    def encode(self, data: Any) -> str:
        try:
            return json.dumps(
                msgspec.to_builtins(data),
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise CodecError(str(exc)) from exc

    def decode(self, text: str, target: Any = None) -> Any:
        try:
            value = json.loads(text)
        except ValueError as exc:
            raise CodecError(str(exc)) from exc
        try:
            return msgspec.convert(value, type=Any if target is None else target)
        except Exception as exc:
            # Unresolvable annotations and errors raised while building the
            # target are decode failures too
            raise CodecError(str(exc)) from exc
