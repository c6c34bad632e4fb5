r"""JSON codec based on ``msgspec``, the accelerated backend."""

from __future__ import annotations

__all__ = ["MsgspecCodec"]

from typing import Any

import msgspec

from restson.codec.base import BaseCodec
from restson.exceptions import CodecError


class MsgspecCodec(BaseCodec):
    """JSON codec using ``msgspec.json``.

    It accepts the same target types as ``JsonCodec`` and validates while
    decoding instead of converting the parsed document afterwards.

    Example:
        ```pycon
        >>> from restson.codec import MsgspecCodec
        >>> codec = MsgspecCodec()
        >>> codec.encode({"a": [1, 2]})
        '{"a":[1,2]}'
        >>> codec.decode('{"a": [1, 2]}', dict[str, list[int]])
        {'a': [1, 2]}

        ```
    """

    def __init__(self) -> None:
        self._encoder = msgspec.json.Encoder()

    def encode(self, data: Any) -> str:
        try:
            return self._encoder.encode(data).decode("utf-8")
        except (msgspec.EncodeError, TypeError, ValueError) as exc:
            raise CodecError(str(exc)) from exc

    def decode(self, text: str, target: Any = None) -> Any:
        try:
            return msgspec.json.decode(text, type=Any if target is None else target)
        except Exception as exc:
            # Unresolvable annotations and errors raised while building the
            # target are decode failures too
            raise CodecError(str(exc)) from exc
