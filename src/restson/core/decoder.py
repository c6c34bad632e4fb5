r"""Deserialization of response bodies into the caller's target type."""

from __future__ import annotations

__all__ = ["decode_body"]

from typing import TYPE_CHECKING, Any

from restson.exceptions import CodecError, DeserializeParseError

if TYPE_CHECKING:
    from restson.codec import BaseCodec


def decode_body(text: str, target: Any, codec: BaseCodec) -> Any:
    """Deserialize a response body.

    Args:
        text: The response body, after the body-wash function was applied.
        target: The type to decode into.
        codec: The JSON codec.

    Returns:
        The decoded body.

    Raises:
        DeserializeParseError: If the body does not decode into the
            target type. The error keeps the body text unchanged.
    """
    try:
        return codec.decode(text, target)
    except CodecError as exc:
        raise DeserializeParseError(str(exc), body=text) from exc
