r"""JSON codecs used to serialize request data and deserialize responses.

Two interchangeable implementations are provided. ``JsonCodec`` (the
default) parses and writes JSON text with the standard library and converts
the document into the target type with ``msgspec.convert``. ``MsgspecCodec``
uses ``msgspec.json`` end to end for faster encoding and decoding. The codec is
selected when the client is built.
"""

from __future__ import annotations

__all__ = ["BaseCodec", "JsonCodec", "MsgspecCodec"]

from restson.codec.base import BaseCodec
from restson.codec.json_codec import JsonCodec
from restson.codec.msgspec_codec import MsgspecCodec
