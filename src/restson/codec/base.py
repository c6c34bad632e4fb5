r"""Abstract base class for JSON codecs."""

from __future__ import annotations

__all__ = ["BaseCodec"]

from abc import ABC, abstractmethod
from typing import Any


class BaseCodec(ABC):
    """Abstract base class for JSON codecs.

    A codec serializes request data to a JSON string and deserializes
    response bodies into a target type. Implementations must report every
    failure with ``CodecError``.
    """

    @abstractmethod
    def encode(self, data: Any) -> str:
        """Serialize data to a JSON string.

        Args:
            data: The data to serialize.

        Returns:
            The JSON document.

        Raises:
            CodecError: If the data cannot be serialized.
        """

    @abstractmethod
    def decode(self, text: str, target: Any = None) -> Any:
        """Deserialize a JSON string into the target type.

        Args:
            text: The JSON document.
            target: The type to decode into. ``None`` returns the plain
                JSON value.

        Returns:
            The decoded value.

        Raises:
            CodecError: If the text is not valid JSON or does not match
                the target type.
        """
