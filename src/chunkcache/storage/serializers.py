"""
Object serializers for chunkcache.

Any object with ``dumps(value) -> bytes`` and ``loads(bytes) -> value`` can be
passed to a store; PickleSerializer is the default.
"""

import json
import pickle
from typing import Any, Protocol, runtime_checkable

from chunkcache.core.errors import DecodeError


@runtime_checkable
class Serializer(Protocol):
    """Round-trips Python values through bytes."""

    def dumps(self, value: Any) -> bytes: ...

    def loads(self, data: bytes) -> Any: ...


class PickleSerializer:
    """Default serializer; round-trips arbitrary composites, booleans and None."""

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def dumps(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def loads(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except Exception as exc:  # pickle raises a wide range of errors on bad input
            raise DecodeError(f"Cannot unpickle payload: {exc}") from exc


class JsonSerializer:
    """
    JSON serializer for values shared with non-Python readers.

    Only JSON-compatible values round-trip (tuples come back as lists).
    """

    def dumps(self, value: Any) -> bytes:
        return json.dumps(value, separators=(",", ":")).encode("utf-8")

    def loads(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"Cannot parse JSON payload: {exc}") from exc
