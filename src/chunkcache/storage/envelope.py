"""
Envelope codec for chunkcache.

Envelope format:
- 1 byte: flag bitmask rendered as a single base-32 digit ("0"-"9", "a"-"v")
- remaining bytes: payload (serializer output or raw bytes), optionally compressed

Decoding reverses the steps in strict order: flag, decompress, deserialize.
"""

import logging
from typing import Any

from chunkcache.core.contracts import StoreConfig, WriteOptions
from chunkcache.core.errors import DecodeError
from chunkcache.storage.compression import compress_data, decompress_data
from chunkcache.storage.serializers import Serializer

logger = logging.getLogger(__name__)

NORMAL = 0
COMPRESSED = 1
RAW = 2
KNOWN_FLAGS = RAW | COMPRESSED
FLAG_DIGITS = "0123456789abcdefghijklmnopqrstuv"


def to_raw_bytes(value: Any) -> bytes:
    """
    Canonical byte form of a value written with raw=True.

    bytes-like values are kept, strings are UTF-8 encoded, anything else is
    rendered with str() first.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if not isinstance(value, str):
        value = str(value)
    return value.encode("utf-8")


def should_compress(payload: bytes, options: WriteOptions, config: StoreConfig) -> bool:
    """Compression runs only on request and only above the size threshold."""
    if not options.compress:
        return False
    limit = options.compress_limit if options.compress_limit is not None else config.compress_limit
    return len(payload) > limit


def encode(value: Any, options: WriteOptions, config: StoreConfig, serializer: Serializer) -> bytes:
    """
    Encode a value into an envelope.

    Args:
        value: Value to store
        options: Write options (raw, compress, compress_limit, algorithm)
        config: Store configuration
        serializer: Serializer used unless options.raw is set

    Returns:
        Envelope bytes
    """
    flag = NORMAL

    if options.raw:
        flag |= RAW
        payload = to_raw_bytes(value)
    else:
        payload = serializer.dumps(value)

    if should_compress(payload, options, config):
        algorithm = options.algorithm or config.default_algorithm
        original_size = len(payload)
        payload = compress_data(payload, algorithm=algorithm, level=config.zstd_level)
        flag |= COMPRESSED
        logger.debug(
            "Compressed payload with %s: %d -> %d bytes", algorithm, original_size, len(payload)
        )

    return FLAG_DIGITS[flag].encode("ascii") + payload


def decode(envelope: bytes, serializer: Serializer) -> Any:
    """
    Decode an envelope back into a value.

    Args:
        envelope: Envelope bytes
        serializer: Serializer used unless the RAW flag is set

    Returns:
        Decoded value (bytes for RAW envelopes)

    Raises:
        DecodeError: If the flag, compressed payload or serialized payload is malformed
    """
    if not envelope:
        raise DecodeError("Empty envelope")

    flag_digit = chr(envelope[0])
    flag = FLAG_DIGITS.find(flag_digit)
    if flag < 0 or flag & ~KNOWN_FLAGS:
        raise DecodeError(f"Invalid envelope flag {flag_digit!r}")

    payload = bytes(envelope[1:])
    if flag & COMPRESSED == COMPRESSED:
        payload = decompress_data(payload)
    if flag & RAW != RAW:
        return serializer.loads(payload)
    return payload
