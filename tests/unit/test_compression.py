"""
Tests for compression and algorithm detection.
"""

import zlib

import pytest

from chunkcache.core.errors import DecodeError
from chunkcache.storage.compression import ZSTD_MAGIC, compress_data, decompress_data

DATA = b"the quick brown fox jumps over the lazy dog " * 200


def test_zlib_is_default():
    """zlib is used when no algorithm is given."""
    compressed = compress_data(DATA)

    assert compressed == zlib.compress(DATA)
    assert decompress_data(compressed) == DATA


def test_zstd_frames_carry_magic():
    """zstd output starts with the zstd frame magic."""
    compressed = compress_data(DATA, algorithm="zstd")

    assert compressed.startswith(ZSTD_MAGIC)
    assert decompress_data(compressed) == DATA


def test_decompress_detects_algorithm_without_a_flag():
    """Either algorithm's output is readable by the same decompress call."""
    for algorithm in ("zlib", "zstd"):
        assert decompress_data(compress_data(DATA, algorithm=algorithm)) == DATA


def test_unknown_algorithm_rejected():
    """Unsupported algorithm names are rejected."""
    with pytest.raises(ValueError, match="Unknown compression algorithm"):
        compress_data(DATA, algorithm="lz4")


def test_corrupt_payload_raises_decode_error():
    """Corrupt zlib or zstd data raises DecodeError."""
    with pytest.raises(DecodeError):
        decompress_data(b"not compressed at all")

    with pytest.raises(DecodeError):
        decompress_data(ZSTD_MAGIC + b"\x00garbage")
