"""
Compression utilities for chunkcache.

Two algorithms: zlib (DEFLATE, default) and zstd via the zstandard library.
The algorithm is never recorded in the envelope; decompress_data picks the
decoder from the payload's magic prefix, so readers configured for either
algorithm can read values written with the other.
"""

import zlib

import zstandard as zstd

from chunkcache.core.contracts import ALGORITHMS
from chunkcache.core.errors import DecodeError

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"


def compress_data(data: bytes, algorithm: str = "zlib", level: int = 3) -> bytes:
    """
    Compress data with the requested algorithm.

    Args:
        data: Data to compress
        algorithm: "zlib" or "zstd"
        level: zstd compression level (1-22, default 3); ignored for zlib

    Returns:
        Compressed data
    """
    if algorithm == "zstd":
        cctx = zstd.ZstdCompressor(level=level)
        return cctx.compress(data)
    if algorithm == "zlib":
        return zlib.compress(data)
    raise ValueError(f"Unknown compression algorithm {algorithm!r}, expected one of {ALGORITHMS}")


def decompress_data(compressed_data: bytes) -> bytes:
    """
    Decompress data, detecting the algorithm from its header.

    Args:
        compressed_data: Compressed data

    Returns:
        Decompressed data
    """
    try:
        if compressed_data[:4] == ZSTD_MAGIC:
            dctx = zstd.ZstdDecompressor()
            return dctx.decompress(compressed_data)
        return zlib.decompress(compressed_data)
    except (zlib.error, zstd.ZstdError) as exc:
        raise DecodeError(f"Cannot decompress payload: {exc}") from exc
