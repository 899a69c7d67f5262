"""
Exceptions raised by chunkcache.

Integrity failures (missing pages, token mismatches) are never raised; they
are reported as cache misses. Only decode-stage failures surface as errors.
"""


class DecodeError(ValueError):
    """Stored bytes could not be decoded (bad flag, decompression or deserialization)."""
