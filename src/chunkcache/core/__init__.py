"""
Core contracts, key generation and errors for chunkcache.
"""

from chunkcache.core.contracts import PageReport, StoreConfig, WriteOptions
from chunkcache.core.errors import DecodeError
from chunkcache.core.ids import generate_token, page_keys, physical_key

__all__ = [
    "StoreConfig",
    "WriteOptions",
    "PageReport",
    "DecodeError",
    "generate_token",
    "page_keys",
    "physical_key",
]
