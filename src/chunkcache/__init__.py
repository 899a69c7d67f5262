"""
chunkcache - Store values larger than a cache backend's item size limit.
"""

from chunkcache.backends import CacheBackend, MemoryBackend
from chunkcache.core import DecodeError, StoreConfig
from chunkcache.storage import ChunkedStore, JsonSerializer, PickleSerializer

__version__ = "0.1.0"


def wrap(backend: CacheBackend, **kwargs) -> ChunkedStore:
    """Wrap a backend in a ChunkedStore (kwargs go to ChunkedStore)."""
    return ChunkedStore(backend, **kwargs)


__all__ = [
    "wrap",
    "ChunkedStore",
    "CacheBackend",
    "MemoryBackend",
    "StoreConfig",
    "DecodeError",
    "PickleSerializer",
    "JsonSerializer",
]
