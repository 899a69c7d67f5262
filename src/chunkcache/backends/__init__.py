"""
Cache backends: capability interface and an in-memory reference backend.
"""

from chunkcache.backends.base import CacheBackend, backend_namespace
from chunkcache.backends.memory import MemoryBackend

__all__ = [
    "CacheBackend",
    "MemoryBackend",
    "backend_namespace",
]
