"""
Chunked store for chunkcache.

Stores values of any size against a backend with a per-item size ceiling.

Write path: value -> envelope (flag + payload) -> page 0, or metadata on page 0
followed by token-tagged pages 1..N.
Read path: page 0 -> bulk read of pages 1..N -> token validation -> envelope
-> value. Integrity failures are misses; decode failures raise DecodeError.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from chunkcache.backends.base import CacheBackend
from chunkcache.core.contracts import StoreConfig, WriteOptions
from chunkcache.storage.envelope import decode, encode
from chunkcache.storage.pages import Pager
from chunkcache.storage.serializers import PickleSerializer, Serializer

logger = logging.getLogger(__name__)

_MISS = object()


class ChunkedStore:
    """
    Transparent large-value store on top of a size-limited cache backend.

    Concurrency: no locking. Page 0 is written before any sub-page, so readers
    observe a complete old value, a complete new value, or a miss.
    """

    def __init__(
        self,
        backend: CacheBackend,
        serializer: Optional[Serializer] = None,
        config: Optional[StoreConfig] = None,
        max_slice_size: Optional[int] = None,
    ):
        """
        Initialize chunked store.

        Args:
            backend: Cache backend (see chunkcache.backends.base.CacheBackend)
            serializer: Object serializer (default: PickleSerializer)
            config: Store configuration (default: StoreConfig())
            max_slice_size: Shortcut overriding config.max_slice_size
        """
        config = config or StoreConfig()
        if max_slice_size is not None:
            config = replace(config, max_slice_size=max_slice_size)

        self.backend = backend
        self.serializer = serializer or PickleSerializer()
        self.config = config
        self.pager = Pager(backend, config)

    def write(self, key: str, value: Any, **options: Any) -> bool:
        """
        Write a value.

        Args:
            key: Logical cache key
            value: Value to store
            **options: raw, compress, compress_limit, algorithm; anything else
                (e.g. expires_in) is passed through to the backend

        Returns:
            True if every backend write succeeded
        """
        return self._write(key, value, WriteOptions.from_kwargs(options))

    def _write(self, key: str, value: Any, write_options: WriteOptions) -> bool:
        envelope = encode(value, write_options, self.config, self.serializer)
        written = self.pager.write(key, envelope, write_options.backend_options())
        if not written:
            logger.warning("Write of %s failed (%d envelope bytes)", key, len(envelope))
        return written

    def read(self, key: str, default: Any = None) -> Any:
        """
        Read a value.

        Args:
            key: Logical cache key
            default: Returned on a miss

        Returns:
            Stored value, or default if absent, partial or inconsistent
        """
        value = self._read(key)
        return default if value is _MISS else value

    def fetch(self, key: str, producer: Callable[[], Any], **options: Any) -> Any:
        """
        Read a value, computing and caching it on a miss.

        The produced value is returned even when caching it fails.

        Args:
            key: Logical cache key
            producer: Zero-argument callable invoked once on a miss
            **options: Write options used when caching the produced value

        Returns:
            Cached or freshly produced value
        """
        write_options = WriteOptions.from_kwargs(options)
        value = self._read(key)
        if value is not _MISS:
            return value

        value = producer()
        self._write(key, value, write_options)
        return value

    def exist(self, key: str) -> bool:
        """
        Check whether page 0 of a key is present.

        Sub-pages are not checked, so a partially evicted value still reports True.
        """
        return bool(self.backend.exist(self.pager.key(key, 0)))

    def delete(self, key: str) -> Any:
        """
        Delete a value by removing page 0.

        Sub-pages are left for the backend to expire.

        Returns:
            Backend delete result
        """
        return self.backend.delete(self.pager.key(key, 0))

    def _read(self, key: str) -> Any:
        envelope = self.pager.read(key)
        if envelope is None:
            return _MISS
        return decode(envelope, self.serializer)
