"""
Page splitting and joining for chunkcache.

Layout for one logical key (see chunkcache.core.ids for key naming):
- page 0: the whole envelope, or a (page_count, token) metadata tuple
- pages 1..N: token (32 ASCII hex bytes) + next slice of the envelope,
  written with raw=True so the backend stores them verbatim

Page 0 is always written first. A reader accepts a multi-page value only if
every sub-page is present and carries the token recorded in page 0; anything
else is a miss.
"""

import logging
import math
from typing import Any, Dict, Iterator, List, Optional

from chunkcache.backends.base import CacheBackend, backend_namespace
from chunkcache.core.contracts import StoreConfig
from chunkcache.core.ids import TOKEN_BYTES, generate_token, page_keys, physical_key

logger = logging.getLogger(__name__)


def slice_capacity(logical_key: str, config: StoreConfig, namespace: str = "") -> int:
    """
    Calculate how many envelope bytes fit in one page.

    The key is stored on the same slab page as the value, so its length (and
    the namespace prefix the backend adds to it) counts against the item size.

    Args:
        logical_key: Caller-visible cache key
        config: Store configuration
        namespace: Key prefix added by the backend ("" if none)

    Returns:
        Positive number of envelope bytes per page
    """
    namespace_length = len(namespace.encode("utf-8")) + 1 if namespace else 0
    overhead = (
        config.item_header_size
        + config.token_size
        + len(logical_key.encode("utf-8"))
        + namespace_length
    )
    capacity = config.effective_slice_size - overhead
    if capacity <= 0:
        capacity = config.max_item_size - overhead
    if capacity <= 0:
        raise ValueError(
            f"Key {logical_key!r} leaves no room for data within max_item_size "
            f"{config.max_item_size}"
        )
    return capacity


def count_pages(envelope_size: int, capacity: int) -> int:
    """Number of pages needed for an envelope (at least 1)."""
    return max(1, math.ceil(envelope_size / capacity))


def split_envelope(envelope: bytes, capacity: int) -> Iterator[bytes]:
    """Yield consecutive slices of at most capacity bytes."""
    view = memoryview(envelope)
    for start in range(0, len(envelope), capacity):
        yield bytes(view[start : start + capacity])


class Pager:
    """
    Writes envelopes as pages and reassembles them.

    One pager serves one store; it holds no per-key state.
    """

    def __init__(self, backend: CacheBackend, config: StoreConfig):
        """
        Initialize pager.

        Args:
            backend: Cache backend receiving physical writes
            config: Store configuration
        """
        self.backend = backend
        self.config = config
        self.namespace = backend_namespace(backend)

    def key(self, logical_key: str, page_index: int) -> str:
        return physical_key(logical_key, self.config.format_version, page_index)

    def capacity(self, logical_key: str) -> int:
        return slice_capacity(logical_key, self.config, self.namespace)

    def write(self, logical_key: str, envelope: bytes, backend_options: Dict[str, Any]) -> bool:
        """
        Write an envelope as one or more pages.

        Args:
            logical_key: Caller-visible cache key
            envelope: Encoded envelope
            backend_options: Pass-through options for every backend write

        Returns:
            True only if every backend write succeeded
        """
        capacity = self.capacity(logical_key)
        pages = count_pages(len(envelope), capacity)

        if pages == 1:
            return bool(self.backend.write(self.key(logical_key, 0), envelope, **backend_options))

        # Metadata first: it invalidates the previous value for this key
        token = generate_token()
        meta_key = self.key(logical_key, 0)
        if not self.backend.write(meta_key, (pages, token), **backend_options):
            logger.debug("Backend rejected metadata page %s", meta_key)
            return False

        logger.debug(
            "Writing %s as %d pages of up to %d bytes (token %s)",
            logical_key,
            pages,
            capacity,
            token,
        )
        token_bytes = token.encode("ascii")
        page_options = dict(backend_options, raw=True)
        for page_index, chunk in enumerate(split_envelope(envelope, capacity), start=1):
            page_key = self.key(logical_key, page_index)
            if not self.backend.write(page_key, token_bytes + chunk, **page_options):
                logger.debug(
                    "Backend rejected page %s (%d of %d)", page_key, page_index, pages
                )
                return False
        return True

    def read(self, logical_key: str) -> Optional[bytes]:
        """
        Read and validate all pages of a key.

        Args:
            logical_key: Caller-visible cache key

        Returns:
            Envelope bytes, or None on a miss (absent, partial or mixed-token pages)
        """
        meta = self.backend.read(self.key(logical_key, 0))
        if meta is None:
            return None

        if isinstance(meta, (bytes, bytearray)):
            return bytes(meta)

        if not is_metadata_record(meta, self.config.token_size):
            logger.debug(
                "Unexpected record type %s on page 0 of %s", type(meta).__name__, logical_key
            )
            return None

        pages, token = meta
        keys = page_keys(logical_key, self.config.format_version, pages)
        found = self.backend.read_multi(keys, raw=True)
        # read_multi does not guarantee order; reorder by the requested keys
        records = [found.get(k) for k in keys]
        return self._join(logical_key, token, records)

    def _join(self, logical_key: str, token: str, records: List[Any]) -> Optional[bytes]:
        token_bytes = token.encode("ascii")
        token_size = len(token_bytes)
        parts = []
        for page_index, record in enumerate(records, start=1):
            if record is None:
                logger.debug("Page %d of %s is missing", page_index, logical_key)
                return None
            if not isinstance(record, (bytes, bytearray)) or record[:token_size] != token_bytes:
                logger.debug("Page %d of %s belongs to another write", page_index, logical_key)
                return None
            parts.append(bytes(record[token_size:]))
        return b"".join(parts)


def is_metadata_record(meta: Any, token_size: int = TOKEN_BYTES * 2) -> bool:
    """True for a (page_count >= 2, token) page-0 record with an ASCII token."""
    if not isinstance(meta, (tuple, list)) or len(meta) != 2:
        return False
    pages, token = meta
    return (
        isinstance(pages, int)
        and not isinstance(pages, bool)
        and pages >= 2
        and isinstance(token, str)
        and len(token) == token_size
        and token.isascii()
    )
