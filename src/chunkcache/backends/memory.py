"""
In-process dictionary backend for chunkcache.

Behaves like a slab-allocated cache server as far as chunkcache cares:
non-raw values are pickled, raw values are stored verbatim, and any item
larger than max_item_size is rejected.
"""

import logging
import pickle
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class MemoryBackend:
    """Dictionary-backed cache with a per-item size ceiling and expiry."""

    def __init__(self, max_item_size: int = 1024**2, namespace: Optional[str] = None):
        """
        Initialize backend.

        Args:
            max_item_size: Largest stored item accepted, in bytes
            namespace: Optional key prefix (applied as "namespace:key")
        """
        self.max_item_size = max_item_size
        self.namespace = namespace
        # full key -> (stored bytes, is_raw, expires_at or None)
        self._data: Dict[str, Tuple[bytes, bool, Optional[float]]] = {}

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    def write(
        self,
        key: str,
        value: Any,
        raw: bool = False,
        expires_in: Optional[float] = None,
        **options: Any,
    ) -> bool:
        if raw:
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"raw values must be bytes, got {type(value).__name__}")
            stored = bytes(value)
        else:
            stored = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

        if len(stored) > self.max_item_size:
            logger.debug("Rejecting %s: %d bytes exceeds %d", key, len(stored), self.max_item_size)
            return False

        expires_at = time.monotonic() + expires_in if expires_in else None
        self._data[self._full_key(key)] = (stored, raw, expires_at)
        return True

    def _entry(self, key: str) -> Optional[Tuple[bytes, bool, Optional[float]]]:
        full_key = self._full_key(key)
        entry = self._data.get(full_key)
        if entry is None:
            return None
        expires_at = entry[2]
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._data[full_key]
            return None
        return entry

    def _load(self, key: str) -> Optional[Any]:
        entry = self._entry(key)
        if entry is None:
            return None
        stored, raw, _ = entry
        return stored if raw else pickle.loads(stored)

    def read(self, key: str) -> Optional[Any]:
        return self._load(key)

    def read_multi(self, keys: Iterable[str], **options: Any) -> Dict[str, Any]:
        found = {}
        for key in keys:
            value = self._load(key)
            if value is not None:
                found[key] = value
        return found

    def exist(self, key: str) -> bool:
        return self._entry(key) is not None

    def delete(self, key: str) -> bool:
        return self._data.pop(self._full_key(key), None) is not None

    def keys(self) -> List[str]:
        """Unexpired keys without the namespace prefix."""
        prefix = f"{self.namespace}:" if self.namespace else ""
        live = [k for k in list(self._data) if self._entry(k[len(prefix):]) is not None]
        return [k[len(prefix):] for k in live]

    def raw_size(self, key: str) -> Optional[int]:
        """Number of bytes stored for a key, or None if absent."""
        entry = self._entry(key)
        return None if entry is None else len(entry[0])
