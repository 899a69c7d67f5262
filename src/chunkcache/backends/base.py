"""
Backend capability interface for chunkcache.

A backend stores opaque values under string keys and may reject items above
its size ceiling by returning False from write. Values written with
``raw=True`` must be stored and returned verbatim.
"""

from typing import Any, Dict, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Operations a cache backend must provide."""

    def write(self, key: str, value: Any, **options: Any) -> bool:
        """Store a value; False signals a visible failure (no exception)."""
        ...

    def read(self, key: str) -> Optional[Any]:
        """Return the stored value or None."""
        ...

    def read_multi(self, keys: Iterable[str], **options: Any) -> Dict[str, Any]:
        """Return found values keyed by key; order is not guaranteed."""
        ...

    def exist(self, key: str) -> bool:
        """Check whether a key is present."""
        ...

    def delete(self, key: str) -> Any:
        """Remove a key; the result is backend-defined."""
        ...


def backend_namespace(backend: Any) -> str:
    """
    Key prefix the backend adds to every key ("" if none).

    Used only to account for key length in page sizing.
    """
    namespace = getattr(backend, "namespace", None)
    return namespace or ""
