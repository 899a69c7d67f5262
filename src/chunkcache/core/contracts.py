"""
Core data structures (dataclasses) for chunkcache.

All configuration and per-call options are explicit, immutable dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

Algorithm = Literal["zlib", "zstd"]
ALGORITHMS = ("zlib", "zstd")

# Option names consumed by the store itself; everything else goes to the backend
RECOGNIZED_OPTIONS = ("raw", "compress", "compress_limit", "algorithm")


@dataclass(frozen=True)
class StoreConfig:
    """Configuration for page sizing, compression and the physical key layout."""

    # Backend limits
    max_item_size: int = 1024**2  # hard per-item ceiling of the backend
    item_header_size: int = 100  # per-item bookkeeping stored next to the value
    max_slice_size: int = 1024**2  # optional cap below max_item_size

    # Correlation token (16 random bytes rendered as hex)
    token_size: int = 32

    # Compression
    compress_limit: int = 16 * 1024
    default_algorithm: Algorithm = "zlib"
    zstd_level: int = 3

    # Bump whenever the on-wire layout changes
    format_version: int = 4

    def __post_init__(self):
        if self.max_item_size <= 0:
            raise ValueError(f"max_item_size must be positive, got {self.max_item_size}")
        if self.max_slice_size <= 0:
            raise ValueError(f"max_slice_size must be positive, got {self.max_slice_size}")
        if self.item_header_size < 0:
            raise ValueError(
                f"item_header_size must not be negative, got {self.item_header_size}"
            )
        if self.compress_limit < 0:
            raise ValueError(f"compress_limit must not be negative, got {self.compress_limit}")
        if self.default_algorithm not in ALGORITHMS:
            raise ValueError(
                f"Unknown compression algorithm {self.default_algorithm!r}, "
                f"expected one of {ALGORITHMS}"
            )

    @property
    def effective_slice_size(self) -> int:
        """Configured slice cap, never above the backend's hard ceiling."""
        return min(self.max_slice_size, self.max_item_size)


@dataclass(frozen=True)
class WriteOptions:
    """
    Options for a single write.

    Recognized fields drive encoding; ``backend`` holds pass-through options
    (e.g. ``expires_in``) forwarded verbatim to every backend write.
    """

    raw: bool = False
    compress: bool = False
    compress_limit: Optional[int] = None
    algorithm: Optional[Algorithm] = None
    backend: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.algorithm is not None and self.algorithm not in ALGORITHMS:
            raise ValueError(
                f"Unknown compression algorithm {self.algorithm!r}, expected one of {ALGORITHMS}"
            )

    @classmethod
    def from_kwargs(cls, options: Dict[str, Any]) -> "WriteOptions":
        """
        Split caller keyword arguments into recognized and pass-through options.

        Args:
            options: Keyword arguments given to a store operation

        Returns:
            WriteOptions object (the input dict is not modified)
        """
        passthrough = {k: v for k, v in options.items() if k not in RECOGNIZED_OPTIONS}
        return cls(
            raw=bool(options.get("raw", False)),
            compress=bool(options.get("compress", False)),
            compress_limit=options.get("compress_limit"),
            algorithm=options.get("algorithm"),
            backend=passthrough,
        )

    def backend_options(self, **overrides: Any) -> Dict[str, Any]:
        """Return a fresh copy of the pass-through options with overrides applied."""
        merged = dict(self.backend)
        merged.update(overrides)
        return merged


@dataclass(frozen=True)
class PageReport:
    """Diagnostic view of one physical page."""

    physical_key: str
    page_index: int
    present: bool
    size: int = 0  # bytes stored (payload plus token prefix for sub-pages)
    token: Optional[str] = None  # token carried by the record, if any
    checksum: Optional[str] = None  # xxh64 hex digest of the stored bytes
