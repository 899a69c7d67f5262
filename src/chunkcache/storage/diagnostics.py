"""
Page-level diagnostics for chunkcache.

Lists every physical page of a logical key with its size, token and an xxh64
checksum, so partially evicted or overwritten values can be told apart.
"""

from typing import List

import xxhash

from chunkcache.core.contracts import PageReport
from chunkcache.core.ids import page_keys
from chunkcache.storage.pages import is_metadata_record
from chunkcache.storage.store import ChunkedStore


def checksum(data: bytes) -> str:
    """xxh64 hex digest of stored bytes."""
    return xxhash.xxh64(data).hexdigest()


def describe(store: ChunkedStore, key: str) -> List[PageReport]:
    """
    Describe the physical pages of a logical key.

    Args:
        store: Chunked store to inspect
        key: Logical cache key

    Returns:
        One PageReport for page 0, plus one per sub-page it references
    """
    meta_key = store.pager.key(key, 0)
    meta = store.backend.read(meta_key)
    if meta is None:
        return [PageReport(physical_key=meta_key, page_index=0, present=False)]

    if isinstance(meta, (bytes, bytearray)):
        return [
            PageReport(
                physical_key=meta_key,
                page_index=0,
                present=True,
                size=len(meta),
                checksum=checksum(bytes(meta)),
            )
        ]

    if not is_metadata_record(meta, store.config.token_size):
        return [PageReport(physical_key=meta_key, page_index=0, present=True)]

    pages, token = meta
    reports = [PageReport(physical_key=meta_key, page_index=0, present=True, token=token)]

    token_size = store.config.token_size
    keys = page_keys(key, store.config.format_version, pages)
    found = store.backend.read_multi(keys, raw=True)
    for page_index, page_key in enumerate(keys, start=1):
        record = found.get(page_key)
        if record is None:
            reports.append(PageReport(physical_key=page_key, page_index=page_index, present=False))
            continue
        record = bytes(record)
        reports.append(
            PageReport(
                physical_key=page_key,
                page_index=page_index,
                present=True,
                size=len(record),
                token=record[:token_size].decode("ascii", errors="replace"),
                checksum=checksum(record),
            )
        )
    return reports


def is_consistent(reports: List[PageReport]) -> bool:
    """True if every referenced page is present and carries the page-0 token."""
    if not reports or not reports[0].present:
        return False
    expected = reports[0].token
    if expected is None:
        return True
    return all(r.present and r.token == expected for r in reports[1:])
