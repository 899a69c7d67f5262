"""
Storage layer: envelope codec, compression, paging and the chunked store.
"""

from chunkcache.storage.compression import compress_data, decompress_data
from chunkcache.storage.envelope import decode, encode
from chunkcache.storage.pages import (
    Pager,
    count_pages,
    is_metadata_record,
    slice_capacity,
    split_envelope,
)
from chunkcache.storage.serializers import JsonSerializer, PickleSerializer, Serializer
from chunkcache.storage.store import ChunkedStore

__all__ = [
    "ChunkedStore",
    "Pager",
    "slice_capacity",
    "count_pages",
    "split_envelope",
    "is_metadata_record",
    "encode",
    "decode",
    "compress_data",
    "decompress_data",
    "Serializer",
    "PickleSerializer",
    "JsonSerializer",
]
