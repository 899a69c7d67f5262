"""Shared fixtures for chunkcache tests."""

from typing import Any, Dict, Iterable, List, Tuple

import pytest

from chunkcache import ChunkedStore, MemoryBackend, StoreConfig


class RecordingBackend(MemoryBackend):
    """MemoryBackend that records every write and can be told to fail some."""

    def __init__(self, *args, fail_suffixes: Iterable[str] = (), **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_suffixes = tuple(fail_suffixes)
        self.writes: List[Tuple[str, Dict[str, Any]]] = []
        self.reads: List[str] = []
        self.multi_reads: List[List[str]] = []

    def write(self, key, value, **options):
        self.writes.append((key, dict(options)))
        if self.fail_suffixes and key.endswith(self.fail_suffixes):
            return False
        return super().write(key, value, **options)

    def read(self, key):
        self.reads.append(key)
        return super().read(key)

    def read_multi(self, keys, **options):
        self.multi_reads.append(list(keys))
        return super().read_multi(keys, **options)


class ReversingBackend(MemoryBackend):
    """MemoryBackend whose read_multi returns results in reverse request order."""

    def read_multi(self, keys, **options):
        found = super().read_multi(keys, **options)
        return dict(reversed(list(found.items())))


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return ChunkedStore(backend)


@pytest.fixture
def small_config():
    """Pages of 1000 bytes, so multi-page values stay small in tests."""
    return StoreConfig(max_slice_size=1000)


@pytest.fixture
def small_store(backend, small_config):
    return ChunkedStore(backend, config=small_config)


@pytest.fixture
def recording_backend():
    return RecordingBackend()


@pytest.fixture
def failing_backend():
    """Factory for a RecordingBackend that rejects keys ending in the given suffixes."""

    def factory(*suffixes):
        return RecordingBackend(fail_suffixes=suffixes)

    return factory


@pytest.fixture
def reversing_backend():
    return ReversingBackend()
