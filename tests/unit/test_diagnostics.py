"""Tests for page-level diagnostics."""

import xxhash

from chunkcache import ChunkedStore, MemoryBackend, StoreConfig
from chunkcache.storage.diagnostics import describe, is_consistent


def _store():
    return ChunkedStore(MemoryBackend(), config=StoreConfig(max_slice_size=1000))


def test_describe_missing_key():
    """A missing key reports one absent page."""
    reports = describe(_store(), "a")

    assert len(reports) == 1
    assert reports[0].present is False
    assert is_consistent(reports) is False


def test_describe_single_page():
    """A single-page value reports its size and checksum."""
    store = _store()
    store.write("a", b"hello", raw=True)

    (report,) = describe(store, "a")

    assert report.physical_key == "a_4_0"
    assert report.size == 6
    assert report.checksum == xxhash.xxh64(b"2hello").hexdigest()
    assert is_consistent([report]) is True


def test_describe_multi_page():
    """Every sub-page is reported with the shared token."""
    store = _store()
    store.write("a", b"x" * 2000, raw=True)
    _, token = store.backend.read("a_4_0")

    reports = describe(store, "a")

    assert [r.page_index for r in reports] == [0, 1, 2, 3]
    assert all(r.token == token for r in reports)
    assert [r.size for r in reports[1:]] == [867 + 32, 867 + 32, 2001 - 2 * 867 + 32]
    assert is_consistent(reports) is True


def test_describe_flags_missing_and_foreign_pages():
    """Missing and foreign pages make the report inconsistent."""
    store = _store()
    store.write("a", b"x" * 2000, raw=True)
    store.backend.delete("a_4_1")
    store.backend.write("a_4_2", b"0" * 40, raw=True)

    reports = describe(store, "a")

    assert reports[1].present is False
    assert reports[2].token == "0" * 32
    assert is_consistent(reports) is False
