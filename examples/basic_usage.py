"""
Basic usage example for chunkcache.
"""

from chunkcache import MemoryBackend, StoreConfig, wrap
from chunkcache.storage.diagnostics import describe

# Wrap a backend with a 1 MiB item ceiling
print("Creating store...")
store = wrap(MemoryBackend(), config=StoreConfig(compress_limit=64 * 1024))

# Write a value far larger than one item
report = {"rows": [{"id": i, "name": f"customer-{i}"} for i in range(200_000)]}
print("\nWriting report...")
print(f"Written: {store.write('report', report, compress=True, algorithm='zstd', expires_in=300)}")

# Inspect its pages
print("\nPages:")
for page in describe(store, "report"):
    print(f"  {page.physical_key}: {page.size} bytes, token {page.token}")

# Read it back
print("\nReading...")
print(f"Rows: {len(store.read('report')['rows'])}")

# Fetch computes only on a miss
print("\nFetching...")
value = store.fetch("greeting", lambda: "hello", expires_in=60)
print(value)
