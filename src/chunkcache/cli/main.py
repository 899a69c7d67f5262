"""
Main CLI entry point for chunkcache.
"""

import logging
from pathlib import Path

import click

from chunkcache.backends.memory import MemoryBackend
from chunkcache.core.contracts import StoreConfig
from chunkcache.storage.diagnostics import describe, is_consistent
from chunkcache.storage.pages import count_pages, slice_capacity
from chunkcache.storage.store import ChunkedStore


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log page-level activity")
def cli(verbose):
    """chunkcache - Store values larger than a cache's item size limit."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("key", type=str)
@click.option("--size", required=True, type=click.IntRange(min=1), help="Envelope size in bytes")
@click.option("--namespace", default="", help="Key prefix added by the backend")
@click.option("--max-slice-size", default=None, type=click.IntRange(min=1), help="Page size cap")
def plan(key, size, namespace, max_slice_size):
    """Show how an envelope of SIZE bytes would be paged for KEY."""
    config = StoreConfig()
    if max_slice_size is not None:
        config = StoreConfig(max_slice_size=max_slice_size)
    capacity = slice_capacity(key, config, namespace)
    pages = count_pages(size, capacity)
    click.echo(f"Slice capacity: {capacity} bytes")
    if pages == 1:
        click.echo("Pages: 1 (stored inline on page 0)")
    else:
        click.echo(f"Pages: {pages} (+ metadata on page 0)")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", default=None, help="Logical key (default: file name)")
@click.option("--compress", is_flag=True, help="Compress payloads above the limit")
@click.option("--algorithm", default="zlib", type=click.Choice(["zlib", "zstd"]))
@click.option("--max-slice-size", default=None, type=click.IntRange(min=1), help="Page size cap")
def roundtrip(path, key, compress, algorithm, max_slice_size):
    """Write a file through an in-memory store and read it back."""
    data = Path(path).read_bytes()
    key = key or Path(path).name

    store = ChunkedStore(MemoryBackend(), max_slice_size=max_slice_size)
    if not store.write(key, data, raw=True, compress=compress, algorithm=algorithm):
        raise click.ClickException(f"Backend rejected {key}")

    reports = describe(store, key)
    for report in reports:
        status = "ok" if report.present else "missing"
        line = f"{report.physical_key}: {status}"
        if report.size:
            line += f", {report.size} bytes"
        if report.checksum:
            line += f", xxh64={report.checksum}"
        click.echo(line)

    matches = store.read(key) == data
    click.echo(f"Consistent: {'yes' if is_consistent(reports) else 'no'}")
    click.echo(f"Round-trip: {'ok' if matches else 'MISMATCH'}")
    if not matches:
        raise click.ClickException(f"Read back of {key} did not match the file")


if __name__ == "__main__":
    cli()
