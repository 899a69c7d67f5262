"""
Key and token generation for chunkcache.

Key Policy:
- physical key: "{logical_key}_{format_version}_{page_index}"
  (page 0 always holds the metadata record or the whole envelope)
- correlation token: 16 random bytes rendered as 32 hex characters, generated
  fresh for every multi-page write and never reused
"""

import secrets
from typing import List

TOKEN_BYTES = 16


def physical_key(logical_key: str, format_version: int, page_index: int) -> str:
    """
    Derive the backend key for one page of a logical key.

    Args:
        logical_key: Caller-visible cache key
        format_version: On-wire layout version
        page_index: 0 for the metadata page, 1..N for sub-pages

    Returns:
        Physical key string
    """
    return f"{logical_key}_{format_version}_{page_index}"


def page_keys(logical_key: str, format_version: int, page_count: int) -> List[str]:
    """Physical keys for sub-pages 1..page_count, in index order."""
    return [physical_key(logical_key, format_version, i) for i in range(1, page_count + 1)]


def generate_token() -> str:
    """
    Generate a correlation token for a multi-page write.

    Returns:
        32-character hex string
    """
    return secrets.token_hex(TOKEN_BYTES)
