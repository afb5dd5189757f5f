"""
Image URL helpers: cross-origin checks and cache-busting timestamps.
"""

from __future__ import annotations

import time
from urllib.parse import urlsplit


def _origin(url: str) -> tuple[str, str, str] | None:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in {"http", "https"} or not parts.hostname:
        return None
    port = "" if parts.port is None else str(parts.port)
    return scheme, parts.hostname.lower(), port


def is_cross_origin_url(url: str, origin: str) -> bool:
    """
    True when an absolute http(s) URL points at a different origin than `origin`.
    Relative and non-http(s) URLs (data:, blob:) are same-origin.
    """
    target = _origin(url)
    if target is None:
        return False
    return target != _origin(origin)


def add_timestamp(url: str, timestamp: int | None = None) -> str:
    """Append a `timestamp=<ms>` query parameter so caches are bypassed."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}timestamp={timestamp}"
