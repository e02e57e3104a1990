"""On-disk manifest cache."""

from .store import CacheStore, content_cache_key, now_ms

__all__ = ["CacheStore", "content_cache_key", "now_ms"]
