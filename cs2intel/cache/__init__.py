"""File-based cache store with per-entry TTL."""

from .manager import CacheCategory, CacheManager

__all__ = ["CacheCategory", "CacheManager"]
