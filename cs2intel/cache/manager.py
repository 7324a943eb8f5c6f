"""File-based cache manager.

Entries are stored as JSON documents under ``<cache_dir>/<category>/<key>.json``
together with the time they were written and their TTL, so expiry can be
checked on read without any index file.
"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cs2intel.constants import DEFAULT_CACHE_TTL

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


class CacheCategory(str, Enum):
    """Cache namespaces that may be cleared independently."""

    TOURNAMENTS = "tournaments"
    PLAYERS = "players"
    MATCHES = "matches"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]


def _category_name(category: str) -> str:
    return category.value if isinstance(category, Enum) else category


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheManager:
    """Key/category/TTL store backed by JSON files on disk."""

    def __init__(self, cache_dir: str | os.PathLike[str] | None = None) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir else None

    def init_app(self, app: Flask) -> None:
        """Bind the cache directory from the app config."""
        cache_dir = app.config.get("CACHE_DIR") or os.path.join(
            app.instance_path, "cache"
        )
        self.cache_dir = Path(cache_dir)
        app.extensions["cs2intel.cache"] = self

    @property
    def root(self) -> Path:
        if self.cache_dir is None:
            raise RuntimeError("Cache directory is not configured.")
        return self.cache_dir

    def _path(self, category: str, key: str) -> Path:
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key)
        return self.root / _category_name(category) / f"{safe_key}.json"

    def get(self, category: str, key: str) -> Any:
        """Return cached data, or None when missing or expired.

        Expired entries are deleted on read.
        """
        path = self._path(category, key)
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None

        if not isinstance(entry, dict) or not all(
            isinstance(entry.get(field), (int, float)) for field in ("cached_at", "ttl")
        ):
            logger.warning(f"Ignoring malformed cache entry {path}")
            return None

        if _now_ms() - entry["cached_at"] > entry["ttl"]:
            logger.debug(f"Cache entry expired: {_category_name(category)}/{key}")
            path.unlink(missing_ok=True)
            return None

        return entry.get("data")

    def set(
        self, category: str, key: str, data: Any, ttl: int = DEFAULT_CACHE_TTL
    ) -> None:
        """Store data under (category, key) for ``ttl`` milliseconds."""
        path = self._path(category, key)
        path.parent.mkdir(parents=True, exist_ok=True)
        entry = {"data": data, "cached_at": _now_ms(), "ttl": ttl}
        path.write_text(json.dumps(entry, indent=2), encoding="utf-8")

    def delete(self, category: str, key: str) -> None:
        self._path(category, key).unlink(missing_ok=True)

    def clear_category(self, category: str) -> None:
        """Remove every entry in a category."""
        category_path = self.root / _category_name(category)
        if not category_path.is_dir():
            return
        for file_path in category_path.iterdir():
            if file_path.is_file():
                file_path.unlink(missing_ok=True)
        logger.info(f"Cleared cache category: {_category_name(category)}")

    def clear_all(self) -> None:
        """Remove every entry in every category."""
        if not self.root.is_dir():
            return
        for category_path in self.root.iterdir():
            if category_path.is_dir():
                self.clear_category(category_path.name)

    def stats(self) -> dict[str, Any]:
        """Return per-category file counts and sizes in bytes."""
        categories = []
        total_files = 0
        total_size = 0

        if self.root.is_dir():
            for category_path in sorted(self.root.iterdir()):
                if not category_path.is_dir():
                    continue
                files = [p for p in category_path.iterdir() if p.is_file()]
                size = sum(p.stat().st_size for p in files)
                categories.append(
                    {"name": category_path.name, "files": len(files), "size": size}
                )
                total_files += len(files)
                total_size += size

        return {
            "categories": categories,
            "total_files": total_files,
            "total_size": total_size,
        }
