# seo_links/cache.py
"""
File-backed page source cache for the fetcher.

- Storage: diskcache.Cache.
- Location: a visible folder in CWD by default, or the OS user cache dir
  (platformdirs) when configured as "os-default".
- Scope: 200 OK text/html pages only, unless store_errors is set.

The link engine never reads this cache; only the fetcher does.
"""
from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

import diskcache
from platformdirs import user_cache_dir

log = logging.getLogger(__name__)

OS_DEFAULT = "os-default"


@dataclasses.dataclass
class CacheConfig:
    enabled: bool = True
    directory: str = ".seo_links_cache"
    expire_seconds: int = 24 * 3600
    store_errors: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CacheConfig":
        return cls(
            enabled=bool(raw.get("enabled", True)),
            directory=str(raw.get("directory", ".seo_links_cache")),
            expire_seconds=int(raw.get("expire_seconds", 24 * 3600)),
            store_errors=bool(raw.get("store_errors", False)),
        )


class FileCache:
    """
    Thin wrapper over diskcache.
    Keys: requested page URLs.
    Values: dict with final_url, status, headers (lowercased keys), text, content_type.
    """

    def __init__(self, cfg: CacheConfig, app_name: str = "seo_links"):
        self.cfg = cfg
        self.app_name = app_name
        self._cache: Optional[diskcache.Cache] = None

        if not cfg.enabled:
            log.warning("Page cache disabled")
            return

        directory = cfg.directory
        if directory == OS_DEFAULT:
            directory = user_cache_dir(app_name, appauthor=False)
        log.info("Page cache at %s", directory)
        self._cache = diskcache.Cache(directory)

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()

    def __enter__(self) -> "FileCache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def directory(self) -> Optional[str]:
        if self._cache is None:
            return None
        return str(self._cache.directory)

    def _dir_size_bytes(self) -> int:
        d = self.directory
        if not d:
            return 0
        total = 0
        for p in Path(d).rglob("*"):
            try:
                if p.is_file():
                    total += p.stat().st_size
            except OSError:
                continue
        return total

    def stats(self) -> dict[str, int | str]:
        """Returns items, on-disk bytes and the absolute directory."""
        if self._cache is None:
            return {"items": 0, "bytes": 0, "directory": ""}
        return {
            "items": len(self._cache),
            "bytes": self._dir_size_bytes(),
            "directory": os.path.abspath(self.directory or ""),
        }

    def clear_all(self) -> None:
        if self._cache is None:
            log.warning("Page cache disabled, nothing to clear")
            return
        self._cache.clear()

    def get(self, url: str) -> Optional[dict[str, Any]]:
        if self._cache is None:
            return None
        return self._cache.get(url)

    def set_page(
        self,
        url: str,
        *,
        final_url: str,
        status: int,
        headers: Mapping[str, str],
        text: str,
        content_type: str,
    ) -> bool:
        """Store a fetched page. Returns False when the entry was not cached."""
        if self._cache is None:
            return False
        if status != 200 and not self.cfg.store_errors:
            log.info("Not caching %s, got status %d", url, status)
            return False
        self._cache.set(
            url,
            {
                "final_url": final_url,
                "status": status,
                "headers": {k.lower(): v for k, v in (headers or {}).items()},
                "text": text,
                "content_type": (content_type or "").lower(),
            },
            expire=self.cfg.expire_seconds,
        )
        return True
