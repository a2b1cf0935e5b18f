#!/usr/bin/env python3
"""
Cache Manager
=============
In-memory memoization of extraction results per callable.

A callable's signature and comment text are fixed at load time, so entries
never expire and are immutable once stored.
"""

from __future__ import annotations

import hashlib
import logging
from threading import Lock
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from extraction.base import WireSchema

logger = logging.getLogger("query_extractor.cache")

Entry = Tuple[Tuple[str, "WireSchema"], ...]


class ExtractionCache:
    """
    Thread-safe cache of extraction results.

    Cache Strategy:
    - Cache key: SHA256(source identity + callable reference + sorted path names)
    - Storage: dict of immutable (name, WireSchema) tuples
    - Readers get a fresh dict on every hit

    Usage:
        cache = ExtractionCache()
        key = cache.make_key("python:app.py", "UserController.index", {"id"})

        schemas = cache.get(key)
        if schemas is None:
            cache.set(key, extract(...))
    """

    def __init__(self):
        self._entries: Dict[str, Entry] = {}
        self._lock = Lock()

        # Statistics
        self.stats = {"hits": 0, "misses": 0, "sets": 0}

    @staticmethod
    def make_key(source_identity: str, reference: str, path_parameter_names: Iterable[str] = ()) -> str:
        """Build the cache key of a (callable, path-parameter set) pair."""
        path_part = ",".join(sorted(set(path_parameter_names)))
        raw = f"{source_identity}\x00{reference}\x00{path_part}"
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def get(self, key: str) -> Optional[Dict[str, WireSchema]]:
        """Return a copy of the cached mapping, or None on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats["misses"] += 1
                return None
            self.stats["hits"] += 1

        logger.debug(f"Cache hit: {key[:12]}")
        return dict(entry)

    def set(self, key: str, schemas: Dict[str, WireSchema]) -> None:
        """Store a result. The first stored entry for a key is kept."""
        with self._lock:
            if key in self._entries:
                return
            self._entries[key] = tuple(schemas.items())
            self.stats["sets"] += 1

    def clear(self) -> int:
        """Drop every entry, returning how many were removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} cache entries")
        return count

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            stats = dict(self.stats)
            stats["entries"] = len(self._entries)
        total = stats["hits"] + stats["misses"]
        stats["hit_rate_percent"] = round(stats["hits"] * 100 / total) if total else 0
        return stats

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
