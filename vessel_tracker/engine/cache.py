"""TTL Cache - in-process vessel payload store

Storage and freshness are kept apart: get() returns an entry whatever its age
and the caller decides with is_fresh(). Stale entries are not evicted, they are
ignored on lookup and only dropped by clear().
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from vessel_tracker.core.logging import logger

DEFAULT_TTL = timedelta(minutes=5)
CACHE_KEY_PREFIX = "vessel_"


def cache_key(imo: object) -> str:
    """Cache key for an identifier ("vessel_" + imo)"""
    return f"{CACHE_KEY_PREFIX}{imo}"


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    stored_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.stored_at


class TTLCache:
    """Process-wide key -> (payload, stored_at) store

    Usage:
        cache = TTLCache(ttl=timedelta(minutes=5))
        cache.put("vessel_1234567", payload, now)

        entry = cache.get("vessel_1234567")
        if entry and cache.is_fresh(entry, now):
            ...
    """

    def __init__(self, ttl: timedelta = DEFAULT_TTL):
        if ttl <= timedelta(0):
            raise ValueError(f"ttl must be positive: {ttl}")
        self.ttl = ttl
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, payload: Any, now: datetime) -> CacheEntry:
        """Store payload under key, overwriting any previous entry"""
        entry = CacheEntry(key=key, payload=payload, stored_at=now)
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"[CACHE] Stored key={key}")
        return entry

    def clear(self) -> int:
        """Drop every entry

        Returns:
            int: number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"[CACHE] Cleared {count} entries")
        return count

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def is_fresh(self, entry: CacheEntry, now: datetime) -> bool:
        """An entry is fresh while now - stored_at < ttl"""
        return entry.age(now) < self.ttl
