"""
amlich.cache
------------
Bounded memoization of solar -> lunar conversion.

The converter is a pure function, so entries never go stale: a key is only
ever dropped by FIFO eviction (oldest inserted first, lookups do not
refresh an entry) or by an explicit clear(). Failed conversions are never
stored; the error reaches the caller on every call.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, List

from .core.engine import CalendarEngine
from .core.time import date_key
from .core.types import LunarDate

logger = logging.getLogger(__name__)

DEFAULT_CACHE_CAPACITY = 1000


class LunarDateCache:
    """
    Get-or-compute cache in front of one engine.

    The whole get-or-compute-and-insert sequence runs under a lock, so one
    instance may be shared between threads.
    """
    def __init__(self, engine: CalendarEngine, *, capacity: int = DEFAULT_CACHE_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self.engine = engine
        self.capacity = capacity
        self._entries: "OrderedDict[str, LunarDate]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(day: int, month: int, year: int) -> str:
        return date_key(day, month, year)

    def get(self, day: int, month: int, year: int) -> LunarDate:
        k = self.key(day, month, year)
        with self._lock:
            hit = self._entries.get(k)
            if hit is not None:
                self.hits += 1
                return hit

            value = self.engine.from_solar(day, month, year)
            self.misses += 1
            if len(self._entries) >= self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("lunar cache full (%d), evicted %s", self.capacity, evicted)
            self._entries[k] = value
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[str]:
        """Cached keys, oldest insertion first."""
        with self._lock:
            return list(self._entries)

    def info(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "engine": self.engine.id.name,
                "capacity": self.capacity,
                "size": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
            }
