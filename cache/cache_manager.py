"""
Unified Cache Manager - Three Tiers

Tier 1: Catalog cache (24 hour TTL)
  - The metric list changes rarely

Tier 2: Time-series cache (30 min TTL)
  - (metric, region) -> RawPoint list
  - Reduces calls to api.opencovid.ca

Tier 3: Completeness cache (30 min TTL)
  - metric -> date -> reported regions
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config import config


@dataclass
class CacheEntry:
    """Single cache entry with value and expiration."""
    value: Any
    expires_at: float


class LRUCache:
    """LRU cache with per-entry TTL."""

    def __init__(self, max_size: int = 1000):
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._max_size = max_size

    def get(self, key: str) -> Optional[Any]:
        """Get value if it exists and has not expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None

        if time.time() > entry.expires_at:
            del self._cache[key]
            return None

        # Most recently used goes last
        self._cache.move_to_end(key)
        return entry.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Set value with TTL in seconds."""
        if key in self._cache:
            del self._cache[key]
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

        self._cache[key] = CacheEntry(value=value, expires_at=time.time() + ttl)

    def clear(self) -> None:
        self._cache.clear()

    def stats(self) -> dict:
        now = time.time()
        valid = sum(1 for e in self._cache.values() if e.expires_at > now)
        return {
            'total_entries': len(self._cache),
            'valid_entries': valid,
            'expired_entries': len(self._cache) - valid,
            'max_size': self._max_size,
        }


class CacheManager:
    """Three-tier cache for catalog, time series and completeness data."""

    def __init__(self, max_size: int = config.max_cache_size):
        self._catalog = LRUCache(max_size=4)
        self._timeseries = LRUCache(max_size=max_size)
        self._completeness = LRUCache(max_size=max_size)

    # =========================================================================
    # Tier 1: Catalog
    # =========================================================================

    def get_catalog(self) -> Optional[list]:
        return self._catalog.get('catalog')

    def set_catalog(self, metrics: list) -> None:
        self._catalog.set('catalog', metrics, config.catalog_cache_ttl)

    # =========================================================================
    # Tier 2: Time series
    # =========================================================================

    def get_timeseries(self, metric: str, region: str) -> Optional[List]:
        """Get cached points for a (metric, region) pair, or None."""
        return self._timeseries.get(self._timeseries_key(metric, region))

    def set_timeseries(self, metric: str, region: str, points: List) -> None:
        self._timeseries.set(self._timeseries_key(metric, region), points, config.timeseries_cache_ttl)

    def _timeseries_key(self, metric: str, region: str) -> str:
        return f"ts:{metric}:{region.upper()}"

    # =========================================================================
    # Tier 3: Completeness
    # =========================================================================

    def get_completeness(self, metric: str) -> Optional[Dict]:
        return self._completeness.get(f"completeness:{metric}")

    def set_completeness(self, metric: str, records: Dict) -> None:
        self._completeness.set(f"completeness:{metric}", records, config.completeness_cache_ttl)

    # =========================================================================
    # Utilities
    # =========================================================================

    def stats(self) -> dict:
        """Get cache statistics for all tiers."""
        return {
            'catalog': self._catalog.stats(),
            'timeseries': self._timeseries.stats(),
            'completeness': self._completeness.stats(),
        }

    def clear_all(self) -> None:
        self._catalog.clear()
        self._timeseries.clear()
        self._completeness.clear()


# Global cache instance
cache_manager = CacheManager()
