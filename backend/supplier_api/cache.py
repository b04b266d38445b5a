"""
Thread-safe response caches for the supplier directory API.

Each named cache is registered once with its size and TTL bounds; routers
read and write through the shared ``app_cache`` registry.
"""
import threading

from cachetools import TTLCache

from .config.constants import CATEGORY_CACHE_TTL

CATEGORY_OVERVIEW_CACHE = "category_overview"


class AppCache:
    """Registry of named TTLCaches guarded by one lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._caches: dict[str, TTLCache] = {}

    def register(self, name: str, maxsize: int = 128, ttl: int = 600) -> TTLCache:
        """Create the named cache if it does not exist yet."""
        with self._lock:
            if name not in self._caches:
                self._caches[name] = TTLCache(maxsize=maxsize, ttl=ttl)
            return self._caches[name]

    def get(self, name: str, key: str):
        """Cached value, or None when absent or expired."""
        with self._lock:
            cache = self._caches.get(name)
            return cache.get(key) if cache is not None else None

    def set(self, name: str, key: str, value) -> None:
        """Store a value in a registered cache."""
        with self._lock:
            self._caches[name][key] = value

    def invalidate(self, name: str, key: str | None = None) -> None:
        """Drop one key, or the whole cache when ``key`` is None."""
        with self._lock:
            cache = self._caches.get(name)
            if cache is None:
                return
            if key is None:
                cache.clear()
            else:
                cache.pop(key, None)

    def stats(self) -> dict:
        """Size and bounds per cache, reported by /health."""
        with self._lock:
            return {
                name: {"size": len(cache), "maxsize": cache.maxsize, "ttl": cache.ttl}
                for name, cache in self._caches.items()
            }


app_cache = AppCache()
# Category pages are the only cached responses; one entry per slug per database
app_cache.register(CATEGORY_OVERVIEW_CACHE, maxsize=64, ttl=CATEGORY_CACHE_TTL)
