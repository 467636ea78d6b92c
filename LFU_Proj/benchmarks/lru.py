from cachetools import LRUCache as CacheToolsLRUCache
from typing import Any, Optional
from config import CONFIG
from metrics.monitor import MetricsMonitor

class LRUCache:
    """Least-recently-used baseline backed by cachetools."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self.cache = CacheToolsLRUCache(maxsize=max_size)
        self.monitor = MetricsMonitor(cpu_window_size=CONFIG["performance"]["cpu_window_size"])

    def reset(self) -> None:
        self.cache.clear()
        self.monitor.reset()

    def get(self, key: str) -> Optional[Any]:
        """Get a value from the cache, refreshing its recency on a hit."""
        try:
            value = self.cache[key]
            self.monitor.record_operation("get", key, True)
        except KeyError:
            value = None
            self.monitor.record_operation("get", key, False)
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()
        return value

    def put(self, key: str, value: Any) -> None:
        if key not in self.cache:
            self.monitor.record_insert(key)
        self.cache[key] = value
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()

    def size(self) -> int:
        return len(self.cache)

    def summary(self) -> dict:
        """Return cache performance summary."""
        return self.monitor.summary()
