from typing import Any, Optional
from config import CONFIG
from lfu_cache.errors import KeyAlreadyExistsError, KeyNotFoundError
from lfu_cache.lfu_cache import LFUCache
from metrics.monitor import MetricsMonitor

class LFUCacheWrapper:
    """Adapts LFUCache to the get/put protocol used by the benchmark harness."""

    def __init__(self, max_size: int, evict_factor: Optional[float] = None):
        self.max_size = max_size
        self.evict_factor = CONFIG["evict_factor"] if evict_factor is None else evict_factor
        self.monitor = MetricsMonitor(cpu_window_size=CONFIG["performance"]["cpu_window_size"])
        self.cache = LFUCache(max_size, self.evict_factor, monitor=self.monitor)

    def reset(self) -> None:
        """Drop every entry by starting over with an empty cache."""
        self.cache = LFUCache(self.max_size, self.evict_factor, monitor=self.monitor)
        self.monitor.reset()

    def get(self, key: str) -> Optional[Any]:
        """Get a value from the cache, counting the access on a hit."""
        try:
            value = self.cache.access(key)
        except KeyNotFoundError:
            value = None
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()
        return value

    def put(self, key: str, value: Any) -> None:
        """Insert a new key. Resident keys keep their value and frequency."""
        try:
            self.cache.insert(key, value)
        except KeyAlreadyExistsError:
            pass
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()

    def size(self) -> int:
        return self.cache.size()

    def summary(self) -> dict:
        """Return cache performance summary."""
        return self.monitor.summary()
