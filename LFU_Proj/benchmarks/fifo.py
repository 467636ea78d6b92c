from collections import OrderedDict
from typing import Any, Optional
from config import CONFIG
from metrics.monitor import MetricsMonitor

class FIFOCache:
    """First-in-first-out baseline; hits never change eviction order."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self.cache: "OrderedDict[str, Any]" = OrderedDict()  # Insertion order
        self.monitor = MetricsMonitor(cpu_window_size=CONFIG["performance"]["cpu_window_size"])

    def reset(self) -> None:
        self.cache.clear()
        self.monitor.reset()

    def get(self, key: str) -> Optional[Any]:
        hit = key in self.cache
        self.monitor.record_operation("get", key, hit)
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()
        return self.cache[key] if hit else None

    def put(self, key: str, value: Any) -> None:
        """Put a value into the cache, dropping the oldest key when full."""
        if key in self.cache:
            # Updating keeps the original position
            self.cache[key] = value
        else:
            if len(self.cache) >= self.max_size:
                self.cache.popitem(last=False)
            self.cache[key] = value
            self.monitor.record_insert(key)
        self.monitor.record_memory_usage()
        self.monitor.record_cpu_usage()

    def size(self) -> int:
        return len(self.cache)

    def summary(self) -> dict:
        """Return cache performance summary."""
        return self.monitor.summary()
