from typing import Dict, List
from time import time
import psutil
import os

class MetricsMonitor:
    def __init__(self, cpu_window_size: int = 50):
        """Initialize the metrics monitor."""
        self.hits: int = 0
        self.misses: int = 0
        self.insertions: int = 0
        self.operations: List[Dict] = []
        self.evictions: List[Dict] = []  # One record per evicted key
        self.eviction_batches: List[Dict] = []  # One record per eviction pass
        self.memory_usage: List[Dict] = []
        self.cpu_usage: List[Dict] = []
        self.process = psutil.Process(os.getpid())
        self.cpu_window_size = cpu_window_size  # Measure CPU over this many operations
        self.cpu_window_ops = 0

    def record_operation(self, op_type: str, key, hit: bool) -> None:
        """Record a lookup and whether it hit."""
        if hit:
            self.hits += 1
        else:
            self.misses += 1
        self.operations.append({
            "time": time(),
            "type": op_type,
            "key": key,
            "hit": hit,
            "total_ops": self.hits + self.misses
        })

    def record_insert(self, key) -> None:
        self.insertions += 1

    def record_eviction(self, key, frequency: int, age: float) -> None:
        """Record a single evicted key with the frequency it had reached."""
        self.evictions.append({
            "time": time(),
            "key": key,
            "frequency": frequency,
            "age": age
        })

    def record_eviction_batch(self, count: int) -> None:
        self.eviction_batches.append({
            "time": time(),
            "count": count
        })

    def record_memory_usage(self) -> None:
        """Record current process memory usage."""
        memory_mb = self.process.memory_info().rss / 1024 / 1024  # Convert to MB
        self.memory_usage.append({
            "time": time(),
            "memory_mb": memory_mb
        })

    def record_cpu_usage(self) -> None:
        """Record process CPU usage, sampled once per window of operations."""
        self.cpu_window_ops += 1

        if self.cpu_window_ops >= self.cpu_window_size:
            cpu_percent = self.process.cpu_percent(interval=None)
            self.cpu_usage.append({
                "time": time(),
                "cpu_percent": cpu_percent / self.cpu_window_ops
            })
            self.cpu_window_ops = 0
        else:
            # Use last known CPU value for intermediate operations
            last = self.cpu_usage[-1]["cpu_percent"] if self.cpu_usage else 0.0
            self.cpu_usage.append({
                "time": time(),
                "cpu_percent": last
            })

    def get_hit_ratio(self) -> float:
        """Calculate the current hit ratio."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def get_eviction_count(self) -> int:
        return len(self.evictions)

    def get_mean_eviction_frequency(self) -> float:
        """Average frequency evicted keys had reached; 0.0 before any eviction."""
        if not self.evictions:
            return 0.0
        return sum(e["frequency"] for e in self.evictions) / len(self.evictions)

    def reset(self) -> None:
        """Reset all metrics."""
        self.hits = 0
        self.misses = 0
        self.insertions = 0
        self.operations = []
        self.evictions = []
        self.eviction_batches = []
        self.memory_usage = []
        self.cpu_usage = []
        self.cpu_window_ops = 0

    def summary(self) -> Dict:
        """Return a summary of collected metrics."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_ratio": self.get_hit_ratio(),
            "total_operations": len(self.operations),
            "insertions": self.insertions,
            "evictions": self.get_eviction_count(),
            "eviction_batches": len(self.eviction_batches),
            "mean_eviction_frequency": self.get_mean_eviction_frequency(),
            "memory_samples": len(self.memory_usage),
            "cpu_samples": len(self.cpu_usage),
            "avg_memory_mb": sum(m["memory_mb"] for m in self.memory_usage) / (len(self.memory_usage) or 1),
            "avg_cpu_percent": sum(c["cpu_percent"] for c in self.cpu_usage) / (len(self.cpu_usage) or 1)
        }
