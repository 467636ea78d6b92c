# LFU cache with O(1) insert, access and bulk eviction over frequency buckets
from numbers import Integral, Real
from typing import Any, Dict, Hashable, Optional
import logging
import math
import threading

from metrics.monitor import MetricsMonitor
from .entry import CacheEntry
from .errors import EmptyCacheError, InvalidConfigurationError, KeyAlreadyExistsError, KeyNotFoundError
from .frequency_list import FrequencyList

logger = logging.getLogger(__name__)

DEFAULT_EVICT_FACTOR = 0.05


class LFUCache:
    """
    Capacity-bounded cache that evicts the least frequently used keys.

    Every resident key sits in the frequency bucket matching the number of
    times it has been used: inserting a key puts it in bucket 1 and each
    access moves it one bucket up. When an insert finds the cache full,
    `evict_number` keys are removed from the lowest buckets before the new
    key goes in. Keys that share a frequency are evicted in no particular
    order.

    All operations are serialized on a single lock covering both the key map
    and the frequency list.
    """

    def __init__(self, capacity: int, evict_factor: float = DEFAULT_EVICT_FACTOR,
                 monitor: Optional[MetricsMonitor] = None):
        if isinstance(capacity, bool) or not isinstance(capacity, Integral) or capacity <= 0:
            raise InvalidConfigurationError(f"capacity must be a positive integer, got {capacity!r}")
        if isinstance(evict_factor, bool) or not isinstance(evict_factor, Real) or not 0 < evict_factor <= 1:
            raise InvalidConfigurationError(f"evict_factor must be in (0, 1], got {evict_factor!r}")

        capacity = int(capacity)
        self._capacity = capacity
        self._evict_factor = float(evict_factor)
        self._evict_number = min(capacity, max(1, math.ceil(capacity * evict_factor)))
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._frequencies = FrequencyList()
        self._lock = threading.Lock()
        self.monitor = monitor

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def evict_factor(self) -> float:
        return self._evict_factor

    @property
    def evict_number(self) -> int:
        """Number of keys removed each time an insert finds the cache full."""
        return self._evict_number

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def insert(self, key: Hashable, value: Any) -> None:
        """
        Add a new key with frequency 1.

        Raises KeyAlreadyExistsError if the key is resident; use `access` to
        read it instead. A full cache is shrunk by `evict_number` keys first.
        """
        with self._lock:
            if key in self._entries:
                raise KeyAlreadyExistsError(key)

            if len(self._entries) >= self._capacity:
                self._evict(self._evict_number)

            bucket = self._frequencies.bucket_after(self._frequencies.head, 1)
            self._frequencies.add_key(key, bucket)
            self._entries[key] = CacheEntry(value, bucket)

            if self.monitor is not None:
                self.monitor.record_insert(key)

    def access(self, key: Hashable) -> Any:
        """Return the value stored for `key` and bump its frequency by one."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                if self.monitor is not None:
                    self.monitor.record_operation("access", key, False)
                raise KeyNotFoundError(key)

            current = entry.bucket
            target = self._frequencies.bucket_after(current, current.frequency + 1)
            self._frequencies.move_key(key, current, target)
            entry.bucket = target

            if self.monitor is not None:
                self.monitor.record_operation("access", key, True)
            return entry.value

    def least_frequent(self) -> Any:
        """Value of one of the keys with the lowest frequency."""
        with self._lock:
            bucket = self._frequencies.lowest()
            if bucket is None:
                raise EmptyCacheError("cache is empty")
            key = next(iter(bucket.keys))
            return self._entries[key].value

    def frequency(self, key: Hashable) -> int:
        """Current use count of `key`. Does not count as an access."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise KeyNotFoundError(key)
            return entry.frequency

    def frequency_counts(self) -> Dict[int, int]:
        """Snapshot of {frequency: number of keys}, lowest frequency first."""
        with self._lock:
            return {bucket.frequency: len(bucket.keys) for bucket in self._frequencies}

    def _evict(self, count: int) -> None:
        # Only called from insert while at capacity, so `count` keys exist.
        logger.debug("Evicting %d of %d entries", count, len(self._entries))
        for _ in range(count):
            # The previous pass may have unlinked the lowest bucket
            bucket = self._frequencies.lowest()
            key = next(iter(bucket.keys))
            entry = self._entries.pop(key)
            self._frequencies.discard_key(key, bucket)
            if self.monitor is not None:
                self.monitor.record_eviction(key, bucket.frequency, entry.age())

        if self.monitor is not None:
            self.monitor.record_eviction_batch(count)

    def __repr__(self) -> str:
        return (f"LFUCache(capacity={self._capacity}, evict_factor={self._evict_factor}, "
                f"size={len(self._entries)})")
