# Cache entry class linking a stored value to its frequency bucket
from dataclasses import dataclass, field
from time import time
from typing import Any

from .frequency_list import FrequencyBucket


@dataclass
class CacheEntry:
    value: Any
    bucket: FrequencyBucket
    created_at: float = field(default_factory=time)

    @property
    def frequency(self) -> int:
        return self.bucket.frequency

    def age(self) -> float:
        """Seconds since the entry was inserted."""
        return time() - self.created_at
