# Synthetic request streams for exercising the caches
from typing import List, Optional, Tuple
import numpy as np

Workload = List[Tuple[str, str]]


class WorkloadGenerator:
    def __init__(self, key_space_size: int, num_requests: int, seed: Optional[int] = None):
        if key_space_size <= 0 or num_requests < 0:
            raise ValueError("key_space_size must be positive and num_requests non-negative")
        self.key_space_size = key_space_size
        self.num_requests = num_requests
        self.rng = np.random.default_rng(seed)

    def _to_workload(self, key_ids) -> Workload:
        return [(f"key_{k}", f"value_{k}") for k in key_ids]

    def _zipf_ids(self, alpha: float, size: int) -> np.ndarray:
        if alpha <= 1:
            raise ValueError("zipf alpha must be greater than 1")
        # Rank 1 is the hottest key; ranks past the key space wrap around
        return (self.rng.zipf(alpha, size) - 1) % self.key_space_size

    def generate_uniform_workload(self) -> Workload:
        """Every key equally likely."""
        return self._to_workload(self.rng.integers(0, self.key_space_size, self.num_requests))

    def generate_zipf_workload(self, alpha: float = 1.2) -> Workload:
        """Skewed popularity: a few keys take most of the requests."""
        return self._to_workload(self._zipf_ids(alpha, self.num_requests))

    def generate_bursty_workload(self, burst_size: int = 5, burst_freq: float = 0.2) -> Workload:
        """
        Uniform traffic where, with probability `burst_freq`, a request
        starts a burst repeating the same key `burst_size` times.
        """
        key_ids = []
        while len(key_ids) < self.num_requests:
            key = int(self.rng.integers(0, self.key_space_size))
            if self.rng.random() < burst_freq:
                key_ids.extend([key] * burst_size)
            else:
                key_ids.append(key)
        return self._to_workload(key_ids[:self.num_requests])

    def generate_phase_workload(self, phase_length: int = 100, num_phases: int = 10) -> Workload:
        """
        Working set that shifts over time.

        The request stream is cut into phases of `phase_length` requests,
        cycling through `num_phases` disjoint slices of the key space. Each
        phase draws uniformly from its own slice.
        """
        slice_size = max(1, self.key_space_size // num_phases)
        key_ids = []
        for i in range(self.num_requests):
            phase = (i // phase_length) % num_phases
            start = (phase * slice_size) % self.key_space_size
            key_ids.append(start + int(self.rng.integers(0, slice_size)))
        return self._to_workload(k % self.key_space_size for k in key_ids)

    def generate_mixed_workload(self, zipf_alpha: float = 1.2, burst_freq: float = 0.1) -> Workload:
        """Zipf traffic with occasional uniform bursts of five repeats."""
        hot = self._zipf_ids(zipf_alpha, self.num_requests)
        key_ids = []
        for key in hot:
            if self.rng.random() < burst_freq:
                burst_key = int(self.rng.integers(0, self.key_space_size))
                key_ids.extend([burst_key] * 5)
            else:
                key_ids.append(int(key))
            if len(key_ids) >= self.num_requests:
                break
        return self._to_workload(key_ids[:self.num_requests])
