import pytest

from benchmarks.fifo import FIFOCache
from benchmarks.lfu import LFUCacheWrapper
from benchmarks.lru import LRUCache
from config import CONFIG
from workload.synthetic_generator import WorkloadGenerator


def test_lfu_wrapper_get_and_put():
    cache = LFUCacheWrapper(max_size=4, evict_factor=0.5)

    assert cache.get("a") is None
    cache.put("a", 1)
    cache.put("a", 2)  # resident keys keep their value

    assert cache.get("a") == 1
    assert cache.cache.frequency("a") == 2
    summary = cache.summary()
    assert summary["hits"] == 1
    assert summary["misses"] == 1
    assert summary["insertions"] == 1


def test_lfu_wrapper_evicts_cold_keys():
    cache = LFUCacheWrapper(max_size=4, evict_factor=0.5)
    for key in "abcd":
        cache.put(key, key)
    cache.get("a")
    cache.get("b")

    cache.put("e", "e")

    assert cache.size() == 3
    assert cache.get("a") == "a"
    assert cache.get("b") == "b"
    assert cache.get("c") is None
    assert cache.summary()["evictions"] == 2


def test_lfu_wrapper_reset():
    cache = LFUCacheWrapper(max_size=4)
    cache.put("a", 1)
    cache.get("a")

    cache.reset()

    assert cache.size() == 0
    assert cache.summary()["hits"] == 0


def test_lru_baseline_evicts_least_recent():
    cache = LRUCache(max_size=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.size() == 2


def test_fifo_baseline_ignores_hits():
    cache = FIFOCache(max_size=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("a", 10)
    cache.put("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.summary()["insertions"] == 3


def test_workload_lengths_and_key_space():
    gen = WorkloadGenerator(key_space_size=50, num_requests=300, seed=1)
    workloads = [
        gen.generate_uniform_workload(),
        gen.generate_zipf_workload(alpha=1.5),
        gen.generate_bursty_workload(burst_size=4, burst_freq=0.3),
        gen.generate_phase_workload(phase_length=20, num_phases=5),
        gen.generate_mixed_workload(zipf_alpha=1.5, burst_freq=0.2),
    ]
    valid_keys = {f"key_{i}" for i in range(50)}

    for workload in workloads:
        assert len(workload) == 300
        for key, value in workload:
            assert key in valid_keys
            assert value == key.replace("key_", "value_")


def test_workload_is_reproducible_with_seed():
    first = WorkloadGenerator(100, 200, seed=3).generate_zipf_workload()
    second = WorkloadGenerator(100, 200, seed=3).generate_zipf_workload()

    assert first == second


def test_zipf_workload_is_skewed():
    workload = WorkloadGenerator(1000, 5000, seed=0).generate_zipf_workload(alpha=1.5)
    hottest = sum(1 for key, _ in workload if key == "key_0")

    assert hottest > 5000 / 1000 * 10


def test_phase_workload_stays_in_slice():
    workload = WorkloadGenerator(100, 40, seed=0).generate_phase_workload(phase_length=10, num_phases=4)

    for i, (key, _) in enumerate(workload):
        phase = (i // 10) % 4
        assert phase * 25 <= int(key.split("_")[1]) < (phase + 1) * 25


def test_invalid_generator_arguments():
    with pytest.raises(ValueError):
        WorkloadGenerator(0, 10)
    with pytest.raises(ValueError):
        WorkloadGenerator(10, 10).generate_zipf_workload(alpha=1.0)


def test_lfu_wrapper_reads_evict_factor_at_construction(monkeypatch):
    monkeypatch.setitem(CONFIG, "evict_factor", 0.5)

    cache = LFUCacheWrapper(max_size=10)

    assert cache.cache.evict_number == 5
    assert LFUCacheWrapper(max_size=10, evict_factor=0.1).cache.evict_number == 1
