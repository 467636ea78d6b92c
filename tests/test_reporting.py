import json

import pandas as pd
import pytest

import main
from benchmarks.lfu import LFUCacheWrapper
from config import CONFIG
from lfu_cache.lfu_cache import LFUCache
from metrics.excel_logger import ExcelLogger
from metrics.monitor import MetricsMonitor
from metrics.visualizer import MetricsVisualizer


def log_rows(logger, cache_name, workload_name, steps):
    for step in steps:
        logger.log(step=step, hit_rate=0.5, hits=step, misses=step, memory_mb=10.0,
                   cpu_time_delta=1.0, timestamp=0.1 * step, size=step, evictions=0,
                   cache_name=cache_name, workload_name=workload_name)


def test_excel_export_sorts_by_workload_order(tmp_path):
    path = tmp_path / "metrics.xlsx"
    logger = ExcelLogger(filename=str(path), workload_order=["Uniform", "Zipf"])
    log_rows(logger, "LFU", "Zipf", [1, 0])
    log_rows(logger, "LFU", "Uniform", [0])
    log_rows(logger, "LRU", "Uniform", [0, 1])

    logger.export()

    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"LFU", "LRU"}
    lfu = sheets["LFU"]
    assert list(zip(lfu["workload_name"], lfu["step"])) == [("Uniform", 0), ("Zipf", 0), ("Zipf", 1)]
    assert len(sheets["LRU"]) == 2


def test_excel_export_appends_and_drops_duplicates(tmp_path):
    path = tmp_path / "metrics.xlsx"
    logger = ExcelLogger(filename=str(path), workload_order=["Uniform"])
    log_rows(logger, "LFU", "Uniform", [0, 1])
    logger.export()

    log_rows(logger, "LFU", "Uniform", [1, 2])
    logger.export()

    lfu = pd.read_excel(path, sheet_name="LFU")
    assert list(lfu["step"]) == [0, 1, 2]


def test_excel_export_without_records_writes_nothing(tmp_path):
    path = tmp_path / "metrics.xlsx"
    ExcelLogger(filename=str(path)).export()

    assert not path.exists()


def test_visualizer_writes_png_files(tmp_path):
    monitor = MetricsMonitor()
    cache = LFUCache(4, 0.5, monitor=monitor)
    for key in range(6):
        cache.insert(key, key)
        cache.access(key)
        monitor.record_memory_usage()
    visualizer = MetricsVisualizer(monitor)

    outputs = {
        "hit_ratio.png": visualizer.plot_hit_miss_ratio,
        "memory.png": visualizer.plot_memory_usage,
        "evictions.png": visualizer.plot_eviction_frequencies,
    }
    for name, plot in outputs.items():
        plot(str(tmp_path / name))
    MetricsVisualizer.plot_frequency_distribution(cache.frequency_counts(), str(tmp_path / "freq.png"))

    for name in list(outputs) + ["freq.png"]:
        assert (tmp_path / name).stat().st_size > 0


def test_replay_workload_summary(tmp_path):
    cache = LFUCacheWrapper(max_size=3, evict_factor=0.34)
    workload = [("a", "1"), ("a", "1"), ("b", "2"), ("c", "3"), ("d", "4"), ("a", "1")]
    excel_logger = ExcelLogger(filename=str(tmp_path / "run.xlsx"))

    summary = main.replay_workload(cache, workload, "LFU", "Custom", excel_logger)

    assert summary["hits"] == 2
    assert summary["misses"] == 4
    assert summary["insertions"] == 4
    assert summary["evictions"] == 2
    assert summary["size"] == 2
    assert len(excel_logger.records["LFU"]) == len(workload)


def test_build_cache_rejects_unknown_name():
    with pytest.raises(ValueError):
        main.build_cache("ARC", 10)


def test_run_single_test_from_json(tmp_path):
    excel_file = tmp_path / "single.xlsx"
    config_path = tmp_path / "run.json"
    config_path.write_text(json.dumps({
        "cache_name": "LFU",
        "cache_size": 2,
        "workload_name": "Uniform",
        "workload_data": [["x", "1"], ["y", "2"], ["x", "1"], ["z", "3"]],
        "excel_file": str(excel_file),
    }))

    summary = main.run_single_test(str(config_path))

    assert summary["hits"] == 1
    assert summary["size"] <= 2
    assert excel_file.exists()


def test_main_runs_every_cache_and_workload(tmp_path, monkeypatch):
    monkeypatch.setitem(CONFIG, "cache_size", 20)
    monkeypatch.setitem(CONFIG, "workload", dict(CONFIG["workload"], key_space_size=50, num_requests=60))
    monkeypatch.setitem(CONFIG, "output", {"excel_file": str(tmp_path / "all.xlsx"),
                                           "plot_dir": str(tmp_path / "plots")})

    results = main.main()

    assert len(results) == len(main.CACHE_TYPES) * 5
    assert set(pd.read_excel(tmp_path / "all.xlsx", sheet_name=None)) == set(main.CACHE_TYPES)
    assert (tmp_path / "plots" / "LFU_Zipf_frequencies.png").exists()
