from benchmarks.lfu import LFUCacheWrapper
from benchmarks.lru import LRUCache
from benchmarks.fifo import FIFOCache
from config import CONFIG
from metrics.excel_logger import ExcelLogger
from metrics.visualizer import MetricsVisualizer
from workload.synthetic_generator import WorkloadGenerator
import logging
import psutil
import os
import time
import gc
import sys
import json

logger = logging.getLogger(__name__)

CACHE_TYPES = {
    "LFU": LFUCacheWrapper,
    "LRU": LRUCache,
    "FIFO": FIFOCache
}


def configure_logging(level=None, fmt=None) -> None:
    """Send log records to stderr using the level and format from CONFIG."""
    settings = CONFIG["logging"]
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or settings["format"]))
    root.addHandler(handler)
    root.setLevel(level or settings["level"])


def build_cache(cache_name: str, cache_size: int):
    try:
        cache_cls = CACHE_TYPES[cache_name]
    except KeyError:
        raise ValueError(f"Unknown cache type: {cache_name}") from None
    return cache_cls(max_size=cache_size)


def build_workloads(gen: WorkloadGenerator) -> dict:
    params = CONFIG["workload"]
    return {
        "Uniform": lambda: gen.generate_uniform_workload(),
        "Zipf": lambda: gen.generate_zipf_workload(alpha=params["zipf_alpha"]),
        "Bursty": lambda: gen.generate_bursty_workload(burst_size=params["burst_size"], burst_freq=params["burst_freq"]),
        "Phase": lambda: gen.generate_phase_workload(phase_length=params["phase_length"], num_phases=params["num_phases"]),
        "Mixed": lambda: gen.generate_mixed_workload(zipf_alpha=params["zipf_alpha"], burst_freq=params["mixed_burst_freq"])
    }


def replay_workload(cache, workload, cache_name: str, workload_name: str, excel_logger: ExcelLogger) -> dict:
    """Replay `workload` through `cache` (get, then put) and return its summary."""
    process = psutil.Process(os.getpid())
    cache.reset()

    gc.collect()
    start_time = time.perf_counter()

    # Per-window CPU percent (delta method)
    window_size = CONFIG["performance"]["cpu_window_size"]
    prev_cpu_time = process.cpu_times().user + process.cpu_times().system
    prev_wall_time = start_time
    cpu_percent_window = []
    last_cpu_percent = 0.0

    for step, (key, value) in enumerate(workload):
        cache.get(key)

        current_memory = process.memory_info().rss / (1024 * 1024)
        cpu_time_now = process.cpu_times().user + process.cpu_times().system
        wall_time_now = time.perf_counter()
        delta_wall = wall_time_now - prev_wall_time
        cpu_percent_window.append((cpu_time_now - prev_cpu_time) / delta_wall * 100 if delta_wall > 0 else 0.0)
        prev_cpu_time = cpu_time_now
        prev_wall_time = wall_time_now

        if (step + 1) % window_size == 0 or (step + 1) == len(workload):
            last_cpu_percent = sum(cpu_percent_window) / len(cpu_percent_window)
            cpu_percent_window = []

        excel_logger.log(
            step=step,
            hit_rate=cache.monitor.get_hit_ratio(),
            hits=cache.monitor.hits,
            misses=cache.monitor.misses,
            memory_mb=current_memory,
            cpu_time_delta=last_cpu_percent,
            timestamp=wall_time_now - start_time,
            size=cache.size(),
            evictions=cache.monitor.get_eviction_count(),
            cache_name=cache_name,
            workload_name=workload_name,
            mean_eviction_frequency=cache.monitor.get_mean_eviction_frequency()
        )

        cache.put(key, value)

    summary = cache.summary()
    summary["size"] = cache.size()
    summary["elapsed_seconds"] = time.perf_counter() - start_time
    logger.info("%s with %s - %s", cache_name, workload_name, summary)

    plot_dir = CONFIG["output"]["plot_dir"]
    if plot_dir:
        save_plots(cache, cache_name, workload_name, plot_dir)
    return summary


def save_plots(cache, cache_name: str, workload_name: str, plot_dir: str) -> None:
    os.makedirs(plot_dir, exist_ok=True)
    prefix = os.path.join(plot_dir, f"{cache_name}_{workload_name}")
    visualizer = MetricsVisualizer(cache.monitor)
    visualizer.plot_hit_miss_ratio(f"{prefix}_hit_ratio.png")
    visualizer.plot_memory_usage(f"{prefix}_memory.png")
    if isinstance(cache, LFUCacheWrapper):
        visualizer.plot_eviction_frequencies(f"{prefix}_eviction_frequencies.png")
        visualizer.plot_frequency_distribution(cache.cache.frequency_counts(), f"{prefix}_frequencies.png")


def main():
    params = CONFIG["workload"]
    excel_logger = ExcelLogger(filename=CONFIG["output"]["excel_file"])
    gen = WorkloadGenerator(key_space_size=params["key_space_size"],
                            num_requests=params["num_requests"],
                            seed=params["seed"])
    workloads = build_workloads(gen)

    results = {}
    for cache_name in CACHE_TYPES:
        cache = build_cache(cache_name, CONFIG["cache_size"])
        for workload_name, generate_workload in workloads.items():
            results[(cache_name, workload_name)] = replay_workload(
                cache, generate_workload(), cache_name, workload_name, excel_logger)
    excel_logger.export()
    return results


def run_single_test(config_path: str) -> dict:
    """Run a single test with the given configuration."""
    with open(config_path, 'r') as f:
        config = json.load(f)

    cache = build_cache(config["cache_name"], config["cache_size"])
    workload = [tuple(request) for request in config["workload_data"]]
    excel_logger = ExcelLogger(filename=config.get("excel_file", CONFIG["output"]["excel_file"]))

    summary = replay_workload(cache, workload, config["cache_name"], config["workload_name"], excel_logger)
    excel_logger.export()
    return summary


if __name__ == "__main__":
    configure_logging()
    if len(sys.argv) == 2:
        run_single_test(sys.argv[1])
    elif len(sys.argv) == 1:
        main()
    else:
        print("Usage: python main.py [config_file]")
        sys.exit(1)
