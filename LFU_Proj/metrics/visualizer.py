import matplotlib.pyplot as plt
from .monitor import MetricsMonitor
from typing import Dict, Optional


def _finish(output_file: Optional[str]) -> None:
    plt.grid(True)
    plt.legend()
    if output_file:
        plt.savefig(output_file)
    else:
        plt.show()
    plt.close()


class MetricsVisualizer:
    def __init__(self, monitor: MetricsMonitor):
        """Initialize with a MetricsMonitor instance."""
        self.monitor = monitor

    def plot_hit_miss_ratio(self, output_file: Optional[str] = None) -> None:
        """Plot the cumulative hit ratio over time."""
        operations = self.monitor.operations
        times = [op["time"] - operations[0]["time"] for op in operations]
        hit_ratios = []
        hits = 0
        for i, op in enumerate(operations):
            hits += op["hit"]
            hit_ratios.append(hits / (i + 1))

        plt.figure(figsize=(10, 6))
        plt.plot(times, hit_ratios, label="Hit Ratio")
        plt.xlabel("Time (seconds)")
        plt.ylabel("Hit Ratio")
        plt.title("Hit Ratio Over Time")
        _finish(output_file)

    def plot_memory_usage(self, output_file: Optional[str] = None) -> None:
        """Plot memory usage over time."""
        samples = self.monitor.memory_usage
        times = [m["time"] - samples[0]["time"] for m in samples]
        memory = [m["memory_mb"] for m in samples]

        plt.figure(figsize=(10, 6))
        plt.plot(times, memory, label="Memory Usage (MB)")
        plt.xlabel("Time (seconds)")
        plt.ylabel("Memory Usage (MB)")
        plt.title("Memory Usage Over Time")
        _finish(output_file)

    def plot_eviction_frequencies(self, output_file: Optional[str] = None) -> None:
        """Plot the frequency each evicted key had reached, in eviction order."""
        frequencies = [e["frequency"] for e in self.monitor.evictions]

        plt.figure(figsize=(10, 6))
        plt.plot(range(len(frequencies)), frequencies, ".", label="Frequency at Eviction")
        plt.xlabel("Eviction")
        plt.ylabel("Frequency")
        plt.title("Frequency of Evicted Keys")
        _finish(output_file)

    @staticmethod
    def plot_frequency_distribution(counts: Dict[int, int], output_file: Optional[str] = None) -> None:
        """Bar chart of resident keys per frequency, e.g. from LFUCache.frequency_counts()."""
        plt.figure(figsize=(10, 6))
        plt.bar([str(f) for f in counts], list(counts.values()), label="Resident Keys")
        plt.xlabel("Frequency")
        plt.ylabel("Keys")
        plt.title("Resident Keys per Frequency")
        _finish(output_file)
