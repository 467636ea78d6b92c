CONFIG = {
    # Total number of items the cache can hold
    "cache_size": 500,

    # Fraction of the capacity evicted when an insert finds the cache full
    "evict_factor": 0.05,

    # Synthetic workload parameters
    "workload": {
        "key_space_size": 5000,
        "num_requests": 50000,
        "seed": 42,
        "zipf_alpha": 1.2,
        "burst_size": 5,
        "burst_freq": 0.2,
        "phase_length": 100,
        "num_phases": 10,
        "mixed_burst_freq": 0.1,
        # Sheet rows are sorted in this order
        "order": ["Uniform", "Zipf", "Bursty", "Phase", "Mixed"]
    },

    # Performance tracking parameters
    "performance": {
        "cpu_window_size": 50  # Sample CPU once per 50 operations
    },

    # Where benchmark results go
    "output": {
        "excel_file": "all_cache_metrics.xlsx",
        "plot_dir": None  # Set to a directory to save plots per run
    },

    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    }
}
