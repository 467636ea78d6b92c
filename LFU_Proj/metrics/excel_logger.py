import pandas as pd
import numpy as np
import os
from config import CONFIG

NUMERIC_COLUMNS = ['hit_rate', 'memory_mb', 'cpu_time_delta', 'seconds', 'mean_eviction_frequency']


class ExcelLogger:
    def __init__(self, filename="cache_metrics.xlsx", workload_order=None, overwrite=True):
        self.filename = filename
        self.workload_order = list(workload_order or CONFIG["workload"]["order"])
        self.overwrite = overwrite  # Replace an existing file on the first export
        self.records = {}

    def log(self, step, hit_rate, hits, misses, memory_mb, cpu_time_delta, timestamp,
            size, evictions, cache_name, workload_name, mean_eviction_frequency=0.0):
        if cache_name not in self.records:
            self.records[cache_name] = []
        self.records[cache_name].append({
            "workload_name": workload_name,
            "step": step,
            "hit_rate": hit_rate,
            "hits": hits,
            "misses": misses,
            "memory_mb": memory_mb,
            "cpu_time_delta": cpu_time_delta,  # Windowed average CPU percent
            "seconds": timestamp,
            "size": size,
            "evictions": evictions,
            "mean_eviction_frequency": mean_eviction_frequency
        })

    def _prepare(self, df):
        """Order rows by workload then step and pin numeric column dtypes."""
        categories = self.workload_order + [w for w in df['workload_name'].unique() if w not in self.workload_order]
        df['workload_name'] = pd.Categorical(df['workload_name'], categories=categories, ordered=True)
        df = df.sort_values(['workload_name', 'step'], kind='stable')
        for col in NUMERIC_COLUMNS:
            df[col] = df[col].astype(np.float64)
        return df

    def export(self):
        """
        Write the logged records to the Excel file, one sheet per cache.

        The first export replaces an existing file when `overwrite` is set;
        later exports merge with the sheets already on disk, dropping rows
        that repeat a (workload_name, step) pair.
        """
        if not self.records:
            return
        if self.overwrite and os.path.exists(self.filename):
            os.remove(self.filename)
        self.overwrite = False

        if os.path.exists(self.filename):
            with pd.ExcelWriter(self.filename, engine='openpyxl', mode='a', if_sheet_exists='replace') as writer:
                for cache_name, records in self.records.items():
                    df_new = pd.DataFrame(records)
                    try:
                        df_existing = pd.read_excel(self.filename, sheet_name=cache_name)
                        df_combined = pd.concat([df_existing, df_new], ignore_index=True)
                    except ValueError:
                        df_combined = df_new
                    df_combined = df_combined.drop_duplicates(subset=['workload_name', 'step'], keep='first')
                    df_combined = self._prepare(df_combined)
                    df_combined.to_excel(writer, sheet_name=cache_name, index=False, float_format='%.15f')
        else:
            with pd.ExcelWriter(self.filename, engine='openpyxl') as writer:
                for cache_name, records in self.records.items():
                    df = self._prepare(pd.DataFrame(records))
                    df.to_excel(writer, sheet_name=cache_name, index=False, float_format='%.15f')
        self.records = {}
