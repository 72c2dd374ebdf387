"""
Memory measurement around a single function call.
    - monitor_memory: process RSS before/peak/after, sampled by a background thread (psutil).
      The memory already used before calling func is counted.
    - monitor_extra_memory: peak of the allocations made by func itself (tracemalloc).
      The memory already used before calling func is not counted.
"""
import gc
import logging
import os
import threading
import time
import tracemalloc
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)

MEMORY_MODES = ('none', 'rss', 'alloc')


@dataclass
class MemoryReport:
    func_name: str
    mode: str
    before_mb: float
    peak_mb: float
    after_mb: float

    def lines(self) -> list[str]:
        if self.mode == 'rss':
            return [
                f"Before {self.func_name}: {self.before_mb:.3f} MB",
                f"Peak while running {self.func_name}: {self.peak_mb:.3f} MB",
                f"After {self.func_name}: {self.after_mb:.3f} MB",
            ]
        return [
            f"Extra allocated peak memory while running {self.func_name}: {self.peak_mb:.3f} MB",
            f"After {self.func_name}, extra allocated memory: {self.after_mb:.3f} MB",
        ]


def get_mem_mb():
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def monitor_memory(func, *args, interval=0.001, **kwargs):
    """
    Run func(*args, **kwargs) while a daemon thread samples the process RSS every `interval` seconds.

    Returns:
        (object, MemoryReport): the result of func and the RSS figures in MB
    """
    gc.collect()
    start_mem = get_mem_mb()
    peak_mem = start_mem
    stop_flag = threading.Event()
    func_name = func.__name__
    logger.info("Measuring memory for function: %s", func_name)

    def sampler():
        nonlocal peak_mem
        while not stop_flag.is_set():
            m = get_mem_mb()
            if m > peak_mem:
                peak_mem = m
            time.sleep(interval)

    t = threading.Thread(target=sampler, daemon=True)
    t.start()
    try:
        result = func(*args, **kwargs)
    finally:
        stop_flag.set()
        t.join()
    gc.collect()
    end_mem = get_mem_mb()
    # the sampler can miss a short spike, the end value is a lower bound of the peak
    peak_mem = max(peak_mem, end_mem)
    return result, MemoryReport(func_name, 'rss', start_mem, peak_mem, end_mem)


def monitor_extra_memory(func, *args, **kwargs):
    """
    Run func(*args, **kwargs) under tracemalloc.

    Returns:
        (object, MemoryReport): the result of func and the traced allocations in MB (before_mb is always 0)
    """
    func_name = func.__name__
    logger.info("Measuring extra allocated memory for function: %s", func_name)
    gc.collect()
    tracemalloc.start()
    try:
        result = func(*args, **kwargs)
        current, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    gc.collect()
    return result, MemoryReport(func_name, 'alloc', 0.0, peak / 1024 / 1024, current / 1024 / 1024)


def run_with_memory_mode(mode: str, func, *args, **kwargs):
    """
    Dispatch on the --trace-memory flag value.

    Returns:
        (object, MemoryReport | None): the result of func and the report, None for mode 'none'
    """
    if mode == 'none':
        return func(*args, **kwargs), None
    if mode == 'rss':
        return monitor_memory(func, *args, **kwargs)
    if mode == 'alloc':
        return monitor_extra_memory(func, *args, **kwargs)
    raise ValueError(f"Unknown memory mode: {mode}")
