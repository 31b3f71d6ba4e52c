"""
Benchmarking: instrumentation, measurement and the experiment runner.

The runner is imported lazily by callers (`cyclesort.bench.runner`) since it
pulls in pandas, psutil and rich.
"""

from .instrument import ComparisonCounter, CountingItem, WriteCountingList
from .measure import probe_sort_call, time_sort_call

__all__ = [
    "ComparisonCounter",
    "CountingItem",
    "WriteCountingList",
    "probe_sort_call",
    "time_sort_call",
]
