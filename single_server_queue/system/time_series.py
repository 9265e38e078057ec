"""Periodic snapshots of live statistics during a run."""

from typing import Any, Dict, List, Tuple

import numpy as np

from ..core.statistics import Statistics


class TimeSeries:
    """(time, value) samples taken at most once per `sample_interval`."""

    def __init__(self, sample_interval: float):
        if sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive, got {sample_interval!r}")
        self.sample_interval = sample_interval
        self.next_sample_time = 0.0
        self.data: List[Tuple[float, Any]] = []

    def should_sample(self, current_time: float) -> bool:
        return current_time >= self.next_sample_time

    def sample(self, current_time: float, value) -> bool:
        """Record `value` if a sample is due. Returns True if recorded."""
        if not self.should_sample(current_time):
            return False
        self.data.append((current_time, value))
        self.next_sample_time += self.sample_interval
        return True

    @property
    def times(self) -> np.ndarray:
        return np.array([t for t, _ in self.data], dtype=float)

    @property
    def values(self) -> np.ndarray:
        return np.array([v for _, v in self.data], dtype=float)

    def __len__(self) -> int:
        return len(self.data)


class SimulationTimeSeries:
    """Parallel time series of every live statistic the dashboards plot."""

    NAMES = (
        'queue_length',
        'mean_wait_time',
        'utilization',
        'customers_served',
        'customers_in_system',
        'throughput',
    )

    def __init__(self, sample_interval: float):
        self.sample_interval = sample_interval
        self.queue_length = TimeSeries(sample_interval)
        self.mean_wait_time = TimeSeries(sample_interval)
        self.utilization = TimeSeries(sample_interval)
        self.customers_served = TimeSeries(sample_interval)
        self.customers_in_system = TimeSeries(sample_interval)
        self.throughput = TimeSeries(sample_interval)

    @property
    def series(self) -> Dict[str, TimeSeries]:
        return {name: getattr(self, name) for name in self.NAMES}

    def should_sample(self, current_time: float) -> bool:
        # All series share the same schedule, so checking one is enough
        return self.queue_length.should_sample(current_time)

    def record(self, now: float, statistics: Statistics) -> bool:
        """Sample every series from `statistics` if a sample is due."""
        if not self.should_sample(now):
            return False
        self.queue_length.sample(now, statistics.current_queue_length())
        self.mean_wait_time.sample(now, statistics.average_wait_time())
        self.utilization.sample(now, statistics.instantaneous_utilization(now))
        self.customers_served.sample(now, statistics.served_customers)
        self.customers_in_system.sample(now, statistics.current_customers_in_system())
        self.throughput.sample(now, statistics.throughput(now))
        return True

    def __len__(self) -> int:
        return len(self.queue_length)

    def to_dict(self) -> Dict[str, Dict[str, list]]:
        return {
            name: {'time': ts.times.tolist(), 'value': ts.values.tolist()}
            for name, ts in self.series.items()
        }
