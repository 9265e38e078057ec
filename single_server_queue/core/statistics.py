"""Time-weighted statistics for the single-server queue."""

from dataclasses import dataclass
from typing import Dict


@dataclass
class Statistics:
    """
    Integrates queue length and customers in system over simulated time
    and tallies per-customer wait and service totals.

    Every record_* call first closes the flat segment that ended at
    `now` using the values that held during it, and only then applies the
    new state. A change therefore never leaks into area accumulated for
    the time before it took effect.
    """
    total_wait_time: float = 0.0
    served_customers: int = 0
    total_busy_time: float = 0.0
    area_under_queue_length: float = 0.0
    area_under_customers_in_system: float = 0.0

    last_event_time: float = 0.0
    last_queue_length: int = 0
    last_customers_in_system: int = 0
    server_busy: bool = False

    def _integrate(self, now: float):
        """Add the segment [last_event_time, now] to both areas."""
        time_delta = now - self.last_event_time
        if time_delta < 0:
            raise ValueError(
                f"Statistics cannot move backwards in time "
                f"(last={self.last_event_time!r}, now={now!r})"
            )
        self.area_under_queue_length += self.last_queue_length * time_delta
        self.area_under_customers_in_system += self.last_customers_in_system * time_delta
        self.last_event_time = now

    def record_queue_change(self, now: float, queue_length: int):
        self._integrate(now)
        self.last_queue_length = queue_length
        self.last_customers_in_system = queue_length + (1 if self.server_busy else 0)

    def record_service_start(self, now: float, wait_time: float):
        self._integrate(now)
        self.total_wait_time += wait_time
        self.server_busy = True
        self.last_customers_in_system = self.last_queue_length + 1

    def record_service_end(self, now: float, service_duration: float):
        self._integrate(now)
        self.served_customers += 1
        self.total_busy_time += service_duration
        self.server_busy = False
        self.last_customers_in_system = self.last_queue_length

    def average_wait_time(self) -> float:
        """Mean time spent waiting in queue per served customer."""
        if self.served_customers > 0:
            return self.total_wait_time / self.served_customers
        return 0.0

    def average_queue_length(self, total_time: float) -> float:
        if total_time > 0:
            return self.area_under_queue_length / total_time
        return 0.0

    def average_customers_in_system(self, total_time: float) -> float:
        if total_time > 0:
            return self.area_under_customers_in_system / total_time
        return 0.0

    def utilization(self, total_time: float) -> float:
        """Fraction of `total_time` the server spent on completed services."""
        if total_time > 0:
            return self.total_busy_time / total_time
        return 0.0

    def instantaneous_utilization(self, current_time: float) -> float:
        # Same quantity as utilization(); named for live sampling.
        return self.utilization(current_time)

    def throughput(self, total_time: float) -> float:
        if total_time > 0:
            return self.served_customers / total_time
        return 0.0

    def current_queue_length(self) -> int:
        return self.last_queue_length

    def current_customers_in_system(self) -> int:
        return self.last_customers_in_system

    def snapshot(self, total_time: float) -> Dict[str, float]:
        """All derived metrics for a run that has lasted `total_time`."""
        return {
            'served_customers': self.served_customers,
            'average_wait_time': self.average_wait_time(),
            'average_queue_length': self.average_queue_length(total_time),
            'average_customers_in_system': self.average_customers_in_system(total_time),
            'utilization': self.utilization(total_time),
            'throughput': self.throughput(total_time),
        }
