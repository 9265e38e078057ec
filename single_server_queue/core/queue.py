"""FIFO queue with a single server at the front."""

import math
from collections import deque
from typing import Deque

from ..distributions.random_variables import UniformSource, exponential, validate_rate
from .event import Event
from .scheduler import Scheduler
from .statistics import Statistics


class Server:
    """
    Single exponential server fed by a FIFO queue of arrival timestamps.

    The server is busy exactly while it has a departure scheduled. Every
    change to the queue or the busy flag is reported to `statistics` at
    the instant it happens.
    """

    def __init__(self,
                 service_rate: float,
                 statistics: Statistics,
                 uniform: UniformSource):
        self.service_rate = validate_rate(service_rate, 'service_rate')
        self.statistics = statistics
        self.uniform = uniform
        self.queue: Deque[float] = deque()
        self.busy = False
        self.service_start_time = 0.0

    @property
    def queue_length(self) -> int:
        return len(self.queue)

    def receive_customer(self, scheduler: Scheduler):
        """Enqueue a customer arriving now and start serving if idle."""
        now = scheduler.now
        self.queue.append(now)
        self.statistics.record_queue_change(now, len(self.queue))

        if not self.busy:
            self.start_service(scheduler)

    def start_service(self, scheduler: Scheduler):
        """Move the head of the queue into service. No-op on an empty queue."""
        if not self.queue:
            return

        now = scheduler.now
        arrival_time = self.queue.popleft()
        self.statistics.record_queue_change(now, len(self.queue))
        self.statistics.record_service_start(now, now - arrival_time)

        self.busy = True
        self.service_start_time = now

        service_time = exponential(self.service_rate, self.uniform)
        if not math.isfinite(service_time) or service_time < 0:
            raise ValueError(f"Invalid service time {service_time!r}")
        scheduler.schedule(Event.departure(now + service_time))

    def handle_departure(self, scheduler: Scheduler):
        """Finish the current service and pick up the next waiting customer."""
        now = scheduler.now
        service_duration = now - self.service_start_time

        self.busy = False
        self.statistics.record_service_end(now, service_duration)

        if self.queue:
            self.start_service(scheduler)
