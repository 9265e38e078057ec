"""Arrival generator feeding the server."""

import math

from ..distributions.random_variables import UniformSource, exponential, validate_rate
from .event import Event
from .queue import Server
from .scheduler import Scheduler


class Client:
    """Poisson arrival stream. Keeps exactly one future arrival scheduled."""

    def __init__(self, arrival_rate: float, uniform: UniformSource):
        self.arrival_rate = validate_rate(arrival_rate, 'arrival_rate')
        self.uniform = uniform

    def prime(self, scheduler: Scheduler):
        """Schedule the first arrival at the scheduler's current time."""
        scheduler.schedule(Event.arrival(scheduler.now))

    def handle_generate(self, scheduler: Scheduler, server: Server):
        """Hand the arriving customer to `server` and schedule the next arrival."""
        server.receive_customer(scheduler)

        inter_arrival_time = exponential(self.arrival_rate, self.uniform)
        if not math.isfinite(inter_arrival_time) or inter_arrival_time < 0:
            raise ValueError(f"Invalid inter-arrival time {inter_arrival_time!r}")
        scheduler.schedule(Event.arrival(scheduler.now + inter_arrival_time))
