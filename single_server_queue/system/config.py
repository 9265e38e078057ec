"""Run-level configuration for the single-server queue simulation."""

import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from ..distributions.random_variables import validate_rate


STOP_KINDS = ('time', 'events', 'customers')

DEFAULT_ARRIVAL_RATE = 0.8
DEFAULT_SERVICE_RATE = 1.0
DEFAULT_SAMPLE_INTERVAL = 10_000.0


@dataclass(frozen=True)
class StopCondition:
    """
    When the driver stops dispatching events.

    kind:
        'time'      - stop before the first event at or after `limit`
        'events'    - stop after `limit` events have been dispatched
        'customers' - stop once `limit` customers have been served
    """
    kind: str = 'time'
    limit: float = 10_000_000.0

    def __post_init__(self):
        if self.kind not in STOP_KINDS:
            raise ValueError(f"Unknown stop condition {self.kind!r}, expected one of {STOP_KINDS}")
        if not math.isfinite(self.limit) or self.limit <= 0:
            raise ValueError(f"Stop limit must be a positive finite number, got {self.limit!r}")
        if self.kind != 'time' and float(self.limit) != int(self.limit):
            raise ValueError(f"Stop limit for {self.kind!r} must be a whole number, got {self.limit!r}")

    @classmethod
    def by_time(cls, max_time: float) -> 'StopCondition':
        return cls('time', float(max_time))

    @classmethod
    def by_events(cls, max_events: int) -> 'StopCondition':
        return cls('events', int(max_events))

    @classmethod
    def by_customers(cls, max_customers: int) -> 'StopCondition':
        return cls('customers', int(max_customers))

    def describe(self) -> str:
        if self.kind == 'time':
            return f"Simulation time <= {self.limit:.0f}"
        if self.kind == 'events':
            return f"Events processed <= {int(self.limit)}"
        return f"Customers served <= {int(self.limit)}"

    def estimated_max_time(self, arrival_rate: float, service_rate: float) -> float:
        """Rough simulated horizon, used to size the sampler."""
        if self.kind == 'time':
            return self.limit
        if self.kind == 'events':
            return self.limit * 2.0 / (arrival_rate + service_rate)
        return self.limit * 2.0 / arrival_rate


@dataclass(frozen=True)
class SimulationConfig:
    """All parameters of one M/M/1 run, constructed once and passed down."""
    arrival_rate: float = DEFAULT_ARRIVAL_RATE
    service_rate: float = DEFAULT_SERVICE_RATE
    stop: StopCondition = field(default_factory=StopCondition)
    seed: Optional[int] = None
    sample_interval: Optional[float] = DEFAULT_SAMPLE_INTERVAL

    def __post_init__(self):
        validate_rate(self.arrival_rate, 'arrival_rate')
        validate_rate(self.service_rate, 'service_rate')
        if self.sample_interval is not None and (
                not math.isfinite(self.sample_interval) or self.sample_interval <= 0):
            raise ValueError(f"sample_interval must be positive, got {self.sample_interval!r}")

    @property
    def traffic_intensity(self) -> float:
        """rho = lambda / mu"""
        return self.arrival_rate / self.service_rate

    def with_seed(self, seed: Optional[int]) -> 'SimulationConfig':
        return SimulationConfig(
            arrival_rate=self.arrival_rate,
            service_rate=self.service_rate,
            stop=self.stop,
            seed=seed,
            sample_interval=self.sample_interval,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        """
        Build a config from a plain dict, e.g. a JSON config file:

            {"arrival_rate": 0.9, "service_rate": 1.0,
             "stop": {"kind": "customers", "limit": 100000}, "seed": 7}
        """
        known = {'arrival_rate', 'service_rate', 'stop', 'seed', 'sample_interval'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        kwargs = dict(data)
        if 'stop' in kwargs and isinstance(kwargs['stop'], dict):
            kwargs['stop'] = StopCondition(**kwargs['stop'])
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: str) -> 'SimulationConfig':
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))
