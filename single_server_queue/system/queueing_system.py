"""Simulation driver for the single-server queue and replication runner."""

import logging
import math
import multiprocessing
import time
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

import numpy as np
from scipy import stats

from ..core import Client, EventKind, Scheduler, Server, Statistics
from ..distributions.random_variables import UniformSource, uniform_source
from .config import SimulationConfig
from .theory import mm1_theoretical_values, relative_error
from .time_series import SimulationTimeSeries

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1_000_000

METRIC_NAMES = (
    'average_wait_time',
    'average_queue_length',
    'average_customers_in_system',
    'utilization',
    'throughput',
)

# Observed metric -> matching key in mm1_theoretical_values()
THEORY_KEYS = {
    'average_wait_time': 'wait_time',
    'average_queue_length': 'queue_length',
    'average_customers_in_system': 'customers_in_system',
    'utilization': 'utilization',
    'throughput': 'throughput',
}


@dataclass
class SimulationResult:
    """Outputs of one replication."""
    arrival_rate: float
    service_rate: float
    seed: Optional[int]
    total_time: float
    events_processed: int
    served_customers: int
    average_wait_time: float
    average_queue_length: float
    average_customers_in_system: float
    utilization: float
    throughput: float
    theoretical: Dict[str, float] = field(default_factory=dict)
    wall_clock_seconds: float = 0.0
    time_series: Optional[SimulationTimeSeries] = None

    @property
    def traffic_intensity(self) -> float:
        return self.arrival_rate / self.service_rate

    @property
    def events_per_second(self) -> float:
        if self.wall_clock_seconds > 0:
            return self.events_processed / self.wall_clock_seconds
        return 0.0

    def relative_errors(self) -> Dict[str, float]:
        """Relative deviation of each observed metric from its M/M/1 value."""
        return {
            name: relative_error(getattr(self, name), self.theoretical[THEORY_KEYS[name]])
            for name in METRIC_NAMES
        }

    def as_dict(self, include_time_series: bool = False) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != 'time_series'}
        data['theoretical'] = dict(self.theoretical)
        data['traffic_intensity'] = self.traffic_intensity
        data['events_per_second'] = self.events_per_second
        if include_time_series and self.time_series is not None:
            data['time_series'] = self.time_series.to_dict()
        return data


class SingleServerSystem:
    """
    Owns one private scheduler, server, client and statistics set and
    drives them until the configured stopping condition is met.
    """

    def __init__(self, config: SimulationConfig, uniform: Optional[UniformSource] = None):
        self.config = config
        if uniform is None:
            uniform = uniform_source(config.seed)
        self.uniform = uniform

        self.scheduler = Scheduler()
        self.statistics = Statistics()
        self.server = Server(config.service_rate, self.statistics, uniform)
        self.client = Client(config.arrival_rate, uniform)

        self.events_processed = 0
        self.time_series: Optional[SimulationTimeSeries] = None
        if config.sample_interval is not None:
            self.time_series = SimulationTimeSeries(config.sample_interval)

        self._primed = False

    def prime(self):
        """Schedule the first arrival. Safe to call more than once."""
        if not self._primed:
            self.client.prime(self.scheduler)
            self._primed = True

    @property
    def current_time(self) -> float:
        return self.scheduler.now

    def should_continue(self) -> bool:
        """Evaluate the stopping condition before the next turn."""
        if not self.scheduler.has_pending():
            return False

        stop = self.config.stop
        if stop.kind == 'time':
            return self.scheduler.peek_next_time() < stop.limit
        if stop.kind == 'events':
            return self.events_processed < stop.limit
        return self.statistics.served_customers < stop.limit

    def step(self) -> bool:
        """Dispatch a single event. Returns False if nothing was pending."""
        self.prime()

        event = self.scheduler.advance()
        if event is None:
            return False

        if event.kind is EventKind.ARRIVAL:
            self.client.handle_generate(self.scheduler, self.server)
        else:
            self.server.handle_departure(self.scheduler)
        self.events_processed += 1

        if self.time_series is not None:
            self.time_series.record(self.scheduler.now, self.statistics)
        return True

    def simulate(self) -> SimulationResult:
        """Run until the stopping condition holds and return the results."""
        config = self.config
        logger.info(
            "Starting M/M/1 run: lambda=%.4f mu=%.4f rho=%.4f stop=%s seed=%s",
            config.arrival_rate, config.service_rate, config.traffic_intensity,
            config.stop.describe(), config.seed,
        )
        if config.traffic_intensity >= 1.0:
            logger.warning("Traffic intensity %.4f >= 1: the queue has no steady state",
                           config.traffic_intensity)

        self.prime()

        start = time.perf_counter()
        while self.should_continue():
            if not self.step():
                break
            if self.events_processed % PROGRESS_EVERY == 0:
                logger.debug("%d events processed, t=%.2f, served=%d",
                             self.events_processed, self.scheduler.now,
                             self.statistics.served_customers)
        elapsed = time.perf_counter() - start

        if not self.scheduler.has_pending():
            logger.warning("Scheduler ran out of events at t=%.4f", self.scheduler.now)

        result = self.result(elapsed)
        logger.info("Finished after %d events (t=%.2f, %d served) in %.2fs",
                    result.events_processed, result.total_time,
                    result.served_customers, elapsed)
        return result

    def result(self, wall_clock_seconds: float = 0.0) -> SimulationResult:
        total_time = self.scheduler.now
        snapshot = self.statistics.snapshot(total_time)
        return SimulationResult(
            arrival_rate=self.config.arrival_rate,
            service_rate=self.config.service_rate,
            seed=self.config.seed,
            total_time=total_time,
            events_processed=self.events_processed,
            served_customers=snapshot['served_customers'],
            average_wait_time=snapshot['average_wait_time'],
            average_queue_length=snapshot['average_queue_length'],
            average_customers_in_system=snapshot['average_customers_in_system'],
            utilization=snapshot['utilization'],
            throughput=snapshot['throughput'],
            theoretical=mm1_theoretical_values(self.config.arrival_rate,
                                               self.config.service_rate),
            wall_clock_seconds=wall_clock_seconds,
            time_series=self.time_series,
        )

    def get_metrics_summary(self) -> Dict:
        """Observed metrics next to their theoretical values."""
        result = self.result()
        return {
            'observed': {name: getattr(result, name) for name in METRIC_NAMES},
            'theoretical': result.theoretical,
            'relative_error': result.relative_errors(),
            'served_customers': result.served_customers,
            'events_processed': result.events_processed,
            'total_time': result.total_time,
        }


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """Run a single replication with a fresh system."""
    return SingleServerSystem(config).simulate()


def _run_replication(config: SimulationConfig) -> SimulationResult:
    # Top-level so multiprocessing can pickle it
    return run_simulation(config)


def summarize(values: List[float], confidence: float = 0.95) -> Dict[str, float]:
    """Mean, spread and Student-t confidence half-width of replication values."""
    values = np.asarray(values, dtype=float)
    n = len(values)
    summary = {
        'mean': float(np.mean(values)),
        'std': float(np.std(values, ddof=1)) if n > 1 else 0.0,
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'ci_half_width': math.nan,
    }
    if n > 1:
        t_crit = stats.t.ppf(0.5 + confidence / 2.0, df=n - 1)
        summary['ci_half_width'] = float(t_crit * summary['std'] / math.sqrt(n))
    return summary


def run_replications(config: SimulationConfig,
                     num_replications: int,
                     base_seed: int = 42,
                     workers: int = 1,
                     confidence: float = 0.95) -> Dict:
    """
    Run independent replications with seeds base_seed, base_seed + 1, ...

    Each replication builds its own system, so they may run in separate
    processes when `workers` > 1.
    """
    if num_replications < 1:
        raise ValueError(f"num_replications must be at least 1, got {num_replications}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    configs = [config.with_seed(base_seed + i) for i in range(num_replications)]
    logger.info("Running %d replications on %d worker(s)", num_replications, workers)

    if workers > 1:
        with multiprocessing.Pool(processes=workers) as pool:
            results = pool.map(_run_replication, configs)
    else:
        results = [_run_replication(c) for c in configs]

    summary = {
        'replications': num_replications,
        'base_seed': base_seed,
        'confidence': confidence,
        'stop': asdict(config.stop),
        'theoretical': mm1_theoretical_values(config.arrival_rate, config.service_rate),
        'metrics': {},
    }
    for name in METRIC_NAMES + ('served_customers', 'total_time', 'events_processed'):
        summary['metrics'][name] = summarize([getattr(r, name) for r in results], confidence)

    summary['results'] = results
    return summary
