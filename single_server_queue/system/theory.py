"""Closed-form steady-state values for the M/M/1 queue."""

import math
from typing import Dict


def mm1_theoretical_values(arrival_rate: float, service_rate: float) -> Dict[str, float]:
    """
    Steady-state M/M/1 metrics with rho = lambda / mu.

    For rho >= 1 the queue grows without bound: waits and lengths are
    infinite, the server is always busy and departures occur at rate mu.
    """
    rho = arrival_rate / service_rate
    if rho >= 1.0:
        return {
            'wait_time': math.inf,
            'queue_length': math.inf,
            'customers_in_system': math.inf,
            'utilization': 1.0,
            'throughput': service_rate,
        }

    return {
        'wait_time': rho / (service_rate - arrival_rate),
        'queue_length': rho * rho / (1.0 - rho),
        'customers_in_system': rho / (1.0 - rho),
        'utilization': rho,
        'throughput': arrival_rate,
    }


def relative_error(observed: float, expected: float) -> float:
    """|observed - expected| / |expected|; nan when expected is 0 or infinite."""
    if expected == 0 or math.isinf(expected):
        return math.nan
    return abs(observed - expected) / abs(expected)
