"""Simulation driver, configuration and run-level utilities."""

from .config import SimulationConfig, StopCondition
from .queueing_system import (
    SimulationResult,
    SingleServerSystem,
    run_simulation,
    run_replications,
)
from .theory import mm1_theoretical_values
from .time_series import SimulationTimeSeries, TimeSeries

__all__ = [
    'SimulationConfig',
    'StopCondition',
    'SimulationResult',
    'SingleServerSystem',
    'run_simulation',
    'run_replications',
    'mm1_theoretical_values',
    'SimulationTimeSeries',
    'TimeSeries'
]
