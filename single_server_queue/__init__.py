"""Single-server (M/M/1) queue discrete-event simulation package."""

from .core import Client, Event, EventKind, Scheduler, Server, Statistics
from .system import (
    SimulationConfig,
    SimulationResult,
    SingleServerSystem,
    StopCondition,
    run_replications,
    run_simulation,
)

__version__ = '0.1.0'

__all__ = [
    'Client',
    'Event',
    'EventKind',
    'Scheduler',
    'Server',
    'Statistics',
    'SimulationConfig',
    'SimulationResult',
    'SingleServerSystem',
    'StopCondition',
    'run_replications',
    'run_simulation'
]
