"""Core components of the single-server queue simulation."""

from .event import Event, EventKind
from .scheduler import Scheduler
from .statistics import Statistics
from .queue import Server
from .client import Client

__all__ = [
    'Event',
    'EventKind',
    'Scheduler',
    'Statistics',
    'Server',
    'Client'
]
