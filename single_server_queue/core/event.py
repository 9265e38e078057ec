"""Event values exchanged between the scheduler and the entities."""

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    """The two kinds of events an M/M/1 system ever needs."""
    ARRIVAL = 'arrival'
    DEPARTURE = 'departure'


@dataclass(frozen=True)
class Event:
    """
    A timestamped arrival or departure.

    Equality looks at both fields; ordering looks at time only, so two
    events of different kinds at the same instant are neither less nor
    greater than each other. The scheduler breaks that tie.
    """
    time: float
    kind: EventKind

    @classmethod
    def arrival(cls, time: float) -> 'Event':
        return cls(time, EventKind.ARRIVAL)

    @classmethod
    def departure(cls, time: float) -> 'Event':
        return cls(time, EventKind.DEPARTURE)

    @property
    def is_arrival(self) -> bool:
        return self.kind is EventKind.ARRIVAL

    def __lt__(self, other: 'Event') -> bool:
        return self.time < other.time

    def __le__(self, other: 'Event') -> bool:
        return self.time <= other.time

    def __gt__(self, other: 'Event') -> bool:
        return self.time > other.time

    def __ge__(self, other: 'Event') -> bool:
        return self.time >= other.time
