"""Next-event scheduler holding at most one pending event per kind."""

import math
from typing import Optional

from .event import Event, EventKind


class Scheduler:
    """
    Two-slot next-event cache.

    Each entity only ever remembers its own next action, so a general
    priority queue is not needed: scheduling overwrites the slot for the
    event's kind and selection compares two timestamps.
    """

    def __init__(self):
        self._next_arrival: Optional[Event] = None
        self._next_departure: Optional[Event] = None
        self._now = 0.0

    @property
    def now(self) -> float:
        """Time of the most recently dispatched event (0.0 before the first)."""
        return self._now

    def schedule(self, event: Event) -> None:
        """Store an event, replacing any pending event of the same kind."""
        if not math.isfinite(event.time) or event.time < self._now:
            raise ValueError(
                f"Cannot schedule {event.kind.value} at t={event.time!r} "
                f"(now={self._now!r})"
            )
        if event.kind is EventKind.ARRIVAL:
            self._next_arrival = event
        else:
            self._next_departure = event

    def has_pending(self) -> bool:
        return self._next_arrival is not None or self._next_departure is not None

    def pending(self, kind: EventKind) -> Optional[Event]:
        """Look at the pending event of one kind without removing it."""
        if kind is EventKind.ARRIVAL:
            return self._next_arrival
        return self._next_departure

    def pending_count(self) -> int:
        return (self._next_arrival is not None) + (self._next_departure is not None)

    def peek_next_time(self) -> float:
        """Earliest pending timestamp, or infinity if nothing is pending."""
        arrival, departure = self._next_arrival, self._next_departure
        if arrival is not None and departure is not None:
            return min(arrival.time, departure.time)
        if arrival is not None:
            return arrival.time
        if departure is not None:
            return departure.time
        return math.inf

    def advance(self) -> Optional[Event]:
        """
        Remove and return the next event, moving `now` to its time.

        Arrivals win ties with departures at the same timestamp.
        Returns None when nothing is pending.
        """
        arrival, departure = self._next_arrival, self._next_departure

        if arrival is not None and (departure is None or arrival.time <= departure.time):
            event = arrival
            self._next_arrival = None
        elif departure is not None:
            event = departure
            self._next_departure = None
        else:
            return None

        self._now = event.time
        return event
