"""Tests for the two-slot next-event scheduler."""

import math

import pytest

from single_server_queue.core import Event, EventKind, Scheduler


def test_empty_scheduler():
    scheduler = Scheduler()
    assert scheduler.now == 0.0
    assert not scheduler.has_pending()
    assert scheduler.pending_count() == 0
    assert scheduler.peek_next_time() == math.inf
    assert scheduler.advance() is None
    assert scheduler.now == 0.0


def test_schedule_overwrites_same_kind():
    scheduler = Scheduler()
    scheduler.schedule(Event.arrival(5.0))
    scheduler.schedule(Event.arrival(3.0))
    scheduler.schedule(Event.departure(7.0))
    scheduler.schedule(Event.departure(8.0))

    assert scheduler.pending_count() == 2
    assert scheduler.pending(EventKind.ARRIVAL) == Event.arrival(3.0)
    assert scheduler.pending(EventKind.DEPARTURE) == Event.departure(8.0)


def test_peek_returns_earliest_without_removing():
    scheduler = Scheduler()
    scheduler.schedule(Event.departure(4.0))
    assert scheduler.peek_next_time() == 4.0
    scheduler.schedule(Event.arrival(2.5))
    assert scheduler.peek_next_time() == 2.5
    assert scheduler.pending_count() == 2
    assert scheduler.now == 0.0


def test_advance_dispatches_in_time_order():
    scheduler = Scheduler()
    scheduler.schedule(Event.arrival(3.0))
    scheduler.schedule(Event.departure(1.0))

    first = scheduler.advance()
    assert first == Event.departure(1.0)
    assert scheduler.now == 1.0

    second = scheduler.advance()
    assert second == Event.arrival(3.0)
    assert scheduler.now == 3.0

    assert scheduler.advance() is None
    assert scheduler.now == 3.0


@pytest.mark.parametrize('departure_first', [False, True])
def test_arrival_wins_ties(departure_first):
    for _ in range(3):
        scheduler = Scheduler()
        events = [Event.arrival(2.0), Event.departure(2.0)]
        if departure_first:
            events.reverse()
        for event in events:
            scheduler.schedule(event)

        assert scheduler.advance().kind is EventKind.ARRIVAL
        assert scheduler.advance().kind is EventKind.DEPARTURE
        assert scheduler.now == 2.0


def test_now_is_monotonic():
    scheduler = Scheduler()
    times = []
    scheduler.schedule(Event.arrival(0.0))
    next_times = iter([1.0, 1.0, 2.5, 4.0, 4.0, 7.0])
    for _ in range(6):
        event = scheduler.advance()
        times.append(scheduler.now)
        kind = EventKind.DEPARTURE if event.is_arrival else EventKind.ARRIVAL
        scheduler.schedule(Event(next(next_times), kind))

    assert times == sorted(times)


def test_rejects_events_in_the_past():
    scheduler = Scheduler()
    scheduler.schedule(Event.arrival(5.0))
    scheduler.advance()

    with pytest.raises(ValueError):
        scheduler.schedule(Event.departure(4.0))
    # Same instant is fine
    scheduler.schedule(Event.departure(5.0))


@pytest.mark.parametrize('bad_time', [math.nan, math.inf, -math.inf])
def test_rejects_non_finite_times(bad_time):
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.schedule(Event.arrival(bad_time))


def test_event_ordering_uses_time_only():
    early, late = Event.departure(1.0), Event.arrival(2.0)
    assert early < late
    assert late > early
    assert Event.arrival(1.0) <= Event.departure(1.0)
    assert Event.arrival(1.0) != Event.departure(1.0)
    assert sorted([late, early]) == [early, late]
