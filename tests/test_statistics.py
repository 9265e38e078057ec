"""Tests for the time-weighted statistics accumulator."""

import pytest

from single_server_queue.core import Statistics


def assert_conserved(stats):
    busy = 1 if stats.server_busy else 0
    assert stats.current_customers_in_system() == stats.current_queue_length() + busy


def test_scripted_areas_match_step_function_integral():
    stats = Statistics()

    # t=0: customer 1 arrives to an idle server and goes straight into service
    stats.record_queue_change(0.0, 1)
    stats.record_queue_change(0.0, 0)
    stats.record_service_start(0.0, 0.0)
    assert_conserved(stats)

    # t=2 and t=3: customers 2 and 3 join the queue
    stats.record_queue_change(2.0, 1)
    assert_conserved(stats)
    stats.record_queue_change(3.0, 2)
    assert_conserved(stats)

    # t=5: customer 1 leaves, customer 2 (arrived at 2) starts
    stats.record_service_end(5.0, 5.0)
    assert_conserved(stats)
    stats.record_queue_change(5.0, 1)
    stats.record_service_start(5.0, 3.0)
    assert_conserved(stats)

    # t=9: customer 2 leaves, customer 3 is still queued
    stats.record_service_end(9.0, 4.0)
    assert_conserved(stats)

    # queue length: 0 on [0,2), 1 on [2,3), 2 on [3,5), 1 on [5,9)
    assert stats.area_under_queue_length == pytest.approx(0 + 1 + 4 + 4)
    # in system: 1 on [0,2), 2 on [2,3), 3 on [3,5), 2 on [5,9)
    assert stats.area_under_customers_in_system == pytest.approx(2 + 2 + 6 + 8)
    assert stats.last_event_time == 9.0

    assert stats.served_customers == 2
    assert stats.current_queue_length() == 1
    assert stats.current_customers_in_system() == 1
    assert stats.average_wait_time() == pytest.approx(1.5)
    assert stats.average_queue_length(10.0) == pytest.approx(0.9)
    assert stats.average_customers_in_system(10.0) == pytest.approx(1.8)
    assert stats.utilization(10.0) == pytest.approx(0.9)
    assert stats.throughput(10.0) == pytest.approx(0.2)


def test_change_does_not_affect_area_before_it():
    stats = Statistics()
    stats.record_queue_change(4.0, 10)
    assert stats.area_under_queue_length == 0.0
    stats.record_queue_change(4.5, 0)
    assert stats.area_under_queue_length == pytest.approx(5.0)


def test_accessors_are_total_before_any_data():
    stats = Statistics()
    assert stats.average_wait_time() == 0.0
    assert stats.average_queue_length(0.0) == 0.0
    assert stats.average_customers_in_system(0.0) == 0.0
    assert stats.utilization(0.0) == 0.0
    assert stats.instantaneous_utilization(0.0) == 0.0
    assert stats.throughput(0.0) == 0.0
    assert stats.current_queue_length() == 0
    assert stats.current_customers_in_system() == 0


def test_snapshot_contains_every_metric():
    stats = Statistics()
    stats.record_queue_change(0.0, 0)
    stats.record_service_start(0.0, 0.0)
    stats.record_service_end(2.0, 2.0)

    snapshot = stats.snapshot(4.0)
    assert snapshot == {
        'served_customers': 1,
        'average_wait_time': 0.0,
        'average_queue_length': 0.0,
        'average_customers_in_system': pytest.approx(0.5),
        'utilization': pytest.approx(0.5),
        'throughput': pytest.approx(0.25),
    }


def test_time_cannot_go_backwards():
    stats = Statistics()
    stats.record_queue_change(3.0, 1)
    with pytest.raises(ValueError):
        stats.record_service_start(2.0, 0.0)
