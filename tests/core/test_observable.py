"""
Observable and Pending Result Tests

Tests for the shared-state primitives showing:
- Copy-out reads
- Subscriber channels receive every transition in order
- Single-slot pending result semantics

To run:
    pytest tests/core/test_observable.py -v
"""

import threading

import pytest

from core.observable import Observable
from core.pending_result import PendingResult

# =============================================================================
# OBSERVABLE TESTS
# =============================================================================


@pytest.mark.unit
def test_get_returns_copy():
    shared = Observable([1, 2])

    snapshot = shared.get()
    snapshot.append(3)

    assert shared.get() == [1, 2]


@pytest.mark.unit
def test_subscriber_receives_values_in_order():
    value = Observable(0)
    channel = value.subscribe()

    for number in (1, 2, 3):
        value.set(number)

    assert [channel.get_nowait() for _ in range(3)] == [1, 2, 3]


@pytest.mark.unit
def test_subscribe_only_sees_later_values():
    value = Observable("a")
    value.set("b")

    channel = value.subscribe()

    assert channel.empty()


@pytest.mark.unit
def test_unsubscribe_stops_delivery():
    value = Observable(0)
    channel = value.subscribe()
    value.unsubscribe(channel)

    value.set(1)

    assert channel.empty()
    # Unsubscribing twice is harmless
    value.unsubscribe(channel)


@pytest.mark.unit
def test_update_is_atomic_across_threads():
    counter = Observable(0)

    def bump():
        for _ in range(1000):
            counter.update(lambda n: n + 1)

    threads = [threading.Thread(target=bump) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert counter.get() == 4000


# =============================================================================
# PENDING RESULT TESTS
# =============================================================================


@pytest.mark.unit
def test_pending_result_take_empties_cell():
    cell = PendingResult()
    cell.deposit("picked")

    assert cell.take() == "picked"
    assert cell.take() is None
    assert cell.is_empty()


@pytest.mark.unit
def test_newer_deposit_replaces_unconsumed_one():
    cell = PendingResult()
    cell.deposit("first")
    cell.deposit("second")

    assert cell.take() == "second"


@pytest.mark.unit
def test_take_does_not_block_while_producer_holds_lock():
    cell = PendingResult()
    cell.deposit("value")

    with cell._lock:
        assert cell.take() is None

    assert cell.take() == "value"
