"""Unit tests for the per-name lock table."""

from __future__ import annotations

import threading

from storage.locks import LockTable


def test_hold_reports_acquired_and_discards_entries() -> None:
    """Entries should exist only while someone holds or waits on them."""
    table = LockTable()

    with table.hold(["a", "b"], timeout=1.0) as acquired:
        assert acquired
        assert len(table) == 2

    assert len(table) == 0


def test_hold_times_out_on_a_held_name() -> None:
    """A second holder should give up after the timeout instead of blocking."""
    table = LockTable()

    with table.hold(["a"], timeout=1.0):
        with table.hold(["a"], timeout=0.05) as acquired:
            assert not acquired

    assert len(table) == 0


def test_partial_acquisition_is_released() -> None:
    """When one of two names is busy, the other must not stay locked."""
    table = LockTable()

    with table.hold(["b"], timeout=1.0):
        with table.hold(["a", "b"], timeout=0.05) as acquired:
            assert not acquired
        with table.hold(["a"], timeout=0.05) as acquired:
            assert acquired


def test_distinct_names_do_not_block_each_other() -> None:
    """Locks on different names should be independent."""
    table = LockTable()
    results = []

    def worker() -> None:
        with table.hold(["other"], timeout=0.5) as acquired:
            results.append(acquired)

    with table.hold(["mine"], timeout=1.0):
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

    assert results == [True]


def test_opposite_orders_do_not_deadlock() -> None:
    """Holding [a, b] and [b, a] concurrently should always both succeed."""
    table = LockTable()
    outcomes = []
    barrier = threading.Barrier(2)

    def worker(names: list) -> None:
        barrier.wait()
        for _ in range(200):
            with table.hold(names, timeout=5.0) as acquired:
                outcomes.append(acquired)

    threads = [threading.Thread(target=worker, args=(["a", "b"],)), threading.Thread(target=worker, args=(["b", "a"],))]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(outcomes) == 400
    assert all(outcomes)
    assert len(table) == 0
