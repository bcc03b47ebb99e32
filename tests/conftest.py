"""Shared test fixtures for all test modules."""

import pytest

from diagseries.adapters.storage.in_memory import TimeSeriesStore
from tests.builders import (
    disk,
    primary,
    repl_status,
    secondary,
    server_status,
    system_metrics,
)


@pytest.fixture
def store() -> TimeSeriesStore:
    """Provide an empty store."""
    return TimeSeriesStore()


@pytest.fixture
def server_status_run():
    """Five server-status snapshots one minute apart with a restart.

    Uptimes run 100, 200, 10, 70, 130; counters 0, 60, 5, 65, 125.
    """
    return [
        server_status(0, 100, 0),
        server_status(60, 200, 60),
        server_status(120, 10, 5),
        server_status(180, 70, 65),
        server_status(240, 130, 125),
    ]


@pytest.fixture
def system_metrics_run():
    """Two system-metrics snapshots 10 seconds apart, one disk at 50%."""
    return [
        system_metrics(
            0,
            {"sda": disk(ios=1000, read_ms=100, write_ms=100, io_ms=50)},
            idle_ms=1000,
            user_ms=1000,
            system_ms=1000,
        ),
        system_metrics(
            10,
            {"sda": disk(ios=1200, read_ms=200, write_ms=200, io_ms=150)},
            idle_ms=1050,
            user_ms=1030,
            system_ms=1020,
        ),
    ]


@pytest.fixture
def repl_status_run():
    """Three replica-status snapshots; the last one has no primary."""
    return [
        repl_status(0, primary("a"), secondary("b")),
        repl_status(10, primary("a", 100), secondary("b", 70)),
        repl_status(20, secondary("a", 110), secondary("b", 90)),
    ]


@pytest.fixture
def loaded_store(
    store: TimeSeriesStore, server_status_run, system_metrics_run, repl_status_run
) -> TimeSeriesStore:
    """Provide a store rebuilt from all three sample runs."""
    store.rebuild(server_status_run, system_metrics_run, repl_status_run)
    return store
