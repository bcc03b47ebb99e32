"""BDD step definitions for derivation features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from diagseries.adapters.storage.in_memory import TimeSeriesStore
from diagseries.core.models import (
    OpCounters,
    ReplicaMember,
    ReplicationStatusSnapshot,
    ServerStatusSnapshot,
    SystemMetricsSnapshot,
)
from diagseries.core.names import FixedMetric
from tests.builders import disk, repl_status, system_metrics


@dataclass
class DerivationContext:
    """Snapshots collected by the Given steps."""

    store: TimeSeriesStore = field(default_factory=TimeSeriesStore)
    server_status: list[ServerStatusSnapshot] = field(default_factory=list)
    system_metrics: list[SystemMetricsSnapshot] = field(default_factory=list)
    repl_status: list[ReplicationStatusSnapshot] = field(default_factory=list)


@pytest.fixture
def ctx() -> DerivationContext:
    """Fresh scenario context for each test."""
    return DerivationContext()


@given(
    parsers.parse(
        "a server status at {at:d} seconds with uptime {uptime:d} "
        "and {inserts:d} inserts"
    )
)
def step_server_status(
    ctx: DerivationContext, at: int, uptime: int, inserts: int
) -> None:
    ctx.server_status.append(
        ServerStatusSnapshot(
            local_time=at, uptime=uptime, op_counters=OpCounters(insert=inserts)
        )
    )


@given(
    parsers.parse(
        'system metrics at {at:d} seconds with disk "{device}" at {ios:d} operations'
    )
)
def step_system_metrics(ctx: DerivationContext, at: int, device: str, ios: int) -> None:
    ctx.system_metrics.append(system_metrics(at, {device: disk(ios=ios)}, idle_ms=at))


@given(
    parsers.parse(
        'a replica status at {at:d} seconds with "{first}" as {first_state} at optime '
        '{first_optime:d} and "{second}" as {second_state} at optime {second_optime:d}'
    )
)
def step_repl_status(
    ctx: DerivationContext,
    at: int,
    first: str,
    first_state: str,
    first_optime: int,
    second: str,
    second_state: str,
    second_optime: int,
) -> None:
    ctx.repl_status.append(
        repl_status(
            at,
            ReplicaMember(first, first_state, first_optime),
            ReplicaMember(second, second_state, second_optime),
        )
    )


@when("the store is rebuilt")
def step_rebuild(ctx: DerivationContext) -> None:
    ctx.store.rebuild(ctx.server_status, ctx.system_metrics, ctx.repl_status)


@then(parsers.parse('series "{name}" has points "{points}"'))
def step_series_points(ctx: DerivationContext, name: str, points: str) -> None:
    expected = [
        [float(value), float(ts)]
        for value, ts in (pair.split("@") for pair in points.split(","))
    ]
    series = ctx.store.get(name)
    assert series is not None
    assert series.datapoints() == expected


@then(parsers.parse('series "{name}" has no points'))
def step_series_empty(ctx: DerivationContext, name: str) -> None:
    series = ctx.store.get(name)
    assert series is not None
    assert series.points == []


@then("every fixed series is present")
def step_fixed_present(ctx: DerivationContext) -> None:
    for metric in FixedMetric:
        assert ctx.store.get(metric.value) is not None
