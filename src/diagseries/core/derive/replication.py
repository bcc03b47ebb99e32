"""Per-member replication lag from replica-set status snapshots."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from diagseries.core.models import (
    PRIMARY,
    SECONDARY,
    ReplicaMember,
    ReplicationStatusSnapshot,
    TimeSeries,
    to_millis,
)
from diagseries.core.names import MemberMetric, MetricName, short_member_name

logger = logging.getLogger(__name__)


@dataclass
class MemberRoster:
    """Stable member identities for one derivation pass.

    Positions follow the sorted member order of the first snapshot. Members
    that appear later are appended in the order they are first seen.
    """

    metrics: dict[str, MemberMetric] = field(default_factory=dict)

    def add(self, member_name: str) -> MemberMetric:
        metric = self.metrics.get(member_name)
        if metric is None:
            taken = {m.member_id for m in self.metrics.values()}
            metric = MemberMetric(
                member_id=short_member_name(member_name, taken),
                position=len(self.metrics),
            )
            self.metrics[member_name] = metric
        return metric


def primary_optime(members: Iterable[ReplicaMember]) -> float | None:
    """Return the optime of the PRIMARY member, or None if there is none."""
    for member in members:
        if member.state == PRIMARY:
            return member.optime
    return None


def member_lag(member: ReplicaMember, reference: float) -> float | None:
    """Lag in seconds behind the primary; None for non-data-bearing states."""
    if member.state == PRIMARY:
        return 0.0
    if member.state == SECONDARY:
        return reference - member.optime
    return None


def derive_replication_lag(
    snapshots: Iterable[ReplicationStatusSnapshot],
) -> dict[MetricName, TimeSeries]:
    """Derive lag series for every replica member.

    The first snapshot only establishes the roster. Each later snapshot
    with a PRIMARY adds one point per PRIMARY or SECONDARY member, both to
    the member's named series and to its ``repl_<n>`` alias. Snapshots
    without a PRIMARY are skipped.

    Args:
        snapshots: Snapshots in chronological order.

    Returns:
        Lag and positional series for every member seen.
    """
    roster = MemberRoster()
    series: dict[MetricName, TimeSeries] = {}

    def register(member_name: str) -> MemberMetric:
        metric = roster.add(member_name)
        if metric not in series:
            alias = metric.positional()
            series[metric] = TimeSeries(metric.key)
            series[alias] = TimeSeries(alias.key)
        return metric

    for index, snapshot in enumerate(snapshots):
        members = sorted(snapshot.members, key=lambda m: m.name)
        if index == 0:
            for member in members:
                register(member.name)
            continue

        reference = primary_optime(members)
        if reference is None:
            logger.debug("No primary in replica status at %s", snapshot.date)
            continue

        timestamp = to_millis(snapshot.date)
        for member in members:
            lag = member_lag(member, reference)
            if lag is None:
                continue
            metric = register(member.name)
            alias = metric.positional()
            series[metric].append(lag, timestamp)
            series[alias].append(lag, timestamp)

    return series
