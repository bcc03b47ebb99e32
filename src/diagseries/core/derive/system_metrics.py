"""CPU and disk series from host system-metrics snapshots."""

import logging
from collections.abc import Iterable

from diagseries.core.models import (
    CpuCounters,
    DiskCounters,
    DiskStat,
    SystemMetricsSnapshot,
    TimeSeries,
    to_millis,
)
from diagseries.core.names import FixedMetric, MetricName
from diagseries.core.ratio import safe_ratio

logger = logging.getLogger(__name__)

CPU_STATES: tuple[tuple[FixedMetric, str], ...] = (
    (FixedMetric.CPU_IDLE, "idle_ms"),
    (FixedMetric.CPU_IOWAIT, "iowait_ms"),
    (FixedMetric.CPU_SYSTEM, "system_ms"),
    (FixedMetric.CPU_USER, "user_ms"),
    (FixedMetric.CPU_NICE, "nice_ms"),
    (FixedMetric.CPU_STEAL, "steal_ms"),
    (FixedMetric.CPU_SOFTIRQ, "softirq_ms"),
)


def disk_utilization(current: DiskCounters, previous: DiskCounters) -> float | None:
    """Percentage of request time the device spent busy between two readings.

    Returns:
        The utilization, or None when no request time elapsed or the value
        falls outside 0-100.
    """
    total_ms = (current.read_time_ms + current.write_time_ms) - (
        previous.read_time_ms + previous.write_time_ms
    )
    busy = safe_ratio(100 * (current.io_time_ms - previous.io_time_ms), total_ms, None)
    if busy is None or not 0 <= busy <= 100:
        return None
    return busy


def disk_iops(current: DiskCounters, previous: DiskCounters, seconds: float) -> float:
    ios = (current.reads + current.writes) - (previous.reads + previous.writes)
    return safe_ratio(ios, seconds)


def cpu_percentages(
    current: CpuCounters, previous: CpuCounters
) -> dict[FixedMetric, float] | None:
    """Share of CPU time spent in each state between two readings.

    Returns None when the counters did not advance.
    """
    total = current.total_ms - previous.total_ms
    if total == 0:
        return None
    return {
        metric: 100 * (getattr(current, attr) - getattr(previous, attr)) / total
        for metric, attr in CPU_STATES
    }


def derive_system_metrics(
    snapshots: Iterable[SystemMetricsSnapshot],
) -> tuple[dict[MetricName, TimeSeries], dict[str, DiskStat]]:
    """Derive CPU and per-disk series from ordered system-metrics snapshots.

    Every consecutive pair produces at most one point per series, stamped
    with the later snapshot's time.

    Args:
        snapshots: Snapshots in chronological order.

    Returns:
        A tuple of (CPU series keyed by metric, disk stats keyed by device).
    """
    cpu: dict[MetricName, TimeSeries] = {
        metric: TimeSeries(metric.key) for metric, _ in CPU_STATES
    }
    disks: dict[str, DiskStat] = {}
    previous: SystemMetricsSnapshot | None = None

    for snapshot in snapshots:
        if previous is None:
            previous = snapshot
            continue
        timestamp = to_millis(snapshot.start)
        seconds = snapshot.start - previous.start

        for device, counters in snapshot.disks.items():
            before = previous.disks.get(device)
            if before is None:
                continue
            stat = disks.setdefault(device, DiskStat.empty(device))
            utilization = disk_utilization(counters, before)
            if utilization is None:
                logger.debug("Dropping %s utilization at %s", device, timestamp)
            else:
                stat.utilization.append(utilization, timestamp)
            stat.iops.append(disk_iops(counters, before, seconds), timestamp)

        percentages = cpu_percentages(snapshot.cpu, previous.cpu)
        if percentages is None:
            logger.debug("CPU counters unchanged at %s", timestamp)
        else:
            for metric, value in percentages.items():
                cpu[metric].append(value, timestamp)

        previous = snapshot

    return cpu, disks
