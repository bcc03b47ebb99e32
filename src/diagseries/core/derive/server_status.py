"""Gauge and rate series from server-status snapshots."""

import logging
from collections.abc import Callable, Iterable

from diagseries.core.config import DEFAULT_SETTINGS, DerivationSettings
from diagseries.core.models import ServerStatusSnapshot, TimeSeries, to_millis
from diagseries.core.names import FixedMetric, MetricName
from diagseries.core.ratio import safe_ratio

logger = logging.getLogger(__name__)

Gauge = Callable[[ServerStatusSnapshot, DerivationSettings], float]
Counter = Callable[[ServerStatusSnapshot], int]


def _average_latency(latency: int, ops: int, settings: DerivationSettings) -> float:
    return safe_ratio(latency, ops) / settings.latency_divisor


# Instantaneous values, recorded for every snapshot past a restart check.
GAUGES: tuple[tuple[FixedMetric, Gauge], ...] = (
    (FixedMetric.MEM_RESIDENT, lambda s, c: s.mem.resident / c.memory_divisor),
    (FixedMetric.MEM_VIRTUAL, lambda s, c: s.mem.virtual / c.memory_divisor),
    (FixedMetric.CONNS_AVAILABLE, lambda s, c: float(s.connections.available)),
    (FixedMetric.CONNS_CURRENT, lambda s, c: float(s.connections.current)),
    (
        FixedMetric.Q_ACTIVE_READ,
        lambda s, c: float(s.global_lock.active_clients.readers),
    ),
    (
        FixedMetric.Q_ACTIVE_WRITE,
        lambda s, c: float(s.global_lock.active_clients.writers),
    ),
    (
        FixedMetric.Q_QUEUED_READ,
        lambda s, c: float(s.global_lock.current_queue.readers),
    ),
    (
        FixedMetric.Q_QUEUED_WRITE,
        lambda s, c: float(s.global_lock.current_queue.writers),
    ),
    (
        FixedMetric.LATENCY_READ,
        lambda s, c: _average_latency(
            s.op_latencies.reads.latency, s.op_latencies.reads.ops, c
        ),
    ),
    (
        FixedMetric.LATENCY_WRITE,
        lambda s, c: _average_latency(
            s.op_latencies.writes.latency, s.op_latencies.writes.ops, c
        ),
    ),
    (
        FixedMetric.LATENCY_COMMAND,
        lambda s, c: _average_latency(
            s.op_latencies.commands.latency, s.op_latencies.commands.ops, c
        ),
    ),
    (
        FixedMetric.WT_CACHE_MAX,
        lambda s, c: s.cache.max_bytes_configured / c.cache_divisor,
    ),
    (
        FixedMetric.WT_CACHE_USED,
        lambda s, c: s.cache.currently_in_cache / c.cache_divisor,
    ),
    (
        FixedMetric.WT_CACHE_DIRTY,
        lambda s, c: s.cache.tracked_dirty_bytes / c.cache_divisor,
    ),
    (FixedMetric.TICKET_AVAIL_READ, lambda s, c: float(s.tickets.read_available)),
    (FixedMetric.TICKET_AVAIL_WRITE, lambda s, c: float(s.tickets.write_available)),
)

# Cumulative counters, charted as a rate against the previous snapshot.
COUNTERS: tuple[tuple[FixedMetric, Counter], ...] = (
    (FixedMetric.MEM_PAGE_FAULTS, lambda s: s.page_faults),
    (FixedMetric.CONNS_CREATED_PER_MINUTE, lambda s: s.connections.total_created),
    (FixedMetric.OPS_QUERY, lambda s: s.op_counters.query),
    (FixedMetric.OPS_INSERT, lambda s: s.op_counters.insert),
    (FixedMetric.OPS_UPDATE, lambda s: s.op_counters.update),
    (FixedMetric.OPS_DELETE, lambda s: s.op_counters.delete),
    (FixedMetric.OPS_GETMORE, lambda s: s.op_counters.getmore),
    (FixedMetric.OPS_COMMAND, lambda s: s.op_counters.command),
    (FixedMetric.SCAN_KEYS, lambda s: s.query_executor.scanned),
    (FixedMetric.SCAN_OBJECTS, lambda s: s.query_executor.scanned_objects),
    (FixedMetric.SCAN_SORT, lambda s: s.query_executor.scan_and_order),
    (FixedMetric.WT_MODIFIED_EVICTED, lambda s: s.cache.modified_pages_evicted),
    (FixedMetric.WT_UNMODIFIED_EVICTED, lambda s: s.cache.unmodified_pages_evicted),
    (FixedMetric.WT_READ_IN_CACHE, lambda s: s.cache.pages_read_into_cache),
    (FixedMetric.WT_WRITTEN_FROM_CACHE, lambda s: s.cache.pages_written_from_cache),
)

SERVER_STATUS_METRICS = tuple(m for m, _ in GAUGES) + tuple(m for m, _ in COUNTERS)


def derive_server_status(
    snapshots: Iterable[ServerStatusSnapshot],
    settings: DerivationSettings = DEFAULT_SETTINGS,
) -> dict[MetricName, TimeSeries]:
    """Derive gauge and rate series from ordered server-status snapshots.

    A snapshot is used only when its uptime is greater than the uptime of
    the snapshot before it. A non-increasing uptime marks a restart: that
    snapshot emits nothing and never becomes a rate baseline. Rates are
    taken between consecutive qualifying snapshots.

    Args:
        snapshots: Snapshots in chronological order.
        settings: Unit conversions.

    Returns:
        A fresh series for every server-status metric.
    """
    series: dict[MetricName, TimeSeries] = {
        metric: TimeSeries(metric.key) for metric in SERVER_STATUS_METRICS
    }
    last_uptime = 0.0
    baseline: ServerStatusSnapshot | None = None

    for snapshot in snapshots:
        if snapshot.uptime <= last_uptime:
            logger.debug(
                "Skipping server status at %s: uptime %s after %s",
                snapshot.local_time,
                snapshot.uptime,
                last_uptime,
            )
            last_uptime = snapshot.uptime
            continue
        last_uptime = snapshot.uptime
        timestamp = to_millis(snapshot.local_time)

        for metric, gauge in GAUGES:
            series[metric].append(gauge(snapshot, settings), timestamp)

        if baseline is not None:
            elapsed = snapshot.local_time - baseline.local_time
            windows = elapsed / settings.rate_window_seconds
            for metric, counter in COUNTERS:
                delta = counter(snapshot) - counter(baseline)
                series[metric].append(safe_ratio(delta, windows), timestamp)

        baseline = snapshot

    return series
