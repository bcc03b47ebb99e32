"""Derivers turning snapshot sequences into series."""

from collections.abc import Iterable

from diagseries.core.catalog import Catalog, initialize
from diagseries.core.config import DEFAULT_SETTINGS, DerivationSettings
from diagseries.core.derive.replication import derive_replication_lag
from diagseries.core.derive.server_status import derive_server_status
from diagseries.core.derive.system_metrics import derive_system_metrics
from diagseries.core.models import (
    ReplicationStatusSnapshot,
    ServerStatusSnapshot,
    SystemMetricsSnapshot,
)


def derive_catalog(
    server_status: Iterable[ServerStatusSnapshot] = (),
    system_metrics: Iterable[SystemMetricsSnapshot] = (),
    repl_status: Iterable[ReplicationStatusSnapshot] = (),
    settings: DerivationSettings = DEFAULT_SETTINGS,
) -> Catalog:
    """Run every deriver over its sequence and collect a fresh catalog.

    An empty sequence leaves that source's fixed series present and empty.
    """
    series = initialize()
    series.update(derive_server_status(server_status, settings))
    cpu, disks = derive_system_metrics(system_metrics)
    series.update(cpu)
    series.update(derive_replication_lag(repl_status))
    return Catalog(series=series, disks=disks)


__all__ = [
    "derive_catalog",
    "derive_replication_lag",
    "derive_server_status",
    "derive_system_metrics",
]
