"""diagseries: time series derived from database diagnostic snapshots."""

from diagseries.adapters.storage.in_memory import TimeSeriesStore
from diagseries.core.config import DerivationSettings
from diagseries.core.decoding import (
    SnapshotDecodeError,
    decode_repl_status,
    decode_server_status,
    decode_system_metrics,
)
from diagseries.core.derive import derive_catalog
from diagseries.core.encoding.series import encode_catalog
from diagseries.core.models import (
    DataPoint,
    DiskStat,
    ReplicationStatusSnapshot,
    ServerStatusSnapshot,
    SystemMetricsSnapshot,
    TimeSeries,
)
from diagseries.core.names import DiskMetric, FixedMetric, MemberMetric

__all__ = [
    "DataPoint",
    "DerivationSettings",
    "DiskMetric",
    "DiskStat",
    "FixedMetric",
    "MemberMetric",
    "ReplicationStatusSnapshot",
    "ServerStatusSnapshot",
    "SnapshotDecodeError",
    "SystemMetricsSnapshot",
    "TimeSeries",
    "TimeSeriesStore",
    "decode_repl_status",
    "decode_server_status",
    "decode_system_metrics",
    "derive_catalog",
    "encode_catalog",
]
