"""Core domain models for diagnostic snapshots and derived series."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

# --- Series ---


@dataclass(frozen=True)
class DataPoint:
    """A single derived measurement.

    Attributes:
        value: The derived value.
        timestamp: Unix timestamp in milliseconds.
    """

    value: float
    timestamp: float

    def as_pair(self) -> list[float]:
        """Return the point as a ``[value, timestamp]`` pair."""
        return [self.value, self.timestamp]


@dataclass
class TimeSeries:
    """A named, chronologically ordered sequence of data points.

    Attributes:
        target: Display name of the series.
        points: Data points in the order they were appended.
    """

    target: str
    points: list[DataPoint] = field(default_factory=list)

    def append(self, value: float, timestamp: float) -> None:
        """Append a point at the end of the series."""
        self.points.append(DataPoint(value=value, timestamp=timestamp))

    def datapoints(self) -> list[list[float]]:
        return [p.as_pair() for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class DiskStat:
    """Utilization and IOPS series for one disk device."""

    utilization: TimeSeries
    iops: TimeSeries

    @classmethod
    def empty(cls, device: str) -> "DiskStat":
        return cls(utilization=TimeSeries(device), iops=TimeSeries(device))


# --- Server status ---


@dataclass(frozen=True)
class Memory:
    """Resident and virtual memory in megabytes."""

    resident: int = 0
    virtual: int = 0


@dataclass(frozen=True)
class Connections:
    available: int = 0
    current: int = 0
    total_created: int = 0


@dataclass(frozen=True)
class ReadersWriters:
    readers: int = 0
    writers: int = 0


@dataclass(frozen=True)
class GlobalLock:
    active_clients: ReadersWriters = field(default_factory=ReadersWriters)
    current_queue: ReadersWriters = field(default_factory=ReadersWriters)


@dataclass(frozen=True)
class LatencyHistogram:
    """Cumulative latency in microseconds and operation count."""

    latency: int = 0
    ops: int = 0


@dataclass(frozen=True)
class OpLatencies:
    reads: LatencyHistogram = field(default_factory=LatencyHistogram)
    writes: LatencyHistogram = field(default_factory=LatencyHistogram)
    commands: LatencyHistogram = field(default_factory=LatencyHistogram)


@dataclass(frozen=True)
class WiredTigerCache:
    """WiredTiger cache sizes in bytes and cumulative page counters."""

    max_bytes_configured: int = 0
    currently_in_cache: int = 0
    tracked_dirty_bytes: int = 0
    modified_pages_evicted: int = 0
    unmodified_pages_evicted: int = 0
    pages_read_into_cache: int = 0
    pages_written_from_cache: int = 0


@dataclass(frozen=True)
class Tickets:
    """Available read/write concurrency tickets."""

    read_available: int = 0
    write_available: int = 0


@dataclass(frozen=True)
class OpCounters:
    query: int = 0
    insert: int = 0
    update: int = 0
    delete: int = 0
    getmore: int = 0
    command: int = 0


@dataclass(frozen=True)
class QueryExecutor:
    scanned: int = 0
    scanned_objects: int = 0
    scan_and_order: int = 0


@dataclass(frozen=True)
class ServerStatusSnapshot:
    """One server-status reading.

    Attributes:
        local_time: Unix timestamp in seconds when the reading was taken.
        uptime: Process uptime in seconds.
    """

    local_time: float
    uptime: float
    mem: Memory = field(default_factory=Memory)
    connections: Connections = field(default_factory=Connections)
    global_lock: GlobalLock = field(default_factory=GlobalLock)
    op_latencies: OpLatencies = field(default_factory=OpLatencies)
    cache: WiredTigerCache = field(default_factory=WiredTigerCache)
    tickets: Tickets = field(default_factory=Tickets)
    op_counters: OpCounters = field(default_factory=OpCounters)
    query_executor: QueryExecutor = field(default_factory=QueryExecutor)
    page_faults: int = 0


# --- System metrics ---


@dataclass(frozen=True)
class DiskCounters:
    """Cumulative counters for one disk device."""

    reads: int = 0
    writes: int = 0
    read_time_ms: int = 0
    write_time_ms: int = 0
    io_time_ms: int = 0


@dataclass(frozen=True)
class CpuCounters:
    """Cumulative milliseconds spent in each CPU state."""

    idle_ms: int = 0
    iowait_ms: int = 0
    system_ms: int = 0
    user_ms: int = 0
    nice_ms: int = 0
    steal_ms: int = 0
    softirq_ms: int = 0

    @property
    def total_ms(self) -> int:
        return (
            self.idle_ms
            + self.iowait_ms
            + self.system_ms
            + self.user_ms
            + self.nice_ms
            + self.steal_ms
            + self.softirq_ms
        )


@dataclass(frozen=True)
class SystemMetricsSnapshot:
    """One host system-metrics reading.

    Attributes:
        start: Unix timestamp in seconds when the reading was taken.
        disks: Counters keyed by device label.
        cpu: CPU state counters.
    """

    start: float
    disks: dict[str, DiskCounters] = field(default_factory=dict)
    cpu: CpuCounters = field(default_factory=CpuCounters)


# --- Replica set status ---

PRIMARY = "PRIMARY"
SECONDARY = "SECONDARY"


@dataclass(frozen=True)
class ReplicaMember:
    """A replica-set member as reported by one status reading.

    Attributes:
        name: The member's ``host:port`` name.
        state: State string (PRIMARY, SECONDARY, RECOVERING, ARBITER, ...).
        optime: Unix timestamp in seconds of the last applied operation.
    """

    name: str
    state: str
    optime: float = 0.0


@dataclass(frozen=True)
class ReplicationStatusSnapshot:
    """One replica-set status reading taken at ``date`` (Unix seconds)."""

    date: float
    members: tuple[ReplicaMember, ...] = ()


def to_millis(seconds: float) -> float:
    """Convert a Unix timestamp in seconds to whole milliseconds."""
    return float(round(seconds * 1000))


def utc_seconds(value: datetime) -> float:
    """Unix seconds of ``value``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.timestamp()
