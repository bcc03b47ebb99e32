"""Decoders from raw diagnostic documents to snapshot models.

Documents use the server's own field names, e.g. the output of
``db.serverStatus()``, the ``systemMetrics`` section of a diagnostic data
capture, and ``replSetGetStatus``. Extended-JSON wrappers such as
``{"$date": ...}``, ``{"$numberLong": ...}`` and ``{"$timestamp": ...}`` are
unwrapped.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from diagseries.core.models import (
    Connections,
    CpuCounters,
    DiskCounters,
    GlobalLock,
    LatencyHistogram,
    Memory,
    OpCounters,
    OpLatencies,
    QueryExecutor,
    ReadersWriters,
    ReplicaMember,
    ReplicationStatusSnapshot,
    ServerStatusSnapshot,
    SystemMetricsSnapshot,
    Tickets,
    WiredTigerCache,
    utc_seconds,
)

Document = Mapping[str, Any]


class SnapshotDecodeError(ValueError):
    """Raised when a document cannot be decoded into a snapshot."""


def _lookup(doc: Document, path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return None
        value = value[part]
    return value


def _number(value: Any, field: str) -> float:
    if isinstance(value, Mapping):
        for wrapper in ("$numberLong", "$numberInt", "$numberDouble"):
            if wrapper in value:
                return _number(value[wrapper], field)
    if isinstance(value, bool):
        raise SnapshotDecodeError(f"{field}: expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value) if "." in value else int(value)
        except ValueError:
            pass
    raise SnapshotDecodeError(f"{field}: expected a number, got {value!r}")


def _int(doc: Document, path: str) -> int:
    """Read an optional counter, defaulting to 0 when absent."""
    value = _lookup(doc, path)
    if value is None:
        return 0
    return int(_number(value, path))


def _seconds(value: Any, field: str) -> float:
    """Convert a date value to Unix seconds.

    Accepts datetimes (naive ones are taken as UTC), ISO-8601 strings,
    ``{"$date": ...}`` wrappers, and numbers in epoch milliseconds.
    """
    if isinstance(value, Mapping) and "$date" in value:
        return _seconds(value["$date"], field)
    if isinstance(value, datetime):
        return utc_seconds(value)
    if isinstance(value, str):
        try:
            return _seconds(datetime.fromisoformat(value.replace("Z", "+00:00")), field)
        except ValueError as exc:
            raise SnapshotDecodeError(f"{field}: invalid date {value!r}") from exc
    if value is None:
        raise SnapshotDecodeError(f"{field}: missing")
    return _number(value, field) / 1000


def _required(doc: Document, path: str) -> Any:
    value = _lookup(doc, path)
    if value is None:
        raise SnapshotDecodeError(f"{path}: missing")
    return value


def decode_server_status(doc: Document) -> ServerStatusSnapshot:
    """Decode a ``serverStatus`` document.

    Raises:
        SnapshotDecodeError: If ``localTime`` or ``uptime`` is missing or a
            field has the wrong type.
    """
    cache = "wiredTiger.cache."
    tickets = "wiredTiger.concurrentTransactions."
    return ServerStatusSnapshot(
        local_time=_seconds(_required(doc, "localTime"), "localTime"),
        uptime=_number(_required(doc, "uptime"), "uptime"),
        mem=Memory(
            resident=_int(doc, "mem.resident"),
            virtual=_int(doc, "mem.virtual"),
        ),
        connections=Connections(
            available=_int(doc, "connections.available"),
            current=_int(doc, "connections.current"),
            total_created=_int(doc, "connections.totalCreated"),
        ),
        global_lock=GlobalLock(
            active_clients=ReadersWriters(
                readers=_int(doc, "globalLock.activeClients.readers"),
                writers=_int(doc, "globalLock.activeClients.writers"),
            ),
            current_queue=ReadersWriters(
                readers=_int(doc, "globalLock.currentQueue.readers"),
                writers=_int(doc, "globalLock.currentQueue.writers"),
            ),
        ),
        op_latencies=OpLatencies(
            reads=_latency(doc, "reads"),
            writes=_latency(doc, "writes"),
            commands=_latency(doc, "commands"),
        ),
        cache=WiredTigerCache(
            max_bytes_configured=_int(doc, cache + "maximum bytes configured"),
            currently_in_cache=_int(doc, cache + "bytes currently in the cache"),
            tracked_dirty_bytes=_int(doc, cache + "tracked dirty bytes in the cache"),
            modified_pages_evicted=_int(doc, cache + "modified pages evicted"),
            unmodified_pages_evicted=_int(doc, cache + "unmodified pages evicted"),
            pages_read_into_cache=_int(doc, cache + "pages read into cache"),
            pages_written_from_cache=_int(doc, cache + "pages written from cache"),
        ),
        tickets=Tickets(
            read_available=_int(doc, tickets + "read.available"),
            write_available=_int(doc, tickets + "write.available"),
        ),
        op_counters=OpCounters(
            query=_int(doc, "opcounters.query"),
            insert=_int(doc, "opcounters.insert"),
            update=_int(doc, "opcounters.update"),
            delete=_int(doc, "opcounters.delete"),
            getmore=_int(doc, "opcounters.getmore"),
            command=_int(doc, "opcounters.command"),
        ),
        query_executor=QueryExecutor(
            scanned=_int(doc, "metrics.queryExecutor.scanned"),
            scanned_objects=_int(doc, "metrics.queryExecutor.scannedObjects"),
            scan_and_order=_int(doc, "metrics.operation.scanAndOrder"),
        ),
        page_faults=_int(doc, "extra_info.page_faults"),
    )


def _latency(doc: Document, kind: str) -> LatencyHistogram:
    return LatencyHistogram(
        latency=_int(doc, f"opLatencies.{kind}.latency"),
        ops=_int(doc, f"opLatencies.{kind}.ops"),
    )


def decode_system_metrics(doc: Document) -> SystemMetricsSnapshot:
    """Decode a ``systemMetrics`` document.

    Raises:
        SnapshotDecodeError: If ``start`` is missing or ``disks`` is not a
            mapping of device documents.
    """
    disks_doc = _lookup(doc, "disks") or {}
    if not isinstance(disks_doc, Mapping):
        raise SnapshotDecodeError(f"disks: expected a mapping, got {disks_doc!r}")
    disks = {}
    for device, counters in disks_doc.items():
        if not isinstance(counters, Mapping):
            raise SnapshotDecodeError(f"disks.{device}: expected a mapping")
        disks[device] = DiskCounters(
            reads=_int(counters, "reads"),
            writes=_int(counters, "writes"),
            read_time_ms=_int(counters, "read_time_ms"),
            write_time_ms=_int(counters, "write_time_ms"),
            io_time_ms=_int(counters, "io_time_ms"),
        )
    return SystemMetricsSnapshot(
        start=_seconds(_required(doc, "start"), "start"),
        disks=disks,
        cpu=CpuCounters(
            idle_ms=_int(doc, "cpu.idle_ms"),
            iowait_ms=_int(doc, "cpu.iowait_ms"),
            system_ms=_int(doc, "cpu.system_ms"),
            user_ms=_int(doc, "cpu.user_ms"),
            nice_ms=_int(doc, "cpu.nice_ms"),
            steal_ms=_int(doc, "cpu.steal_ms"),
            softirq_ms=_int(doc, "cpu.softirq_ms"),
        ),
    )


def _optime(member: Document, field: str) -> float:
    """Read a member's optime in seconds.

    ``optimeDate`` wins; otherwise the seconds part of ``optime.ts``, or of
    ``optime`` itself when it is a bare timestamp. Members without either
    (arbiters) read as 0.

    Raises:
        SnapshotDecodeError: If ``optime`` is present but not a timestamp.
    """
    if _lookup(member, "optimeDate") is not None:
        return _seconds(member["optimeDate"], f"{field}.optimeDate")
    optime = _lookup(member, "optime")
    if optime is None:
        return 0.0
    ts = optime.get("ts", optime) if isinstance(optime, Mapping) else optime
    if not isinstance(ts, Mapping) or "$timestamp" not in ts:
        raise SnapshotDecodeError(
            f"{field}.optime: expected a timestamp, got {optime!r}"
        )
    return _number(_lookup(ts, "$timestamp.t"), f"{field}.optime")


def decode_repl_status(doc: Document) -> ReplicationStatusSnapshot:
    """Decode a ``replSetGetStatus`` document.

    Raises:
        SnapshotDecodeError: If ``date`` is missing or a member has no name.
    """
    members = []
    for index, member in enumerate(_lookup(doc, "members") or ()):
        field = f"members.{index}"
        if not isinstance(member, Mapping) or not member.get("name"):
            raise SnapshotDecodeError(f"{field}.name: missing")
        members.append(
            ReplicaMember(
                name=str(member["name"]),
                state=str(member.get("stateStr", "")),
                optime=_optime(member, field),
            )
        )
    return ReplicationStatusSnapshot(
        date=_seconds(_required(doc, "date"), "date"),
        members=tuple(members),
    )
