"""Metric identities.

A metric name is one of three shapes:

- ``FixedMetric``: the closed vocabulary every catalog starts with.
- ``DiskMetric``: a per-device series (utilization or IOPS).
- ``MemberMetric``: a per-replica-member series (lag by display name, or the
  positional ``repl_<n>`` alias).

Every shape exposes ``key``, the string used in the published catalog.
"""

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum


class FixedMetric(str, Enum):
    """Fixed metric legends, in dashboard order."""

    MEM_RESIDENT = "mem_resident"
    MEM_VIRTUAL = "mem_virtual"
    MEM_PAGE_FAULTS = "mem_page_faults"
    CONNS_AVAILABLE = "conns_available"
    CONNS_CURRENT = "conns_current"
    CONNS_CREATED_PER_MINUTE = "conns_created_per_minute"
    OPS_QUERY = "ops_query"
    OPS_INSERT = "ops_insert"
    OPS_UPDATE = "ops_update"
    OPS_DELETE = "ops_delete"
    OPS_GETMORE = "ops_getmore"
    OPS_COMMAND = "ops_command"
    Q_ACTIVE_READ = "q_active_read"
    Q_ACTIVE_WRITE = "q_active_write"
    Q_QUEUED_READ = "q_queued_read"
    Q_QUEUED_WRITE = "q_queued_write"
    LATENCY_READ = "latency_read"
    LATENCY_WRITE = "latency_write"
    LATENCY_COMMAND = "latency_command"
    SCAN_KEYS = "scan_keys"
    SCAN_OBJECTS = "scan_objects"
    SCAN_SORT = "scan_sort"
    WT_CACHE_MAX = "wt_cache_max"
    WT_CACHE_USED = "wt_cache_used"
    WT_CACHE_DIRTY = "wt_cache_dirty"
    WT_MODIFIED_EVICTED = "wt_modified_evicted"
    WT_UNMODIFIED_EVICTED = "wt_unmodified_evicted"
    WT_READ_IN_CACHE = "wt_read_in_cache"
    WT_WRITTEN_FROM_CACHE = "wt_written_from_cache"
    TICKET_AVAIL_READ = "ticket_avail_read"
    TICKET_AVAIL_WRITE = "ticket_avail_write"
    CPU_IDLE = "cpu_idle"
    CPU_IOWAIT = "cpu_iowait"
    CPU_NICE = "cpu_nice"
    CPU_SOFTIRQ = "cpu_softirq"
    CPU_STEAL = "cpu_steal"
    CPU_SYSTEM = "cpu_system"
    CPU_USER = "cpu_user"
    DISKS_UTILS = "disks_utils"
    DISKS_IOPS = "disks_iops"
    REPLICATION_LAGS = "replication_lags"

    @property
    def key(self) -> str:
        return self.value


FIXED_KEYS = frozenset(m.value for m in FixedMetric)


class DiskMetricKind(str, Enum):
    UTILIZATION = "disks_utils"
    IOPS = "disks_iops"


@dataclass(frozen=True)
class DiskMetric:
    """A per-device disk series."""

    device: str
    kind: DiskMetricKind

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.device}"


class MemberMetricKind(str, Enum):
    LAG = "lag"
    POSITION = "position"


@dataclass(frozen=True)
class MemberMetric:
    """A per-member replication lag series.

    Attributes:
        member_id: Short display name of the member.
        position: Index of the member in the sorted member list.
        kind: LAG series are keyed by ``member_id``; POSITION series by
            ``repl_<position>``.
    """

    member_id: str
    position: int
    kind: MemberMetricKind = MemberMetricKind.LAG

    @property
    def key(self) -> str:
        if self.kind is MemberMetricKind.POSITION:
            return f"repl_{self.position}"
        return self.member_id

    def positional(self) -> "MemberMetric":
        """Return the ``repl_<n>`` alias of this member."""
        return MemberMetric(self.member_id, self.position, MemberMetricKind.POSITION)


MetricName = FixedMetric | DiskMetric | MemberMetric


def _reserved(key: str) -> bool:
    """Whether ``key`` belongs to the fixed, disk or positional namespaces."""
    if key in FIXED_KEYS or key.startswith("repl_"):
        return True
    return any(key.startswith(f"{kind.value}:") for kind in DiskMetricKind)


def short_member_name(name: str, taken: Collection[str] = ()) -> str:
    """Derive the display name of a replica member.

    ``host.example.com:27017`` becomes ``host:27017``. Names without a ``.``
    or a ``:`` are kept as they are. If the short form clashes with a name
    in ``taken``, the full name is tried, then ``member:<name>``, then
    ``member:<name>#<n>``. Names that would clash with a fixed legend, a
    disk key or a ``repl_<n>`` alias are never used as they are.

    Args:
        name: The member's ``host:port`` name.
        taken: Display names already assigned to other members.

    Returns:
        A display name not in ``taken``.
    """
    dot = name.find(".")
    colon = name.rfind(":")
    if dot < 0 or colon < 0 or colon < dot:
        short = name
    else:
        short = name[:dot] + name[colon:]
    for candidate in (short, name):
        if not _reserved(candidate) and candidate not in taken:
            return candidate
    prefixed = f"member:{name}"
    candidate = prefixed
    suffix = 2
    while candidate in taken:
        candidate = f"{prefixed}#{suffix}"
        suffix += 1
    return candidate
