"""In-memory time-series store.

The store publishes one catalog generation at a time. A rebuild derives the
next generation without holding any lock and then swaps it in under the
exclusive side of a read/write lock, so readers see either the old catalog
or the new one, never a mix.
"""

import logging
import threading
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from diagseries.core.catalog import Catalog
from diagseries.core.config import DEFAULT_SETTINGS, DerivationSettings
from diagseries.core.derive import derive_catalog
from diagseries.core.models import (
    DiskStat,
    ReplicationStatusSnapshot,
    ServerStatusSnapshot,
    SystemMetricsSnapshot,
    TimeSeries,
)
from diagseries.core.names import FixedMetric, MetricName

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many concurrent readers or one writer.

    A waiting writer holds back readers that arrive after it, so a steady
    stream of lookups cannot starve a rebuild.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class TimeSeriesStore:
    """In-memory implementation of SeriesReaderPort.

    Holds the catalog of the latest rebuild. Starts out with the fixed
    legends, all empty.

    Example:
        ```python
        store = TimeSeriesStore()
        store.rebuild(server_status, system_metrics, repl_status)
        store.get("ops_insert")
        ```
    """

    def __init__(self, settings: DerivationSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings
        self._lock = ReadWriteLock()
        self._catalog = Catalog()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of rebuilds published so far."""
        with self._lock.read():
            return self._generation

    def rebuild(
        self,
        server_status: Iterable[ServerStatusSnapshot] = (),
        system_metrics: Iterable[SystemMetricsSnapshot] = (),
        repl_status: Iterable[ReplicationStatusSnapshot] = (),
    ) -> None:
        """Derive a new catalog from the given sequences and publish it.

        Args:
            server_status: Server-status snapshots in chronological order.
            system_metrics: System-metrics snapshots in chronological order.
            repl_status: Replica-set status snapshots in chronological order.
        """
        start = time.perf_counter()
        catalog = derive_catalog(
            server_status, system_metrics, repl_status, self._settings
        )
        with self._lock.write():
            self._catalog = catalog
            self._generation += 1
            generation = self._generation
        logger.info(
            "data points ready, time spent: %.3fs",
            time.perf_counter() - start,
            extra={"generation": generation, "series": len(catalog.series)},
        )

    def get(self, name: MetricName | str) -> TimeSeries | None:
        """Return the series for a metric name or catalog key, if present."""
        with self._lock.read():
            return self._catalog.get(name)

    def disk_stats(self) -> dict[str, DiskStat]:
        """Return disk stats keyed by device label."""
        with self._lock.read():
            return dict(self._catalog.disks)

    def expand(self, target: str) -> list[TimeSeries]:
        """Return the series a dashboard target refers to.

        ``disks_utils`` and ``disks_iops`` expand to one series per device,
        ``replication_lags`` to one series per member.
        """
        with self._lock.read():
            catalog = self._catalog
        if target == FixedMetric.DISKS_UTILS.value:
            return [stat.utilization for stat in catalog.disks.values()]
        if target == FixedMetric.DISKS_IOPS.value:
            return [stat.iops for stat in catalog.disks.values()]
        if target == FixedMetric.REPLICATION_LAGS.value:
            return catalog.member_lags()
        series = catalog.get(target)
        return [] if series is None else [series]

    def names(self) -> list[str]:
        """Return every catalog key, fixed legends first."""
        with self._lock.read():
            return list(self._catalog.keyed())

    def as_dict(self) -> dict[str, TimeSeries]:
        """Return the published series keyed by catalog key.

        The returned series belong to the published generation and must
        not be modified.
        """
        with self._lock.read():
            return self._catalog.keyed()
