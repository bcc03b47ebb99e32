"""Port interface for reading published series.

Query layers depend only on this protocol, not on the concrete store.
"""

from typing import Protocol, runtime_checkable

from diagseries.core.models import TimeSeries
from diagseries.core.names import MetricName


@runtime_checkable
class SeriesReaderPort(Protocol):
    """Port for read access to the published series catalog.

    Examples: TimeSeriesStore.
    """

    def get(self, name: MetricName | str) -> TimeSeries | None:
        """Return the series for a metric name or catalog key, if present."""
        ...

    def expand(self, target: str) -> list[TimeSeries]:
        """Return the series a dashboard target refers to.

        Aggregate legends (``disks_utils``, ``disks_iops``,
        ``replication_lags``) expand to one series per device or member.
        Any other target yields its own series, or nothing if unknown.
        """
        ...

    def names(self) -> list[str]:
        """Return every catalog key, fixed legends first."""
        ...
