"""Series catalog: the fixed vocabulary plus derived dynamic series."""

from dataclasses import dataclass, field

from diagseries.core.models import DiskStat, TimeSeries
from diagseries.core.names import (
    DiskMetric,
    DiskMetricKind,
    FixedMetric,
    MemberMetric,
    MemberMetricKind,
    MetricName,
)


def initialize() -> dict[MetricName, TimeSeries]:
    """Return an empty series for every fixed metric, in legend order."""
    return {metric: TimeSeries(metric.key) for metric in FixedMetric}


@dataclass
class Catalog:
    """All series produced by one rebuild.

    A catalog is built once and then only read.

    Attributes:
        series: Every series keyed by metric name. Fixed legends come first,
            then member and disk series in the order they were derived.
        disks: Disk stats keyed by device label. Their series are also
            listed in ``series`` under ``DiskMetric`` names.
    """

    series: dict[MetricName, TimeSeries] = field(default_factory=initialize)
    disks: dict[str, DiskStat] = field(default_factory=dict)
    _keys: dict[str, MetricName] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for device, stat in self.disks.items():
            utilization = DiskMetric(device, DiskMetricKind.UTILIZATION)
            self.series[utilization] = stat.utilization
            self.series[DiskMetric(device, DiskMetricKind.IOPS)] = stat.iops
        self._keys = {name.key: name for name in self.series}

    def resolve(self, name: MetricName | str) -> MetricName | None:
        """Map a catalog key or metric name to a name present in the catalog."""
        if isinstance(name, str) and not isinstance(name, FixedMetric):
            return self._keys.get(name)
        return name if name in self.series else None

    def get(self, name: MetricName | str) -> TimeSeries | None:
        resolved = self.resolve(name)
        return None if resolved is None else self.series[resolved]

    def member_lags(self) -> list[TimeSeries]:
        """Lag series of every replica member, in roster order."""
        lags = [
            name
            for name in self.series
            if isinstance(name, MemberMetric) and name.kind is MemberMetricKind.LAG
        ]
        lags.sort(key=lambda m: m.position)
        return [self.series[name] for name in lags]

    def keyed(self) -> dict[str, TimeSeries]:
        """Series keyed by their string catalog key."""
        return {name.key: series for name, series in self.series.items()}
