"""Storage adapters implementing core ports."""

from diagseries.adapters.storage.in_memory import ReadWriteLock, TimeSeriesStore

__all__ = ["ReadWriteLock", "TimeSeriesStore"]
