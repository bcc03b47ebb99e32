"""Derivation settings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DerivationSettings:
    """Unit conversions applied while deriving series.

    The defaults chart memory and cache sizes in gigabytes, latencies in
    milliseconds, and counter rates per minute.

    Attributes:
        memory_divisor: Divides memory readings (reported in MB).
        cache_divisor: Divides cache sizes (reported in bytes).
        latency_divisor: Divides average latencies (reported in µs).
        rate_window_seconds: Length of the window counter rates are
            expressed over.
    """

    memory_divisor: float = 1024
    cache_divisor: float = 1024 * 1024 * 1024
    latency_divisor: float = 1000
    rate_window_seconds: float = 60


DEFAULT_SETTINGS = DerivationSettings()
