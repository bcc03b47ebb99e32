"""Guarded division used by every deriver."""

from typing import overload


@overload
def safe_ratio(numerator: float, denominator: float) -> float: ...


@overload
def safe_ratio(numerator: float, denominator: float, default: float) -> float: ...


@overload
def safe_ratio(numerator: float, denominator: float, default: None) -> float | None: ...


def safe_ratio(
    numerator: float, denominator: float, default: float | None = 0.0
) -> float | None:
    """Divide ``numerator`` by ``denominator``.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        default: Returned unchanged when ``denominator`` is zero. Pass
            ``None`` when the caller should skip the point instead.

    Returns:
        The quotient as a float, or ``default`` for a zero denominator.
    """
    if denominator == 0:
        return default
    return numerator / denominator
