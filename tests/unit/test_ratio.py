"""Tests for safe_ratio()."""

import pytest

from diagseries.core.ratio import safe_ratio


class TestSafeRatio:
    """Tests for guarded division."""

    @pytest.mark.core
    def test_divides(self) -> None:
        """Non-zero denominators divide normally."""
        assert safe_ratio(60, 2) == 30.0

    @pytest.mark.core
    def test_returns_float_for_integers(self) -> None:
        """Integer operands still produce a float."""
        assert isinstance(safe_ratio(1, 3), float)

    @pytest.mark.core
    def test_zero_denominator_defaults_to_zero(self) -> None:
        """A zero denominator yields 0.0 by default."""
        assert safe_ratio(5, 0) == 0.0

    @pytest.mark.core
    def test_zero_denominator_returns_given_default(self) -> None:
        """A zero denominator yields the caller's default."""
        assert safe_ratio(5, 0, default=-1.0) == -1.0

    @pytest.mark.core
    def test_zero_denominator_can_signal_skip(self) -> None:
        """Passing None lets callers skip the point."""
        assert safe_ratio(5, 0, None) is None

    @pytest.mark.core
    def test_zero_float_denominator(self) -> None:
        """0.0 is treated the same as 0."""
        assert safe_ratio(5, 0.0, None) is None
