"""Tests for metric names and member display names."""

import pytest

from diagseries.core.names import (
    FIXED_KEYS,
    DiskMetric,
    DiskMetricKind,
    FixedMetric,
    MemberMetric,
    MemberMetricKind,
    short_member_name,
)


class TestFixedMetric:
    """Tests for the fixed vocabulary."""

    @pytest.mark.core
    def test_vocabulary_size(self) -> None:
        """The fixed vocabulary has 41 legends."""
        assert len(FixedMetric) == 41

    @pytest.mark.core
    def test_key_is_value(self) -> None:
        """A fixed metric's key is its legend."""
        assert FixedMetric.OPS_INSERT.key == "ops_insert"

    @pytest.mark.core
    def test_aggregate_legends_are_fixed(self) -> None:
        """Aggregate disk and replication legends are part of the vocabulary."""
        assert {"disks_utils", "disks_iops", "replication_lags"} <= FIXED_KEYS


class TestDynamicMetrics:
    """Tests for per-disk and per-member names."""

    @pytest.mark.core
    def test_disk_keys_are_prefixed_by_kind(self) -> None:
        """Disk keys combine the aggregate legend and the device label."""
        assert DiskMetric("sda", DiskMetricKind.UTILIZATION).key == "disks_utils:sda"
        assert DiskMetric("sda", DiskMetricKind.IOPS).key == "disks_iops:sda"

    @pytest.mark.core
    def test_disk_keys_never_collide_with_fixed(self) -> None:
        """No device label can render to a fixed legend."""
        metric = DiskMetric("cpu_idle", DiskMetricKind.IOPS)
        assert metric.key not in FIXED_KEYS

    @pytest.mark.core
    def test_member_lag_key_is_member_id(self) -> None:
        """Lag series are keyed by the member's display name."""
        assert MemberMetric("rs1:27017", 0).key == "rs1:27017"

    @pytest.mark.core
    def test_positional_alias(self) -> None:
        """The positional alias is keyed repl_<n>."""
        alias = MemberMetric("rs1:27017", 2).positional()
        assert alias.kind is MemberMetricKind.POSITION
        assert alias.key == "repl_2"

    @pytest.mark.core
    def test_names_are_hashable_and_comparable(self) -> None:
        """Equal names hash equally so they can key a catalog."""
        assert {MemberMetric("a", 0): 1}[MemberMetric("a", 0)] == 1


class TestShortMemberName:
    """Tests for short_member_name()."""

    @pytest.mark.core
    def test_strips_domain(self) -> None:
        """The domain between the first dot and the port is dropped."""
        assert short_member_name("rs1.example.com:27017") == "rs1:27017"

    @pytest.mark.core
    def test_keeps_name_without_dot(self) -> None:
        """Names without a dot are kept."""
        assert short_member_name("localhost:27017") == "localhost:27017"

    @pytest.mark.core
    def test_keeps_name_without_colon(self) -> None:
        """Names without a port are kept."""
        assert short_member_name("rs1.example.com") == "rs1.example.com"

    @pytest.mark.core
    def test_plain_name(self) -> None:
        """Bare names are kept."""
        assert short_member_name("a") == "a"

    @pytest.mark.core
    def test_clash_with_taken_uses_full_name(self) -> None:
        """Members sharing a short form keep their full names."""
        name = short_member_name("rs1.east.example.com:27017", {"rs1:27017"})
        assert name == "rs1.east.example.com:27017"

    @pytest.mark.core
    def test_clash_with_fixed_legend_is_prefixed(self) -> None:
        """A member named like a fixed legend is prefixed."""
        assert short_member_name("cpu_idle") == "member:cpu_idle"

    @pytest.mark.core
    def test_clash_with_positional_alias_is_prefixed(self) -> None:
        """A member named like a repl_<n> alias is prefixed."""
        assert short_member_name("repl_0") == "member:repl_0"

    @pytest.mark.core
    def test_full_name_equal_to_taken_short_form_is_prefixed(self) -> None:
        """A bare name equal to another member's short form stays distinct."""
        assert short_member_name("h:1", {"h:1"}) == "member:h:1"

    @pytest.mark.core
    def test_repeated_clashes_get_a_suffix(self) -> None:
        """Every fallback already taken still yields a fresh name."""
        taken = {"h:1", "member:h:1", "member:h:1#2"}

        assert short_member_name("h:1", taken) == "member:h:1#3"

    @pytest.mark.core
    def test_clash_with_disk_key_is_prefixed(self) -> None:
        """A member named like a per-device disk key is prefixed."""
        assert short_member_name("disks_iops:sda") == "member:disks_iops:sda"
