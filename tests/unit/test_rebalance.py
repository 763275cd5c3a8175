"""Test rebalancing to a target"""

from decimal import Decimal

import pytest

from loan_ledger.services.rebalance import (rebalance_values,
                                            scale_proportionally)


def D(*values):
    return [Decimal(str(v)) for v in values]


class TestScaleProportionally:
    """Test proportional scaling with residual on the last value"""

    def test_equal_values(self):
        assert scale_proportionally(D(80, 80), Decimal("100")) == D("50.00", "50.00")

    def test_uneven_values(self):
        assert scale_proportionally(D(30, 60), Decimal("100")) == D("33.33", "66.67")

    def test_residual_can_go_negative(self):
        """Rounded shares can overshoot a tiny target"""
        values = D(1, 1, 1, "0.001")

        assert scale_proportionally(values, Decimal("0.05"))[-1] == Decimal("-0.01")

    def test_clamp_last(self):
        values = D(1, 1, 1, "0.001")

        scaled = scale_proportionally(values, Decimal("0.05"), clamp_last=True)

        assert scaled == D("0.02", "0.02", "0.02", "0")


class TestRebalanceValues:
    """Test the rebalance branches"""

    def test_empty(self):
        assert rebalance_values([], Decimal("100")) == []

    def test_no_input_splits_evenly(self):
        assert rebalance_values(D(0, 0, 0), Decimal("100")) == D("33.33", "33.33", "33.34")

    def test_single_blank_takes_remainder(self):
        assert rebalance_values(D("100.00", 0), Decimal("150.00")) == D("100.00", "50.00")

    def test_multiple_blanks_share_remainder(self):
        result = rebalance_values(D(50, 0, 0, 0), Decimal("100"))

        assert result == D(50, "16.67", "16.67", "16.66")
        assert sum(result) == Decimal("100")

    def test_blank_with_nothing_left_stays_blank(self):
        assert rebalance_values(D(60, 40, 0), Decimal("100")) == D(60, 40, 0)

    def test_all_typed_over_target_scaled_down(self):
        result = rebalance_values(D(80, 80), Decimal("100.00"))

        assert result == D("50.00", "50.00")

    def test_all_typed_under_target_scaled_up(self):
        assert rebalance_values(D(20, 30), Decimal("100")) == D("40.00", "60.00")

    def test_single_typed_snaps_to_target(self):
        assert rebalance_values(D(80), Decimal("100")) == D("100.00")

    def test_within_tolerance_untouched(self):
        values = D("33.33", "33.33", "33.33")

        assert rebalance_values(values, Decimal("100")) == values

    def test_over_target_with_blanks_keeps_blanks(self):
        result = rebalance_values(D(80, 40, 0), Decimal("100"))

        assert result == D("66.67", "33.33", 0)

    def test_typed_values_preserved_when_blank_exists(self):
        values = D("12.50", 0, "40.00", 0)

        result = rebalance_values(values, Decimal("100"))

        assert result[0] == Decimal("12.50")
        assert result[2] == Decimal("40.00")
        assert sum(result) == Decimal("100")

    @pytest.mark.parametrize(
        "values, target",
        [
            (D(0, 0, 0), "100"),
            (D("100.00", 0), "150.00"),
            (D(50, 0, 0, 0), "100"),
            (D(80, 80), "100.00"),
            (D(80, 40, 0), "100"),
            (D("0.01", 0, 0, 0), "0.05"),
            (D(7, 3, 11), "1234.56"),
        ],
    )
    def test_idempotent(self, values, target):
        target = Decimal(target)
        once = rebalance_values(values, target)

        assert rebalance_values(once, target) == once
