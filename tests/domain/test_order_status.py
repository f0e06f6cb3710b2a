"""Unit tests for the order lifecycle rules."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from restaurant.domain.exceptions import ConflictError, TransitionRejected
from restaurant.domain.order_status import (
    ALREADY_UP_TO_DATE,
    BACK_TO_OPEN,
    CANCELLED_IS_FINAL,
    COMPLETED_TO_APPROVED,
    OrderStatus,
    can_transition,
    compute_total,
    transition,
)

OPEN = OrderStatus.OPEN
APPROVED = OrderStatus.APPROVED
COMPLETED = OrderStatus.COMPLETED
CANCELLED = OrderStatus.CANCELLED

# (current, requested) -> new status, or the rejection message
TABLE = {
    (OPEN, OPEN): ALREADY_UP_TO_DATE,
    (OPEN, APPROVED): APPROVED,
    (OPEN, COMPLETED): COMPLETED,
    (OPEN, CANCELLED): CANCELLED,
    (APPROVED, OPEN): BACK_TO_OPEN,
    (APPROVED, APPROVED): ALREADY_UP_TO_DATE,
    (APPROVED, COMPLETED): COMPLETED,
    (APPROVED, CANCELLED): CANCELLED,
    (COMPLETED, OPEN): BACK_TO_OPEN,
    (COMPLETED, APPROVED): COMPLETED_TO_APPROVED,
    (COMPLETED, COMPLETED): ALREADY_UP_TO_DATE,
    (COMPLETED, CANCELLED): CANCELLED,
    (CANCELLED, OPEN): CANCELLED_IS_FINAL,
    (CANCELLED, APPROVED): CANCELLED_IS_FINAL,
    (CANCELLED, COMPLETED): CANCELLED_IS_FINAL,
    (CANCELLED, CANCELLED): ALREADY_UP_TO_DATE,
}


def _line(quantity: int, unit_price: str):
    return SimpleNamespace(quantity=quantity, unit_price=Decimal(unit_price))


class TestTransitionTable:

    def test_table_covers_every_pair(self):
        assert len(TABLE) == len(OrderStatus) ** 2

    @pytest.mark.parametrize("pair,expected", TABLE.items(), ids=lambda v: str(v))
    def test_transition(self, pair, expected):
        current, requested = pair
        if isinstance(expected, OrderStatus):
            assert transition(current, requested) == expected
            assert can_transition(current, requested)
        else:
            with pytest.raises(TransitionRejected) as exc:
                transition(current, requested)
            assert exc.value.message == expected
            assert not can_transition(current, requested)

    def test_accepts_plain_strings(self):
        assert transition("open", "approved") == APPROVED

    def test_rejection_is_a_conflict(self):
        with pytest.raises(ConflictError):
            transition(CANCELLED, APPROVED)
        assert TransitionRejected("x").status_code == 400

    def test_unknown_status_is_a_value_error(self):
        with pytest.raises(ValueError):
            transition("open", "shipped")


class TestComputeTotal:

    def test_single_line(self):
        assert compute_total([_line(2, "10.00")]) == Decimal("20.00")

    def test_sum_of_lines(self):
        lines = [_line(3, "15.00"), _line(5, "25.00")]
        assert compute_total(lines) == Decimal("170.00")

    def test_no_float_drift(self):
        # 0.1 * 3 + 0.2 is not 0.5 in binary floating point
        lines = [_line(3, "0.10"), _line(1, "0.20")]
        assert compute_total(lines) == Decimal("0.50")

    def test_zero_price_lines(self):
        assert compute_total([_line(4, "0.00")]) == Decimal("0.00")

    def test_empty(self):
        assert compute_total([]) == Decimal("0.00")
