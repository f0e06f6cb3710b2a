"""Order lifecycle: status state machine and total price.

    open ──► approved ──► completed
      │          │            │
      └──────────┴──► cancelled ◄┘

Nothing moves back toward ``open``; ``completed`` and ``cancelled`` are
terminal except for the completed -> cancelled edge.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterable, Protocol

from restaurant.domain.exceptions import TransitionRejected


class OrderStatus(str, Enum):
    OPEN = "open"
    APPROVED = "approved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


INITIAL_STATUS = OrderStatus.OPEN

ALREADY_UP_TO_DATE = "The order status is already up to date."
COMPLETED_TO_APPROVED = "A completed order cannot be moved back to approved."
CANCELLED_IS_FINAL = "A cancelled order cannot be changed."
BACK_TO_OPEN = "An order cannot be moved back to open."

_ALLOWED = {
    OrderStatus.OPEN: {OrderStatus.APPROVED, OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.APPROVED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: {OrderStatus.CANCELLED},
    OrderStatus.CANCELLED: set(),
}


def transition(current: OrderStatus | str, requested: OrderStatus | str) -> OrderStatus:
    """Return the new status or raise ``TransitionRejected``.

    Rejections are ordered so the caller always gets the most specific
    reason: self-transition first, then the cancelled/completed rules.
    """
    current = OrderStatus(current)
    requested = OrderStatus(requested)

    if current == requested:
        raise TransitionRejected(ALREADY_UP_TO_DATE)

    if current == OrderStatus.CANCELLED:
        raise TransitionRejected(CANCELLED_IS_FINAL)

    if current == OrderStatus.COMPLETED and requested == OrderStatus.APPROVED:
        raise TransitionRejected(COMPLETED_TO_APPROVED)

    if requested == OrderStatus.OPEN:
        raise TransitionRejected(BACK_TO_OPEN)

    # every pair left over is in the table; this guards future statuses
    if requested not in _ALLOWED[current]:
        raise TransitionRejected(
            f"Cannot move an order from {current.value} to {requested.value}."
        )

    return requested


def can_transition(current: OrderStatus | str, requested: OrderStatus | str) -> bool:
    try:
        transition(current, requested)
    except TransitionRejected:
        return False
    return True


class PricedLine(Protocol):
    quantity: int
    unit_price: Decimal


def compute_total(lines: Iterable[PricedLine]) -> Decimal:
    return sum((Decimal(line.unit_price) * line.quantity for line in lines), Decimal("0.00"))
