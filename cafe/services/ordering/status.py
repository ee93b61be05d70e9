"""Order status state machine."""
from typing import Dict, FrozenSet

from cafe.core.enums import OrderStatus

TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset(
    {OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)

# Forward step for each non-terminal status
NEXT_STATUS: Dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
}

INITIAL_STATUS = OrderStatus.PENDING


def is_terminal(status: OrderStatus) -> bool:
    return OrderStatus(status) in TERMINAL_STATUSES


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    """
    Check whether an order may move from ``current`` to ``requested``.

    Allowed moves are one step forward, cancellation from any non-terminal
    status, and re-applying the current status of a non-terminal order.
    """
    current = OrderStatus(current)
    requested = OrderStatus(requested)

    if is_terminal(current):
        return False
    if requested == current:
        return True
    if requested == OrderStatus.CANCELLED:
        return True
    return NEXT_STATUS.get(current) == requested
