"""Order status state machine.

    PLACED → PROCESSING → SHIPPED → DELIVERED
    PLACED → CANCELLED

DELIVERED and CANCELLED are terminal. Cancellation is only possible from
PLACED. With strict progression (the default) each forward move must go to
the next state; without it, an authorized actor may jump forward or back,
but never out of a terminal state, never back to PLACED, and never into
CANCELLED from anywhere but PLACED.
"""

from enum import Enum

from ordering.errors import InvalidStatus, InvalidTransition
from ordering.utils.settings import custom_setting


class OrderStatus(Enum):
    PLACED = "PLACED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_STRICT_TRANSITIONS = {
    OrderStatus.PLACED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),  # Terminal
    OrderStatus.CANCELLED: frozenset(),  # Terminal
}


def parse_status(value) -> OrderStatus:
    """Map a raw status string onto OrderStatus, or raise InvalidStatus."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatus(value, [s.value for s in OrderStatus]) from None


def strict_progression_enabled() -> bool:
    return bool(custom_setting("strict_status_progression", True))


def allowed_targets(current: OrderStatus, strict: bool = True) -> frozenset:
    if strict:
        return _STRICT_TRANSITIONS[current]

    if current in TERMINAL_STATES:
        return frozenset()

    targets = set(OrderStatus) - {current, OrderStatus.PLACED}
    if current != OrderStatus.PLACED:
        targets.discard(OrderStatus.CANCELLED)
    return frozenset(targets)


def assert_can_transition(current: OrderStatus, target: OrderStatus, strict: bool = True) -> None:
    if target not in allowed_targets(current, strict=strict):
        raise InvalidTransition(current.value, target.value)
