"""Order status state machine.

pending → accepted → cooking → on_the_way → delivered
cancelled is reachable from every non-terminal state.
delivered and cancelled are terminal.

Payments have their own, independent machine:
pending → completed | failed, completed → refunded.
"""
from ..errors import InvalidStatusTransition, InvalidPaymentTransition
from ..models import OrderStatus, PaymentStatus

_FORWARD = {
    OrderStatus.PENDING: OrderStatus.ACCEPTED,
    OrderStatus.ACCEPTED: OrderStatus.COOKING,
    OrderStatus.COOKING: OrderStatus.ON_THE_WAY,
    OrderStatus.ON_THE_WAY: OrderStatus.DELIVERED,
}

TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    status: frozenset({_FORWARD[status], OrderStatus.CANCELLED}) for status in _FORWARD
}
ORDER_TRANSITIONS.update({status: frozenset() for status in TERMINAL_STATES})

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}


def allowed_next(status: OrderStatus | str) -> frozenset[OrderStatus]:
    return ORDER_TRANSITIONS[OrderStatus(status)]


def is_terminal(status: OrderStatus | str) -> bool:
    return OrderStatus(status) in TERMINAL_STATES


def can_transition(current: OrderStatus | str, target: OrderStatus | str) -> bool:
    return OrderStatus(target) in allowed_next(current)


def ensure_transition(current: OrderStatus | str, target: OrderStatus | str) -> None:
    current, target = OrderStatus(current), OrderStatus(target)
    if not can_transition(current, target):
        raise InvalidStatusTransition(
            f"Cannot move order from '{current.value}' to '{target.value}'"
        )


def ensure_payment_transition(current: PaymentStatus | str, target: PaymentStatus | str) -> None:
    current, target = PaymentStatus(current), PaymentStatus(target)
    if target not in PAYMENT_TRANSITIONS[current]:
        raise InvalidPaymentTransition(
            f"Cannot move payment from '{current.value}' to '{target.value}'"
        )
