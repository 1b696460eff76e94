import pytest

from homechef.errors import InvalidStatusTransition, InvalidPaymentTransition
from homechef.models import OrderStatus, PaymentStatus
from homechef.services.order_state import (
    allowed_next,
    can_transition,
    ensure_transition,
    ensure_payment_transition,
    is_terminal,
)

HAPPY_PATH = [
    OrderStatus.PENDING,
    OrderStatus.ACCEPTED,
    OrderStatus.COOKING,
    OrderStatus.ON_THE_WAY,
    OrderStatus.DELIVERED,
]


def test_happy_path_is_allowed():
    for current, target in zip(HAPPY_PATH, HAPPY_PATH[1:]):
        ensure_transition(current, target)


@pytest.mark.parametrize("status", HAPPY_PATH[:-1])
def test_cancel_from_any_non_terminal_state(status):
    assert can_transition(status, OrderStatus.CANCELLED)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "delivered"),
        ("pending", "cooking"),
        ("cooking", "accepted"),
        ("delivered", "cancelled"),
        ("cancelled", "pending"),
        ("pending", "pending"),
    ],
)
def test_invalid_transitions(current, target):
    with pytest.raises(InvalidStatusTransition):
        ensure_transition(current, target)


def test_terminal_states_have_no_successors():
    assert is_terminal("delivered")
    assert is_terminal(OrderStatus.CANCELLED)
    assert allowed_next(OrderStatus.DELIVERED) == frozenset()
    assert not is_terminal("on_the_way")


def test_payment_transitions():
    ensure_payment_transition(PaymentStatus.PENDING, PaymentStatus.COMPLETED)
    ensure_payment_transition("pending", "failed")
    ensure_payment_transition("completed", "refunded")

    with pytest.raises(InvalidPaymentTransition):
        ensure_payment_transition("failed", "completed")
    with pytest.raises(InvalidPaymentTransition):
        ensure_payment_transition("pending", "refunded")
