import logging
import re
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import UnknownPayment, InvalidAmount, InvalidCardNumber, OrderClosed
from ..models import Payment, PaymentMethod, PaymentStatus, OrderStatus
from .coupons import money
from .order_state import ensure_payment_transition
from .orders import get_order

logger = logging.getLogger("homechef.payments")

LAST_FOUR_RE = re.compile(r"^\d{4}$")


def get_payment(db: Session, payment_id: int) -> Payment:
    payment = db.get(Payment, payment_id)
    if not payment:
        raise UnknownPayment(f"Payment {payment_id} not found")
    return payment


def list_payments(db: Session, order_id: int) -> list[Payment]:
    get_order(db, order_id)
    return list(
        db.scalars(select(Payment).where(Payment.order_id == order_id).order_by(Payment.payment_id)).all()
    )


def record_payment(
    db: Session,
    order_id: int,
    payment_method: PaymentMethod | str,
    amount: Optional[Decimal] = None,
    transaction_id: Optional[str] = None,
    card_last_four: Optional[str] = None,
) -> Payment:
    """Record a payment attempt (status pending). Amount defaults to the order's final amount."""
    order = get_order(db, order_id)
    if OrderStatus(order.order_status) == OrderStatus.CANCELLED:
        raise OrderClosed(f"Order {order_id} is cancelled")

    method = PaymentMethod(payment_method)
    amount = money(order.final_amount if amount is None else amount)
    if amount <= 0:
        raise InvalidAmount(f"Payment amount must be positive, got {amount}")

    if card_last_four is not None:
        if method != PaymentMethod.CARD:
            raise InvalidCardNumber("card_last_four is only recorded for card payments")
        if not LAST_FOUR_RE.match(card_last_four):
            raise InvalidCardNumber("card_last_four must be exactly 4 digits")

    payment = Payment(
        order_id=order.order_id,
        payment_method=method,
        payment_status=PaymentStatus.PENDING,
        amount=amount,
        transaction_id=transaction_id,
        card_last_four=card_last_four,
    )
    db.add(payment)
    db.flush()
    logger.info(f"Payment {payment.payment_id} recorded for order {order_id}: {method.value} {amount}")
    return payment


def update_payment_status(
    db: Session,
    payment_id: int,
    target: PaymentStatus | str,
    transaction_id: Optional[str] = None,
) -> Payment:
    payment = get_payment(db, payment_id)
    current = PaymentStatus(payment.payment_status)
    target = PaymentStatus(target)
    ensure_payment_transition(current, target)

    payment.payment_status = target
    if transaction_id:
        payment.transaction_id = transaction_id
    db.flush()
    logger.info(f"Payment {payment_id}: {current.value} -> {target.value}")
    return payment


def amount_paid(db: Session, order_id: int) -> Decimal:
    """Sum of completed (not refunded) payments for an order."""
    payments = db.scalars(
        select(Payment).where(Payment.order_id == order_id, Payment.payment_status == PaymentStatus.COMPLETED)
    ).all()
    return money(sum((Decimal(p.amount) for p in payments), Decimal("0")))
