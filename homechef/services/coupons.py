"""Coupon validation, discount computation and redemption.

Validation order: active, validity window (inclusive dates), usage cap,
minimum order amount. A coupon that fails any check is not applied at all.

Redemption runs inside the caller's order transaction: the coupon row is
locked, the usage counter is bumped with a conditional UPDATE, and the
order's discount/final amounts are flushed in the same session, so either
all of it commits or none of it does.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..errors import (
    UnknownCoupon,
    DuplicateCouponCode,
    InvalidCouponTerms,
    CouponRejected,
    CouponInactive,
    CouponExpired,
    CouponNotYetValid,
    CouponExhausted,
    CouponMinimumNotMet,
)
from ..models import Coupon, DiscountType

logger = logging.getLogger("homechef.coupons")

CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class CouponQuote:
    coupon_code: str
    subtotal: Decimal
    discount_amount: Decimal
    final_amount: Decimal


def compute_discount(coupon: Coupon, subtotal: Decimal) -> Decimal:
    """Discount for `subtotal`, ignoring validity. Never exceeds the subtotal."""
    subtotal = money(subtotal)
    if DiscountType(coupon.discount_type) == DiscountType.PERCENTAGE:
        discount = subtotal * Decimal(coupon.discount_value) / Decimal(100)
        if coupon.max_discount is not None:
            discount = min(discount, Decimal(coupon.max_discount))
    else:
        discount = Decimal(coupon.discount_value)
    return money(min(discount, subtotal))


def validate_coupon(coupon: Coupon, subtotal: Decimal, today: Optional[date] = None) -> None:
    today = today or date.today()
    code = coupon.coupon_code

    if not coupon.is_active:
        raise CouponInactive(f"Coupon {code} is not active")
    if today < coupon.valid_from:
        raise CouponNotYetValid(f"Coupon {code} is valid from {coupon.valid_from}")
    if today > coupon.valid_until:
        raise CouponExpired(f"Coupon {code} expired on {coupon.valid_until}")
    if coupon.used_count >= coupon.usage_limit:
        raise CouponExhausted(f"Coupon {code} has reached its usage limit")
    if money(subtotal) < Decimal(coupon.min_order_amount):
        raise CouponMinimumNotMet(
            f"Coupon {code} requires a minimum order of {coupon.min_order_amount}"
        )


def get_coupon_by_code(db: Session, code: str, for_update: bool = False) -> Coupon:
    stmt = select(Coupon).where(Coupon.coupon_code == normalize_code(code))
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    coupon = db.scalar(stmt)
    if not coupon:
        raise UnknownCoupon(f"Coupon '{code}' not found")
    return coupon


def quote_coupon(db: Session, code: str, subtotal, today: Optional[date] = None) -> CouponQuote:
    """Read-only preview of what `redeem_coupon` would apply."""
    coupon = get_coupon_by_code(db, code)
    subtotal = money(subtotal)
    validate_coupon(coupon, subtotal, today)
    discount = compute_discount(coupon, subtotal)
    return CouponQuote(
        coupon_code=coupon.coupon_code,
        subtotal=subtotal,
        discount_amount=discount,
        final_amount=subtotal - discount,
    )


def redeem_coupon(db: Session, code: str, subtotal, today: Optional[date] = None) -> tuple[Coupon, Decimal]:
    """Validate and consume one use of a coupon. Returns (coupon, discount)."""
    coupon = get_coupon_by_code(db, code, for_update=True)
    subtotal = money(subtotal)
    try:
        validate_coupon(coupon, subtotal, today)
    except CouponRejected as e:
        logger.warning(f"Coupon {coupon.coupon_code} rejected: {e}")
        raise

    # Conditional increment: a concurrent redemption that got here first leaves 0 rows
    result = db.execute(
        update(Coupon)
        .where(Coupon.coupon_id == coupon.coupon_id, Coupon.used_count < Coupon.usage_limit)
        .values(used_count=Coupon.used_count + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        logger.warning(f"Coupon {coupon.coupon_code} exhausted by a concurrent redemption")
        raise CouponExhausted(f"Coupon {coupon.coupon_code} has reached its usage limit")
    db.expire(coupon, ["used_count"])

    discount = compute_discount(coupon, subtotal)
    logger.info(f"Redeemed coupon {coupon.coupon_code}: discount {discount} on {subtotal}")
    return coupon, discount


def create_coupon(
    db: Session,
    coupon_code: str,
    discount_type: DiscountType | str,
    discount_value,
    valid_from: date,
    valid_until: date,
    min_order_amount=0,
    max_discount=None,
    usage_limit: int = 1,
    is_active: bool = True,
) -> Coupon:
    code = normalize_code(coupon_code)
    discount_type = DiscountType(discount_type)
    discount_value = money(discount_value)

    if discount_value <= 0:
        raise InvalidCouponTerms("discount_value must be positive")
    if discount_type == DiscountType.PERCENTAGE and discount_value > 100:
        raise InvalidCouponTerms("percentage discount cannot exceed 100")
    if valid_from > valid_until:
        raise InvalidCouponTerms("valid_from must not be after valid_until")
    if usage_limit < 0:
        raise InvalidCouponTerms("usage_limit cannot be negative")
    if db.scalar(select(Coupon.coupon_id).where(Coupon.coupon_code == code)):
        raise DuplicateCouponCode(f"Coupon code '{code}' already exists")

    coupon = Coupon(
        coupon_code=code,
        discount_type=discount_type,
        discount_value=discount_value,
        min_order_amount=money(min_order_amount),
        max_discount=money(max_discount) if max_discount is not None else None,
        valid_from=valid_from,
        valid_until=valid_until,
        usage_limit=usage_limit,
        used_count=0,
        is_active=is_active,
    )
    db.add(coupon)
    db.flush()
    logger.info(f"Created coupon {code}")
    return coupon
