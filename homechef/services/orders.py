"""Order placement and lifecycle.

`place_order` is one unit of work: line items priced from the catalog,
coupon redeemed, totals computed and written together. The caller commits.

Money invariants written here and nowhere else:
- order_items.total_price = quantity * unit_price
- master_orders.final_amount = total_amount - discount_amount
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..errors import (
    UnknownOrder,
    UnknownRecipe,
    InactiveUser,
    InvalidQuantity,
    InvalidAmount,
    RecipeUnavailable,
    EmptyOrder,
    AddressNotOwned,
    InvalidStatusTransition,
)
from ..models import MasterOrder, OrderItem, OrderStatus, Recipe
from . import order_state
from .addresses import get_address
from .aggregates import record_delivery
from .coupons import money, redeem_coupon
from .users import get_user, get_chef

logger = logging.getLogger("homechef.orders")

# Column limits: order_items.total_price NUMERIC(8,2), master_orders.total_amount NUMERIC(10,2)
MAX_LINE_TOTAL = Decimal("999999.99")
MAX_ORDER_TOTAL = Decimal("99999999.99")


@dataclass
class OrderLine:
    recipe_id: int
    quantity: int = 1
    special_instructions: Optional[str] = None


def get_order(db: Session, order_id: int, for_update: bool = False) -> MasterOrder:
    stmt = (
        select(MasterOrder)
        .where(MasterOrder.order_id == order_id)
        .options(selectinload(MasterOrder.items), selectinload(MasterOrder.payments))
    )
    if for_update:
        stmt = stmt.with_for_update().execution_options(populate_existing=True)
    order = db.scalar(stmt)
    if not order:
        raise UnknownOrder(f"Order {order_id} not found")
    return order


def list_orders(
    db: Session,
    user_id: Optional[int] = None,
    chef_id: Optional[int] = None,
    status: Optional[OrderStatus | str] = None,
    limit: int = 100,
    offset: int = 0,
) -> list[MasterOrder]:
    stmt = select(MasterOrder).options(selectinload(MasterOrder.items))
    if user_id is not None:
        stmt = stmt.where(MasterOrder.user_id == user_id)
    if chef_id is not None:
        stmt = stmt.where(MasterOrder.chef_id == chef_id)
    if status is not None:
        stmt = stmt.where(MasterOrder.order_status == OrderStatus(status))
    stmt = stmt.order_by(MasterOrder.order_id.desc()).limit(limit).offset(offset)
    return list(db.scalars(stmt).all())


def _price_lines(db: Session, chef_id: int, lines: list[OrderLine]) -> list[OrderItem]:
    items = []
    for line in lines:
        if not isinstance(line.quantity, int) or isinstance(line.quantity, bool) or line.quantity < 1:
            raise InvalidQuantity(f"Quantity for recipe {line.recipe_id} must be at least 1")

        recipe = db.get(Recipe, line.recipe_id)
        if not recipe:
            raise UnknownRecipe(f"Recipe {line.recipe_id} not found")
        if recipe.chef_id != chef_id:
            raise RecipeUnavailable(f"Recipe {recipe.recipe_id} is not offered by chef {chef_id}")
        if not recipe.is_available:
            raise RecipeUnavailable(f"Recipe {recipe.recipe_id} is currently unavailable")

        unit_price = money(recipe.price)
        total_price = money(unit_price * line.quantity)
        if total_price > MAX_LINE_TOTAL:
            raise InvalidQuantity(
                f"Line total {total_price} for recipe {recipe.recipe_id} exceeds {MAX_LINE_TOTAL}"
            )
        items.append(
            OrderItem(
                recipe_id=recipe.recipe_id,
                quantity=line.quantity,
                unit_price=unit_price,
                total_price=total_price,
                special_instructions=line.special_instructions,
            )
        )
    return items


def place_order(
    db: Session,
    user_id: int,
    chef_id: int,
    address_id: int,
    items: Iterable[OrderLine | dict],
    coupon_code: Optional[str] = None,
    delivery_instructions: Optional[str] = None,
    estimated_delivery: Optional[datetime] = None,
    today: Optional[date] = None,
) -> MasterOrder:
    user = get_user(db, user_id)
    if not user.is_active:
        raise InactiveUser(f"User {user_id} is deactivated")

    chef = get_chef(db, chef_id)
    if not chef.user.is_active:
        raise RecipeUnavailable(f"Chef {chef_id} is not taking orders")

    address = get_address(db, address_id)
    if address.user_id != user.user_id:
        raise AddressNotOwned(f"Address {address_id} does not belong to user {user_id}")

    lines = [OrderLine(**line) if isinstance(line, dict) else line for line in items]
    if not lines:
        raise EmptyOrder("An order needs at least one item")

    order_items = _price_lines(db, chef.chef_id, lines)
    total_amount = money(sum((item.total_price for item in order_items), Decimal("0")))
    if total_amount > MAX_ORDER_TOTAL:
        raise InvalidAmount(f"Order total {total_amount} exceeds the limit {MAX_ORDER_TOTAL}")

    coupon = None
    discount = Decimal("0.00")
    if coupon_code:
        coupon, discount = redeem_coupon(db, coupon_code, total_amount, today=today)

    order = MasterOrder(
        user_id=user.user_id,
        chef_id=chef.chef_id,
        address_id=address.address_id,
        coupon_id=coupon.coupon_id if coupon else None,
        total_amount=total_amount,
        discount_amount=discount,
        final_amount=total_amount - discount,
        order_status=OrderStatus.PENDING,
        delivery_instructions=delivery_instructions,
        estimated_delivery=estimated_delivery,
        items=order_items,
    )
    db.add(order)
    db.flush()

    logger.info(
        f"Order {order.order_id} placed by user {user_id} for chef {chef_id}: "
        f"total={total_amount} discount={discount} final={order.final_amount}"
    )
    return order


def advance_order(
    db: Session,
    order_id: int,
    target: OrderStatus | str,
    now: Optional[datetime] = None,
) -> MasterOrder:
    """Apply one validated status transition and its side effects."""
    order = get_order(db, order_id, for_update=True)
    current = OrderStatus(order.order_status)
    target = OrderStatus(target)

    try:
        order_state.ensure_transition(current, target)
    except InvalidStatusTransition as e:
        logger.warning(f"Order {order_id}: {e}")
        raise

    order.order_status = target
    if target == OrderStatus.DELIVERED:
        order.actual_delivery = now or datetime.now(timezone.utc)
        db.flush()
        record_delivery(db, order)
    db.flush()

    logger.info(f"Order {order_id}: {current.value} -> {target.value}")
    return order


def cancel_order(db: Session, order_id: int, now: Optional[datetime] = None) -> MasterOrder:
    """Cancel a non-terminal order. A redeemed coupon stays consumed."""
    return advance_order(db, order_id, OrderStatus.CANCELLED, now=now)
