"""Consistency audit for invariants the schema does not enforce.

Read-only; `homechef audit` prints the report and
`homechef reconcile` repairs aggregate drift.
"""
import logging
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from ..models import MasterOrder, OrderItem, Coupon, Address, Recipe, ChefProfile
from .aggregates import rating_stats_for_recipe, rating_avg_for_chef, delivered_stats_for_chef

logger = logging.getLogger("homechef.audit")


def check_order_totals(db: Session) -> list[int]:
    """Orders where final_amount != total_amount - discount_amount, or total != sum(items)."""
    item_sums = dict(
        db.execute(
            select(OrderItem.order_id, func.sum(OrderItem.total_price)).group_by(OrderItem.order_id)
        ).all()
    )
    bad = []
    for order in db.scalars(select(MasterOrder).order_by(MasterOrder.order_id)).all():
        total = Decimal(order.total_amount)
        if Decimal(order.final_amount) != total - Decimal(order.discount_amount):
            bad.append(order.order_id)
            continue
        items_total = item_sums.get(order.order_id)
        if items_total is not None and Decimal(str(items_total)).quantize(Decimal("0.01")) != total:
            bad.append(order.order_id)
    return bad


def check_line_totals(db: Session) -> list[int]:
    """Order items where total_price != quantity * unit_price."""
    return [
        item.order_item_id
        for item in db.scalars(select(OrderItem).order_by(OrderItem.order_item_id)).all()
        if Decimal(item.total_price) != Decimal(item.unit_price) * item.quantity
    ]


def check_coupon_discounts(db: Session) -> list[int]:
    """Orders whose discount exceeds the coupon cap."""
    rows = db.execute(
        select(MasterOrder.order_id, MasterOrder.discount_amount, Coupon.max_discount)
        .join(Coupon, MasterOrder.coupon_id == Coupon.coupon_id)
        .where(Coupon.max_discount.is_not(None))
        .order_by(MasterOrder.order_id)
    ).all()
    return [order_id for order_id, discount, cap in rows if Decimal(discount) > Decimal(cap)]


def check_coupon_usage(db: Session) -> list[str]:
    return list(
        db.scalars(select(Coupon.coupon_code).where(Coupon.used_count > Coupon.usage_limit)).all()
    )


def check_default_addresses(db: Session) -> list[int]:
    """Users with more than one default address."""
    return list(
        db.scalars(
            select(Address.user_id)
            .where(Address.is_default.is_(True))
            .group_by(Address.user_id)
            .having(func.count(Address.address_id) > 1)
        ).all()
    )


def check_aggregate_drift(db: Session) -> dict:
    drift = {"recipes": [], "chefs": []}
    for recipe in db.scalars(select(Recipe).order_by(Recipe.recipe_id)).all():
        rating, total = rating_stats_for_recipe(db, recipe.recipe_id)
        if Decimal(recipe.rating or 0) != rating or recipe.total_ratings != total:
            drift["recipes"].append(recipe.recipe_id)
    for chef in db.scalars(select(ChefProfile).order_by(ChefProfile.chef_id)).all():
        total_orders, earnings = delivered_stats_for_chef(db, chef.chef_id)
        if (
            Decimal(chef.rating or 0) != rating_avg_for_chef(db, chef.chef_id)
            or chef.total_orders != total_orders
            or Decimal(chef.total_earnings or 0) != earnings
        ):
            drift["chefs"].append(chef.chef_id)
    return drift


def run_audit(db: Session) -> dict:
    results = {
        "order_totals": check_order_totals(db),
        "line_totals": check_line_totals(db),
        "coupon_discounts": check_coupon_discounts(db),
        "coupon_usage": check_coupon_usage(db),
        "default_addresses": check_default_addresses(db),
        "aggregate_drift": check_aggregate_drift(db),
    }

    issues = sum(
        len(v) if isinstance(v, list) else sum(len(x) for x in v.values())
        for v in results.values()
    )
    results["total_issues"] = issues
    if issues:
        logger.warning(f"Audit found {issues} consistency issues")
    else:
        logger.info("Audit passed: all invariants hold")
    return results
