"""Denormalized aggregate maintenance.

Policy: aggregates are updated inside the transaction of the write that
changes them.

- Rating insert → recipe rating/total_ratings and chef rating are
  recomputed from the ratings rows (AVG/COUNT), so they cannot drift.
- Order delivered → chef total_orders += 1, total_earnings += final_amount,
  as one server-side UPDATE so concurrent deliveries for a chef all count.

`reconcile_aggregates` recomputes everything from source rows; it is the
repair path for data written outside the services (imports, manual SQL).
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import select, func, update
from sqlalchemy.orm import Session

from ..models import ChefProfile, Recipe, Rating, MasterOrder, OrderStatus

logger = logging.getLogger("homechef.aggregates")

ZERO = Decimal("0.00")


def _avg(value) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def rating_stats_for_recipe(db: Session, recipe_id: int) -> tuple[Decimal, int]:
    avg_value, count = db.execute(
        select(func.avg(Rating.rating_value), func.count(Rating.rating_id)).where(Rating.recipe_id == recipe_id)
    ).one()
    return _avg(avg_value), int(count or 0)


def rating_avg_for_chef(db: Session, chef_id: int) -> Decimal:
    avg_value = db.scalar(select(func.avg(Rating.rating_value)).where(Rating.chef_id == chef_id))
    return _avg(avg_value)


def delivered_stats_for_chef(db: Session, chef_id: int) -> tuple[int, Decimal]:
    count, earnings = db.execute(
        select(func.count(MasterOrder.order_id), func.coalesce(func.sum(MasterOrder.final_amount), 0)).where(
            MasterOrder.chef_id == chef_id,
            MasterOrder.order_status == OrderStatus.DELIVERED,
        )
    ).one()
    return int(count or 0), _avg(earnings)


def _locked(db: Session, model, pk_column, pk: int):
    stmt = select(model).where(pk_column == pk).with_for_update().execution_options(populate_existing=True)
    return db.scalar(stmt)


def refresh_rating_aggregates(db: Session, recipe_id: int, chef_id: int) -> None:
    """Recompute recipe and chef rating aggregates after a rating write.

    Recipe then chef rows are locked before the AVG/COUNT reads, so a
    concurrent rating for the same recipe or chef waits and then sees this one.
    """
    db.flush()

    recipe = _locked(db, Recipe, Recipe.recipe_id, recipe_id)
    chef = _locked(db, ChefProfile, ChefProfile.chef_id, chef_id)

    if recipe is not None:
        recipe.rating, recipe.total_ratings = rating_stats_for_recipe(db, recipe_id)
    if chef is not None:
        chef.rating = rating_avg_for_chef(db, chef_id)

    db.flush()


def record_delivery(db: Session, order: MasterOrder) -> None:
    """Credit the chef for one delivered order."""
    db.execute(
        update(ChefProfile)
        .where(ChefProfile.chef_id == order.chef_id)
        .values(
            total_orders=ChefProfile.total_orders + 1,
            total_earnings=ChefProfile.total_earnings + Decimal(order.final_amount),
        )
        .execution_options(synchronize_session=False)
    )
    chef = db.get(ChefProfile, order.chef_id, populate_existing=True)
    logger.info(
        f"Chef {chef.chef_id} credited for order {order.order_id}: "
        f"total_orders={chef.total_orders}, total_earnings={chef.total_earnings}"
    )


def reconcile_aggregates(db: Session) -> dict:
    """Recompute every aggregate from ratings and delivered orders.

    Returns counts of rows whose stored values were corrected.
    """
    fixed = {"recipes": 0, "chefs": 0}

    for recipe in db.scalars(select(Recipe).order_by(Recipe.recipe_id)).all():
        rating, total = rating_stats_for_recipe(db, recipe.recipe_id)
        if Decimal(recipe.rating or 0) != rating or recipe.total_ratings != total:
            recipe.rating, recipe.total_ratings = rating, total
            fixed["recipes"] += 1

    for chef in db.scalars(select(ChefProfile).order_by(ChefProfile.chef_id)).all():
        rating = rating_avg_for_chef(db, chef.chef_id)
        total_orders, earnings = delivered_stats_for_chef(db, chef.chef_id)
        if (
            Decimal(chef.rating or 0) != rating
            or chef.total_orders != total_orders
            or Decimal(chef.total_earnings or 0) != earnings
        ):
            chef.rating = rating
            chef.total_orders = total_orders
            chef.total_earnings = earnings
            fixed["chefs"] += 1

    db.flush()
    logger.info(f"Reconciled aggregates: {fixed}")
    return fixed
