"""Post-delivery ratings.

A rating is tied to (order, chef, recipe, user); chef_id always comes from
the order. Recipe and chef rating aggregates are recomputed in the same
transaction as the insert.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import (
    InvalidRating,
    OrderNotDelivered,
    NotOrderOwner,
    RecipeNotInOrder,
    DuplicateRating,
)
from ..models import Rating, OrderStatus
from .aggregates import refresh_rating_aggregates
from .orders import get_order
from .users import get_user

logger = logging.getLogger("homechef.ratings")

MIN_RATING = 1
MAX_RATING = 5


def validate_rating_value(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRating(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}, got {value!r}")
    if not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRating(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {value}")
    return value


def submit_rating(
    db: Session,
    order_id: int,
    recipe_id: int,
    user_id: int,
    rating_value: int,
    review_text: Optional[str] = None,
) -> Rating:
    rating_value = validate_rating_value(rating_value)

    user = get_user(db, user_id)
    order = get_order(db, order_id)
    if order.user_id != user.user_id:
        raise NotOrderOwner(f"User {user_id} did not place order {order_id}")
    if OrderStatus(order.order_status) != OrderStatus.DELIVERED:
        raise OrderNotDelivered(f"Order {order_id} is {OrderStatus(order.order_status).value}, not delivered")
    if recipe_id not in {item.recipe_id for item in order.items}:
        raise RecipeNotInOrder(f"Recipe {recipe_id} is not part of order {order_id}")

    existing = db.scalar(
        select(Rating.rating_id).where(
            Rating.order_id == order_id,
            Rating.recipe_id == recipe_id,
            Rating.user_id == user_id,
        )
    )
    if existing:
        raise DuplicateRating(f"Recipe {recipe_id} was already rated for order {order_id}")

    rating = Rating(
        order_id=order.order_id,
        chef_id=order.chef_id,
        recipe_id=recipe_id,
        user_id=user.user_id,
        rating_value=rating_value,
        review_text=review_text,
    )
    db.add(rating)
    refresh_rating_aggregates(db, recipe_id=recipe_id, chef_id=order.chef_id)

    logger.info(f"User {user_id} rated recipe {recipe_id} on order {order_id}: {rating_value}")
    return rating


def list_ratings(db: Session, recipe_id: Optional[int] = None, chef_id: Optional[int] = None) -> list[Rating]:
    stmt = select(Rating)
    if recipe_id is not None:
        stmt = stmt.where(Rating.recipe_id == recipe_id)
    if chef_id is not None:
        stmt = stmt.where(Rating.chef_id == chef_id)
    return list(db.scalars(stmt.order_by(Rating.rating_id)).all())
