"""Idempotent seeding of reference data (and optional demo data).

Rows are matched on their natural keys (role name, category name, coupon
code, username, chef+recipe name, customer+chef for sample orders) so running
the seed twice changes nothing. The caller commits.
"""
import logging
from datetime import datetime, time, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from . import seed_data
from .models import (
    Address,
    Category,
    ChefProfile,
    Coupon,
    MasterOrder,
    OrderStatus,
    PaymentStatus,
    Recipe,
    RoleName,
    User,
)
from .services.addresses import add_address, get_default_address
from .services.catalog import create_category, create_recipe
from .services.coupons import create_coupon
from .services.orders import OrderLine, place_order, advance_order
from .services.payments import record_payment, update_payment_status
from .services.ratings import submit_rating
from .services.users import ensure_roles, register_user, create_chef_profile
from .settings import settings

logger = logging.getLogger("homechef.seed")


def seed_reference(db: Session) -> dict:
    ensure_roles(db)

    created = {"categories": 0, "coupons": 0}
    for name, description in seed_data.CATEGORIES:
        if db.scalar(select(Category.category_id).where(Category.category_name == name)):
            continue
        create_category(db, name, description)
        created["categories"] += 1

    for code, kind, value, minimum, cap, valid_from, valid_until, limit in seed_data.COUPONS:
        if db.scalar(select(Coupon.coupon_id).where(Coupon.coupon_code == code)):
            continue
        create_coupon(
            db,
            coupon_code=code,
            discount_type=kind,
            discount_value=value,
            valid_from=valid_from,
            valid_until=valid_until,
            min_order_amount=minimum,
            max_discount=cap,
            usage_limit=limit,
        )
        created["coupons"] += 1

    logger.info(f"Reference seed: {created}")
    return created


def _user_by_name(db: Session, username: str):
    return db.scalar(select(User).where(User.username == username))


def _ensure_user(db: Session, username: str, email: str, phone: str, roles) -> tuple[User, bool]:
    user = _user_by_name(db, username)
    if user:
        return user, False
    return register_user(db, username, email, settings.seed_demo_password, phone=phone, roles=roles), True


def seed_demo(db: Session) -> dict:
    """Demo accounts, chef profiles, recipes, addresses and sample orders. Requires reference data."""
    created = {"users": 0, "chefs": 0, "recipes": 0, "addresses": 0, "orders": 0}

    for username, email, phone in seed_data.ADMINS:
        _, new = _ensure_user(db, username, email, phone, (RoleName.ADMIN,))
        created["users"] += new

    chefs = {}
    for username, email, phone, chef_name, bio, specialization, years in seed_data.CHEFS:
        user, new = _ensure_user(db, username, email, phone, (RoleName.USER,))
        created["users"] += new
        chef = db.scalar(select(ChefProfile).where(ChefProfile.user_id == user.user_id))
        if not chef:
            chef = create_chef_profile(
                db,
                user.user_id,
                chef_name,
                bio=bio,
                specialization=specialization,
                experience_years=years,
                is_verified=True,
            )
            created["chefs"] += 1
        chefs[username] = chef

    for username, email, phone in seed_data.CUSTOMERS:
        _, new = _ensure_user(db, username, email, phone, (RoleName.USER,))
        created["users"] += new

    categories = {c.category_name: c for c in db.scalars(select(Category)).all()}
    for chef_username, category, name, description, ingredients, instructions, price, prep, servings, image in seed_data.RECIPES:
        chef = chefs[chef_username]
        exists = db.scalar(
            select(Recipe.recipe_id).where(Recipe.chef_id == chef.chef_id, Recipe.recipe_name == name)
        )
        if exists:
            continue
        create_recipe(
            db,
            chef_id=chef.chef_id,
            category_id=categories[category].category_id,
            recipe_name=name,
            ingredients=ingredients,
            instructions=instructions,
            price=price,
            description=description,
            preparation_time=prep,
            servings=servings,
            image_url=seed_data.image_url(image),
        )
        created["recipes"] += 1

    for username, line1, city, state, zip_code, address_type in seed_data.ADDRESSES:
        user = _user_by_name(db, username)
        exists = db.scalar(
            select(Address.address_id).where(Address.user_id == user.user_id, Address.address_line1 == line1)
        )
        if exists:
            continue
        add_address(db, user.user_id, line1, city, state, zip_code, address_type=address_type)
        created["addresses"] += 1

    created["orders"] = _seed_orders(db, chefs)

    logger.info(f"Demo seed: {created}")
    return created


_DELIVERY_STEPS = (OrderStatus.ACCEPTED, OrderStatus.COOKING, OrderStatus.ON_THE_WAY, OrderStatus.DELIVERED)


def _seed_orders(db: Session, chefs: dict) -> int:
    """Place, deliver, pay and rate the sample orders through the services."""
    created = 0
    for username, chef_username, lines, coupon_code, day, method, review in seed_data.SAMPLE_ORDERS:
        user = _user_by_name(db, username)
        chef = chefs[chef_username]
        exists = db.scalar(
            select(MasterOrder.order_id).where(MasterOrder.user_id == user.user_id, MasterOrder.chef_id == chef.chef_id)
        )
        if exists:
            continue

        recipes = {r.recipe_name: r for r in db.scalars(select(Recipe).where(Recipe.chef_id == chef.chef_id)).all()}
        address = get_default_address(db, user.user_id)
        order = place_order(
            db,
            user.user_id,
            chef.chef_id,
            address.address_id,
            [OrderLine(recipes[name].recipe_id, quantity) for name, quantity in lines],
            coupon_code=coupon_code,
            today=day,
        )
        delivered_at = datetime.combine(day, time(13, 0), tzinfo=timezone.utc)
        for status in _DELIVERY_STEPS:
            advance_order(db, order.order_id, status, now=delivered_at)

        payment = record_payment(db, order.order_id, method)
        update_payment_status(db, payment.payment_id, PaymentStatus.COMPLETED)

        rated, stars, text = review
        submit_rating(db, order.order_id, recipes[rated].recipe_id, user.user_id, stars, text)
        created += 1
    return created


def seed_all(db: Session, demo: bool = False) -> dict:
    result = {"reference": seed_reference(db)}
    if demo:
        result["demo"] = seed_demo(db)
    return result
