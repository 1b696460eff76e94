import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import DuplicateCategory, UnknownCategory, UnknownRecipe, InvalidAmount
from ..models import Category, Recipe
from .users import get_chef

logger = logging.getLogger("homechef.catalog")


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if not category:
        raise UnknownCategory(f"Category {category_id} not found")
    return category


def create_category(db: Session, category_name: str, description: Optional[str] = None) -> Category:
    category_name = category_name.strip()
    if db.scalar(select(Category.category_id).where(Category.category_name == category_name)):
        raise DuplicateCategory(f"Category '{category_name}' already exists")
    category = Category(category_name=category_name, description=description)
    db.add(category)
    db.flush()
    return category


def list_categories(db: Session, active_only: bool = True) -> list[Category]:
    stmt = select(Category).order_by(Category.category_id)
    if active_only:
        stmt = stmt.where(Category.is_active.is_(True))
    return list(db.scalars(stmt).all())


def get_recipe(db: Session, recipe_id: int) -> Recipe:
    recipe = db.get(Recipe, recipe_id)
    if not recipe:
        raise UnknownRecipe(f"Recipe {recipe_id} not found")
    return recipe


def create_recipe(
    db: Session,
    chef_id: int,
    category_id: int,
    recipe_name: str,
    ingredients: str,
    instructions: str,
    price: Decimal | int | str,
    description: Optional[str] = None,
    preparation_time: Optional[int] = None,
    servings: Optional[int] = None,
    image_url: Optional[str] = None,
    is_available: bool = True,
) -> Recipe:
    chef = get_chef(db, chef_id)
    category = get_category(db, category_id)

    price = Decimal(str(price))
    if price <= 0:
        raise InvalidAmount(f"Recipe price must be positive, got {price}")

    recipe = Recipe(
        chef_id=chef.chef_id,
        category_id=category.category_id,
        recipe_name=recipe_name,
        description=description,
        ingredients=ingredients,
        instructions=instructions,
        price=price,
        preparation_time=preparation_time,
        servings=servings,
        image_url=image_url,
        is_available=is_available,
    )
    db.add(recipe)
    db.flush()
    logger.info(f"Chef {chef_id} added recipe {recipe.recipe_id} ({recipe_name})")
    return recipe


def set_recipe_availability(db: Session, recipe_id: int, is_available: bool) -> Recipe:
    recipe = get_recipe(db, recipe_id)
    recipe.is_available = is_available
    db.flush()
    return recipe


def list_recipes(
    db: Session,
    chef_id: Optional[int] = None,
    category_id: Optional[int] = None,
    available_only: bool = True,
    limit: int = 100,
    offset: int = 0,
) -> list[Recipe]:
    stmt = select(Recipe)
    if chef_id is not None:
        stmt = stmt.where(Recipe.chef_id == chef_id)
    if category_id is not None:
        stmt = stmt.where(Recipe.category_id == category_id)
    if available_only:
        stmt = stmt.where(Recipe.is_available.is_(True))
    stmt = stmt.order_by(Recipe.recipe_id).limit(limit).offset(offset)
    return list(db.scalars(stmt).all())
