"""SQLAlchemy ORM models for the HomeChef order store.

Tables:
- users, roles, user_roles: identities and their role tags
- chef_profiles: chef extension of a user, with denormalized reputation aggregates
- categories, recipes: the catalog
- addresses: delivery addresses (at most one default per user, enforced in services)
- coupons: promotional codes
- master_orders, order_items, payments, ratings: the order aggregate

Aggregates (chef rating/total_orders/total_earnings, recipe rating/total_ratings)
and money invariants are maintained by homechef.services, not by triggers.
"""

from __future__ import annotations

import enum
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import (
    String,
    DateTime,
    Date,
    Text,
    Integer,
    Boolean,
    Numeric,
    ForeignKey,
    Index,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, false, true

from .db import Base


# --- Enums ---

class RoleName(str, enum.Enum):
    USER = "user"
    CHEF = "chef"
    ADMIN = "admin"


class AddressType(str, enum.Enum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COOKING = "cooking"
    ON_THE_WAY = "on_the_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    JAZZCASH = "jazzcash"
    EASYPAISA = "easypaisa"
    CARD = "card"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


def _enum(enum_cls, name: str) -> sa.Enum:
    # VARCHAR + CHECK on every backend; stores the lowercase value, not the member name
    return sa.Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
        values_callable=lambda e: [m.value for m in e],
        validate_strings=True,
    )


# --- Identity ---

class User(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true(), default=True)

    user_roles: Mapped[list["UserRole"]] = relationship(
        "UserRole", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    addresses: Mapped[list["Address"]] = relationship(
        "Address", back_populates="user", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Address.address_id"
    )
    chef_profile: Mapped[Optional["ChefProfile"]] = relationship(
        "ChefProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def role_names(self) -> set[str]:
        return {ur.role.role_name.value for ur in self.user_roles}


class Role(Base):
    __tablename__ = "roles"

    role_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_name: Mapped[RoleName] = mapped_column(_enum(RoleName, "role_name"), unique=True, nullable=False)


class UserRole(Base):
    """Many-to-many join between users and roles."""
    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_id_role_id"),
    )

    user_role_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    role_id: Mapped[int] = mapped_column(Integer, ForeignKey("roles.role_id"), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="user_roles")
    role: Mapped["Role"] = relationship("Role", lazy="joined")


class ChefProfile(Base):
    """One-to-one chef extension of a user."""
    __tablename__ = "chef_profiles"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="rating_range"),
        CheckConstraint("total_orders >= 0", name="total_orders_non_negative"),
        CheckConstraint("total_earnings >= 0", name="total_earnings_non_negative"),
    )

    chef_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False
    )
    chef_name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specialization: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    experience_years: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Denormalized aggregates
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False, default=Decimal("0.00"), server_default="0")
    total_orders: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00"), server_default="0"
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped["User"] = relationship("User", back_populates="chef_profile")
    recipes: Mapped[list["Recipe"]] = relationship(
        "Recipe", back_populates="chef", cascade="all, delete-orphan", passive_deletes=True
    )


# --- Catalog ---

class Category(Base):
    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())


class Recipe(Base):
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_chef_id", "chef_id"),
        Index("ix_recipes_category_id", "category_id"),
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="rating_range"),
        CheckConstraint("total_ratings >= 0", name="total_ratings_non_negative"),
    )

    recipe_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chef_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chef_profiles.chef_id", ondelete="CASCADE"), nullable=False
    )
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.category_id"), nullable=False)
    recipe_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    preparation_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Denormalized aggregates
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 2), nullable=False, default=Decimal("0.00"), server_default="0")
    total_ratings: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    chef: Mapped["ChefProfile"] = relationship("ChefProfile", back_populates="recipes")
    category: Mapped["Category"] = relationship("Category")


# --- Addresses & coupons ---

class Address(Base):
    __tablename__ = "addresses"
    __table_args__ = (
        Index("ix_addresses_user_id", "user_id"),
    )

    address_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    address_line1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_line2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(10), nullable=False)
    address_type: Mapped[AddressType] = mapped_column(
        _enum(AddressType, "address_type"), nullable=False, default=AddressType.HOME,
        server_default=AddressType.HOME.value
    )
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    user: Mapped["User"] = relationship("User", back_populates="addresses")


class Coupon(Base):
    __tablename__ = "coupons"
    __table_args__ = (
        CheckConstraint("discount_value > 0", name="discount_value_positive"),
        CheckConstraint("min_order_amount >= 0", name="min_order_amount_non_negative"),
        CheckConstraint("max_discount IS NULL OR max_discount >= 0", name="max_discount_non_negative"),
        CheckConstraint("valid_from <= valid_until", name="validity_window"),
        CheckConstraint("usage_limit >= 0", name="usage_limit_non_negative"),
        CheckConstraint("used_count >= 0", name="used_count_non_negative"),
    )

    coupon_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coupon_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    discount_type: Mapped[DiscountType] = mapped_column(
        _enum(DiscountType, "discount_type"), nullable=False, default=DiscountType.PERCENTAGE,
        server_default=DiscountType.PERCENTAGE.value
    )
    discount_value: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    min_order_amount: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0.00"), server_default="0"
    )
    max_discount: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 2), nullable=True)
    valid_from: Mapped[date] = mapped_column(Date, nullable=False)
    valid_until: Mapped[date] = mapped_column(Date, nullable=False)
    usage_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    used_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())


# --- Orders ---

class MasterOrder(Base):
    """Aggregate root of one customer purchase.

    No ON DELETE CASCADE from users/chef_profiles: a user or chef with orders
    cannot be deleted (see services.users.delete_user).
    """
    __tablename__ = "master_orders"
    __table_args__ = (
        Index("ix_master_orders_user_id", "user_id"),
        Index("ix_master_orders_chef_id", "chef_id"),
        Index("ix_master_orders_status", "order_status"),
        CheckConstraint("total_amount >= 0", name="total_amount_non_negative"),
        CheckConstraint("discount_amount >= 0", name="discount_amount_non_negative"),
        CheckConstraint("final_amount >= 0", name="final_amount_non_negative"),
    )

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.user_id"), nullable=False)
    chef_id: Mapped[int] = mapped_column(Integer, ForeignKey("chef_profiles.chef_id"), nullable=False)
    address_id: Mapped[int] = mapped_column(Integer, ForeignKey("addresses.address_id"), nullable=False)
    coupon_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("coupons.coupon_id"), nullable=True)
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0.00"), server_default="0"
    )
    final_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    order_status: Mapped[OrderStatus] = mapped_column(
        _enum(OrderStatus, "order_status"), nullable=False, default=OrderStatus.PENDING,
        server_default=OrderStatus.PENDING.value
    )
    delivery_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    estimated_delivery: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    actual_delivery: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship("User")
    chef: Mapped["ChefProfile"] = relationship("ChefProfile")
    address: Mapped["Address"] = relationship("Address")
    coupon: Mapped[Optional["Coupon"]] = relationship("Coupon")

    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan", passive_deletes=True,
        order_by="OrderItem.order_item_id"
    )
    payments: Mapped[list["Payment"]] = relationship(
        "Payment", back_populates="order", cascade="all, delete-orphan", passive_deletes=True,
        order_by="Payment.payment_id"
    )


class OrderItem(Base):
    """Line item; unit_price is a snapshot of Recipe.price at order time."""
    __tablename__ = "order_items"
    __table_args__ = (
        Index("ix_order_items_order_id", "order_id"),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        CheckConstraint("unit_price >= 0", name="unit_price_non_negative"),
        CheckConstraint("total_price >= 0", name="total_price_non_negative"),
    )

    order_item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("master_orders.order_id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[int] = mapped_column(Integer, ForeignKey("recipes.recipe_id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    unit_price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    special_instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    order: Mapped["MasterOrder"] = relationship("MasterOrder", back_populates="items")
    recipe: Mapped["Recipe"] = relationship("Recipe")


class Payment(Base):
    """One payment attempt; status is independent of the order status."""
    __tablename__ = "payments"
    __table_args__ = (
        Index("ix_payments_order_id", "order_id"),
        CheckConstraint("amount > 0", name="amount_positive"),
    )

    payment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("master_orders.order_id", ondelete="CASCADE"), nullable=False
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(_enum(PaymentMethod, "payment_method"), nullable=False)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum(PaymentStatus, "payment_status"), nullable=False, default=PaymentStatus.PENDING,
        server_default=PaymentStatus.PENDING.value
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    card_last_four: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)

    order: Mapped["MasterOrder"] = relationship("MasterOrder", back_populates="payments")


class Rating(Base):
    __tablename__ = "ratings"
    __table_args__ = (
        Index("ix_ratings_recipe_id", "recipe_id"),
        Index("ix_ratings_chef_id", "chef_id"),
        UniqueConstraint("order_id", "recipe_id", "user_id", name="uq_ratings_order_recipe_user"),
        CheckConstraint("rating_value >= 1 AND rating_value <= 5", name="rating_value_range"),
    )

    rating_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("master_orders.order_id"), nullable=False)
    chef_id: Mapped[int] = mapped_column(Integer, ForeignKey("chef_profiles.chef_id"), nullable=False)
    recipe_id: Mapped[int] = mapped_column(Integer, ForeignKey("recipes.recipe_id"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.user_id"), nullable=False)
    rating_value: Mapped[int] = mapped_column(Integer, nullable=False)
    review_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
