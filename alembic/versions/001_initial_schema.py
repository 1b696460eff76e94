"""Initial schema: users, roles, chefs, catalog, addresses, coupons, orders, payments, ratings

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _in(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def upgrade() -> None:
    # Identity
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(15), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("user_id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "roles",
        sa.Column("role_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("role_name", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("role_id", name="pk_roles"),
        sa.UniqueConstraint("role_name", name="uq_roles_role_name"),
        sa.CheckConstraint(_in("role_name", ["user", "chef", "admin"]), name="ck_roles_role_name"),
    )

    op.create_table(
        "user_roles",
        sa.Column("user_role_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("role_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("user_role_id", name="pk_user_roles"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE", name="fk_user_roles_user_id_users"
        ),
        sa.ForeignKeyConstraint(["role_id"], ["roles.role_id"], name="fk_user_roles_role_id_roles"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_id_role_id"),
    )

    op.create_table(
        "chef_profiles",
        sa.Column("chef_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("chef_name", sa.String(100), nullable=False),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("specialization", sa.String(100), nullable=True),
        sa.Column("experience_years", sa.Integer, nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("total_orders", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_earnings", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("is_verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("chef_id", name="pk_chef_profiles"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE", name="fk_chef_profiles_user_id_users"
        ),
        sa.UniqueConstraint("user_id", name="uq_chef_profiles_user_id"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_chef_profiles_rating_range"),
        sa.CheckConstraint("total_orders >= 0", name="ck_chef_profiles_total_orders_non_negative"),
        sa.CheckConstraint("total_earnings >= 0", name="ck_chef_profiles_total_earnings_non_negative"),
    )

    # Catalog
    op.create_table(
        "categories",
        sa.Column("category_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("category_name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("category_id", name="pk_categories"),
        sa.UniqueConstraint("category_name", name="uq_categories_category_name"),
    )

    op.create_table(
        "recipes",
        sa.Column("recipe_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("chef_id", sa.Integer, nullable=False),
        sa.Column("category_id", sa.Integer, nullable=False),
        sa.Column("recipe_name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("ingredients", sa.Text, nullable=False),
        sa.Column("instructions", sa.Text, nullable=False),
        sa.Column("price", sa.Numeric(8, 2), nullable=False),
        sa.Column("preparation_time", sa.Integer, nullable=True),
        sa.Column("servings", sa.Integer, nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("total_ratings", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("recipe_id", name="pk_recipes"),
        sa.ForeignKeyConstraint(
            ["chef_id"], ["chef_profiles.chef_id"], ondelete="CASCADE", name="fk_recipes_chef_id_chef_profiles"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.category_id"], name="fk_recipes_category_id_categories"
        ),
        sa.CheckConstraint("price >= 0", name="ck_recipes_price_non_negative"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_recipes_rating_range"),
        sa.CheckConstraint("total_ratings >= 0", name="ck_recipes_total_ratings_non_negative"),
    )
    op.create_index("ix_recipes_chef_id", "recipes", ["chef_id"])
    op.create_index("ix_recipes_category_id", "recipes", ["category_id"])

    # Addresses & coupons
    op.create_table(
        "addresses",
        sa.Column("address_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("address_line1", sa.String(255), nullable=False),
        sa.Column("address_line2", sa.String(255), nullable=True),
        sa.Column("city", sa.String(50), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        sa.Column("address_type", sa.String(20), nullable=False, server_default="home"),
        sa.Column("is_default", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint("address_id", name="pk_addresses"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], ondelete="CASCADE", name="fk_addresses_user_id_users"
        ),
        sa.CheckConstraint(_in("address_type", ["home", "work", "other"]), name="ck_addresses_address_type"),
    )
    op.create_index("ix_addresses_user_id", "addresses", ["user_id"])

    op.create_table(
        "coupons",
        sa.Column("coupon_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("coupon_code", sa.String(20), nullable=False),
        sa.Column("discount_type", sa.String(20), nullable=False, server_default="percentage"),
        sa.Column("discount_value", sa.Numeric(8, 2), nullable=False),
        sa.Column("min_order_amount", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("max_discount", sa.Numeric(8, 2), nullable=True),
        sa.Column("valid_from", sa.Date, nullable=False),
        sa.Column("valid_until", sa.Date, nullable=False),
        sa.Column("usage_limit", sa.Integer, nullable=False, server_default="1"),
        sa.Column("used_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("coupon_id", name="pk_coupons"),
        sa.UniqueConstraint("coupon_code", name="uq_coupons_coupon_code"),
        sa.CheckConstraint(_in("discount_type", ["percentage", "fixed"]), name="ck_coupons_discount_type"),
        sa.CheckConstraint("discount_value > 0", name="ck_coupons_discount_value_positive"),
        sa.CheckConstraint("min_order_amount >= 0", name="ck_coupons_min_order_amount_non_negative"),
        sa.CheckConstraint(
            "max_discount IS NULL OR max_discount >= 0", name="ck_coupons_max_discount_non_negative"
        ),
        sa.CheckConstraint("valid_from <= valid_until", name="ck_coupons_validity_window"),
        sa.CheckConstraint("usage_limit >= 0", name="ck_coupons_usage_limit_non_negative"),
        sa.CheckConstraint("used_count >= 0", name="ck_coupons_used_count_non_negative"),
    )

    # Orders
    op.create_table(
        "master_orders",
        sa.Column("order_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("chef_id", sa.Integer, nullable=False),
        sa.Column("address_id", sa.Integer, nullable=False),
        sa.Column("coupon_id", sa.Integer, nullable=True),
        sa.Column("order_date", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount_amount", sa.Numeric(8, 2), nullable=False, server_default="0"),
        sa.Column("final_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("order_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("delivery_instructions", sa.Text, nullable=True),
        sa.Column("estimated_delivery", sa.DateTime(timezone=True), nullable=True),
        sa.Column("actual_delivery", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("order_id", name="pk_master_orders"),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], name="fk_master_orders_user_id_users"),
        sa.ForeignKeyConstraint(
            ["chef_id"], ["chef_profiles.chef_id"], name="fk_master_orders_chef_id_chef_profiles"
        ),
        sa.ForeignKeyConstraint(
            ["address_id"], ["addresses.address_id"], name="fk_master_orders_address_id_addresses"
        ),
        sa.ForeignKeyConstraint(
            ["coupon_id"], ["coupons.coupon_id"], name="fk_master_orders_coupon_id_coupons"
        ),
        sa.CheckConstraint(
            _in("order_status", ["pending", "accepted", "cooking", "on_the_way", "delivered", "cancelled"]),
            name="ck_master_orders_order_status",
        ),
        sa.CheckConstraint("total_amount >= 0", name="ck_master_orders_total_amount_non_negative"),
        sa.CheckConstraint("discount_amount >= 0", name="ck_master_orders_discount_amount_non_negative"),
        sa.CheckConstraint("final_amount >= 0", name="ck_master_orders_final_amount_non_negative"),
    )
    op.create_index("ix_master_orders_user_id", "master_orders", ["user_id"])
    op.create_index("ix_master_orders_chef_id", "master_orders", ["chef_id"])
    op.create_index("ix_master_orders_status", "master_orders", ["order_status"])

    op.create_table(
        "order_items",
        sa.Column("order_item_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer, nullable=False),
        sa.Column("recipe_id", sa.Integer, nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Numeric(8, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(8, 2), nullable=False),
        sa.Column("special_instructions", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("order_item_id", name="pk_order_items"),
        sa.ForeignKeyConstraint(
            ["order_id"], ["master_orders.order_id"], ondelete="CASCADE",
            name="fk_order_items_order_id_master_orders",
        ),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.recipe_id"], name="fk_order_items_recipe_id_recipes"),
        sa.CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
        sa.CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price_non_negative"),
        sa.CheckConstraint("total_price >= 0", name="ck_order_items_total_price_non_negative"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer, nullable=False),
        sa.Column("payment_method", sa.String(20), nullable=False),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("transaction_id", sa.String(100), nullable=True),
        sa.Column("payment_date", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("card_last_four", sa.String(4), nullable=True),
        sa.PrimaryKeyConstraint("payment_id", name="pk_payments"),
        sa.ForeignKeyConstraint(
            ["order_id"], ["master_orders.order_id"], ondelete="CASCADE",
            name="fk_payments_order_id_master_orders",
        ),
        sa.CheckConstraint(
            _in("payment_method", ["cash", "jazzcash", "easypaisa", "card"]), name="ck_payments_payment_method"
        ),
        sa.CheckConstraint(
            _in("payment_status", ["pending", "completed", "failed", "refunded"]),
            name="ck_payments_payment_status",
        ),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
    op.create_index("ix_payments_order_id", "payments", ["order_id"])

    op.create_table(
        "ratings",
        sa.Column("rating_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer, nullable=False),
        sa.Column("chef_id", sa.Integer, nullable=False),
        sa.Column("recipe_id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("rating_value", sa.Integer, nullable=False),
        sa.Column("review_text", sa.Text, nullable=True),
        sa.Column("rating_date", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("rating_id", name="pk_ratings"),
        sa.ForeignKeyConstraint(["order_id"], ["master_orders.order_id"], name="fk_ratings_order_id_master_orders"),
        sa.ForeignKeyConstraint(["chef_id"], ["chef_profiles.chef_id"], name="fk_ratings_chef_id_chef_profiles"),
        sa.ForeignKeyConstraint(["recipe_id"], ["recipes.recipe_id"], name="fk_ratings_recipe_id_recipes"),
        sa.ForeignKeyConstraint(["user_id"], ["users.user_id"], name="fk_ratings_user_id_users"),
        sa.UniqueConstraint("order_id", "recipe_id", "user_id", name="uq_ratings_order_recipe_user"),
        sa.CheckConstraint("rating_value >= 1 AND rating_value <= 5", name="ck_ratings_rating_value_range"),
    )
    op.create_index("ix_ratings_recipe_id", "ratings", ["recipe_id"])
    op.create_index("ix_ratings_chef_id", "ratings", ["chef_id"])


def downgrade() -> None:
    op.drop_table("ratings")
    op.drop_table("payments")
    op.drop_table("order_items")
    op.drop_table("master_orders")
    op.drop_table("coupons")
    op.drop_table("addresses")
    op.drop_table("recipes")
    op.drop_table("categories")
    op.drop_table("chef_profiles")
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_table("users")
