"""Pydantic schemas for the HomeChef API.

Request/response models for:
- Users, roles, chef profiles, addresses
- Categories and recipes
- Coupons and quotes
- Orders (with nested items), payments, ratings
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .models import RoleName, AddressType, DiscountType, OrderStatus, PaymentMethod, PaymentStatus


# --- Users ---

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=8)
    phone: Optional[str] = Field(None, max_length=15)
    roles: list[RoleName] = [RoleName.USER]


class UserOut(BaseModel):
    user_id: int
    username: str
    email: str
    phone: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
    role_names: set[str]

    class Config:
        from_attributes = True


class ChefProfileCreate(BaseModel):
    user_id: int
    chef_name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = None
    specialization: Optional[str] = Field(None, max_length=100)
    experience_years: Optional[int] = Field(None, ge=0)


class ChefProfileOut(BaseModel):
    chef_id: int
    user_id: int
    chef_name: str
    bio: Optional[str]
    specialization: Optional[str]
    experience_years: Optional[int]
    rating: Decimal
    total_orders: int
    total_earnings: Decimal
    is_verified: bool

    class Config:
        from_attributes = True


# --- Addresses ---

class AddressCreate(BaseModel):
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=50)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=10)
    address_type: AddressType = AddressType.HOME
    make_default: bool = False


class AddressOut(BaseModel):
    address_id: int
    user_id: int
    address_line1: str
    address_line2: Optional[str]
    city: str
    state: str
    zip_code: str
    address_type: AddressType
    is_default: bool

    class Config:
        from_attributes = True


# --- Catalog ---

class CategoryCreate(BaseModel):
    category_name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None


class CategoryOut(BaseModel):
    category_id: int
    category_name: str
    description: Optional[str]
    is_active: bool

    class Config:
        from_attributes = True


class RecipeCreate(BaseModel):
    chef_id: int
    category_id: int
    recipe_name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    ingredients: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=8, decimal_places=2)
    preparation_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    image_url: Optional[str] = Field(None, max_length=500)
    is_available: bool = True


class RecipeOut(BaseModel):
    recipe_id: int
    chef_id: int
    category_id: int
    recipe_name: str
    description: Optional[str]
    ingredients: str
    instructions: str
    price: Decimal
    preparation_time: Optional[int]
    servings: Optional[int]
    image_url: Optional[str]
    is_available: bool
    rating: Decimal
    total_ratings: int

    class Config:
        from_attributes = True


class RecipeAvailability(BaseModel):
    is_available: bool


# --- Coupons ---

class CouponCreate(BaseModel):
    coupon_code: str = Field(..., min_length=1, max_length=20)
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_value: Decimal = Field(..., gt=0)
    min_order_amount: Decimal = Field(Decimal("0"), ge=0)
    max_discount: Optional[Decimal] = Field(None, ge=0)
    valid_from: date
    valid_until: date
    usage_limit: int = Field(1, ge=0)
    is_active: bool = True


class CouponOut(BaseModel):
    coupon_id: int
    coupon_code: str
    discount_type: DiscountType
    discount_value: Decimal
    min_order_amount: Decimal
    max_discount: Optional[Decimal]
    valid_from: date
    valid_until: date
    usage_limit: int
    used_count: int
    is_active: bool

    class Config:
        from_attributes = True


class CouponQuoteOut(BaseModel):
    coupon_code: str
    subtotal: Decimal
    discount_amount: Decimal
    final_amount: Decimal

    class Config:
        from_attributes = True


# --- Orders ---

class OrderItemIn(BaseModel):
    recipe_id: int
    quantity: int = Field(1, ge=1, le=999)
    special_instructions: Optional[str] = None


class OrderCreate(BaseModel):
    user_id: int
    chef_id: int
    address_id: int
    items: list[OrderItemIn] = Field(..., min_length=1)
    coupon_code: Optional[str] = None
    delivery_instructions: Optional[str] = None
    estimated_delivery: Optional[datetime] = None


class OrderItemOut(BaseModel):
    order_item_id: int
    recipe_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    special_instructions: Optional[str]

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    order_id: int
    user_id: int
    chef_id: int
    address_id: int
    coupon_id: Optional[int]
    order_date: Optional[datetime]
    total_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    order_status: OrderStatus
    delivery_instructions: Optional[str]
    estimated_delivery: Optional[datetime]
    actual_delivery: Optional[datetime]
    items: list[OrderItemOut] = []

    class Config:
        from_attributes = True


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# --- Payments ---

class PaymentCreate(BaseModel):
    payment_method: PaymentMethod
    amount: Optional[Decimal] = Field(None, gt=0)
    transaction_id: Optional[str] = Field(None, max_length=100)
    card_last_four: Optional[str] = Field(None, min_length=4, max_length=4)


class PaymentStatusUpdate(BaseModel):
    status: PaymentStatus
    transaction_id: Optional[str] = Field(None, max_length=100)


class PaymentOut(BaseModel):
    payment_id: int
    order_id: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    amount: Decimal
    transaction_id: Optional[str]
    payment_date: Optional[datetime]
    card_last_four: Optional[str]

    class Config:
        from_attributes = True


# --- Ratings ---

class RatingCreate(BaseModel):
    order_id: int
    recipe_id: int
    user_id: int
    rating_value: int
    review_text: Optional[str] = None


class RatingOut(BaseModel):
    rating_id: int
    order_id: int
    chef_id: int
    recipe_id: int
    user_id: int
    rating_value: int
    review_text: Optional[str]
    rating_date: Optional[datetime]

    class Config:
        from_attributes = True
