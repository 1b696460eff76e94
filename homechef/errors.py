"""Domain errors raised by homechef.services.

Every error carries an HTTP-ish `status_code` so the API layer can render it
without a lookup table. Raw engine errors are translated with
`translate_integrity_error` before they reach a caller.
"""
import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger("homechef.errors")


class HomeChefError(Exception):
    """Base exception for rejected operations."""
    status_code = 400

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__doc__ or self.__class__.__name__)

    @property
    def detail(self) -> str:
        return str(self)


# --- 404 ---

class NotFound(HomeChefError):
    """Referenced row does not exist."""
    status_code = 404

class UnknownUser(NotFound):
    """User not found."""

class UnknownRole(NotFound):
    """Role not found."""

class UnknownChef(NotFound):
    """Chef not found."""

class UnknownCategory(NotFound):
    """Category not found."""

class UnknownRecipe(NotFound):
    """Recipe not found."""

class UnknownAddress(NotFound):
    """Address not found."""

class UnknownCoupon(NotFound):
    """Coupon not found."""

class UnknownOrder(NotFound):
    """Order not found."""

class UnknownPayment(NotFound):
    """Payment not found."""


# --- 409 ---

class Conflict(HomeChefError):
    """Operation conflicts with the current state of the store."""
    status_code = 409

class ConstraintViolation(Conflict):
    """A database constraint rejected the write."""

class DuplicateUsername(Conflict):
    """Username is already taken."""

class DuplicateEmail(Conflict):
    """Email is already registered."""

class DuplicateCouponCode(Conflict):
    """Coupon code already exists."""

class DuplicateCategory(Conflict):
    """Category already exists."""

class DuplicateChefProfile(Conflict):
    """User already has a chef profile."""

class DuplicateRating(Conflict):
    """Recipe was already rated for this order."""

class UserHasOrders(Conflict):
    """User is referenced by orders or ratings and cannot be deleted."""

class AddressInUse(Conflict):
    """Address is referenced by orders and cannot be deleted."""

class InvalidStatusTransition(Conflict):
    """Order status transition is not allowed."""

class InvalidPaymentTransition(Conflict):
    """Payment status transition is not allowed."""

class TransactionConflict(Conflict):
    """Another transaction changed the same rows; retry the request."""


# --- 503 ---

class StoreUnavailable(HomeChefError):
    """The database could not be reached."""
    status_code = 503


# --- 422 ---

class Rejected(HomeChefError):
    """Input failed a business rule."""
    status_code = 422

class InvalidRating(Rejected):
    """Rating value must be an integer between 1 and 5."""

class InvalidQuantity(Rejected):
    """Quantity must be at least 1."""

class InvalidAmount(Rejected):
    """Amount must be positive."""

class InvalidEmail(Rejected):
    """Email address is malformed."""

class InvalidCardNumber(Rejected):
    """card_last_four must be exactly 4 digits and only set for card payments."""

class InactiveUser(Rejected):
    """User account is deactivated."""

class RecipeUnavailable(Rejected):
    """Recipe cannot be ordered."""

class EmptyOrder(Rejected):
    """Order has no items."""

class OrderNotDelivered(Rejected):
    """Only delivered orders can be rated."""

class OrderClosed(Rejected):
    """Order is cancelled."""

class NotOrderOwner(Rejected):
    """User did not place this order."""

class RecipeNotInOrder(Rejected):
    """Recipe is not a line item of this order."""

class AddressNotOwned(Rejected):
    """Address does not belong to this user."""


class InvalidCouponTerms(Rejected):
    """Coupon definition is inconsistent."""


class CouponRejected(Rejected):
    """Coupon cannot be applied."""

class CouponInactive(CouponRejected):
    """Coupon is not active."""

class CouponExpired(CouponRejected):
    """Coupon has expired."""

class CouponNotYetValid(CouponRejected):
    """Coupon is not valid yet."""

class CouponExhausted(CouponRejected):
    """Coupon usage limit reached."""

class CouponMinimumNotMet(CouponRejected):
    """Order subtotal is below the coupon minimum."""


# Constraint name (or the `table.column` SQLite reports for unique columns) -> error
_CONSTRAINT_ERRORS = {
    "uq_users_username": DuplicateUsername,
    "users.username": DuplicateUsername,
    "uq_users_email": DuplicateEmail,
    "users.email": DuplicateEmail,
    "uq_coupons_coupon_code": DuplicateCouponCode,
    "coupons.coupon_code": DuplicateCouponCode,
    "uq_categories_category_name": DuplicateCategory,
    "categories.category_name": DuplicateCategory,
    "uq_chef_profiles_user_id": DuplicateChefProfile,
    "chef_profiles.user_id": DuplicateChefProfile,
    "uq_ratings_order_recipe_user": DuplicateRating,
    "ratings.order_id, ratings.recipe_id, ratings.user_id": DuplicateRating,
    "ck_ratings_rating_value_range": InvalidRating,
    "ck_order_items_quantity_positive": InvalidQuantity,
    "fk_master_orders_user_id_users": UserHasOrders,
    "fk_ratings_user_id_users": UserHasOrders,
    "fk_master_orders_chef_id_chef_profiles": UserHasOrders,
}


def translate_integrity_error(exc: IntegrityError) -> HomeChefError:
    """Map an engine constraint violation to a domain error."""
    message = str(exc.orig)
    for marker, error_cls in _CONSTRAINT_ERRORS.items():
        if marker in message:
            return error_cls()
    logger.warning(f"Unmapped constraint violation: {message}")
    return ConstraintViolation(message.splitlines()[0] if message else None)
