"""Users, roles and chef profiles.

Deletion policy: a user referenced by any order (as customer or as chef) or
by a rating is never deleted; `delete_user` raises UserHasOrders and callers
may fall back to `deactivate_user`. Otherwise the database cascades the
delete to addresses, user_roles, the chef profile and that chef's recipes.
"""
import logging
import re
from typing import Iterable, Optional

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from ..errors import (
    DuplicateUsername,
    DuplicateEmail,
    DuplicateChefProfile,
    InvalidEmail,
    UnknownUser,
    UnknownRole,
    UnknownChef,
    UserHasOrders,
)
from ..models import User, Role, UserRole, RoleName, ChefProfile, MasterOrder, Rating
from ..security import hash_password, verify_password

logger = logging.getLogger("homechef.users")

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise UnknownUser(f"User {user_id} not found")
    return user


def get_chef(db: Session, chef_id: int) -> ChefProfile:
    chef = db.get(ChefProfile, chef_id)
    if not chef:
        raise UnknownChef(f"Chef {chef_id} not found")
    return chef


def get_role(db: Session, role_name: RoleName | str) -> Role:
    try:
        name = RoleName(role_name)
    except ValueError:
        raise UnknownRole(f"Role '{role_name}' does not exist")
    role = db.scalar(select(Role).where(Role.role_name == name))
    if not role:
        raise UnknownRole(f"Role '{name.value}' is not seeded")
    return role


def ensure_roles(db: Session) -> list[Role]:
    """Create the static role rows if missing. Idempotent."""
    existing = {r.role_name for r in db.scalars(select(Role)).all()}
    for name in RoleName:
        if name not in existing:
            db.add(Role(role_name=name))
    db.flush()
    return list(db.scalars(select(Role).order_by(Role.role_id)).all())


def register_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    roles: Iterable[RoleName | str] = (RoleName.USER,),
) -> User:
    username = username.strip()
    email = email.strip().lower()
    if not EMAIL_RE.match(email):
        raise InvalidEmail(f"'{email}' is not a valid email address")

    if db.scalar(select(User.user_id).where(User.username == username)):
        raise DuplicateUsername(f"Username '{username}' is already taken")
    if db.scalar(select(User.user_id).where(func.lower(User.email) == email)):
        raise DuplicateEmail(f"Email '{email}' is already registered")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        phone=phone,
    )
    db.add(user)
    db.flush()

    for role_name in roles:
        assign_role(db, user.user_id, role_name)

    logger.info(f"Registered user {user.user_id} ({username})")
    return user


def assign_role(db: Session, user_id: int, role_name: RoleName | str) -> UserRole:
    """Grant a role. Granting a role the user already has returns the existing link."""
    user = get_user(db, user_id)
    role = get_role(db, role_name)

    existing = db.scalar(
        select(UserRole).where(UserRole.user_id == user.user_id, UserRole.role_id == role.role_id)
    )
    if existing:
        return existing

    link = UserRole(user_id=user.user_id, role_id=role.role_id)
    db.add(link)
    db.flush()
    db.expire(user, ["user_roles"])
    return link


def create_chef_profile(
    db: Session,
    user_id: int,
    chef_name: str,
    bio: Optional[str] = None,
    specialization: Optional[str] = None,
    experience_years: Optional[int] = None,
    is_verified: bool = False,
) -> ChefProfile:
    user = get_user(db, user_id)
    if db.scalar(select(ChefProfile.chef_id).where(ChefProfile.user_id == user.user_id)):
        raise DuplicateChefProfile(f"User {user_id} already has a chef profile")

    assign_role(db, user.user_id, RoleName.CHEF)

    chef = ChefProfile(
        user_id=user.user_id,
        chef_name=chef_name,
        bio=bio,
        specialization=specialization,
        experience_years=experience_years,
        is_verified=is_verified,
    )
    db.add(chef)
    db.flush()
    logger.info(f"Created chef profile {chef.chef_id} for user {user_id}")
    return chef


def verify_credentials(db: Session, login: str, password: str) -> Optional[User]:
    """Return the active user matching username or email and password, else None."""
    login = login.strip()
    user = db.scalar(
        select(User).where(or_(User.username == login, func.lower(User.email) == login.lower()))
    )
    if not user or not user.is_active:
        return None
    if not verify_password(user.password_hash, password):
        return None
    return user


def deactivate_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    user.is_active = False
    db.flush()
    logger.info(f"Deactivated user {user_id}")
    return user


def user_is_referenced(db: Session, user_id: int) -> bool:
    """True if orders (as customer or chef) or ratings point at this user."""
    if db.scalar(select(MasterOrder.order_id).where(MasterOrder.user_id == user_id).limit(1)):
        return True
    if db.scalar(select(Rating.rating_id).where(Rating.user_id == user_id).limit(1)):
        return True
    chef_id = db.scalar(select(ChefProfile.chef_id).where(ChefProfile.user_id == user_id))
    if chef_id is not None:
        if db.scalar(select(MasterOrder.order_id).where(MasterOrder.chef_id == chef_id).limit(1)):
            return True
        if db.scalar(select(Rating.rating_id).where(Rating.chef_id == chef_id).limit(1)):
            return True
    return False


def delete_user(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    if user_is_referenced(db, user.user_id):
        logger.warning(f"Refusing to delete user {user_id}: referenced by orders")
        raise UserHasOrders(f"User {user_id} has orders; deactivate the account instead")

    db.delete(user)
    db.flush()
    logger.info(f"Deleted user {user_id}")
