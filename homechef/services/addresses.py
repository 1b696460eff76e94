import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import UnknownAddress, AddressInUse
from ..models import Address, AddressType, MasterOrder
from .users import get_user

logger = logging.getLogger("homechef.addresses")


def get_address(db: Session, address_id: int, user_id: Optional[int] = None) -> Address:
    address = db.get(Address, address_id)
    if not address or (user_id is not None and address.user_id != user_id):
        raise UnknownAddress(f"Address {address_id} not found")
    return address


def list_addresses(db: Session, user_id: int) -> list[Address]:
    get_user(db, user_id)
    return list(
        db.scalars(select(Address).where(Address.user_id == user_id).order_by(Address.address_id)).all()
    )


def get_default_address(db: Session, user_id: int) -> Optional[Address]:
    return db.scalar(
        select(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
    )


def add_address(
    db: Session,
    user_id: int,
    address_line1: str,
    city: str,
    state: str,
    zip_code: str,
    address_line2: Optional[str] = None,
    address_type: AddressType | str = AddressType.HOME,
    make_default: bool = False,
) -> Address:
    """Add an address. A user's first address always becomes the default."""
    get_user(db, user_id)
    has_any = db.scalar(select(Address.address_id).where(Address.user_id == user_id).limit(1))

    address = Address(
        user_id=user_id,
        address_line1=address_line1,
        address_line2=address_line2,
        city=city,
        state=state,
        zip_code=zip_code,
        address_type=AddressType(address_type),
        is_default=False,
    )
    db.add(address)
    db.flush()

    if make_default or not has_any:
        set_default_address(db, user_id, address.address_id)
    return address


def set_default_address(db: Session, user_id: int, address_id: int) -> Address:
    """Check-and-set: lock the user's addresses, clear the old default, set the new one.

    Keeps "at most one default address per user" without a partial unique index.
    """
    rows = db.scalars(
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.address_id)
        .with_for_update()
    ).all()

    target = next((a for a in rows if a.address_id == address_id), None)
    if target is None:
        raise UnknownAddress(f"Address {address_id} not found for user {user_id}")

    for address in rows:
        if address.is_default and address.address_id != address_id:
            address.is_default = False
    # Clear before set so the flush order never shows two defaults
    db.flush()
    target.is_default = True
    db.flush()

    logger.info(f"Default address for user {user_id} is now {address_id}")
    return target


def delete_address(db: Session, user_id: int, address_id: int) -> None:
    address = get_address(db, address_id, user_id=user_id)
    if db.scalar(select(MasterOrder.order_id).where(MasterOrder.address_id == address_id).limit(1)):
        raise AddressInUse(f"Address {address_id} is used by existing orders")
    was_default = address.is_default
    db.delete(address)
    db.flush()

    if was_default:
        replacement = db.scalar(
            select(Address).where(Address.user_id == user_id).order_by(Address.address_id).limit(1)
        )
        if replacement:
            set_default_address(db, user_id, replacement.address_id)
