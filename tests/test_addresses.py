import pytest

from homechef.errors import AddressInUse, UnknownAddress
from homechef.models import Address
from homechef.services.addresses import (
    add_address,
    delete_address,
    get_default_address,
    list_addresses,
    set_default_address,
)
from homechef.services.audit import check_default_addresses
from homechef.services.users import register_user


def _defaults(db, user_id):
    return [a.address_id for a in list_addresses(db, user_id) if a.is_default]


def test_first_address_becomes_default(db_session, address, customer):
    assert address.is_default is True
    assert get_default_address(db_session, customer.user_id).address_id == address.address_id


def test_later_addresses_are_not_default_unless_asked(db_session, address, customer):
    work = add_address(db_session, customer.user_id, "Apt 201, Clifton", "Karachi", "Sindh", "75600", address_type="work")
    db_session.commit()
    assert work.is_default is False
    assert _defaults(db_session, customer.user_id) == [address.address_id]

    other = add_address(
        db_session, customer.user_id, "Block C", "Karachi", "Sindh", "75850", make_default=True
    )
    db_session.commit()
    assert _defaults(db_session, customer.user_id) == [other.address_id]


def test_at_most_one_default_after_any_sequence(db_session, address, customer):
    ids = [address.address_id]
    for i in range(3):
        ids.append(add_address(db_session, customer.user_id, f"Street {i}", "Lahore", "Punjab", "54000").address_id)
    db_session.commit()

    for address_id in [ids[2], ids[0], ids[3], ids[3], ids[1]]:
        set_default_address(db_session, customer.user_id, address_id)
        db_session.commit()
        db_session.expire_all()
        assert _defaults(db_session, customer.user_id) == [address_id]

    assert check_default_addresses(db_session) == []


def test_set_default_rejects_foreign_address(db_session, roles, address, customer):
    other = register_user(db_session, "user_kiran", "kiran@email.pk", "secret-pass")
    db_session.commit()

    with pytest.raises(UnknownAddress):
        set_default_address(db_session, other.user_id, address.address_id)


def test_delete_default_promotes_next(db_session, address, customer):
    second = add_address(db_session, customer.user_id, "Apt 201, Clifton", "Karachi", "Sindh", "75600")
    db_session.commit()

    delete_address(db_session, customer.user_id, address.address_id)
    db_session.commit()

    db_session.expire_all()
    assert db_session.get(Address, address.address_id) is None
    assert _defaults(db_session, customer.user_id) == [second.address_id]


def test_address_used_by_order_cannot_be_deleted(db_session, delivered_order, address, customer):
    with pytest.raises(AddressInUse):
        delete_address(db_session, customer.user_id, address.address_id)
