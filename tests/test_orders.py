from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from homechef.db import Base, enable_sqlite_foreign_keys
from homechef.errors import (
    AddressNotOwned,
    CouponMinimumNotMet,
    EmptyOrder,
    InactiveUser,
    InvalidAmount,
    InvalidQuantity,
    InvalidStatusTransition,
    RecipeUnavailable,
    UnknownOrder,
    UnknownRecipe,
)
from homechef.models import ChefProfile, Coupon, MasterOrder, OrderStatus
from homechef.services.addresses import add_address
from homechef.services.catalog import create_category, create_recipe, set_recipe_availability
from homechef.services.orders import (
    OrderLine,
    advance_order,
    cancel_order,
    get_order,
    list_orders,
    place_order,
)
from homechef.services.users import deactivate_user, ensure_roles, get_chef, register_user, create_chef_profile


def _place(db, customer, chef, address, items, **kwargs):
    order = place_order(db, customer.user_id, chef.chef_id, address.address_id, items, **kwargs)
    db.commit()
    return order


def test_place_order_prices_from_catalog(db_session, customer, chef, recipe, address):
    order = _place(
        db_session, customer, chef, address,
        [OrderLine(recipe.recipe_id, quantity=2, special_instructions="extra raita")],
    )

    assert order.order_status == OrderStatus.PENDING
    assert order.total_amount == Decimal("1000.00")
    assert order.discount_amount == Decimal("0.00")
    assert order.final_amount == Decimal("1000.00")
    assert order.coupon_id is None

    [item] = order.items
    assert item.unit_price == Decimal("500.00")
    assert item.total_price == Decimal("1000.00")
    assert item.special_instructions == "extra raita"


def test_unit_price_is_a_snapshot(db_session, customer, chef, recipe, address):
    order = _place(db_session, customer, chef, address, [OrderLine(recipe.recipe_id)])

    recipe.price = Decimal("650.00")
    db_session.commit()

    db_session.expire_all()
    assert get_order(db_session, order.order_id).items[0].unit_price == Decimal("500.00")


def test_place_order_with_coupon(db_session, customer, chef, recipe, address, coupon, today):
    order = _place(
        db_session, customer, chef, address,
        [{"recipe_id": recipe.recipe_id, "quantity": 2}],
        coupon_code="RAMADAN20",
        today=today,
    )

    assert order.total_amount == Decimal("1000.00")
    assert order.discount_amount == Decimal("200.00")
    assert order.final_amount == Decimal("800.00")
    assert order.coupon_id == coupon.coupon_id

    db_session.expire_all()
    assert db_session.get(Coupon, coupon.coupon_id).used_count == 1


def test_rejected_coupon_creates_nothing(db_session, customer, chef, recipe, address, coupon, today):
    # 400 < 500 minimum
    second = create_recipe(
        db_session, chef.chef_id, recipe.category_id, "naan", "flour", "bake", Decimal("400.00")
    )
    db_session.commit()

    with pytest.raises(CouponMinimumNotMet):
        place_order(
            db_session, customer.user_id, chef.chef_id, address.address_id,
            [OrderLine(second.recipe_id)], coupon_code="RAMADAN20", today=today,
        )
    db_session.rollback()

    assert db_session.query(MasterOrder).count() == 0
    assert db_session.get(Coupon, coupon.coupon_id).used_count == 0


def test_place_order_validation(db_session, customer, chef, recipe, address):
    with pytest.raises(EmptyOrder):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, [])
    with pytest.raises(InvalidQuantity):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(recipe.recipe_id, 0)])
    with pytest.raises(UnknownRecipe):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(9999)])


def test_unavailable_recipe_cannot_be_ordered(db_session, customer, chef, recipe, address):
    set_recipe_availability(db_session, recipe.recipe_id, False)
    db_session.commit()

    with pytest.raises(RecipeUnavailable):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(recipe.recipe_id)])


def test_recipe_from_another_chef_is_rejected(db_session, roles, customer, chef, recipe, address):
    other_user = register_user(db_session, "chef_sara", "sara@homechef.pk", "secret-pass")
    other = create_chef_profile(db_session, other_user.user_id, "Sara Hassan")
    db_session.commit()

    with pytest.raises(RecipeUnavailable):
        place_order(db_session, customer.user_id, other.chef_id, address.address_id, [OrderLine(recipe.recipe_id)])


def test_address_must_belong_to_customer(db_session, roles, customer, chef, recipe):
    stranger = register_user(db_session, "user_hina", "hina@email.pk", "secret-pass")
    theirs = add_address(db_session, stranger.user_id, "House 47, F-8", "Islamabad", "ICT", "44000")
    db_session.commit()

    with pytest.raises(AddressNotOwned):
        place_order(db_session, customer.user_id, chef.chef_id, theirs.address_id, [OrderLine(recipe.recipe_id)])


def test_inactive_user_cannot_order(db_session, customer, chef, recipe, address):
    deactivate_user(db_session, customer.user_id)
    db_session.commit()

    with pytest.raises(InactiveUser):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(recipe.recipe_id)])


def test_full_lifecycle_credits_chef(db_session, customer, chef, recipe, address):
    order = _place(db_session, customer, chef, address, [OrderLine(recipe.recipe_id, quantity=3)])
    delivered_at = datetime(2024, 6, 15, 19, 30, tzinfo=timezone.utc)

    for status in ("accepted", "cooking", "on_the_way"):
        advance_order(db_session, order.order_id, status)
        db_session.commit()
    advance_order(db_session, order.order_id, OrderStatus.DELIVERED, now=delivered_at)
    db_session.commit()

    db_session.expire_all()
    order = get_order(db_session, order.order_id)
    assert order.order_status == OrderStatus.DELIVERED
    assert order.actual_delivery is not None

    profile = get_chef(db_session, chef.chef_id)
    assert profile.total_orders == 1
    assert profile.total_earnings == Decimal("1500.00")


def test_skipping_states_is_rejected(db_session, customer, chef, recipe, address):
    order = _place(db_session, customer, chef, address, [OrderLine(recipe.recipe_id)])

    with pytest.raises(InvalidStatusTransition):
        advance_order(db_session, order.order_id, OrderStatus.DELIVERED)
    db_session.rollback()

    assert get_order(db_session, order.order_id).order_status == OrderStatus.PENDING
    assert get_chef(db_session, chef.chef_id).total_orders == 0


def test_cancel_keeps_coupon_usage(db_session, customer, chef, recipe, address, coupon, today):
    order = _place(
        db_session, customer, chef, address, [OrderLine(recipe.recipe_id, 2)],
        coupon_code="RAMADAN20", today=today,
    )
    cancel_order(db_session, order.order_id)
    db_session.commit()

    db_session.expire_all()
    assert get_order(db_session, order.order_id).order_status == OrderStatus.CANCELLED
    assert db_session.get(Coupon, coupon.coupon_id).used_count == 1

    with pytest.raises(InvalidStatusTransition):
        advance_order(db_session, order.order_id, OrderStatus.ACCEPTED)


def test_list_orders_filters(db_session, customer, chef, recipe, address):
    first = _place(db_session, customer, chef, address, [OrderLine(recipe.recipe_id)])
    second = _place(db_session, customer, chef, address, [OrderLine(recipe.recipe_id)])
    cancel_order(db_session, first.order_id)
    db_session.commit()

    assert [o.order_id for o in list_orders(db_session, user_id=customer.user_id)] == [
        second.order_id, first.order_id
    ]
    assert [o.order_id for o in list_orders(db_session, status="pending")] == [second.order_id]
    assert list_orders(db_session, chef_id=chef.chef_id + 100) == []


def test_unknown_order(db_session):
    with pytest.raises(UnknownOrder):
        get_order(db_session, 42)


def test_line_total_beyond_column_precision_is_rejected(db_session, customer, chef, recipe, address):
    with pytest.raises(InvalidQuantity):
        place_order(
            db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(recipe.recipe_id, 2000)]
        )
    db_session.rollback()

    assert db_session.query(MasterOrder).count() == 0


def test_order_total_beyond_column_precision_is_rejected(db_session, customer, chef, recipe, address):
    lines = [OrderLine(recipe.recipe_id, 1999)] * 101

    with pytest.raises(InvalidAmount):
        place_order(db_session, customer.user_id, chef.chef_id, address.address_id, lines)
    db_session.rollback()

    assert db_session.query(MasterOrder).count() == 0


def test_overlapping_deliveries_for_one_chef_all_count(tmp_path):
    """Two sessions holding the same chef row both deliver; neither credit is lost."""
    engine = create_engine(f"sqlite:///{tmp_path / 'store.db'}")
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    StoreSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with StoreSession() as db:
        ensure_roles(db)
        user = register_user(db, "user_zaid", "zaid.hassan@email.pk", "secret-pass")
        cook = register_user(db, "chef_ali", "ali.khan@homechef.pk", "secret-pass")
        profile = create_chef_profile(db, cook.user_id, "Ali Khan")
        category = create_category(db, "Biryani & Rice")
        dish = create_recipe(
            db,
            chef_id=profile.chef_id,
            category_id=category.category_id,
            recipe_name="pulahoo",
            ingredients="Basmati rice, onions, spices, ghee",
            instructions="Cook rice with spices and ghee",
            price=Decimal("100.00"),
        )
        home = add_address(db, user.user_id, "Plot 123, Gulshan-e-Iqbal", "Karachi", "Sindh", "75300")

        order_ids = []
        for _ in range(2):
            order = place_order(db, user.user_id, profile.chef_id, home.address_id, [OrderLine(dish.recipe_id)])
            for status in ("accepted", "cooking", "on_the_way"):
                advance_order(db, order.order_id, status)
            order_ids.append(order.order_id)
        chef_id = profile.chef_id
        db.commit()

    first, second = StoreSession(), StoreSession()
    try:
        assert first.get(ChefProfile, chef_id).total_orders == 0
        assert second.get(ChefProfile, chef_id).total_orders == 0

        advance_order(first, order_ids[0], OrderStatus.DELIVERED)
        first.commit()
        advance_order(second, order_ids[1], OrderStatus.DELIVERED)
        second.commit()
    finally:
        first.close()
        second.close()

    with StoreSession() as db:
        profile = db.get(ChefProfile, chef_id)
        assert profile.total_orders == 2
        assert profile.total_earnings == Decimal("200.00")
    engine.dispose()
