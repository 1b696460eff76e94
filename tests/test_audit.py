from decimal import Decimal

from sqlalchemy import update

from homechef.models import ChefProfile, MasterOrder, OrderItem, Recipe
from homechef.services.aggregates import delivered_stats_for_chef, reconcile_aggregates
from homechef.services.audit import (
    check_aggregate_drift,
    check_line_totals,
    check_order_totals,
    run_audit,
)
from homechef.services.ratings import submit_rating
from homechef.services.users import get_chef


def test_clean_store_passes(db_session, delivered_order, recipe, customer):
    submit_rating(db_session, delivered_order.order_id, recipe.recipe_id, customer.user_id, 5)
    db_session.commit()

    report = run_audit(db_session)
    assert report["total_issues"] == 0


def test_chef_aggregates_match_recomputed_values(db_session, delivered_order, chef):
    db_session.expire_all()
    profile = get_chef(db_session, chef.chef_id)
    assert (profile.total_orders, profile.total_earnings) == delivered_stats_for_chef(db_session, chef.chef_id)
    assert profile.total_earnings == Decimal("1000.00")


def test_detects_tampered_money(db_session, delivered_order):
    db_session.execute(
        update(MasterOrder)
        .where(MasterOrder.order_id == delivered_order.order_id)
        .values(final_amount=Decimal("1.00"))
    )
    db_session.execute(
        update(OrderItem)
        .where(OrderItem.order_id == delivered_order.order_id)
        .values(total_price=Decimal("999.00"))
    )
    db_session.commit()

    assert check_order_totals(db_session) == [delivered_order.order_id]
    assert len(check_line_totals(db_session)) == 1


def test_reconcile_repairs_drift(db_session, delivered_order, chef, recipe):
    db_session.execute(
        update(ChefProfile).where(ChefProfile.chef_id == chef.chef_id).values(total_orders=7, rating=Decimal("1.00"))
    )
    db_session.execute(update(Recipe).where(Recipe.recipe_id == recipe.recipe_id).values(total_ratings=3))
    db_session.commit()

    drift = check_aggregate_drift(db_session)
    assert drift == {"recipes": [recipe.recipe_id], "chefs": [chef.chef_id]}

    fixed = reconcile_aggregates(db_session)
    db_session.commit()
    assert fixed == {"recipes": 1, "chefs": 1}

    db_session.expire_all()
    assert check_aggregate_drift(db_session) == {"recipes": [], "chefs": []}
    profile = get_chef(db_session, chef.chef_id)
    assert profile.total_orders == 1
    assert profile.rating == Decimal("0.00")
