from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from homechef.models import Coupon
from homechef.services import orders as order_service
from homechef.settings import settings


@pytest.fixture
def api_world(client, roles):
    """Customer, chef, category, recipe (450.00) and default address created through the API."""
    customer = client.post(
        "/api/users",
        json={"username": "user_dada", "email": "dada.khan@email.pk", "password": "secret-pass"},
    ).json()
    chef_user = client.post(
        "/api/users",
        json={"username": "chef_fatima", "email": "fatima@homechef.pk", "password": "secret-pass"},
    ).json()
    chef = client.post(
        "/api/chefs",
        json={"user_id": chef_user["user_id"], "chef_name": "Fatima Ahmed", "experience_years": 10},
    ).json()
    category = client.post("/api/categories", json={"category_name": "Kebabs & Grilled"}).json()
    recipe = client.post(
        "/api/recipes",
        json={
            "chef_id": chef["chef_id"],
            "category_id": category["category_id"],
            "recipe_name": "seekh kebab",
            "ingredients": "Ground mutton, onions",
            "instructions": "Grill on charcoal",
            "price": "450.00",
        },
    ).json()
    address = client.post(
        f"/api/users/{customer['user_id']}/addresses",
        json={"address_line1": "Street 5, Defence", "city": "Lahore", "state": "Punjab", "zip_code": "54000"},
    ).json()
    return {"customer": customer, "chef": chef, "recipe": recipe, "address": address}


def _order_payload(world, quantity=1, **extra):
    payload = {
        "user_id": world["customer"]["user_id"],
        "chef_id": world["chef"]["chef_id"],
        "address_id": world["address"]["address_id"],
        "items": [{"recipe_id": world["recipe"]["recipe_id"], "quantity": quantity}],
    }
    payload.update(extra)
    return payload


def test_ready(client):
    response = client.get("/api/ready")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "db_ok": True}


def test_create_user_and_duplicate(client, roles):
    payload = {"username": "user_sana", "email": "sana@email.pk", "password": "secret-pass"}
    response = client.post("/api/users", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["role_names"] == ["user"]
    assert "password_hash" not in body

    response = client.post("/api/users", json=payload)
    assert response.status_code == 409
    assert response.json()["error"] == "DuplicateUsername"


def test_unknown_rows_are_404(client):
    response = client.get("/api/orders/999")
    assert response.status_code == 404
    assert response.json()["error"] == "UnknownOrder"
    assert client.get("/api/users/999").status_code == 404


def test_address_default_endpoint(client, roles, api_world):
    user_id = api_world["customer"]["user_id"]
    assert api_world["address"]["is_default"] is True

    second = client.post(
        f"/api/users/{user_id}/addresses",
        json={"address_line1": "Plot 89, DHA", "city": "Lahore", "state": "Punjab", "zip_code": "54792"},
    ).json()
    response = client.put(f"/api/users/{user_id}/addresses/{second['address_id']}/default")
    assert response.status_code == 200

    listed = client.get(f"/api/users/{user_id}/addresses").json()
    assert [a["address_id"] for a in listed if a["is_default"]] == [second["address_id"]]


def test_order_lifecycle_with_coupon_and_rating(client, db_session, roles, api_world):
    today = date.today()
    response = client.post(
        "/api/coupons",
        json={
            "coupon_code": "eid20",
            "discount_type": "percentage",
            "discount_value": "20",
            "min_order_amount": "500",
            "max_discount": "200",
            "valid_from": str(today - timedelta(days=1)),
            "valid_until": str(today + timedelta(days=30)),
            "usage_limit": 5,
        },
    )
    assert response.status_code == 201, response.text
    assert response.json()["coupon_code"] == "EID20"

    quote = client.get("/api/coupons/EID20/quote", params={"subtotal": "900"}).json()
    assert Decimal(quote["discount_amount"]) == Decimal("180")

    response = client.post("/api/orders", json=_order_payload(api_world, quantity=3, coupon_code="EID20"))
    assert response.status_code == 201, response.text
    order = response.json()
    assert Decimal(order["total_amount"]) == Decimal("1350")
    assert Decimal(order["discount_amount"]) == Decimal("200")
    assert Decimal(order["final_amount"]) == Decimal("1150")
    assert order["order_status"] == "pending"
    order_id = order["order_id"]

    response = client.post(f"/api/orders/{order_id}/status", json={"status": "delivered"})
    assert response.status_code == 409
    assert response.json()["error"] == "InvalidStatusTransition"

    for status in ("accepted", "cooking", "on_the_way", "delivered"):
        response = client.post(f"/api/orders/{order_id}/status", json={"status": status})
        assert response.status_code == 200, response.text
    assert response.json()["actual_delivery"] is not None

    rating = {
        "order_id": order_id,
        "recipe_id": api_world["recipe"]["recipe_id"],
        "user_id": api_world["customer"]["user_id"],
        "rating_value": 6,
    }
    response = client.post("/api/ratings", json=rating)
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidRating"

    rating["rating_value"] = 5
    response = client.post("/api/ratings", json=rating)
    assert response.status_code == 201, response.text

    recipe = client.get(f"/api/recipes/{api_world['recipe']['recipe_id']}").json()
    assert recipe["total_ratings"] == 1
    assert Decimal(recipe["rating"]) == Decimal("5")

    chef = client.get(f"/api/chefs/{api_world['chef']['chef_id']}").json()
    assert chef["total_orders"] == 1
    assert Decimal(chef["total_earnings"]) == Decimal("1150")

    db_session.expire_all()
    assert db_session.query(Coupon).filter_by(coupon_code="EID20").one().used_count == 1


def test_coupon_below_minimum_is_rejected(client, roles, api_world):
    today = date.today()
    client.post(
        "/api/coupons",
        json={
            "coupon_code": "BIG100",
            "discount_type": "fixed",
            "discount_value": "100",
            "min_order_amount": "1000",
            "valid_from": str(today),
            "valid_until": str(today),
        },
    )
    response = client.post("/api/orders", json=_order_payload(api_world, coupon_code="BIG100"))
    assert response.status_code == 422
    assert response.json()["error"] == "CouponMinimumNotMet"
    assert client.get("/api/orders").json() == []


def test_payments_endpoints(client, roles, api_world):
    order = client.post("/api/orders", json=_order_payload(api_world, quantity=2)).json()

    response = client.post(
        f"/api/orders/{order['order_id']}/payments",
        json={"payment_method": "card", "card_last_four": "4242"},
    )
    assert response.status_code == 201, response.text
    payment = response.json()
    assert Decimal(payment["amount"]) == Decimal("900")

    response = client.post(f"/api/payments/{payment['payment_id']}/status", json={"status": "completed"})
    assert response.json()["payment_status"] == "completed"

    response = client.post(f"/api/payments/{payment['payment_id']}/status", json={"status": "failed"})
    assert response.status_code == 409
    assert len(client.get(f"/api/orders/{order['order_id']}/payments").json()) == 1


def test_delete_user_rules(client, roles, api_world):
    customer_id = api_world["customer"]["user_id"]
    client.post("/api/orders", json=_order_payload(api_world))

    response = client.delete(f"/api/users/{customer_id}")
    assert response.status_code == 409
    assert response.json()["error"] == "UserHasOrders"

    response = client.post(f"/api/users/{customer_id}/deactivate")
    assert response.json()["is_active"] is False

    loner = client.post(
        "/api/users", json={"username": "user_rehan", "email": "rehan@email.pk", "password": "secret-pass"}
    ).json()
    assert client.delete(f"/api/users/{loner['user_id']}").status_code == 204
    assert client.get(f"/api/users/{loner['user_id']}").status_code == 404


class _DbError(Exception):
    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode


def _deadlock():
    return OperationalError("UPDATE coupons", {}, _DbError("deadlock detected", pgcode="40P01"))


def test_conflicting_order_write_is_retried(client, roles, api_world, monkeypatch):
    monkeypatch.setattr(settings, "tx_retry_backoff_sec", 0)
    real_place_order = order_service.place_order
    calls = []

    def place_order_after_deadlock(db, **kwargs):
        calls.append(1)
        if len(calls) == 1:
            raise _deadlock()
        return real_place_order(db, **kwargs)

    monkeypatch.setattr(order_service, "place_order", place_order_after_deadlock)

    response = client.post("/api/orders", json=_order_payload(api_world))
    assert response.status_code == 201
    assert len(calls) == 2

    orders = client.get("/api/orders", params={"user_id": api_world["customer"]["user_id"]}).json()
    assert len(orders) == 1


def test_persistent_conflict_is_409(client, roles, api_world, monkeypatch):
    monkeypatch.setattr(settings, "tx_retry_backoff_sec", 0)

    def always_deadlocked(db, **kwargs):
        raise _deadlock()

    monkeypatch.setattr(order_service, "place_order", always_deadlocked)

    response = client.post("/api/orders", json=_order_payload(api_world))
    assert response.status_code == 409
    assert response.json()["error"] == "TransactionConflict"


def test_database_outage_is_503(client, roles, api_world, monkeypatch):
    def unreachable(db, order_id):
        raise OperationalError("SELECT", {}, _DbError("could not connect to server"))

    monkeypatch.setattr(order_service, "get_order", unreachable)

    response = client.get("/api/orders/1")
    assert response.status_code == 503
    assert response.json()["error"] == "StoreUnavailable"


def test_oversized_quantity_is_rejected(client, roles, api_world):
    response = client.post("/api/orders", json=_order_payload(api_world, quantity=1000))
    assert response.status_code == 422


def test_default_rate_limit_applies(client):
    allowed = int(settings.rate_limit_default.split("/")[0])
    for _ in range(allowed):
        assert client.get("/api/ready").status_code == 200

    assert client.get("/api/ready").status_code == 429
