from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from homechef.main import app, limiter
from homechef.db import Base, get_db, enable_sqlite_foreign_keys
from homechef.settings import settings
from homechef.services.users import ensure_roles, register_user, create_chef_profile
from homechef.services.catalog import create_category, create_recipe
from homechef.services.addresses import add_address
from homechef.services.coupons import create_coupon
from homechef.services.orders import OrderLine, place_order, advance_order

# --- Test Database Setup ---

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool  # one shared connection so every session sees the same in-memory DB
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 6, 15)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True, scope="session")
def _fast_password_hashing():
    # scrypt is slow; any werkzeug hash works here
    original = settings.password_hash_method
    settings.password_hash_method = "pbkdf2:sha256:1000"
    yield
    settings.password_hash_method = original


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Test client with DB override."""
    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = TestingSessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def roles(db_session):
    result = ensure_roles(db_session)
    db_session.commit()
    return result


@pytest.fixture
def customer(db_session, roles):
    user = register_user(db_session, "user_zaid", "zaid.hassan@email.pk", "secret-pass", phone="03001234501")
    db_session.commit()
    return user


@pytest.fixture
def chef(db_session, roles):
    user = register_user(db_session, "chef_ali", "ali.khan@homechef.pk", "secret-pass")
    profile = create_chef_profile(
        db_session, user.user_id, "Ali Khan", specialization="Biryani & Rice", experience_years=15
    )
    db_session.commit()
    return profile


@pytest.fixture
def category(db_session):
    cat = create_category(db_session, "Biryani & Rice", "Traditional rice dishes and biryani")
    db_session.commit()
    return cat


@pytest.fixture
def recipe(db_session, chef, category):
    r = create_recipe(
        db_session,
        chef_id=chef.chef_id,
        category_id=category.category_id,
        recipe_name="karachi biryani",
        ingredients="Basmati rice, mutton, yogurt",
        instructions="Layer rice and meat",
        price=Decimal("500.00"),
        servings=4,
    )
    db_session.commit()
    return r


@pytest.fixture
def address(db_session, customer):
    a = add_address(db_session, customer.user_id, "Plot 123, Gulshan-e-Iqbal", "Karachi", "Sindh", "75300")
    db_session.commit()
    return a


@pytest.fixture
def coupon(db_session):
    """RAMADAN20-style terms: 20%, capped at 200, minimum 500."""
    c = create_coupon(
        db_session,
        coupon_code="RAMADAN20",
        discount_type="percentage",
        discount_value=Decimal("20"),
        valid_from=date(2024, 1, 1),
        valid_until=date(2024, 12, 31),
        min_order_amount=Decimal("500"),
        max_discount=Decimal("200"),
        usage_limit=1000,
    )
    db_session.commit()
    return c


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def delivered_order(db_session, customer, chef, recipe, address):
    """Two portions of the recipe, walked through to delivered."""
    order = place_order(
        db_session, customer.user_id, chef.chef_id, address.address_id, [OrderLine(recipe.recipe_id, 2)]
    )
    for status in ("accepted", "cooking", "on_the_way", "delivered"):
        advance_order(db_session, order.order_id, status)
    db_session.commit()
    return order
