import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from homechef.db import is_transaction_conflict, retry_on_conflict, run_in_transaction
from homechef.errors import (
    ConstraintViolation,
    DuplicateEmail,
    DuplicateRating,
    DuplicateUsername,
    TransactionConflict,
    UnknownUser,
    UserHasOrders,
    translate_integrity_error,
)
from homechef.models import User
from homechef.services.users import get_user
from homechef.settings import settings

from conftest import TestingSessionLocal


class _Orig(Exception):
    def __init__(self, message, pgcode=None):
        super().__init__(message)
        self.pgcode = pgcode


def _integrity(message):
    return IntegrityError("INSERT ...", {}, _Orig(message))


@pytest.mark.parametrize(
    "message,error",
    [
        ("UNIQUE constraint failed: users.username", DuplicateUsername),
        ('duplicate key value violates unique constraint "uq_users_email"', DuplicateEmail),
        ('update or delete on table "users" violates foreign key constraint '
         '"fk_master_orders_user_id_users" on table "master_orders"', UserHasOrders),
        ("UNIQUE constraint failed: ratings.order_id, ratings.recipe_id, ratings.user_id", DuplicateRating),
        ('duplicate key value violates unique constraint "uq_ratings_order_recipe_user"', DuplicateRating),
        ("CHECK constraint failed: something_else", ConstraintViolation),
    ],
)
def test_translate_integrity_error(message, error):
    assert type(translate_integrity_error(_integrity(message))) is error


def test_transaction_conflict_detection():
    assert is_transaction_conflict(OperationalError("SELECT 1", {}, _Orig("could not serialize", pgcode="40001")))
    assert is_transaction_conflict(OperationalError("SELECT 1", {}, _Orig("database is locked")))
    assert not is_transaction_conflict(OperationalError("SELECT 1", {}, _Orig("no such table: users")))
    assert not is_transaction_conflict(ValueError("nope"))


def test_run_in_transaction_commits(roles):
    def work(db):
        db.add(User(username="user_omar", email="omar@email.pk", password_hash="x"))
        db.flush()
        return 1

    assert run_in_transaction(work, session_factory=TestingSessionLocal) == 1

    with TestingSessionLocal() as db:
        assert db.query(User).filter_by(username="user_omar").count() == 1


def test_run_in_transaction_retries_conflicts(monkeypatch):
    monkeypatch.setattr(settings, "tx_retry_backoff_sec", 0)
    calls = []

    def work(db):
        calls.append(1)
        if len(calls) < 3:
            raise OperationalError("UPDATE coupons", {}, _Orig("deadlock detected", pgcode="40P01"))
        return "ok"

    assert run_in_transaction(work, session_factory=TestingSessionLocal, attempts=3) == "ok"
    assert len(calls) == 3


def test_run_in_transaction_gives_up(monkeypatch):
    monkeypatch.setattr(settings, "tx_retry_backoff_sec", 0)

    def work(db):
        raise OperationalError("UPDATE coupons", {}, _Orig("database is locked"))

    with pytest.raises(TransactionConflict):
        run_in_transaction(work, session_factory=TestingSessionLocal, attempts=2)


def test_domain_errors_are_not_retried():
    calls = []

    def work(db):
        calls.append(1)
        return get_user(db, 12345)

    with pytest.raises(UnknownUser):
        run_in_transaction(work, session_factory=TestingSessionLocal, attempts=3)
    assert len(calls) == 1


def test_retry_on_conflict_reruns_work_on_the_same_session(monkeypatch, roles):
    monkeypatch.setattr(settings, "tx_retry_backoff_sec", 0)
    calls = []

    with TestingSessionLocal() as db:
        def work():
            calls.append(1)
            db.add(User(username=f"user_{len(calls)}", email=f"user{len(calls)}@email.pk", password_hash="x"))
            db.flush()
            if len(calls) == 1:
                raise OperationalError("INSERT INTO users", {}, _Orig("could not serialize", pgcode="40001"))
            return len(calls)

        assert retry_on_conflict(db, work, attempts=2) == 2

    with TestingSessionLocal() as db:
        assert [u.username for u in db.query(User).all()] == ["user_2"]


def test_non_conflict_errors_are_not_retried():
    calls = []

    with TestingSessionLocal() as db:
        def work():
            calls.append(1)
            raise OperationalError("SELECT 1", {}, _Orig("no such table: users"))

        with pytest.raises(OperationalError):
            retry_on_conflict(db, work, attempts=3)
    assert len(calls) == 1
