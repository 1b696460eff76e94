from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from .errors import TransactionConflict
from .settings import settings

logger = logging.getLogger("homechef.db")

T = TypeVar("T")

# serialization_failure, deadlock_detected
_PG_CONFLICT_CODES = {"40001", "40P01"}


# Stable constraint names; errors.translate_integrity_error matches on them.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


_engine = None
_SessionLocal = None


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_engine(database_url: str | None = None):
    global _engine, _SessionLocal
    url = database_url or settings.database_url
    _engine = create_engine(url, pool_pre_ping=True, echo=settings.sql_echo)
    enable_sqlite_foreign_keys(_engine)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    logger.info(f"Database engine created for {_engine.dialect.name}")
    return _engine


def get_engine():
    global _engine
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal():
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


def get_db():
    db = SessionLocal()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine=None) -> None:
    """Create all tables (development / tests). Production uses alembic."""
    from . import models  # noqa: F401  registers mappers on Base.metadata

    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("Database tables initialized")


def is_transaction_conflict(exc: Exception) -> bool:
    """True for errors that mean 'another transaction won, try again'."""
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    if not isinstance(exc, OperationalError):
        return False
    orig = exc.orig
    if getattr(orig, "pgcode", None) in _PG_CONFLICT_CODES:
        return True
    return "database is locked" in str(orig)


def retry_on_conflict(db: Session, work: Callable[[], T], attempts: int | None = None) -> T:
    """Run `work()` on `db` and commit, retrying transaction conflicts.

    Each retry rolls back and re-runs `work` from scratch on the same session,
    with a linear backoff. Anything else (domain errors included) rolls back
    and propagates on the first attempt. A conflict that outlives every
    attempt is raised as TransactionConflict.
    """
    max_attempts = attempts or settings.tx_retry_attempts

    for attempt in range(1, max_attempts + 1):
        try:
            result = work()
            db.commit()
            return result
        except (OperationalError, DBAPIError) as e:
            db.rollback()
            if not is_transaction_conflict(e):
                raise
            if attempt == max_attempts:
                logger.error(f"Transaction conflict after {max_attempts} attempts: {e.orig}")
                raise TransactionConflict() from e
            logger.warning(f"Transaction conflict (attempt {attempt}/{max_attempts}), retrying: {e.orig}")
            time.sleep(settings.tx_retry_backoff_sec * attempt)
        except Exception:
            db.rollback()
            raise


def run_in_transaction(
    work: Callable[[Session], T],
    *,
    session_factory=None,
    attempts: int | None = None,
) -> T:
    """Run `work(session)` in its own session and transaction, then commit."""
    factory = session_factory or SessionLocal()
    with factory() as db:
        return retry_on_conflict(db, lambda: work(db), attempts=attempts)
