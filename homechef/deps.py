"""FastAPI dependencies for the HomeChef API.

Provides:
- Database session dependency
- unit_of_work helper: commit with conflict retries, constraint violations
  turned into domain errors
"""
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .db import get_db, retry_on_conflict  # noqa: F401  get_db re-exported for routers and test overrides
from .errors import translate_integrity_error

T = TypeVar("T")


def unit_of_work(db: Session, work: Callable[[], T]) -> T:
    """Run the request's writes, commit, and refresh the returned row.

    `work` may run more than once if the transaction conflicts, so it must
    do all of its reads and writes through `db`.
    """
    try:
        result = retry_on_conflict(db, work)
    except IntegrityError as e:
        raise translate_integrity_error(e) from e
    if result is not None:
        db.refresh(result)
    return result
