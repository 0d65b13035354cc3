"""
Shared plumbing for the repositories.

Every repository call is its own unit of work: it commits on success and
rolls back on failure, translating SQLAlchemy errors into the tracker's
error taxonomy.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Any, List, Type

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from agent_tracker.errors import ConflictError, NotFoundError, StoreError, TrackerError

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@contextmanager
def store_errors(
    db: Session,
    integrity_error: Type[TrackerError] = ConflictError,
    integrity_message: str = "Record already exists",
):
    """Commit the work done in the block, or roll back and translate errors."""
    try:
        yield
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info(f"Integrity error: {e.orig}")
        raise integrity_error(integrity_message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store operation failed")
        raise StoreError("Internal store failure") from e


@contextmanager
def read_errors(db: Session):
    """Translate failures of read-only queries into StoreError.

    The session is rolled back first: on PostgreSQL a failed statement
    aborts the transaction, and later queries on the session would fail too.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store query failed")
        raise StoreError("Internal store failure") from e


def upsert(
    db: Session,
    model,
    key_columns: List[str],
    values: Dict[str, Any],
    update_columns: List[str],
    touch: Dict[str, Any] = None,
) -> None:
    """Insert a row or overwrite the row holding the same natural key.

    Issued as a single INSERT ... ON CONFLICT DO UPDATE statement so
    concurrent submissions for one key converge on the last write without
    creating a second row. update_columns take the submitted values; touch
    holds extra columns (timestamps) set only on the update path.
    """
    dialect = db.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise StoreError(f"Upsert not supported on {dialect}")

    stmt = insert(model).values(**values)
    set_ = {column: stmt.excluded[column] for column in update_columns}
    if touch:
        set_.update(touch)
    stmt = stmt.on_conflict_do_update(index_elements=key_columns, set_=set_)

    # With the key conflict absorbed, the remaining integrity failures are
    # missing users or activities.
    with store_errors(db, NotFoundError, "Referenced user or activity does not exist"):
        db.execute(stmt)
