from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from calendlyx.core.errors import StorageError
from calendlyx.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_operation(db: Session, action: str):
    """Roll back and raise ``StorageError("Failed to <action>")`` on DB errors."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error trying to %s", action)
        raise StorageError(f"Failed to {action}") from exc
