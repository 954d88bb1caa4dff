"""
Base Service

Owns the transaction boundary shared by every service: one service call is one
unit of work that either commits entirely or is rolled back.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import ConflictError, DatabaseError, ValidationError

logger = logging.getLogger(__name__)


def translate_integrity_error(resource: str, error: IntegrityError) -> Exception:
    """
    Turn a store constraint violation into an application error.

    Args:
        resource: Name of the entity being written
        error: IntegrityError raised by SQLAlchemy

    Returns:
        ConflictError for uniqueness breaches, ValidationError otherwise
    """
    reason = str(error.orig) if error.orig is not None else str(error)
    if 'UNIQUE' in reason.upper():
        column = reason.split(':', 1)[-1].strip()
        return ConflictError(f"{resource} already exists ({column})", resource)
    if 'FOREIGN KEY' in reason.upper():
        return ValidationError(f"{resource} references a missing parent")
    return ValidationError(f"{resource} is invalid: {reason}")


class BaseService:
    """Base class giving services a database session and a transaction helper."""

    resource_name = "Entity"

    def __init__(self, db: Session):
        """
        Args:
            db: Database session
        """
        self.db = db

    @contextmanager
    def transaction(self, operation: str):
        """
        Run the enclosed writes as a single transaction.

        Args:
            operation: Short description used in logs and DatabaseError

        Raises:
            ConflictError: On unique constraint violations
            ValidationError: On required field or foreign key violations
            DatabaseError: On any other SQLAlchemy failure
        """
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"{operation} rolled back: {e.orig}")
            raise translate_integrity_error(self.resource_name, e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} rolled back: {e}", exc_info=True)
            raise DatabaseError(operation, str(e)) from e
        except Exception:
            self.db.rollback()
            raise
