"""
Base Service.

Services hold the business rules. They orchestrate repositories, validate
input before any mutation, and translate storage failures into application
errors.

Usage:
    from explorer.backend.services.base import BaseService

    class FavoriteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.users = UserRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from explorer.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from explorer.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Subclasses call super().__init__(session) and build their repositories
    on the same session, so one request shares one unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Await a database operation, converting SQLAlchemy errors.

        Raises:
            ConflictError: Unique constraint violation, or the row changed
                since it was read (version mismatch)
            DatabaseError: Any other database failure
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists") from e
            raise DatabaseError(f"Database constraint violation: {operation}") from e
        except StaleDataError as e:
            self._logger.warning(
                "Concurrent modification detected",
                extra={"operation": operation, "error": str(e)},
            )
            raise ConflictError("Resource was modified concurrently, retry the request") from e
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def _validate_required(
        self,
        fields: dict[str, Any],
        message: str = "Required fields missing",
    ) -> None:
        """
        Reject missing or blank values.

        Args:
            fields: Field name to value
            message: Error message when anything is missing

        Raises:
            ValidationError: Listing the missing fields in details
        """
        missing = [
            name for name, value in fields.items()
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(message, details={"missing_fields": missing})

    def _log_operation(self, operation: str, **context: Any) -> None:
        """Log a state-changing operation at info level."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
