"""
Custom exception classes for the LightBnB data access layer.
Provides typed database errors so callers can tell a duplicate email from an unreachable server.
"""

from typing import Optional
import asyncio

from asyncpg.exceptions import _base as asyncpg_base
from sqlalchemy import exc as sa_exc


# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# SQLSTATE class 22: data_exception (bad value, out of range, too long, ...)
DATA_EXCEPTION_CLASS = "22"


class DatabaseError(Exception):
    """Base database exception carrying the underlying driver message."""

    error_code = "DATABASE_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        return self.message


class ConnectivityError(DatabaseError):
    """Pool exhausted, or database unreachable."""

    error_code = "CONNECTIVITY_ERROR"


class ConstraintViolationError(DatabaseError):
    """Unique, foreign key, not null or check constraint failure."""

    error_code = "CONSTRAINT_VIOLATION"

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class DuplicateKeyError(ConstraintViolationError):
    """Unique constraint violation, e.g. an email that is already registered."""

    error_code = "DUPLICATE_KEY"


class MalformedInputError(DatabaseError):
    """A parameter value the database (or the filter coercion) cannot interpret."""

    error_code = "MALFORMED_INPUT"


def _sqlstate(exception: sa_exc.DBAPIError) -> Optional[str]:
    """Extract the SQLSTATE code from a wrapped driver error, if any."""
    orig = exception.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is None and orig is not None and orig.__cause__ is not None:
        code = getattr(orig.__cause__, "sqlstate", None)
    return code


def _driver_message(exception: BaseException) -> str:
    orig = getattr(exception, "orig", None)
    return str(orig) if orig is not None else str(exception)


def _is_malformed_input(exception: BaseException) -> bool:
    """
    Check whether a driver error was caused by a parameter value.

    The asyncpg dialect wraps server-side data exceptions as a plain DBAPIError
    and client-side argument encoding errors as InterfaceError, so both are
    recognized from the underlying asyncpg error rather than the wrapper type.
    """
    if isinstance(exception, (sa_exc.DataError, sa_exc.ProgrammingError)):
        return True
    if not isinstance(exception, sa_exc.DBAPIError):
        return False
    code = _sqlstate(exception)
    if code and code.startswith(DATA_EXCEPTION_CLASS):
        return True
    cause = getattr(exception.orig, "__cause__", None)
    return isinstance(cause, asyncpg_base.DataError)


def translate_database_error(exception: BaseException) -> DatabaseError:
    """
    Map a SQLAlchemy/asyncpg exception onto the typed error hierarchy.

    Args:
        exception: The exception raised while executing a statement

    Returns:
        A DatabaseError subclass instance (not raised)
    """
    if isinstance(exception, DatabaseError):
        return exception

    message = _driver_message(exception)

    if isinstance(exception, sa_exc.IntegrityError):
        constraint = getattr(getattr(exception.orig, "__cause__", None), "constraint_name", None)
        if _sqlstate(exception) == UNIQUE_VIOLATION or "unique constraint" in message.lower():
            return DuplicateKeyError(message, constraint=constraint)
        return ConstraintViolationError(message, constraint=constraint)

    # Checked before connectivity: argument errors arrive as InterfaceError
    if _is_malformed_input(exception):
        return MalformedInputError(message)

    if isinstance(exception, (
        sa_exc.OperationalError,
        sa_exc.InterfaceError,
        sa_exc.TimeoutError,
        sa_exc.DisconnectionError,
        asyncio.TimeoutError,
        OSError,
    )):
        return ConnectivityError(message)

    if isinstance(exception, sa_exc.DBAPIError) and exception.connection_invalidated:
        return ConnectivityError(message)

    return DatabaseError(message)
