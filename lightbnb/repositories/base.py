"""
Base repository class with shared query helpers over the query gateway.
Each repository method maps one application need onto exactly one statement.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

from lightbnb.database import QueryGateway
from lightbnb.utils.exceptions import MalformedInputError

logger = logging.getLogger(__name__)


def coerce_int(value: Any, name: str = "value") -> int:
    """Convert an integer or its decimal string form to int."""
    if isinstance(value, bool):
        raise MalformedInputError(f"invalid {name}: {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise MalformedInputError(f"invalid {name}: {value!r}")


class BaseRepository:
    """
    Base repository providing row-returning helpers.
    Database errors propagate from the gateway as typed exceptions.
    """

    def __init__(self, gateway: QueryGateway):
        """
        Initialize repository with the shared query gateway.

        Args:
            gateway: Gateway owning the connection pool
        """
        self.gateway = gateway

    async def fetch_all(
        self,
        operation: str,
        statement: str,
        parameters: Sequence[Any] = ()
    ) -> List[Dict[str, Any]]:
        """
        Run a statement and return every row.

        Args:
            operation: Name of the calling operation, used in log messages
            statement: SQL text with $n placeholders
            parameters: Positional values

        Returns:
            List of row dicts, possibly empty
        """
        rows = await self.gateway.execute(statement, parameters)
        logger.debug(f"{operation} returned {len(rows)} rows: {rows}")
        return rows

    async def fetch_one(
        self,
        operation: str,
        statement: str,
        parameters: Sequence[Any] = ()
    ) -> Optional[Dict[str, Any]]:
        """
        Run a statement and return its first row.
        Returns None when no row matched; extra rows are ignored.
        """
        rows = await self.fetch_all(operation, statement, parameters)
        return rows[0] if rows else None
