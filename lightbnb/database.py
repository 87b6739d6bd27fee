"""
Query gateway over a pooled PostgreSQL connection.
Executes parameterized statements with async SQLAlchemy on the asyncpg driver.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy import exc as sa_exc
from typing import Any, Dict, List, Optional, Sequence
import asyncio
import logging

from lightbnb.config import Settings
from lightbnb.utils.exceptions import translate_database_error

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class QueryGateway:
    """
    Owns one connection pool and executes statements against it.

    Statements use asyncpg's numbered placeholders ($1, $2, ...) and are passed
    to the driver verbatim. Every call borrows a pooled connection and runs in
    its own transaction, committed when the statement succeeds.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo: bool = False,
        application_name: str = "lightbnb",
        engine: Optional[AsyncEngine] = None
    ):
        """
        Create the engine and its connection pool.

        Args:
            database_url: postgresql+asyncpg:// connection URL
            pool_size: Number of connections to maintain in the pool
            max_overflow: Additional connections that can be created on demand
            pool_timeout: Seconds to wait for a free connection before failing
            pool_recycle: Recycle connections after this many seconds
            pool_pre_ping: Validate connections before use
            echo: Log every statement through SQLAlchemy
            application_name: Name the server shows for these connections
            engine: Pre-built engine, used instead of creating one
        """
        self.database_url = database_url
        self.engine = engine or create_async_engine(
            database_url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
            pool_recycle=pool_recycle,
            pool_timeout=pool_timeout,
            connect_args={
                "server_settings": {
                    "application_name": application_name,
                }
            }
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueryGateway":
        """Build a gateway from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=settings.pool_pre_ping,
            echo=settings.debug,
            application_name=settings.app_name,
        )

    async def execute(self, statement: str, parameters: Sequence[Any] = ()) -> List[Row]:
        """
        Execute one parameterized statement.

        Args:
            statement: SQL text with $1, $2, ... placeholders
            parameters: Positional values matching the placeholders

        Returns:
            Result rows as dicts, the written rows for RETURNING statements,
            or an empty list when the statement returns no rows

        Raises:
            DatabaseError: Typed subclass describing the failure
        """
        if self._closed:
            raise RuntimeError("Query gateway is closed")

        params = tuple(parameters)
        logger.debug(f"Executing statement: {statement.strip()} with parameters {params}")
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(statement, params)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except (sa_exc.SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            error = translate_database_error(e)
            logger.error(f"Statement failed [{error.error_code}]: {error.message}")
            raise error from e

    async def fetch_one(self, statement: str, parameters: Sequence[Any] = ()) -> Optional[Row]:
        """Execute a statement and return its first row, or None when there are no rows."""
        rows = await self.execute(statement, parameters)
        return rows[0] if rows else None

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            await self.execute("SELECT 1")
            logger.info("Database connection successful")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def pool_status(self) -> Dict[str, Any]:
        """Get connection pool status for monitoring."""
        pool = self.engine.pool
        return {
            "pool_size": pool.size(),
            "checked_in_connections": pool.checkedin(),
            "checked_out_connections": pool.checkedout(),
            "overflow_connections": pool.overflow(),
        }

    async def close(self) -> None:
        """
        Dispose of the connection pool.
        This should be called during application shutdown.
        """
        if self._closed:
            return
        await self.engine.dispose()
        self._closed = True
        logger.info("Database connections closed")

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> "QueryGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
