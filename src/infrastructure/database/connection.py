"""
Database connection management.

Handles PostgreSQL connection pooling, transactions and schema creation using asyncpg.
Uses raw SQL queries, no ORM.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Manages PostgreSQL database connections using an asyncpg connection pool.

    The pool is created once at startup and shared by every request.
    Each query or transaction checks out one connection and always returns it.
    """

    def __init__(
        self,
        host: str,
        port: int,
        database: str,
        user: str,
        password: str,
        min_connections: int = 1,
        max_connections: int = 10,
    ):
        """
        Initialize database connection parameters.

        Args:
            host: Database host
            port: Database port
            database: Database name
            user: Database user
            password: Database password
            min_connections: Minimum connections in pool
            max_connections: Maximum connections in pool
        """
        self.connection_params = {
            "host": host,
            "port": port,
            "database": database,
            "user": user,
            "password": password,
        }
        self.min_connections = min_connections
        self.max_connections = max_connections
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """
        Initialize the connection pool.

        Should be called on application startup.
        """
        try:
            self._pool = await asyncpg.create_pool(
                **self.connection_params,
                min_size=self.min_connections,
                max_size=self.max_connections,
                command_timeout=60,  # Query timeout
            )
            logger.info(
                f"asyncpg connection pool initialized "
                f"(min={self.min_connections}, max={self.max_connections})"
            )
        except Exception as e:
            logger.error(f"Failed to initialize database connection pool: {e}")
            raise

    async def disconnect(self) -> None:
        """
        Close all connections in the pool.

        Should be called on application shutdown.
        """
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed")

    def _require_pool(self) -> asyncpg.Pool:
        if not self._pool:
            raise RuntimeError("Connection pool not initialized. Call connect() first.")
        return self._pool

    async def execute(
        self,
        query: str,
        *args: Any,
        fetch: bool = False,
        fetchone: bool = False,
    ) -> list | dict | None:
        """
        Execute a single SQL query on a pooled connection.

        Args:
            query: SQL query to execute (use $1, $2, $3 for parameters)
            *args: Query parameters (passed positionally)
            fetch: Whether to fetch all results
            fetchone: Whether to fetch single result

        Returns:
            Query results if fetch=True/fetchone=True, None otherwise

        Example:
            row = await db.execute(
                "SELECT id FROM subscriptions WHERE email = $1",
                email,
                fetchone=True
            )
        """
        pool = self._require_pool()

        async with pool.acquire() as conn:
            try:
                if fetchone:
                    row = await conn.fetchrow(query, *args)
                    return dict(row) if row else None
                elif fetch:
                    rows = await conn.fetch(query, *args)
                    return [dict(row) for row in rows]
                else:
                    await conn.execute(query, *args)
                    return None
            except Exception as e:
                logger.error(f"Database query failed: {e}\nQuery: {query}")
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Run several statements atomically on one pooled connection.

        The transaction commits when the block exits normally and rolls back
        on any exception, including asyncio.CancelledError raised when the
        client disconnects mid-request. The connection goes back to the pool
        in every case.

        Example:
            async with db.transaction() as conn:
                await conn.execute("INSERT INTO subscriptions ...", ...)
                await conn.execute("INSERT INTO subscription_tokens ...", ...)
        """
        pool = self._require_pool()

        async with pool.acquire() as conn:
            async with conn.transaction():
                yield conn

    async def init_schema(self) -> None:
        """
        Initialize database schema.

        Creates the subscriptions, subscription_tokens and users tables
        if they don't exist. Should be called on application startup.

        Decision: Tokens live in their own table rather than on the
        subscriber row: a subscriber may hold several live tokens.
        """
        schema = """
        CREATE TABLE IF NOT EXISTS subscriptions (
            id UUID PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            subscribed_at TIMESTAMPTZ NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending_confirmation'
        );

        CREATE TABLE IF NOT EXISTS subscription_tokens (
            subscription_token TEXT PRIMARY KEY,
            subscriber_id UUID NOT NULL REFERENCES subscriptions (id)
        );

        CREATE TABLE IF NOT EXISTS users (
            user_id UUID PRIMARY KEY,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_subscriptions_status ON subscriptions(status);
        CREATE INDEX IF NOT EXISTS idx_subscription_tokens_subscriber
            ON subscription_tokens(subscriber_id);
        """

        try:
            await self.execute(schema)
            logger.info("Database schema initialized")
        except asyncpg.exceptions.UniqueViolationError as e:
            # Another worker created the same table concurrently; the schema exists
            logger.warning(f"Schema already exists (concurrent worker): {e}")
        except Exception as e:
            logger.error(f"Failed to initialize database schema: {e}")
            raise
