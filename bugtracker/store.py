"""Store gateway: parameterized statement execution against the relational store."""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Mapping, Optional

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from sqlalchemy.sql import Executable

from bugtracker.core.exceptions import StoreError

logger = structlog.get_logger()


@dataclass
class QueryResult:
    """Rows and affected count returned by a single statement."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    affected_count: int = 0

    def first(self) -> Optional[dict[str, Any]]:
        """Return the first row, or None if there are no rows."""
        return self.rows[0] if self.rows else None


class StoreGateway:
    """
    Uniform interface for running statements against the store.

    Statements are SQLAlchemy constructs (or ``text()`` clauses) whose values
    travel as bound parameters. Outside a transaction every call checks out
    its own pooled connection and commits on return.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        connection: Optional[AsyncConnection] = None,
    ):
        self.engine = engine
        self._connection = connection

    @property
    def in_transaction(self) -> bool:
        """Whether this gateway is pinned to an open transaction."""
        return self._connection is not None

    async def execute(
        self,
        statement: Executable,
        params: Optional[Mapping[str, Any]] = None,
    ) -> QueryResult:
        """
        Execute a statement with bound parameters.

        Args:
            statement: SQLAlchemy statement or text clause
            params: Optional bound parameters for ``text()`` statements

        Returns:
            QueryResult with the returned rows and affected row count

        Raises:
            StoreError: If the store call fails
        """
        try:
            if self._connection is not None:
                result = await self._connection.execute(statement, params)
                return self._collect(result)

            async with self.engine.begin() as connection:
                result = await connection.execute(statement, params)
                return self._collect(result)
        except SQLAlchemyError as exc:
            logger.error(
                "store_query_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                in_transaction=self.in_transaction,
            )
            raise StoreError() from exc

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["StoreGateway"]:
        """
        Run several statements on one connection inside one transaction.

        Yields a gateway pinned to the connection. The transaction commits
        when the block exits normally and rolls back on any exception.
        """
        if self._connection is not None:
            yield self
            return

        try:
            async with self.engine.begin() as connection:
                yield StoreGateway(self.engine, connection=connection)
        except SQLAlchemyError as exc:
            logger.error(
                "store_transaction_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise StoreError() from exc

    async def ping(self) -> None:
        """Check that the store answers a trivial query."""
        await self.execute(text("SELECT 1"))

    @staticmethod
    def _collect(result: Result) -> QueryResult:
        if result.returns_rows:
            rows = [dict(row) for row in result.mappings().all()]
            return QueryResult(rows=rows, affected_count=len(rows))
        return QueryResult(rows=[], affected_count=max(result.rowcount or 0, 0))
