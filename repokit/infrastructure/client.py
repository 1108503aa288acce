"""Database capability used by repositories.

SqlClient wraps an AsyncEngine and offers the handful of primitives the
generic repository is written against: streamed queries, immediate mutation
batches, multi-key reads and read-write transactions.  Connection pooling,
retries and statement dialect are the engine's business.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncResult

from repokit.domain.mutations import Mutation

from .mutations import render_mutation
from .statements import key_set_predicate, select_statement
from .transaction import SqlTransaction

logger = logging.getLogger(__name__)

R = TypeVar("R")


@asynccontextmanager
async def stream_rows(
    connection: AsyncConnection,
    statement: str,
    params: Mapping[str, Any] | None = None,
) -> AsyncIterator[AsyncResult]:
    """Stream the rows of ``statement`` on ``connection``; the result is closed on exit."""
    logger.debug("Executing %s params=%s", statement, dict(params or {}))
    result = await connection.stream(text(statement), dict(params or {}))
    try:
        yield result
    finally:
        await result.close()


class SqlClient:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    @asynccontextmanager
    async def execute_query(
        self, statement: str, params: Mapping[str, Any] | None = None
    ) -> AsyncIterator[AsyncResult]:
        """Run a read-only query on a pooled connection and stream its rows."""
        async with self._engine.connect() as conn:
            async with stream_rows(conn, statement, params) as rows:
                yield rows

    @asynccontextmanager
    async def read_by_key_set(
        self,
        table: str,
        key_columns: Sequence[str],
        keys: Sequence[Sequence[Any]],
        columns: Sequence[str] = (),
    ) -> AsyncIterator[AsyncResult]:
        """Stream the rows whose primary key is one of ``keys``.

        Each key is a tuple of values positionally matching ``key_columns``.
        Rows come back in database order.
        """
        params = {
            f"k{i}_{name}": value
            for i, key in enumerate(keys)
            for name, value in zip(key_columns, key)
        }
        where = key_set_predicate(key_columns, len(keys)) if keys else "1 = 0"
        statement = select_statement(table, columns, where=where)
        async with self.execute_query(statement, params) as rows:
            yield rows

    async def apply_mutations(self, mutations: Iterable[Mutation]) -> None:
        """Apply ``mutations`` atomically in a transaction of their own."""
        async with self._engine.begin() as conn:
            await self._apply(conn, list(mutations))

    @asynccontextmanager
    async def read_write_transaction(self) -> AsyncIterator[SqlTransaction]:
        """Open a transaction, yield its handle, then flush buffered writes and commit.

        An exception from the body rolls everything back and propagates.
        """
        async with self._engine.connect() as conn:
            tx = SqlTransaction(conn)
            try:
                async with conn.begin():
                    yield tx
                    await self._apply(conn, tx.drain())
            finally:
                tx.close()

    async def run_read_write_transaction(
        self, unit_of_work: Callable[[SqlTransaction], Awaitable[R]]
    ) -> R:
        async with self.read_write_transaction() as tx:
            return await unit_of_work(tx)

    async def _apply(self, conn: AsyncConnection, mutations: list[Mutation]) -> None:
        if not mutations:
            return
        logger.debug("Applying %d mutation(s)", len(mutations))
        for mutation in mutations:
            await conn.execute(render_mutation(mutation, self.dialect_name))
