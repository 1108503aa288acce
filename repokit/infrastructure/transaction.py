"""SQLAlchemy-backed transactions.

SqlTransaction is the handle a unit of work receives.  Writes issued through
repository *_tx methods are buffered on it and applied, in order, on the same
connection right before commit; a unit of work that raises discards them
together with everything else done on the connection.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.ext.asyncio import AsyncConnection

from repokit.domain.errors import InvalidTransactionError
from repokit.domain.mutations import Mutation
from repokit.domain.transaction import Transaction, TransactionManager

if TYPE_CHECKING:
    from .client import SqlClient

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SqlTransaction(Transaction):
    """Open read-write transaction on one AsyncConnection.

    Not safe to share between concurrent units of work, and unusable once the
    scope that created it has exited.
    """

    def __init__(self, connection: AsyncConnection) -> None:
        self._connection = connection
        self._buffered: list[Mutation] = []
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def connection(self) -> AsyncConnection:
        self._ensure_open()
        return self._connection

    @property
    def buffered(self) -> tuple[Mutation, ...]:
        return tuple(self._buffered)

    def buffer_write(self, mutations: Iterable[Mutation]) -> None:
        """Queue mutations to be applied when the transaction commits."""
        self._ensure_open()
        self._buffered.extend(mutations)

    def drain(self) -> list[Mutation]:
        """Remove and return everything buffered so far."""
        pending, self._buffered = self._buffered, []
        return pending

    def close(self) -> None:
        self._open = False
        self._buffered = []

    def _ensure_open(self) -> None:
        if not self._open:
            raise InvalidTransactionError("transaction used outside of its unit of work")


def require_transaction(tx: object) -> SqlTransaction:
    """Return ``tx`` if it is a live SqlTransaction, else raise InvalidTransactionError."""
    if not isinstance(tx, SqlTransaction):
        raise InvalidTransactionError(
            f"expected SqlTransaction, got {type(tx).__name__}"
        )
    if not tx.is_open:
        raise InvalidTransactionError("transaction used outside of its unit of work")
    return tx


class SqlTransactionManager(TransactionManager):
    """Runs units of work inside read-write transactions of a SqlClient.

    Example:

        manager = SqlTransactionManager(client)

        async def transfer(tx: SqlTransaction) -> None:
            await accounts.save_tx(tx, debit)
            await accounts.save_tx(tx, credit)

        await manager.run_in_transaction(transfer)
    """

    def __init__(self, client: SqlClient) -> None:
        self._client = client

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SqlTransaction]:
        """``async with manager.transaction() as tx:`` form of run_in_transaction."""
        try:
            async with self._client.read_write_transaction() as tx:
                yield tx
        except BaseException as exc:
            logger.warning("Transaction rolled back: %r", exc)
            raise
        logger.debug("Transaction committed")

    async def run_in_transaction(
        self, unit_of_work: Callable[[SqlTransaction], Awaitable[R]]
    ) -> R:
        async with self.transaction() as tx:
            return await unit_of_work(tx)
