"""Transaction abstractions.

A Transaction exists only while a TransactionManager runs a unit of work;
mutations buffered on it land when that unit of work completes without
raising, and are discarded otherwise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncConnection

R = TypeVar("R")


class Transaction(ABC):
    """An open read-write transaction."""

    @property
    @abstractmethod
    def connection(self) -> AsyncConnection:
        """Connection the transaction runs on; statements issued here join it."""


class TransactionManager(ABC):
    @abstractmethod
    async def run_in_transaction(
        self, unit_of_work: Callable[[Transaction], Awaitable[R]]
    ) -> R:
        """Run ``unit_of_work`` atomically.

        Commits when it returns, rolls back and re-raises when it raises.
        The unit of work is never retried.
        """
