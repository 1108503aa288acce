"""Generic repository interface.

Repository[T] declares the full operation set a table-backed repository
offers for an entity type T.  Entities are opaque here: translation between
rows and entities is done by caller-supplied functions handed to the concrete
implementation in repokit.infrastructure.

Design notes:
  - All methods are async; the only suspension points are database calls.
  - find_by_id returns None for "no such row" and raises for every other
    failure, so callers never confuse a miss with an error.
  - update() is an upsert, identical to save(); it does not check that the
    row exists first.
  - *_tx methods buffer their writes on the transaction; nothing is visible
    until the enclosing unit of work commits.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Generic, NamedTuple, TypeVar

from repokit.domain.transaction import Transaction

T = TypeVar("T")


class Page(NamedTuple, Generic[T]):
    """One page of a cursor-paginated scan.

    next_token is the first primary-key column of the last row, or None when
    there are no further rows to fetch.
    """

    items: list[T]
    next_token: Any


class Repository(ABC, Generic[T]):
    """Abstract CRUD, transactional and pagination interface for one table."""

    @abstractmethod
    async def find_by_id(self, key: object, columns: Sequence[str] = ()) -> T | None:
        """Return the entity with the given primary key, or None if there is none."""

    @abstractmethod
    async def find_all(self, columns: Sequence[str] = ()) -> list[T]:
        """Return every row of the table.  Unbounded: use on small tables only."""

    @abstractmethod
    async def find_by_ids(self, keys: Sequence[object], columns: Sequence[str] = ()) -> list[T]:
        """Return the entities for ``keys`` in database order, not input order."""

    @abstractmethod
    async def exists(self, key: object) -> bool:
        """Return True when a row with the given primary key exists."""

    @abstractmethod
    async def save(self, entity: T) -> None:
        """Upsert the entity immediately."""

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Upsert the entity immediately (same as save)."""

    @abstractmethod
    async def delete(self, key: object) -> None:
        """Delete the row with the given primary key immediately."""

    @abstractmethod
    async def save_tx(self, tx: Transaction, entity: T) -> None:
        """Buffer an upsert of the entity on ``tx``."""

    @abstractmethod
    async def update_tx(self, tx: Transaction, entity: T) -> None:
        """Buffer an upsert of the entity on ``tx`` (same as save_tx)."""

    @abstractmethod
    async def delete_tx(self, tx: Transaction, key: object) -> None:
        """Buffer a delete of the given primary key on ``tx``."""

    @abstractmethod
    async def save_returning_key(
        self,
        statement: str,
        params: Mapping[str, Any] | None = None,
        key_type: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Run an INSERT ... RETURNING statement in its own transaction.

        Returns the first column of the first result row, converted with
        ``key_type`` when given.
        """

    @abstractmethod
    async def save_returning_key_tx(
        self,
        tx: Transaction,
        statement: str,
        params: Mapping[str, Any] | None = None,
        key_type: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Like save_returning_key, but inside ``tx``; commit is left to the caller."""

    @abstractmethod
    async def find_page(
        self, page_size: int, page_token: Any = None, columns: Sequence[str] = ()
    ) -> Page[T]:
        """Return up to ``page_size`` entities after ``page_token`` in key order."""
