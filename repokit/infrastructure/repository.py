"""Generic table-backed repository over a SqlClient.

An entity type is described once, by table name, primary-key columns in
schema order, a row mapper and a mutation builder, and gets the whole
Repository operation set:

    users = SqlRepository[User](
        client,
        "users",
        ["user_id"],
        row_mapper=lambda row: User.model_validate(row._mapping),
        mutation_builder=lambda u: Mutation.insert_or_update(
            "users", ["user_id", "email"], [u.user_id, u.email]
        ),
    )
    user = await users.find_by_id(UserKey(user_id="42"))

Pagination seeks on the first primary-key column only (``WHERE pk0 >
:page_token``) while ordering by the full key.  On composite keys a page
that ends in the middle of a run of rows sharing the first column skips the
rest of that run.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import Row, text

from repokit.domain.errors import DecodeError, NoRowsReturnedError, RepositoryConfigurationError
from repokit.domain.keys import key_params, key_tuple
from repokit.domain.mutations import Mutation
from repokit.domain.repositories.base import Page, Repository

from .client import SqlClient
from .statements import equality_predicate, select_statement
from .transaction import SqlTransaction, require_transaction

T = TypeVar("T")

RowMapper = Callable[[Row], T]
MutationBuilder = Callable[[T], Mutation]


class SqlRepository(Repository[T]):
    def __init__(
        self,
        client: SqlClient,
        table_name: str,
        primary_keys: Sequence[str],
        row_mapper: RowMapper[T],
        mutation_builder: MutationBuilder[T],
    ) -> None:
        if client is None:
            raise RepositoryConfigurationError("client is required")
        if not table_name:
            raise RepositoryConfigurationError("table_name is required")
        if isinstance(primary_keys, str) or not primary_keys:
            raise RepositoryConfigurationError("primary_keys must be a non-empty list of columns")
        if not callable(row_mapper):
            raise RepositoryConfigurationError("row_mapper must be callable")
        if not callable(mutation_builder):
            raise RepositoryConfigurationError("mutation_builder must be callable")
        self._client = client
        self._table_name = table_name
        self._primary_keys = tuple(primary_keys)
        self._row_mapper = row_mapper
        self._mutation_builder = mutation_builder

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def primary_keys(self) -> tuple[str, ...]:
        return self._primary_keys

    # --- row / mutation translation ---

    def _decode(self, row: Row) -> T:
        try:
            return self._row_mapper(row)
        except Exception as exc:
            raise DecodeError(f"cannot decode {self._table_name} row: {exc}") from exc

    def _first_key_value(self, row: Row) -> Any:
        name = self._primary_keys[0]
        try:
            return row._mapping[name]
        except KeyError as exc:
            raise DecodeError(
                f"page rows of {self._table_name} must include primary-key column {name!r}"
            ) from exc

    def _mutation(self, entity: T) -> Mutation:
        return self._mutation_builder(entity).with_key_columns(self._primary_keys)

    def _delete_mutation(self, key: object) -> Mutation:
        return Mutation.delete(
            self._table_name, self._primary_keys, key_tuple(key, self._primary_keys)
        )

    # --- reads ---

    async def _first_row(self, key: object, columns: Sequence[str]) -> Row | None:
        params = key_params(key, self._primary_keys)
        statement = select_statement(
            self._table_name, columns, where=equality_predicate(self._primary_keys)
        )
        async with self._client.execute_query(statement, params) as rows:
            return await rows.first()

    async def find_by_id(self, key: object, columns: Sequence[str] = ()) -> T | None:
        row = await self._first_row(key, columns)
        return self._decode(row) if row is not None else None

    async def find_all(self, columns: Sequence[str] = ()) -> list[T]:
        statement = select_statement(self._table_name, columns)
        async with self._client.execute_query(statement) as rows:
            return [self._decode(row) async for row in rows]

    async def find_by_ids(self, keys: Sequence[object], columns: Sequence[str] = ()) -> list[T]:
        if not keys:
            return []
        key_set = [key_tuple(key, self._primary_keys) for key in keys]
        async with self._client.read_by_key_set(
            self._table_name, self._primary_keys, key_set, columns
        ) as rows:
            return [self._decode(row) async for row in rows]

    async def exists(self, key: object) -> bool:
        return await self._first_row(key, self._primary_keys) is not None

    async def find_page(
        self, page_size: int, page_token: Any = None, columns: Sequence[str] = ()
    ) -> Page[T]:
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        params: dict[str, Any] = {"limit": page_size}
        where = None
        if page_token is not None and page_token != "":
            where = f"{self._primary_keys[0]} > :page_token"
            params["page_token"] = page_token
        statement = select_statement(
            self._table_name, columns, where=where, order_by=self._primary_keys, limit=":limit"
        )

        items: list[T] = []
        last_key = None
        async with self._client.execute_query(statement, params) as rows:
            async for row in rows:
                items.append(self._decode(row))
                last_key = self._first_key_value(row)

        # A short page is the last one.
        next_token = last_key if len(items) == page_size else None
        return Page(items, next_token)

    # --- immediate writes ---

    async def save(self, entity: T) -> None:
        await self._client.apply_mutations([self._mutation(entity)])

    async def update(self, entity: T) -> None:
        await self._client.apply_mutations([self._mutation(entity)])

    async def delete(self, key: object) -> None:
        await self._client.apply_mutations([self._delete_mutation(key)])

    # --- transactional writes ---

    async def save_tx(self, tx: SqlTransaction, entity: T) -> None:
        require_transaction(tx).buffer_write([self._mutation(entity)])

    async def update_tx(self, tx: SqlTransaction, entity: T) -> None:
        require_transaction(tx).buffer_write([self._mutation(entity)])

    async def delete_tx(self, tx: SqlTransaction, key: object) -> None:
        require_transaction(tx).buffer_write([self._delete_mutation(key)])

    # --- key-returning inserts ---

    async def save_returning_key(
        self,
        statement: str,
        params: Mapping[str, Any] | None = None,
        key_type: Callable[[Any], Any] | None = None,
    ) -> Any:
        return await self._client.run_read_write_transaction(
            lambda tx: self.save_returning_key_tx(tx, statement, params, key_type)
        )

    async def save_returning_key_tx(
        self,
        tx: SqlTransaction,
        statement: str,
        params: Mapping[str, Any] | None = None,
        key_type: Callable[[Any], Any] | None = None,
    ) -> Any:
        conn = require_transaction(tx).connection
        result = await conn.execute(text(statement), dict(params or {}))
        row = result.first()
        if row is None:
            raise NoRowsReturnedError(f"insert into {self._table_name} returned no key")
        if key_type is None:
            return row[0]
        try:
            return key_type(row[0])
        except Exception as exc:
            raise DecodeError(f"cannot decode generated key {row[0]!r}: {exc}") from exc
