"""Fluent construction of SqlRepository instances."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from .client import SqlClient
from .repository import MutationBuilder, RowMapper, SqlRepository

T = TypeVar("T")


class SqlRepositoryBuilder(Generic[T]):
    """Collects repository parts; build() validates them.

        repo = (
            SqlRepositoryBuilder[User]()
            .with_client(client)
            .with_table_name("users")
            .with_primary_keys(["user_id"])
            .with_row_mapper(user_from_row)
            .with_mutation(user_to_mutation)
            .build()
        )
    """

    def __init__(self) -> None:
        self._client: SqlClient | None = None
        self._table_name = ""
        self._primary_keys: tuple[str, ...] = ()
        self._row_mapper: RowMapper[T] | None = None
        self._mutation_builder: MutationBuilder[T] | None = None

    def with_client(self, client: SqlClient) -> SqlRepositoryBuilder[T]:
        self._client = client
        return self

    def with_table_name(self, table_name: str) -> SqlRepositoryBuilder[T]:
        self._table_name = table_name
        return self

    def with_primary_keys(self, primary_keys: Sequence[str]) -> SqlRepositoryBuilder[T]:
        """Primary-key columns, in the table's key order."""
        self._primary_keys = tuple(primary_keys)
        return self

    def with_row_mapper(self, row_mapper: RowMapper[T]) -> SqlRepositoryBuilder[T]:
        self._row_mapper = row_mapper
        return self

    def with_mutation(self, mutation_builder: MutationBuilder[T]) -> SqlRepositoryBuilder[T]:
        self._mutation_builder = mutation_builder
        return self

    def build(self) -> SqlRepository[T]:
        """Raises RepositoryConfigurationError if any part is missing."""
        return SqlRepository(
            self._client,  # type: ignore[arg-type]
            self._table_name,
            self._primary_keys,
            self._row_mapper,  # type: ignore[arg-type]
            self._mutation_builder,  # type: ignore[arg-type]
        )
