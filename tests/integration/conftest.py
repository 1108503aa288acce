"""Shared fixtures: a file-backed SQLite database and repositories over it."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, Field
from sqlalchemy import text

from repokit.domain.keys import Key
from repokit.domain.mutations import Mutation
from repokit.infrastructure.builder import SqlRepositoryBuilder
from repokit.infrastructure.client import SqlClient
from repokit.infrastructure.database import Settings, create_engine
from repokit.infrastructure.transaction import SqlTransactionManager

_SCHEMA = [
    "CREATE TABLE users (user_id TEXT PRIMARY KEY, email TEXT NOT NULL)",
    "CREATE TABLE orders (order_id INTEGER PRIMARY KEY AUTOINCREMENT, customer TEXT NOT NULL)",
    "CREATE TABLE line_items ("
    " order_id INTEGER NOT NULL, line_no INTEGER NOT NULL, sku TEXT NOT NULL,"
    " PRIMARY KEY (order_id, line_no))",
]


class User(BaseModel):
    user_id: str
    email: str


class UserKey(Key):
    ID: str = Field(alias="user_id")


class Order(BaseModel):
    order_id: int
    customer: str


class OrderKey(Key):
    order_id: int


class LineItem(BaseModel):
    order_id: int
    line_no: int
    sku: str


class LineItemKey(Key):
    order_id: int
    line_no: int


def _user_mutation(user: User) -> Mutation:
    return Mutation.insert_or_update("users", ["user_id", "email"], [user.user_id, user.email])


def _order_mutation(order: Order) -> Mutation:
    return Mutation.insert_or_update(
        "orders", ["order_id", "customer"], [order.order_id, order.customer]
    )


def _line_item_mutation(item: LineItem) -> Mutation:
    return Mutation.insert_or_update(
        "line_items", ["order_id", "line_no", "sku"], [item.order_id, item.line_no, item.sku]
    )


@pytest.fixture
async def client(tmp_path):
    engine = create_engine(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'repokit.db'}"))
    async with engine.begin() as conn:
        for ddl in _SCHEMA:
            await conn.execute(text(ddl))
    yield SqlClient(engine)
    await engine.dispose()


@pytest.fixture
def users(client):
    return (
        SqlRepositoryBuilder[User]()
        .with_client(client)
        .with_table_name("users")
        .with_primary_keys(["user_id"])
        .with_row_mapper(lambda row: User(**row._mapping))
        .with_mutation(_user_mutation)
        .build()
    )


@pytest.fixture
def orders(client):
    return (
        SqlRepositoryBuilder[Order]()
        .with_client(client)
        .with_table_name("orders")
        .with_primary_keys(["order_id"])
        .with_row_mapper(lambda row: Order(**row._mapping))
        .with_mutation(_order_mutation)
        .build()
    )


@pytest.fixture
def line_items(client):
    return (
        SqlRepositoryBuilder[LineItem]()
        .with_client(client)
        .with_table_name("line_items")
        .with_primary_keys(["order_id", "line_no"])
        .with_row_mapper(lambda row: LineItem(**row._mapping))
        .with_mutation(_line_item_mutation)
        .build()
    )


@pytest.fixture
def tx_manager(client):
    return SqlTransactionManager(client)
