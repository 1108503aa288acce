"""Tests for repokit/infrastructure/statements.py — pure SQL text builders."""

from repokit.infrastructure.statements import (
    column_list,
    equality_predicate,
    key_set_predicate,
    select_statement,
)


def test_column_list_empty_selects_full_row():
    assert column_list([]) == "*"


def test_column_list_joins_columns():
    assert column_list(["user_id", "email"]) == "user_id, email"


def test_equality_predicate_single_key():
    assert equality_predicate(["user_id"]) == "user_id = :user_id"


def test_equality_predicate_composite_key():
    assert equality_predicate(["order_id", "line_no"]) == (
        "order_id = :order_id AND line_no = :line_no"
    )


def test_equality_predicate_prefixes_parameter_names_only():
    assert equality_predicate(["user_id"], prefix="k0_") == "user_id = :k0_user_id"


def test_key_set_predicate_groups_each_key():
    assert key_set_predicate(["a", "b"], 2) == (
        "(a = :k0_a AND b = :k0_b) OR (a = :k1_a AND b = :k1_b)"
    )


def test_select_statement_without_clauses():
    assert select_statement("users") == "SELECT * FROM users"


def test_select_statement_with_all_clauses():
    sql = select_statement(
        "users", ["user_id"], where="user_id > :page_token", order_by=["user_id"], limit=":limit"
    )
    assert sql == (
        "SELECT user_id FROM users WHERE user_id > :page_token ORDER BY user_id LIMIT :limit"
    )
