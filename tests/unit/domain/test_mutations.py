"""Tests for repokit/domain/mutations.py."""

import pytest

from repokit.domain.errors import MutationError
from repokit.domain.mutations import Mutation, MutationOp


def test_insert_or_update_has_no_key_columns_by_default():
    m = Mutation.insert_or_update("users", ["user_id", "email"], ["u1", "a@b"])
    assert m.op is MutationOp.INSERT_OR_UPDATE
    assert m.key_columns == ()


def test_as_dict_pairs_columns_with_values():
    m = Mutation.insert("users", ["user_id", "email"], ["u1", "a@b"])
    assert m.as_dict() == {"user_id": "u1", "email": "a@b"}


def test_delete_uses_key_columns_as_columns():
    m = Mutation.delete("line_items", ["order_id", "line_no"], (7, 2))
    assert m.columns == m.key_columns == ("order_id", "line_no")
    assert m.values == (7, 2)


def test_with_key_columns_fills_empty_key_columns():
    m = Mutation.update("users", ["user_id", "email"], ["u1", "a@b"])
    assert m.with_key_columns(["user_id"]).key_columns == ("user_id",)


def test_with_key_columns_keeps_explicit_key_columns():
    m = Mutation.update("users", ["user_id", "email"], ["u1", "a@b"], key_columns=["email"])
    assert m.with_key_columns(["user_id"]).key_columns == ("email",)


def test_column_value_length_mismatch_is_rejected():
    with pytest.raises(MutationError):
        Mutation.insert("users", ["user_id", "email"], ["u1"])


def test_mutation_op_compares_to_plain_string():
    assert MutationOp.DELETE == "delete"
