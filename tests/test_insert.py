"""Unit tests for the INSERT builder."""
from __future__ import annotations

import pytest

import fluentql
from fluentql import expr
from fluentql.errors import (
    IncompatibleValueSourceError,
    NonSelectSubqueryError,
    TableAliasNotAllowedError,
)
from fluentql.query.base import Query, QueryType
from fluentql.query.insert import Insert
from fluentql.query.select import Select
from fluentql.query.update import Update


def test_single_row(db):
    assert Insert("t", ["a", "b"]).values([1, 2]).compile(db) == (
        'INSERT INTO "t" ("a", "b") VALUES (1, 2)'
    )


def test_multiple_rows_and_value_quoting(db):
    q = Insert("users", ["name", "age", "active"]).values(
        ["ann", 31, True], ["bob", None, False]
    )
    assert q.compile(db) == (
        'INSERT INTO "users" ("name", "age", "active") '
        "VALUES ('ann', 31, '1'), ('bob', NULL, '0')"
    )


def test_values_accumulate_across_calls(db):
    q = Insert("t", ["a"]).values([1]).values([2], [3])
    assert q.compile(db) == 'INSERT INTO "t" ("a") VALUES (1), (2), (3)'


def test_placeholders_in_values(db):
    q = Insert("t", ["a", "b"]).values([":a", "plain"]).param(":a", "x")
    assert q.compile(db) == "INSERT INTO \"t\" (\"a\", \"b\") VALUES ('x', 'plain')"


def test_expression_value(db):
    q = Insert("t", ["created"]).values([expr("CURRENT_TIMESTAMP")])
    assert q.compile(db) == 'INSERT INTO "t" ("created") VALUES (CURRENT_TIMESTAMP)'


def test_insert_select(db):
    q = Insert("archive", ["id", "name"]).select(
        Select("id", "name").from_("users").where("active", "=", False)
    )
    assert q.compile(db) == (
        'INSERT INTO "archive" ("id", "name") '
        "SELECT \"id\", \"name\" FROM \"users\" WHERE \"active\" = '0'"
    )


def test_table_and_columns_setters(prefixed_db):
    q = Insert().table("logs").columns(["msg"]).values(["hi"])
    assert q.compile(prefixed_db) == "INSERT INTO \"app_logs\" (\"msg\") VALUES ('hi')"


@pytest.mark.parametrize("table", [("t", "alias"), ["t", "alias"]])
def test_table_alias_rejected(table):
    with pytest.raises(TableAliasNotAllowedError):
        Insert(table)
    with pytest.raises(TableAliasNotAllowedError):
        Insert().table(table)


def test_values_after_select_rejected():
    q = Insert("t", ["a"]).select(Select("a").from_("s"))
    with pytest.raises(IncompatibleValueSourceError):
        q.values([1])


def test_select_after_values_rejected():
    q = Insert("t", ["a"]).values([1])
    with pytest.raises(IncompatibleValueSourceError):
        q.select(Select("a").from_("s"))


@pytest.mark.parametrize(
    "query",
    [Update("t"), Query(QueryType.DELETE, "DELETE FROM t"), fluentql.insert("t")],
)
def test_non_select_subquery_rejected(query):
    with pytest.raises(NonSelectSubqueryError):
        Insert("t", ["a"]).select(query)


def test_raw_select_query_is_accepted(db):
    q = Insert("t", ["a"]).select(Query(QueryType.SELECT, "SELECT a FROM s"))
    assert q.compile(db) == 'INSERT INTO "t" ("a") SELECT a FROM s'


def test_reset(db):
    q = Insert("t", ["a"]).select(Select("a").from_("s"))
    q.reset()
    q.table("u").columns(["b"]).values([1])
    assert q.compile(db) == 'INSERT INTO "u" ("b") VALUES (1)'
