"""Unit tests for the standalone JOIN builder."""
from __future__ import annotations

import pytest

from fluentql.errors import IncompatibleJoinConditionsError
from fluentql.query.join import Join


def test_bare_join_type_is_optional(db):
    assert Join("b").using("id").compile(db) == 'JOIN "b" USING ("id")'


def test_join_type_is_uppercased(db):
    sql = Join("b", "left outer").on("a.id", "=", "b.a_id").compile(db)
    assert sql == 'LEFT OUTER JOIN "b" ON ("a"."id" = "b"."a_id")'


def test_multiple_on_conditions_are_anded(db):
    sql = Join("b", "INNER").on("a.id", "=", "b.a_id").on("a.x", ">", "b.y").compile(db)
    assert sql == 'INNER JOIN "b" ON ("a"."id" = "b"."a_id" AND "a"."x" > "b"."y")'


def test_using_accumulates_columns(db):
    sql = Join("b").using("id").using("tenant_id", "region").compile(db)
    assert sql == 'JOIN "b" USING ("id", "tenant_id", "region")'


def test_aliased_table(db):
    sql = Join(("users", "u"), "inner").on("u.id", "=", "p.user_id").compile(db)
    assert sql == 'INNER JOIN "users" AS "u" ON ("u"."id" = "p"."user_id")'


def test_prefixed_join(prefixed_db):
    sql = Join("posts", "LEFT").on("users.id", "=", "posts.user_id").compile(prefixed_db)
    assert sql == 'LEFT JOIN "app_posts" ON ("app_users"."id" = "app_posts"."user_id")'


def test_on_after_using_raises():
    join = Join("b").using("id")
    with pytest.raises(IncompatibleJoinConditionsError) as exc_info:
        join.on("a.id", "=", "b.id")
    assert exc_info.value.clause == "JOIN"


def test_using_after_on_raises():
    join = Join("b").on("a.id", "=", "b.id")
    with pytest.raises(IncompatibleJoinConditionsError):
        join.using("id")


def test_reset_allows_switching_mode(db):
    join = Join("b", "LEFT").on("a.id", "=", "b.id")
    join.reset()
    join._table = "c"
    assert join.using("id").compile(db) == 'JOIN "c" USING ("id")'
