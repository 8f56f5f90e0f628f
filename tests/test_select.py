"""Unit tests for the SELECT builder."""
from __future__ import annotations

import pytest

import fluentql
from fluentql import expr
from fluentql.errors import (
    CompilationError,
    IncompatibleJoinConditionsError,
    InvalidSortDirectionError,
    UnionArgumentError,
)
from fluentql.query.select import Select


def test_columns_table_and_condition(db):
    q = Select("id", "name").from_("users").where("id", "=", 5)
    assert q.compile(db) == 'SELECT "id", "name" FROM "users" WHERE "id" = 5'


def test_empty_select_list_is_star(db):
    assert Select().compile(db) == "SELECT *"
    assert Select().from_("t").compile(db) == 'SELECT * FROM "t"'


def test_select_and_select_array_append(db):
    q = Select("a").select("b", ("c", "x")).select_array(["d"]).from_("t")
    assert q.compile(db) == 'SELECT "a", "b", "c" AS "x", "d" FROM "t"'


def test_columns_and_tables_are_deduplicated(db):
    q = Select("a", "a", "b").from_("t", "t")
    assert q.compile(db) == 'SELECT "a", "b" FROM "t"'


def test_distinct(db):
    assert Select("a").distinct(True).from_("t").compile(db) == 'SELECT DISTINCT "a" FROM "t"'
    assert Select("a").distinct(True).distinct(False).from_("t").compile(db) == 'SELECT "a" FROM "t"'


def test_clause_order(db):
    q = (
        Select("dept", (expr("COUNT(*)"), "total"))
        .from_("emp")
        .join("dept_t", "LEFT")
        .on("emp.dept_id", "=", "dept_t.id")
        .where("active", "=", True)
        .group_by("dept")
        .having(expr("COUNT(*)"), ">", 5)
        .order_by("dept", "desc")
        .limit(10)
        .offset(20)
    )
    assert q.compile(db) == (
        'SELECT "dept", COUNT(*) AS "total" FROM "emp" '
        'LEFT JOIN "dept_t" ON ("emp"."dept_id" = "dept_t"."id") '
        "WHERE \"active\" = '1' "
        'GROUP BY "dept" '
        "HAVING COUNT(*) > 5 "
        'ORDER BY "dept" DESC '
        "LIMIT 10 OFFSET 20"
    )


def test_join_on(db):
    q = Select().from_("a").join("b", "LEFT").on("a.id", "=", "b.a_id")
    assert q.compile(db) == 'SELECT * FROM "a" LEFT JOIN "b" ON ("a"."id" = "b"."a_id")'


def test_on_and_using_target_the_last_join(db):
    q = (
        Select()
        .from_("a")
        .join("b", "LEFT")
        .on("a.id", "=", "b.a_id")
        .join("c")
        .using("id", "tenant_id")
    )
    assert q.compile(db) == (
        'SELECT * FROM "a" LEFT JOIN "b" ON ("a"."id" = "b"."a_id") '
        'JOIN "c" USING ("id", "tenant_id")'
    )


def test_on_without_join_raises():
    with pytest.raises(CompilationError):
        Select().from_("a").on("a.id", "=", "b.id")


def test_on_and_using_on_same_join_raise():
    with pytest.raises(IncompatibleJoinConditionsError):
        Select().from_("a").join("b").on("a.id", "=", "b.id").using("id")


def test_group_by_and_order_by_alias(db):
    q = Select(("users.name", "n")).from_("users").group_by(("users.name", "n")).order_by(("users.name", "n"), "asc")
    assert q.compile(db) == (
        'SELECT "users"."name" AS "n" FROM "users" GROUP BY "n" ORDER BY "n" ASC'
    )


def test_order_by_without_direction(db):
    q = Select().from_("t").order_by("a").order_by("b", "DESC")
    assert q.compile(db) == 'SELECT * FROM "t" ORDER BY "a", "b" DESC'


@pytest.mark.parametrize("direction", ["asc", "ASC", "Desc", "desc"])
def test_valid_sort_directions(db, direction):
    sql = Select().from_("t").order_by("a", direction).compile(db)
    assert sql.endswith(direction.upper())


@pytest.mark.parametrize("direction", ["up", " asc", "ASC; DROP TABLE t", "ascending"])
def test_invalid_sort_direction_raises(db, direction):
    q = Select().from_("t").order_by("a", direction)
    with pytest.raises(InvalidSortDirectionError):
        q.compile(db)


@pytest.mark.parametrize("direction", [1, 0.5, True])
def test_non_string_sort_direction_raises(db, direction):
    q = Select().from_("t").order_by("a", direction)
    with pytest.raises(InvalidSortDirectionError):
        q.compile(db)


def test_having_groups(db):
    q = (
        Select("dept")
        .from_("emp")
        .group_by("dept")
        .having_open()
        .having(expr("COUNT(*)"), ">", 1)
        .or_having(expr("SUM(salary)"), ">", 1000)
        .having_close()
        .and_having_open()
        .having_close_empty()
    )
    assert q.compile(db) == (
        'SELECT "dept" FROM "emp" GROUP BY "dept" '
        "HAVING (COUNT(*) > 1 OR SUM(salary) > 1000)"
    )


def test_having_or_groups(db):
    q = (
        Select()
        .from_("emp")
        .having("a", "=", 1)
        .or_having_open()
        .having("b", "=", 2)
        .and_having("c", "=", 3)
        .or_having_close()
    )
    assert q.compile(db) == 'SELECT * FROM "emp" HAVING "a" = 1 OR ("b" = 2 AND "c" = 3)'


def test_where_close_empty(db):
    q = Select().from_("t").where("a", "=", 1).or_where_open().where_close_empty()
    assert q.compile(db) == 'SELECT * FROM "t" WHERE "a" = 1'


def test_where_or_open_close(db):
    q = (
        Select()
        .from_("t")
        .where("a", "=", 1)
        .or_where_open()
        .where("b", "=", 2)
        .and_where("c", "IS", None)
        .or_where_close()
    )
    assert q.compile(db) == 'SELECT * FROM "t" WHERE "a" = 1 OR ("b" = 2 AND "c" IS NULL)'


def test_union_branches(db):
    q = (
        Select("id")
        .from_("a")
        .union(Select("id").from_("b"))
        .union("c", all=False)
    )
    assert q.compile(db) == (
        '(SELECT "id" FROM "a") UNION ALL (SELECT "id" FROM "b") '
        'UNION (SELECT * FROM "c")'
    )


@pytest.mark.parametrize("argument", [42, None, fluentql.update("t")])
def test_union_rejects_other_arguments(argument):
    with pytest.raises(UnionArgumentError):
        Select().from_("a").union(argument)


def test_subquery_as_table(db):
    q = Select().from_((Select("id").from_("t"), "sub"))
    assert q.compile(db) == 'SELECT * FROM (SELECT "id" FROM "t") AS "sub"'


def test_subquery_as_column(db):
    sub = Select(expr("COUNT(*)")).from_("orders").where("orders.user_id", "=", expr('"users"."id"'))
    q = Select("id", (sub, "orders")).from_("users")
    assert q.compile(db) == (
        'SELECT "id", (SELECT COUNT(*) FROM "orders" WHERE "orders"."user_id" = "users"."id") '
        'AS "orders" FROM "users"'
    )


def test_parameters_are_substituted_last(db):
    q = Select().from_("t").where("id", "=", ":id").where("name", "=", ":name")
    q.param(":id", 7).param(":name", "O'Neil")
    assert q.compile(db) == "SELECT * FROM \"t\" WHERE \"id\" = 7 AND \"name\" = 'O''Neil'"


def test_limit_none_removes_limit(db):
    q = Select().from_("t").limit(5).limit(None)
    assert q.compile(db) == 'SELECT * FROM "t"'


def test_compile_is_repeatable(db):
    q = Select("a").from_("t").join("u").on("t.id", "=", "u.t_id").where("a", "IN", [1, 2])
    assert q.compile(db) == q.compile(db)


def test_reset_clears_everything(db):
    q = (
        Select("a")
        .distinct(True)
        .from_("t")
        .join("u")
        .on("t.id", "=", "u.id")
        .where("a", "=", ":a")
        .group_by("a")
        .having("a", ">", 1)
        .order_by("a")
        .limit(1)
        .offset(1)
        .union("v")
        .param(":a", 1)
    )
    q.compile(db)
    q.reset()
    assert q.compile(db) == "SELECT *"
    assert q.is_parameter(":a") is False
    with pytest.raises(CompilationError):
        q.on("a", "=", "b")


def test_facade_functions(db):
    assert fluentql.select("a").from_("t").compile(db) == 'SELECT "a" FROM "t"'
    assert fluentql.select_array(["a", "b"]).from_("t").compile(db) == 'SELECT "a", "b" FROM "t"'
    assert fluentql.select_array().compile(db) == "SELECT *"
