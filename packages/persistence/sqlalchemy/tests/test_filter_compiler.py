"""Tests for query → SQL clause compilation."""

from __future__ import annotations

import pytest
from sqlalchemy import MetaData, select
from sqlalchemy.dialects import sqlite

from resmap_core import ColumnType, Property, Resource
from resmap_query import Query, QueryOperator
from resmap_sqlalchemy import (
    SQLAlchemyOperatorRegistry,
    SQLiteCodec,
    build_filter_clauses,
    build_table,
)


class Sensor(Resource, model="sensor"):
    label = Property(str)
    reading = Property(ColumnType.NUMBER)
    enabled = Property(bool)


@pytest.fixture
def table():
    return build_table(Sensor.describe(), MetaData())


def compile_where(table, query: Query, **kwargs) -> str:
    clauses = build_filter_clauses(
        table, Sensor.describe(), query, codec=SQLiteCodec(), **kwargs
    )
    stmt = select(table).where(*clauses)
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_one_clause_per_filter(table) -> None:
    query = Query().where("reading").gt("5").where("enabled").is_(True)

    sql = compile_where(table, query)

    assert "sensor.reading > 5" in sql
    assert "sensor.enabled = 1" in sql


def test_like_uses_instr(table) -> None:
    sql = compile_where(table, Query().where("label").is_like("temp"))

    assert "instr(sensor.label, 'temp') > 0" in sql


def test_no_query_no_clauses(table) -> None:
    assert build_filter_clauses(table, Sensor.describe(), None, codec=SQLiteCodec()) == []


def test_missing_strategy_compiles_to_true(table) -> None:
    clauses = build_filter_clauses(
        table,
        Sensor.describe(),
        Query().where("reading").is_(1),
        codec=SQLiteCodec(),
        registry=SQLAlchemyOperatorRegistry(),
    )

    assert len(clauses) == 1
    assert str(clauses[0].compile()) == "true"


def test_table_shape(table) -> None:
    assert [c.name for c in table.columns] == ["id", "label", "reading", "enabled"]
    assert table.c.id.primary_key
    assert QueryOperator.LIKE.value == "like"


def test_not_equal_compiles_to_is_not_on_sqlite(table) -> None:
    clauses = build_filter_clauses(
        table, Sensor.describe(), Query().where("label").is_not("x"), codec=SQLiteCodec()
    )

    sql = str(
        select(table)
        .where(*clauses)
        .compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True})
    )

    assert "sensor.label IS NOT 'x'" in sql
