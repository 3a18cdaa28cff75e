# ============================================================================
# RESOURCE REPOSITORY TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - Query executor, catalog selects and per-kind resources
# PURPOSE: Verify executor error mapping and resource-specific behavior
# CREATED: 16 OCT 2026
# ============================================================================
"""
Resource Repository Tests

Covers:
1. QueryExecutor: rows, DDL without result set, psycopg error mapping,
   batch rollback
2. build_select parameter naming
3. SchemaResource create via its own listing; schema reader required
   by every other resource
4. TableResource column hydration
5. ColumnResource table lookup and schema loading on type change
6. FunctionResource default schema on natural-key lookup
7. PostgresMeta.query validation

Run with:
    pytest tests/test_resource_repos.py -v
"""

import asyncio
import pytest
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import psycopg

from core.models.schema import Schema
from core.results import ErrorKind, MetaError, MetaResult
from core.schema.statements import StatementBatch
from repositories.catalog_sql import SYSTEM_SCHEMAS, TRIGGERS_SQL, build_select
from repositories.column_repo import ColumnResource
from repositories.executor import QueryExecutor
from repositories.function_repo import FunctionResource
from repositories.schema_repo import SchemaResource
from repositories.table_repo import TableResource
from repositories.trigger_repo import TriggerResource
from services.meta_service import PostgresMeta


# ============================================================================
# FAKE POOL
# ============================================================================

class _FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.description = None

    async def execute(self, statement, params=None):
        self.conn.executed.append((statement, params))
        if self.conn.error is not None:
            raise self.conn.error
        self.description = [("col",)] if self.conn.rows is not None else None

    async def fetchall(self):
        return self.conn.rows


class _FakeConnection:
    def __init__(self, rows=None, error=None, fail_on=None):
        self.rows = rows
        self.error = error
        self.fail_on = fail_on
        self.executed = []
        self.committed = False
        self.rolled_back = False

    @asynccontextmanager
    async def cursor(self, row_factory=None):
        yield _FakeCursor(self)

    @asynccontextmanager
    async def transaction(self):
        try:
            yield
        except Exception:
            self.rolled_back = True
            raise
        self.committed = True

    async def execute(self, statement, params=None):
        self.executed.append((statement, params))
        if self.fail_on is not None and statement == self.fail_on:
            raise self.error


class _FakePool:
    def __init__(self, conn):
        self.conn = conn

    @asynccontextmanager
    async def connection(self):
        yield self.conn


def _make_executor(*query_results):
    executor = MagicMock()
    executor.query = AsyncMock(side_effect=list(query_results))
    executor.run_batch = AsyncMock(return_value=MetaResult())
    return executor


def _make_schemas():
    schemas = MagicMock()
    schemas.list = AsyncMock(return_value=MetaResult.success([]))
    return schemas


# ============================================================================
# QUERY EXECUTOR
# ============================================================================

class TestQueryExecutor:

    def test_query_returns_rows(self):
        conn = _FakeConnection(rows=[{"ok": 1}])
        result = asyncio.run(QueryExecutor(_FakePool(conn)).query("SELECT 1 AS ok"))
        assert result.data == [{"ok": 1}]

    def test_ddl_returns_empty_list(self):
        conn = _FakeConnection(rows=None)
        result = asyncio.run(QueryExecutor(_FakePool(conn)).query('DROP TABLE "t"'))
        assert result.ok
        assert result.data == []

    def test_database_error_becomes_execution_error(self):
        error = psycopg.errors.UndefinedTable('relation "t" does not exist')
        conn = _FakeConnection(error=error)
        result = asyncio.run(QueryExecutor(_FakePool(conn)).query('SELECT * FROM "t"'))
        assert result.error.kind == ErrorKind.EXECUTION
        assert result.error.message == 'relation "t" does not exist'
        assert result.error.code == "42P01"

    def test_batch_commits_in_order(self):
        conn = _FakeConnection()
        batch = StatementBatch(["a", "b"]).set_final("z")
        result = asyncio.run(QueryExecutor(_FakePool(conn)).run_batch(batch))
        assert result.ok
        assert [stmt for stmt, _ in conn.executed] == ["a", "b", "z"]
        assert conn.committed

    def test_batch_rolls_back_on_failure(self):
        error = psycopg.errors.DuplicateObject('trigger "t" already exists')
        conn = _FakeConnection(error=error, fail_on="b")
        batch = StatementBatch(["a", "b", "c"])
        result = asyncio.run(QueryExecutor(_FakePool(conn)).run_batch(batch))
        assert result.error.message == 'trigger "t" already exists'
        assert conn.rolled_back
        assert not conn.committed
        assert [stmt for stmt, _ in conn.executed] == ["a", "b"]

    def test_empty_batch_touches_nothing(self):
        pool = MagicMock()
        result = asyncio.run(QueryExecutor(pool).run_batch(StatementBatch()))
        assert result.ok
        pool.connection.assert_not_called()

    def test_ping(self):
        conn = _FakeConnection(rows=[{"ok": 1}])
        assert asyncio.run(QueryExecutor(_FakePool(conn)).ping()) is True


# ============================================================================
# CATALOG SELECT
# ============================================================================

class TestBuildSelect:

    def test_params(self):
        _, params = build_select(
            TRIGGERS_SQL,
            "triggers",
            filters={"name": "t", "schema": None},
            any_of={"table_id": (1, 2)},
            exclude={"schema": SYSTEM_SCHEMAS},
            limit=5,
            offset=0,
        )
        assert params == {
            "f_name": "t",
            "in_table_id": [1, 2],
            "not_schema": list(SYSTEM_SCHEMAS),
            "limit": 5,
            "offset": 0,
        }

    def test_no_filters(self):
        _, params = build_select(TRIGGERS_SQL, "triggers")
        assert params == {}


# ============================================================================
# SCHEMAS
# ============================================================================

class TestSchemaResource:

    def test_create_lists_then_creates_then_retrieves(self):
        executor = _make_executor(
            MetaResult.success([{"id": 1, "name": "public", "owner": "postgres"}]),
            MetaResult.success([{"id": 2, "name": "app", "owner": "admin"}]),
        )
        resource = SchemaResource(executor)

        result = asyncio.run(resource.create({"name": "app", "owner": "admin"}))

        assert result.data.name == "app"
        batch = executor.run_batch.call_args[0][0]
        assert batch.texts == ['CREATE SCHEMA "app" AUTHORIZATION "admin"']
        _, params = executor.query.call_args[0]
        assert params == {"f_name": "app"}

    def test_list_filters_on_name_column(self):
        executor = _make_executor(MetaResult.success([]))
        asyncio.run(SchemaResource(executor).list())
        _, params = executor.query.call_args[0]
        assert params == {"not_name": list(SYSTEM_SCHEMAS)}

    def test_lists_itself_as_schema_reader(self):
        resource = SchemaResource(_make_executor())
        assert resource.schemas is resource


class TestSchemaReaderRequired:

    def test_missing_reader_rejected(self):
        with pytest.raises(TypeError) as exc:
            TriggerResource(_make_executor(), None)
        assert str(exc.value) == "TriggerResource requires a schema reader"

    def test_names_resolve_against_reader_not_own_rows(self):
        # The executor would answer with a trigger literally named "public"
        executor = _make_executor(MetaResult.success([{"id": 1, "name": "public"}]))
        schemas = MagicMock()
        schemas.list = AsyncMock(return_value=MetaResult.success([
            Schema(id=1, name="audit", owner="postgres"),
        ]))

        result = asyncio.run(TriggerResource(executor, schemas).known_schemas())

        assert result.data == ["audit"]
        schemas.list.assert_awaited_once_with(include_system_schemas=True)
        executor.query.assert_not_awaited()


# ============================================================================
# TABLES
# ============================================================================

def _column_row(position, name, **overrides):
    row = {
        "id": f"5.{position}",
        "table_id": 5,
        "table": "users",
        "schema": "public",
        "name": name,
        "ordinal_position": position,
        "data_type": "integer",
        "format": "int4",
        "enums": None,
    }
    row.update(overrides)
    return row


class TestTableResource:

    def test_columns_attached_in_order(self):
        executor = _make_executor(
            MetaResult.success([{"id": 5, "schema": "public", "name": "users", "primary_keys": ["id"]}]),
            MetaResult.success([_column_row(2, "age"), _column_row(1, "id")]),
        )

        result = asyncio.run(TableResource(executor, _make_schemas()).list())

        table = result.data[0]
        assert [c.name for c in table.columns] == ["id", "age"]
        _, params = executor.query.call_args[0]
        assert params == {"in_table_id": [5]}

    def test_empty_list_skips_column_query(self):
        executor = _make_executor(MetaResult.success([]))
        result = asyncio.run(TableResource(executor, _make_schemas()).list())
        assert result.data == []
        assert executor.query.await_count == 1

    def test_retrieve_by_name_defaults_schema(self):
        executor = _make_executor(MetaResult.success([]))
        result = asyncio.run(TableResource(executor, _make_schemas()).retrieve(name="users"))
        assert result.error.message == "Cannot find a table with name users, schema public"


# ============================================================================
# COLUMNS
# ============================================================================


class TestColumnResource:

    def test_missing_table_reported_before_ddl(self):
        executor = _make_executor()
        tables = MagicMock()
        tables.retrieve = AsyncMock(return_value=MetaResult.failure(
            MetaError.not_found("Table with id 42 does not exist")
        ))
        resource = ColumnResource(executor, schemas=_make_schemas(), tables=tables)

        result = asyncio.run(resource.create({"table_id": 42, "name": "age", "type": "int4"}))

        assert result.error.kind == ErrorKind.NOT_FOUND
        executor.run_batch.assert_not_awaited()

    def test_update_without_type_skips_schema_listing(self):
        executor = _make_executor(
            MetaResult.success([_column_row(2, "age")]),
            MetaResult.success([_column_row(2, "years")]),
        )
        schemas = _make_schemas()
        resource = ColumnResource(executor, schemas=schemas, tables=MagicMock())

        result = asyncio.run(resource.update("5.2", {"name": "years"}))

        assert result.data.name == "years"
        schemas.list.assert_not_awaited()

    def test_update_type_lists_schemas(self):
        executor = _make_executor(
            MetaResult.success([_column_row(2, "age")]),
            MetaResult.success([_column_row(2, "age", format="int8")]),
        )
        schemas = _make_schemas()
        resource = ColumnResource(executor, schemas=schemas, tables=MagicMock())

        asyncio.run(resource.update("5.2", {"type": "int8"}))

        schemas.list.assert_awaited_once_with(include_system_schemas=True)


# ============================================================================
# FUNCTIONS
# ============================================================================

class TestFunctionResource:

    def test_retrieve_by_name_defaults_schema(self):
        executor = _make_executor(MetaResult.success([]))
        asyncio.run(FunctionResource(executor, _make_schemas()).retrieve(name="add"))
        _, params = executor.query.call_args[0]
        assert params == {"f_name": "add", "f_schema": "public"}


# ============================================================================
# FACADE
# ============================================================================

class TestPostgresMeta:

    def test_empty_query_rejected(self):
        executor = _make_executor()
        result = asyncio.run(PostgresMeta(executor).query("   "))
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message == "Missing required param query"
        executor.query.assert_not_awaited()

    def test_query_passes_through(self):
        executor = _make_executor(MetaResult.success([{"n": 1}]))
        result = asyncio.run(PostgresMeta(executor).query("select 1 as n"))
        assert result.data == [{"n": 1}]
        executor.query.assert_awaited_once_with("select 1 as n")

    def test_resources_by_plural_name(self):
        meta = PostgresMeta(_make_executor())
        assert set(meta.resources) == {
            "schemas", "tables", "columns", "triggers", "functions", "policies", "types",
        }
        assert meta.columns.tables is meta.tables
        assert meta.triggers.schemas is meta.schemas
