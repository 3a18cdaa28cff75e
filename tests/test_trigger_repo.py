# ============================================================================
# TRIGGER RESOURCE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - Trigger create/update/remove orchestration
# PURPOSE: Verify the mutation flow around the trigger builder with a mocked
#          executor
# CREATED: 16 OCT 2026
# ============================================================================
"""
Trigger Resource Tests

Covers:
1. create(): required-only options, validation failures, database failures,
   lookup of the new trigger by name + resolved table
2. update(): single transaction with the rename last, no-op updates
3. remove(): not-found issues no DDL, success returns the pre-drop record
4. retrieve(): selector validation

Uses asyncio.run + AsyncMock executors; no database needed.

Run with:
    pytest tests/test_trigger_repo.py -v
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.models.schema import Schema
from core.results import ErrorKind, MetaError, MetaResult
from core.schema.quoting import as_text
from repositories.trigger_repo import TriggerResource


# ============================================================================
# FIXTURES
# ============================================================================

def _trigger_row(**overrides):
    row = {
        "id": 7,
        "table_id": 10,
        "enabled_mode": "ORIGIN",
        "name": "audit_users",
        "table": "users",
        "schema": "public",
        "condition": None,
        "orientation": "ROW",
        "activation": "AFTER",
        "events": ["INSERT"],
        "function_schema": "audit",
        "function_name": "log_change",
        "function_args": [],
    }
    row.update(overrides)
    return row


def _make_schemas(*names):
    schemas = MagicMock()
    schemas.list = AsyncMock(return_value=MetaResult.success([
        Schema(id=i, name=name, owner="postgres") for i, name in enumerate(names or ("public", "audit"))
    ]))
    return schemas


def _make_executor(*query_results):
    executor = MagicMock()
    executor.query = AsyncMock(side_effect=list(query_results))
    executor.run_batch = AsyncMock(return_value=MetaResult())
    return executor


def _make_resource(executor, schemas=None):
    return TriggerResource(executor, schemas=schemas or _make_schemas())


CREATE_OPTIONS = {
    "name": "audit_users",
    "table": "public.users",
    "function_name": "audit.log_change",
    "timing": "after",
    "event": "insert",
}


# ============================================================================
# CREATE
# ============================================================================

class TestTriggerCreate:

    def test_required_only(self):
        executor = _make_executor(MetaResult.success([_trigger_row()]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.create(CREATE_OPTIONS))

        assert result.ok
        assert result.data.name == "audit_users"
        assert result.data.schema == "public"

        batch = executor.run_batch.call_args[0][0]
        assert batch.texts == [
            'CREATE TRIGGER "audit_users" AFTER insert ON "public"."users" '
            'EXECUTE FUNCTION "audit"."log_change"()'
        ]

        # New trigger looked up by name + bare table + schema from the qualified name
        _, params = executor.query.call_args[0]
        assert params == {"f_name": "audit_users", "f_table": "users", "f_schema": "public"}

    def test_unqualified_table_lookup_skips_schema(self):
        executor = _make_executor(MetaResult.success([_trigger_row()]))
        resource = _make_resource(executor)

        options = dict(CREATE_OPTIONS, table="users")
        result = asyncio.run(resource.create(options))

        assert result.ok
        _, params = executor.query.call_args[0]
        assert params == {"f_name": "audit_users", "f_table": "users"}

    def test_missing_required_param(self):
        executor = _make_executor()
        schemas = _make_schemas()
        resource = _make_resource(executor, schemas)

        result = asyncio.run(resource.create({"name": "t", "table": "users"}))

        assert not result.ok
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message == "Missing required param function_name"
        schemas.list.assert_not_awaited()
        executor.run_batch.assert_not_awaited()

    def test_invalid_option_value(self):
        executor = _make_executor()
        resource = _make_resource(executor)

        result = asyncio.run(resource.create(dict(CREATE_OPTIONS, timing="sideways")))

        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message.startswith("Invalid param timing")
        executor.run_batch.assert_not_awaited()

    def test_schema_listing_failure(self):
        executor = _make_executor()
        schemas = MagicMock()
        schemas.list = AsyncMock(return_value=MetaResult(data=None))
        resource = _make_resource(executor, schemas)

        result = asyncio.run(resource.create(CREATE_OPTIONS))

        assert result.error.message == "Failed to retrieve existing schemas"
        executor.run_batch.assert_not_awaited()

    def test_database_error_passes_through(self):
        executor = _make_executor()
        executor.run_batch = AsyncMock(return_value=MetaResult.failure(
            MetaError(message='relation "public.users" does not exist', code="42P01")
        ))
        resource = _make_resource(executor)

        result = asyncio.run(resource.create(CREATE_OPTIONS))

        assert result.error.kind == ErrorKind.EXECUTION
        assert result.error.message == 'relation "public.users" does not exist'
        executor.query.assert_not_awaited()


# ============================================================================
# UPDATE
# ============================================================================

class TestTriggerUpdate:

    def test_rename_runs_last_in_one_batch(self):
        executor = _make_executor(
            MetaResult.success([_trigger_row()]),
            MetaResult.success([_trigger_row(name="audit_people", enabled_mode="DISABLED")]),
        )
        resource = _make_resource(executor)

        result = asyncio.run(resource.update(7, {"name": "audit_people", "is_enabled": False}))

        assert result.ok
        assert result.data.name == "audit_people"
        executor.run_batch.assert_awaited_once()
        batch = executor.run_batch.call_args[0][0]
        assert batch.texts == [
            'ALTER TABLE "public"."users" DISABLE TRIGGER "audit_users"',
            'ALTER TRIGGER "audit_users" ON "public"."users" RENAME TO "audit_people"',
        ]

        # Re-read by id after the batch
        _, params = executor.query.call_args[0]
        assert params == {"f_id": 7}

    def test_rename_with_extension_dependency(self):
        executor = _make_executor(
            MetaResult.success([_trigger_row()]),
            MetaResult.success([_trigger_row(
                name="audit_people", extension="pg_audit", is_extension_dependent=True,
            )]),
        )
        resource = _make_resource(executor)

        result = asyncio.run(resource.update(7, {
            "name": "audit_people",
            "extension": "pg_audit",
            "is_extension_dependent": True,
        }))

        assert result.ok
        assert result.data.name == "audit_people"
        assert result.data.is_extension_dependent is True
        batch = executor.run_batch.call_args[0][0]
        assert batch.texts == [
            'ALTER TRIGGER "audit_users" ON "public"."users" DEPENDS ON EXTENSION "pg_audit"',
            'ALTER TRIGGER "audit_users" ON "public"."users" RENAME TO "audit_people"',
        ]
        _, params = executor.query.call_args[0]
        assert params == {"f_id": 7}

    def test_nothing_to_update_returns_current(self):
        executor = _make_executor(MetaResult.success([_trigger_row()]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.update(7, {}))

        assert result.ok
        assert result.data.name == "audit_users"
        executor.run_batch.assert_not_awaited()

    def test_not_found(self):
        executor = _make_executor(MetaResult.success([]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.update(99, {"name": "x"}))

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Trigger with id 99 does not exist"
        executor.run_batch.assert_not_awaited()

    def test_failed_batch_is_returned(self):
        executor = _make_executor(MetaResult.success([_trigger_row()]))
        executor.run_batch = AsyncMock(return_value=MetaResult.failure(
            MetaError(message='extension "nope" does not exist')
        ))
        resource = _make_resource(executor)

        result = asyncio.run(resource.update(7, {"extension": "nope", "is_extension_dependent": True}))

        assert result.error.message == 'extension "nope" does not exist'
        assert executor.query.await_count == 1


# ============================================================================
# REMOVE
# ============================================================================

class TestTriggerRemove:

    def test_not_found_issues_no_ddl(self):
        executor = _make_executor(MetaResult.success([]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.remove(99))

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert executor.query.await_count == 1

    def test_returns_pre_drop_record(self):
        executor = _make_executor(
            MetaResult.success([_trigger_row()]),
            MetaResult.success([]),
        )
        resource = _make_resource(executor)

        result = asyncio.run(resource.remove(7, cascade=True))

        assert result.ok
        assert result.data.id == 7
        drop = executor.query.call_args[0][0]
        assert as_text(drop) == 'DROP TRIGGER "audit_users" ON "public"."users" CASCADE'


# ============================================================================
# RETRIEVE / LIST
# ============================================================================

class TestTriggerRetrieve:

    def test_selector_requires_name_and_table(self):
        executor = _make_executor()
        resource = _make_resource(executor)

        result = asyncio.run(resource.retrieve(name="audit_users"))

        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.message == "Missing id or name and table"
        executor.query.assert_not_awaited()

    def test_not_found_by_key(self):
        executor = _make_executor(MetaResult.success([]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.retrieve(name="t", table="users", schema="public"))

        assert result.error.kind == ErrorKind.NOT_FOUND
        assert result.error.message == "Cannot find a trigger with name t, table users, schema public"

    def test_list_hides_system_schemas(self):
        executor = _make_executor(MetaResult.success([_trigger_row()]))
        resource = _make_resource(executor)

        result = asyncio.run(resource.list())

        assert len(result.data) == 1
        _, params = executor.query.call_args[0]
        assert params == {"not_schema": ["pg_catalog", "information_schema", "pg_toast"]}

    def test_list_paging(self):
        executor = _make_executor(MetaResult.success([]))
        resource = _make_resource(executor)

        asyncio.run(resource.list(include_system_schemas=True, limit=10, offset=20))

        _, params = executor.query.call_args[0]
        assert params == {"limit": 10, "offset": 20}
