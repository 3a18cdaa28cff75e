# ============================================================================
# TYPEGEN SERVICE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - Catalog fetch + projection wiring
# PURPOSE: Verify TypegenService fetch order, failure propagation and
#          schema-filter defaults
# CREATED: 16 OCT 2026
# ============================================================================
"""
Typegen Service Tests

Run with:
    pytest tests/test_typegen_service.py -v
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from core.config import reset_defaults
from core.models.schema import Schema
from core.models.table import Column, Table
from core.results import ErrorKind, MetaError, MetaResult
from services.typegen_service import TypegenService


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def _clean_defaults(monkeypatch):
    monkeypatch.delenv("PG_META_GENERATE_TYPES_INCLUDED_SCHEMAS", raising=False)
    monkeypatch.delenv("PG_META_GENERATE_TYPES_EXCLUDED_SCHEMAS", raising=False)
    reset_defaults()
    yield
    reset_defaults()


def _make_meta(schemas=None, tables=None, functions=None, types=None):
    meta = MagicMock()
    meta.schemas.list = AsyncMock(return_value=schemas or MetaResult.success([
        Schema(id=1, name="public", owner="postgres"),
        Schema(id=2, name="auth", owner="postgres"),
    ]))
    meta.tables.list = AsyncMock(return_value=tables or MetaResult.success([
        Table(id=5, schema="public", name="users", columns=[
            Column(id="5.1", table_id=5, table="users", schema="public", name="id",
                   ordinal_position=1, data_type="bigint", format="int8", is_nullable=False),
        ]),
    ]))
    meta.functions.list = AsyncMock(return_value=functions or MetaResult.success([]))
    meta.types.list = AsyncMock(return_value=types or MetaResult.success([]))
    return meta


# ============================================================================
# TESTS
# ============================================================================

class TestTypegenService:

    def test_generates_typescript(self):
        meta = _make_meta()
        result = asyncio.run(TypegenService(meta).generate_typescript())

        assert result.ok
        assert '"users": {' in result.data
        assert '"id": number' in result.data
        meta.types.list.assert_awaited_once_with(include_system_schemas=True)

    def test_excluded_schemas(self):
        meta = _make_meta()
        result = asyncio.run(TypegenService(meta).generate_typescript(excluded_schemas=["auth"]))
        assert '"public": {' in result.data
        assert '"auth": {' not in result.data

    def test_env_defaults_apply_when_not_given(self, monkeypatch):
        monkeypatch.setenv("PG_META_GENERATE_TYPES_INCLUDED_SCHEMAS", "auth")
        reset_defaults()

        result = asyncio.run(TypegenService(_make_meta()).generate_typescript())

        assert '"auth": {' in result.data
        assert '"public": {' not in result.data

    def test_fetch_failure_is_returned(self):
        failure = MetaResult.failure(MetaError(message="permission denied for table pg_proc"))
        meta = _make_meta(functions=failure)

        result = asyncio.run(TypegenService(meta).generate_typescript())

        assert not result.ok
        assert result.error.kind == ErrorKind.EXECUTION
        assert result.error.message == "permission denied for table pg_proc"
        meta.types.list.assert_not_awaited()
