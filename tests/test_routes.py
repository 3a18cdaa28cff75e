# ============================================================================
# API ROUTE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - HTTP surface over the resources
# PURPOSE: Verify status-code mapping, id parsing, body pass-through and the
#          generator and health endpoints
# CREATED: 16 OCT 2026
# ============================================================================
"""
API Route Tests

Uses FastAPI TestClient with a mocked PostgresMeta facade.

Run with:
    pytest tests/test_routes.py -v
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import router, set_services
from api.generator_routes import router as generator_router, set_generator_services
from core.models.schema import Schema
from core.models.trigger import Trigger
from core.results import MetaError, MetaResult
from health import health_router, set_health_services
from repositories.column_repo import ColumnResource
from repositories.trigger_repo import TriggerResource


# ============================================================================
# FIXTURES
# ============================================================================

def _make_trigger():
    return Trigger(
        id=7,
        table_id=10,
        enabled_mode="origin",
        name="audit_users",
        table="users",
        schema="public",
        orientation="row",
        activation="after",
        events=["INSERT"],
        function_schema="audit",
        function_name="log_change",
    )


def _make_resource(kind, id_type=int):
    resource = MagicMock()
    resource.kind = kind
    resource.id_type = id_type
    return resource


def _make_meta():
    meta = MagicMock()
    triggers = _make_resource("trigger")
    schemas = _make_resource("schema")
    columns = _make_resource("column", id_type=str)
    types = _make_resource("type")
    meta.resources = {
        "schemas": schemas,
        "tables": _make_resource("table"),
        "columns": columns,
        "triggers": triggers,
        "functions": _make_resource("function"),
        "policies": _make_resource("policy"),
        "types": types,
    }
    return meta


@pytest.fixture
def meta():
    return _make_meta()


@pytest.fixture
def client(meta):
    app = FastAPI()
    app.include_router(health_router)
    app.include_router(router)
    app.include_router(generator_router)
    set_services(meta)
    set_health_services(meta)
    return TestClient(app)


# ============================================================================
# RESOURCES
# ============================================================================

class TestResourceRoutes:

    def test_list(self, client, meta):
        schemas = meta.resources["schemas"]
        schemas.list = AsyncMock(return_value=MetaResult.success([
            Schema(id=1, name="public", owner="postgres"),
        ]))

        resp = client.get("/schemas/", params={"include_system_schemas": "true", "limit": 5})

        assert resp.status_code == 200
        assert resp.json() == [{"id": 1, "name": "public", "owner": "postgres"}]
        schemas.list.assert_awaited_once_with(include_system_schemas=True, limit=5, offset=None)

    def test_retrieve_uses_schema_key(self, client, meta):
        triggers = meta.resources["triggers"]
        triggers.retrieve = AsyncMock(return_value=MetaResult.success(_make_trigger()))

        resp = client.get("/triggers/7")

        assert resp.status_code == 200
        body = resp.json()
        assert body["schema"] == "public"
        assert body["activation"] == "after"
        triggers.retrieve.assert_awaited_once_with(id=7)

    def test_invalid_id(self, client):
        resp = client.get("/triggers/abc")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid trigger id abc"

    def test_column_ids_are_strings(self, client, meta):
        columns = meta.resources["columns"]
        columns.remove = AsyncMock(return_value=MetaResult.failure(
            MetaError.not_found("Column with id 5.2 does not exist")
        ))

        resp = client.delete("/columns/5.2", params={"cascade": "true"})

        assert resp.status_code == 404
        assert resp.json() == {"error": "Column with id 5.2 does not exist", "kind": "not_found"}
        columns.remove.assert_awaited_once_with("5.2", cascade=True)

    def test_create_validation_error(self, client, meta):
        triggers = meta.resources["triggers"]
        triggers.create = AsyncMock(return_value=MetaResult.failure(
            MetaError.validation("Missing required param table")
        ))

        resp = client.post("/triggers/", json={"name": "t"})

        assert resp.status_code == 400
        assert resp.json()["kind"] == "validation"
        triggers.create.assert_awaited_once_with({"name": "t"})

    def test_update_execution_error_carries_diagnostics(self, client, meta):
        triggers = meta.resources["triggers"]
        triggers.update = AsyncMock(return_value=MetaResult.failure(
            MetaError(message='trigger "x" already exists', code="42710", hint="Pick another name")
        ))

        resp = client.patch("/triggers/7", json={"name": "x"})

        assert resp.status_code == 400
        assert resp.json() == {
            "error": 'trigger "x" already exists',
            "kind": "execution",
            "code": "42710",
            "hint": "Pick another name",
        }
        triggers.update.assert_awaited_once_with(7, {"name": "x"})

    def test_types_are_read_only(self, client):
        assert client.post("/types/", json={"name": "x"}).status_code == 405
        assert client.delete("/types/1").status_code == 405

    def test_limit_validated(self, client):
        assert client.get("/schemas/", params={"limit": 0}).status_code == 422


# ============================================================================
# QUERY
# ============================================================================

class TestQueryRoute:

    def test_rows_returned(self, client, meta):
        meta.query = AsyncMock(return_value=MetaResult.success([{"n": 1}]))
        resp = client.post("/query", json={"query": "select 1 as n"})
        assert resp.status_code == 200
        assert resp.json() == [{"n": 1}]

    def test_database_error(self, client, meta):
        meta.query = AsyncMock(return_value=MetaResult.failure(
            MetaError(message='syntax error at or near "selec"', code="42601")
        ))
        resp = client.post("/query", json={"query": "selec 1"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "42601"


# ============================================================================
# GENERATORS
# ============================================================================

class TestGeneratorRoutes:

    def test_typescript(self, client):
        svc = MagicMock()
        svc.generate_typescript = AsyncMock(return_value=MetaResult.success("export interface Database {\n}\n"))
        set_generator_services(svc)

        resp = client.get("/generators/typescript", params={"excluded_schemas": "auth, storage"})

        assert resp.status_code == 200
        assert resp.text == "export interface Database {\n}\n"
        svc.generate_typescript.assert_awaited_once_with(
            included_schemas=[],
            excluded_schemas=["auth", "storage"],
        )

    def test_typescript_failure(self, client):
        svc = MagicMock()
        svc.generate_typescript = AsyncMock(return_value=MetaResult.failure(
            MetaError(message="permission denied")
        ))
        set_generator_services(svc)

        resp = client.get("/generators/typescript")

        assert resp.status_code == 400
        assert resp.json()["error"] == "permission denied"


# ============================================================================
# HEALTH
# ============================================================================

class TestHealthRoutes:

    def test_livez(self, client):
        resp = client.get("/livez")
        assert resp.status_code == 200
        assert resp.json()["status"] == "alive"

    def test_readyz_ok(self, client, meta):
        meta.ping = AsyncMock(return_value=True)
        resp = client.get("/readyz")
        assert resp.status_code == 200
        assert resp.json()["checks"]["database"]["status"] == "healthy"

    def test_readyz_db_down(self, client, meta):
        meta.ping = AsyncMock(return_value=False)
        resp = client.get("/readyz")
        assert resp.status_code == 503
        assert resp.json()["status"] == "not_ready"


# ============================================================================
# ID TYPES
# ============================================================================

def test_resource_id_types():
    assert TriggerResource.id_type is int
    assert ColumnResource.id_type is str
