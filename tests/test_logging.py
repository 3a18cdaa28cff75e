# ============================================================================
# STRUCTURED LOGGING TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - Log context propagation
# PURPOSE: Verify nested log_context and per-task isolation
# CREATED: 16 OCT 2026
# ============================================================================
"""
Structured Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import asyncio
import json
import logging

from core.logging import (
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    log_context,
)


def _record(msg="hello"):
    return logging.LogRecord("repositories.trigger", logging.INFO, __file__, 1, msg, None, None)


class TestLogContext:

    def test_nested_context_inherits_and_restores(self):
        with log_context(resource="trigger", operation="update"):
            with log_context(resource_id=7):
                ctx = get_current_context()
                assert ctx.resource == "trigger"
                assert ctx.resource_id == "7"
                assert ctx.operation == "update"
            assert get_current_context().resource_id is None
        assert get_current_context().resource is None

    def test_concurrent_tasks_are_isolated(self):
        async def worker(name):
            with log_context(resource=name):
                await asyncio.sleep(0)
                return get_current_context().resource

        async def main():
            return await asyncio.gather(worker("table"), worker("policy"))

        assert asyncio.run(main()) == ["table", "policy"]


class TestFormatters:

    def test_structured_includes_context(self):
        with log_context(resource="table", resource_id=5, operation="remove"):
            line = StructuredFormatter().format(_record())
        data = json.loads(line)
        assert data["message"] == "hello"
        assert data["context"] == {"resource": "table", "resource_id": "5", "operation": "remove"}

    def test_human_inline_context(self):
        with log_context(resource="schema", operation="create"):
            line = HumanFormatter().format(_record())
        assert "[resource=schema, op=create]" in line
        assert line.endswith("repositories.trigger [resource=schema, op=create]: hello")
