# ============================================================================
# RESULT ENVELOPE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Tests - MetaResult / MetaError
# PURPOSE: Verify the data-or-error contract and driver error capture
# CREATED: 16 OCT 2026
# ============================================================================
"""
Result Envelope Tests

Run with:
    pytest tests/test_results.py -v
"""

import pytest
from types import SimpleNamespace

from core.results import ErrorKind, MetaError, MetaResult, MetaResultError


class _FakeDbError(Exception):
    sqlstate = "23505"

    def __init__(self):
        super().__init__('duplicate key value violates unique constraint "users_pkey"\nDETAIL: ...')
        self.diag = SimpleNamespace(
            message_primary='duplicate key value violates unique constraint "users_pkey"',
            message_detail="Key (id)=(1) already exists.",
            message_hint=None,
        )


class TestMetaResult:

    def test_success(self):
        result = MetaResult.success({"id": 1})
        assert result.ok
        assert result.error is None
        assert result.unwrap() == {"id": 1}

    def test_failure_unwrap_raises(self):
        result = MetaResult.failure(MetaError.not_found("Cannot find a trigger with ID 9"))
        assert not result.ok
        with pytest.raises(MetaResultError) as exc_info:
            result.unwrap()
        assert exc_info.value.error.kind == ErrorKind.NOT_FOUND

    def test_cannot_carry_both(self):
        with pytest.raises(ValueError):
            MetaResult(data=1, error=MetaError(message="x"))


class TestMetaError:

    def test_from_psycopg_style_exception(self):
        error = MetaError.from_exception(_FakeDbError())
        assert error.kind == ErrorKind.EXECUTION
        assert error.message == 'duplicate key value violates unique constraint "users_pkey"'
        assert error.code == "23505"
        assert error.detail == "Key (id)=(1) already exists."
        assert error.hint is None

    def test_from_plain_exception(self):
        error = MetaError.from_exception(RuntimeError("  connection refused \n"))
        assert error.message == "connection refused"
        assert error.code is None

    def test_validation_kind(self):
        assert MetaError.validation("Missing required param name").kind == ErrorKind.VALIDATION
