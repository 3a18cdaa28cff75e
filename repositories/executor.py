# ============================================================================
# QUERY EXECUTOR
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Single entry point for SQL execution
# PURPOSE: Run catalog reads and DDL batches, returning MetaResult values
# CREATED: 16 OCT 2026
# ============================================================================
"""
Query Executor

Everything the resources send to the database goes through here. Database
errors never escape as exceptions: they come back as execution-kind
MetaError values carrying the server's message, SQLSTATE, detail and hint.

DDL composables are sent without parameters, so psycopg passes them through
and "%" in function bodies or literals needs no escaping. Catalog reads use
psycopg.sql composition and %(name)s parameters.

Usage:
    executor = QueryExecutor(pool)
    result = await executor.query(catalog_sql.SCHEMAS_SQL)
    result = await executor.run_batch(batch)
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from core.results import MetaError, MetaResult
from core.schema.statements import StatementBatch

logger = logging.getLogger(__name__)

Statement = Union[str, sql.Composable]
Params = Optional[Union[Mapping[str, Any], Sequence[Any]]]


class QueryExecutor:
    """Executes SQL against a connection pool."""

    def __init__(self, pool: AsyncConnectionPool):
        self.pool = pool

    async def query(self, statement: Statement, params: Params = None) -> MetaResult[List[Dict[str, Any]]]:
        """
        Run one statement and return its rows.

        Statements without a result set (DDL) return an empty list.
        """
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(statement, params)
                    rows = await cur.fetchall() if cur.description else []
            return MetaResult.success(rows)
        except psycopg.Error as e:
            logger.warning(f"Query failed: {e}")
            return MetaResult.failure(MetaError.from_exception(e))

    async def run_batch(self, batch: StatementBatch) -> MetaResult[None]:
        """
        Run every statement of a batch in one transaction.

        Either all statements commit or none do.
        """
        if batch.is_empty:
            return MetaResult()
        try:
            async with self.pool.connection() as conn:
                async with conn.transaction():
                    for statement in batch:
                        await conn.execute(statement)
            logger.debug(f"Committed {len(batch)} statement(s)")
            return MetaResult()
        except psycopg.Error as e:
            logger.warning(f"Batch rolled back: {e}")
            return MetaResult.failure(MetaError.from_exception(e))

    async def ping(self) -> bool:
        """True if the database answers SELECT 1."""
        result = await self.query("SELECT 1 AS ok")
        return result.ok


__all__ = ["QueryExecutor", "Statement", "Params"]
