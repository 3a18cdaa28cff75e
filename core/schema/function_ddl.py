# ============================================================================
# FUNCTION DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - CREATE/ALTER/DROP FUNCTION composition
# PURPOSE: Translate function option sets into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Function DDL Builder.

Functions are addressed by schema, name and identity argument list. A
definition change re-issues CREATE OR REPLACE with the current signature,
language and attributes; owner and schema changes use ALTER FUNCTION, and
the rename runs last under the post-move schema.

The function body is passed as a quoted literal, never dollar-quoted, so a
body containing "$$" cannot terminate it early.
"""

from typing import Dict, Iterable, List, Optional

from psycopg import sql

from core.contracts import FunctionBehavior
from core.models.function import Function, FunctionCreate, FunctionUpdate
from core.schema.names import resolve_qualified
from core.schema.quoting import fragment, identifier, literal
from core.schema.statements import StatementBatch, require
from core.schema.table_ddl import DEFAULT_SCHEMA


def create_function_sql(
    schema: str,
    name: str,
    args: str,
    returns: str,
    language: str,
    behavior: FunctionBehavior,
    security_definer: bool,
    config_params: Optional[Dict[str, str]],
    definition: str,
    replace: bool = False,
) -> sql.Composed:
    parts: List[sql.Composable] = [
        sql.SQL("CREATE OR REPLACE FUNCTION" if replace else "CREATE FUNCTION"),
        sql.SQL("{}({})").format(identifier(schema, name), fragment(args)),
        sql.SQL("RETURNS {}").format(fragment(returns)),
        sql.SQL("LANGUAGE {}").format(identifier(language)),
        sql.SQL(behavior.keyword),
    ]
    if security_definer:
        parts.append(sql.SQL("SECURITY DEFINER"))
    for param, value in (config_params or {}).items():
        parts.append(sql.SQL("SET {} TO {}").format(identifier(param), literal(value)))
    parts.append(sql.SQL("AS {}").format(literal(definition)))
    return sql.SQL(" ").join(parts)


class FunctionBuilder:
    """Builder for function DDL statements."""

    REQUIRED_FIELDS = ("name", "definition")

    @staticmethod
    def check_required(options: FunctionCreate) -> None:
        require(options, FunctionBuilder.REQUIRED_FIELDS)

    @staticmethod
    def target(options: FunctionCreate, known_schemas: Iterable[str]):
        resolved = resolve_qualified(known_schemas, options.name)
        return resolved.schema or options.schema_name or DEFAULT_SCHEMA, resolved.name

    @staticmethod
    def create(options: FunctionCreate, known_schemas: Iterable[str]) -> StatementBatch:
        FunctionBuilder.check_required(options)
        schema, name = FunctionBuilder.target(options, known_schemas)
        return StatementBatch([create_function_sql(
            schema=schema,
            name=name,
            args=options.args,
            returns=options.return_type,
            language=options.language,
            behavior=options.behavior,
            security_definer=options.security_definer,
            config_params=options.config_params,
            definition=options.definition,
        )])

    @staticmethod
    def _signature(schema: str, current: Function) -> sql.Composed:
        return sql.SQL("{}({})").format(
            identifier(schema, current.name),
            fragment(current.identity_argument_types),
        )

    @staticmethod
    def update(current: Function, options: FunctionUpdate) -> StatementBatch:
        batch = StatementBatch()
        signature = FunctionBuilder._signature(current.schema, current)

        if options.definition is not None:
            batch.add(create_function_sql(
                schema=current.schema,
                name=current.name,
                args=current.argument_types,
                returns=current.result_type or current.return_type,
                language=current.language,
                behavior=current.behavior,
                security_definer=current.security_definer,
                config_params=current.config_params,
                definition=options.definition,
                replace=True,
            ))

        if options.owner:
            batch.add(sql.SQL("ALTER FUNCTION {} OWNER TO {}").format(
                signature, identifier(options.owner),
            ))

        schema = current.schema
        if options.schema_name and options.schema_name != current.schema:
            batch.add(sql.SQL("ALTER FUNCTION {} SET SCHEMA {}").format(
                signature, identifier(options.schema_name),
            ))
            schema = options.schema_name

        if options.name and options.name != current.name:
            batch.set_final(sql.SQL("ALTER FUNCTION {} RENAME TO {}").format(
                FunctionBuilder._signature(schema, current), identifier(options.name),
            ))

        return batch

    @staticmethod
    def remove(current: Function, cascade: bool = False) -> sql.Composed:
        return sql.SQL("DROP FUNCTION {}{}").format(
            FunctionBuilder._signature(current.schema, current),
            sql.SQL(" CASCADE" if cascade else ""),
        )


__all__ = ["FunctionBuilder", "create_function_sql"]
