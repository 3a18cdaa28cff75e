# ============================================================================
# COLUMN DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - ADD/ALTER/DROP COLUMN composition
# PURPOSE: Translate column option sets into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""
Column DDL Builder.

Column types are catalog type names ("int8", "timestamptz", "public.mood")
optionally followed by "[]". Schema-qualified type names are resolved
against the known schema list like any other name.

Update statements run in this order: nullability, type, default, identity,
uniqueness, comment, check; the rename comes last.
"""

from typing import Any, Iterable, List

from psycopg import sql

from core.contracts import DefaultValueFormat, IdentityGeneration
from core.models.table import Column, ColumnCreate, ColumnUpdate, Table
from core.schema.names import resolved_identifier
from core.schema.quoting import fragment, identifier, literal
from core.schema.statements import StatementBatch, require
from core.schema.table_ddl import drop_constraints_block


def column_type(known_schemas: Iterable[str], type_name: str) -> sql.Composable:
    """Quote a column type, keeping a trailing [] array marker."""
    is_array = type_name.endswith("[]")
    base = type_name[:-2] if is_array else type_name
    rendered = resolved_identifier(known_schemas, base)
    return rendered + sql.SQL("[]") if is_array else rendered


def default_expr(value: Any, fmt: DefaultValueFormat) -> sql.Composable:
    if fmt == DefaultValueFormat.EXPRESSION:
        return fragment(value)
    return literal(value)


def column_comment(table: sql.Identifier, column: sql.Identifier, comment: str) -> sql.Composed:
    return sql.SQL("COMMENT ON COLUMN {}.{} IS {}").format(table, column, literal(comment))


class ColumnBuilder:
    """Builder for column DDL statements."""

    REQUIRED_FIELDS = ("table_id", "name", "type")

    @staticmethod
    def check_required(options: ColumnCreate) -> None:
        require(options, ColumnBuilder.REQUIRED_FIELDS)

    @staticmethod
    def create(
        options: ColumnCreate,
        table: Table,
        known_schemas: Iterable[str],
    ) -> StatementBatch:
        ColumnBuilder.check_required(options)
        qualified = identifier(table.schema, table.name)
        column = identifier(options.name)

        parts: List[sql.Composable] = [
            sql.SQL("ALTER TABLE {} ADD COLUMN {}").format(qualified, column),
            column_type(list(known_schemas), options.type),
        ]
        if options.default_value is not None:
            parts.append(sql.SQL("DEFAULT {}").format(
                default_expr(options.default_value, options.default_value_format)
            ))
        if options.is_identity:
            generation = options.identity_generation or IdentityGeneration.BY_DEFAULT
            parts.append(sql.SQL(f"GENERATED {generation.keyword} AS IDENTITY"))
        if options.is_nullable is False:
            parts.append(sql.SQL("NOT NULL"))
        elif options.is_nullable is True:
            parts.append(sql.SQL("NULL"))
        if options.is_primary_key:
            parts.append(sql.SQL("PRIMARY KEY"))
        if options.is_unique:
            parts.append(sql.SQL("UNIQUE"))
        if options.check:
            parts.append(sql.SQL("CHECK ({})").format(fragment(options.check)))

        batch = StatementBatch([sql.SQL(" ").join(parts)])
        if options.comment is not None:
            batch.add(column_comment(qualified, column, options.comment))
        return batch

    @staticmethod
    def update(
        current: Column,
        options: ColumnUpdate,
        known_schemas: Iterable[str] = (),
    ) -> StatementBatch:
        qualified = identifier(current.schema, current.table)
        alter = sql.SQL("ALTER TABLE {} ").format(qualified)
        column = identifier(current.name)
        alter_column = sql.SQL("ALTER TABLE {} ALTER COLUMN {} ").format(qualified, column)
        batch = StatementBatch()

        if options.is_nullable is False:
            batch.add(alter_column + sql.SQL("SET NOT NULL"))
        elif options.is_nullable is True:
            batch.add(alter_column + sql.SQL("DROP NOT NULL"))

        if options.type:
            new_type = column_type(list(known_schemas), options.type)
            batch.add(alter_column + sql.SQL("SET DATA TYPE {} USING {}::{}").format(
                new_type, column, new_type,
            ))

        if options.drop_default:
            batch.add(alter_column + sql.SQL("DROP DEFAULT"))
        elif options.default_value is not None:
            batch.add(alter_column + sql.SQL("SET DEFAULT {}").format(
                default_expr(options.default_value, options.default_value_format)
            ))

        if options.is_identity is False:
            batch.add(alter_column + sql.SQL("DROP IDENTITY IF EXISTS"))
        elif options.is_identity is True:
            generation = options.identity_generation or IdentityGeneration.BY_DEFAULT
            if current.is_identity:
                batch.add(alter_column + sql.SQL(f"SET GENERATED {generation.keyword}"))
            else:
                batch.add(alter_column + sql.SQL(f"ADD GENERATED {generation.keyword} AS IDENTITY"))

        if options.is_unique is True:
            batch.add(alter + sql.SQL("ADD UNIQUE ({})").format(column))
        elif options.is_unique is False:
            table = Table(id=current.table_id, schema=current.schema, name=current.table)
            batch.add(drop_constraints_block(
                table,
                "u",
                sql.SQL(" AND cardinality(conkey) = 1 AND conkey[1] = {}").format(
                    literal(int(current.ordinal_position))
                ),
            ))

        if options.comment is not None:
            batch.add(column_comment(qualified, column, options.comment))

        if options.check is not None:
            constraint = identifier(f"{current.table}_{current.name}_check")
            batch.add(alter + sql.SQL("DROP CONSTRAINT IF EXISTS {}").format(constraint))
            if options.check:
                batch.add(alter + sql.SQL("ADD CONSTRAINT {} CHECK ({})").format(
                    constraint, fragment(options.check),
                ))

        if options.name and options.name != current.name:
            batch.set_final(alter + sql.SQL("RENAME COLUMN {} TO {}").format(
                column, identifier(options.name),
            ))

        return batch

    @staticmethod
    def remove(current: Column, cascade: bool = False) -> sql.Composed:
        return sql.SQL("ALTER TABLE {} DROP COLUMN {}{}").format(
            identifier(current.schema, current.table),
            identifier(current.name),
            sql.SQL(" CASCADE" if cascade else ""),
        )


__all__ = ["ColumnBuilder", "column_type"]
