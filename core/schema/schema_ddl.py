# ============================================================================
# SCHEMA DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - CREATE/ALTER/DROP SCHEMA composition
# PURPOSE: Translate schema option sets into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""Schema DDL Builder."""

from typing import Iterable

from psycopg import sql

from core.models.schema import Schema, SchemaCreate, SchemaUpdate
from core.schema.quoting import identifier
from core.schema.statements import StatementBatch, require


class SchemaBuilder:
    """Builder for schema DDL statements."""

    REQUIRED_FIELDS = ("name",)

    @staticmethod
    def check_required(options: SchemaCreate) -> None:
        require(options, SchemaBuilder.REQUIRED_FIELDS)

    @staticmethod
    def create(options: SchemaCreate, known_schemas: Iterable[str] = ()) -> StatementBatch:
        SchemaBuilder.check_required(options)
        stmt = sql.SQL("CREATE SCHEMA {}").format(identifier(options.name))
        if options.owner:
            stmt += sql.SQL(" AUTHORIZATION {}").format(identifier(options.owner))
        return StatementBatch([stmt])

    @staticmethod
    def update(current: Schema, options: SchemaUpdate) -> StatementBatch:
        name = identifier(current.name)
        batch = StatementBatch()
        if options.owner:
            batch.add(sql.SQL("ALTER SCHEMA {} OWNER TO {}").format(name, identifier(options.owner)))
        if options.name and options.name != current.name:
            batch.set_final(sql.SQL("ALTER SCHEMA {} RENAME TO {}").format(name, identifier(options.name)))
        return batch

    @staticmethod
    def remove(current: Schema, cascade: bool = False) -> sql.Composed:
        return sql.SQL("DROP SCHEMA {} {}").format(
            identifier(current.name),
            sql.SQL("CASCADE" if cascade else "RESTRICT"),
        )


__all__ = ["SchemaBuilder"]
