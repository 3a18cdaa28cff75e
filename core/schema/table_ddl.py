# ============================================================================
# TABLE DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - CREATE/ALTER/DROP TABLE composition
# PURPOSE: Translate table option sets into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# EXPORTS: TableBuilder, DEFAULT_SCHEMA
# ============================================================================
"""
Table DDL Builder.

Update order matters in two places:
- SET SCHEMA runs after every other body statement, which all address the
  table in its current schema.
- The rename runs last and addresses the table in its *new* schema when a
  schema move is part of the same update.

Replacing the primary key drops whatever primary key constraint currently
exists (its name is looked up in pg_constraint at execution time) before
adding the new one.
"""

from typing import Iterable, Optional

from psycopg import sql

from core.contracts import ReplicaIdentity
from core.models.table import Table, TableCreate, TableUpdate
from core.schema.names import resolve_qualified
from core.schema.quoting import as_text, identifier, identifier_list, literal
from core.schema.statements import MissingRequiredParam, StatementBatch, require

DEFAULT_SCHEMA = "public"


def drop_constraints_block(
    table: Table,
    contype: str,
    extra_filter: Optional[sql.Composable] = None,
) -> sql.Composed:
    """
    DO block that drops every constraint of a given type on a table.

    Constraint names are only known to the server, so they are fetched and
    quoted inside the block.
    """
    alter = sql.SQL("ALTER TABLE {} DROP CONSTRAINT ").format(identifier(table.schema, table.name))
    return sql.SQL(
        "DO $pgmeta$ DECLARE r record; BEGIN "
        "FOR r IN SELECT conname FROM pg_catalog.pg_constraint "
        "WHERE contype = {contype} AND conrelid = {relid}{extra} LOOP "
        "EXECUTE {alter} || quote_ident(r.conname); "
        "END LOOP; END $pgmeta$"
    ).format(
        contype=literal(contype),
        relid=literal(int(table.id)),
        extra=extra_filter if extra_filter is not None else sql.SQL(""),
        alter=literal(as_text(alter)),
    )


class TableBuilder:
    """Builder for table DDL statements."""

    REQUIRED_FIELDS = ("name",)

    @staticmethod
    def check_required(options: TableCreate) -> None:
        require(options, TableBuilder.REQUIRED_FIELDS)

    @staticmethod
    def target(options: TableCreate, known_schemas: Iterable[str]):
        """Resolve (schema, name) for a new table; the name may carry the schema."""
        resolved = resolve_qualified(known_schemas, options.name)
        schema = resolved.schema or options.schema_name or DEFAULT_SCHEMA
        return schema, resolved.name

    @staticmethod
    def comment(table: sql.Identifier, comment: str) -> sql.Composed:
        return sql.SQL("COMMENT ON TABLE {} IS {}").format(table, literal(comment))

    @staticmethod
    def create(options: TableCreate, known_schemas: Iterable[str]) -> StatementBatch:
        TableBuilder.check_required(options)
        schema, name = TableBuilder.target(options, known_schemas)
        qualified = identifier(schema, name)

        batch = StatementBatch([sql.SQL("CREATE TABLE {} ()").format(qualified)])
        if options.comment is not None:
            batch.add(TableBuilder.comment(qualified, options.comment))
        return batch

    @staticmethod
    def update(current: Table, options: TableUpdate) -> StatementBatch:
        qualified = identifier(current.schema, current.name)
        alter = sql.SQL("ALTER TABLE {} ").format(qualified)
        batch = StatementBatch()

        if options.rls_enabled is not None:
            verb = "ENABLE" if options.rls_enabled else "DISABLE"
            batch.add(alter + sql.SQL(verb + " ROW LEVEL SECURITY"))
        if options.rls_forced is not None:
            verb = "FORCE" if options.rls_forced else "NO FORCE"
            batch.add(alter + sql.SQL(verb + " ROW LEVEL SECURITY"))

        if options.replica_identity is not None:
            if options.replica_identity == ReplicaIdentity.INDEX:
                if not options.replica_identity_index:
                    raise MissingRequiredParam("replica_identity_index")
                batch.add(alter + sql.SQL("REPLICA IDENTITY USING INDEX {}").format(
                    identifier(options.replica_identity_index)
                ))
            else:
                batch.add(alter + sql.SQL("REPLICA IDENTITY " + options.replica_identity.keyword))

        if options.primary_keys is not None:
            batch.add(drop_constraints_block(current, "p"))
            if options.primary_keys:
                batch.add(alter + sql.SQL("ADD PRIMARY KEY ({})").format(
                    identifier_list(options.primary_keys)
                ))

        if options.comment is not None:
            batch.add(TableBuilder.comment(qualified, options.comment))

        schema = current.schema
        if options.schema_name and options.schema_name != current.schema:
            batch.add(alter + sql.SQL("SET SCHEMA {}").format(identifier(options.schema_name)))
            schema = options.schema_name

        if options.name and options.name != current.name:
            batch.set_final(sql.SQL("ALTER TABLE {} RENAME TO {}").format(
                identifier(schema, current.name), identifier(options.name),
            ))

        return batch

    @staticmethod
    def remove(current: Table, cascade: bool = False) -> sql.Composed:
        return sql.SQL("DROP TABLE {}{}").format(
            identifier(current.schema, current.name),
            sql.SQL(" CASCADE" if cascade else ""),
        )


__all__ = ["TableBuilder", "DEFAULT_SCHEMA", "drop_constraints_block"]
