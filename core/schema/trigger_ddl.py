# ============================================================================
# TRIGGER DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - CREATE/ALTER/DROP TRIGGER composition
# PURPOSE: Translate trigger option sets into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# EXPORTS: TriggerBuilder
# DEPENDENCIES: psycopg, core.schema.quoting, core.schema.names
# ============================================================================
"""
Trigger DDL Builder.

CREATE clauses are emitted in the order the grammar expects:

    CREATE [CONSTRAINT] TRIGGER name {BEFORE|AFTER|INSTEAD OF} event
        ON table [FROM referenced_table] [deferrability]
        [REFERENCING ...] [FOR EACH {ROW|STATEMENT}] [WHEN (condition)]
        EXECUTE FUNCTION function(args)

Each optional clause is only present when its option is set. The table,
function and referenced table names are resolved independently against the
schema list passed in by the caller.

Updates produce a StatementBatch; the rename is always the final statement
because the enable/disable and extension statements address the trigger by
its current name.

Usage:
    batch = TriggerBuilder.create(options, known_schemas=["public", "audit"])
    batch = TriggerBuilder.update(current_trigger, TriggerUpdate(name="t2"))
    stmt = TriggerBuilder.remove(current_trigger, cascade=True)
"""

from typing import Iterable, List

from psycopg import sql

from core.models.trigger import Trigger, TriggerCreate, TriggerUpdate
from core.schema.names import resolved_identifier
from core.schema.quoting import fragment, identifier, literal
from core.schema.statements import StatementBatch, require


class TriggerBuilder:
    """Builder for trigger DDL statements. All methods are static."""

    # Checked in this order; the first missing one is reported
    REQUIRED_FIELDS = ("name", "table", "function_name", "timing", "event")

    @staticmethod
    def check_required(options: TriggerCreate) -> None:
        require(options, TriggerBuilder.REQUIRED_FIELDS)

    @staticmethod
    def create(options: TriggerCreate, known_schemas: Iterable[str]) -> StatementBatch:
        """
        Compose CREATE [CONSTRAINT] TRIGGER.

        Args:
            options: Trigger options
            known_schemas: Schema names existing right now

        Returns:
            StatementBatch with the single CREATE statement

        Raises:
            MissingRequiredParam: name, table, function_name, timing or event absent
        """
        TriggerBuilder.check_required(options)
        schemas = list(known_schemas)

        clauses: List[sql.Composable] = [sql.SQL("CREATE")]
        if options.constraint:
            clauses.append(sql.SQL("CONSTRAINT"))
        clauses.append(sql.SQL("TRIGGER {} {} {} ON {}").format(
            identifier(options.name),
            sql.SQL(options.timing.keyword),
            fragment(options.event),
            resolved_identifier(schemas, options.table),
        ))

        # Only constraint triggers take a referenced table and deferrability
        if options.constraint:
            if options.referenced_table_name:
                clauses.append(sql.SQL("FROM {}").format(
                    resolved_identifier(schemas, options.referenced_table_name)
                ))
            if options.deferrable:
                clauses.append(sql.SQL(options.deferrable.keyword))

        if options.transition_relation_reference:
            clauses.append(fragment(options.transition_relation_reference))
        if options.orientation:
            clauses.append(sql.SQL("FOR EACH {}").format(sql.SQL(options.orientation.keyword)))
        if options.condition:
            clauses.append(sql.SQL("WHEN ({})").format(fragment(options.condition)))

        clauses.append(sql.SQL("EXECUTE FUNCTION {}({})").format(
            resolved_identifier(schemas, options.function_name),
            literal(list(options.function_args)),
        ))

        return StatementBatch([sql.SQL(" ").join(clauses)])

    @staticmethod
    def update(current: Trigger, options: TriggerUpdate) -> StatementBatch:
        """
        Compose the ALTER statements for the supplied update fields.

        Fields left as None produce no statement.
        """
        table = identifier(current.schema, current.table)
        trigger = identifier(current.name)
        batch = StatementBatch()

        if options.is_enabled is False:
            batch.add(sql.SQL("ALTER TABLE {} DISABLE TRIGGER {}").format(table, trigger))
        elif options.is_enabled is True:
            mode = sql.SQL(" " + options.enable_mode.keyword) if options.enable_mode else sql.SQL("")
            batch.add(sql.SQL("ALTER TABLE {} ENABLE{} TRIGGER {}").format(table, mode, trigger))

        if options.extension and options.is_extension_dependent is not None:
            no = sql.SQL("" if options.is_extension_dependent else "NO ")
            batch.add(sql.SQL("ALTER TRIGGER {} ON {} {}DEPENDS ON EXTENSION {}").format(
                trigger, table, no, identifier(options.extension),
            ))

        if options.name and options.name != current.name:
            batch.set_final(sql.SQL("ALTER TRIGGER {} ON {} RENAME TO {}").format(
                trigger, table, identifier(options.name),
            ))

        return batch

    @staticmethod
    def remove(current: Trigger, cascade: bool = False) -> sql.Composed:
        return sql.SQL("DROP TRIGGER {} ON {}{}").format(
            identifier(current.name),
            identifier(current.schema, current.table),
            sql.SQL(" CASCADE" if cascade else ""),
        )


__all__ = ["TriggerBuilder"]
