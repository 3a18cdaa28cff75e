# ============================================================================
# POLICY DDL BUILDER
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - CREATE/ALTER/DROP POLICY composition
# PURPOSE: Translate row level security policy options into psycopg.sql statements
# LAST_REVIEWED: 16 OCT 2026
# ============================================================================
"""Policy DDL Builder."""

from typing import Iterable, List

from psycopg import sql

from core.models.policy import Policy, PolicyCreate, PolicyUpdate
from core.schema.names import resolve_qualified
from core.schema.quoting import fragment, identifier
from core.schema.statements import StatementBatch, require
from core.schema.table_ddl import DEFAULT_SCHEMA

# Role specifications that are keywords rather than role names
_ROLE_KEYWORDS = {"public", "current_user", "current_role", "session_user"}


def role_list(roles: Iterable[str]) -> sql.Composed:
    rendered: List[sql.Composable] = []
    for role in roles:
        if role.lower() in _ROLE_KEYWORDS:
            rendered.append(sql.SQL(role.upper()))
        else:
            rendered.append(identifier(role))
    return sql.SQL(", ").join(rendered)


class PolicyBuilder:
    """Builder for policy DDL statements."""

    REQUIRED_FIELDS = ("name", "table")

    @staticmethod
    def check_required(options: PolicyCreate) -> None:
        require(options, PolicyBuilder.REQUIRED_FIELDS)

    @staticmethod
    def target(options: PolicyCreate, known_schemas: Iterable[str]):
        """(schema, table) the policy goes on; the table may carry the schema."""
        resolved = resolve_qualified(known_schemas, options.table)
        return resolved.schema or options.schema_name or DEFAULT_SCHEMA, resolved.name

    @staticmethod
    def create(options: PolicyCreate, known_schemas: Iterable[str]) -> StatementBatch:
        PolicyBuilder.check_required(options)
        schema, table = PolicyBuilder.target(options, known_schemas)

        stmt = sql.SQL("CREATE POLICY {} ON {} AS {} FOR {} TO {}").format(
            identifier(options.name),
            identifier(schema, table),
            sql.SQL(options.action.keyword),
            sql.SQL(options.command.keyword),
            role_list(options.roles or ["public"]),
        )
        if options.definition:
            stmt += sql.SQL(" USING ({})").format(fragment(options.definition))
        if options.check:
            stmt += sql.SQL(" WITH CHECK ({})").format(fragment(options.check))
        return StatementBatch([stmt])

    @staticmethod
    def update(current: Policy, options: PolicyUpdate) -> StatementBatch:
        alter = sql.SQL("ALTER POLICY {} ON {} ").format(
            identifier(current.name),
            identifier(current.schema, current.table),
        )
        batch = StatementBatch()
        if options.definition is not None:
            batch.add(alter + sql.SQL("USING ({})").format(fragment(options.definition)))
        if options.check is not None:
            batch.add(alter + sql.SQL("WITH CHECK ({})").format(fragment(options.check)))
        if options.roles is not None:
            batch.add(alter + sql.SQL("TO {}").format(role_list(options.roles or ["public"])))
        if options.name and options.name != current.name:
            batch.set_final(alter + sql.SQL("RENAME TO {}").format(identifier(options.name)))
        return batch

    @staticmethod
    def remove(current: Policy, cascade: bool = False) -> sql.Composed:
        # DROP POLICY has no CASCADE form
        return sql.SQL("DROP POLICY {} ON {}").format(
            identifier(current.name),
            identifier(current.schema, current.table),
        )


__all__ = ["PolicyBuilder", "role_list"]
