# ============================================================================
# SQL QUOTING
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Identifier and literal composition
# PURPOSE: psycopg.sql building blocks shared by every statement builder
# CREATED: 16 OCT 2026
# EXPORTS: identifier, literal, fragment, identifier_list, as_text, quote_*
# DEPENDENCIES: psycopg
# ============================================================================
"""
SQL Quoting.

Statement builders compose psycopg.sql objects; nothing is spliced into SQL
text by hand. ``as_text`` renders a composable without a connection (the
same ``.as_string(None)`` path psycopg uses for generating SQL files), which
is how statements are logged and asserted on.

The ``quote_*`` functions are text renderings of the same building blocks.

Usage:
    from psycopg import sql
    from core.schema.quoting import identifier, literal, as_text

    stmt = sql.SQL("COMMENT ON TABLE {} IS {}").format(
        identifier("public", "users"), literal("it's"),
    )
    as_text(stmt)   # COMMENT ON TABLE "public"."users" IS 'it''s'
"""

from typing import Any, Iterable, Union

from psycopg import sql


def identifier(*parts: str) -> sql.Identifier:
    """Delimited (optionally dotted) identifier."""
    return sql.Identifier(*(str(p) for p in parts))


def literal(value: Any) -> sql.Composable:
    """
    SQL literal for a value.

    Lists and tuples become a comma-separated list of literals rather than
    an array constant.
    """
    if isinstance(value, (list, tuple)):
        return sql.SQL(", ").join(literal(v) for v in value)
    return sql.Literal(value)


def fragment(value: Any) -> sql.SQL:
    """
    Raw SQL fragment (condition, event list, transition clause, type clause).

    Passed through unquoted. None is empty; sequences are joined with ", ".
    """
    if value is None:
        return sql.SQL("")
    if isinstance(value, (list, tuple)):
        return sql.SQL(", ".join(str(v).strip() for v in value))
    return sql.SQL(str(value).strip())


def identifier_list(values: Iterable[str]) -> sql.Composed:
    return sql.SQL(", ").join(identifier(v) for v in values)


def as_text(statement: Union[str, sql.Composable]) -> str:
    """Render a statement to text without a connection."""
    if isinstance(statement, sql.Composable):
        return statement.as_string(None)
    return statement


# ============================================================================
# TEXT RENDERINGS
# ============================================================================

def quote_ident(value: str) -> str:
    return as_text(identifier(value))


def quote_qualified(parts: Iterable[str]) -> str:
    return as_text(identifier(*parts))


def quote_ident_list(values: Iterable[str]) -> str:
    return as_text(identifier_list(values))


def quote_literal(value: Any) -> str:
    # psycopg pads E'' strings and negative numbers with a leading space
    return as_text(literal(value)).strip()


def quote_string_expr(value: Any) -> str:
    return as_text(fragment(value))


__all__ = [
    "identifier",
    "literal",
    "fragment",
    "identifier_list",
    "as_text",
    "quote_ident",
    "quote_qualified",
    "quote_ident_list",
    "quote_literal",
    "quote_string_expr",
]
