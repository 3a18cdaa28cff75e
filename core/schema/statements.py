# ============================================================================
# STATEMENT BATCHES
# ============================================================================
# EPOCH: 1 - SCHEMA METADATA
# STATUS: Core - Ordered DDL fragments for one transaction
# PURPOSE: Hold update statements with an explicit must-run-last slot
# CREATED: 16 OCT 2026
# ============================================================================
"""
Statement Batches

Updates compose several independent ALTER statements that run together in
one transaction. Statements that rename the object go into the ``final``
slot: everything in the body still addresses the object by its current name,
so the rename has to be the last thing executed.

Statements are psycopg.sql composables (plain strings are accepted too);
``texts`` and ``render()`` give the connection-free text form.

Usage:
    batch = StatementBatch()
    batch.add(sql.SQL("ALTER TABLE {} DISABLE TRIGGER {}").format(table, trigger))
    batch.set_final(sql.SQL("ALTER TRIGGER {} ON {} RENAME TO {}").format(...))
    await executor.run_batch(batch)
"""

from typing import Any, Iterable, Iterator, List, Optional, Union

from psycopg import sql

from core.schema.quoting import as_text

Statement = Union[str, sql.Composable]


class MissingRequiredParam(ValueError):
    """A mandatory option was not supplied."""

    def __init__(self, param: str):
        self.param = param
        super().__init__(f"Missing required param {param}")


def first_missing(options: Any, fields: Iterable[str]) -> Optional[str]:
    """Name of the first field (in the given order) that is None or empty."""
    for name in fields:
        value = getattr(options, name, None)
        if value is None or value == "":
            return name
    return None


def require(options: Any, fields: Iterable[str]) -> None:
    """Raise MissingRequiredParam for the first missing field."""
    missing = first_missing(options, fields)
    if missing is not None:
        raise MissingRequiredParam(missing)


class StatementBatch:
    """Ordered statement fragments plus an optional final statement."""

    def __init__(self, statements: Optional[List[Statement]] = None):
        self._body: List[Statement] = []
        self._final: Optional[Statement] = None
        self.extend(statements or [])

    def add(self, statement: Optional[Statement]) -> "StatementBatch":
        """Append a statement to the body. Empty values are ignored."""
        if statement is not None and as_text(statement):
            self._body.append(statement)
        return self

    def extend(self, statements: Iterable[Statement]) -> "StatementBatch":
        for statement in statements:
            self.add(statement)
        return self

    def set_final(self, statement: Optional[Statement]) -> "StatementBatch":
        """Set the statement that always runs after the body."""
        if statement is not None and as_text(statement):
            self._final = statement
        return self

    @property
    def final(self) -> Optional[Statement]:
        return self._final

    @property
    def statements(self) -> List[Statement]:
        """All statements in execution order."""
        if self._final is None:
            return list(self._body)
        return self._body + [self._final]

    @property
    def texts(self) -> List[str]:
        """Statements in execution order, rendered to text."""
        return [as_text(s) for s in self.statements]

    @property
    def is_empty(self) -> bool:
        return not self._body and self._final is None

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self._body) + (1 if self._final is not None else 0)

    def render(self) -> str:
        """Single transaction text, for logging and dry runs."""
        if self.is_empty:
            return ""
        body = " ".join(s if s.endswith(";") else s + ";" for s in self.texts)
        return f"BEGIN; {body} COMMIT;"

    def __repr__(self) -> str:
        return f"StatementBatch({self.texts!r})"


__all__ = ["MissingRequiredParam", "first_missing", "require", "Statement", "StatementBatch"]
