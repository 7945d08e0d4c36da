"""
SQLite Grammar - SQLite schema statements

SQLite cannot add or drop constraints on an existing table, and full-text
search lives in virtual tables rather than indexes; those commands raise
UnsupportedCommandError.
"""

from ...config import CompilerSettings
from ...constants import SQLITE_RESERVED_WORDS
from ..models import Command, Dialect, LogicalType, Table
from .base import (
    ColumnClauseBuilder,
    CommandCompiler,
    Grammar,
    Quoter,
    Statements,
    TypeMapper,
    default_clause,
    fixed,
    increment_clause,
    nullable_clause,
)

import logging
logger = logging.getLogger(__name__)


SQLITE_TYPES = {
    LogicalType.INTEGER: fixed("INTEGER"),
    LogicalType.FLOAT: fixed("FLOAT"),
    LogicalType.DECIMAL: fixed("NUMERIC"),
    LogicalType.STRING: fixed("VARCHAR"),
    LogicalType.TEXT: fixed("TEXT"),
    LogicalType.BOOLEAN: fixed("INTEGER"),
    LogicalType.DATE: fixed("DATETIME"),
    LogicalType.TIMESTAMP: fixed("DATETIME"),
    LogicalType.BLOB: fixed("BLOB"),
}

SQLITE_MODIFIERS = (
    nullable_clause,
    default_clause,
    increment_clause("PRIMARY KEY AUTOINCREMENT"),
)


class SQLiteCompiler(CommandCompiler):
    """Command compiler for SQLite."""

    def compile_add(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        added = [table.column(n) for n in command.columns] if command.columns else table.columns
        if any(c.auto_increment for c in added):
            raise self.unsupported(command, "an added column cannot be an AUTOINCREMENT primary key")

        # One column per ALTER TABLE statement
        wrapped = self.wrap_table(table.name, settings)
        return [
            f"ALTER TABLE {wrapped} ADD COLUMN {definition}"
            for definition in self.column_definitions(table, settings, command.columns)
        ]

    def compile_drop_column(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        wrapped = self.wrap_table(table.name, settings)
        return [
            f"ALTER TABLE {wrapped} DROP COLUMN {self.quoter.quote(c)}"
            for c in command.columns
        ]

    def compile_rename(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"RENAME TO {self.wrap_table(command.to, settings)}"
        )

    def compile_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._key(table, command, settings, unique=True)

    def compile_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._key(table, command, settings)

    def _key(self, table: Table, command: Command, settings: CompilerSettings, unique: bool = False) -> str:
        create = "CREATE UNIQUE" if unique else "CREATE"
        return (
            f"{create} INDEX {self.quoter.name(command.name)} "
            f"ON {self.wrap_table(table.name, settings)} "
            f"({self.quoter.columnize(command.columns)})"
        )

    def compile_drop_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return f"DROP INDEX {self.quoter.name(command.name)}"

    def compile_drop_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return f"DROP INDEX {self.quoter.name(command.name)}"

    def compile_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "primary keys must be declared when the table is created")

    def compile_drop_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "primary keys cannot be dropped from an existing table")

    def compile_foreign(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "foreign keys cannot be added to an existing table")

    def compile_drop_foreign(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "foreign keys cannot be dropped from an existing table")

    def compile_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "full-text search requires an FTS virtual table")

    def compile_drop_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        raise self.unsupported(command, "full-text search requires an FTS virtual table")


def create_grammar() -> Grammar:
    """Assemble the SQLite grammar."""
    quoter = Quoter('"', '"', SQLITE_RESERVED_WORDS)
    type_mapper = TypeMapper(Dialect.SQLITE, SQLITE_TYPES)
    columns = ColumnClauseBuilder(quoter, type_mapper, SQLITE_MODIFIERS)
    return Grammar(
        dialect=Dialect.SQLITE,
        type_mapper=type_mapper,
        quoter=quoter,
        column_builder=columns,
        compiler=SQLiteCompiler(Dialect.SQLITE, quoter, columns),
    )
