"""
PostgreSQL Grammar - PostgreSQL schema statements
"""

from ...config import CompilerSettings
from ...constants import POSTGRES_FULLTEXT_LANGUAGE, POSTGRESQL_RESERVED_WORDS
from ..models import Command, Dialect, LogicalType, Table
from .base import (
    ColumnClauseBuilder,
    CommandCompiler,
    Grammar,
    Quoter,
    Statements,
    TypeMapper,
    TypeParams,
    default_clause,
    fixed,
    increment_clause,
    nullable_clause,
    numeric,
    quote_literal,
    sized,
)

import logging
logger = logging.getLogger(__name__)


def _integer(params: TypeParams) -> str:
    # Auto-increment is a type in PostgreSQL, not a column modifier
    return "SERIAL" if params.auto_increment else "INTEGER"


POSTGRESQL_TYPES = {
    LogicalType.INTEGER: _integer,
    LogicalType.FLOAT: fixed("REAL"),
    LogicalType.DECIMAL: numeric("DECIMAL({precision}, {scale})"),
    LogicalType.STRING: sized("VARCHAR({length})"),
    LogicalType.TEXT: fixed("TEXT"),
    LogicalType.BOOLEAN: fixed("SMALLINT"),
    LogicalType.DATE: fixed("TIMESTAMP(0) WITHOUT TIME ZONE"),
    LogicalType.TIMESTAMP: fixed("TIMESTAMP"),
    LogicalType.BLOB: fixed("BYTEA"),
}

POSTGRESQL_MODIFIERS = (
    nullable_clause,
    default_clause,
    increment_clause("PRIMARY KEY"),
)


class PostgreSQLCompiler(CommandCompiler):
    """Command compiler for PostgreSQL."""

    def compile_add(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        definitions = self.column_definitions(table, settings, command.columns)
        columns = ", ".join(f"ADD COLUMN {d}" for d in definitions)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_drop_column(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        columns = ", ".join(f"DROP COLUMN {self.quoter.quote(c)}" for c in command.columns)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_rename(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"RENAME TO {self.wrap_table(command.to, settings)}"
        )

    def compile_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._constraint(table, command, settings, "PRIMARY KEY")

    def compile_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._constraint(table, command, settings, "UNIQUE")

    def _constraint(self, table: Table, command: Command, settings: CompilerSettings, key_type: str) -> str:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"ADD CONSTRAINT {self.quoter.name(command.name)} "
            f"{key_type} ({self.quoter.columnize(command.columns)})"
        )

    def compile_drop_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_constraint(table, command, settings)

    def compile_drop_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_constraint(table, command, settings)

    def _drop_constraint(self, table: Table, command: Command, settings: CompilerSettings) -> str:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"DROP CONSTRAINT {self.quoter.name(command.name)}"
        )

    def compile_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"CREATE INDEX {self.quoter.name(command.name)} "
            f"ON {self.wrap_table(table.name, settings)} "
            f"({self.quoter.columnize(command.columns)})"
        )

    def compile_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        document = " || ' ' || ".join(self.quoter.name(c) for c in command.columns)
        language = quote_literal(POSTGRES_FULLTEXT_LANGUAGE)
        return (
            f"CREATE INDEX {self.quoter.name(command.name)} "
            f"ON {self.wrap_table(table.name, settings)} "
            f"USING gin(to_tsvector({language}, {document}))"
        )

    def compile_drop_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return f"DROP INDEX {self.quoter.name(command.name)}"

    def compile_drop_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return f"DROP INDEX {self.quoter.name(command.name)}"


def create_grammar() -> Grammar:
    """Assemble the PostgreSQL grammar."""
    quoter = Quoter('"', '"', POSTGRESQL_RESERVED_WORDS)
    type_mapper = TypeMapper(Dialect.POSTGRESQL, POSTGRESQL_TYPES)
    columns = ColumnClauseBuilder(quoter, type_mapper, POSTGRESQL_MODIFIERS)
    return Grammar(
        dialect=Dialect.POSTGRESQL,
        type_mapper=type_mapper,
        quoter=quoter,
        column_builder=columns,
        compiler=PostgreSQLCompiler(Dialect.POSTGRESQL, quoter, columns),
    )
