"""
SQL Server Grammar - T-SQL schema statements
"""

from ...config import CompilerSettings
from ...constants import SQLSERVER_RESERVED_WORDS
from ..errors import MissingIdentifierError
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
    numeric,
    quote_literal,
    sized,
)

import logging
logger = logging.getLogger(__name__)


SQLSERVER_TYPES = {
    LogicalType.INTEGER: fixed("INT"),
    LogicalType.FLOAT: fixed("FLOAT"),
    LogicalType.DECIMAL: numeric("DECIMAL({precision}, {scale})"),
    LogicalType.STRING: sized("NVARCHAR({length})"),
    LogicalType.TEXT: fixed("NVARCHAR(MAX)"),
    LogicalType.BOOLEAN: fixed("TINYINT"),
    LogicalType.DATE: fixed("DATETIME"),
    LogicalType.TIMESTAMP: fixed("TIMESTAMP"),
    LogicalType.BLOB: fixed("VARBINARY(MAX)"),
}

# SQL Server has no unsigned integers; identity columns are always the key
SQLSERVER_MODIFIERS = (
    nullable_clause,
    increment_clause("IDENTITY PRIMARY KEY"),
    default_clause,
)


class SQLServerCompiler(CommandCompiler):
    """Command compiler for SQL Server."""

    def compile_add(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        definitions = self.column_definitions(table, settings, command.columns)
        columns = ", ".join(f"ADD {d}" for d in definitions)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_drop_column(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        columns = ", ".join(f"DROP {self.quoter.quote(c)}" for c in command.columns)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_rename(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        # sp_rename takes string arguments; validate both names as identifiers
        self.quoter.quote(table.name)
        self.quoter.quote(command.to)
        source = quote_literal(f"{settings.prefix}{table.name}")
        target = quote_literal(f"{settings.prefix}{command.to}")
        return f"EXEC sp_rename {source}, {target}"

    def compile_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"ADD CONSTRAINT {self.quoter.name(command.name)} "
            f"PRIMARY KEY ({self.quoter.columnize(command.columns)})"
        )

    def compile_drop_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"DROP CONSTRAINT {self.quoter.name(command.name)}"
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
        return self._drop_key(table, command, settings)

    def compile_drop_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_key(table, command, settings)

    def _drop_key(self, table: Table, command: Command, settings: CompilerSettings) -> str:
        return f"DROP INDEX {self.quoter.name(command.name)} ON {self.wrap_table(table.name, settings)}"

    def compile_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        catalog = self._catalog(command)
        if not command.key:
            raise MissingIdentifierError("Full-text index requires a unique key index ('key')")

        # The catalog must exist before an index can be placed in it
        return [
            f"CREATE FULLTEXT CATALOG {catalog}",
            f"CREATE FULLTEXT INDEX ON {self.wrap_table(table.name, settings)} "
            f"({self.quoter.columnize(command.columns)}) "
            f"KEY INDEX {self.quoter.name(command.key)} ON {catalog}",
        ]

    def compile_drop_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        catalog = self._catalog(command)

        # Reverse of creation: the catalog outlives the index it backs
        return [
            f"DROP FULLTEXT INDEX {self.quoter.name(command.name)}",
            f"DROP FULLTEXT CATALOG {catalog}",
        ]

    def _catalog(self, command: Command) -> str:
        if not command.catalog:
            raise MissingIdentifierError("Full-text command requires a catalog name")
        return self.quoter.name(command.catalog)


def create_grammar() -> Grammar:
    """Assemble the SQL Server grammar."""
    quoter = Quoter("[", "]", SQLSERVER_RESERVED_WORDS)
    type_mapper = TypeMapper(Dialect.SQLSERVER, SQLSERVER_TYPES)
    columns = ColumnClauseBuilder(quoter, type_mapper, SQLSERVER_MODIFIERS)
    return Grammar(
        dialect=Dialect.SQLSERVER,
        type_mapper=type_mapper,
        quoter=quoter,
        column_builder=columns,
        compiler=SQLServerCompiler(Dialect.SQLSERVER, quoter, columns),
    )
