"""
MySQL Grammar - MySQL/MariaDB schema statements
"""

from ...config import CompilerSettings
from ...constants import MYSQL_RESERVED_WORDS, PLAIN_IDENTIFIER_PATTERN
from ..errors import IdentifierInjectionError
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
    sized,
    unsigned_clause,
)

import logging
import re
logger = logging.getLogger(__name__)

_ENGINE_NAME = re.compile(PLAIN_IDENTIFIER_PATTERN)


MYSQL_TYPES = {
    LogicalType.INTEGER: fixed("INT"),
    LogicalType.FLOAT: fixed("FLOAT"),
    LogicalType.DECIMAL: numeric("DECIMAL({precision}, {scale})"),
    LogicalType.STRING: sized("VARCHAR({length})"),
    LogicalType.TEXT: fixed("TEXT"),
    LogicalType.BOOLEAN: fixed("TINYINT(1)"),
    LogicalType.DATE: fixed("DATETIME"),
    LogicalType.TIMESTAMP: fixed("TIMESTAMP"),
    LogicalType.BLOB: fixed("BLOB"),
}

MYSQL_MODIFIERS = (
    unsigned_clause,
    nullable_clause,
    default_clause,
    increment_clause("AUTO_INCREMENT PRIMARY KEY"),
)


class MySQLCompiler(CommandCompiler):
    """Command compiler for MySQL and MariaDB."""

    def compile_create(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        sql = super().compile_create(table, command, settings)
        if table.engine:
            # ENGINE takes a bare word; a quoted engine name is a syntax error
            if not _ENGINE_NAME.match(table.engine):
                raise IdentifierInjectionError(f"Invalid storage engine name: {table.engine!r}")
            sql += f" ENGINE = {table.engine}"
        return sql

    def compile_add(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        definitions = self.column_definitions(table, settings, command.columns)
        columns = ", ".join(f"ADD {d}" for d in definitions)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_drop_column(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        columns = ", ".join(f"DROP {self.quoter.quote(c)}" for c in command.columns)
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} {columns}"

    def compile_rename(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"RENAME TABLE {self.wrap_table(table.name, settings)} "
            f"TO {self.wrap_table(command.to, settings)}"
        )

    def compile_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"ADD CONSTRAINT {self.quoter.name(command.name)} "
            f"PRIMARY KEY ({self.quoter.columnize(command.columns)})"
        )

    def compile_drop_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        # A table has at most one primary key, MySQL does not name it
        return f"ALTER TABLE {self.wrap_table(table.name, settings)} DROP PRIMARY KEY"

    def compile_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._key(table, command, settings, "UNIQUE")

    def compile_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._key(table, command, settings, "INDEX")

    def compile_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._key(table, command, settings, "FULLTEXT")

    def _key(self, table: Table, command: Command, settings: CompilerSettings, key_type: str) -> str:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"ADD {key_type} {self.quoter.name(command.name)} "
            f"({self.quoter.columnize(command.columns)})"
        )

    def compile_drop_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_key(table, command, settings)

    def compile_drop_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_key(table, command, settings)

    def compile_drop_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return self._drop_key(table, command, settings)

    def _drop_key(self, table: Table, command: Command, settings: CompilerSettings) -> str:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"DROP INDEX {self.quoter.name(command.name)}"
        )

    def compile_drop_foreign(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"DROP FOREIGN KEY {self.quoter.name(command.name)}"
        )


def create_grammar() -> Grammar:
    """Assemble the MySQL grammar."""
    quoter = Quoter("`", "`", MYSQL_RESERVED_WORDS)
    type_mapper = TypeMapper(Dialect.MYSQL, MYSQL_TYPES)
    columns = ColumnClauseBuilder(quoter, type_mapper, MYSQL_MODIFIERS)
    return Grammar(
        dialect=Dialect.MYSQL,
        type_mapper=type_mapper,
        quoter=quoter,
        column_builder=columns,
        compiler=MySQLCompiler(Dialect.MYSQL, quoter, columns),
    )
