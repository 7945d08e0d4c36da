"""
SQL Dialects - Per-dialect grammars for schema statements

Each dialect supplies a type mapper, an identifier quoter, a column clause
builder and a command compiler, bundled into a Grammar and registered with
the GrammarFactory.

Usage:
    from ddlforge.schema.dialects import GrammarFactory

    grammar = GrammarFactory.get("postgresql")
    statements = grammar.compile(table, command, settings)
"""

from .base import (
    ColumnClauseBuilder,
    CommandCompiler,
    Grammar,
    Quoter,
    TypeMapper,
    TypeParams,
)
from .factory import GrammarFactory

from .sqlserver_dialect import SQLServerCompiler
from .mysql_dialect import MySQLCompiler
from .postgresql_dialect import PostgreSQLCompiler
from .sqlite_dialect import SQLiteCompiler

__all__ = [
    # Building blocks
    "ColumnClauseBuilder",
    "CommandCompiler",
    "Grammar",
    "Quoter",
    "TypeMapper",
    "TypeParams",

    # Factory
    "GrammarFactory",

    # Implementations
    "SQLServerCompiler",
    "MySQLCompiler",
    "PostgreSQLCompiler",
    "SQLiteCompiler",
]
