"""
Schema - Table descriptions and their compilation to DDL

Usage:
    from ddlforge.schema import Blueprint, compile_table

    users = Blueprint("users")
    users.create()
    users.increments("id")
    users.string("email", 255)

    result = compile_table(users.build(), "sqlserver")
    for statement in result.statements:
        print(statement)
"""

from .errors import (
    ConfigError,
    DuplicateColumnError,
    IdentifierInjectionError,
    IncompleteForeignKeyError,
    InvalidColumnError,
    InvalidReferentialActionError,
    MissingIdentifierError,
    SchemaCompileError,
    UnknownColumnError,
    UnknownDialectError,
    UnsupportedCommandError,
    UnsupportedTypeError,
)
from .models import (
    NO_DEFAULT,
    Column,
    Command,
    CommandKind,
    Dialect,
    LogicalType,
    RawDefault,
    Table,
)
from .blueprint import Blueprint
from .compiler import (
    BatchResult,
    CompiledCommand,
    CompileFailure,
    compile_batch,
    compile_command,
    compile_schema,
    compile_table,
)
from .dialects import GrammarFactory
from .loader import load_tables, parse_tables

__all__ = [
    # Errors
    "ConfigError",
    "DuplicateColumnError",
    "IdentifierInjectionError",
    "IncompleteForeignKeyError",
    "InvalidColumnError",
    "InvalidReferentialActionError",
    "MissingIdentifierError",
    "SchemaCompileError",
    "UnknownColumnError",
    "UnknownDialectError",
    "UnsupportedCommandError",
    "UnsupportedTypeError",

    # Models
    "NO_DEFAULT",
    "Column",
    "Command",
    "CommandKind",
    "Dialect",
    "LogicalType",
    "RawDefault",
    "Table",
    "Blueprint",

    # Compilation
    "BatchResult",
    "CompiledCommand",
    "CompileFailure",
    "GrammarFactory",
    "compile_batch",
    "compile_command",
    "compile_schema",
    "compile_table",

    # Loading
    "load_tables",
    "parse_tables",
]
