"""
DDLForge - Dialect-neutral schema definition compiler
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ddlforge")
except PackageNotFoundError:
    # Package not installed, fallback to the version in pyproject.toml
    __version__ = "0.3.0"  # Fallback version

__author__ = "Lestat2Lioncourt"

from .schema import (
    Blueprint,
    Column,
    Command,
    CommandKind,
    Dialect,
    LogicalType,
    NO_DEFAULT,
    RawDefault,
    Table,
    compile_batch,
    compile_command,
    compile_schema,
    compile_table,
)

__all__ = [
    "__version__",
    "Blueprint",
    "Column",
    "Command",
    "CommandKind",
    "Dialect",
    "LogicalType",
    "NO_DEFAULT",
    "RawDefault",
    "Table",
    "compile_batch",
    "compile_command",
    "compile_schema",
    "compile_table",
]
