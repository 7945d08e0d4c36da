"""
Schema compilation errors.

Every failure the compiler can report derives from SchemaCompileError, so a
caller compiling a batch can catch one type, record it and move on to the
next command.
"""

from typing import Optional


class SchemaCompileError(ValueError):
    """Base class for errors raised while compiling a schema command."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        kind: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.table = table
        self.kind = kind

    def with_context(self, table: Optional[str] = None, kind: Optional[str] = None):
        """Fill in the table/command context if it is not already set."""
        if self.table is None:
            self.table = table
        if self.kind is None:
            self.kind = kind
        return self

    def __str__(self) -> str:
        location = []
        if self.table:
            location.append(f"table '{self.table}'")
        if self.kind:
            location.append(f"command '{self.kind}'")
        if location:
            return f"{self.message} ({', '.join(location)})"
        return self.message


class UnsupportedTypeError(SchemaCompileError):
    """The active dialect has no mapping for a logical column type."""


class UnknownColumnError(SchemaCompileError):
    """A command references a column the table does not declare."""


class MissingIdentifierError(SchemaCompileError):
    """A constraint or index command lacks a required name."""


class IncompleteForeignKeyError(SchemaCompileError):
    """A foreign key command is missing its target table or columns."""


class InvalidReferentialActionError(IncompleteForeignKeyError):
    """ON DELETE / ON UPDATE action is not one of the standard actions."""


class IdentifierInjectionError(SchemaCompileError):
    """An identifier cannot be quoted safely for the active dialect."""


class UnsupportedCommandError(SchemaCompileError):
    """The active dialect cannot express the requested structural change."""


class DuplicateColumnError(SchemaCompileError):
    """A table declares the same column name twice."""


class InvalidColumnError(SchemaCompileError):
    """A column combines flags that cannot go together."""


class UnknownDialectError(SchemaCompileError):
    """No grammar is registered under the requested dialect name."""


class ConfigError(ValueError):
    """Settings or migration files are malformed."""
