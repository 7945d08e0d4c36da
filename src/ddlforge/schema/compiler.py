"""
Schema Compiler - Entry points turning tables and commands into SQL

The dialect is resolved once per call and passed down explicitly. Batch
entry points compile every command independently: a failing command is
recorded and skipped, the rest still compile.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from ..config import DEFAULT_SETTINGS, CompilerSettings
from .dialects.base import Grammar
from .dialects.factory import GrammarFactory
from .errors import SchemaCompileError
from .models import Command, Dialect, Table

import logging
logger = logging.getLogger(__name__)

DialectLike = Union[str, Dialect]


@dataclass(frozen=True)
class CompiledCommand:
    """Statements produced for one command."""
    table: str
    command: Command
    statements: List[str]


@dataclass(frozen=True)
class CompileFailure:
    """A command that could not be compiled."""
    table: str
    command: Command
    error: SchemaCompileError


@dataclass
class BatchResult:
    """Outcome of compiling several commands."""
    dialect: Dialect
    compiled: List[CompiledCommand] = field(default_factory=list)
    failures: List[CompileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def statements(self) -> List[str]:
        """All successfully compiled statements, in command order."""
        return [s for c in self.compiled for s in c.statements]

    @property
    def errors(self) -> List[SchemaCompileError]:
        return [f.error for f in self.failures]

    def extend(self, other: "BatchResult"):
        self.compiled.extend(other.compiled)
        self.failures.extend(other.failures)


def compile_command(
    table: Table,
    command: Command,
    dialect: DialectLike,
    settings: Optional[CompilerSettings] = None
) -> List[str]:
    """
    Compile a single command.

    Returns:
        Statements in execution order

    Raises:
        SchemaCompileError: any subclass describing why the command failed
    """
    grammar = GrammarFactory.get(dialect)
    return grammar.compile(table, command, settings or DEFAULT_SETTINGS)


def compile_batch(
    table: Table,
    commands: Iterable[Command],
    dialect: DialectLike,
    settings: Optional[CompilerSettings] = None
) -> BatchResult:
    """Compile several commands against one table, collecting failures."""
    grammar = GrammarFactory.get(dialect)
    return _compile_commands(grammar, table, commands, settings or DEFAULT_SETTINGS)


def _compile_commands(
    grammar: Grammar,
    table: Table,
    commands: Iterable[Command],
    settings: CompilerSettings
) -> BatchResult:
    result = BatchResult(dialect=grammar.dialect)

    for command in commands:
        try:
            statements = grammar.compile(table, command, settings)
        except SchemaCompileError as e:
            logger.warning(f"Skipping {command.kind.value} on {table.name}: {e}")
            result.failures.append(CompileFailure(table.name, command, e))
            continue
        result.compiled.append(CompiledCommand(table.name, command, statements))

    return result


def compile_table(
    table: Table,
    dialect: DialectLike,
    settings: Optional[CompilerSettings] = None
) -> BatchResult:
    """Compile the commands a table carries."""
    return compile_batch(table, table.commands, dialect, settings)


def compile_schema(
    tables: Iterable[Table],
    dialect: DialectLike,
    settings: Optional[CompilerSettings] = None
) -> BatchResult:
    """Compile the commands of many tables, collecting failures across all of them."""
    grammar = GrammarFactory.get(dialect)
    settings = settings or DEFAULT_SETTINGS
    result = BatchResult(dialect=grammar.dialect)

    for table in tables:
        result.extend(_compile_commands(grammar, table, table.commands, settings))

    if result.failures:
        logger.warning(f"{len(result.failures)} command(s) failed to compile")
    return result
