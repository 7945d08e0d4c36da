"""
Base Grammar - Building blocks shared by every SQL dialect

A grammar is the combination of four capabilities for one dialect:
- TypeMapper: logical column type -> dialect type syntax
- Quoter: identifier quoting ([brackets], `backticks`, "quotes")
- ColumnClauseBuilder: one column definition with its modifiers
- CommandCompiler: one statement list per structural command

Dialect modules assemble these into a Grammar value which the GrammarFactory
registers once at import time.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Union
import logging
import re

from ...config import CompilerSettings
from ...constants import PLAIN_IDENTIFIER_PATTERN, REFERENTIAL_ACTIONS
from ..errors import (
    IdentifierInjectionError,
    IncompleteForeignKeyError,
    InvalidReferentialActionError,
    MissingIdentifierError,
    SchemaCompileError,
    UnknownColumnError,
    UnsupportedCommandError,
    UnsupportedTypeError,
)
from ..models import (
    COLUMN_KINDS,
    NAMED_KINDS,
    Column,
    Command,
    CommandKind,
    Dialect,
    LogicalType,
    RawDefault,
    Table,
)

logger = logging.getLogger(__name__)

_PLAIN_IDENTIFIER = re.compile(PLAIN_IDENTIFIER_PATTERN)


# ==================== Type Mapping ====================

@dataclass(frozen=True)
class TypeParams:
    """Parameters a type renderer may need."""
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    auto_increment: bool = False

    @classmethod
    def from_column(cls, column: Column) -> "TypeParams":
        return cls(
            length=column.length,
            precision=column.precision,
            scale=column.scale,
            auto_increment=column.auto_increment,
        )


TypeRenderer = Callable[[TypeParams], str]


class TypeMapper:
    """
    Maps logical column types to one dialect's type syntax.

    The mapper must cover every LogicalType; a grammar with gaps cannot be
    constructed.
    """

    def __init__(self, dialect: Dialect, renderers: Mapping[LogicalType, TypeRenderer]):
        missing = [t.value for t in LogicalType if t not in renderers]
        if missing:
            raise UnsupportedTypeError(
                f"{dialect.value} type mapper has no mapping for: {', '.join(missing)}"
            )
        self.dialect = dialect
        self._renderers = MappingProxyType(dict(renderers))

    def map(
        self,
        logical_type: Union[LogicalType, str],
        params: Optional[TypeParams] = None
    ) -> str:
        """
        Render a logical type for this dialect.

        Raises:
            UnsupportedTypeError: unknown type, or parameters the type needs
                are missing
        """
        if not isinstance(logical_type, LogicalType):
            try:
                logical_type = LogicalType(str(logical_type).lower())
            except ValueError:
                pass
        renderer = self._renderers.get(logical_type)
        if renderer is None:
            shown = getattr(logical_type, "value", logical_type)
            raise UnsupportedTypeError(
                f"Type '{shown}' is not supported by {self.dialect.value}"
            )
        return renderer(params or TypeParams())

    def map_column(self, column: Column) -> str:
        try:
            return self.map(column.type, TypeParams.from_column(column))
        except UnsupportedTypeError as e:
            raise UnsupportedTypeError(f"Column '{column.name}': {e.message}") from e

    @property
    def supported_types(self) -> List[LogicalType]:
        return list(self._renderers)


def fixed(sql_type: str) -> TypeRenderer:
    """Renderer for a type with no parameters."""
    return lambda params: sql_type


def _check_integer(value: Any, what: str, minimum: int):
    # bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedTypeError(f"{what.capitalize()} must be an integer, got {value!r}")
    if value < minimum:
        raise UnsupportedTypeError(f"Invalid {what}: {value}")


def sized(template: str) -> TypeRenderer:
    """Renderer for a length-bound type, e.g. 'VARCHAR({length})'."""
    def render(params: TypeParams) -> str:
        if params.length is None:
            raise UnsupportedTypeError(f"{template.split('(')[0]} requires a length")
        _check_integer(params.length, "length", 1)
        return template.format(length=params.length)
    return render


def numeric(template: str) -> TypeRenderer:
    """Renderer for a precision/scale type, e.g. 'DECIMAL({precision}, {scale})'."""
    def render(params: TypeParams) -> str:
        if params.precision is None:
            raise UnsupportedTypeError(f"{template.split('(')[0]} requires a precision")
        _check_integer(params.precision, "precision", 1)
        scale = 0 if params.scale is None else params.scale
        _check_integer(scale, "scale", 0)
        if scale > params.precision:
            raise UnsupportedTypeError(
                f"Scale {scale} exceeds precision {params.precision}"
            )
        return template.format(precision=params.precision, scale=scale)
    return render


# ==================== Identifier Quoting ====================

@dataclass(frozen=True)
class Quoter:
    """
    Wraps identifiers in a dialect's quote characters.

    `reserved` holds the dialect's keywords in upper case; `name()` quotes
    them even though they look like plain identifiers.
    """
    quote_char: str
    quote_char_end: str
    reserved: FrozenSet[str] = frozenset()

    def quote(self, identifier: str) -> str:
        """
        Quote an identifier; dotted names are quoted segment by segment.

        Raises:
            IdentifierInjectionError: empty segment, or a segment containing
                the closing quote character
        """
        if not identifier:
            raise IdentifierInjectionError("Identifier cannot be empty")
        return ".".join(self._quote_segment(s, identifier) for s in identifier.split("."))

    def _quote_segment(self, segment: str, identifier: str) -> str:
        if not segment:
            raise IdentifierInjectionError(f"Identifier {identifier!r} has an empty part")
        if self.quote_char_end in segment:
            raise IdentifierInjectionError(
                f"Identifier {identifier!r} contains the closing quote {self.quote_char_end!r}"
            )
        return f"{self.quote_char}{segment}{self.quote_char_end}"

    def name(self, identifier: str) -> str:
        """Render a constraint/index/column name: bare if plain, quoted otherwise."""
        if self.is_plain(identifier):
            return identifier
        return self.quote(identifier)

    def is_plain(self, identifier: str) -> bool:
        """True if the identifier can be emitted without quote characters."""
        return bool(
            identifier
            and _PLAIN_IDENTIFIER.match(identifier)
            and identifier.upper() not in self.reserved
        )

    def columnize(self, names: Sequence[str]) -> str:
        return ", ".join(self.name(n) for n in names)


def quote_literal(value: str) -> str:
    """Single-quote a string literal, doubling embedded quotes."""
    return "'" + str(value).replace("'", "''") + "'"


# ==================== Column Clauses ====================

# A modifier step renders one clause of a column definition, or None when the
# column has no such clause.
ModifierStep = Callable[[Column, CompilerSettings], Optional[str]]


def unsigned_clause(column: Column, settings: CompilerSettings) -> Optional[str]:
    if column.unsigned and column.type is LogicalType.INTEGER:
        return "UNSIGNED"
    return None


def nullable_clause(column: Column, settings: CompilerSettings) -> Optional[str]:
    return "NULL" if column.nullable else "NOT NULL"


def default_clause(column: Column, settings: CompilerSettings) -> Optional[str]:
    if not column.has_default:
        return None

    value = column.default
    if value is None:
        return "DEFAULT NULL"
    if isinstance(value, RawDefault):
        return f"DEFAULT {value.sql}"
    if isinstance(value, bool):
        value = "1" if value else "0"

    if settings.escape_defaults:
        return f"DEFAULT {quote_literal(value)}"
    # Legacy behaviour: trusted input, no escaping
    return f"DEFAULT '{value}'"


def increment_clause(sql: str) -> ModifierStep:
    """Modifier step emitting `sql` for auto-incrementing integer columns."""
    def step(column: Column, settings: CompilerSettings) -> Optional[str]:
        if column.auto_increment and column.type is LogicalType.INTEGER:
            return sql
        return None
    return step


class ColumnClauseBuilder:
    """
    Builds `<name> <type> <modifiers...>` for one column.

    The modifier order is fixed per dialect by the sequence of steps.
    """

    def __init__(self, quoter: Quoter, type_mapper: TypeMapper, modifiers: Sequence[ModifierStep]):
        self.quoter = quoter
        self.type_mapper = type_mapper
        self.modifiers = tuple(modifiers)

    def build(self, table: Table, column: Column, settings: CompilerSettings) -> str:
        parts = [self.quoter.quote(column.name), self.type_mapper.map_column(column)]
        for step in self.modifiers:
            clause = step(column, settings)
            if clause is None:
                continue
            parts.append(clause)
        return " ".join(parts)


# ==================== Command Compilation ====================

Statements = Union[str, List[str]]


class CommandCompiler(ABC):
    """
    Compiles structural commands into SQL statements for one dialect.

    Every CommandKind has a `compile_<kind>` handler; the dispatch table is
    built once per compiler from those handlers. Handlers return one
    statement or a list of statements in execution order.
    """

    def __init__(self, dialect: Dialect, quoter: Quoter, columns: ColumnClauseBuilder):
        self.dialect = dialect
        self.quoter = quoter
        self.columns = columns
        self._dispatch: Dict[CommandKind, Callable[..., Statements]] = {
            kind: getattr(self, f"compile_{kind.value}") for kind in CommandKind
        }

    def compile(self, table: Table, command: Command, settings: CompilerSettings) -> List[str]:
        """
        Compile one command against its table.

        Returns:
            Statements in the order they must be executed
        """
        try:
            self._validate(table, command)
            result = self._dispatch[command.kind](table, command, settings)
        except SchemaCompileError as e:
            raise e.with_context(table.name, command.kind.value)

        statements = [result] if isinstance(result, str) else list(result)
        logger.debug(
            f"{self.dialect.value}: {command.kind.value} on {table.name} -> "
            f"{len(statements)} statement(s)"
        )
        return statements

    # ==================== Validation ====================

    def _validate(self, table: Table, command: Command):
        kind = command.kind

        if kind in NAMED_KINDS and not command.name:
            raise MissingIdentifierError(f"'{kind.value}' command requires a name")

        if kind in COLUMN_KINDS or kind is CommandKind.DROP_COLUMN:
            if kind is not CommandKind.ADD and not command.columns:
                raise MissingIdentifierError(f"'{kind.value}' command requires columns")

        # drop_column names columns already in the database, not declared ones
        if kind in COLUMN_KINDS:
            self._resolve_columns(table, command.columns)

        if kind is CommandKind.FOREIGN:
            self._validate_foreign(command)

        if kind is CommandKind.RENAME and not command.to:
            raise MissingIdentifierError("'rename' command requires a target name")

    def _resolve_columns(self, table: Table, names: Sequence[str]):
        missing = [n for n in names if not table.has_column(n)]
        if missing:
            raise UnknownColumnError(f"Unknown column(s): {', '.join(missing)}")

    def _validate_foreign(self, command: Command):
        if not command.on:
            raise IncompleteForeignKeyError("Foreign key requires a referenced table ('on')")
        if not command.references:
            raise IncompleteForeignKeyError(
                "Foreign key requires referenced columns ('references')"
            )
        if len(command.references) != len(command.columns):
            raise IncompleteForeignKeyError(
                f"Foreign key has {len(command.columns)} column(s) but "
                f"references {len(command.references)}"
            )
        for action in (command.on_delete, command.on_update):
            if action is not None and _normalize_action(action) not in REFERENTIAL_ACTIONS:
                raise InvalidReferentialActionError(f"Invalid referential action: {action!r}")

    # ==================== Helpers ====================

    def wrap_table(self, name: str, settings: CompilerSettings) -> str:
        """Quote a table name with the configured prefix applied."""
        return self.quoter.quote(f"{settings.prefix}{name}")

    def column_definitions(
        self,
        table: Table,
        settings: CompilerSettings,
        names: Sequence[str] = ()
    ) -> List[str]:
        """Column definitions for `names`, or every table column when empty."""
        columns = [table.column(n) for n in names] if names else list(table.columns)
        return [self.columns.build(table, c, settings) for c in columns]

    def unsupported(self, command: Command, reason: str) -> UnsupportedCommandError:
        return UnsupportedCommandError(
            f"{self.dialect.value} does not support '{command.kind.value}': {reason}"
        )

    # ==================== Shared Handlers ====================

    def compile_create(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        # Indexes are separate commands; only the auto-increment key is inline
        columns = ", ".join(self.column_definitions(table, settings))
        return f"CREATE TABLE {self.wrap_table(table.name, settings)} ({columns})"

    def compile_drop(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return f"DROP TABLE {self.wrap_table(table.name, settings)}"

    def compile_foreign(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        sql = (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"ADD CONSTRAINT {self.quoter.name(command.name)} "
            f"FOREIGN KEY ({self.quoter.columnize(command.columns)}) "
            f"REFERENCES {self.wrap_table(command.on, settings)} "
            f"({self.quoter.columnize(command.references)})"
        )
        if command.on_delete:
            sql += f" ON DELETE {_normalize_action(command.on_delete)}"
        if command.on_update:
            sql += f" ON UPDATE {_normalize_action(command.on_update)}"
        return sql

    def compile_drop_foreign(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        return (
            f"ALTER TABLE {self.wrap_table(table.name, settings)} "
            f"DROP CONSTRAINT {self.quoter.name(command.name)}"
        )

    # ==================== Dialect Handlers ====================

    @abstractmethod
    def compile_add(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_drop_column(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_rename(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_drop_primary(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_drop_unique(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_drop_index(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass

    @abstractmethod
    def compile_drop_fulltext(self, table: Table, command: Command, settings: CompilerSettings) -> Statements:
        pass


def _normalize_action(action: str) -> str:
    return " ".join(str(action).replace("_", " ").upper().split())


# ==================== Grammar ====================

@dataclass(frozen=True)
class Grammar:
    """Everything needed to compile commands for one dialect."""
    dialect: Dialect
    type_mapper: TypeMapper
    quoter: Quoter
    column_builder: ColumnClauseBuilder
    compiler: CommandCompiler

    def compile(self, table: Table, command: Command, settings: CompilerSettings) -> List[str]:
        return self.compiler.compile(table, command, settings)

    def quote(self, identifier: str) -> str:
        return self.quoter.quote(identifier)

    def map_type(self, logical_type: Union[LogicalType, str], params: Optional[TypeParams] = None) -> str:
        return self.type_mapper.map(logical_type, params)
