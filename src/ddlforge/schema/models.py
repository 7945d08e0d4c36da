"""
Schema Models - Immutable descriptions of tables, columns and commands

These are the only inputs the compiler reads. They are frozen dataclasses so a
Table can be shared between threads and compiled any number of times with the
same result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union

from ..constants import DIALECT_ALIASES
from .errors import (
    DuplicateColumnError,
    InvalidColumnError,
    SchemaCompileError,
    UnknownDialectError,
)


class LogicalType(str, Enum):
    """Dialect-independent column types."""
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BLOB = "blob"


class CommandKind(str, Enum):
    """Structural changes the compiler knows how to express."""
    CREATE = "create"
    ADD = "add"
    DROP = "drop"
    DROP_COLUMN = "drop_column"
    RENAME = "rename"
    PRIMARY = "primary"
    DROP_PRIMARY = "drop_primary"
    UNIQUE = "unique"
    DROP_UNIQUE = "drop_unique"
    INDEX = "index"
    DROP_INDEX = "drop_index"
    FULLTEXT = "fulltext"
    DROP_FULLTEXT = "drop_fulltext"
    FOREIGN = "foreign"
    DROP_FOREIGN = "drop_foreign"


# Kinds that create or drop a named constraint/index
NAMED_KINDS = frozenset({
    CommandKind.PRIMARY,
    CommandKind.DROP_PRIMARY,
    CommandKind.UNIQUE,
    CommandKind.DROP_UNIQUE,
    CommandKind.INDEX,
    CommandKind.DROP_INDEX,
    CommandKind.FULLTEXT,
    CommandKind.DROP_FULLTEXT,
    CommandKind.FOREIGN,
    CommandKind.DROP_FOREIGN,
})

# Kinds whose column list must resolve against the table's declared columns
COLUMN_KINDS = frozenset({
    CommandKind.ADD,
    CommandKind.PRIMARY,
    CommandKind.UNIQUE,
    CommandKind.INDEX,
    CommandKind.FULLTEXT,
    CommandKind.FOREIGN,
})


class Dialect(str, Enum):
    """SQL dialects with a registered grammar."""
    SQLSERVER = "sqlserver"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_name(cls, name: Union[str, "Dialect"]) -> "Dialect":
        """Resolve a dialect name or alias (case-insensitive)."""
        if isinstance(name, Dialect):
            return name
        key = str(name).strip().lower()
        key = DIALECT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownDialectError(f"Unknown SQL dialect: {name!r}") from None


class _NoDefault:
    """Marker for a column without a DEFAULT clause."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __reduce__(self):
        return (_NoDefault, ())


NO_DEFAULT = _NoDefault()


@dataclass(frozen=True)
class RawDefault:
    """A trusted SQL expression emitted verbatim as a column default."""
    sql: str


@dataclass(frozen=True)
class Column:
    """
    One column of a table.

    `type` is normally a LogicalType; any other value is kept as given so the
    type mapper can report it as unsupported for the column being compiled.
    `default` is NO_DEFAULT when the column has no DEFAULT clause; None means
    an explicit DEFAULT NULL.
    """
    name: str
    type: Union[LogicalType, str]
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    nullable: bool = False
    unsigned: bool = False
    auto_increment: bool = False
    default: Any = NO_DEFAULT

    def __post_init__(self):
        if not self.name:
            raise InvalidColumnError("Column name cannot be empty")

        if not isinstance(self.type, LogicalType):
            try:
                object.__setattr__(self, "type", LogicalType(str(self.type).lower()))
            except ValueError:
                pass  # reported by the type mapper

        for attr in ("length", "precision", "scale"):
            value = getattr(self, attr)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise InvalidColumnError(
                    f"Column '{self.name}': {attr} must be an integer, got {value!r}"
                )

        if self.auto_increment and self.type is not LogicalType.INTEGER:
            raise InvalidColumnError(
                f"Column '{self.name}' is auto-incrementing but not an integer"
            )

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class Command:
    """
    One structural change to a table.

    Column-bearing commands list column names of the owning table; the
    compiler resolves them at compile time.
    """
    kind: CommandKind
    name: Optional[str] = None
    columns: Tuple[str, ...] = ()
    on: Optional[str] = None
    references: Tuple[str, ...] = ()
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    catalog: Optional[str] = None
    key: Optional[str] = None
    to: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.kind, CommandKind):
            try:
                object.__setattr__(self, "kind", CommandKind(str(self.kind).lower()))
            except ValueError:
                raise SchemaCompileError(f"Unknown command kind: {self.kind!r}") from None

        object.__setattr__(self, "columns", _as_names(self.columns))
        object.__setattr__(self, "references", _as_names(self.references))


@dataclass(frozen=True)
class Table:
    """
    A table description: its columns plus the commands to apply to it.

    `engine` is only rendered by dialects with pluggable storage engines.
    """
    name: str
    columns: Tuple[Column, ...] = ()
    commands: Tuple[Command, ...] = ()
    engine: Optional[str] = None
    _index: dict = field(default=None, init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "commands", tuple(self.commands))

        index = {}
        for column in self.columns:
            if column.name in index:
                raise DuplicateColumnError(
                    f"Column '{column.name}' is declared more than once",
                    table=self.name
                )
            index[column.name] = column
        object.__setattr__(self, "_index", index)

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def column(self, name: str) -> Optional[Column]:
        """Get a column by name, or None."""
        return self._index.get(name)

    def has_column(self, name: str) -> bool:
        return name in self._index


def _as_names(value) -> Tuple[str, ...]:
    """Normalize a single name or a sequence of names to a tuple."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)
