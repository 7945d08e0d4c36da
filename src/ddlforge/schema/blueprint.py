"""
Blueprint - Fluent builder for table descriptions

Usage:
    users = Blueprint("users")
    users.create()
    users.increments("id")
    users.string("email", 255)
    users.boolean("active").default(True)
    users.unique("email")
    table = users.build()

Index and key commands get a generated name (`users_email_unique`) when none
is given. A blueprint with columns but no `create` command gets an implicit
`add` command so the columns are added to the existing table.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from ..constants import (
    DEFAULT_DECIMAL_PRECISION,
    DEFAULT_DECIMAL_SCALE,
    DEFAULT_STRING_LENGTH,
)
from .models import NO_DEFAULT, Column, Command, CommandKind, LogicalType, Table

Names = Union[str, Sequence[str]]


@dataclass
class ColumnDefinition:
    """Mutable column under construction; chain modifiers on it."""
    name: str
    type: LogicalType
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_nullable: bool = False
    is_unsigned: bool = False
    auto_increment: bool = False
    default_value: Any = NO_DEFAULT

    def nullable(self, value: bool = True) -> "ColumnDefinition":
        self.is_nullable = value
        return self

    def unsigned(self, value: bool = True) -> "ColumnDefinition":
        self.is_unsigned = value
        return self

    def default(self, value: Any) -> "ColumnDefinition":
        self.default_value = value
        return self

    def to_column(self) -> Column:
        return Column(
            name=self.name,
            type=self.type,
            length=self.length,
            precision=self.precision,
            scale=self.scale,
            nullable=self.is_nullable,
            unsigned=self.is_unsigned,
            auto_increment=self.auto_increment,
            default=self.default_value,
        )


@dataclass
class CommandDefinition:
    """Mutable command under construction; foreign keys chain on it."""
    kind: CommandKind
    name: Optional[str] = None
    columns: List[str] = field(default_factory=list)
    on_table: Optional[str] = None
    referenced: List[str] = field(default_factory=list)
    delete_action: Optional[str] = None
    update_action: Optional[str] = None
    catalog: Optional[str] = None
    key: Optional[str] = None
    to: Optional[str] = None

    def references(self, columns: Names) -> "CommandDefinition":
        self.referenced = _names(columns)
        return self

    def on(self, table: str) -> "CommandDefinition":
        self.on_table = table
        return self

    def on_delete(self, action: str) -> "CommandDefinition":
        self.delete_action = action
        return self

    def on_update(self, action: str) -> "CommandDefinition":
        self.update_action = action
        return self

    def to_command(self) -> Command:
        return Command(
            kind=self.kind,
            name=self.name,
            columns=tuple(self.columns),
            on=self.on_table,
            references=tuple(self.referenced),
            on_delete=self.delete_action,
            on_update=self.update_action,
            catalog=self.catalog,
            key=self.key,
            to=self.to,
        )


class Blueprint:
    """Collects columns and commands for one table."""

    def __init__(self, name: str, engine: Optional[str] = None):
        self.name = name
        self.engine = engine
        self.columns: List[ColumnDefinition] = []
        self.commands: List[CommandDefinition] = []

    # ==================== Table Commands ====================

    def create(self) -> CommandDefinition:
        return self._command(CommandKind.CREATE)

    def drop(self) -> CommandDefinition:
        return self._command(CommandKind.DROP)

    def rename(self, to: str) -> CommandDefinition:
        return self._command(CommandKind.RENAME, to=to)

    def drop_column(self, columns: Names) -> CommandDefinition:
        return self._command(CommandKind.DROP_COLUMN, columns=_names(columns))

    # ==================== Keys and Indexes ====================

    def primary(self, columns: Names, name: Optional[str] = None) -> CommandDefinition:
        return self._key(CommandKind.PRIMARY, columns, name)

    def unique(self, columns: Names, name: Optional[str] = None) -> CommandDefinition:
        return self._key(CommandKind.UNIQUE, columns, name)

    def index(self, columns: Names, name: Optional[str] = None) -> CommandDefinition:
        return self._key(CommandKind.INDEX, columns, name)

    def fulltext(
        self,
        columns: Names,
        name: Optional[str] = None,
        catalog: Optional[str] = None,
        key: Optional[str] = None
    ) -> CommandDefinition:
        command = self._key(CommandKind.FULLTEXT, columns, name)
        command.catalog = catalog or f"{self.name}_catalog"
        command.key = key
        return command

    def foreign(self, columns: Names, name: Optional[str] = None) -> CommandDefinition:
        return self._key(CommandKind.FOREIGN, columns, name)

    def _key(self, kind: CommandKind, columns: Names, name: Optional[str]) -> CommandDefinition:
        columns = _names(columns)
        if name is None:
            name = "_".join([self.name, *columns, kind.value]).lower()
        return self._command(kind, name=name, columns=columns)

    def drop_primary(self, name: str) -> CommandDefinition:
        return self._command(CommandKind.DROP_PRIMARY, name=name)

    def drop_unique(self, name: str) -> CommandDefinition:
        return self._command(CommandKind.DROP_UNIQUE, name=name)

    def drop_index(self, name: str) -> CommandDefinition:
        return self._command(CommandKind.DROP_INDEX, name=name)

    def drop_fulltext(self, name: str, catalog: Optional[str] = None) -> CommandDefinition:
        return self._command(
            CommandKind.DROP_FULLTEXT, name=name, catalog=catalog or f"{self.name}_catalog"
        )

    def drop_foreign(self, name: str) -> CommandDefinition:
        return self._command(CommandKind.DROP_FOREIGN, name=name)

    def _command(self, kind: CommandKind, **attributes: Any) -> CommandDefinition:
        command = CommandDefinition(kind=kind, **attributes)
        self.commands.append(command)
        return command

    # ==================== Columns ====================

    def increments(self, name: str) -> ColumnDefinition:
        return self.integer(name, increment=True)

    def integer(self, name: str, increment: bool = False) -> ColumnDefinition:
        return self._column(name, LogicalType.INTEGER, auto_increment=increment)

    def float(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.FLOAT)

    def decimal(
        self,
        name: str,
        precision: int = DEFAULT_DECIMAL_PRECISION,
        scale: int = DEFAULT_DECIMAL_SCALE
    ) -> ColumnDefinition:
        return self._column(name, LogicalType.DECIMAL, precision=precision, scale=scale)

    def string(self, name: str, length: int = DEFAULT_STRING_LENGTH) -> ColumnDefinition:
        return self._column(name, LogicalType.STRING, length=length)

    def text(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.TEXT)

    def boolean(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.BOOLEAN)

    def date(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.DATE)

    def timestamp(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.TIMESTAMP)

    def timestamps(self):
        """Add `created_at` and `updated_at` date columns."""
        self.date("created_at")
        self.date("updated_at")

    def blob(self, name: str) -> ColumnDefinition:
        return self._column(name, LogicalType.BLOB)

    def _column(self, name: str, type: LogicalType, **attributes: Any) -> ColumnDefinition:
        column = ColumnDefinition(name=name, type=type, **attributes)
        self.columns.append(column)
        return column

    # ==================== Build ====================

    def creating(self) -> bool:
        return any(c.kind is CommandKind.CREATE for c in self.commands)

    def build(self) -> Table:
        """Freeze the blueprint into a Table."""
        commands = [c.to_command() for c in self.commands]

        # Columns on an existing table are added with an implicit ALTER
        if self.columns and not self.creating():
            commands.insert(0, Command(kind=CommandKind.ADD))

        return Table(
            name=self.name,
            columns=tuple(c.to_column() for c in self.columns),
            commands=tuple(commands),
            engine=self.engine,
        )


def _names(value: Names) -> List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)
