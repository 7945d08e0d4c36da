"""
Migration Loader - Read table descriptions from YAML files

Document layout:

    tables:
      - name: users
        engine: InnoDB            # optional
        columns:
          - {name: id, type: integer, auto_increment: true}
          - {name: email, type: string, length: 255}
          - {name: created_at, type: timestamp, default_raw: CURRENT_TIMESTAMP}
        commands:
          - create
          - {kind: unique, name: users_email_unique, columns: [email]}

A column without a `default` key has no DEFAULT clause; `default: null`
renders DEFAULT NULL; `default_raw` is emitted verbatim.
"""
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union
import logging

import yaml

from .errors import ConfigError, SchemaCompileError
from .models import NO_DEFAULT, Column, Command, RawDefault, Table

logger = logging.getLogger(__name__)

_TABLE_KEYS = {"name", "engine", "columns", "commands"}
_COLUMN_KEYS = {
    "name", "type", "length", "precision", "scale", "nullable", "unsigned",
    "auto_increment", "default", "default_raw",
}
_COMMAND_KEYS = {
    "kind", "name", "columns", "on", "references", "on_delete", "on_update",
    "catalog", "key", "to",
}


def load_tables(path: Union[str, Path]) -> List[Table]:
    """
    Load every table described in a YAML migration file.

    Raises:
        ConfigError: unreadable file, invalid YAML or malformed entries
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read migration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in migration file {path}: {e}") from e

    tables = parse_tables(document)
    logger.info(f"Loaded {len(tables)} table(s) from {path}")
    return tables


def parse_tables(document: Any) -> List[Table]:
    """
    Build Tables from an already-parsed migration document.

    Every table, column and command is checked before anything is returned,
    so one ConfigError lists all the problems in the document.
    """
    if not isinstance(document, dict) or not isinstance(document.get("tables"), list):
        raise ConfigError("Migration document must contain a 'tables' list")

    tables: List[Table] = []
    problems: List[str] = []
    for i, entry in enumerate(document["tables"]):
        table = _parse_table(entry, i, problems)
        if table is not None:
            tables.append(table)

    if len(problems) == 1:
        raise ConfigError(problems[0])
    if problems:
        listing = "\n".join(f"  - {p}" for p in problems)
        raise ConfigError(f"{len(problems)} problems in migration document:\n{listing}")
    return tables


def _parse_table(entry: Any, position: int, problems: List[str]) -> Optional[Table]:
    where = f"tables[{position}]"
    try:
        _check_mapping(entry, _TABLE_KEYS, where)
    except ConfigError as e:
        problems.append(str(e))
        return None
    if not entry.get("name"):
        problems.append(f"{where}: table requires a name")
        return None

    where = f"table '{entry['name']}'"
    reported = len(problems)
    columns = _parse_entries(entry.get("columns"), _parse_column, where, problems)
    commands = _parse_entries(entry.get("commands"), _parse_command, where, problems)
    if len(problems) > reported:
        return None

    try:
        return Table(
            name=entry["name"],
            columns=tuple(columns),
            commands=tuple(commands),
            engine=entry.get("engine"),
        )
    except SchemaCompileError as e:
        problems.append(f"{where}: {e}")
        return None


def _parse_entries(entries: Any, parse: Callable, where: str, problems: List[str]) -> list:
    parsed = []
    for entry in entries or []:
        try:
            parsed.append(parse(entry, where))
        except ConfigError as e:
            problems.append(str(e))
        except SchemaCompileError as e:
            problems.append(f"{where}: {e}")
    return parsed


def _parse_column(entry: Any, where: str) -> Column:
    _check_mapping(entry, _COLUMN_KEYS, f"{where} column")
    if not entry.get("name"):
        raise ConfigError(f"{where}: column requires a name")
    if "default" in entry and "default_raw" in entry:
        raise ConfigError(f"{where}: column '{entry.get('name')}' sets both default and default_raw")

    values: Dict[str, Any] = {k: v for k, v in entry.items() if k not in ("default", "default_raw")}
    if "type" not in values:
        raise ConfigError(f"{where}: column '{entry.get('name')}' requires a type")

    if "default_raw" in entry:
        values["default"] = RawDefault(str(entry["default_raw"]))
    else:
        values["default"] = entry.get("default", NO_DEFAULT)

    return Column(**values)


def _parse_command(entry: Any, where: str) -> Command:
    # A bare string is shorthand for a command with no attributes
    if isinstance(entry, str):
        return Command(kind=entry)

    # YAML 1.1 reads a bare `on` key as the boolean True
    if isinstance(entry, dict) and True in entry:
        entry = dict(entry)
        entry["on"] = entry.pop(True)

    _check_mapping(entry, _COMMAND_KEYS, f"{where} command")
    if "kind" not in entry:
        raise ConfigError(f"{where}: command requires a kind")
    return Command(**entry)


def _check_mapping(entry: Any, allowed: set, where: str):
    if not isinstance(entry, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(entry).__name__}")
    unknown = sorted(str(k) for k in set(entry) - allowed)
    if unknown:
        raise ConfigError(f"{where}: unknown key(s): {', '.join(unknown)}")
