"""
Configuration module for DDLForge

Settings are plain values passed into every compilation call; nothing here is
read implicitly by the compiler. Files are YAML:

    dialect: postgresql
    prefix: app_
    escape_defaults: true
    pretty: false
"""
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os

import yaml

from .constants import (
    DEFAULT_DIALECT,
    DIALECT_ENV_VAR,
    FORMAT_INDENT_WIDTH,
    FORMAT_KEYWORD_CASE,
    STATEMENT_TERMINATOR,
)
from .schema.errors import ConfigError

logger = logging.getLogger(__name__)

_KEYWORD_CASES = ("upper", "lower", "capitalize")


@dataclass(frozen=True)
class CompilerSettings:
    """Compiler and script rendering options."""
    dialect: str = DEFAULT_DIALECT
    prefix: str = ""
    escape_defaults: bool = True
    terminator: str = STATEMENT_TERMINATOR
    batch_separator: Optional[str] = None
    pretty: bool = False
    keyword_case: str = FORMAT_KEYWORD_CASE
    indent_width: int = FORMAT_INDENT_WIDTH

    def __post_init__(self):
        if self.keyword_case not in _KEYWORD_CASES:
            raise ConfigError(
                f"keyword_case must be one of {', '.join(_KEYWORD_CASES)}, "
                f"got {self.keyword_case!r}"
            )
        if self.indent_width < 0:
            raise ConfigError(f"indent_width cannot be negative: {self.indent_width}")

    def with_overrides(self, **overrides: Any) -> "CompilerSettings":
        """Copy with the given non-None values replaced."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values) if values else self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompilerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(unknown)}")
        return cls(**data)


DEFAULT_SETTINGS = CompilerSettings()


def load_settings(path: Optional[Union[str, Path]] = None) -> CompilerSettings:
    """
    Load settings from a YAML file, then apply environment overrides.

    Args:
        path: YAML file; None means defaults only

    Raises:
        ConfigError: unreadable file, invalid YAML, or unknown keys
    """
    data: Dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read settings file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in settings file {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        data.update(loaded)
        logger.debug(f"Loaded settings from {path}")

    env_dialect = os.environ.get(DIALECT_ENV_VAR)
    if env_dialect:
        data["dialect"] = env_dialect
        logger.debug(f"Dialect overridden by {DIALECT_ENV_VAR}={env_dialect}")

    return CompilerSettings.from_dict(data)
