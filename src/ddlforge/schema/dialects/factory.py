"""
Grammar Factory - Resolve a dialect selector to its grammar
"""

from typing import Dict, List, Union

from ..errors import UnknownDialectError
from ..models import Dialect
from .base import Grammar

import logging
logger = logging.getLogger(__name__)


class GrammarFactory:
    """
    Registry of grammars, one per dialect.

    Populated on module import and only read afterwards, so lookups need no
    locking.

    Usage:
        grammar = GrammarFactory.get("sqlserver")
        statements = grammar.compile(table, command, settings)
    """

    _grammars: Dict[Dialect, Grammar] = {}

    @classmethod
    def get(cls, dialect: Union[str, Dialect]) -> Grammar:
        """
        Get the grammar for a dialect name, alias or Dialect value.

        Raises:
            UnknownDialectError: no grammar registered for the dialect
        """
        resolved = Dialect.from_name(dialect)
        grammar = cls._grammars.get(resolved)
        if grammar is None:
            raise UnknownDialectError(f"No grammar registered for dialect: {resolved.value}")
        return grammar

    @classmethod
    def is_supported(cls, dialect: Union[str, Dialect]) -> bool:
        """Check if a dialect has a registered grammar."""
        try:
            return Dialect.from_name(dialect) in cls._grammars
        except UnknownDialectError:
            return False

    @classmethod
    def supported_dialects(cls) -> List[Dialect]:
        """Get list of dialects with a registered grammar."""
        return list(cls._grammars.keys())

    @classmethod
    def register(cls, grammar: Grammar):
        """
        Register a grammar under its dialect.

        Args:
            grammar: Fully assembled Grammar
        """
        cls._grammars[grammar.dialect] = grammar
        logger.debug(f"Registered grammar for: {grammar.dialect.value}")


def _register_default_grammars():
    """Register built-in grammars. Called on module import."""
    from . import mysql_dialect, postgresql_dialect, sqlite_dialect, sqlserver_dialect

    GrammarFactory.register(sqlserver_dialect.create_grammar())
    GrammarFactory.register(mysql_dialect.create_grammar())
    GrammarFactory.register(postgresql_dialect.create_grammar())
    GrammarFactory.register(sqlite_dialect.create_grammar())


# Register on module import
_register_default_grammars()
