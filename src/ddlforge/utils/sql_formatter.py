"""
SQL Formatter - Render compiled statements as an executable script

Statements are terminated (`;` by default) and optionally pretty-printed with
sqlparse. SQL Server scripts can be split into `GO` batches.
"""

from typing import Iterable, Optional

import sqlparse

from ..config import DEFAULT_SETTINGS, CompilerSettings

import logging
logger = logging.getLogger(__name__)


def format_statement(sql_text: str, keyword_case: str = "upper", indent_width: int = 4) -> str:
    """
    Pretty-print one statement.

    Args:
        sql_text: SQL statement
        keyword_case: "upper", "lower" or "capitalize"
        indent_width: Spaces per indent level

    Returns:
        Formatted SQL string
    """
    if not sql_text or not sql_text.strip():
        return sql_text

    return sqlparse.format(
        sql_text,
        reindent=True,
        keyword_case=keyword_case,
        indent_width=indent_width,
        use_space_around_operators=True,
    ).strip()


def render_script(
    statements: Iterable[str],
    settings: Optional[CompilerSettings] = None
) -> str:
    """
    Join statements into one script.

    Args:
        statements: Statements in execution order
        settings: Terminator, batch separator and formatting options

    Returns:
        Script text ending with a newline, or an empty string for no statements
    """
    settings = settings or DEFAULT_SETTINGS
    blocks = []

    for statement in statements:
        text = statement.strip()
        if settings.pretty:
            text = format_statement(text, settings.keyword_case, settings.indent_width)
        if settings.terminator and not text.endswith(settings.terminator):
            text += settings.terminator
        if settings.batch_separator:
            text += f"\n{settings.batch_separator}"
        blocks.append(text)

    if not blocks:
        return ""

    separator = "\n\n" if settings.pretty else "\n"
    return separator.join(blocks) + "\n"
