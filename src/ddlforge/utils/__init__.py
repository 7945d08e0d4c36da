"""Utility helpers for DDLForge."""

from .sql_formatter import format_statement, render_script

__all__ = ["format_statement", "render_script"]
