"""
CLI Module - Command line interface for DDLForge
"""
import argparse
import sys
from typing import List, Optional
import logging

from . import __version__
from .config import load_settings
from .logging_setup import setup_logging
from .schema import ConfigError, GrammarFactory, SchemaCompileError, compile_schema, load_tables
from .utils.sql_formatter import render_script

logger = logging.getLogger(__name__)


class CLI:
    """Command line interface handler"""

    def __init__(self):
        self.commands = {
            "compile": self.compile,
            "dialects": self.dialects,
        }

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run CLI with provided arguments; returns the process exit code."""
        parser = build_parser()
        args = parser.parse_args(argv)

        setup_logging(verbose=args.verbose, use_color=not args.no_color)

        if args.command not in self.commands:
            parser.print_help()
            return 2

        return self.commands[args.command](args)

    def compile(self, args: argparse.Namespace) -> int:
        """Compile a YAML migration file and print the script."""
        try:
            settings = load_settings(args.config).with_overrides(
                dialect=args.dialect,
                prefix=args.prefix,
                pretty=True if args.pretty else None,
            )
            if args.go:
                settings = settings.with_overrides(batch_separator="GO")

            tables = load_tables(args.file)
            result = compile_schema(tables, settings.dialect, settings)
        except (ConfigError, SchemaCompileError) as e:
            logger.error(str(e))
            return 1

        sys.stdout.write(render_script(result.statements, settings))

        for failure in result.failures:
            logger.error(
                f"{failure.table}: {failure.command.kind.value} failed: {failure.error.message}"
            )
        return 0 if result.ok else 1

    def dialects(self, args: argparse.Namespace) -> int:
        """List registered dialects."""
        for dialect in GrammarFactory.supported_dialects():
            print(dialect.value)
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddlforge",
        description="Compile table descriptions into DDL statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ddlforge compile migration.yaml                    Compile for the default dialect
  ddlforge compile migration.yaml --dialect mysql    Compile for MySQL
  ddlforge dialects                                  List supported dialects
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-color", action="store_true", help="Disable colored log output")

    subparsers = parser.add_subparsers(dest="command")

    compile_parser = subparsers.add_parser("compile", help="Compile a YAML migration file")
    compile_parser.add_argument("file", help="YAML file describing tables and commands")
    compile_parser.add_argument("-d", "--dialect", help="Target dialect (overrides config)")
    compile_parser.add_argument("-c", "--config", help="YAML settings file")
    compile_parser.add_argument("--prefix", help="Table name prefix")
    compile_parser.add_argument("--pretty", action="store_true", help="Pretty-print statements")
    compile_parser.add_argument("--go", action="store_true", help="Separate statements with GO batches")

    subparsers.add_parser("dialects", help="List supported dialects")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
