"""
Logging setup for the command line - colored console output

Library modules only create loggers; handlers are installed here, by the CLI.
"""
import logging
import sys

from colorama import init, Fore, Style

# Initialize colorama for Windows compatibility
init(autoreset=True)


class ColorFormatter(logging.Formatter):
    """Formatter coloring the whole line by level."""

    COLORS = {
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED,
        logging.WARNING: Fore.YELLOW,
        logging.INFO: Fore.RESET,
        logging.DEBUG: Fore.BLUE,
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno, Fore.RESET)
        return f"{color}{message}{Style.RESET_ALL}"


def setup_logging(verbose: bool = False, use_color: bool = True) -> logging.Logger:
    """
    Configure the `ddlforge` logger for console use.

    Logs go to stderr so stdout stays a clean SQL script.
    """
    logger = logging.getLogger("ddlforge")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    fmt = "[%(levelname)-8s] %(name)s: %(message)s"
    handler.setFormatter(ColorFormatter(fmt) if use_color else logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
