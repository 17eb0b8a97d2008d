"""
CLI Output Utilities

One confirmation line on stdout for success, one line prefixed with the
failure glyph on stderr for errors.
"""

from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.table import Table

from aviators.exceptions import AviatorsError
from aviators.logging_config import logger

OK_GLYPH = "✅"
FAIL_GLYPH = "❌"
WARN_GLYPH = "⚠️"

_console = Console(highlight=False, soft_wrap=True, emoji=False)
_err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


def echo(message: str = "") -> None:
    _console.print(message, markup=False)


def success(message: str) -> None:
    _console.print(f"{OK_GLYPH} {message}", markup=False)


def failure(message: str) -> None:
    _err_console.print(f"{FAIL_GLYPH} {message}", markup=False)


def warning(message: str) -> None:
    _err_console.print(f"{WARN_GLYPH}  {message}", markup=False)


def print_table(table: Table) -> None:
    _console.print(table)


@contextmanager
def handle_errors() -> Iterator[None]:
    """
    The single place where a typed failure becomes an exit status: print it
    and exit 1.
    """
    try:
        yield
    except AviatorsError as e:
        logger.debug(f"Command failed [{e.category}]: {e}")
        failure(str(e))
        raise typer.Exit(code=1)
