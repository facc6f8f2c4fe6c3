"""
exprcalc CLI Utilities.

Shared helpers for the command-line front end.
"""

import logging
import math
import platform

import typer

from exprcalc._version import get_version

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"exprcalc {get_version()}")
        typer.echo(f"Python   {python_version} ({python_impl})")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level name."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )


def format_result(value: float, precision: int | None = None) -> str:
    """Render a result for the terminal.

    Integral values print without a fractional part, NaN and infinities
    print as ``NaN``, ``inf`` and ``-inf``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if precision is not None:
        return f"{value:.{precision}f}"
    # Below 2**53 every integral float prints exactly
    if value.is_integer() and abs(value) < 2**53:
        return str(int(value))
    return repr(value)
