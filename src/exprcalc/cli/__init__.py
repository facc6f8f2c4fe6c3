"""
exprcalc CLI Package.

- calc.py: the expression command
- utils.py: version display, logging setup, result formatting
"""

import typer

from exprcalc.cli.calc import calc_command
from exprcalc.cli.utils import format_result, version_callback

app = typer.Typer(
    help="Evaluate arithmetic expressions: + - * /, parentheses, pow(x, y), "
    "cos, acos, sin, asin, tan, atan, sqrt.",
    add_completion=False,
)
app.command(name="calc")(calc_command)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = [
    "app",
    "main",
    "calc_command",
    "format_result",
    "version_callback",
]
