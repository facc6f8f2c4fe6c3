"""
The ``exprcalc`` command.

Evaluates one expression and prints the result; maps library errors to
messages on stderr and a non-zero exit code.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exprcalc.cli.utils import configure_logging, format_result, version_callback
from exprcalc.core.config import load_config
from exprcalc.core.errors import (
    ConfigError,
    EvaluationError,
    ExprCalcError,
    LexError,
    ParseError,
)
from exprcalc.core.expression_lang import evaluate, parse, tokenize
from exprcalc.core.expression_lang.tokenizer import Token
from exprcalc.core.ir.expressions import Expr

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

EXIT_EXPRESSION_ERROR = 1
EXIT_CONFIG_ERROR = 2


def calc_command(
    expression: str = typer.Argument(
        ...,
        help="Expression to evaluate, e.g. '2 + 3 * 4'. Put '--' before expressions starting with '-'.",
    ),
    precision: int | None = typer.Option(
        None,
        "--precision",
        "-p",
        min=0,
        help="Print the result with exactly this many decimals",
    ),
    show_tokens: bool = typer.Option(
        False, "--tokens", help="Print the token table before the result"
    ),
    show_tree: bool = typer.Option(
        False, "--tree", help="Print the parsed expression tree before the result"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (default: ./exprcalc.toml if present)"
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Evaluate an arithmetic expression."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(e.format())}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from e

    configure_logging("DEBUG" if verbose else config.log_level)
    if precision is None:
        precision = config.precision

    try:
        tokens = tokenize(expression)
        if show_tokens:
            console.print(_token_table(tokens))

        expr = parse(tokens, end_pos=len(expression))
        if show_tree:
            typer.echo(_render_tree(expr))

        result = evaluate(expr)
    except ExprCalcError as e:
        e.with_source(expression)
        err_console.print(f"[red]{_error_label(e)}:[/red] {escape(e.format())}")
        raise typer.Exit(code=EXIT_EXPRESSION_ERROR) from e

    logger.debug("Result for %r: %r", expression, result)
    typer.echo(format_result(result, precision))


def _render_tree(expr: Expr) -> str:
    try:
        return str(expr)
    except RecursionError:
        raise ExprCalcError("Expression is nested too deeply to display") from None


def _error_label(error: ExprCalcError) -> str:
    if isinstance(error, LexError):
        return "Lexical error"
    if isinstance(error, ParseError):
        return "Parsing error"
    if isinstance(error, EvaluationError):
        return "Evaluation error"
    return "Error"


def _token_table(tokens: list[Token]) -> Table:
    table = Table(title="Tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind")
    table.add_column("Value")
    for tok in tokens:
        table.add_row(str(tok.pos), str(tok.kind), escape(str(tok.value)))
    return table
