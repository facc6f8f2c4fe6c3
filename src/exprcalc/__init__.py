"""
exprcalc - arithmetic expression calculator.

Evaluates expressions such as ``1 + (2 * 3 - 10.5) / sin(0.5)`` through a
tokenizer, a recursive-descent parser and a tree evaluator.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    DivisionByZeroError,
    EvaluationError,
    ExprCalcError,
    InvalidCharacterError,
    InvalidOperationError,
    LexError,
    MalformedNumberError,
    ParseError,
    UnknownIdentifierError,
)
from .core.expression_lang import calculate, evaluate, parse, parse_expr, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "calculate",
    "evaluate",
    "parse",
    "parse_expr",
    "tokenize",
    "ExprCalcError",
    "LexError",
    "InvalidCharacterError",
    "UnknownIdentifierError",
    "MalformedNumberError",
    "ParseError",
    "EvaluationError",
    "DivisionByZeroError",
    "InvalidOperationError",
]
