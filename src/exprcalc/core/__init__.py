"""Core exprcalc functionality: IR, tokenizer, parser, evaluator, configuration."""

from . import ir
from .config import CalcConfig, load_config
from .errors import (
    ConfigError,
    DivisionByZeroError,
    ErrorContext,
    EvaluationError,
    ExprCalcError,
    InvalidCharacterError,
    InvalidOperationError,
    LexError,
    MalformedNumberError,
    ParseError,
    UnknownIdentifierError,
)

__all__ = [
    "ir",
    "CalcConfig",
    "load_config",
    "ExprCalcError",
    "ErrorContext",
    "LexError",
    "InvalidCharacterError",
    "UnknownIdentifierError",
    "MalformedNumberError",
    "ParseError",
    "EvaluationError",
    "DivisionByZeroError",
    "InvalidOperationError",
    "ConfigError",
]
