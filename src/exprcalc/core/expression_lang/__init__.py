"""
exprcalc expression language.

Tokenizer, parser and evaluator for arithmetic expressions with
+ - * /, parentheses, unary minus, pow(x, y) and the functions
cos, acos, sin, asin, tan, atan, sqrt.

Usage:
    from exprcalc.core.expression_lang import calculate, parse_expr, evaluate

    expr = parse_expr("2 + 3 * 4")
    result = evaluate(expr)
    # result == 14.0

    calculate("pow(2, 10)")
    # 1024.0
"""

from __future__ import annotations

import logging

from exprcalc.core.errors import ExprCalcError
from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import ExpressionParseError, parse, parse_expr
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


def calculate(source: str) -> float:
    """Tokenize, parse and evaluate one expression.

    Raises:
        LexError: If the text contains an invalid character, unknown name or
            malformed number.
        ParseError: If the tokens do not form one expression.
        EvaluationError: On division by zero or an invalid operation.
    """
    tokens = tokenize(source)
    logger.debug("Tokenized %r into %d tokens", source, len(tokens))

    try:
        expr = parse(tokens, end_pos=len(source))
    except ExprCalcError as e:
        e.with_source(source)
        raise
    logger.debug("Parsed expression tree: %s", expr)

    result = evaluate(expr)
    logger.debug("Evaluated %s = %r", expr, result)
    return result


__all__ = [
    "ExpressionParseError",
    "Token",
    "TokenKind",
    "calculate",
    "evaluate",
    "parse",
    "parse_expr",
    "tokenize",
]
