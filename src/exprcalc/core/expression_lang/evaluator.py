"""
Expression evaluator for the exprcalc expression language.

Pure post-order walk over the expression tree. Does NOT use Python's eval().

Out-of-domain inputs follow IEEE-754 rather than raising: acos(2), sqrt(-1)
and pow(-8, 0.5) are NaN, pow(10, 400) is inf. Division by zero is the one
arithmetic case reported as an error.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from exprcalc.core.errors import (
    DivisionByZeroError,
    EvaluationError,
    InvalidOperationError,
)
from exprcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

_FUNCTIONS: dict[UnaryOp, Callable[[float], float]] = {
    UnaryOp.COS: math.cos,
    UnaryOp.ACOS: math.acos,
    UnaryOp.SIN: math.sin,
    UnaryOp.ASIN: math.asin,
    UnaryOp.TAN: math.tan,
    UnaryOp.ATAN: math.atan,
    UnaryOp.SQRT: math.sqrt,
}


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a float.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value. May be NaN or infinite.

    Raises:
        DivisionByZeroError: If a divisor evaluates to zero.
        InvalidOperationError: If the tree holds a node or operator outside
            the expression vocabulary.
        EvaluationError: If the tree is nested deeper than the recursion limit.
    """
    try:
        return _interpret(expr)
    except RecursionError:
        raise EvaluationError("Expression is nested too deeply") from None


def _interpret(expr: Expr) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr)

    if isinstance(expr, UnaryExpr):
        return _interpret_unary(expr)

    raise InvalidOperationError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr) -> float:
    """Evaluate a binary expression, left operand first.

    Left-associative chains (``1 + 2 + ... + n``) are as deep as they are
    long, so the left spine is walked iteratively and folded back up.
    """
    spine: list[BinaryExpr] = []
    node: Expr = expr
    while isinstance(node, BinaryExpr):
        spine.append(node)
        node = node.left

    acc = _interpret(node)
    for parent in reversed(spine):
        acc = _apply_binary(parent.op, acc, _interpret(parent.right))
    return acc


def _apply_binary(op: BinaryOp, left: float, right: float) -> float:
    if op == BinaryOp.ADD:
        return left + right
    if op == BinaryOp.SUB:
        return left - right
    if op == BinaryOp.MUL:
        return left * right
    if op == BinaryOp.DIV:
        if right == 0.0:
            raise DivisionByZeroError()
        return left / right
    if op == BinaryOp.POW:
        return _pow(left, right)

    raise InvalidOperationError(f"Unknown binary op: {op}")


def _interpret_unary(expr: UnaryExpr) -> float:
    """Evaluate a unary expression."""
    # Runs of negation (- - - x) are counted, not recursed
    negations = 0
    node: Expr = expr
    while isinstance(node, UnaryExpr) and node.op == UnaryOp.NEG:
        negations += 1
        node = node.operand
    if negations:
        val = _interpret(node)
        return -val if negations % 2 else val

    val = _interpret(expr.operand)
    func = _FUNCTIONS.get(expr.op)
    if func is None:
        raise InvalidOperationError(f"Unknown unary op: {expr.op}")
    try:
        return func(val)
    except ValueError:
        # acos/asin outside [-1, 1], sqrt of a negative, trig of an infinity
        return math.nan


def _pow(base: float, exponent: float) -> float:
    """IEEE-754 pow: NaN on domain errors, signed infinity on overflow."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0.0:
            # pow(+-0, negative): pole, sign kept only for odd integer exponents
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and value % 2 == 1
