"""
Expression tree types for exprcalc.

The tree has three node kinds:
- Literal: a float value
- BinaryExpr: +, -, *, / and pow(x, y)
- UnaryExpr: negation and the one-argument functions cos, acos, sin, asin,
  tan, atan, sqrt

Operators are closed enums split by arity, so a node can only hold an
operator that makes sense for its number of operands.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Two-operand operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # Function-call syntax only: pow(x, y)
    POW = "pow"

    @property
    def is_function(self) -> bool:
        return self is BinaryOp.POW


class UnaryOp(StrEnum):
    """One-operand operators."""

    NEG = "-"
    COS = "cos"
    ACOS = "acos"
    SIN = "sin"
    ASIN = "asin"
    TAN = "tan"
    ATAN = "atan"
    SQRT = "sqrt"

    @property
    def is_function(self) -> bool:
        return self is not UnaryOp.NEG


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A numeric literal."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class BinaryExpr(BaseModel):
    """Binary operation: left op right, or pow(left, right)."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.op.is_function:
            return f"{self.op.value}({self.left}, {self.right})"
        # Render the left spine of an operator chain without recursing
        spine: list[BinaryExpr] = []
        node: Expr = self
        while isinstance(node, BinaryExpr) and not node.op.is_function:
            spine.append(node)
            node = node.left
        text = str(node)
        for parent in reversed(spine):
            text = f"({text} {parent.op.value} {parent.right})"
        return text


class UnaryExpr(BaseModel):
    """Unary operation: -operand, or fn(operand)."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.op.is_function:
            return f"{self.op.value}({self.operand})"
        negations = 0
        node: Expr = self
        while isinstance(node, UnaryExpr) and not node.op.is_function:
            negations += 1
            node = node.operand
        return "-" * negations + str(node)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | BinaryExpr | UnaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
