"""
Recursive descent parser for the exprcalc expression language.

Grammar (precedence low to high):
    expression  → term (("+" | "-") term)*
    term        → factor (("*" | "/") factor)*
    factor      → NUMBER
                | "(" expression ")"
                | unary_fn "(" expression ")"
                | "pow" "(" expression "," expression ")"
                | "-" factor
    unary_fn    → "cos" | "acos" | "sin" | "asin" | "tan" | "atan" | "sqrt"
"""

from __future__ import annotations

from collections.abc import Sequence

from exprcalc.core.errors import ParseError, make_context
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from exprcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)


class ExpressionParseError(ParseError):
    """Error during expression parsing."""

    def __init__(self, message: str, pos: int) -> None:
        super().__init__(message, make_context(pos))


_UNARY_FUNCTIONS: dict[TokenKind, UnaryOp] = {
    TokenKind.COS: UnaryOp.COS,
    TokenKind.ACOS: UnaryOp.ACOS,
    TokenKind.SIN: UnaryOp.SIN,
    TokenKind.ASIN: UnaryOp.ASIN,
    TokenKind.TAN: UnaryOp.TAN,
    TokenKind.ATAN: UnaryOp.ATAN,
    TokenKind.SQRT: UnaryOp.SQRT,
}

_BINARY_FUNCTIONS: dict[TokenKind, BinaryOp] = {
    TokenKind.POW: BinaryOp.POW,
}

_ADDITIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class _Parser:
    """Recursive descent parser over a token sequence."""

    def __init__(self, tokens: Sequence[Token], end_pos: int) -> None:
        self.tokens = tokens
        self.pos = 0
        self.end_pos = end_pos

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token | None:
        tok = self.current
        if tok is not None:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, message: str) -> Token:
        tok = self.current
        if tok is None or tok.kind != kind:
            raise ExpressionParseError(message, self._error_pos(tok))
        self.pos += 1
        return tok

    def _error_pos(self, tok: Token | None) -> int:
        return self.end_pos if tok is None else tok.pos

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while self.current is not None and self.current.kind in _ADDITIVE_OPS:
            op = _ADDITIVE_OPS[self.current.kind]
            self.advance()
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while self.current is not None and self.current.kind in _MULTIPLICATIVE_OPS:
            op = _MULTIPLICATIVE_OPS[self.current.kind]
            self.advance()
            right = self.parse_factor()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """NUMBER | '(' expression ')' | fn call | '-' factor"""
        tok = self.advance()

        if tok is None:
            raise ExpressionParseError("Unexpected end of input", self.end_pos)

        if tok.kind == TokenKind.NUMBER:
            assert isinstance(tok.value, float)
            return Literal(value=tok.value)

        if tok.kind == TokenKind.MINUS:
            operand = self.parse_factor()
            return UnaryExpr(op=UnaryOp.NEG, operand=operand)

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            expr = self.parse_expression()
            self.expect(TokenKind.RPAREN, "Expected right parenthesis")
            return expr

        if tok.kind in _UNARY_FUNCTIONS:
            return self._parse_unary_call(tok, _UNARY_FUNCTIONS[tok.kind])

        if tok.kind in _BINARY_FUNCTIONS:
            return self._parse_binary_call(tok, _BINARY_FUNCTIONS[tok.kind])

        raise ExpressionParseError(
            f"Unexpected token: {tok.kind} ({tok.value!r})",
            tok.pos,
        )

    def _parse_unary_call(self, name_tok: Token, op: UnaryOp) -> UnaryExpr:
        """fn '(' expression ')'"""
        self.expect(TokenKind.LPAREN, f"Expected left parenthesis after {name_tok.value!r}")
        operand = self.parse_expression()
        self.expect(TokenKind.RPAREN, "Expected right parenthesis")
        return UnaryExpr(op=op, operand=operand)

    def _parse_binary_call(self, name_tok: Token, op: BinaryOp) -> BinaryExpr:
        """fn '(' expression ',' expression ')'"""
        self.expect(TokenKind.LPAREN, f"Expected left parenthesis after {name_tok.value!r}")
        left = self.parse_expression()
        self.expect(TokenKind.COMMA, "Expected comma")
        right = self.parse_expression()
        self.expect(TokenKind.RPAREN, "Expected right parenthesis")
        return BinaryExpr(op=op, left=left, right=right)


def parse(tokens: Sequence[Token], end_pos: int | None = None) -> Expr:
    """Parse a token sequence into an AST.

    Args:
        tokens: Tokens produced by ``tokenize``.
        end_pos: Offset reported for end-of-input errors. Defaults to the
            end of the last token.

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the tokens do not form one expression, or
            nest deeper than the interpreter's recursion limit.
    """
    if end_pos is None:
        end_pos = tokens[-1].end if tokens else 0

    parser = _Parser(tokens, end_pos)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise ExpressionParseError("Expression is nested too deeply", 0) from None

    # Ensure all tokens consumed
    if parser.current is not None:
        raise ExpressionParseError(
            f"Unexpected token after expression: {parser.current.value!r}",
            parser.current.pos,
        )

    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "1 + sin(0.5) * 2")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the expression is invalid.
        LexError: If tokenization fails.
    """
    tokens = tokenize(source)
    try:
        return parse(tokens, end_pos=len(source))
    except ExpressionParseError as e:
        e.with_source(source)
        raise
