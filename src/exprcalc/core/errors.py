"""
Error types for exprcalc tokenizing, parsing, evaluation and configuration.
"""

from dataclasses import dataclass
from typing import Optional


class ExprCalcError(Exception):
    """Base exception for all exprcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self.message)

    @property
    def pos(self) -> int | None:
        """0-based offset of the offending text, if known."""
        if self.context is None:
            return None
        return self.context.column - 1

    def format(self) -> str:
        """Format the message with a caret snippet when a location is known."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message

    def with_source(self, source: str) -> "ExprCalcError":
        """Attach the expression text to an error raised from tokens alone."""
        if self.context is not None and self.context.source is None:
            self.context.source = source
        return self


class LexError(ExprCalcError):
    """
    Raised when the expression text cannot be tokenized.

    Examples:
    - Characters outside the expression alphabet
    - Unknown function names
    - Numerals with more than one decimal point
    """

    pass


class InvalidCharacterError(LexError):
    """A character that cannot start any token."""

    def __init__(self, char: str, context: Optional["ErrorContext"] = None):
        self.char = char
        super().__init__(f"Invalid character: {char!r}", context)


class UnknownIdentifierError(LexError):
    """A lowercase word that is not a known function name."""

    def __init__(self, identifier: str, context: Optional["ErrorContext"] = None):
        self.identifier = identifier
        super().__init__(f"Unknown identifier: {identifier!r}", context)


class MalformedNumberError(LexError):
    """A run of digits and dots that is not a valid float."""

    def __init__(self, text: str, context: Optional["ErrorContext"] = None):
        self.text = text
        super().__init__(f"Malformed number: {text!r}", context)


class ParseError(ExprCalcError):
    """
    Raised when the token stream does not match the grammar.

    Examples:
    - Missing operand or premature end of input
    - Unmatched parenthesis
    - Missing comma in a two-argument call
    - Trailing tokens after a complete expression
    """

    pass


class EvaluationError(ExprCalcError):
    """Raised when a well-formed tree cannot be evaluated."""

    pass


class DivisionByZeroError(EvaluationError):
    def __init__(self) -> None:
        super().__init__("Division by zero")


class InvalidOperationError(EvaluationError):
    """An operator or node kind outside the closed expression vocabulary."""

    pass


class ConfigError(ExprCalcError):
    """Raised when exprcalc.toml cannot be read."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        column: Column number (1-indexed)
        source: The full expression text, when available
    """

    column: int
    source: str | None = None

    def format(self) -> str:
        """
        Format the location as a caret snippet, or a bare column.

        Returns:
            Two lines like:
                1 # 2
                  ^
            or "at column 3" without source text.
        """
        if self.source is None:
            return f"at column {self.column}"
        marker_pos = min(max(self.column - 1, 0), len(self.source))
        return f"  {self.source}\n  {' ' * marker_pos}^"


def make_context(pos: int, source: str | None = None) -> ErrorContext:
    """
    Helper to build an ErrorContext from a 0-based offset.

    Args:
        pos: 0-based character offset
        source: Optional expression text for the snippet

    Returns:
        ErrorContext for the offset
    """
    return ErrorContext(column=pos + 1, source=source)
