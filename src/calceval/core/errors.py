"""
Error types for calceval tokenizing, parsing, execution and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from calceval.core.expression_lang.tokenizer import Token
    from calceval.core.ir.bytecode import Instruction


class CalcEvalError(Exception):
    """Base exception for all calceval errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class EvaluationError(CalcEvalError):
    """
    Raised when an expression cannot be evaluated.

    Every failure of ``evaluate()`` is an instance of this class.
    """

    pass


class ParseError(EvaluationError):
    """
    Raised when the token stream does not form an expression.

    Attributes:
        token: The token at which parsing failed.
    """

    def __init__(
        self,
        message: str,
        token: "Token",
        context: Optional["ErrorContext"] = None,
    ):
        self.token = token
        super().__init__(message, context)


class InvalidTokenError(ParseError):
    """
    Raised when the parser reaches an Error token.

    Examples:
    - Malformed numbers: ``1.``, ``.2``, ``0..0``
    - Unknown words: ``fish``
    """

    pass


class NoExpressionError(ParseError):
    """
    Raised when no expression can be built at a position.

    Examples:
    - Input starting with ``*`` or ``)``
    - Empty input, or input ending right after an operator
    """

    pass


class UnexpectedTokenError(ParseError):
    """Raised when a complete expression is followed by leftover tokens."""

    pass


class UnmatchedParenthesisError(ParseError):
    """Raised when an opening parenthesis has no matching closing one."""

    pass


class NestingTooDeepError(ParseError):
    """
    Raised when parentheses and unary signs nest past the parser's limit.

    The limit is ``MAX_NESTING_DEPTH`` in the parser module. Each ``(`` and
    each unary ``+``/``-`` counts as one level.
    """

    pass


class ExecutionError(EvaluationError):
    """
    Raised when the virtual machine cannot run a bytecode sequence.

    Attributes:
        index: Index of the failing instruction, or None when the failure
            was detected after the last instruction ran.
    """

    def __init__(self, message: str, index: int | None = None):
        self.index = index
        super().__init__(message)


class StackUnderflowError(ExecutionError):
    """Raised when an instruction needs an operand that is not on the stack."""

    def __init__(self, instruction: Optional["Instruction"], index: int | None = None):
        self.instruction = instruction
        if instruction is None:
            message = "Stack underflow: no result left on the stack"
        else:
            message = f"Stack underflow at instruction {index} ({instruction})"
        super().__init__(message, index)


class ResidualStackError(ExecutionError):
    """Raised when more than one value remains on the stack after execution."""

    def __init__(self, depth: int):
        self.depth = depth
        super().__init__(f"Stack had {depth} residual values after execution")


class ConfigError(CalcEvalError):
    """Raised when calceval.toml cannot be read or holds invalid values."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside the evaluated source text.

    Attributes:
        source: The full expression text
        column: Column number (1-indexed)
        length: Number of characters to underline
    """

    source: str
    column: int
    length: int = 1

    def format(self) -> str:
        """
        Format the context as the source line with a marker under the error.

        Returns:
            Formatted string like::

                column 3
                  1 fish
                    ^^^^
        """
        marker = " " * (self.column - 1) + "^" * max(self.length, 1)
        return f"column {self.column}\n  {self.source}\n  {marker}"


def make_parse_error(
    error_class: type[ParseError],
    message: str,
    token: "Token",
    source: str | None = None,
) -> ParseError:
    """
    Create a parse error, attaching source context when the text is known.

    Args:
        error_class: The ParseError subclass to instantiate
        message: Error message
        token: The token where the error occurred
        source: The expression text the token came from

    Returns:
        ParseError instance with context
    """
    context = None
    if source is not None:
        context = ErrorContext(
            source=source,
            column=token.pos + 1,
            length=len(token.source),
        )
    return error_class(message, token, context)
