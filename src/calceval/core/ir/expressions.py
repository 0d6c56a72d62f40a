"""
Expression tree types for calceval.

The tree is a closed union of three frozen node types:

- Literal: a numeric constant
- UnaryExpr: a sign applied to an operand (+x, -x)
- BinaryExpr: an arithmetic operation (+, -, *, /, %)

``str(expr)`` renders a node back to source text that re-parses to an
equivalent tree. Parentheses are inserted only where precedence requires them.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class Precedence(IntEnum):
    """Binding classes, tightest first.

    Only used to decide where rendering needs parentheses.
    """

    PRIMARY = 0
    UNARY = 1
    MULTIPLICATIVE = 2
    ADDITIVE = 3


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class UnaryOp(StrEnum):
    """Unary sign operators."""

    PLUS = "+"
    MINUS = "-"


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"

    @property
    def precedence(self) -> Precedence:
        if self in (BinaryOp.ADD, BinaryOp.SUB):
            return Precedence.ADDITIVE
        return Precedence.MULTIPLICATIVE


# ---------------------------------------------------------------------------
# Number formatting
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Format a float the way calceval prints numbers.

    Integral values drop the fractional part, other values use the shortest
    round-trip digits in positional notation (never an exponent), and
    non-finite values print as ``inf``, ``-inf`` and ``NaN``.

    Examples:
        34.0 -> "34", 2.5 -> "2.5", 1e-05 -> "0.00001", 1e20 -> "100000000000000000000"
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A numeric literal."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    @property
    def precedence(self) -> Precedence:
        return Precedence.PRIMARY

    def __str__(self) -> str:
        return format_number(self.value)


class UnaryExpr(BaseModel):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    @property
    def precedence(self) -> Precedence:
        return Precedence.UNARY

    def __str__(self) -> str:
        return render(self)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    @property
    def precedence(self) -> Precedence:
        return self.op.precedence

    def __str__(self) -> str:
        return render(self)


def render(expr: Expr) -> str:
    """Render an expression tree as source text.

    An operand is parenthesized when it binds more loosely than its parent.
    On the right, equal precedence is parenthesized too, so ``1 - (2 - 3)``
    keeps its grouping while ``(1 - 2) - 3`` prints as ``1 - 2 - 3``.
    """
    # Post-order walk: rendered operands are pushed onto ``parts`` and each
    # operator node pops its own
    parts: list[str] = []
    stack: list[tuple[Expr, bool]] = [(expr, False)]

    while stack:
        node, operands_done = stack.pop()

        if isinstance(node, Literal):
            parts.append(format_number(node.value))
        elif not operands_done:
            stack.append((node, True))
            if isinstance(node, UnaryExpr):
                stack.append((node.operand, False))
            else:
                stack.append((node.right, False))
                stack.append((node.left, False))
        elif isinstance(node, UnaryExpr):
            operand = _wrap(parts.pop(), node.operand.precedence > node.precedence)
            parts.append(f"{node.op.value}{operand}")
        else:
            right = _wrap(parts.pop(), node.right.precedence >= node.precedence)
            left = _wrap(parts.pop(), node.left.precedence > node.precedence)
            parts.append(f"{left} {node.op.value} {right}")

    return parts[0]


def _wrap(text: str, parenthesize: bool) -> str:
    return f"({text})" if parenthesize else text


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | UnaryExpr | BinaryExpr

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
