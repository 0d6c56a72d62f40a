"""
calceval intermediate representation types.

Two layers:

- expressions: the parsed expression tree and its source rendering
- bytecode: the flat instruction list executed by the stack machine
"""

from .bytecode import (
    Instruction,
    OpCode,
    format_listing,
)
from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    Precedence,
    UnaryExpr,
    UnaryOp,
    format_number,
    render,
)

__all__ = [
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Literal",
    "Precedence",
    "UnaryExpr",
    "UnaryOp",
    "format_number",
    "render",
    # Bytecode
    "Instruction",
    "OpCode",
    "format_listing",
]
