"""
Bytecode emitter for calceval expressions.

Linearizes an expression tree into stack-machine instructions in post-order:
a node's operands are emitted before the node's own instruction, left before
right, so the machine always finds both operands on the stack.
"""

from __future__ import annotations

from calceval.core.ir.bytecode import Instruction, OpCode
from calceval.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

_BINARY_OPCODES: dict[BinaryOp, OpCode] = {
    BinaryOp.ADD: OpCode.ADD,
    BinaryOp.SUB: OpCode.SUBTRACT,
    BinaryOp.MUL: OpCode.MULTIPLY,
    BinaryOp.DIV: OpCode.DIVIDE,
    BinaryOp.MOD: OpCode.MODULO,
}


def emit_bytecode(expr: Expr) -> list[Instruction]:
    """Compile an expression tree to a flat instruction list.

    Args:
        expr: Parsed expression AST.

    Returns:
        Instructions that leave exactly one value, the expression's result,
        on the stack.
    """
    out: list[Instruction] = []
    # Explicit stack of (node, operands_emitted): left-folded chains such as
    # 1+1+...+1 have no depth limit
    stack: list[tuple[Expr, bool]] = [(expr, False)]

    while stack:
        node, operands_emitted = stack.pop()

        if isinstance(node, Literal):
            out.append(Instruction.push(node.value))
        elif isinstance(node, UnaryExpr):
            if not operands_emitted:
                stack.append((node, True))
                stack.append((node.operand, False))
            elif node.op == UnaryOp.MINUS:
                out.append(Instruction(op=OpCode.NEGATE))
        elif isinstance(node, BinaryExpr):
            if not operands_emitted:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
            else:
                out.append(Instruction(op=_BINARY_OPCODES[node.op]))
        else:
            raise TypeError(f"Unknown expression type: {type(node).__name__}")

    return out
