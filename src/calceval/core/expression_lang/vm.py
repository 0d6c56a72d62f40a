"""
Stack machine for calceval bytecode.

Executes a flat instruction list against a single operand stack. The machine
knows nothing about expression trees or grammar; any instruction list can be
run, and malformed ones fail with an ExecutionError instead of producing a
truncated or padded result.

Arithmetic is IEEE-754 float64: dividing by zero yields ``inf``/``-inf``/
``nan`` rather than raising, and ``%`` is the C ``fmod`` remainder, whose
sign follows the dividend.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from calceval.core.errors import ResidualStackError, StackUnderflowError
from calceval.core.ir.bytecode import Instruction, OpCode

logger = logging.getLogger(__name__)

_BINARY_OPS: dict[OpCode, Callable[[np.float64, np.float64], np.float64]] = {
    OpCode.ADD: np.add,
    OpCode.SUBTRACT: np.subtract,
    OpCode.MULTIPLY: np.multiply,
    OpCode.DIVIDE: np.divide,
    OpCode.MODULO: np.fmod,
}


def execute(instructions: Sequence[Instruction]) -> float:
    """Run instructions on an empty stack and return the single result.

    Args:
        instructions: Bytecode, e.g. from ``emit_bytecode()``.

    Returns:
        The one value left on the stack.

    Raises:
        StackUnderflowError: An instruction found too few operands, or the
            stack was empty at the end.
        ResidualStackError: More than one value was left at the end.
    """
    stack: list[np.float64] = []

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for index, ins in enumerate(instructions):
            if len(stack) < ins.op.arity:
                raise StackUnderflowError(ins, index)

            if ins.op == OpCode.PUSH_CONST:
                stack.append(np.float64(ins.operand))
            elif ins.op == OpCode.NEGATE:
                stack.append(np.negative(stack.pop()))
            else:
                # Right operand is on top
                right = stack.pop()
                left = stack.pop()
                stack.append(_BINARY_OPS[ins.op](left, right))

    if not stack:
        raise StackUnderflowError(None)
    if len(stack) > 1:
        raise ResidualStackError(len(stack))

    result = float(stack[0])
    logger.debug("Executed %d instructions: %s", len(instructions), result)
    return result
