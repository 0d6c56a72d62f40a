"""
Bytecode instruction types for the calceval stack machine.

A compiled expression is a flat ``list[Instruction]`` in post-order: operands
are pushed before the instruction that consumes them.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calceval.core.ir.expressions import format_number


class OpCode(StrEnum):
    """Stack machine operations."""

    PUSH_CONST = "push_const"
    NEGATE = "negate"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"

    @property
    def arity(self) -> int:
        """Number of stack values the operation pops."""
        if self == OpCode.PUSH_CONST:
            return 0
        if self == OpCode.NEGATE:
            return 1
        return 2


class Instruction(BaseModel):
    """
    A single bytecode instruction.

    Only PUSH_CONST carries an operand.

    Examples:
        - Instruction.push(4) -> push_const 4
        - Instruction(op=OpCode.ADD) -> add
    """

    op: OpCode
    operand: float | None = Field(default=None, description="Constant for push_const")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_operand(self) -> Instruction:
        if self.op == OpCode.PUSH_CONST and self.operand is None:
            raise ValueError("push_const requires an operand")
        if self.op != OpCode.PUSH_CONST and self.operand is not None:
            raise ValueError(f"{self.op} takes no operand")
        return self

    @classmethod
    def push(cls, value: float) -> Instruction:
        return cls(op=OpCode.PUSH_CONST, operand=value)

    def __str__(self) -> str:
        if self.operand is None:
            return self.op.value
        return f"{self.op.value} {format_number(self.operand)}"


def format_listing(instructions: Iterable[Instruction]) -> str:
    """Render instructions one per line with their index."""
    return "\n".join(f"{i:4d}  {ins}" for i, ins in enumerate(instructions))
