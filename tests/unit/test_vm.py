"""Tests for the calceval stack machine."""

from __future__ import annotations

import math

import pytest

from calceval.core.errors import (
    ExecutionError,
    ResidualStackError,
    StackUnderflowError,
)
from calceval.core.expression_lang.vm import execute
from calceval.core.ir.bytecode import Instruction, OpCode


def push(value: float) -> Instruction:
    return Instruction.push(value)


def op(code: OpCode) -> Instruction:
    return Instruction(op=code)


def binary(left: float, code: OpCode, right: float) -> float:
    return execute([push(left), push(right), op(code)])


class TestExecution:
    def test_single_push(self) -> None:
        assert execute([push(42)]) == 42.0

    def test_result_is_python_float(self) -> None:
        assert type(execute([push(1), push(2), op(OpCode.ADD)])) is float

    def test_negate(self) -> None:
        assert execute([push(3), op(OpCode.NEGATE)]) == -3.0

    def test_operand_order(self) -> None:
        # Top of stack is the right operand
        assert binary(7, OpCode.SUBTRACT, 2) == 5.0
        assert binary(8, OpCode.DIVIDE, 2) == 4.0
        assert binary(7, OpCode.MODULO, 4) == 3.0

    def test_arithmetic(self) -> None:
        assert binary(2, OpCode.ADD, 3) == 5.0
        assert binary(2, OpCode.MULTIPLY, 3) == 6.0

    def test_modulo_sign_follows_dividend(self) -> None:
        assert binary(-7, OpCode.MODULO, 3) == -1.0
        assert binary(7, OpCode.MODULO, -3) == 1.0
        assert binary(5.5, OpCode.MODULO, 2) == 1.5


class TestDivisionByZero:
    """Division and modulo by zero give IEEE results instead of raising."""

    def test_positive_over_zero(self) -> None:
        assert binary(1, OpCode.DIVIDE, 0) == math.inf

    def test_negative_over_zero(self) -> None:
        assert binary(-1, OpCode.DIVIDE, 0) == -math.inf

    def test_zero_over_zero(self) -> None:
        assert math.isnan(binary(0, OpCode.DIVIDE, 0))

    def test_modulo_zero(self) -> None:
        assert math.isnan(binary(1, OpCode.MODULO, 0))


class TestStackDiscipline:
    def test_operator_on_empty_stack(self) -> None:
        with pytest.raises(StackUnderflowError) as exc_info:
            execute([op(OpCode.ADD)])
        assert exc_info.value.index == 0
        assert exc_info.value.instruction == op(OpCode.ADD)

    def test_operator_with_one_operand(self) -> None:
        with pytest.raises(StackUnderflowError) as exc_info:
            execute([push(1), op(OpCode.MULTIPLY)])
        assert exc_info.value.index == 1

    def test_negate_on_empty_stack(self) -> None:
        with pytest.raises(StackUnderflowError):
            execute([op(OpCode.NEGATE)])

    def test_empty_program(self) -> None:
        with pytest.raises(StackUnderflowError) as exc_info:
            execute([])
        assert exc_info.value.index is None

    def test_residual_values(self) -> None:
        with pytest.raises(ResidualStackError) as exc_info:
            execute([push(1), push(2)])
        assert exc_info.value.depth == 2
        assert "2 residual values" in str(exc_info.value)

    def test_errors_share_base(self) -> None:
        assert issubclass(StackUnderflowError, ExecutionError)
        assert issubclass(ResidualStackError, ExecutionError)
