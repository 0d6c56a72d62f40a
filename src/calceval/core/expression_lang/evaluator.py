"""
Expression evaluator for calceval.

Chains the four pipeline stages: text -> tokens -> tree -> bytecode -> value.
Pure evaluation: no I/O, no state kept between calls, safe to call from
several threads at once. Does NOT use Python's eval().
"""

from __future__ import annotations

import logging

from calceval.core.errors import EvaluationError
from calceval.core.expression_lang.compiler import emit_bytecode
from calceval.core.expression_lang.parser import parse_expr
from calceval.core.expression_lang.vm import execute
from calceval.core.ir.bytecode import Instruction

logger = logging.getLogger(__name__)


def compile_expr(source: str) -> list[Instruction]:
    """Parse an expression string and compile it to bytecode.

    Raises:
        ParseError: If the expression is invalid.
    """
    code = emit_bytecode(parse_expr(source))
    logger.debug("Compiled %r to %d instructions", source, len(code))
    return code


def evaluate(source: str) -> float:
    """Evaluate an arithmetic expression.

    Args:
        source: Expression string (e.g., "-(4-6)*5%3")

    Returns:
        The computed value. Division or modulo by zero gives inf/nan.

    Raises:
        EvaluationError: If the expression cannot be parsed or executed.
    """
    try:
        return execute(compile_expr(source))
    except EvaluationError as e:
        logger.debug("Evaluation of %r failed: %s", source, e.message)
        raise
