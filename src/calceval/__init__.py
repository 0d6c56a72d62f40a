"""
calceval - arithmetic expression evaluator.

Evaluates expressions such as ``-(4-6)*5%3`` through a staged pipeline:
tokenizer, recursive-descent parser, bytecode emitter and stack machine.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import CalcEvalError, EvaluationError, ExecutionError, ParseError
from .core.expression_lang import compile_expr, evaluate, parse_expr

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CalcEvalError",
    "EvaluationError",
    "ExecutionError",
    "ParseError",
    "compile_expr",
    "evaluate",
    "parse_expr",
]
