"""Core calceval functionality: IR, tokenizer, parser, bytecode emitter, stack machine, configuration."""

from . import ir
from .errors import (
    CalcEvalError,
    ConfigError,
    ErrorContext,
    EvaluationError,
    ExecutionError,
    InvalidTokenError,
    NestingTooDeepError,
    NoExpressionError,
    ParseError,
    ResidualStackError,
    StackUnderflowError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
)
from .expression_lang import compile_expr, evaluate, parse_expr
from .manifest import CalcConfig, find_config, load_config

__all__ = [
    "ir",
    "CalcEvalError",
    "ConfigError",
    "ErrorContext",
    "EvaluationError",
    "ExecutionError",
    "InvalidTokenError",
    "NestingTooDeepError",
    "NoExpressionError",
    "ParseError",
    "ResidualStackError",
    "StackUnderflowError",
    "UnexpectedTokenError",
    "UnmatchedParenthesisError",
    "compile_expr",
    "evaluate",
    "parse_expr",
    "CalcConfig",
    "find_config",
    "load_config",
]
