"""
calceval arithmetic expression pipeline.

Tokenizer, parser, bytecode emitter and stack machine for arithmetic
expressions over floats: + - * / % with unary signs and parentheses.

Usage:
    from calceval.core.expression_lang import evaluate

    result = evaluate("-(4-6)*5%3")
    # result == 1.0
"""

from calceval.core.expression_lang.compiler import emit_bytecode
from calceval.core.expression_lang.evaluator import compile_expr, evaluate
from calceval.core.expression_lang.parser import parse_expr, parse_tokens
from calceval.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from calceval.core.expression_lang.vm import execute

__all__ = [
    "Token",
    "TokenKind",
    "compile_expr",
    "emit_bytecode",
    "evaluate",
    "execute",
    "parse_expr",
    "parse_tokens",
    "tokenize",
]
