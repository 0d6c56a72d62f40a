"""
Recursive descent parser for calceval expressions.

Grammar (precedence low to high):
    additive       → multiplicative (("+"|"-") multiplicative)*
    multiplicative → unary (("*"|"/"|"%") unary)*
    unary          → ("+"|"-") unary | primary
    primary        → INTEGER | FLOAT | "(" additive ")"

Every rule is a matcher that takes a token position and returns the matched
expression together with the position after it, or None. A matcher that
returns None has consumed nothing, so callers can simply try the next
alternative. Binary rules stop folding as soon as an operator or the operand
after it fails to match, leaving the operator unconsumed.

Nesting is capped at MAX_NESTING_DEPTH levels, counting every "(" and every
unary sign. The parser, the bytecode emitter and source rendering all recurse
once per level, so the cap keeps them inside the interpreter's recursion
limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from calceval.core.errors import (
    InvalidTokenError,
    NestingTooDeepError,
    NoExpressionError,
    ParseError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
    make_parse_error,
)
from calceval.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from calceval.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Literal,
    UnaryExpr,
    UnaryOp,
)

logger = logging.getLogger(__name__)

# Each parenthesis level costs six parser frames
MAX_NESTING_DEPTH = 100

_Match = tuple[Expr, int]

_ADDITIVE_OPS: dict[str, BinaryOp] = {
    "+": BinaryOp.ADD,
    "-": BinaryOp.SUB,
}

_MULTIPLICATIVE_OPS: dict[str, BinaryOp] = {
    "*": BinaryOp.MUL,
    "/": BinaryOp.DIV,
    "%": BinaryOp.MOD,
}

_UNARY_OPS: dict[str, UnaryOp] = {
    "+": UnaryOp.PLUS,
    "-": UnaryOp.MINUS,
}


class _Parser:
    """Recursive descent parser over a materialized token list.

    The token list must end with an EOF token. Matchers never consume EOF, so
    every index they look at is in range.
    """

    def __init__(self, tokens: Sequence[Token], source: str | None = None) -> None:
        self.tokens = tokens
        self.source = source
        # Furthest point where a primary could not be built, and why
        self.failure_pos = -1
        self.failure: ParseError | None = None
        # Open parentheses and unary signs enclosing the current position
        self.depth = 0

    def _fail(self, pos: int, error_class: type[ParseError], message: str) -> None:
        # Inner failures are recorded first and win ties
        if pos > self.failure_pos:
            self.failure_pos = pos
            self.failure = make_parse_error(error_class, message, self.tokens[pos], self.source)

    def _enter(self, tok: Token) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise make_parse_error(
                NestingTooDeepError,
                f"Expression nested deeper than {MAX_NESTING_DEPTH} levels at {tok.describe()}",
                tok,
                self.source,
            )

    def _binary_op(self, pos: int, table: dict[str, BinaryOp]) -> BinaryOp | None:
        tok = self.tokens[pos]
        if tok.kind != TokenKind.OPERATOR:
            return None
        return table.get(tok.source)

    # -- Grammar rules --

    def match_additive(self, pos: int) -> _Match | None:
        """multiplicative (('+' | '-') multiplicative)*"""
        return self._match_binary(pos, self.match_multiplicative, _ADDITIVE_OPS)

    def match_multiplicative(self, pos: int) -> _Match | None:
        """unary (('*' | '/' | '%') unary)*"""
        return self._match_binary(pos, self.match_unary, _MULTIPLICATIVE_OPS)

    def _match_binary(self, pos, operand_rule, table: dict[str, BinaryOp]) -> _Match | None:
        first = operand_rule(pos)
        if first is None:
            return None

        left, pos = first
        while (op := self._binary_op(pos, table)) is not None:
            right = operand_rule(pos + 1)
            if right is None:
                break
            right_expr, pos = right
            left = BinaryExpr(op=op, left=left, right=right_expr)
        return left, pos

    def match_unary(self, pos: int) -> _Match | None:
        """('+' | '-') unary | primary"""
        tok = self.tokens[pos]
        if tok.kind == TokenKind.OPERATOR and tok.source in _UNARY_OPS:
            self._enter(tok)
            operand = self.match_unary(pos + 1)
            self.depth -= 1
            if operand is None:
                return None
            expr, end = operand
            return UnaryExpr(op=_UNARY_OPS[tok.source], operand=expr), end
        return self.match_primary(pos)

    def match_primary(self, pos: int) -> _Match | None:
        """INTEGER | FLOAT | '(' additive ')'"""
        tok = self.tokens[pos]

        if tok.is_literal:
            return Literal(value=float(tok.source)), pos + 1

        if tok.is_operator("("):
            self._enter(tok)
            nested = self.match_additive(pos + 1)
            self.depth -= 1
            if nested is None:
                self._fail(
                    pos + 1,
                    UnmatchedParenthesisError,
                    f"Expected an expression after '(' at position {tok.pos}",
                )
                return None
            expr, end = nested
            if not self.tokens[end].is_operator(")"):
                self._fail(
                    end,
                    UnmatchedParenthesisError,
                    f"Expected ')' to close '(' at position {tok.pos}, "
                    f"got {self.tokens[end].describe()}",
                )
                return None
            return expr, end + 1

        if tok.kind == TokenKind.ERROR:
            self._fail(pos, InvalidTokenError, f"Invalid token: {tok.source!r}")
        elif tok.kind == TokenKind.EOF:
            self._fail(pos, NoExpressionError, "Expected an expression, got end of input")
        else:
            self._fail(pos, NoExpressionError, f"Expected an expression, got {tok.describe()}")
        return None


def parse_tokens(tokens: Iterable[Token], source: str | None = None) -> Expr:
    """Parse a token stream into an expression tree.

    Args:
        tokens: Tokens ending with a single EOF token, e.g. from ``tokenize()``.
        source: The text the tokens came from, used for error context.

    Returns:
        The parsed expression.

    Raises:
        ParseError: If the tokens do not form exactly one expression.
    """
    token_list = list(tokens)
    if not token_list or token_list[-1].kind != TokenKind.EOF:
        raise ValueError("Token stream must end with an EOF token")

    parser = _Parser(token_list, source)
    result = parser.match_additive(0)

    if result is None:
        assert parser.failure is not None
        raise parser.failure

    expr, end = result
    eof_index = len(token_list) - 1
    if end != eof_index:
        # A deeper failure past the stopping point explains the leftover
        # tokens better than the leftover token itself: "1 + (2" or "1 + fish"
        if parser.failure is not None and parser.failure_pos > end:
            raise parser.failure
        leftover = token_list[end]
        raise make_parse_error(
            UnexpectedTokenError,
            f"Unexpected token after expression: {leftover.describe()}",
            leftover,
            source,
        )

    logger.debug("Parsed %d tokens into %s", eof_index, expr)
    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "-(4-6)*5%3")

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the expression is invalid.
    """
    return parse_tokens(tokenize(source), source)
