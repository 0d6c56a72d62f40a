"""
Tokenizer for calceval arithmetic expressions.

Converts an expression string into a lazy sequence of typed tokens. Malformed
input never raises here: it becomes ERROR tokens, which the parser rejects
when it reaches them.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    INTEGER = auto()
    FLOAT = auto()

    # + - * / % ( )
    OPERATOR = auto()

    # Unrecognized or malformed run of characters
    ERROR = auto()

    # End of input, emitted exactly once
    EOF = auto()

    @property
    def is_literal(self) -> bool:
        return self in (TokenKind.INTEGER, TokenKind.FLOAT)


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the expression tokenizer."""

    kind: TokenKind
    source: str
    pos: int = 0

    @property
    def is_literal(self) -> bool:
        return self.kind.is_literal

    def is_operator(self, op: str) -> bool:
        """True if this is the operator token spelled ``op``."""
        return self.kind == TokenKind.OPERATOR and self.source == op

    def describe(self) -> str:
        """Human-readable name for error messages."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        return repr(self.source)

    def __str__(self) -> str:
        return f"<{self.kind}; {self.source}>"


OPERATORS = frozenset("+-*/%()")

# A numeric run starts at an ASCII digit and continues over digits and dots.
_NUMERIC_RUN_RE = re.compile(r"[0-9][0-9.]*")
# A valid number: digits, optionally one dot followed by more digits.
_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


def tokenize(source: str) -> Iterator[Token]:
    """Tokenize an expression string.

    Yields tokens one at a time; the final token is always a single EOF,
    including for empty or all-whitespace input.
    """
    i = 0
    n = len(source)

    while True:
        # Skip whitespace
        while i < n and source[i].isspace():
            i += 1

        if i == n:
            yield Token(TokenKind.EOF, "", n)
            return

        c = source[i]

        # Numbers
        if "0" <= c <= "9":
            m = _NUMERIC_RUN_RE.match(source, i)
            assert m is not None
            run = m.group(0)
            number = _NUMBER_RE.fullmatch(run)
            if number is not None:
                kind = TokenKind.FLOAT if number.group(1) else TokenKind.INTEGER
                yield Token(kind, run, i)
                i = m.end()
                continue
            # Not a well-formed number: rescan the run as an error

        # Single-character operators
        elif c in OPERATORS:
            yield Token(TokenKind.OPERATOR, c, i)
            i += 1
            continue

        end = _scan_error(source, i)
        yield Token(TokenKind.ERROR, source[i:end], i)
        i = end


def _scan_error(source: str, start: int) -> int:
    """Return the end of an error run: up to whitespace or an operator."""
    i = start + 1
    n = len(source)
    while i < n and not source[i].isspace() and source[i] not in OPERATORS:
        i += 1
    return i
