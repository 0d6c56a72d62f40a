"""Tests for the calceval tokenizer.

Covers:
- Literals, operators and whitespace handling
- Error tokens for malformed numbers and unknown words
- The single trailing EOF token and lazy, one-shot iteration
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator

import pytest

from calceval.core.expression_lang.tokenizer import Token, TokenKind, tokenize


class TestLiterals:
    """Numbers become INTEGER or FLOAT tokens holding the exact text."""

    def test_integer(self) -> None:
        tokens = list(tokenize("42"))
        assert tokens[0].kind == TokenKind.INTEGER
        assert tokens[0].source == "42"

    def test_float(self) -> None:
        tokens = list(tokenize("3.14"))
        assert tokens[0].kind == TokenKind.FLOAT
        assert tokens[0].source == "3.14"

    def test_leading_zeros_kept(self) -> None:
        tokens = list(tokenize("007.50"))
        assert tokens[0].kind == TokenKind.FLOAT
        assert tokens[0].source == "007.50"

    def test_number_followed_by_word(self) -> None:
        tokens = list(tokenize("12abc"))
        assert [(t.kind, t.source) for t in tokens] == [
            (TokenKind.INTEGER, "12"),
            (TokenKind.ERROR, "abc"),
            (TokenKind.EOF, ""),
        ]


class TestOperators:
    def test_all_operators(self, token_kinds) -> None:
        tokens = list(tokenize("+-*/%()"))
        assert [t.source for t in tokens[:-1]] == ["+", "-", "*", "/", "%", "(", ")"]
        assert token_kinds("+-*/%()") == [TokenKind.OPERATOR] * 7 + [TokenKind.EOF]

    def test_expression_without_spaces(self) -> None:
        tokens = list(tokenize("-(4-6)*5%3"))
        assert [t.source for t in tokens] == ["-", "(", "4", "-", "6", ")", "*", "5", "%", "3", ""]

    def test_is_operator(self) -> None:
        plus = next(tokenize("+"))
        assert plus.is_operator("+")
        assert not plus.is_operator("-")
        assert not next(tokenize("1")).is_operator("1")


class TestWhitespace:
    def test_whitespace_is_skipped(self, token_kinds) -> None:
        assert token_kinds("  1 \t+\n 2  ") == [
            TokenKind.INTEGER,
            TokenKind.OPERATOR,
            TokenKind.INTEGER,
            TokenKind.EOF,
        ]

    def test_unicode_whitespace(self, token_kinds) -> None:
        assert token_kinds("1\u00a0+\u20032") == [
            TokenKind.INTEGER,
            TokenKind.OPERATOR,
            TokenKind.INTEGER,
            TokenKind.EOF,
        ]

    def test_positions(self) -> None:
        tokens = list(tokenize(" 12 + 3.5"))
        assert [t.pos for t in tokens] == [1, 4, 6, 9]


class TestErrorTokens:
    """Malformed input becomes ERROR tokens instead of raising."""

    @pytest.mark.parametrize("source", ["1.", ".2", "0..0", "1.2.3", "fish", "1.x"])
    def test_single_error_token(self, source: str) -> None:
        tokens = list(tokenize(source))
        assert len(tokens) == 2
        assert tokens[0].kind == TokenKind.ERROR
        assert tokens[0].source == source
        assert tokens[1].kind == TokenKind.EOF

    def test_error_stops_at_operator(self) -> None:
        tokens = list(tokenize("1.-2"))
        assert [(t.kind, t.source) for t in tokens] == [
            (TokenKind.ERROR, "1."),
            (TokenKind.OPERATOR, "-"),
            (TokenKind.INTEGER, "2"),
            (TokenKind.EOF, ""),
        ]

    def test_error_stops_at_whitespace(self) -> None:
        tokens = list(tokenize("fish 2"))
        assert [(t.kind, t.source) for t in tokens] == [
            (TokenKind.ERROR, "fish"),
            (TokenKind.INTEGER, "2"),
            (TokenKind.EOF, ""),
        ]

    def test_non_ascii_digits_are_errors(self, token_kinds) -> None:
        assert token_kinds("\u0663") == [TokenKind.ERROR, TokenKind.EOF]


class TestEndOfInput:
    def test_empty_input(self) -> None:
        assert list(tokenize("")) == [Token(TokenKind.EOF, "", 0)]

    def test_whitespace_only(self, token_kinds) -> None:
        assert token_kinds("   \t ") == [TokenKind.EOF]

    @pytest.mark.parametrize("source", ["", "1", "1 + 2", "((", "fish", "1.", "  "])
    def test_exactly_one_eof_at_end(self, source: str) -> None:
        kinds = [t.kind for t in tokenize(source)]
        assert kinds.count(TokenKind.EOF) == 1
        assert kinds[-1] == TokenKind.EOF

    def test_lazy_and_not_restartable(self) -> None:
        stream = tokenize("1 + 2")
        assert isinstance(stream, Iterator)
        assert next(stream).source == "1"
        assert [t.source for t in stream] == ["+", "2", ""]
        assert list(stream) == []


class TestToken:
    def test_immutable(self) -> None:
        tok = next(tokenize("1"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            tok.source = "2"  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(next(tokenize("42"))) == "<integer; 42>"

    def test_describe(self) -> None:
        tokens = list(tokenize("7"))
        assert tokens[0].describe() == "'7'"
        assert tokens[1].describe() == "end of input"

    def test_is_literal(self) -> None:
        kinds = {t.source: t.is_literal for t in tokenize("1 2.5 + x")}
        assert kinds == {"1": True, "2.5": True, "+": False, "x": False, "": False}
