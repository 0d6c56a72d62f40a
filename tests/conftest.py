"""Shared pytest fixtures for calceval tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from calceval.core.expression_lang import tokenize
from calceval.core.expression_lang.tokenizer import TokenKind


@pytest.fixture
def token_kinds() -> Callable[[str], list[TokenKind]]:
    """Return a helper that tokenizes text and returns the token kinds."""

    def _kinds(source: str) -> list[TokenKind]:
        return [tok.kind for tok in tokenize(source)]

    return _kinds


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes a calceval.toml into a temp directory."""

    def _write(content: str) -> Path:
        path = tmp_path / "calceval.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
