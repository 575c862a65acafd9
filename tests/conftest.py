"""Shared pytest fixtures for codedeco tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from codedeco.config import HighlightConfig, get_settings
from codedeco.document.model import Block, Text, reset_key_generator
from codedeco.highlight import Decorator, Tokenizer, default_grammars

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture(autouse=True)
def _isolate_state() -> Generator[None]:
    """Restart key generation and drop cached settings around every test."""
    reset_key_generator()
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def tokenizer() -> Tokenizer:
    """Tokenizer over the default css/js/html grammars (compiled once)."""
    return Tokenizer(default_grammars())


@pytest.fixture
def decorator(tokenizer: Tokenizer) -> Decorator:
    return Decorator(tokenizer, HighlightConfig())


@pytest.fixture
def make_lines() -> Callable[..., Block]:
    """Build a ``code`` block with one keyed text node per line.

    Keys are ``t0``, ``t1``... so assertions can name them directly.
    """

    def _make(*lines: str, language: str | None = "js") -> Block:
        data = {} if language is None else {"language": language}
        return Block(
            "code",
            nodes=tuple(
                Block("code_line", nodes=(Text.of(line, key=f"t{i}"),), key=f"l{i}")
                for i, line in enumerate(lines)
            ),
            data=data,
            key="code",
        )

    return _make
