"""Tokens produced by the tokenizer.

A token is either an uncategorised ``Plain`` run or a ``Typed`` run carrying a
lexical category.  Their concatenated text always equals the tokenizer input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class Plain:
    """A run with no category."""

    text: str


@dataclass(frozen=True, slots=True)
class Typed:
    """A run with a lexical category (``keyword``, ``comment``...)."""

    category: str
    text: str


type Token = Plain | Typed


def token_length(tokens: Iterable[Token]) -> int:
    """Total raw character count of *tokens*."""
    return sum(len(token.text) for token in tokens)
