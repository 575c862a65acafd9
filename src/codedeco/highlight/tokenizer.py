"""Tokenizer: flattened string + language identifier -> token sequence.

The language -> grammar registry is owned by each ``Tokenizer`` instance and
injected at construction; nothing is looked up through module state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codedeco.highlight.tokens import Plain, Token, Typed

if TYPE_CHECKING:
    from collections.abc import Mapping

    from codedeco.highlight.grammars import Grammar

logger = logging.getLogger(__name__)


class GrammarNotFoundError(LookupError):
    """No grammar is registered for a language identifier."""

    def __init__(self, language: object) -> None:
        self.language = language
        super().__init__(f"No grammar registered for language {language!r}")


class Tokenizer:
    """Lexes strings with grammars selected by language identifier."""

    def __init__(self, grammars: Mapping[str, Grammar]) -> None:
        self._grammars = dict(grammars)

    @property
    def languages(self) -> list[str]:
        """Sorted language identifiers known to this tokenizer."""
        return sorted(self._grammars)

    def resolve(self, language: object) -> Grammar:
        """Return the grammar for *language*.

        Raises:
            GrammarNotFoundError: If *language* is missing, not a string, or
                not registered.
        """
        if not isinstance(language, str) or language not in self._grammars:
            raise GrammarNotFoundError(language)
        return self._grammars[language]

    def tokenize(self, text: str, language: object) -> list[Token]:
        """Split *text* into an ordered, gap-free token sequence.

        One token per lexer match; adjacent tokens are never merged.

        Raises:
            GrammarNotFoundError: If *language* has no grammar.
        """
        grammar = self.resolve(language)
        if not text:
            return []

        tokens: list[Token] = []
        for lark_token in grammar.lexer.lex(text):
            value = str(lark_token)
            category = grammar.categories.get(lark_token.type)
            if category is None:
                tokens.append(Plain(value))
            else:
                tokens.append(Typed(category, value))

        logger.debug(
            "Tokenized %d chars as %s into %d tokens",
            len(text),
            grammar.name,
            len(tokens),
        )
        return tokens
