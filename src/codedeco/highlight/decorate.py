"""Decorations for code blocks: flatten -> tokenize -> map.

``Decorator`` is what an editor calls on every render: it recognises code
blocks, reads their language from the block's data map, and returns the
annotation ranges for the block.  Nothing is cached; every call recomputes
from the snapshot it is given.

Failure policy:
- unknown or missing language -> no ranges (logged at DEBUG)
- flattening/tokenizing disagreement -> ``MappingConsistencyError``
  propagates (logged at ERROR) so the caller can render unhighlighted
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codedeco.document.model import Block, iter_nodes
from codedeco.highlight.flatten import flatten, walk_texts
from codedeco.highlight.mapper import MappingConsistencyError, map_tokens
from codedeco.highlight.tokenizer import GrammarNotFoundError

if TYPE_CHECKING:
    from codedeco.config import HighlightConfig
    from codedeco.document.model import Document, Node
    from codedeco.highlight.mapper import AnnotationRange
    from codedeco.highlight.tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def highlight(
    node: Node | Document,
    language: object,
    tokenizer: Tokenizer,
    separator: str = "\n",
) -> list[AnnotationRange]:
    """Annotation ranges for the text under *node*, lexed as *language*.

    Returns an empty list when *language* has no grammar.

    Raises:
        MappingConsistencyError: If tokens and flattened text disagree.
    """
    flattened = flatten(node, separator)
    try:
        tokens = tokenizer.tokenize(flattened.text, language)
    except GrammarNotFoundError:
        logger.debug("No grammar for %r; skipping highlighting", language)
        return []
    return map_tokens(flattened, tokens)


def needs_redecoration(
    before: Node | Document,
    after: Node | Document,
    language_key: str = "language",
) -> bool:
    """Whether decorations computed for *before* are stale for *after*.

    True when the language identifier, the sequence of text node keys, or any
    text node's text differs between the two snapshots.
    """
    if _language(before, language_key) != _language(after, language_key):
        return True
    old = [(text.key, text.text) for text in walk_texts(before)]
    new = [(text.key, text.text) for text in walk_texts(after)]
    return old != new


def _language(node: Node | Document, language_key: str) -> object:
    data = getattr(node, "data", None)
    return None if data is None else data.get(language_key)


class Decorator:
    """Produces decorations for the code blocks of a document."""

    def __init__(self, tokenizer: Tokenizer, config: HighlightConfig) -> None:
        self.tokenizer = tokenizer
        self.config = config

    def is_code_block(self, node: Node | Document) -> bool:
        return isinstance(node, Block) and node.type == self.config.code_block_type

    def decorate_node(self, node: Node | Document) -> list[AnnotationRange]:
        """Ranges for *node* if it is a code block, otherwise ``[]``."""
        if not self.is_code_block(node):
            return []
        language = _language(node, self.config.language_key)
        try:
            return highlight(node, language, self.tokenizer, self.config.separator)
        except MappingConsistencyError:
            logger.exception("Highlighting broken for block %s", node.key)
            raise

    def decorate_document(
        self, document: Node | Document
    ) -> dict[str, list[AnnotationRange]]:
        """Ranges for every code block under *document*, keyed by block key."""
        return {
            node.key: self.decorate_node(node)
            for node in iter_nodes(document)
            if self.is_code_block(node)
        }
