"""Tests for the flattening stage."""

from __future__ import annotations

import pytest

from codedeco.document.model import (
    Block,
    Document,
    Inline,
    Node,
    Text,
    child_nodes,
)
from codedeco.highlight.flatten import Flattened, TextSpan, flatten, walk_texts


def _nested() -> Document:
    """Two blocks; the second mixes a text node, an inline and a text node."""
    return Document(
        nodes=(
            Block("paragraph", nodes=(Text.of("one", key="a"),)),
            Block(
                "paragraph",
                nodes=(
                    Text.of("two ", key="b"),
                    Inline("link", nodes=(Text.of("three", key="c"),)),
                    Text.of("", key="d"),
                ),
            ),
        )
    )


class TestWalkTexts:
    """walk_texts() - depth-first, left-to-right text node order."""

    def test_document_order(self) -> None:
        """Text nodes come out in depth-first, left-to-right order."""
        assert [text.key for text in walk_texts(_nested())] == ["a", "b", "c", "d"]

    def test_text_root_yields_itself(self) -> None:
        """A text node root yields just that node."""
        text = Text.of("x", key="only")
        assert list(walk_texts(text)) == [text]

    def test_is_lazy(self) -> None:
        """walk_texts returns an iterator, consumed once."""
        walker = walk_texts(_nested())
        assert next(walker).key == "a"
        assert [text.key for text in walker] == ["b", "c", "d"]

    def test_restart_by_reinvoking(self) -> None:
        """Calling again restarts from the root."""
        root = _nested()
        first = [text.key for text in walk_texts(root)]
        second = [text.key for text in walk_texts(root)]
        assert first == second

    def test_custom_children_capability(self) -> None:
        """An injected children function controls traversal."""
        root = _nested()

        def skip_inlines(node: Node | Document) -> tuple[Node, ...]:
            return tuple(c for c in child_nodes(node) if not isinstance(c, Inline))

        assert [t.key for t in walk_texts(root, skip_inlines)] == ["a", "b", "d"]


class TestFlatten:
    """flatten() - separator-joined text plus span table."""

    def test_joins_with_single_separator(self) -> None:
        """Every pair of text nodes is separated by exactly one separator."""
        flattened = flatten(_nested())
        assert flattened.text == "one\ntwo \nthree\n"

    def test_span_table(self) -> None:
        """Spans record key, flat start and length per text node."""
        flattened = flatten(_nested())
        assert flattened.spans == (
            TextSpan("a", 0, 3),
            TextSpan("b", 4, 4),
            TextSpan("c", 9, 5),
            TextSpan("d", 15, 0),
        )

    def test_separator_positions(self) -> None:
        """Separators sit right after every span but the last."""
        flattened = flatten(_nested())
        assert flattened.separator_positions == (3, 8, 14)
        assert all(flattened.text[p] == "\n" for p in flattened.separator_positions)

    def test_custom_separator(self) -> None:
        """Any single character can separate."""
        flattened = flatten(_nested(), "\u0000")
        assert flattened.text == "one\u0000two \u0000three\u0000"
        assert flattened.separator == "\u0000"

    def test_length_conservation(self) -> None:
        """Flat length == sum of text lengths + (spans - 1) separators."""
        flattened = flatten(_nested())
        lengths = sum(span.length for span in flattened.spans)
        assert len(flattened.text) == lengths + len(flattened.spans) - 1

    def test_no_text_nodes(self) -> None:
        """A subtree without text nodes flattens to nothing."""
        assert flatten(Block("code")) == Flattened("", (), "\n")

    def test_multi_leaf_text_node(self) -> None:
        """A text node's contribution is all its leaves, concatenated."""
        from codedeco.document.model import Leaf, Mark

        text = Text((Leaf("ab", frozenset({Mark("bold")})), Leaf("cd")), key="t")
        flattened = flatten(Block("code", nodes=(text,)))
        assert flattened.text == "abcd"
        assert flattened.spans == (TextSpan("t", 0, 4),)

    @pytest.mark.parametrize("separator", ["", "\n\n", "ab"])
    def test_rejects_non_single_char_separator(self, separator: str) -> None:
        """Separators must be exactly one character."""
        with pytest.raises(ValueError, match="exactly one character"):
            flatten(_nested(), separator)

    def test_does_not_mutate_document(self) -> None:
        """Flattening leaves the snapshot equal to what it was."""
        root = _nested()
        before = [(text.key, text.text) for text in walk_texts(root)]
        flatten(root)
        assert [(text.key, text.text) for text in walk_texts(root)] == before
