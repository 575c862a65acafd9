"""Tests for the immutable document model."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from codedeco.document.model import (
    Block,
    Document,
    Inline,
    Leaf,
    Mark,
    Text,
    child_nodes,
    code_block,
    find_node,
    generate_key,
    iter_nodes,
    replace_text,
    reset_key_generator,
    with_data,
)


def _document() -> Document:
    return Document(
        nodes=(
            Block("paragraph", nodes=(Text.of("intro", key="p0"),), key="p"),
            Block(
                "code",
                nodes=(
                    Block("code_line", nodes=(Text.of("let a", key="c0"),), key="l0"),
                    Block("code_line", nodes=(Text.of("let b", key="c1"),), key="l1"),
                ),
                data={"language": "js"},
                key="code",
            ),
        ),
        key="doc",
    )


class TestKeys:
    """Key generation."""

    def test_keys_are_unique_strings(self) -> None:
        """Generated keys are distinct strings."""
        keys = [generate_key() for _ in range(5)]
        assert all(isinstance(key, str) for key in keys)
        assert len(set(keys)) == 5

    def test_reset(self) -> None:
        """Resetting restarts at '0'."""
        generate_key()
        reset_key_generator()
        assert generate_key() == "0"

    def test_nodes_get_keys(self) -> None:
        """Nodes built without a key get a fresh one."""
        first = Text.of("a")
        second = Block("paragraph")
        assert first.key != second.key


class TestNodes:
    """Node value semantics."""

    def test_text_concatenates_leaves(self) -> None:
        """A text node's text is its leaves joined."""
        text = Text((Leaf("ab", frozenset({Mark("bold")})), Leaf("c")), key="t")
        assert text.text == "abc"

    def test_empty_text(self) -> None:
        """No leaves, empty text."""
        assert Text(key="t").text == ""

    def test_frozen(self) -> None:
        """Nodes cannot be mutated in place."""
        block = Block("paragraph")
        with pytest.raises(FrozenInstanceError):
            block.type = "code"  # type: ignore[misc]

    def test_child_nodes(self) -> None:
        """Text nodes have no children; containers return theirs."""
        inline = Inline("link", nodes=(Text.of("x", key="x"),))
        assert child_nodes(Text.of("y")) == ()
        assert [node.key for node in child_nodes(inline)] == ["x"]


class TestTraversal:
    """iter_nodes() and find_node()."""

    def test_iter_nodes_order(self) -> None:
        """Depth-first, left to right, root first."""
        keys = [node.key for node in iter_nodes(_document())]
        assert keys == ["doc", "p", "p0", "code", "l0", "c0", "l1", "c1"]

    def test_find_node(self) -> None:
        """Nodes are found by key anywhere under the root."""
        document = _document()
        found = find_node(document, "c1")
        assert isinstance(found, Text)
        assert found.text == "let b"

    def test_find_node_missing(self) -> None:
        """Unknown keys give None."""
        assert find_node(_document(), "nope") is None


class TestEdits:
    """Snapshot-producing edits."""

    def test_replace_text(self) -> None:
        """The edited node keeps its key and gets the new text."""
        document = _document()
        edited = replace_text(document, "c1", "let bb")

        found = find_node(edited, "c1")
        assert isinstance(found, Text)
        assert found.text == "let bb"
        assert find_node(document, "c1").text == "let b"  # type: ignore[union-attr]

    def test_replace_text_shares_untouched_subtrees(self) -> None:
        """Siblings of the edited path are the very same objects."""
        document = _document()
        edited = replace_text(document, "c1", "x")

        assert edited.nodes[0] is document.nodes[0]
        assert edited.nodes[1].nodes[0] is document.nodes[1].nodes[0]
        assert edited.nodes[1] is not document.nodes[1]
        assert edited.key == document.key

    def test_replace_text_keeps_first_leaf_marks(self) -> None:
        """Marks of the first leaf carry over."""
        bold = frozenset({Mark("bold")})
        block = Block("p", nodes=(Text((Leaf("a", bold), Leaf("b")), key="t"),))

        edited = replace_text(block, "t", "zz")

        assert edited.nodes[0] == Text((Leaf("zz", bold),), key="t")

    def test_replace_text_unknown_key(self) -> None:
        """Editing a missing node raises KeyError."""
        with pytest.raises(KeyError, match="nope"):
            replace_text(_document(), "nope", "x")

    def test_with_data(self) -> None:
        """Data changes merge into a copy; the source block is untouched."""
        block = _document().nodes[1]
        changed = with_data(block, language="css", theme="dark")

        assert changed.data == {"language": "css", "theme": "dark"}
        assert block.data == {"language": "js"}
        assert changed.key == block.key
        assert changed.nodes is block.nodes


class TestCodeBlock:
    """code_block() builder."""

    def test_one_line_block_per_source_line(self) -> None:
        """Each source line becomes a code_line holding one text node."""
        block = code_block("a\n\nb", "css")

        assert block.type == "code"
        assert block.data == {"language": "css"}
        assert [line.type for line in block.nodes] == ["code_line"] * 3
        assert [line.nodes[0].text for line in block.nodes] == ["a", "", "b"]

    def test_trailing_newline_gives_empty_last_line(self) -> None:
        """A final newline produces an empty last line."""
        block = code_block("a\n", "js")
        assert [line.nodes[0].text for line in block.nodes] == ["a", ""]

    def test_custom_types(self) -> None:
        """Block, line type and language key are configurable."""
        block = code_block(
            "x", "js", block_type="pre", line_type="row", language_key="lang"
        )
        assert block.type == "pre"
        assert block.nodes[0].type == "row"
        assert block.data == {"lang": "js"}
