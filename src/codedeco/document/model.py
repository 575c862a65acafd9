"""Immutable document tree: blocks, inlines, text nodes, leaves and marks.

Every snapshot is a tree of frozen dataclasses.  Edits never mutate a node;
they build a new snapshot that shares every untouched subtree with the old
one and keeps the keys of the nodes it rebuilds.
"""

# Pattern: Functional Core (immutable values, edits return new snapshots)

from __future__ import annotations

import dataclasses
import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_key_counter = itertools.count()


def generate_key() -> str:
    """Return a fresh node key, unique within this process."""
    return str(next(_key_counter))


def reset_key_generator() -> None:
    """Restart key generation at ``"0"`` (test isolation only)."""
    global _key_counter
    _key_counter = itertools.count()


@dataclass(frozen=True, slots=True)
class Mark:
    """A whole-leaf label such as ``bold`` or ``comment``."""

    type: str


@dataclass(frozen=True, slots=True)
class Leaf:
    """A run of text sharing one set of marks."""

    text: str = ""
    marks: frozenset[Mark] = frozenset()


@dataclass(frozen=True, slots=True)
class Text:
    """A text-bearing node made of consecutive leaves."""

    leaves: tuple[Leaf, ...] = ()
    key: str = field(default_factory=generate_key)

    @classmethod
    def of(cls, text: str, *, key: str | None = None) -> Text:
        """Build a single-leaf text node."""
        leaves = (Leaf(text),)
        return cls(leaves) if key is None else cls(leaves, key=key)

    @property
    def text(self) -> str:
        return "".join(leaf.text for leaf in self.leaves)


@dataclass(frozen=True, slots=True)
class Block:
    """A block-level container (paragraph, code block, code line...)."""

    type: str
    nodes: tuple[Node, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)
    is_void: bool = False
    key: str = field(default_factory=generate_key)


@dataclass(frozen=True, slots=True)
class Inline:
    """An inline container (link, mention...)."""

    type: str
    nodes: tuple[Node, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)
    is_void: bool = False
    key: str = field(default_factory=generate_key)


@dataclass(frozen=True, slots=True)
class Document:
    """The root of a snapshot."""

    nodes: tuple[Block, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)
    key: str = field(default_factory=generate_key)


type Node = Block | Inline | Text
type Parent = Document | Block | Inline


# ---------------------------------------------------------------------------
# Read access
# ---------------------------------------------------------------------------


def child_nodes(node: Node | Document) -> tuple[Node, ...]:
    """Return the ordered children of *node* (empty for text nodes)."""
    if isinstance(node, Text):
        return ()
    return node.nodes


def iter_nodes(root: Node | Document) -> Iterator[Node | Document]:
    """Yield *root* and all its descendants, depth-first, left to right."""
    stack: list[Node | Document] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(child_nodes(node)))


def find_node(root: Node | Document, key: str) -> Node | Document | None:
    """Return the node with *key* under *root*, or ``None``."""
    for node in iter_nodes(root):
        if node.key == key:
            return node
    return None


# ---------------------------------------------------------------------------
# Snapshot-producing edits
# ---------------------------------------------------------------------------


def with_data(node: Parent, **changes: Any) -> Parent:
    """Return a copy of *node* whose data map has *changes* applied."""
    return dataclasses.replace(node, data={**node.data, **changes})


def replace_text(root: Parent, key: str, text: str) -> Parent:
    """Return a copy of *root* where text node *key* holds *text*.

    The edited node keeps its key; the marks of its first leaf carry over to
    the single leaf that replaces its contents.  Raises ``KeyError`` when no
    text node under *root* has *key*.
    """
    replaced = _replace_text(root, key, text)
    if replaced is root:
        msg = f"No text node with key {key!r}"
        raise KeyError(msg)
    return replaced


def _replace_text(node: Any, key: str, text: str) -> Any:
    if isinstance(node, Text):
        if node.key != key:
            return node
        marks = node.leaves[0].marks if node.leaves else frozenset()
        return Text((Leaf(text, marks),), key=node.key)

    children = tuple(_replace_text(child, key, text) for child in node.nodes)
    if all(new is old for new, old in zip(children, node.nodes, strict=True)):
        return node
    return dataclasses.replace(node, nodes=children)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def code_block(
    source: str,
    language: str,
    *,
    block_type: str = "code",
    line_type: str = "code_line",
    language_key: str = "language",
) -> Block:
    """Build a code block holding one ``code_line`` block per source line."""
    lines = source.split("\n")
    return Block(
        block_type,
        nodes=tuple(Block(line_type, nodes=(Text.of(line),)) for line in lines),
        data={language_key: language},
    )
