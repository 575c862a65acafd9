"""Flattening stage: text nodes under a subtree -> one separator-joined string.

Walks the text nodes of a subtree in document order and records, for each, the
flat offset of its first character and its length.  The tokenizer only ever
sees ``Flattened.text``; the mapper uses ``Flattened.spans`` to translate flat
offsets back into (text node key, offset) pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from codedeco.document.model import Text, child_nodes

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from codedeco.document.model import Document, Node


@dataclass(frozen=True, slots=True)
class TextSpan:
    """One text node's contribution to the flat string.

    Attributes:
        key: Key of the text node.
        start: Flat offset of the node's first character.
        length: Length of the node's text.
    """

    key: str
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class Flattened:
    """A flattened subtree.

    Attributes:
        text: Every text node's text, joined by one ``separator`` per pair.
        spans: Text node spans in document order.
        separator: The single joining character.
    """

    text: str
    spans: tuple[TextSpan, ...]
    separator: str

    @property
    def separator_positions(self) -> tuple[int, ...]:
        """Flat offsets of the separators inserted between spans."""
        return tuple(span.end for span in self.spans[:-1])


def walk_texts(
    root: Node | Document,
    children: Callable[[Node | Document], Iterable[Node]] = child_nodes,
) -> Iterator[Text]:
    """Yield the text nodes under *root*, depth-first, left to right.

    Lazy and single-pass: call again to restart from *root*.
    """
    if isinstance(root, Text):
        yield root
        return
    for child in children(root):
        yield from walk_texts(child, children)


def flatten(root: Node | Document, separator: str = "\n") -> Flattened:
    """Concatenate the text nodes under *root* into one string.

    Raises:
        ValueError: If *separator* is not exactly one character.
    """
    if len(separator) != 1:
        msg = f"separator must be exactly one character, got {separator!r}"
        raise ValueError(msg)

    parts: list[str] = []
    spans: list[TextSpan] = []
    position = 0

    for text_node in walk_texts(root):
        if spans:
            position += 1  # separator
        text = text_node.text
        spans.append(TextSpan(text_node.key, position, len(text)))
        parts.append(text)
        position += len(text)

    return Flattened(separator.join(parts), tuple(spans), separator)
