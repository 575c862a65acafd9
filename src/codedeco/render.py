"""Terminal rendering of decorated blocks with rich.

Applies annotation ranges as styles on a ``rich.text.Text`` built from the
block's text nodes, one output line per text node.  The block itself is only
read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text as RichText

from codedeco.highlight.flatten import walk_texts

if TYPE_CHECKING:
    from collections.abc import Iterable

    from codedeco.document.model import Document, Node
    from codedeco.highlight.mapper import AnnotationRange

# comment, keyword and punctuation are faded, bold and slightly faded; the
# remaining categories only add colour.
MARK_STYLES: dict[str, str] = {
    "comment": "dim italic",
    "keyword": "bold",
    "punctuation": "bright_black",
    "string": "green",
    "number": "cyan",
    "boolean": "cyan",
    "operator": "yellow",
    "function": "blue",
    "selector": "magenta",
    "property": "blue",
    "atrule": "bold magenta",
    "important": "bold red",
    "tag": "magenta",
    "attr-name": "yellow",
    "attr-value": "green",
    "entity": "cyan",
    "doctype": "dim",
}


def render_block(
    block: Node | Document,
    ranges: Iterable[AnnotationRange],
    styles: dict[str, str] | None = None,
) -> RichText:
    """Render the text nodes under *block* with *ranges* applied as styles.

    Labels without a style are ignored.  Ranges whose keys are not under
    *block* are skipped.
    """
    styles = MARK_STYLES if styles is None else styles
    texts = list(walk_texts(block))
    position = {text.key: i for i, text in enumerate(texts)}
    lines = [RichText(text.text) for text in texts]

    for annotation in ranges:
        first = position.get(annotation.anchor.key)
        last = position.get(annotation.focus.key)
        if first is None or last is None:
            continue
        style = " ".join(
            styles[label] for label in annotation.labels if label in styles
        )
        if not style:
            continue
        for i in range(first, last + 1):
            start = annotation.anchor.offset if i == first else 0
            end = annotation.focus.offset if i == last else len(lines[i])
            if start < end:
                lines[i].stylize(style, start, end)

    return RichText("\n").join(lines)
