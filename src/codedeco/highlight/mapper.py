"""Position mapper: token boundaries -> (text node key, offset) ranges.

Scans the token sequence once, left to right, while walking a cursor over the
flattened text spans.  The cursor is the pair (span index, offset inside that
span).  For each token:

1. the start point is the cursor;
2. the token's effective length is its raw length minus the flattening
   separators lying inside the token's flat range;
3. the cursor advances by the effective length, moving into the following
   spans while the remainder exceeds what is left of the current span;
4. the end point is the cursor;
5. a ``Typed`` token with a non-zero effective length emits a range.

Separators are located by flat position (one between each pair of spans), not
by scanning token text, so a character equal to the separator that genuinely
occurs inside a text node counts as text.
"""

# Pattern: Functional Core (pure function of a flattened snapshot and tokens)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from codedeco.highlight.tokens import Typed, token_length

if TYPE_CHECKING:
    from collections.abc import Sequence

    from codedeco.highlight.flatten import Flattened
    from codedeco.highlight.tokens import Token

logger = logging.getLogger(__name__)


class MappingConsistencyError(RuntimeError):
    """Flattened text and token stream disagree.

    Raised when the tokens do not cover the flattened text exactly, or when a
    token runs past the last text span.  Distinct from "no grammar" so callers
    can tell "nothing to highlight" from "highlighting is broken".
    """

    def __init__(
        self,
        message: str,
        *,
        flat_length: int | None = None,
        token_length: int | None = None,
    ) -> None:
        super().__init__(message)
        self.flat_length = flat_length
        self.token_length = token_length


@dataclass(frozen=True, slots=True)
class Point:
    """A position inside a text node: key + 0-based character offset."""

    key: str
    offset: int


@dataclass(frozen=True, slots=True)
class AnnotationRange:
    """A sub-node styling range.

    Attributes:
        anchor: Start point (inclusive).
        focus: End point (exclusive); never before ``anchor``.
        labels: Category labels applied to the range.
    """

    anchor: Point
    focus: Point
    labels: tuple[str, ...]

    @property
    def anchor_key(self) -> str:
        return self.anchor.key

    @property
    def anchor_offset(self) -> int:
        return self.anchor.offset

    @property
    def focus_key(self) -> str:
        return self.focus.key

    @property
    def focus_offset(self) -> int:
        return self.focus.offset

    def to_dict(self) -> dict[str, Any]:
        """Decoration shape consumed by renderers."""
        return {
            "anchorKey": self.anchor.key,
            "anchorOffset": self.anchor.offset,
            "focusKey": self.focus.key,
            "focusOffset": self.focus.offset,
            "marks": [{"type": label} for label in self.labels],
        }


def map_tokens(
    flattened: Flattened,
    tokens: Sequence[Token],
) -> list[AnnotationRange]:
    """Translate *tokens* over ``flattened.text`` into annotation ranges.

    Ranges come back in token order, which is also document order.

    Raises:
        MappingConsistencyError: If the tokens' total length differs from the
            flattened text's length, or a token overruns the last span.
    """
    total = token_length(tokens)
    flat_length = len(flattened.text)
    if total != flat_length:
        msg = (
            f"Token stream covers {total} chars but flattened text has "
            f"{flat_length}"
        )
        raise MappingConsistencyError(
            msg, flat_length=flat_length, token_length=total
        )

    spans = flattened.spans
    if not spans:
        return []

    separators = flattened.separator_positions
    next_separator = 0  # index into separators
    flat_position = 0

    index = 0  # current span
    offset = 0  # chars of the current span consumed so far
    ranges: list[AnnotationRange] = []

    for token in tokens:
        raw_length = len(token.text)
        token_end = flat_position + raw_length

        inside = 0
        while (
            next_separator < len(separators)
            and separators[next_separator] < token_end
        ):
            inside += 1
            next_separator += 1
        length = raw_length - inside
        flat_position = token_end

        if length:
            # Step off spans that are already fully consumed so the start
            # point lands in the span holding the token's first character.
            while offset == spans[index].length and index + 1 < len(spans):
                index += 1
                offset = 0
        start = Point(spans[index].key, offset)

        remaining = length
        available = spans[index].length - offset
        while available < remaining:
            remaining -= available
            index += 1
            if index == len(spans):
                msg = (
                    f"Token {token!r} runs past the last text span "
                    f"({remaining} chars left unplaced)"
                )
                raise MappingConsistencyError(
                    msg, flat_length=flat_length, token_length=total
                )
            offset = 0
            available = spans[index].length
        offset += remaining
        end = Point(spans[index].key, offset)

        match token:
            case Typed(category=category) if length:
                ranges.append(AnnotationRange(start, end, (category,)))

    logger.debug(
        "Mapped %d tokens over %d spans into %d ranges",
        len(tokens),
        len(spans),
        len(ranges),
    )
    return ranges
