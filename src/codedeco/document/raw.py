"""Reader for the ``kind``-tagged raw JSON form of a document.

The raw form nests ``state`` > ``document`` > ``block`` / ``inline`` / ``text``
> ``leaf`` > ``mark``::

    {"kind": "state", "document": {"kind": "document", "data": {}, "nodes": [
        {"kind": "block", "type": "image", "isVoid": true, "data": {},
         "nodes": [{"kind": "text", "leaves": [
             {"kind": "leaf", "text": " ", "marks": []}]}]}]}}

Validation is done by pydantic models discriminated on ``kind``; the validated
tree is then converted into the immutable model of ``document.model``.
Nodes without a ``key`` receive a freshly generated one.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from codedeco.document.model import (
    Block,
    Document,
    Inline,
    Leaf,
    Mark,
    Node,
    Text,
    generate_key,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)


class _RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawMark(_RawModel):
    kind: Literal["mark"] = "mark"
    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class RawLeaf(_RawModel):
    kind: Literal["leaf"] = "leaf"
    text: str = ""
    marks: list[RawMark] = Field(default_factory=list)


class RawText(_RawModel):
    kind: Literal["text"]
    key: str | None = None
    leaves: list[RawLeaf] = Field(default_factory=list)


class RawBlock(_RawModel):
    kind: Literal["block"]
    type: str
    key: str | None = None
    is_void: bool = Field(default=False, alias="isVoid")
    data: dict[str, Any] = Field(default_factory=dict)
    nodes: list[RawNode] = Field(default_factory=list)


class RawInline(_RawModel):
    kind: Literal["inline"]
    type: str
    key: str | None = None
    is_void: bool = Field(default=False, alias="isVoid")
    data: dict[str, Any] = Field(default_factory=dict)
    nodes: list[RawNode] = Field(default_factory=list)


RawNode = Annotated[RawBlock | RawInline | RawText, Field(discriminator="kind")]

RawBlock.model_rebuild()
RawInline.model_rebuild()


class RawDocument(_RawModel):
    kind: Literal["document"] = "document"
    key: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    nodes: list[RawBlock] = Field(default_factory=list)


class RawState(_RawModel):
    kind: Literal["state"] = "state"
    document: RawDocument


def _convert(raw: RawBlock | RawInline | RawText) -> Node:
    key = raw.key or generate_key()
    match raw:
        case RawText(leaves=leaves):
            return Text(
                tuple(
                    Leaf(leaf.text, frozenset(Mark(m.type) for m in leaf.marks))
                    for leaf in leaves
                ),
                key=key,
            )
        case RawBlock():
            return Block(
                raw.type,
                nodes=tuple(_convert(child) for child in raw.nodes),
                data=dict(raw.data),
                is_void=raw.is_void,
                key=key,
            )
        case RawInline():
            return Inline(
                raw.type,
                nodes=tuple(_convert(child) for child in raw.nodes),
                data=dict(raw.data),
                is_void=raw.is_void,
                key=key,
            )


def load_state(data: Mapping[str, Any]) -> Document:
    """Validate a raw ``state`` mapping and build its document.

    Raises:
        pydantic.ValidationError: If *data* is not a well-formed raw state.
    """
    state = RawState.model_validate(data)
    raw_document = state.document
    document = Document(
        nodes=tuple(_convert(block) for block in raw_document.nodes),
        data=dict(raw_document.data),
        key=raw_document.key or generate_key(),
    )
    logger.debug("Loaded raw state with %d top-level blocks", len(document.nodes))
    return document


def load_state_file(path: Path) -> Document:
    """Read a raw state from a UTF-8 JSON file."""
    return load_state(json.loads(path.read_text(encoding="utf-8")))
