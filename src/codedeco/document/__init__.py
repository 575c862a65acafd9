"""Immutable document tree and its raw JSON reader."""

from codedeco.document.model import (
    Block,
    Document,
    Inline,
    Leaf,
    Mark,
    Node,
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
from codedeco.document.raw import load_state, load_state_file

__all__ = [
    "Block",
    "Document",
    "Inline",
    "Leaf",
    "Mark",
    "Node",
    "Text",
    "child_nodes",
    "code_block",
    "find_node",
    "generate_key",
    "iter_nodes",
    "load_state",
    "load_state_file",
    "replace_text",
    "reset_key_generator",
    "with_data",
]
