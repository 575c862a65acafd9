"""Syntax highlighting for tree-structured documents."""

from codedeco.highlight.decorate import Decorator, highlight, needs_redecoration
from codedeco.highlight.flatten import Flattened, TextSpan, flatten, walk_texts
from codedeco.highlight.grammars import Grammar, default_grammars
from codedeco.highlight.mapper import (
    AnnotationRange,
    MappingConsistencyError,
    Point,
    map_tokens,
)
from codedeco.highlight.tokenizer import GrammarNotFoundError, Tokenizer
from codedeco.highlight.tokens import Plain, Token, Typed, token_length

__all__ = [
    "AnnotationRange",
    "Decorator",
    "Flattened",
    "Grammar",
    "GrammarNotFoundError",
    "MappingConsistencyError",
    "Plain",
    "Point",
    "TextSpan",
    "Token",
    "Tokenizer",
    "Typed",
    "default_grammars",
    "flatten",
    "highlight",
    "map_tokens",
    "needs_redecoration",
    "token_length",
    "walk_texts",
]
