"""Lexical grammars for the tokenizer.

Each grammar is a terminal-only Lark grammar compiled with the ``basic``
lexer and no parser.  The basic lexer tries terminals by descending priority
and takes the first that matches, so keywords, comments and strings carry
higher priorities than identifiers and operators.  Every grammar ends with a
whitespace terminal and a one-character catch-all (``TEXT``) so lexing never
fails and the token stream always covers the whole input.

Terminals named in a grammar's category map become ``Typed`` tokens; all other
terminals become ``Plain`` tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lark import Lark

if TYPE_CHECKING:
    from collections.abc import Mapping

_JS_KEYWORDS = (
    "async|await|break|case|catch|class|const|continue|debugger|default|"
    "delete|do|else|export|extends|finally|for|from|function|if|import|in|"
    "instanceof|let|new|of|return|static|super|switch|this|throw|try|typeof|"
    "var|void|while|with|yield"
)

_JS_GRAMMAR = (
    r"COMMENT.6: /\/\/[^\n]*/ | /\/\*[\s\S]*?\*\//" "\n"
    r"STRING.5: /\"(?:[^\"\\\n]|\\[\s\S])*\"/"
    r" | /'(?:[^'\\\n]|\\[\s\S])*'/"
    r" | /`(?:[^`\\]|\\[\s\S])*`/" "\n"
    rf"KEYWORD.4: /(?:{_JS_KEYWORDS})(?![\w$])/" "\n"
    r"BOOLEAN.4: /(?:true|false|null|undefined|NaN|Infinity)(?![\w$])/" "\n"
    r"NUMBER.4: /0[xX][\da-fA-F]+/ | /(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?/" "\n"
    r"FUNCTION.3: /[A-Za-z_$][\w$]*(?=\s*\()/" "\n"
    r"NAME.2: /[A-Za-z_$][\w$]*/" "\n"
    r"OPERATOR.2: /(?:[-+*%=<>!&|^~?]|\/(?![\/*]))+/" "\n"
    r"PUNCTUATION.2: /[{}\[\]();,.:]/" "\n"
    r"WS.1: /\s+/" "\n"
    r"TEXT: /[\s\S]/" "\n"
)

_CSS_GRAMMAR = (
    r"COMMENT.6: /\/\*[\s\S]*?\*\//" "\n"
    r"STRING.5: /\"(?:[^\"\\\n]|\\[\s\S])*\"/"
    r" | /'(?:[^'\\\n]|\\[\s\S])*'/" "\n"
    r"ATRULE.5: /@[\w-]+/" "\n"
    r"SELECTOR.4: /[^{}\s;@\/\"'](?:[^{};\/\"']*[^{}\s;\/\"'])?(?=\s*\{)/" "\n"
    r"IMPORTANT.4: /![ \t]*important(?![\w-])/" "\n"
    r"PROPERTY.3: /-{0,2}[A-Za-z][\w-]*(?=\s*:)/" "\n"
    r"FUNCTION.3: /[A-Za-z-][\w-]*(?=\()/" "\n"
    r"NUMBER.3: /-?(?:\d+\.?\d*|\.\d+)(?:%|[A-Za-z]+)?/" "\n"
    r"PUNCTUATION.2: /[(){};:,]/" "\n"
    r"NAME.1: /[\w-]+/" "\n"
    r"WS.1: /\s+/" "\n"
    r"TEXT: /[\s\S]/" "\n"
)

_HTML_GRAMMAR = (
    r"COMMENT.6: /<!--[\s\S]*?-->/" "\n"
    r"DOCTYPE.5: /<![Dd][Oo][Cc][Tt][Yy][Pp][Ee][^>]*>/" "\n"
    r"TAG.4: /<\/?[A-Za-z][\w:-]*/ | /\/?>/" "\n"
    r"ATTR_NAME.3: /[A-Za-z_:][\w:.-]*(?=\s*=)/" "\n"
    r"ATTR_VALUE.3: /\"[^\"\n]*\"/ | /'[^'\n]*'/" "\n"
    r"ENTITY.3: /&#?[\da-zA-Z]+;/" "\n"
    r"PUNCTUATION.2: /=/" "\n"
    r"NAME.1: /[^<>&\"'=\s\/]+/" "\n"
    r"WS.1: /\s+/" "\n"
    r"TEXT: /[\s\S]/" "\n"
)

_JS_CATEGORIES = {
    "COMMENT": "comment",
    "STRING": "string",
    "KEYWORD": "keyword",
    "BOOLEAN": "boolean",
    "NUMBER": "number",
    "FUNCTION": "function",
    "OPERATOR": "operator",
    "PUNCTUATION": "punctuation",
}

_CSS_CATEGORIES = {
    "COMMENT": "comment",
    "STRING": "string",
    "ATRULE": "atrule",
    "SELECTOR": "selector",
    "IMPORTANT": "important",
    "PROPERTY": "property",
    "FUNCTION": "function",
    "NUMBER": "number",
    "PUNCTUATION": "punctuation",
}

_HTML_CATEGORIES = {
    "COMMENT": "comment",
    "DOCTYPE": "doctype",
    "TAG": "tag",
    "ATTR_NAME": "attr-name",
    "ATTR_VALUE": "attr-value",
    "ENTITY": "entity",
    "PUNCTUATION": "punctuation",
}


@dataclass(frozen=True, slots=True)
class Grammar:
    """A compiled lexical grammar.

    Attributes:
        name: Canonical language name (``js``, ``css``, ``html``).
        lexer: Lark instance built with ``parser=None, lexer="basic"``.
        categories: Terminal name -> category for terminals that produce
            ``Typed`` tokens.
    """

    name: str
    lexer: Lark
    categories: Mapping[str, str]

    @classmethod
    def compile(
        cls, name: str, source: str, categories: Mapping[str, str]
    ) -> Grammar:
        """Compile a terminal-only Lark grammar."""
        return cls(name, Lark(source, parser=None, lexer="basic"), dict(categories))


def default_grammars() -> dict[str, Grammar]:
    """Build a fresh language -> grammar mapping for css, js and html.

    ``javascript`` and ``markup`` are aliases of ``js`` and ``html``.
    """
    js = Grammar.compile("js", _JS_GRAMMAR, _JS_CATEGORIES)
    css = Grammar.compile("css", _CSS_GRAMMAR, _CSS_CATEGORIES)
    html = Grammar.compile("html", _HTML_GRAMMAR, _HTML_CATEGORIES)
    return {
        "css": css,
        "html": html,
        "javascript": js,
        "js": js,
        "markup": html,
    }
