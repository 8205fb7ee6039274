"""Path expressions — the safe accessor language used by URL templates.

Grammar::

    path     := IDENT accessor*
    accessor := "." IDENT | "[" index "]"
    index    := STRING | INTEGER | path

Examples::

    user.id
    user['display name']
    items[0].slug
    lookup[current.key]

Expressions are parsed once into a small tree of frozen nodes and then
evaluated against any key-value tree: mappings are indexed by key,
non-string sequences by integer, everything else by public attribute.
There is no call syntax and names starting with ``_`` never resolve, so
an expression can only read data the context already exposes.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from navkit.errors import MalformedTemplateError


class _Missing:
    """Sentinel for a lookup that found nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# -- Tokens --

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<int>-?\d+)
  | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
  | (?P<punct>[.\[\]])
    """,
    re.VERBOSE,
)

_ESCAPE_RE = re.compile(r"\\(.)")


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    value: str
    pos: int


def tokenize(source: str) -> list[Token]:
    """Split *source* into tokens, dropping whitespace.

    Raises ``MalformedTemplateError`` on any character outside the grammar.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(source):
        m = _TOKEN_RE.match(source, pos)
        if m is None:
            raise MalformedTemplateError(source, f"Unexpected character {source[pos]!r} at {pos}")
        kind = m.lastgroup or ""
        if kind != "ws":
            tokens.append(Token(kind, m.group(), pos))
        pos = m.end()
    return tokens


# -- Nodes --


@dataclass(frozen=True, slots=True)
class Name:
    """A top-level lookup in the context: ``user``."""

    name: str


@dataclass(frozen=True, slots=True)
class Attr:
    """A dotted accessor: ``user.id``."""

    target: "Node"
    name: str


@dataclass(frozen=True, slots=True)
class Item:
    """A bracket accessor: ``user['id']``, ``items[0]``, ``lookup[key]``."""

    target: "Node"
    index: "Node | Literal"


@dataclass(frozen=True, slots=True)
class Literal:
    value: str | int


Node = Name | Attr | Item


# -- Parser --


class _Parser:
    """Recursive-descent parser over a token list."""

    __slots__ = ("_index", "_source", "_tokens")

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens = tokenize(source)
        self._index = 0

    def parse(self) -> Node:
        if not self._tokens:
            raise MalformedTemplateError(self._source, "Empty expression")
        node = self._path()
        if self._peek() is not None:
            tok = self._tokens[self._index]
            raise MalformedTemplateError(self._source, f"Unexpected {tok.value!r} at {tok.pos}")
        return node

    def _peek(self) -> Token | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self) -> Token:
        tok = self._peek()
        if tok is None:
            raise MalformedTemplateError(self._source, "Unexpected end of expression")
        self._index += 1
        return tok

    def _expect(self, kind: str, value: str | None = None) -> Token:
        tok = self._next()
        if tok.kind != kind or (value is not None and tok.value != value):
            expected = value or kind
            raise MalformedTemplateError(
                self._source, f"Expected {expected!r} at {tok.pos}, got {tok.value!r}"
            )
        return tok

    def _path(self) -> Node:
        node: Node = Name(self._expect("ident").value)
        while (tok := self._peek()) is not None and tok.value in (".", "["):
            self._index += 1
            if tok.value == ".":
                node = Attr(node, self._expect("ident").value)
            else:
                node = Item(node, self._index_expr())
                self._expect("punct", "]")
        return node

    def _index_expr(self) -> "Node | Literal":
        tok = self._peek()
        if tok is None:
            raise MalformedTemplateError(self._source, "Unexpected end of expression")
        if tok.kind == "string":
            self._index += 1
            return Literal(_ESCAPE_RE.sub(r"\1", tok.value[1:-1]))
        if tok.kind == "int":
            self._index += 1
            return Literal(int(tok.value))
        return self._path()


@lru_cache(maxsize=512)
def parse(source: str) -> Node:
    """Parse a path expression into a node tree.

    Raises ``MalformedTemplateError`` if *source* is empty or does not
    follow the grammar. Results are cached; nodes are immutable.
    """
    return _Parser(source).parse()


# -- Evaluation --


def lookup(container: Any, key: str | int) -> Any:
    """Read *key* from *container*, returning ``MISSING`` when absent.

    Mappings are indexed by key, sequences (other than strings) by
    integer, and other objects by public attribute name.
    """
    if container is None or container is MISSING:
        return MISSING
    if isinstance(container, Mapping):
        try:
            return container[key]
        except (KeyError, TypeError):
            return MISSING
    if isinstance(key, int):
        if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
            try:
                return container[key]
            except IndexError:
                return MISSING
        return MISSING
    if key.startswith("_"):
        return MISSING
    return getattr(container, key, MISSING)


def evaluate_node(node: "Node | Literal", context: Any) -> Any:
    """Evaluate a parsed node against *context*."""
    match node:
        case Literal(value=value):
            return value
        case Name(name=name):
            return lookup(context, name)
        case Attr(target=target, name=name):
            return lookup(evaluate_node(target, context), name)
        case Item(target=target, index=index):
            key = evaluate_node(index, context)
            if not isinstance(key, (str, int)) or isinstance(key, bool):
                return MISSING
            return lookup(evaluate_node(target, context), key)
    msg = f"Unknown expression node: {node!r}"
    raise TypeError(msg)


def resolve(source: str, context: Any) -> Any:
    """Parse *source* and evaluate it against *context*.

    Returns ``MISSING`` when any step of the path is absent.
    """
    return evaluate_node(parse(source), context)
