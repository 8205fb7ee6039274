"""URL template evaluation.

Templates contain double-curly placeholders evaluated against a context::

    evaluate("/users/{{ user.id }}/posts?q={{ query | lower }}", ctx)

Each placeholder is checked and emitted in two steps:

1. The *key* (the text before the first ``|``) is resolved with the
   path-expression language in ``navkit.templating.expression``. If it
   is missing from the context, evaluation fails with
   ``UnresolvedExpressionError`` and nothing is returned.
2. The full expression is emitted. A bare path is rendered directly; a
   filtered expression is rendered by kida, so any kida filter (built-in,
   navkit's, or caller-registered) can shape the output.

The result is URI-component-encoded before substitution.
"""

import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any
from urllib.parse import quote

from kida import Environment
from kida.exceptions import TemplateRuntimeError, TemplateSyntaxError, UndefinedError
from kida.lexer import LexerError

from navkit.errors import MalformedTemplateError, UnresolvedExpressionError
from navkit.templating.expression import MISSING, lookup, resolve
from navkit.templating.filters import BUILTIN_FILTERS

# A match stops at the first "}"; nested braces are not supported.
PLACEHOLDER_RE = re.compile(r"\{\{([^}]*)\}\}")

# encodeURIComponent leaves these unescaped in addition to letters, digits and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(text: str) -> str:
    """Percent-encode *text* for use as a single URI component."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def to_text(value: Any) -> str:
    """Convert a resolved value to the text placed in the URL."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def split_key(expression: str) -> str:
    """Return the placeholder key: the expression with filters stripped."""
    return expression.split("|", 1)[0].strip()


# Identifiers outside quoted strings; string literals match without a group.
_NAME_RE = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|([A-Za-z_][A-Za-z0-9_]*)""")


def _namespace(expression: str, context: Any) -> dict[str, Any]:
    """Expose the names *expression* mentions to kida as a plain dict.

    Only referenced names are read from an object context, so unrelated
    properties are never evaluated.
    """
    if context is None:
        return {}
    if isinstance(context, Mapping):
        return dict(context)
    namespace: dict[str, Any] = {}
    for m in _NAME_RE.finditer(expression):
        name = m.group(1)
        if name is None or name in namespace:
            continue
        value = lookup(context, name)
        if value is not MISSING:
            namespace[name] = value
    return namespace


class UrlTemplateEvaluator:
    """Evaluates URL templates against a read-only context.

    Owns a kida Environment (autoescape off, since output is URI-encoded
    rather than HTML) with navkit's built-in filters registered. Extra
    filters may be passed at construction and override the built-ins.

    Evaluation is pure: the same template and context always produce the
    same string. Compiled filter expressions are cached per evaluator,
    bounded like the path-expression parse cache.
    """

    __slots__ = ("_compile", "_env")

    def __init__(self, filters: Mapping[str, Callable[..., Any]] | None = None) -> None:
        env = Environment(autoescape=False)
        env.update_filters(BUILTIN_FILTERS)
        if filters:
            env.update_filters(dict(filters))
        self._env = env
        self._compile = lru_cache(maxsize=256)(self._compile_expression)

    def evaluate(self, template: str, context: Any = None) -> str:
        """Substitute every placeholder in *template*.

        Raises ``UnresolvedExpressionError`` if a placeholder's key is
        missing from *context*, and ``MalformedTemplateError`` if a
        placeholder is empty or cannot be parsed. No partial result is
        ever returned.
        """

        def replace(match: re.Match[str]) -> str:
            return encode_uri_component(self.render_expression(match.group(1), context))

        return PLACEHOLDER_RE.sub(replace, template)

    def render_expression(self, expression: str, context: Any) -> str:
        """Check one placeholder's key and render its full expression as text."""
        key = split_key(expression)
        if not key:
            raise MalformedTemplateError(expression, "Empty template expression")

        value = resolve(key, context)
        if value is MISSING:
            raise UnresolvedExpressionError(expression)

        if "|" not in expression:
            return to_text(value)
        return self._render_filtered(expression, context)

    def _compile_expression(self, expression: str) -> Any:
        try:
            return self._env.from_string("{{ " + expression.strip() + " }}")
        except (TemplateSyntaxError, LexerError) as exc:
            raise MalformedTemplateError(expression, f"Invalid filter expression ({exc})") from exc

    def _render_filtered(self, expression: str, context: Any) -> str:
        compiled = self._compile(expression)
        try:
            return compiled.render(_namespace(expression, context))
        except UndefinedError as exc:
            raise UnresolvedExpressionError(expression) from exc
        except TemplateRuntimeError as exc:
            raise MalformedTemplateError(expression, f"Filter expression failed ({exc})") from exc


_default: UrlTemplateEvaluator | None = None


def evaluate(template: str, context: Any = None) -> str:
    """Evaluate *template* with a shared default evaluator.

    See ``UrlTemplateEvaluator.evaluate``.
    """
    global _default
    if _default is None:
        _default = UrlTemplateEvaluator()
    return _default.evaluate(template, context)
