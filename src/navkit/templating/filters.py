"""Built-in navkit URL filters.

Registered on the kida Environment every ``UrlTemplateEvaluator`` owns.
They complement Kida's built-in filters (``upper``, ``lower``,
``default``, ...) with shaping helpers common in URL templates. Output is
URI-component-encoded after filtering, so filters return plain text.
"""

import re
import unicodedata
from collections.abc import Iterable
from typing import Any

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_DASH_RE = re.compile(r"[-\s]+")


def slug(value: Any) -> str:
    """Lowercase, ASCII-fold, and dash-join a value for use in a path.

    Example:
        /posts/{{ post.id }}/{{ post.title | slug }}
        → /posts/7/hello-world   (when title is "Hello, World!")

    """
    text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    text = _SLUG_STRIP_RE.sub("", text).strip().lower()
    return _SLUG_DASH_RE.sub("-", text)


def csv(values: Iterable[Any] | None, sep: str = ",") -> str:
    """Join a list into one query value.

    Example:
        /search?tags={{ tags | csv }}  → /search?tags=a%2Cb   (when tags is ["a", "b"])

    """
    if values is None:
        return ""
    if isinstance(values, str):
        return values
    return sep.join(str(v) for v in values)


BUILTIN_FILTERS: dict[str, Any] = {
    "csv": csv,
    "slug": slug,
}
