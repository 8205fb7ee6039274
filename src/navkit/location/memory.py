"""In-memory location — a headless implementation of the Location protocol.

Holds path, search params and hash, a history stack, and change-success
listeners. Mutations are staged until ``commit()`` completes the
transition, which is when listeners run. This mirrors how a browser
router applies location changes on its next tick.

Usage::

    location = MemoryLocation("/inbox?page=2")
    location.set_search("page", "3")
    location.commit()
    location.url()   # "/inbox?page=3"
"""

import logging

from navkit.location.protocol import ChangeListener, Unsubscribe
from navkit.location.query import SearchValue, format_query, parse_query

logger = logging.getLogger("navkit.location")


def _normalize_path(path: str) -> str:
    return path if path.startswith("/") else "/" + path


class MemoryLocation:
    """A location kept entirely in memory.

    ``history`` records one entry per committed transition; a transition
    marked with ``replace()`` overwrites the latest entry instead.
    """

    __slots__ = ("_hash", "_history", "_listeners", "_path", "_pending", "_query", "_replace")

    def __init__(self, url: str = "") -> None:
        self._path = ""
        self._query: dict[str, SearchValue] = {}
        self._hash = ""
        self._listeners: list[ChangeListener] = []
        self._pending = False
        self._replace = False
        if url:
            self._apply_url(url)
        self._history: list[str] = [self.url()]

    # -- Reads --

    def path(self) -> str:
        return self._path

    def hash(self) -> str:
        return self._hash

    def search(self) -> dict[str, SearchValue]:
        """Return a copy of the current search params."""
        return {k: list(v) if isinstance(v, list) else v for k, v in self._query.items()}

    def url(self) -> str:
        """Return path, query string and hash as one relative URL."""
        out = self._path
        query = format_query(self._query)
        if query:
            out += "?" + query
        if self._hash:
            out += "#" + self._hash
        return out

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def pending(self) -> bool:
        """True when mutations are staged but not yet committed."""
        return self._pending

    # -- Mutations --

    def set_path(self, path: str) -> None:
        """Change only the path; search params and hash are kept."""
        self._path = _normalize_path(path)
        self._pending = True

    def set_url(self, url: str) -> None:
        """Change path, search params and hash together.

        Parts missing from *url* are cleared: ``set_url("/a")`` drops the
        current query string and hash.
        """
        self._apply_url(url)
        self._pending = True

    def set_search(self, name: str, value: SearchValue | None) -> None:
        """Set one search param; ``None`` removes it."""
        if value is None:
            self._query.pop(name, None)
        elif isinstance(value, str):
            self._query[name] = value
        else:
            self._query[name] = list(value)
        self._pending = True

    def set_hash(self, value: str) -> None:
        self._hash = value
        self._pending = True

    def replace(self) -> None:
        """Mark the staged transition as replacing the current history entry."""
        self._replace = True

    def _apply_url(self, url: str) -> None:
        rest, _, fragment = url.partition("#")
        path, _, query = rest.partition("?")
        if path:
            self._path = _normalize_path(path)
        self._query = parse_query(query)
        self._hash = fragment

    # -- Transitions --

    def on_change_success(self, listener: ChangeListener) -> Unsubscribe:
        """Register *listener* for completed transitions.

        Returns a handle that removes the listener. Calling the handle
        more than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def commit(self) -> bool:
        """Complete the staged transition and notify listeners.

        Returns False (and does nothing) when no mutation is staged.
        Listeners are called with ``(new_url, old_url)`` over a copy of
        the listener list, so a listener may unsubscribe itself.
        """
        if not self._pending:
            return False

        old_url = self._history[-1]
        new_url = self.url()
        if self._replace:
            self._history[-1] = new_url
        else:
            self._history.append(new_url)
        self._pending = False
        self._replace = False

        logger.debug("location change %s -> %s", old_url, new_url)
        for listener in list(self._listeners):
            listener(new_url, old_url)
        return True
