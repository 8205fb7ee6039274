"""Structural protocols for the collaborators a Navigator drives.

The host supplies a ``Location`` (required), a ``Router`` (optional),
and any number of ``AppState`` objects. Structural typing keeps navkit
decoupled from the concrete host types.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from navkit.location.query import SearchValue
from navkit.routing.route import RoutePolicy

ChangeListener = Callable[[str, str], None]
"""Called with ``(new_url, old_url)`` after a location change succeeds."""

Unsubscribe = Callable[[], None]


@runtime_checkable
class Location(Protocol):
    """A mutable browser-style location.

    Mutations are staged; the host completes the transition later and
    notifies change-success listeners once it has.
    """

    def path(self) -> str: ...
    def set_path(self, path: str) -> None: ...
    def url(self) -> str: ...
    def set_url(self, url: str) -> None: ...
    def search(self) -> dict[str, SearchValue]: ...
    def set_search(self, name: str, value: SearchValue | None) -> None: ...
    def replace(self) -> None: ...
    def on_change_success(self, listener: ChangeListener) -> Unsubscribe: ...


@runtime_checkable
class Router(Protocol):
    """The host router: exposes the active route's policy and can reload it."""

    def current_policy(self) -> RoutePolicy | None: ...
    def reload(self) -> None: ...


@runtime_checkable
class AppState(Protocol):
    """Application state that serializes itself into one query param."""

    def query_param_name(self) -> str: ...
    def to_query_param(self) -> str: ...
