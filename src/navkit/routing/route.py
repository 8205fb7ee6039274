"""RoutePolicy frozen dataclass."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoutePolicy:
    """Reload policy declared by the currently matched route.

    ``reload_on_search``: when True the router reloads the view whenever
    the query string changes. When False query changes never reload it.
    """

    reload_on_search: bool = True
