"""Navigator — the public URL-navigation surface.

Smooths over the ways a plain location API misbehaves when used
directly. Beyond parameterized URLs and app-state merging, it
guarantees that navigating to a URL that resolves to the current route
still results in a full route reload, even when the router would
otherwise only update the location in place.

Usage::

    nav = Navigator(location, router)
    nav.change("/users/{{ id }}", {"id": 42})
    nav.redirect("/login")                  # replaces the history entry
    nav.change_to_route(user, "edit")       # user.routes["edit"] is a template
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Literal

from navkit.config import NavConfig
from navkit.errors import UnknownRouteError
from navkit.location.protocol import AppState, Location, Router
from navkit.location.snapshot import LocationSnapshot
from navkit.routing.reload import ReloadScheduler, ReloadState, should_force_reload
from navkit.templating.evaluator import UrlTemplateEvaluator

logger = logging.getLogger("navkit.navigator")

ChangeKind = Literal["url", "path"]


class Navigator:
    """Navigate a ``Location``, forcing router reloads where needed.

    The router is optional. Without one, navigations never arm a forced
    reload. Each Navigator owns its own ``ReloadState``.
    """

    __slots__ = ("_config", "_evaluator", "_location", "_reload_state", "_router", "_scheduler")

    def __init__(
        self,
        location: Location,
        router: Router | None = None,
        *,
        config: NavConfig | None = None,
        evaluator: UrlTemplateEvaluator | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self._location = location
        self._router = router
        self._config = config or NavConfig()
        self._evaluator = evaluator or UrlTemplateEvaluator(filters)
        self._reload_state = ReloadState()
        self._scheduler = (
            ReloadScheduler(location, router, self._reload_state) if router is not None else None
        )

    @property
    def config(self) -> NavConfig:
        return self._config

    @property
    def location(self) -> Location:
        return self._location

    @property
    def reload_state(self) -> ReloadState:
        return self._reload_state

    # -- Templates --

    def evaluate(self, template: str, params: Any = None) -> str:
        """Evaluate a URL template. See ``UrlTemplateEvaluator.evaluate``."""
        return self._evaluator.evaluate(template, params)

    # -- Navigation --

    def change(self, url: str, params: Any = None, app_state: AppState | None = None) -> None:
        """Navigate to *url* (a template evaluated against *params*)."""
        self._change_location("url", url, params, replace=False, app_state=app_state)

    def change_path(self, path: str, params: Any = None) -> None:
        """Like ``change`` but only the path changes; search and hash are kept."""
        self._change_location("path", path, params, replace=False)

    def redirect(self, url: str, params: Any = None, app_state: AppState | None = None) -> None:
        """Like ``change`` but replaces the current history entry."""
        self._change_location("url", url, params, replace=True, app_state=app_state)

    def redirect_path(self, path: str, params: Any = None) -> None:
        """Like ``redirect`` but only the path changes."""
        self._change_location("path", path, params, replace=True)

    def remove_param(self, name: str) -> None:
        """Remove one search param without adding a history entry."""
        self._location.set_search(name, None)
        self._location.replace()

    # -- Named routes --

    def get_route_url(self, obj: Any, route: str) -> str | None:
        """Evaluate the object's named route template against the object.

        Objects list their templates under ``config.routes_attr``
        (``obj.routes`` or ``obj["routes"]``). Returns None when the
        object lists no template for *route*.
        """
        template = self._route_template(obj, route)
        if not template:
            return None
        return self.evaluate(template, obj)

    def get_route_href(self, obj: Any, route: str) -> str | None:
        """Like ``get_route_url`` but prefixed for hash-based links (``#/...``)."""
        url = self.get_route_url(obj, route)
        if url is None:
            return None
        return self._config.href_prefix + url

    def change_to_route(self, obj: Any, route: str) -> None:
        """Navigate to the object's named route. See ``change``."""
        self.change(self._require_route_url(obj, route))

    def redirect_to_route(self, obj: Any, route: str) -> None:
        """Redirect to the object's named route. See ``redirect``."""
        self.redirect(self._require_route_url(obj, route))

    def _require_route_url(self, obj: Any, route: str) -> str:
        url = self.get_route_url(obj, route)
        if url is None:
            raise UnknownRouteError(route)
        return url

    def _route_template(self, obj: Any, route: str) -> str | None:
        if obj is None:
            return None
        attr = self._config.routes_attr
        if isinstance(obj, Mapping):
            routes = obj.get(attr)
        else:
            routes = getattr(obj, attr, None)
        if not isinstance(routes, Mapping):
            return None
        return routes.get(route)

    # -- Internals --

    def _change_location(
        self,
        kind: ChangeKind,
        url: str,
        params: Any,
        *,
        replace: bool,
        app_state: AppState | None = None,
    ) -> None:
        prev = LocationSnapshot.capture(self._location)

        # Evaluation errors propagate before the location is touched.
        target = self.evaluate(url, params)
        if kind == "url":
            self._location.set_url(target)
        else:
            self._location.set_path(target)
        if replace:
            self._location.replace()

        if app_state is not None:
            self._location.set_search(app_state.query_param_name(), app_state.to_query_param())

        next_ = LocationSnapshot.capture(self._location)
        logger.debug("%s %s -> %s", "redirect" if replace else "change", prev.path, next_.path)

        if self._router is None or self._scheduler is None:
            return

        if should_force_reload(
            next_,
            prev,
            self._router.current_policy(),
            self._reload_state,
            stale_after=self._config.stale_reload_after,
        ):
            self._scheduler.arm()
