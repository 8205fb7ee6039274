"""Forced-reload decisions.

After a navigation the host router reloads the active view on its own
when the path changes, or when the query changes on a route that
declares ``reload_on_search``. When neither happens but the caller still
navigated (typically to push new application state into the URL), the
view would go stale. ``should_force_reload`` detects that case and
``ReloadScheduler`` arms a one-shot listener that calls
``router.reload()`` once the location change completes.

State machine::

    Idle  --decision=True-->  Armed  --change success-->  Idle
    Armed --decision requested-->  Armed   (no-op, first arm wins)

There is no timeout. If the change never completes, the arm stays
pending and no forced reload happens for it; a warning is logged the
next time a decision is requested past ``stale_reload_after`` seconds.
"""

import logging
import time

from navkit.location.protocol import Location, Router
from navkit.location.snapshot import LocationSnapshot
from navkit.routing.route import RoutePolicy

logger = logging.getLogger("navkit.reload")


class ReloadState:
    """Whether a forced-reload listener is pending.

    One instance is owned by each Navigator. Only the decision engine
    and the armed listener itself change it.
    """

    __slots__ = ("_armed_at",)

    def __init__(self) -> None:
        self._armed_at: float | None = None

    @property
    def armed(self) -> bool:
        return self._armed_at is not None

    @property
    def armed_at(self) -> float | None:
        """``time.monotonic()`` at which the pending listener was armed."""
        return self._armed_at

    def armed_for(self) -> float:
        """Seconds the current arm has been pending, or 0.0 when idle."""
        if self._armed_at is None:
            return 0.0
        return time.monotonic() - self._armed_at

    def _arm(self) -> None:
        self._armed_at = time.monotonic()

    def _disarm(self) -> None:
        self._armed_at = None

    def __repr__(self) -> str:
        if self.armed:
            return f"<ReloadState armed {self.armed_for():.1f}s>"
        return "<ReloadState idle>"


def should_force_reload(
    next_: LocationSnapshot,
    prev: LocationSnapshot,
    policy: RoutePolicy | None,
    state: ReloadState,
    *,
    stale_after: float | None = None,
) -> bool:
    """Decide whether the router needs an explicit reload after a navigation.

    Rules, in order:

    1. A reload is already armed: False.
    2. No active route: False.
    3. Paths differ (``""`` and ``"/"`` count as equal): False, the
       router reloads on path changes itself.
    4. Same path: True when the route does not reload on search changes,
       or when it does but the query is unchanged.
    """
    if state.armed:
        if stale_after is not None and state.armed_for() > stale_after:
            logger.warning(
                "Forced reload armed %.1fs ago is still waiting for a location change to complete",
                state.armed_for(),
            )
        return False

    if policy is None:
        return False

    if not next_.same_path(prev):
        return False

    if not policy.reload_on_search:
        return True
    return next_.same_query(prev)


class ReloadScheduler:
    """Arms the one-shot listener that performs a forced reload."""

    __slots__ = ("_location", "_router", "_state")

    def __init__(self, location: Location, router: Router, state: ReloadState) -> None:
        self._location = location
        self._router = router
        self._state = state

    @property
    def state(self) -> ReloadState:
        return self._state

    def arm(self) -> bool:
        """Register the listener unless one is already pending.

        Returns True when a new listener was armed. On its first call the
        listener unsubscribes itself, clears the armed flag, then calls
        ``router.reload()``, in that order, so the reload cannot
        re-trigger it.
        """
        if self._state.armed:
            return False

        fired = False

        def on_change_success(new_url: str, old_url: str) -> None:
            nonlocal fired
            if fired:
                return
            fired = True
            unsubscribe()
            self._state._disarm()
            logger.debug("forcing route reload after %s -> %s", old_url, new_url)
            self._router.reload()

        unsubscribe = self._location.on_change_success(on_change_success)
        self._state._arm()
        logger.debug("armed forced reload for %s", self._location.url())
        return True
