"""Shared fakes for navkit tests."""

from dataclasses import dataclass, field

import pytest

from navkit.location.memory import MemoryLocation
from navkit.routing.route import RoutePolicy


class RecordingRouter:
    """A router whose active policy is set by the test and whose reloads are counted."""

    def __init__(self, policy: RoutePolicy | None = None) -> None:
        self.policy = policy
        self.reloads = 0

    def current_policy(self) -> RoutePolicy | None:
        return self.policy

    def reload(self) -> None:
        self.reloads += 1


@dataclass
class FilterState:
    """App state serialized into the ``_a`` query param."""

    query: str = "*"
    columns: list[str] = field(default_factory=list)

    def query_param_name(self) -> str:
        return "_a"

    def to_query_param(self) -> str:
        return f"(query:{self.query},columns:!({','.join(self.columns)}))"


@pytest.fixture
def location() -> MemoryLocation:
    return MemoryLocation("/a?x=1")


@pytest.fixture
def router() -> RecordingRouter:
    return RecordingRouter(RoutePolicy(reload_on_search=True))
