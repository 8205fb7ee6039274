"""LocationSnapshot — an immutable (path, query) pair taken around a mutation."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from navkit.location.protocol import Location


def _freeze_query(
    query: Mapping[str, str | Sequence[str]],
) -> Mapping[str, str | tuple[str, ...]]:
    frozen: dict[str, str | tuple[str, ...]] = {}
    for key, value in query.items():
        frozen[key] = value if isinstance(value, str) else tuple(value)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class LocationSnapshot:
    """The path and search params of a location at one instant.

    List values are frozen into tuples and the mapping is read-only, so a
    snapshot cannot drift after capture.
    """

    path: str
    query: Mapping[str, str | tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "query", _freeze_query(self.query))

    @classmethod
    def capture(cls, location: "Location") -> "LocationSnapshot":
        """Snapshot the current path and search params of *location*."""
        return cls(path=location.path(), query=location.search())

    @property
    def normalized_path(self) -> str:
        """The path with ``""`` and ``"/"`` treated as the same root."""
        return self.path or "/"

    def same_path(self, other: "LocationSnapshot") -> bool:
        return self.normalized_path == other.normalized_path

    def same_query(self, other: "LocationSnapshot") -> bool:
        """True when both snapshots hold the same keys and values, in any key order."""
        return dict(self.query) == dict(other.query)
