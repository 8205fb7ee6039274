"""Navigator configuration.

NavConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from navkit.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class NavConfig:
    """Navigator configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = NavConfig(href_prefix="#!", stale_reload_after=10.0)
    """

    # Links
    href_prefix: str = "#"  # Prepended by get_route_href() for hash-based linking
    routes_attr: str = "routes"  # Where objects list their named URL templates

    # Reload diagnostics
    stale_reload_after: float = 30.0  # Seconds an arm may stay pending before a warning

    def __post_init__(self) -> None:
        if not self.routes_attr:
            msg = "NavConfig.routes_attr must be a non-empty attribute name."
            raise ConfigurationError(msg)
        if self.stale_reload_after < 0:
            msg = (
                "NavConfig.stale_reload_after must be >= 0, "
                f"got {self.stale_reload_after!r}."
            )
            raise ConfigurationError(msg)
