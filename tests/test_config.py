"""Tests for navkit.config — NavConfig frozen dataclass."""

import pytest

from navkit.config import NavConfig
from navkit.errors import ConfigurationError


class TestNavConfig:
    def test_defaults(self) -> None:
        cfg = NavConfig()

        assert cfg.href_prefix == "#"
        assert cfg.routes_attr == "routes"
        assert cfg.stale_reload_after == 30.0

    def test_override(self) -> None:
        cfg = NavConfig(href_prefix="#!", routes_attr="links", stale_reload_after=5.0)

        assert cfg.href_prefix == "#!"
        assert cfg.routes_attr == "links"
        assert cfg.stale_reload_after == 5.0

    def test_frozen(self) -> None:
        cfg = NavConfig()

        with pytest.raises(AttributeError):
            cfg.href_prefix = "/"  # type: ignore[misc]

    def test_empty_href_prefix_allowed(self) -> None:
        assert NavConfig(href_prefix="").href_prefix == ""

    def test_rejects_empty_routes_attr(self) -> None:
        with pytest.raises(ConfigurationError, match="routes_attr"):
            NavConfig(routes_attr="")

    def test_rejects_negative_stale_threshold(self) -> None:
        with pytest.raises(ConfigurationError, match="stale_reload_after"):
            NavConfig(stale_reload_after=-1.0)
