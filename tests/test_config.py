"""Tests for ajax_dispatch.config — frozen DispatcherConfig."""

import pytest

from ajax_dispatch.config import DispatcherConfig


class TestDispatcherConfig:
    def test_defaults(self) -> None:
        config = DispatcherConfig()
        assert config.discriminator == "handler"
        assert config.ajax_header == "X-Requested-With"
        assert config.ajax_header_value == "XMLHttpRequest"
        assert config.max_body_size == 1024 * 1024

    def test_override(self) -> None:
        config = DispatcherConfig(discriminator="action", max_body_size=10)
        assert config.discriminator == "action"
        assert config.max_body_size == 10

    def test_frozen(self) -> None:
        config = DispatcherConfig()
        with pytest.raises(AttributeError):
            config.discriminator = "other"  # type: ignore[misc]
