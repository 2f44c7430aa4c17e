"""
Unit tests for singleton providers.

Tests cover:
- get_settings() caching behavior
- Cache clearing picks up environment changes
"""

import pytest

from infrastructure.configuration import Settings
from infrastructure.services import get_settings


@pytest.mark.unit
class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        instance1 = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not instance1

    def test_cache_clear_picks_up_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        first = get_settings()
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert get_settings().LOG_LEVEL == first.LOG_LEVEL == "INFO"
        get_settings.cache_clear()
        assert get_settings().LOG_LEVEL == "DEBUG"
