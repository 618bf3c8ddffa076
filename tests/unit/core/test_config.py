"""Tests for configuration management."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from action_hud.core.config import (
    HudSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from action_hud.core.exceptions import ConfigurationError


class TestHudSettings:
    """Tests for HudSettings."""

    def test_default_values(self) -> None:
        """Test default HUD settings."""
        settings = HudSettings()

        assert settings.display_unequipped is True
        assert settings.hide_used_powers is False
        assert settings.force_power_colours is False
        assert settings.abbreviate_skills is False
        assert settings.tooltips == "full"
        assert settings.delimiter == ":"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings are read from the environment."""
        monkeypatch.setenv("ACTION_HUD_HIDE_USED_POWERS", "true")
        monkeypatch.setenv("ACTION_HUD_TOOLTIPS", "nameOnly")

        settings = HudSettings()

        assert settings.hide_used_powers is True
        assert settings.tooltips == "nameOnly"

    def test_invalid_tooltip_level(self) -> None:
        """Test unknown tooltip verbosity is rejected."""
        with pytest.raises(ValidationError):
            HudSettings(tooltips="verbose")

    @pytest.mark.parametrize("delimiter", ["", " ", "a b"])
    def test_invalid_delimiter(self, delimiter: str) -> None:
        """Test empty or whitespace delimiters are rejected."""
        with pytest.raises(ValidationError):
            HudSettings(delimiter=delimiter)

    def test_frozen(self) -> None:
        """Test settings cannot change once read."""
        settings = HudSettings()
        with pytest.raises(ValidationError):
            settings.hide_used_powers = True

    def test_get_setting_by_host_key(self) -> None:
        """Test reading settings by their camelCase host key."""
        settings = HudSettings(display_unequipped=False, abbreviate_skills=True)

        assert settings.get_setting("displayUnequipped") is False
        assert settings.get_setting("abbreviateSkills") is True
        assert settings.get_setting("tooltips") == "full"

    def test_get_unknown_setting(self) -> None:
        """Test unknown host keys raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            HudSettings().get_setting("showEverything")
        assert exc_info.value.details["config_key"] == "showEverything"


class TestSettings:
    """Tests for the main Settings class."""

    def test_default_settings(self) -> None:
        """Test default application settings."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.json_logs is False
        assert isinstance(settings.hud, HudSettings)


class TestGetSettings:
    """Tests for the get_settings singleton."""

    def test_returns_cached_instance(self) -> None:
        """Test settings are cached."""
        assert get_settings() is get_settings()

    def test_clear_cache(self) -> None:
        """Test clearing the cache reloads settings."""
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first

    def test_invalid_environment_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test load failures surface as ConfigurationError."""
        monkeypatch.setenv("ACTION_HUD_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()
        assert "original_error" in exc_info.value.details
