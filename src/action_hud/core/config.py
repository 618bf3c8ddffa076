"""Configuration management for the action HUD engine.

Settings are loaded with pydantic-settings from environment variables or a
``.env`` file. The HUD settings are frozen: one instance is read at the
start of every build and cannot change while the build runs.

Example:
    >>> from action_hud.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.hud.tooltips
    'full'

Environment Variables:
    ACTION_HUD_DISPLAY_UNEQUIPPED: Show unequipped inventory items.
    ACTION_HUD_HIDE_USED_POWERS: Hide expended powers and used resources.
    ACTION_HUD_FORCE_POWER_COLOURS: Colour power entries by usage type.
    ACTION_HUD_ABBREVIATE_SKILLS: Show ability/skill ids instead of labels.
    ACTION_HUD_TOOLTIPS: Tooltip verbosity (none, nameOnly, full).
    ACTION_HUD_DELIMITER: Separator used in encoded action values.
    ACTION_HUD_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from action_hud.core.exceptions import ConfigurationError


TooltipSetting = Literal["none", "nameOnly", "full"]


class HudSettings(BaseSettings):
    """User-facing HUD settings read at the start of each build.

    Attributes:
        display_unequipped: Include inventory items that are not equipped.
        hide_used_powers: Hide unavailable powers, spent action points and
            a used second wind.
        force_power_colours: Add a usage-type CSS class to power actions.
        abbreviate_skills: Use ability/skill ids as display names.
        tooltips: Tooltip verbosity.
        delimiter: Separator between action type and id in encoded values.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACTION_HUD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    display_unequipped: bool = Field(
        default=True,
        description="Show unequipped inventory items",
    )
    hide_used_powers: bool = Field(
        default=False,
        description="Hide used powers and expended resources",
    )
    force_power_colours: bool = Field(
        default=False,
        description="Colour power actions by usage type",
    )
    abbreviate_skills: bool = Field(
        default=False,
        description="Show abbreviated ability and skill names",
    )
    tooltips: TooltipSetting = Field(
        default="full",
        description="Tooltip verbosity",
    )
    delimiter: str = Field(
        default=":",
        min_length=1,
        description="Separator for encoded action values",
    )

    @field_validator("delimiter", mode="after")
    @classmethod
    def validate_delimiter(cls, value: str) -> str:
        """Reject delimiters that cannot survive a round trip through the host.

        Args:
            value: The delimiter to validate.

        Returns:
            The validated delimiter.

        Raises:
            ValueError: If the delimiter contains whitespace.
        """
        if any(ch.isspace() for ch in value):
            msg = f"Delimiter must not contain whitespace, got {value!r}"
            raise ValueError(msg)
        return value

    def get_setting(self, key: str) -> Any:
        """Read a setting by the host's camelCase key.

        Args:
            key: Setting key as registered with the host (e.g. ``hideUsedPowers``).

        Returns:
            The setting value.

        Raises:
            ConfigurationError: If the key is not a known setting.
        """
        attribute = SETTING_KEYS.get(key)
        if attribute is None:
            raise ConfigurationError(f"Unknown setting: {key}", config_key=key)
        return getattr(self, attribute)


SETTING_KEYS: dict[str, str] = {
    "displayUnequipped": "display_unequipped",
    "hideUsedPowers": "hide_used_powers",
    "forcePowerColours": "force_power_colours",
    "abbreviateSkills": "abbreviate_skills",
    "tooltips": "tooltips",
    "delimiter": "delimiter",
}
"""Host setting keys mapped to HudSettings attributes."""


class Settings(BaseSettings):
    """Application settings aggregating logging and HUD configuration.

    Attributes:
        app_name: Application name.
        log_level: Logging level.
        json_logs: Render logs as JSON.
        hud: HUD behaviour settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACTION_HUD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Token Action HUD D&D 4e",
        description="Application name",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    hud: HudSettings = Field(default_factory=HudSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "TooltipSetting",
    "HudSettings",
    "SETTING_KEYS",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
