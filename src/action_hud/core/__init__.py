"""Core module providing configuration, logging, localization and exceptions.

Exports:
    Exceptions:
        ActionHudError: Base exception for all engine errors.
        ConfigurationError, ActionBuildError, CategoryBuildError,
        TooltipError, LayoutError.

    Configuration:
        Settings, HudSettings, get_settings, clear_settings_cache.

    Logging:
        configure_logging, get_logger, bind_context, clear_context.

    Localization:
        Localizer.
"""

from __future__ import annotations

from action_hud.core.config import (
    HudSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from action_hud.core.exceptions import (
    ActionBuildError,
    ActionHudError,
    CategoryBuildError,
    ConfigurationError,
    LayoutError,
    TooltipError,
)
from action_hud.core.i18n import Localizer
from action_hud.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "ActionHudError",
    "ConfigurationError",
    "ActionBuildError",
    "CategoryBuildError",
    "TooltipError",
    "LayoutError",
    # Configuration
    "Settings",
    "HudSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Localization
    "Localizer",
]
