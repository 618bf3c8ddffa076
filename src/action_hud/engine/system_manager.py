"""Host lifecycle integration.

The host signals once that its core API is ready. At that point the
default layout is generated from the game configuration; it is cached and
only regenerated when the taxonomy version changes. The manager also hands
out the action handler used for every rebuild.
"""

from __future__ import annotations

from collections.abc import Callable

from action_hud.core.config import HudSettings
from action_hud.core.constants import CORE_MODULE_ID, MODULE_ID, REQUIRED_CORE_MODULE_VERSION
from action_hud.core.exceptions import LayoutError
from action_hud.core.i18n import Localizer
from action_hud.core.logging import get_logger
from action_hud.engine.action_handler import ActionHandler, hud_settings
from action_hud.engine.context import RuleContext
from action_hud.engine.defaults import generate_defaults
from action_hud.models.actions import HudDefaults
from action_hud.models.entities import GameConfig


logger = get_logger(__name__)


class SystemManager:
    """Owns the long-lived collaborators of the HUD system module.

    Example:
        >>> manager = SystemManager(config, rules, i18n)
        >>> defaults = manager.on_core_ready()
        >>> handler = manager.get_action_handler()
    """

    module_id = MODULE_ID
    core_module_id = CORE_MODULE_ID
    required_core_version = REQUIRED_CORE_MODULE_VERSION

    def __init__(
        self,
        config: GameConfig | None,
        rules: RuleContext,
        i18n: Localizer | None = None,
        settings_provider: Callable[[], HudSettings] = hud_settings,
    ) -> None:
        self.config = config
        self.rules = rules
        self.i18n = i18n or Localizer()
        self._settings_provider = settings_provider
        self._defaults: HudDefaults | None = None
        self._defaults_version: str | None = None

    @property
    def defaults(self) -> HudDefaults | None:
        """The generated defaults, None before the core is ready."""
        return self._defaults

    def on_core_ready(self, config: GameConfig | None = None) -> HudDefaults:
        """Generate the default layout, once per taxonomy version.

        Args:
            config: Updated game configuration, if the host has a newer one.

        Returns:
            The default layout and groups.

        Raises:
            LayoutError: If no game configuration is available.
        """
        if config is not None:
            self.config = config
        if self.config is None:
            raise LayoutError("Game configuration is not available", taxonomy="config")

        if self._defaults is not None and self._defaults_version == self.config.version:
            return self._defaults

        logger.info("Generating default layout", taxonomy_version=self.config.version)
        self._defaults = generate_defaults(self.config, self.i18n)
        self._defaults_version = self.config.version
        logger.debug("Defaults set", defaults=self._defaults.model_dump_json(by_alias=True))
        return self._defaults

    def get_action_handler(self) -> ActionHandler:
        """Create the action handler for the current configuration.

        Raises:
            LayoutError: If no game configuration is available.
        """
        if self.config is None:
            raise LayoutError("Game configuration is not available", taxonomy="config")
        return ActionHandler(
            self.config,
            self.rules,
            self.i18n,
            settings_provider=self._settings_provider,
        )


__all__ = ["SystemManager"]
