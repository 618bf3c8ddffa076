"""Action HUD engine for a 4th-edition tabletop game system.

Builds the contextual action menu for the selected token(s): abilities,
skills, powers, inventory, features, conditions, effects and utility
actions, each carrying the encoded value the host dispatches on.

Example:
    >>> from action_hud import ActionHandler, Selection, SheetRuleContext
    >>> handler = ActionHandler(config, SheetRuleContext())
    >>> collection = await handler.build_system_actions(Selection(actor=actor))
    >>> collection.to_host()

Modules:
    core: Configuration, logging, localization and exceptions.
    models: Game-data snapshot and output models.
    engine: Classification, descriptor building, orchestration and layout.
"""

from __future__ import annotations

from action_hud.core.config import HudSettings, Settings, get_settings
from action_hud.core.exceptions import ActionHudError
from action_hud.core.i18n import Localizer
from action_hud.core.logging import configure_logging, get_logger
from action_hud.engine import (
    ActionHandler,
    RuleContext,
    SheetRuleContext,
    SystemManager,
    decode_value,
    encode_value,
    generate_defaults,
)
from action_hud.models import (
    ActionCollection,
    ActionDescriptor,
    ActionType,
    Actor,
    GameConfig,
    HudDefaults,
    Selection,
    Token,
)


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "ActionHudError",
    "HudSettings",
    "Localizer",
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
    # Engine
    "ActionHandler",
    "RuleContext",
    "SheetRuleContext",
    "SystemManager",
    "decode_value",
    "encode_value",
    "generate_defaults",
    # Models
    "ActionCollection",
    "ActionDescriptor",
    "ActionType",
    "Actor",
    "GameConfig",
    "HudDefaults",
    "Selection",
    "Token",
]
