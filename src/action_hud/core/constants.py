"""Module-wide constants for the action HUD engine.

This module defines the actor types that get a menu, the static group
table, and the fixed strings shared by the builders and the layout
generator.
"""

from __future__ import annotations

# =============================================================================
# Module Identity
# =============================================================================

MODULE_ID = "token-action-hud-dnd4e"
"""Identifier of this system module in the host."""

CORE_MODULE_ID = "token-action-hud-core"
"""Identifier of the host HUD core module."""

REQUIRED_CORE_MODULE_VERSION = "2.0"
"""Minimum host core version the action handler is written against."""

# =============================================================================
# Actors
# =============================================================================

VALID_ACTOR_TYPES: tuple[str, ...] = ("Player Character", "NPC")
"""Actor types that get an action menu."""

# =============================================================================
# Groups
# =============================================================================

GROUP_TYPE_SYSTEM = "system"
"""Type tag carried by every group this module produces."""

STATIC_GROUPS: dict[str, dict[str, str]] = {
    "abilities": {"id": "abilities", "name": "DND4E.Ability", "type": GROUP_TYPE_SYSTEM},
    "skills": {"id": "skills", "name": "DND4E.Skills", "type": GROUP_TYPE_SYSTEM},
    "conditions": {"id": "conditions", "name": "tokenActionHud.dnd4e.conditions", "type": GROUP_TYPE_SYSTEM},
    "passiveEffects": {"id": "passive-effects", "name": "tokenActionHud.dnd4e.effectPassive", "type": GROUP_TYPE_SYSTEM},
    "temporaryEffects": {"id": "temporary-effects", "name": "tokenActionHud.dnd4e.effectTemporary", "type": GROUP_TYPE_SYSTEM},
    "rests": {"id": "rests", "name": "DND4E.Rests", "type": GROUP_TYPE_SYSTEM},
    "saves": {"id": "saves", "name": "tokenActionHud.dnd4e.saves", "type": GROUP_TYPE_SYSTEM},
    "healing": {"id": "healing", "name": "DND4E.Healing", "type": GROUP_TYPE_SYSTEM},
    "combat": {"id": "combat", "name": "tokenActionHud.combat", "type": GROUP_TYPE_SYSTEM},
    "token": {"id": "token", "name": "tokenActionHud.token", "type": GROUP_TYPE_SYSTEM},
    "utility": {"id": "utility", "name": "tokenActionHud.utility", "type": GROUP_TYPE_SYSTEM},
}
"""Groups that exist independently of the game's category taxonomies."""

POWER_GROUP_SUFFIX = "Power"
"""Suffix appended to power grouping keys to form group ids."""

FEATURE_GROUP_SUFFIX = "Feature"
"""Suffix appended to feature type keys to form group ids at build time."""

OTHER_CATEGORY_KEY = "other"
"""Taxonomy key of the miscellaneous bucket that always sorts last."""

TRIGGERED_POWER_GROUP: dict[str, str] = {
    "name": "triggered-actions",
    "label": "Fox4e.GroupTriggered",
}
"""Synthetic power usage bucket used by a third-party character sheet."""

GROUP_LIST_NAME_PREFIX = "Group: "
"""Prefix of every group's list name."""

# =============================================================================
# Presentation
# =============================================================================

TOOLTIP_CSS_CLASSES: tuple[str, ...] = ("tah-4etooltip",)
"""Classes of the container wrapped around rich tooltip markup."""

POWER_USAGE_CSS_PREFIX = "force-ability-usage--"
"""Prefix of the usage-type CSS class added to power actions."""

RECHARGE_USE_TYPE = "recharge"
"""Power usage type that is never hidden by the hide-used-powers setting."""
