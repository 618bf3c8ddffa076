"""Data models for the action HUD engine.

Modules:
    enums: Action types, tooltip verbosity, training tiers, build modes.
    entities: Game-data snapshot read by the builders.
    actions: Action descriptors, the action collection and layout models.
"""

from __future__ import annotations

from action_hud.models.actions import (
    ActionCollection,
    ActionDescriptor,
    ActionInfo,
    GroupData,
    HudDefaults,
    LayoutGroup,
    LayoutNode,
)
from action_hud.models.entities import (
    AbilityScore,
    ActiveEffect,
    Actor,
    CategoryLabel,
    Combat,
    Combatant,
    Entity,
    GameConfig,
    Item,
    Selection,
    SkillScore,
    StatusCondition,
    Token,
)
from action_hud.models.enums import (
    ActionType,
    BuildMode,
    TooltipVerbosity,
    TrainingLevel,
)


__all__ = [
    # Enums
    "ActionType",
    "BuildMode",
    "TooltipVerbosity",
    "TrainingLevel",
    # Entities
    "Entity",
    "ActiveEffect",
    "StatusCondition",
    "Item",
    "AbilityScore",
    "SkillScore",
    "Actor",
    "Token",
    "Selection",
    "Combatant",
    "Combat",
    "CategoryLabel",
    "GameConfig",
    # Actions
    "ActionInfo",
    "ActionDescriptor",
    "GroupData",
    "ActionCollection",
    "LayoutGroup",
    "LayoutNode",
    "HudDefaults",
]
