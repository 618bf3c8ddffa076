"""Enumeration types for the action HUD engine."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ActionType(StrEnum):
    """Kind of action, the first half of every encoded value.

    The dispatch layer routes a click by this value, so the strings are
    part of the wire contract with the host.
    """

    ABILITY = "ability"
    SKILL = "skill"
    ITEM = "item"
    POWER = "power"
    FEATURE = "feature"
    CONDITION = "condition"
    EFFECT = "effect"
    UTILITY = "utility"


class TooltipVerbosity(StrEnum):
    """How much tooltip content to produce."""

    NONE = "none"
    NAME_ONLY = "nameOnly"
    FULL = "full"


class TrainingLevel(IntEnum):
    """Skill training tiers as stored on the actor."""

    UNTRAINED = 0
    TRAINED = 5
    FOCUSED = 8

    @property
    def icon(self) -> str:
        """Font Awesome class of the glyph drawn for this tier ("" for none)."""
        icons: dict[TrainingLevel, str] = {
            TrainingLevel.UNTRAINED: "",
            TrainingLevel.TRAINED: "fas fa-check",
            TrainingLevel.FOCUSED: "fas fa-check-double",
        }
        return icons[self]


class BuildMode(StrEnum):
    """Which menu the orchestrator builds for the current selection."""

    SINGLE = "single"
    MULTI = "multi"
    IDLE = "idle"
