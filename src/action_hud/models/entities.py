"""Game-data snapshot models consumed by the action builders.

These models describe the slice of the game's actor, item and effect
records that the HUD reads. The host converts its live documents into
these models once per build; the engine never writes to them except
through the rule context (which may refresh a power's cached
availability).

Entities share a small base that resolves the id and display name the
way every builder needs them: the primary ``id`` with a fallback to the
legacy ``_id`` field, and ``name`` with a fallback to ``label``.

Fields accept the host's camelCase keys (``useType``, ``featureTypes``)
as well as their snake_case names.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Base Entity
# =============================================================================


class Entity(BaseModel):
    """Base class for records that become actions.

    Attributes:
        id: Primary identifier.
        legacy_id: Older identifier field (``_id``) still present on some
            game-data versions.
        name: Display name.
        label: Label key, used when no name is set.
        img: Image path shown next to the action.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    id: str | None = Field(default=None, description="Primary identifier")
    legacy_id: str | None = Field(default=None, alias="_id", description="Legacy identifier")
    name: str | None = Field(default=None, description="Display name")
    label: str | None = Field(default=None, description="Label key")
    img: str | None = Field(default=None, description="Image path")

    @property
    def entity_id(self) -> str | None:
        """Primary id, falling back to the legacy id."""
        return self.id if self.id is not None else self.legacy_id

    @property
    def display_name(self) -> str | None:
        """Name, falling back to the label."""
        return self.name if self.name is not None else self.label


# =============================================================================
# Effects and Conditions
# =============================================================================


class ActiveEffect(Entity):
    """An effect applied to an actor, directly or transferred from an item.

    Attributes:
        type: Document subtype; effects are always ``base``.
        disabled: Effect is suppressed. Its presence makes the action a toggle.
        is_temporary: Effect has a duration (goes to the temporary group).
        statuses: Status condition ids this effect represents.
        status_id: Single status id stored by older game-data versions.
        transfer: Effect carried by an item applies to the owning actor.
        description: Plain-text description used for tooltips.
    """

    type: str = Field(default="base")
    disabled: bool = Field(default=False)
    is_temporary: bool = Field(default=False)
    statuses: set[str] = Field(default_factory=set)
    status_id: str | None = Field(default=None)
    transfer: bool = Field(default=True)
    description: str | None = Field(default=None)

    def has_status(self, status_id: str) -> bool:
        """Whether this effect currently applies the given status.

        Disabled effects never count.
        """
        if self.disabled:
            return False
        return status_id in self.statuses or self.status_id == status_id


class StatusCondition(Entity):
    """An entry of the game's status effect catalog.

    Attributes:
        description: Localization key of the condition's description.
    """

    description: str | None = Field(default=None)


# =============================================================================
# Items
# =============================================================================


class Item(Entity):
    """An owned item: inventory piece, power or feature.

    Attributes:
        type: Item type key (``weapon``, ``power``, ``feature`` ...).
        equipped: Item is equipped (inventory only).
        use_type: Power usage type (``atwill``, ``encounter``, ``recharge`` ...).
        feature_type: Feature type key (features only).
        description: Plain description text.
        available: Cached availability, refreshed by the rule context.
        effects: Effects carried by the item.
    """

    type: str = Field(description="Item type key")
    equipped: bool = Field(default=False)
    use_type: str | None = Field(default=None)
    feature_type: str | None = Field(default=None)
    description: str | None = Field(default=None)
    available: bool | None = Field(default=None)
    effects: list[ActiveEffect] = Field(default_factory=list)

    def get_chat_data(self) -> dict[str, Any]:
        """Data the rule context renders into a chat card or tooltip.

        Returns:
            Mapping with the fields a chat card shows.
        """
        return {
            "name": self.display_name,
            "type": self.type,
            "description": self.description or "",
            "use_type": self.use_type,
        }


# =============================================================================
# Actor
# =============================================================================


class AbilityScore(BaseModel):
    """One ability score with its modifier."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    value: int = Field(default=10)
    mod: int | None = Field(default=None)


class SkillScore(BaseModel):
    """One skill with its total bonus and training tier.

    Attributes:
        total: Total skill bonus.
        training: Training tier (0, 5 or 8).
        tooltip: Hover text for the training icon.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    total: int | None = Field(default=None)
    training: int = Field(default=0)
    tooltip: str = Field(default="")


class Actor(BaseModel):
    """A character or creature with the records the HUD reads.

    Attributes:
        id: Actor identifier.
        name: Actor name.
        type: Actor type (``Player Character``, ``NPC`` ...).
        abilities: Ability scores by ability id.
        skills: Skills by skill id.
        items: Owned items.
        effects: Effects applied directly to the actor.
        action_points: Remaining action points.
        second_wind_used: Second wind already used this encounter.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    id: str
    name: str = Field(default="")
    type: str
    abilities: dict[str, AbilityScore] = Field(default_factory=dict)
    skills: dict[str, SkillScore] = Field(default_factory=dict)
    items: list[Item] = Field(default_factory=list)
    effects: list[ActiveEffect] = Field(default_factory=list)
    action_points: int = Field(default=0, ge=0)
    second_wind_used: bool = Field(default=False)

    def all_applicable_effects(self) -> Iterator[ActiveEffect]:
        """Yield the actor's own effects, then effects transferred by items."""
        yield from self.effects
        for item in self.items:
            for effect in item.effects:
                if effect.transfer:
                    yield effect

    def has_status(self, status_id: str) -> bool:
        """Whether any enabled effect on this actor applies the status."""
        return any(effect.has_status(status_id) for effect in self.effects)


class Token(BaseModel):
    """A placed token, optionally linked to an actor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    name: str = Field(default="")
    actor: Actor | None = Field(default=None)


class Selection(BaseModel):
    """What the user has selected when a build starts.

    Attributes:
        actor: The single selected actor, if exactly one is selected.
        token: The primary token of the single selection.
        controlled_tokens: All controlled tokens (multi-selection).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    actor: Actor | None = Field(default=None)
    token: Token | None = Field(default=None)
    controlled_tokens: list[Token] = Field(default_factory=list)


# =============================================================================
# Combat Tracker
# =============================================================================


class Combatant(BaseModel):
    """A combat tracker entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token_id: str
    initiative: float | None = Field(default=None)


class Combat(BaseModel):
    """The active combat encounter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    combatants: list[Combatant] = Field(default_factory=list)

    def initiative_for(self, token_id: str) -> float | None:
        """Current initiative of the combatant for a token, if any."""
        for combatant in self.combatants:
            if combatant.token_id == token_id:
                return combatant.initiative
        return None


# =============================================================================
# Game Configuration
# =============================================================================


class CategoryLabel(BaseModel):
    """One entry of a category taxonomy table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    label: str
    name: str | None = Field(default=None)


class GameConfig(BaseModel):
    """Global configuration tables of the game system.

    Attributes:
        abilities: Ability ids mapped to label keys.
        skills: Skill ids mapped to label keys.
        inventory_types: Inventory item types.
        feature_types: Feature types.
        power_groupings: Power groupings, two levels deep
            (grouping scheme, then bucket key).
        status_effects: Status condition catalog.
        training_levels: Training tiers mapped to label keys.
        version: Taxonomy version; the layout is regenerated when it changes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    abilities: dict[str, str] = Field(default_factory=dict)
    skills: dict[str, str] = Field(default_factory=dict)
    inventory_types: dict[str, CategoryLabel] = Field(default_factory=dict)
    feature_types: dict[str, CategoryLabel] = Field(default_factory=dict)
    power_groupings: dict[str, dict[str, CategoryLabel]] = Field(default_factory=dict)
    status_effects: list[StatusCondition] = Field(default_factory=list)
    training_levels: dict[int, str] = Field(default_factory=dict)
    version: str = Field(default="0")


__all__ = [
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
]
