"""Pytest configuration and shared fixtures.

This module provides the game configuration, a scriptable rule context
and factories for actors, settings and build contexts used across the
action HUD test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from action_hud.core.config import HudSettings
from action_hud.core.i18n import Localizer
from action_hud.engine.action_handler import ActionHandler
from action_hud.engine.context import BuildContext
from action_hud.models.entities import (
    AbilityScore,
    ActiveEffect,
    Actor,
    CategoryLabel,
    GameConfig,
    Item,
    SkillScore,
    StatusCondition,
)
from action_hud.models.enums import BuildMode


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from action_hud.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_settings() -> Callable[..., HudSettings]:
    """Factory for HUD settings with overrides."""

    def factory(**overrides: Any) -> HudSettings:
        return HudSettings(**overrides)

    return factory


@pytest.fixture
def i18n() -> Localizer:
    """Localizer with a handful of translations."""
    return Localizer(
        {
            "DND4E.AbilityStr": "Strength",
            "DND4E.AbilityDex": "Dexterity",
            "DND4E.SkillAthletics": "Athletics",
            "DND4E.SkillStealth": "Stealth",
            "DND4E.Trained": "Trained",
            "DND4E.Focused": "Skill Focus",
            "DND4E.Untrained": "Untrained",
            "DND4E.ActionStandard": "Standard Action",
            "DND4E.ActionMinor": "Minor Action",
            "DND4E.Other": "Other",
            "DND4E.Powers": "Powers",
            "DND4E.Skills": "Skills",
            "DND4E.SavingThrow": "Saving Throw",
            "EFFECT.StatusDazed": "Dazed",
            "EFFECT.StatusProne": "Prone",
            "EFFECT.DescDazed": "You can take only one action.",
            "Longsword": "Longsword (localized)",
        }
    )


@pytest.fixture
def game_config() -> GameConfig:
    """Game configuration tables of a small 4e ruleset."""
    return GameConfig(
        abilities={"strength": "DND4E.AbilityStr", "dexterity": "DND4E.AbilityDex"},
        skills={"athletics": "DND4E.SkillAthletics", "stealth": "DND4E.SkillStealth"},
        inventory_types={
            "weapon": CategoryLabel(label="DND4E.ItemTypeWeapon"),
            "equipment": CategoryLabel(label="DND4E.ItemTypeEquipment"),
            "consumable": CategoryLabel(label="DND4E.ItemTypeConsumable"),
        },
        feature_types={
            "classFeats": CategoryLabel(label="DND4E.FeatClass"),
            "raceFeats": CategoryLabel(label="DND4E.FeatRace"),
            "other": CategoryLabel(label="DND4E.Other"),
        },
        power_groupings={
            "action": {
                "standard": CategoryLabel(label="DND4E.ActionStandard"),
                "minor": CategoryLabel(label="DND4E.ActionMinor"),
                "other": CategoryLabel(label="DND4E.Other"),
            },
            "usage": {
                "atwill": CategoryLabel(label="DND4E.PowerAt"),
                "encounter": CategoryLabel(label="DND4E.PowerEnc"),
                "recharge": CategoryLabel(label="DND4E.PowerRecharge"),
            },
        },
        status_effects=[
            StatusCondition(id="dazed", label="EFFECT.StatusDazed", description="EFFECT.DescDazed", img="icons/dazed.svg"),
            StatusCondition(id="prone", label="EFFECT.StatusProne", img="icons/prone.svg"),
            StatusCondition(id="", label="EFFECT.Blank"),
        ],
        training_levels={0: "DND4E.Untrained", 5: "DND4E.Trained", 8: "DND4E.Focused"},
        version="1",
    )


# =============================================================================
# Rule Context
# =============================================================================


class FakeRules:
    """Scriptable rule context.

    Attributes:
        unavailable: Power ids reported as unavailable.
        failing_tooltips: Item ids whose tooltip rendering raises.
        failing_powers: Power ids whose availability query raises.
        queried: Power ids passed to is_power_available, in call order.
        groupings: Overrides the sheet groupings when set.
    """

    def __init__(self) -> None:
        self.unavailable: set[str] = set()
        self.failing_tooltips: set[str] = set()
        self.failing_powers: set[str] = set()
        self.queried: list[str] = []
        self.groupings: Any = None

    def powers_by_sheet_group(self, actor: Actor) -> Any:
        if self.groupings is not None:
            return self.groupings
        groups: dict[str, list[Item]] = {}
        for item in actor.items:
            if item.type == "power":
                groups.setdefault(item.use_type or "other", []).append(item)
        return groups

    def is_power_available(self, actor: Actor, power: Item) -> bool:
        self.queried.append(power.entity_id)
        if power.entity_id in self.failing_powers:
            raise RuntimeError(f"cannot query {power.entity_id}")
        available = power.entity_id not in self.unavailable
        power.available = available
        return available

    async def generate_item_tooltip(self, actor: Actor, item: Item) -> str:
        if item.entity_id in self.failing_tooltips:
            raise RuntimeError(f"cannot render {item.entity_id}")
        return f"<p>{item.name}</p>"


@pytest.fixture
def rules() -> FakeRules:
    """A fresh scriptable rule context."""
    return FakeRules()


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def make_actor() -> Callable[..., Actor]:
    """Factory for actors with sensible defaults."""

    def factory(actor_id: str = "actor1", **overrides: Any) -> Actor:
        data: dict[str, Any] = {
            "id": actor_id,
            "name": "Valenae",
            "type": "Player Character",
        }
        data.update(overrides)
        return Actor(**data)

    return factory


@pytest.fixture
def sample_actor(make_actor: Callable[..., Actor]) -> Actor:
    """A character with one of everything."""
    return make_actor(
        abilities={
            "strength": AbilityScore(value=16, mod=3),
            "dexterity": AbilityScore(value=12, mod=-1),
        },
        skills={
            "athletics": SkillScore(total=8, training=5, tooltip="Trained in Athletics"),
            "stealth": SkillScore(total=2, training=0),
        },
        items=[
            Item(id="sword", name="Longsword", type="weapon", equipped=True, description="A blade."),
            Item(id="rope", name="Rope", type="equipment", equipped=False),
            Item(id="cleave", name="Cleave", type="power", use_type="atwill"),
            Item(id="breath", name="Dragon Breath", type="power", use_type="encounter"),
            Item(id="recharge1", name="Tail Slap", type="power", use_type="recharge"),
            Item(id="feat1", name="Weapon Focus", type="feature", feature_type="classFeats"),
            Item(
                id="ring",
                name="Ring of Protection",
                type="equipment",
                equipped=True,
                effects=[ActiveEffect(id="ringfx", name="Protected", is_temporary=False)],
            ),
        ],
        effects=[
            ActiveEffect(id="bless", name="Bless", is_temporary=True),
            ActiveEffect(id="dazedfx", name="Dazed", statuses={"dazed"}, is_temporary=True),
        ],
        action_points=1,
    )


@pytest.fixture
def make_context(
    game_config: GameConfig,
    rules: FakeRules,
    i18n: Localizer,
) -> Callable[..., BuildContext]:
    """Factory for build contexts; single mode when an actor is given."""

    def factory(
        actor: Actor | None = None,
        actors: tuple[Actor, ...] | None = None,
        settings: HudSettings | None = None,
        **overrides: Any,
    ) -> BuildContext:
        if actors is None:
            actors = (actor,) if actor is not None else ()
        mode = BuildMode.SINGLE if actor is not None else BuildMode.MULTI
        data: dict[str, Any] = {
            "mode": mode,
            "actor": actor,
            "actors": actors,
            "token": None,
            "settings": settings or HudSettings(),
            "config": game_config,
            "rules": rules,
            "i18n": i18n,
        }
        data.update(overrides)
        return BuildContext(**data)

    return factory


@pytest.fixture
def make_handler(
    game_config: GameConfig,
    rules: FakeRules,
    i18n: Localizer,
) -> Callable[..., ActionHandler]:
    """Factory for action handlers bound to fixed settings."""

    def factory(settings: HudSettings | None = None, **overrides: Any) -> ActionHandler:
        fixed = settings or HudSettings()
        return ActionHandler(
            overrides.get("config", game_config),
            overrides.get("rules", rules),
            i18n,
            settings_provider=lambda: fixed,
        )

    return factory
