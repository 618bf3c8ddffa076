"""Per-category action builders.

Each builder reads the build context, converts the relevant entities into
descriptors and adds them to the action collection under the group ids
it owns. Group ids never overlap between builders, so the concurrent
builders can finish in any order without changing the result.

Builders:
    build_abilities, build_skills, build_utility: synchronous.
    build_powers, build_inventory, build_features, build_conditions,
    build_effects: asynchronous, run concurrently in single-actor mode.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence

from action_hud.core.constants import (
    FEATURE_GROUP_SUFFIX,
    POWER_GROUP_SUFFIX,
    POWER_USAGE_CSS_PREFIX,
    RECHARGE_USE_TYPE,
)
from action_hud.core.exceptions import CategoryBuildError
from action_hud.engine.classifier import classify
from action_hud.engine.context import BuildContext, log_error
from action_hud.engine.descriptors import (
    ability_action,
    build_actions,
    condition_action,
    gather_actions,
    skill_action,
    utility_action,
)
from action_hud.models.actions import ActionCollection, ActionDescriptor, ActionInfo, GroupData
from action_hud.models.entities import ActiveEffect, Item
from action_hud.models.enums import ActionType


# =============================================================================
# Abilities and Skills
# =============================================================================


def build_abilities(ctx: BuildContext, collection: ActionCollection) -> None:
    """Ability checks; from the config table when no single actor is selected."""
    if ctx.actor is not None:
        entries = [
            (ability_id, ability)
            for ability_id, ability in ctx.actor.abilities.items()
            if ability.value != 0
        ]
    else:
        entries = [(ability_id, None) for ability_id in ctx.config.abilities]

    actions = [ability_action(ctx, ability_id, ability) for ability_id, ability in entries]
    collection.add_actions(actions, GroupData(id="abilities"))


def build_skills(ctx: BuildContext, collection: ActionCollection) -> None:
    """Skill checks; from the config table when no single actor is selected."""
    if ctx.actor is not None:
        entries = list(ctx.actor.skills.items())
    else:
        entries = [(skill_id, None) for skill_id in ctx.config.skills]

    actions = [skill_action(ctx, skill_id, skill) for skill_id, skill in entries]
    collection.add_actions(actions, GroupData(id="skills"))


# =============================================================================
# Powers
# =============================================================================


def refresh_power_availability(ctx: BuildContext, powers: Sequence[Item]) -> list[bool | None]:
    """Query availability of every power.

    The query also refreshes each power's cached availability flag, which
    recharge powers rely on, so it runs for every power whether or not the
    result is used for filtering. A power whose query fails is logged and
    reported as None.
    """
    availability: list[bool | None] = []
    for power in powers:
        try:
            availability.append(bool(ctx.rules.is_power_available(ctx.actor, power)))
        except Exception as exc:
            log_error(exc, power)
            availability.append(None)
    return availability


def filter_used_powers(
    ctx: BuildContext,
    powers: Sequence[Item],
    availability: Sequence[bool | None],
) -> list[Item]:
    """Drop unavailable non-recharge powers when hide-used is on.

    Powers whose availability could not be queried are always dropped.
    """
    hide_used = ctx.settings.hide_used_powers
    return [
        power
        for power, available in zip(powers, availability)
        if available is not None
        and (not hide_used or available or power.use_type == RECHARGE_USE_TYPE)
    ]


async def _build_power_group(
    ctx: BuildContext,
    grouping_key: str,
    powers: Sequence[Item],
) -> tuple[GroupData, list[ActionDescriptor]]:
    availability = refresh_power_availability(ctx, powers)
    visible = filter_used_powers(ctx, powers, availability)

    actions: list[ActionDescriptor] = []
    for power, action in zip(visible, await gather_actions(ctx, ActionType.POWER, visible)):
        if action is None:
            continue
        if ctx.settings.force_power_colours:
            action = action.model_copy(
                update={"css_class": f"{POWER_USAGE_CSS_PREFIX}{power.use_type}"}
            )
        actions.append(action)

    return GroupData(id=f"{grouping_key}{POWER_GROUP_SUFFIX}"), actions


async def build_powers(ctx: BuildContext, collection: ActionCollection) -> None:
    """Powers bucketed by the rule context's sheet groupings."""
    groupings = ctx.rules.powers_by_sheet_group(ctx.actor)
    if not isinstance(groupings, Mapping):
        raise CategoryBuildError(
            "Power groupings must be a mapping",
            category="powers",
            details={"received": type(groupings).__name__},
        )

    results = await asyncio.gather(
        *(_build_power_group(ctx, key, list(powers)) for key, powers in groupings.items())
    )
    for group_data, actions in results:
        collection.add_actions(actions, group_data)


# =============================================================================
# Inventory and Features
# =============================================================================


async def _add_buckets(
    ctx: BuildContext,
    collection: ActionCollection,
    buckets: Mapping[str, Mapping[str | None, Item]],
    action_type: ActionType,
    group_suffix: str = "",
) -> None:
    keys = list(buckets)
    results = await asyncio.gather(
        *(build_actions(ctx, action_type, buckets[key].values()) for key in keys)
    )
    for key, actions in zip(keys, results):
        collection.add_actions(actions, GroupData(id=f"{key}{group_suffix}"))


async def build_inventory(ctx: BuildContext, collection: ActionCollection) -> None:
    """Inventory items by item type; unequipped ones only if the setting allows."""
    display_unequipped = ctx.settings.display_unequipped
    buckets = classify(
        ctx.items,
        ctx.config.inventory_types,
        predicate=lambda item: item.equipped or display_unequipped,
    )
    await _add_buckets(ctx, collection, buckets, ActionType.ITEM)


async def build_features(ctx: BuildContext, collection: ActionCollection) -> None:
    """Feature items by feature type."""
    buckets = classify(
        ctx.items,
        ctx.config.feature_types,
        predicate=lambda item: item.type == "feature",
        key=lambda item: item.feature_type,
    )
    await _add_buckets(ctx, collection, buckets, ActionType.FEATURE, FEATURE_GROUP_SUFFIX)


# =============================================================================
# Conditions and Effects
# =============================================================================


async def build_conditions(ctx: BuildContext, collection: ActionCollection) -> None:
    """Status condition toggles for every selected actor."""
    if not ctx.actors:
        return

    conditions = [condition for condition in ctx.config.status_effects if condition.entity_id]
    if not conditions:
        return

    actions = await asyncio.gather(*(condition_action(ctx, condition) for condition in conditions))
    collection.add_actions(actions, GroupData(id="conditions"))


async def build_effects(ctx: BuildContext, collection: ActionCollection) -> None:
    """Effects on the actor and its items, split into passive and temporary."""
    effects: dict[str | None, ActiveEffect] = {}
    for effect in ctx.actor.all_applicable_effects():
        effects[effect.entity_id] = effect
    if not effects:
        return

    passive = [effect for effect in effects.values() if not effect.is_temporary]
    temporary = [effect for effect in effects.values() if effect.is_temporary]

    passive_actions, temporary_actions = await asyncio.gather(
        build_actions(ctx, ActionType.EFFECT, passive),
        build_actions(ctx, ActionType.EFFECT, temporary),
    )
    collection.add_actions(passive_actions, GroupData(id="passive-effects"))
    collection.add_actions(temporary_actions, GroupData(id="temporary-effects"))


# =============================================================================
# Utility
# =============================================================================


def _current_initiative(ctx: BuildContext) -> float | None:
    if ctx.token is None or ctx.combat is None:
        return None
    return ctx.combat.initiative_for(ctx.token.id)


def _format_initiative(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_utility(ctx: BuildContext, collection: ActionCollection) -> None:
    """Saves, initiative, action point and healing shortcuts."""
    if not ctx.actors:
        return

    hide_used = ctx.settings.hide_used_powers
    actor = ctx.actor

    collection.add_actions(
        [
            utility_action(ctx, "save", "DND4E.SavingThrow"),
            utility_action(ctx, "saveDialog", "Show Save Dialog"),
            utility_action(ctx, "deathSave", "DND4E.DeathSavingThrow"),
        ],
        GroupData(id="saves"),
    )

    initiative = utility_action(ctx, "rollInitiative", "tokenActionHud.dnd4e.rollInitiative", "initiative")
    current = _current_initiative(ctx)
    if current is not None:
        initiative = initiative.model_copy(
            update={"info1": ActionInfo(text=_format_initiative(current)), "css_class": "active"}
        )
    else:
        initiative = initiative.model_copy(update={"css_class": ""})
    collection.add_actions([initiative], GroupData(id="combat"))

    # more than one action point per encounter is allowed, so only an empty pool hides it
    if not hide_used or (actor is not None and actor.action_points > 0):
        collection.add_actions(
            [utility_action(ctx, "actionPoint", "DND4E.ActionPointUse")],
            GroupData(id="combat"),
        )

    healing = [utility_action(ctx, "heal", "DND4E.Healing", "healDialog")]
    if not hide_used or actor is None or not actor.second_wind_used:
        healing.append(utility_action(ctx, "secondWind", "DND4E.SecondWind"))
    collection.add_actions(healing, GroupData(id="healing"))


__all__ = [
    "build_abilities",
    "build_skills",
    "refresh_power_availability",
    "filter_used_powers",
    "build_powers",
    "build_inventory",
    "build_features",
    "build_conditions",
    "build_effects",
    "build_utility",
]
