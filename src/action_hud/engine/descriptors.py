"""Conversion of entities into action descriptors.

Every menu entry is created here. :func:`build_action` is the shared
constructor for item-like entities (inventory, powers, features,
effects); the ``*_action`` functions map the remaining variants
(abilities, skills, conditions, utility) onto the same descriptor.

Conversions never raise: a failing entity is logged with its payload and
comes back as None, which the action collection drops.
"""

from __future__ import annotations

import asyncio
import html
from collections.abc import Iterable

from action_hud.core.exceptions import ActionBuildError
from action_hud.engine.context import BuildContext, log_error
from action_hud.engine.tooltips import resolve_text, resolve_tooltip
from action_hud.models.actions import ActionDescriptor, ActionInfo
from action_hud.models.entities import AbilityScore, Entity, SkillScore, StatusCondition
from action_hud.models.enums import ActionType, TrainingLevel


# =============================================================================
# Encoding
# =============================================================================


def encode_value(action_type: ActionType | str, action_id: str, delimiter: str) -> str:
    """Join an action type and id into the value the dispatch layer decodes.

    Example:
        >>> encode_value(ActionType.ABILITY, "strength", ":")
        'ability:strength'
    """
    return delimiter.join([str(action_type), action_id])


def decode_value(encoded_value: str, delimiter: str) -> tuple[str, str]:
    """Split an encoded value back into action type and id.

    The action type never contains the delimiter, so splitting at the
    first occurrence recovers ids that do.

    Raises:
        ActionBuildError: If the value has no delimiter.
    """
    action_type, found, action_id = encoded_value.partition(delimiter)
    if not found:
        raise ActionBuildError(
            "Encoded value has no delimiter",
            details={"encoded_value": encoded_value, "delimiter": delimiter},
        )
    return action_type, action_id


# =============================================================================
# Formatting
# =============================================================================


def format_modifier(mod: int | float | str | None) -> str:
    """Format a modifier with an explicit sign ("+3", "-1", "+0")."""
    if mod is None or mod == "":
        return ""
    value = int(mod)
    return f"{value:+d}"


def training_icon(level: int | None, hover: str = "") -> str | None:
    """Icon markup for a skill training tier, None for untrained or unknown."""
    try:
        glyph = TrainingLevel(level).icon
    except ValueError:
        return None
    if not glyph:
        return None
    return f'<i class="{glyph}" title="{html.escape(hover, quote=True)}"></i>'


# =============================================================================
# Shared Builder
# =============================================================================


async def build_action(
    ctx: BuildContext,
    action_type: ActionType,
    entity: Entity,
) -> ActionDescriptor | None:
    """Convert one entity into an action descriptor.

    Args:
        ctx: The current build context.
        action_type: Action type written into the encoded value.
        entity: The entity to convert.

    Returns:
        The descriptor, or None if the entity could not be converted.
    """
    try:
        entity_id = entity.entity_id
        if entity_id is None:
            raise ActionBuildError("Entity has no id", action_type=action_type)

        css_class = None
        disabled = getattr(entity, "disabled", None)
        if isinstance(disabled, bool):
            css_class = "toggle" if disabled else "toggle active"

        return ActionDescriptor(
            id=entity_id,
            name=entity.display_name,
            encoded_value=encode_value(action_type, entity_id, ctx.delimiter),
            img=entity.img,
            css_class=css_class,
            tooltip=await resolve_tooltip(ctx, entity),
        )
    except Exception as exc:
        log_error(exc, entity)
        return None


async def gather_actions(
    ctx: BuildContext,
    action_type: ActionType,
    entities: Iterable[Entity],
) -> list[ActionDescriptor | None]:
    """Convert entities concurrently, keeping input order.

    Failed conversions are None at their position.
    """
    results = await asyncio.gather(
        *(build_action(ctx, action_type, entity) for entity in entities),
        return_exceptions=True,
    )
    return [result if isinstance(result, ActionDescriptor) else None for result in results]


async def build_actions(
    ctx: BuildContext,
    action_type: ActionType,
    entities: Iterable[Entity],
) -> list[ActionDescriptor]:
    """Convert entities concurrently and keep the successes, in input order."""
    return [action for action in await gather_actions(ctx, action_type, entities) if action]


# =============================================================================
# Variants
# =============================================================================


def ability_action(
    ctx: BuildContext,
    ability_id: str,
    ability: AbilityScore | None,
) -> ActionDescriptor | None:
    """Ability check action. ``ability`` is None when built from the config table."""
    try:
        if ctx.settings.abbreviate_skills:
            name = ability_id
        else:
            name = ctx.i18n(ctx.config.abilities.get(ability_id, ability_id))
        info1 = None
        if ctx.actor is not None and ability is not None:
            info1 = ActionInfo(text=format_modifier(ability.mod))
        return ActionDescriptor(
            id=ability_id,
            name=name,
            encoded_value=encode_value(ActionType.ABILITY, ability_id, ctx.delimiter),
            info1=info1,
            tooltip="",
        )
    except Exception as exc:
        log_error(exc, {"ability": ability_id})
        return None


def skill_action(
    ctx: BuildContext,
    skill_id: str,
    skill: SkillScore | None,
) -> ActionDescriptor | None:
    """Skill check action with its training icon and tier tooltip."""
    try:
        if ctx.settings.abbreviate_skills:
            name = skill_id
        else:
            name = ctx.i18n(ctx.config.skills.get(skill_id, skill_id))

        tooltip = ""
        icon1 = None
        info1 = None
        if skill is not None:
            tooltip = resolve_text(ctx, ctx.i18n(ctx.config.training_levels.get(skill.training)))
            icon1 = training_icon(skill.training, skill.tooltip)
            if ctx.actor is not None:
                info1 = ActionInfo(text=format_modifier(skill.total))

        return ActionDescriptor(
            id=skill_id,
            name=name,
            encoded_value=encode_value(ActionType.SKILL, skill_id, ctx.delimiter),
            icon1=icon1,
            info1=info1,
            tooltip=tooltip,
        )
    except Exception as exc:
        log_error(exc, {"skill": skill_id})
        return None


async def condition_action(
    ctx: BuildContext,
    condition: StatusCondition,
) -> ActionDescriptor | None:
    """Status condition toggle, active only if every selected actor has it."""
    try:
        condition_id = condition.entity_id
        if not condition_id:
            raise ActionBuildError("Condition has no id", action_type=ActionType.CONDITION)

        active = all(actor.has_status(condition_id) for actor in ctx.actors)
        return ActionDescriptor(
            id=condition_id,
            name=ctx.i18n(condition.label) or condition.name,
            encoded_value=encode_value(ActionType.CONDITION, condition_id, ctx.delimiter),
            img=condition.img,
            css_class="toggle active" if active else "toggle",
            tooltip=await resolve_tooltip(ctx, ctx.i18n(condition.description)),
        )
    except Exception as exc:
        log_error(exc, condition)
        return None


def utility_action(
    ctx: BuildContext,
    action_id: str,
    name_key: str,
    value: str | None = None,
) -> ActionDescriptor:
    """Synthetic action with no backing entity.

    Args:
        ctx: The current build context.
        action_id: Descriptor id.
        name_key: Localization key of the display name.
        value: Id written into the encoded value, defaults to ``action_id``.
    """
    return ActionDescriptor(
        id=action_id,
        name=ctx.i18n(name_key),
        encoded_value=encode_value(ActionType.UTILITY, value or action_id, ctx.delimiter),
    )


__all__ = [
    "encode_value",
    "decode_value",
    "format_modifier",
    "training_icon",
    "build_action",
    "gather_actions",
    "build_actions",
    "ability_action",
    "skill_action",
    "condition_action",
    "utility_action",
]
