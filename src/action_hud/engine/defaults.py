"""Default group and layout generation.

Turns the game's category taxonomies into the default groups and the
layout tree the host renders as the menu skeleton. Feature and inventory
types map one-to-one onto groups, feature ids carrying a ``Feature``
suffix so they cannot collide with inventory ids. Power groupings are two levels deep
(grouping scheme, then bucket) and are flattened by bucket key, with a
synthetic ``triggered`` bucket added for a third-party character sheet.

The output depends only on the configuration and the localization table,
so generating it twice for the same taxonomy version gives equal results.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from action_hud.core.constants import (
    FEATURE_GROUP_SUFFIX,
    GROUP_LIST_NAME_PREFIX,
    GROUP_TYPE_SYSTEM,
    OTHER_CATEGORY_KEY,
    POWER_GROUP_SUFFIX,
    STATIC_GROUPS,
    TRIGGERED_POWER_GROUP,
)
from action_hud.core.exceptions import LayoutError
from action_hud.core.i18n import Localizer
from action_hud.core.logging import get_logger
from action_hud.models.actions import HudDefaults, LayoutGroup, LayoutNode
from action_hud.models.entities import CategoryLabel, GameConfig


logger = get_logger(__name__)


def taxonomy_to_groups(
    taxonomy: Mapping[str, CategoryLabel],
    id_suffix: str,
) -> dict[str, dict[str, str]]:
    """Convert a taxonomy table into raw group definitions.

    Args:
        taxonomy: Category key mapped to its label.
        id_suffix: Appended to each key to form the group id.

    Returns:
        Group id mapped to ``{"id", "name", "type"}``; ``name`` is still a
        localization key.
    """
    groups: dict[str, dict[str, str]] = {}
    for key, value in taxonomy.items():
        group_id = f"{key}{id_suffix}"
        groups[group_id] = {"id": group_id, "name": value.label, "type": GROUP_TYPE_SYSTEM}
    return groups


def flatten_power_groupings(
    power_groupings: Mapping[str, Mapping[str, CategoryLabel]],
) -> dict[str, CategoryLabel]:
    """Flatten the two-level power groupings by bucket key.

    A key present in several groupings keeps the last label seen.
    """
    flattened: dict[str, CategoryLabel] = {}
    for grouping in power_groupings.values():
        for key, value in grouping.items():
            flattened[key] = value
    flattened["triggered"] = CategoryLabel(**TRIGGERED_POWER_GROUP)
    return flattened


def group_to_layout(
    group_type: str,
    groups: Iterable[LayoutGroup],
    other_id: str,
) -> list[LayoutGroup]:
    """Nest groups under a layout node, with the "other" group last.

    The sort is stable, so every other group keeps its relative order.
    """
    nested = [group.model_copy(update={"nest_id": f"{group_type}_{group.id}"}) for group in groups]
    return sorted(nested, key=lambda group: group.id == other_id)


def _localize_groups(
    raw_groups: Mapping[str, Mapping[str, str]],
    i18n: Localizer,
) -> dict[str, LayoutGroup]:
    localized: dict[str, LayoutGroup] = {}
    for group_id, raw in raw_groups.items():
        name = i18n(raw["name"])
        localized[group_id] = LayoutGroup(
            id=raw["id"],
            name=name,
            list_name=f"{GROUP_LIST_NAME_PREFIX}{i18n(name)}",
            type=raw.get("type", GROUP_TYPE_SYSTEM),
        )
    return localized


def _nest(groups: Mapping[str, LayoutGroup], group_id: str, nest_id: str) -> LayoutGroup:
    return groups[group_id].model_copy(update={"nest_id": nest_id})


def generate_defaults(
    config: GameConfig | Mapping[str, Any],
    i18n: Localizer | None = None,
) -> HudDefaults:
    """Build the default layout and groups from the game configuration.

    Args:
        config: Game configuration tables, as a model or raw mapping.
        i18n: Localization lookup.

    Returns:
        The layout tree (seven top-level nodes) and the flat group list.

    Raises:
        LayoutError: If the configuration tables do not have the expected shape.
    """
    i18n = i18n or Localizer()
    if not isinstance(config, GameConfig):
        try:
            config = GameConfig.model_validate(config)
        except ValidationError as exc:
            raise LayoutError(
                "Game configuration taxonomies are malformed",
                details={"errors": exc.error_count()},
            ) from exc

    feature_groups = taxonomy_to_groups(config.feature_types, FEATURE_GROUP_SUFFIX)
    inventory_groups = taxonomy_to_groups(config.inventory_types, "")
    power_groups = taxonomy_to_groups(
        flatten_power_groupings(config.power_groupings),
        POWER_GROUP_SUFFIX,
    )

    raw_groups: dict[str, dict[str, str]] = {
        **{key: dict(group) for key, group in STATIC_GROUPS.items()},
        **feature_groups,
        **inventory_groups,
        **power_groups,
    }
    groups = _localize_groups(raw_groups, i18n)

    def taxonomy_node(node_id: str, name_key: str, group_ids: Iterable[str], other_id: str) -> LayoutNode:
        return LayoutNode(
            nest_id=node_id,
            id=node_id,
            name=i18n(name_key),
            groups=group_to_layout(node_id, (groups[group_id] for group_id in group_ids), other_id),
        )

    layout = [
        LayoutNode(
            nest_id="abilities",
            id="abilities",
            name=i18n("DND4E.Ability"),
            groups=[_nest(groups, "abilities", "abilities_abilities")],
        ),
        LayoutNode(
            nest_id="skills",
            id="skills",
            name=i18n("DND4E.Skills"),
            groups=[_nest(groups, "skills", "skills_skills")],
        ),
        taxonomy_node("powers", "DND4E.Powers", power_groups, f"{OTHER_CATEGORY_KEY}{POWER_GROUP_SUFFIX}"),
        taxonomy_node("features", "DND4E.Features", feature_groups, f"{OTHER_CATEGORY_KEY}{FEATURE_GROUP_SUFFIX}"),
        taxonomy_node("inventory", "DND4E.Inventory", inventory_groups, OTHER_CATEGORY_KEY),
        LayoutNode(
            nest_id="effects",
            id="effects",
            name=i18n("tokenActionHud.dnd4e.conditions"),
            groups=[
                _nest(groups, "conditions", "effects_conditions"),
                _nest(groups, "temporaryEffects", "effects_temporary-effects"),
                _nest(groups, "passiveEffects", "effects_passive-effects"),
            ],
        ),
        LayoutNode(
            nest_id="utility",
            id="utility",
            name=i18n("tokenActionHud.utility"),
            groups=[
                _nest(groups, "combat", "utility_combat"),
                _nest(groups, "saves", "utility_saves"),
                _nest(groups, "healing", "utility_heal"),
                _nest(groups, "token", "utility_token"),
                _nest(groups, "rests", "utility_rests"),
                _nest(groups, "utility", "utility_utility"),
            ],
        ),
    ]

    return HudDefaults(layout=layout, groups=list(groups.values()))


__all__ = [
    "taxonomy_to_groups",
    "flatten_power_groupings",
    "group_to_layout",
    "generate_defaults",
]
