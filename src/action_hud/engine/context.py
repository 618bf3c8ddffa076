"""Read-only build context and the rule-context interface.

A :class:`BuildContext` is created at the start of every build and passed
to every builder. It holds the selection, the settings read for this
build, the game configuration tables and the collaborators the builders
query. Nothing in it is written during the build.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from action_hud.core.config import HudSettings
from action_hud.core.i18n import Localizer
from action_hud.core.logging import get_logger
from action_hud.models.entities import Actor, Combat, GameConfig, Item, Token
from action_hud.models.enums import BuildMode, TooltipVerbosity


logger = get_logger(__name__)


# =============================================================================
# Rule Context
# =============================================================================


@runtime_checkable
class RuleContext(Protocol):
    """Game-rule queries the builders depend on.

    Implemented by the host's game-system integration.
    """

    def powers_by_sheet_group(self, actor: Actor) -> Mapping[str, Sequence[Item]]:
        """Powers of an actor bucketed the way the character sheet shows them."""
        ...

    def is_power_available(self, actor: Actor, power: Item) -> bool:
        """Whether a power can be used now.

        Also refreshes the power's cached ``available`` flag.
        """
        ...

    async def generate_item_tooltip(self, actor: Actor, item: Item) -> str:
        """Render an item's chat card markup for use as a tooltip."""
        ...


class SheetRuleContext:
    """Minimal rule context driven purely by the item records.

    Powers are bucketed by usage type, availability is read from the
    cached flag (missing means available), and tooltips are rendered from
    the item's chat data. Useful for headless hosts and tests.
    """

    def powers_by_sheet_group(self, actor: Actor) -> dict[str, list[Item]]:
        groups: dict[str, list[Item]] = {}
        for item in actor.items:
            if item.type == "power":
                groups.setdefault(item.use_type or "other", []).append(item)
        return groups

    def is_power_available(self, actor: Actor, power: Item) -> bool:
        available = power.available is not False
        power.available = available
        return available

    async def generate_item_tooltip(self, actor: Actor, item: Item) -> str:
        data = item.get_chat_data()
        return f"<h3>{data['name']}</h3><p>{data['description']}</p>"


# =============================================================================
# Build Context
# =============================================================================


@dataclass(frozen=True)
class BuildContext:
    """Everything one build reads.

    Attributes:
        mode: Single-actor, multi-actor or idle.
        actor: The single selected actor (None in multi mode).
        actors: Every selected actor (one in single mode).
        token: Primary token of the single selection.
        settings: HUD settings read for this build.
        config: Game configuration tables.
        rules: Rule context for powers and tooltips.
        i18n: Localization lookup.
        combat: Active combat, if any.
    """

    mode: BuildMode
    actor: Actor | None
    actors: tuple[Actor, ...]
    token: Token | None
    settings: HudSettings
    config: GameConfig
    rules: RuleContext
    i18n: Localizer
    combat: Combat | None = None
    items: tuple[Item, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        items: tuple[Item, ...] = ()
        if self.actor is not None:
            items = tuple(sorted(self.actor.items, key=lambda item: (item.display_name or "").casefold()))
        object.__setattr__(self, "items", items)

    @property
    def delimiter(self) -> str:
        return self.settings.delimiter

    @property
    def tooltip_verbosity(self) -> TooltipVerbosity:
        return TooltipVerbosity(self.settings.tooltips)


# =============================================================================
# Error Logging
# =============================================================================


def entity_payload(entity: Any) -> str:
    """Serialize an entity for an error log entry."""
    if isinstance(entity, BaseModel):
        return entity.model_dump_json(by_alias=True)
    try:
        return json.dumps(entity, default=str)
    except (TypeError, ValueError):
        return repr(entity)


def log_error(error: BaseException, context: Any = None) -> None:
    """Log a failure, with the offending entity when there is one."""
    if context is None:
        logger.error("Action HUD build error", error=str(error), exc_info=error)
    else:
        logger.error(
            "Action HUD build error",
            error=str(error),
            entity=entity_payload(context),
            exc_info=error,
        )


__all__ = [
    "RuleContext",
    "SheetRuleContext",
    "BuildContext",
    "entity_payload",
    "log_error",
]
