"""System action builder: the entry point the host calls on every rebuild.

The handler decides from the selection whether to build a single-actor
menu, a reduced multi-actor menu, or nothing, then runs the category
builders. Abilities, skills and utility run first, one after the other;
the remaining categories run concurrently. Every category is isolated:
an exception inside one is logged and only that category's groups are
missing from the result.

Example:
    >>> handler = ActionHandler(config, rules, i18n)
    >>> collection = await handler.build_system_actions(selection)
    >>> collection.get("abilities")
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

from action_hud.core.config import HudSettings, get_settings
from action_hud.core.constants import VALID_ACTOR_TYPES
from action_hud.core.exceptions import ActionHudError, ConfigurationError
from action_hud.core.i18n import Localizer
from action_hud.core.logging import bind_context, clear_context, get_logger
from action_hud.engine.builders import (
    build_abilities,
    build_conditions,
    build_effects,
    build_features,
    build_inventory,
    build_powers,
    build_skills,
    build_utility,
)
from action_hud.engine.context import BuildContext, RuleContext
from action_hud.models.actions import ActionCollection
from action_hud.models.entities import Actor, Combat, GameConfig, Selection, Token
from action_hud.models.enums import BuildMode


logger = get_logger(__name__)

SyncBuilder = Callable[[BuildContext, ActionCollection], None]
AsyncBuilder = Callable[[BuildContext, ActionCollection], Awaitable[None]]


def hud_settings() -> HudSettings:
    return get_settings().hud


class ActionHandler:
    """Builds the system actions for the current selection.

    Attributes:
        config: Game configuration tables.
        rules: Rule context used for powers and tooltips.
        i18n: Localization lookup.
    """

    def __init__(
        self,
        config: GameConfig,
        rules: RuleContext,
        i18n: Localizer | None = None,
        settings_provider: Callable[[], HudSettings] = hud_settings,
    ) -> None:
        """Initialize the handler.

        Args:
            config: Game configuration tables.
            rules: Rule context used for powers and tooltips.
            i18n: Localization lookup, identity lookup by default.
            settings_provider: Returns the settings for a build; called once
                at the start of every build.
        """
        self.config = config
        self.rules = rules
        self.i18n = i18n or Localizer()
        self._settings_provider = settings_provider

    async def build_system_actions(
        self,
        selection: Selection,
        group_ids: Sequence[str] | None = None,
        *,
        combat: Combat | None = None,
    ) -> ActionCollection:
        """Build every action for the selection.

        Args:
            selection: The selected actor or tokens.
            group_ids: Groups the host currently shows. Every category is
                built regardless; the host filters on display.
            combat: Active combat used for the initiative annotation.

        Returns:
            The action collection for this build.
        """
        collection = ActionCollection()
        try:
            ctx = self.create_context(selection, combat=combat)
        except ConfigurationError as exc:
            logger.error(
                "Cannot read HUD settings",
                error=str(exc),
                details=exc.details,
                exc_info=exc,
            )
            return collection

        bind_context(
            build_mode=str(ctx.mode),
            actor_id=ctx.actor.id if ctx.actor else None,
            actor_count=len(ctx.actors),
        )
        try:
            logger.debug("Building system actions", group_ids=list(group_ids or []))
            if ctx.mode is BuildMode.SINGLE:
                await self._build_character_actions(ctx, collection)
            elif ctx.mode is BuildMode.MULTI:
                await self._build_multiple_token_actions(ctx, collection)
            logger.debug("Built system actions", groups=collection.group_ids)
        finally:
            clear_context()
        return collection

    def create_context(self, selection: Selection, *, combat: Combat | None = None) -> BuildContext:
        """Capture the selection and settings for one build.

        A single actor of a valid type gives single mode. With no single
        actor, controlled tokens whose actors are all of valid types give
        multi mode. Anything else is idle.
        """
        settings = self._settings_provider()
        actor = selection.actor

        if actor is not None:
            mode = BuildMode.SINGLE if actor.type in VALID_ACTOR_TYPES else BuildMode.IDLE
            actors: tuple[Actor, ...] = (actor,)
        else:
            actors = self._get_actors(selection.controlled_tokens)
            mode = BuildMode.MULTI if actors else BuildMode.IDLE

        return BuildContext(
            mode=mode,
            actor=actor,
            actors=actors,
            token=selection.token,
            settings=settings,
            config=self.config,
            rules=self.rules,
            i18n=self.i18n,
            combat=combat,
        )

    @staticmethod
    def _get_actors(tokens: Sequence[Token]) -> tuple[Actor, ...]:
        actors = tuple(token.actor for token in tokens if token.actor is not None)
        if all(actor.type in VALID_ACTOR_TYPES for actor in actors):
            return actors
        return ()

    async def _build_character_actions(self, ctx: BuildContext, collection: ActionCollection) -> None:
        self._run_sync("abilities", build_abilities, ctx, collection)
        self._run_sync("skills", build_skills, ctx, collection)
        self._run_sync("utility", build_utility, ctx, collection)
        await asyncio.gather(
            self._run_isolated("powers", build_powers, ctx, collection),
            self._run_isolated("inventory", build_inventory, ctx, collection),
            self._run_isolated("features", build_features, ctx, collection),
            self._run_isolated("conditions", build_conditions, ctx, collection),
            self._run_isolated("effects", build_effects, ctx, collection),
        )

    async def _build_multiple_token_actions(self, ctx: BuildContext, collection: ActionCollection) -> None:
        self._run_sync("abilities", build_abilities, ctx, collection)
        self._run_sync("skills", build_skills, ctx, collection)
        self._run_sync("utility", build_utility, ctx, collection)
        await self._run_isolated("conditions", build_conditions, ctx, collection)

    @staticmethod
    def _log_category_failure(category: str, exc: Exception) -> None:
        details = exc.details if isinstance(exc, ActionHudError) else {}
        logger.error(
            "Category build failed",
            category=category,
            error=str(exc),
            details=details,
            exc_info=exc,
        )

    def _run_sync(
        self,
        category: str,
        builder: SyncBuilder,
        ctx: BuildContext,
        collection: ActionCollection,
    ) -> None:
        try:
            builder(ctx, collection)
        except Exception as exc:
            self._log_category_failure(category, exc)

    async def _run_isolated(
        self,
        category: str,
        builder: AsyncBuilder,
        ctx: BuildContext,
        collection: ActionCollection,
    ) -> None:
        try:
            await builder(ctx, collection)
        except Exception as exc:
            self._log_category_failure(category, exc)


__all__ = ["ActionHandler", "hud_settings"]
