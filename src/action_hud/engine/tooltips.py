"""Tooltip resolution with tiered fallbacks.

A tooltip never fails a build. The policy, in order:

1. no source gives ``""``
2. verbosity ``none`` gives ``""``
3. a plain string is returned as is
4. verbosity ``nameOnly`` gives the localized name
5. without a single owning actor there is no rule context, ``""``
6. a source without a ``type`` gives ``""``
7. a source with chat data is rendered by the rule context and wrapped;
   a rendering failure is logged and gives ``""``
8. a source with a description has it wrapped
9. anything else gives ``""``
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from action_hud.core.constants import TOOLTIP_CSS_CLASSES
from action_hud.core.exceptions import TooltipError
from action_hud.engine.context import BuildContext, log_error
from action_hud.models.enums import TooltipVerbosity


def wrap_markup(html: str, css_classes: Sequence[str] = TOOLTIP_CSS_CLASSES) -> str:
    """Nest markup inside one ``div`` per CSS class."""
    heads = "".join(f'<div class="{css_class}">' for css_class in css_classes)
    tails = "</div>" * len(css_classes)
    return f"{heads}{html}{tails}"


def resolve_text(ctx: BuildContext, text: str | None) -> str:
    """Resolve a plain-text tooltip (steps 1 to 3)."""
    if not text:
        return ""
    if ctx.tooltip_verbosity is TooltipVerbosity.NONE:
        return ""
    return text


async def resolve_tooltip(ctx: BuildContext, source: Any) -> str:
    """Resolve tooltip content for an entity or a plain string.

    Args:
        ctx: The current build context.
        source: An entity, a string, or None.

    Returns:
        Tooltip markup or text; ``""`` whenever nothing applies or
        rendering fails.
    """
    if not source:
        return ""
    if ctx.tooltip_verbosity is TooltipVerbosity.NONE:
        return ""
    if isinstance(source, str):
        return source

    name = ctx.i18n(getattr(source, "name", None))
    if ctx.tooltip_verbosity is TooltipVerbosity.NAME_ONLY:
        return name

    if ctx.actor is None:
        return ""
    if not getattr(source, "type", None):
        return ""

    if callable(getattr(source, "get_chat_data", None)):
        try:
            html = await ctx.rules.generate_item_tooltip(ctx.actor, source)
            if not isinstance(html, str):
                raise TooltipError(
                    "Rule context returned non-text tooltip",
                    details={"result_type": type(html).__name__},
                )
            return wrap_markup(html)
        except Exception as exc:
            log_error(exc, source)
            return ""

    description = getattr(source, "description", None)
    if description:
        return wrap_markup(description)
    return ""


__all__ = ["wrap_markup", "resolve_text", "resolve_tooltip"]
