"""Action aggregation engine.

Modules:
    context: Build context and rule-context interface.
    classifier: Entity bucketing by category.
    descriptors: Entity to action descriptor conversion.
    tooltips: Tooltip resolution.
    builders: Per-category builders.
    action_handler: The per-rebuild orchestrator.
    defaults: Default layout generation.
    system_manager: Host lifecycle integration.
"""

from __future__ import annotations

from action_hud.engine.action_handler import ActionHandler
from action_hud.engine.classifier import classify
from action_hud.engine.context import BuildContext, RuleContext, SheetRuleContext
from action_hud.engine.defaults import generate_defaults
from action_hud.engine.descriptors import decode_value, encode_value
from action_hud.engine.system_manager import SystemManager
from action_hud.engine.tooltips import resolve_tooltip


__all__ = [
    "ActionHandler",
    "BuildContext",
    "RuleContext",
    "SheetRuleContext",
    "SystemManager",
    "classify",
    "decode_value",
    "encode_value",
    "generate_defaults",
    "resolve_tooltip",
]
