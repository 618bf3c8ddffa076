"""Bucket entities by category key.

Used by the inventory and feature builders to turn an actor's flat item
list into one bucket per category of a taxonomy table.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from action_hud.models.entities import Entity


E = TypeVar("E", bound=Entity)


def _accept_all(entity: Any) -> bool:
    return True


def _entity_type(entity: Any) -> str | None:
    return getattr(entity, "type", None)


def classify(
    entities: Iterable[E],
    category_lookup: Mapping[str, Any],
    predicate: Callable[[E], bool] | None = None,
    key: Callable[[E], str | None] | None = None,
) -> dict[str, dict[str | None, E]]:
    """Partition entities into buckets keyed by category.

    Only entities whose category key is present in ``category_lookup`` and
    which pass ``predicate`` are kept. Within a bucket entities are keyed
    by id; a repeated id replaces the earlier entity but keeps its
    position. Categories with no entities do not appear in the result.

    Args:
        entities: Records to classify, in display order.
        category_lookup: Taxonomy table whose keys are the valid categories.
        predicate: Inclusion test, default accepts everything.
        key: Extracts the category key, default is the entity's ``type``.

    Returns:
        Ordered mapping of category key to ordered mapping of id to entity.

    Example:
        >>> buckets = classify(actor.items, {"weapon": ..., "armour": ...},
        ...                    predicate=lambda item: item.equipped)
    """
    accept = predicate or _accept_all
    category_of = key or _entity_type

    buckets: dict[str, dict[str | None, E]] = {}
    for entity in entities:
        category = category_of(entity)
        if category is None or category not in category_lookup:
            continue
        if not accept(entity):
            continue
        buckets.setdefault(category, {})[entity.entity_id] = entity
    return buckets


__all__ = ["classify"]
