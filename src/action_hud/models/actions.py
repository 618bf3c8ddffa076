"""Output models: action descriptors, groups, the action collection and layout.

Everything a build hands back to the host lives here. Models serialize
with camelCase aliases (``encodedValue``, ``cssClass``, ``nestId``) because
that is the shape the host shell renders from.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from action_hud.core.constants import GROUP_TYPE_SYSTEM


class _HostModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_host(self) -> dict:
        """Serialize for the host shell (camelCase keys, unset optionals dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Actions
# =============================================================================


class ActionInfo(_HostModel):
    """Auxiliary text shown beside an action (e.g. a modifier)."""

    text: str
    css_class: str | None = None


class ActionDescriptor(_HostModel):
    """One clickable entry of the menu.

    Attributes:
        id: Id of the originating entity.
        name: Display name.
        encoded_value: Action type and id joined by the delimiter; the only
            handle the dispatch layer needs.
        img: Image path.
        icon1: Extra glyph markup (skill training tier).
        info1: Auxiliary display text.
        css_class: Presentation state (``toggle``, ``toggle active``, ``active``,
            usage colour class). None when the entity has no such state.
        tooltip: Tooltip markup or plain text.
    """

    id: str
    name: str | None = None
    encoded_value: str
    img: str | None = None
    icon1: str | None = None
    info1: ActionInfo | None = None
    css_class: str | None = None
    tooltip: str = ""


class GroupData(_HostModel):
    """Metadata of the group a batch of actions is added to."""

    id: str
    type: str = GROUP_TYPE_SYSTEM


class ActionCollection:
    """The actions produced by one build, keyed by group id.

    This is the Group Assembler: category builders add descriptors through
    :meth:`add_actions` and the host reads the result. Group order is the
    order in which groups first received actions.

    Example:
        >>> collection = ActionCollection()
        >>> collection.add_actions([], GroupData(id="skills"))
        >>> "skills" in collection
        False
    """

    def __init__(self) -> None:
        self._actions: dict[str, list[ActionDescriptor]] = {}
        self._groups: dict[str, GroupData] = {}

    def add_actions(
        self,
        actions: Iterable[ActionDescriptor | None],
        group_data: GroupData | str | None,
    ) -> None:
        """Append actions to a group.

        Does nothing when there are no actions or the group has no id.
        ``None`` entries (entities that failed to convert) are dropped.
        Repeated calls for the same group id append.

        Args:
            actions: Descriptors to add.
            group_data: Group metadata or a bare group id.
        """
        kept = [action for action in actions if action is not None]
        if not kept:
            return

        if isinstance(group_data, str):
            group_data = GroupData(id=group_data)
        if group_data is None or not group_data.id:
            return

        self._groups.setdefault(group_data.id, group_data)
        self._actions.setdefault(group_data.id, []).extend(kept)

    def get(self, group_id: str) -> list[ActionDescriptor]:
        """Actions of a group, empty when the group was never filled."""
        return list(self._actions.get(group_id, []))

    def group(self, group_id: str) -> GroupData | None:
        return self._groups.get(group_id)

    @property
    def group_ids(self) -> list[str]:
        return list(self._actions)

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._actions

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def to_host(self) -> dict[str, list[dict]]:
        """Serialize every group for the host shell."""
        return {
            group_id: [action.to_host() for action in actions]
            for group_id, actions in self._actions.items()
        }


# =============================================================================
# Layout
# =============================================================================


class LayoutGroup(_HostModel):
    """A group definition in the default layout."""

    id: str
    name: str
    list_name: str
    type: str = GROUP_TYPE_SYSTEM
    nest_id: str | None = None


class LayoutNode(_HostModel):
    """A top-level node of the default layout."""

    nest_id: str
    id: str
    name: str
    groups: list[LayoutGroup] = Field(default_factory=list)


class HudDefaults(_HostModel):
    """Default layout tree and flat group list handed to the host at startup."""

    layout: list[LayoutNode]
    groups: list[LayoutGroup]


__all__ = [
    "ActionInfo",
    "ActionDescriptor",
    "GroupData",
    "ActionCollection",
    "LayoutGroup",
    "LayoutNode",
    "HudDefaults",
]
