"""Custom exception hierarchy for the action HUD engine.

All exceptions inherit from ActionHudError so the host integration can
catch everything raised by this package at a single boundary. Inside the
engine these exceptions never escape a build: entity, category and tooltip
failures are caught where they occur, logged, and the offending output is
dropped.

Example:
    >>> from action_hud.core.exceptions import ActionBuildError
    >>> raise ActionBuildError("Entity has no id", action_type="item")
"""

from __future__ import annotations

from typing import Any


class ActionHudError(Exception):
    """Base exception for all action HUD errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(ActionHudError):
    """Raised when settings are invalid or an unknown setting key is read."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Build Exceptions
# =============================================================================


class ActionBuildError(ActionHudError):
    """Raised when a single entity cannot be converted into an action.

    Caught by the descriptor builder; the entity is logged and skipped.
    """

    def __init__(
        self,
        message: str,
        *,
        action_type: str | None = None,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize action build error with entity context.

        Args:
            message: Human-readable error description.
            action_type: The action type being built.
            entity_id: Identifier of the entity that failed, if known.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_type:
            combined_details["action_type"] = action_type
        if entity_id:
            combined_details["entity_id"] = entity_id
        super().__init__(message, details=combined_details)


class CategoryBuildError(ActionHudError):
    """Raised when a whole category builder cannot run.

    Caught by the orchestrator; the category's groups are left out of the
    build and sibling categories continue.
    """

    def __init__(
        self,
        message: str,
        *,
        category: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if category:
            combined_details["category"] = category
        super().__init__(message, details=combined_details)


class TooltipError(ActionHudError):
    """Raised when rich tooltip rendering fails. Always downgraded to ``""``."""


# =============================================================================
# Layout Exceptions
# =============================================================================


class LayoutError(ActionHudError):
    """Raised when a category taxonomy cannot be turned into default groups.

    This typically means the game configuration tables are missing or do
    not have the expected shape when the layout generator runs.
    """

    def __init__(
        self,
        message: str,
        *,
        taxonomy: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize layout error with taxonomy context.

        Args:
            message: Human-readable error description.
            taxonomy: Name of the taxonomy table that was malformed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if taxonomy:
            combined_details["taxonomy"] = taxonomy
        super().__init__(message, details=combined_details)


__all__ = [
    "ActionHudError",
    "ConfigurationError",
    "ActionBuildError",
    "CategoryBuildError",
    "TooltipError",
    "LayoutError",
]
