"""Localization lookup used by the builders and the layout generator.

The host owns the real translation tables; this module only defines the
lookup contract the engine relies on: a key with no translation comes
back unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping


class Localizer:
    """Dictionary-backed string lookup.

    Example:
        >>> i18n = Localizer({"DND4E.Skills": "Skills"})
        >>> i18n("DND4E.Skills")
        'Skills'
        >>> i18n("DND4E.Unknown")
        'DND4E.Unknown'
    """

    def __init__(self, translations: Mapping[str, str] | None = None) -> None:
        self._translations: dict[str, str] = dict(translations or {})

    def localize(self, key: str | None) -> str:
        """Translate a key, returning the key itself when no entry exists.

        Args:
            key: Translation key or plain text. ``None`` yields ``""``.

        Returns:
            The localized string.
        """
        if not key:
            return ""
        return self._translations.get(key, key)

    def __call__(self, key: str | None) -> str:
        return self.localize(key)

    def update(self, translations: Mapping[str, str]) -> None:
        """Merge additional translations into the table."""
        self._translations.update(translations)


__all__ = ["Localizer"]
