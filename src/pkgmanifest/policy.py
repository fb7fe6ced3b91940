from __future__ import annotations

from typing import Any


def normalize_optional(text: str | None) -> str | None:
    """Return ``None`` for blank text, otherwise *text* unchanged."""

    if text is None or not text.strip():
        return None
    return text


class OptionalField:
    """A string attribute whose presence is controlled by a checkbox.

    The field stores ``None`` while disabled.  Disabling discards whatever
    text was there; enabling again starts from an empty field.  While
    enabled, blank input is stored as ``None`` so it is omitted on save.
    """

    def __init__(self, owner: Any, attribute: str) -> None:
        self.owner = owner
        self.attribute = attribute
        self.enabled = bool(getattr(owner, attribute))

    @property
    def value(self) -> str | None:
        return getattr(self.owner, self.attribute)

    def set_enabled(self, flag: bool) -> None:
        self.enabled = bool(flag)
        if not self.enabled:
            setattr(self.owner, self.attribute, None)

    def set_text(self, text: str | None) -> None:
        if not self.enabled:
            setattr(self.owner, self.attribute, None)
            return
        setattr(self.owner, self.attribute, normalize_optional(text))


__all__ = ["OptionalField", "normalize_optional"]
