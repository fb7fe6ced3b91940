from __future__ import annotations

from pathlib import PurePath

MANIFEST_FILENAME = "package.json"


def can_invoke(selected_path: str | PurePath | None) -> bool:
    """Return True when *selected_path* names a ``package.json`` file.

    The comparison is exact and case-sensitive.
    """

    if not selected_path:
        return False
    return PurePath(selected_path).name == MANIFEST_FILENAME


__all__ = ["MANIFEST_FILENAME", "can_invoke"]
