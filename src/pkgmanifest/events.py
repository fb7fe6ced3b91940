"""Minimal publish/subscribe hub for manifest lifecycle events."""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

MANIFEST_LOADED = "manifest-loaded"
MANIFEST_SAVED = "manifest-saved"

_handlers: defaultdict[str, list[Callable[..., Any]]] = defaultdict(list)


def on(event: str, callback: Callable[..., Any]) -> None:
    _handlers[event].append(callback)


def off(event: str, callback: Callable[..., Any]) -> None:
    try:
        _handlers[event].remove(callback)
    except ValueError:
        pass


def emit(event: str, *args: Any, **kwargs: Any) -> None:
    for callback in list(_handlers.get(event, [])):
        callback(*args, **kwargs)


__all__ = ["MANIFEST_LOADED", "MANIFEST_SAVED", "emit", "off", "on"]
