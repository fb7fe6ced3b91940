"""Editor settings.

Settings live in an INI file under the user configuration directory (see
:func:`pkgmanifest.paths.settings_file`)::

    [pkgmanifest]
    prefix = com
    default_unity = 2022.1
    indent = 2
    dependency_name = com.example.new-package
    dependency_version = 1.0.0
    sample_path = Samples~/

Every key is optional.  A missing file yields the defaults.
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .errors import SettingsError
from .model import DEFAULT_PLATFORM_VERSION
from .naming import DEFAULT_PREFIX
from .paths import settings_file
from .reconcile import (
    DEFAULT_DEPENDENCY_NAME,
    DEFAULT_DEPENDENCY_VERSION,
    DEFAULT_SAMPLE_PATH,
)

logger = logging.getLogger(__name__)

SECTION = "pkgmanifest"


@dataclass(frozen=True)
class Settings:
    prefix: str = DEFAULT_PREFIX
    default_unity: str = DEFAULT_PLATFORM_VERSION
    indent: int = 2
    dependency_name: str = DEFAULT_DEPENDENCY_NAME
    dependency_version: str = DEFAULT_DEPENDENCY_VERSION
    sample_path: str = DEFAULT_SAMPLE_PATH


def read_settings(path: Path) -> Settings:
    """Parse the settings file at *path*.

    Raises :class:`SettingsError` for unreadable files, unknown keys or a
    non-integer ``indent``.
    """

    parser = configparser.ConfigParser()
    if not path.is_file():
        return Settings()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as exc:
        raise SettingsError(str(exc)) from exc
    if not parser.has_section(SECTION):
        return Settings()
    known = {f.name for f in fields(Settings)}
    values: dict[str, object] = {}
    for key, raw in parser.items(SECTION):
        if key not in known:
            raise SettingsError(f"unknown setting: {key}")
        values[key] = raw.strip()
    if "indent" in values:
        try:
            values["indent"] = int(values["indent"])  # type: ignore[arg-type]
        except ValueError as exc:
            raise SettingsError(f"invalid indent: {values['indent']!r}") from exc
    return Settings(**values)  # type: ignore[arg-type]


def load_settings(path: Path | None = None) -> Settings:
    """Return settings from *path* or the default location.

    A malformed file is logged and replaced by the defaults.
    """

    path = path or settings_file()
    try:
        return read_settings(path)
    except SettingsError as exc:
        logger.warning("Failed to read settings %s: %s", path, exc)
        return Settings()


__all__ = ["SECTION", "Settings", "load_settings", "read_settings"]
