from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc

SETTINGS_ENV = "PKGMANIFEST_SETTINGS"


def _app_name(default: str) -> str:
    return os.getenv("PKGMANIFEST_APP_NAME", default)


def user_config_dir(app_name: str = "pkgmanifest") -> Path:
    app = _app_name(app_name)
    return Path(_uc(appname=app)).resolve()


def settings_file() -> Path:
    """Return the editor settings file, honouring ``PKGMANIFEST_SETTINGS``."""

    env = os.getenv(SETTINGS_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return user_config_dir() / "settings.ini"
