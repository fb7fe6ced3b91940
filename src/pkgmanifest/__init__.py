import logging
import os

from .errors import ManifestError, ManifestWriteError, SessionStateError
from .model import Author, Dependency, PackageManifest, Sample
from .naming import compose_package_name, parse_package_name, sanitize_name_part
from .selection import can_invoke
from .session import ManifestSession, SessionState
from .settings import Settings, load_settings

logger = logging.getLogger("pkgmanifest")
if os.environ.get("PKGMANIFEST_DEBUG") and not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


__all__ = [
    "Author",
    "Dependency",
    "ManifestError",
    "ManifestSession",
    "ManifestWriteError",
    "PackageManifest",
    "Sample",
    "SessionState",
    "SessionStateError",
    "Settings",
    "can_invoke",
    "compose_package_name",
    "load_settings",
    "parse_package_name",
    "sanitize_name_part",
]
