"""Package identifier helpers.

Package names look like ``com.<organization>.<package>``.  The editor shows
the organization and package parts as separate fields and recomposes the
full identifier on every edit, so both directions must be lossless for text
that is already sanitized.
"""

from __future__ import annotations

import re

DEFAULT_PREFIX = "com"

_INVALID_RE = re.compile(r"[^a-z0-9\-]")


def sanitize_name_part(text: str | None) -> str:
    """Return *text* reduced to lowercase letters, digits and hyphens.

    Spaces become hyphens; every other character outside ``[a-z0-9-]`` is
    dropped.  ``None`` yields an empty string.
    """

    if not text:
        return ""
    return _INVALID_RE.sub("", text.lower().replace(" ", "-"))


def parse_package_name(
    identifier: str | None, prefix: str = DEFAULT_PREFIX
) -> tuple[str, str]:
    """Split *identifier* into ``(organization, package)``.

    Anything that is not ``<prefix>.<organization>.<package...>`` gives
    ``("", "")``.
    """

    if not identifier:
        return "", ""
    parts = identifier.split(".")
    if len(parts) >= 3 and parts[0] == prefix:
        return parts[1], ".".join(parts[2:])
    return "", ""


def compose_package_name(
    organization: str | None, package: str | None, prefix: str = DEFAULT_PREFIX
) -> str:
    organization = sanitize_name_part(organization)
    package = sanitize_name_part(package)
    return f"{prefix}.{organization}.{package}"


__all__ = [
    "DEFAULT_PREFIX",
    "compose_package_name",
    "parse_package_name",
    "sanitize_name_part",
]
