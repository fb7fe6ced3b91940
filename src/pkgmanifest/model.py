"""Data classes describing a package manifest.

:class:`PackageManifest` mirrors the keys of a ``package.json`` file.  Known
keys map onto attributes; anything else is kept verbatim in
:attr:`PackageManifest.extra` so a save never drops data the editor does not
show.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import ManifestLoadError

DEFAULT_PLATFORM_VERSION = "2022.1"


@dataclass
class Author:
    name: str | None = None
    email: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({"name": self.name, "email": self.email, "url": self.url})


@dataclass
class Sample:
    display_name: str | None = None
    description: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "displayName": self.display_name,
                "description": self.description,
                "path": self.path,
            }
        )


@dataclass
class Dependency:
    """One editable row of the dependency list."""

    name: str
    version: str


# attribute name -> JSON key, in output order
_SCALAR_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("version", "version"),
    ("display_name", "displayName"),
    ("description", "description"),
    ("unity", "unity"),
    ("unity_release", "unityRelease"),
)

_LINK_FIELDS: tuple[tuple[str, str], ...] = (
    ("documentation_url", "documentationUrl"),
    ("changelog_url", "changelogUrl"),
    ("licenses_url", "licensesUrl"),
)

KNOWN_KEYS = frozenset(
    [key for _, key in _SCALAR_FIELDS + _LINK_FIELDS]
    + ["dependencies", "keywords", "author", "samples", "hideInEditor"]
)


@dataclass
class PackageManifest:
    name: str | None = None
    version: str | None = None
    display_name: str | None = None
    description: str | None = None
    unity: str | None = None
    unity_release: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    keywords: list[str] = field(default_factory=list)
    author: Author = field(default_factory=Author)
    documentation_url: str | None = None
    changelog_url: str | None = None
    licenses_url: str | None = None
    samples: list[Sample] = field(default_factory=list)
    hide_in_editor: bool = True
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PackageManifest:
        """Build a manifest from decoded JSON.

        ``null`` collections are materialised as empty ones.  Values of the
        wrong shape raise :class:`ManifestLoadError`.
        """

        if not isinstance(data, Mapping):
            raise ManifestLoadError("Root of package manifest must be an object")
        kwargs: dict[str, Any] = {}
        for attr, key in _SCALAR_FIELDS + _LINK_FIELDS:
            kwargs[attr] = _opt_str(data, key)

        deps = data.get("dependencies")
        if deps is None:
            deps = {}
        if not isinstance(deps, Mapping):
            raise ManifestLoadError("'dependencies' must be an object")
        kwargs["dependencies"] = {str(k): _scalar_text(v) for k, v in deps.items()}

        keywords = data.get("keywords")
        if keywords is None:
            keywords = []
        if not isinstance(keywords, list):
            raise ManifestLoadError("'keywords' must be an array")
        kwargs["keywords"] = [_scalar_text(k) for k in keywords]

        author = data.get("author")
        if author is None:
            kwargs["author"] = Author()
        elif isinstance(author, Mapping):
            kwargs["author"] = Author(
                name=_opt_str(author, "name"),
                email=_opt_str(author, "email"),
                url=_opt_str(author, "url"),
            )
        else:
            raise ManifestLoadError("'author' must be an object")

        samples = data.get("samples")
        if samples is None:
            samples = []
        if not isinstance(samples, list):
            raise ManifestLoadError("'samples' must be an array")
        parsed: list[Sample] = []
        for entry in samples:
            if not isinstance(entry, Mapping):
                raise ManifestLoadError("'samples' entries must be objects")
            parsed.append(
                Sample(
                    display_name=_opt_str(entry, "displayName"),
                    description=_opt_str(entry, "description"),
                    path=_opt_str(entry, "path"),
                )
            )
        kwargs["samples"] = parsed

        hide = data.get("hideInEditor", True)
        if hide is None:
            hide = True
        if not isinstance(hide, bool):
            raise ManifestLoadError("'hideInEditor' must be a boolean")
        kwargs["hide_in_editor"] = hide

        kwargs["extra"] = {k: v for k, v in data.items() if k not in KNOWN_KEYS}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation, omitting absent values."""

        out: dict[str, Any] = {}
        for attr, key in _SCALAR_FIELDS:
            out[key] = getattr(self, attr)
        out["dependencies"] = dict(self.dependencies)
        out["keywords"] = list(self.keywords)
        out["author"] = self.author.to_dict()
        for attr, key in _LINK_FIELDS:
            out[key] = getattr(self, attr)
        out["samples"] = [s.to_dict() for s in self.samples]
        out["hideInEditor"] = self.hide_in_editor
        out = _drop_none(out)
        for key, value in self.extra.items():
            out.setdefault(key, value)
        return out


def split_platform_version(
    text: str | None, default: str = DEFAULT_PLATFORM_VERSION
) -> tuple[int, int]:
    """Return ``(major, minor)`` for a ``"major.minor"`` string.

    Parts that are missing or not integers read as ``0``; ``None`` falls
    back to *default*.
    """

    parts = (text if text is not None else default).split(".")
    major = _to_int(parts[0])
    minor = _to_int(parts[1]) if len(parts) > 1 else 0
    return major, minor


def join_platform_version(major: int, minor: int) -> str:
    return f"{int(major)}.{int(minor)}"


def _to_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return _scalar_text(value)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (Mapping, list)):
        raise ManifestLoadError(f"expected a string, got {type(value).__name__}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


__all__ = [
    "Author",
    "Dependency",
    "DEFAULT_PLATFORM_VERSION",
    "KNOWN_KEYS",
    "PackageManifest",
    "Sample",
    "join_platform_version",
    "split_platform_version",
]
