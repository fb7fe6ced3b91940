from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import ManifestLoadError, ManifestWriteError
from .model import PackageManifest

logger = logging.getLogger(__name__)


def loads_manifest(text: str) -> PackageManifest:
    """Decode *text* into a :class:`PackageManifest`.

    Blank text decodes to a default manifest.
    """

    if text.strip() == "":
        return PackageManifest()
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ManifestLoadError(str(exc)) from exc
    return PackageManifest.from_dict(data)


def dumps_manifest(manifest: PackageManifest, *, indent: int = 2) -> str:
    return json.dumps(manifest.to_dict(), indent=indent, ensure_ascii=False) + "\n"


def read_manifest(path: Path) -> PackageManifest:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestLoadError(f"cannot read {path}: {exc}") from exc
    return loads_manifest(raw)


def write_manifest(path: Path, manifest: PackageManifest, *, indent: int = 2) -> None:
    """Write *manifest* to *path* through a temporary file and a rename."""

    path = Path(path)
    text = dumps_manifest(manifest, indent=indent)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as fh:
            fh.write(text)
        tmp.replace(path)
    except OSError as exc:
        logger.error("failed to write manifest %s: %s", path, exc)
        try:
            tmp.unlink()
        except OSError:
            pass
        raise ManifestWriteError(f"cannot write {path}: {exc}") from exc
    logger.debug("wrote manifest %s (%d bytes)", path, len(text))


__all__ = ["dumps_manifest", "loads_manifest", "read_manifest", "write_manifest"]
