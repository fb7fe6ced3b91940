"""Editing session for a single ``package.json``.

:class:`ManifestSession` owns the in-memory :class:`PackageManifest` and the
three editable lists.  UI layers read and write document fields directly on
:attr:`ManifestSession.manifest` and go through the session helpers for the
parts that need reconciliation: the split package name, the platform
version, the optional release string and the dependency rows.

Disk is the source of truth.  :meth:`load` never raises.  A file that does
not exist yet loads as an empty, valid document so the first save creates
it; an unreadable or malformed file falls back to an empty document and
clears :attr:`valid`.  :meth:`save` propagates write failures and leaves the
document untouched.  :meth:`revert` throws away every unsaved edit.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Callable
from pathlib import Path

from . import events
from .errors import ManifestLoadError, SessionStateError
from .manifest_io import read_manifest, write_manifest
from .model import PackageManifest, join_platform_version, split_platform_version
from .naming import compose_package_name, parse_package_name
from .policy import OptionalField
from .reconcile import DependencyList, KeywordList, SampleList
from .settings import Settings

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    REVERTING = "reverting"


class ManifestSession:
    def __init__(
        self,
        path: str | Path | None = None,
        *,
        settings: Settings | None = None,
        on_saved: Callable[[], object] | None = None,
    ) -> None:
        self.path: Path | None = Path(path) if path is not None else None
        self.settings = settings or Settings()
        self.on_saved = on_saved
        self.state = SessionState.UNLOADED
        self.valid = False
        self.manifest = PackageManifest()
        self.dependencies = self._new_dependency_list()
        self.keywords = KeywordList(self.manifest.keywords)
        self.samples = SampleList(
            self.manifest.samples, default_path=self.settings.sample_path
        )
        self._release = OptionalField(self.manifest, "unity_release")

    def _new_dependency_list(self) -> DependencyList:
        return DependencyList(
            default_name=self.settings.dependency_name,
            default_version=self.settings.dependency_version,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, path: str | Path | None = None) -> PackageManifest:
        """Read the manifest at *path* (or the session path) into memory."""

        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise SessionStateError("no manifest path given")
        self.state = SessionState.LOADING
        manifest, valid = self._read(self.path)

        self.manifest = manifest
        self.valid = valid
        self.dependencies = self._new_dependency_list()
        self.dependencies.seed(manifest.dependencies)
        self.keywords = KeywordList(manifest.keywords)
        self.samples = SampleList(manifest.samples, default_path=self.settings.sample_path)
        self._release = OptionalField(manifest, "unity_release")

        self.state = SessionState.READY
        logger.debug(
            "loaded %s valid=%s deps=%d keywords=%d samples=%d",
            self.path,
            valid,
            len(self.dependencies),
            len(self.keywords),
            len(self.samples),
        )
        events.emit(events.MANIFEST_LOADED, self.path)
        return manifest

    @staticmethod
    def _read(path: Path) -> tuple[PackageManifest, bool]:
        if not path.exists():
            logger.info("package manifest not found, starting empty: %s", path)
            return PackageManifest(), True
        if not path.is_file():
            logger.warning("package manifest is not a file: %s", path)
            return PackageManifest(), False
        try:
            return read_manifest(path), True
        except ManifestLoadError as exc:
            logger.warning("invalid package manifest %s: %s", path, exc)
            return PackageManifest(), False

    def save(self) -> None:
        """Write the document back to its path and signal a refresh.

        Dependency rows are folded into the mapping (a later duplicate name
        wins).  If writing fails the exception propagates and the in-memory
        document keeps its previous mapping.  A session whose file could not
        be read refuses to save so the file on disk is not replaced by the
        empty document.
        """

        if self.state is not SessionState.READY:
            raise SessionStateError(f"cannot save while {self.state.value}")
        if not self.valid:
            raise SessionStateError(f"invalid package manifest: {self.path}")
        if self.path is None:
            raise SessionStateError("no manifest path given")
        self.state = SessionState.SAVING
        try:
            snapshot = dataclasses.replace(
                self.manifest, dependencies=self.dependencies.to_mapping()
            )
            write_manifest(self.path, snapshot, indent=self.settings.indent)
            self.dependencies.flush(self.manifest.dependencies)
        finally:
            self.state = SessionState.READY
        logger.debug("saved %s", self.path)
        events.emit(events.MANIFEST_SAVED, self.path)
        if self.on_saved is not None:
            self.on_saved()

    def revert(self) -> PackageManifest:
        """Discard unsaved edits and reload from disk."""

        if self.path is None:
            raise SessionStateError("no manifest path given")
        self.state = SessionState.REVERTING
        logger.debug("reverting %s", self.path)
        return self.load()

    # ------------------------------------------------------------------
    # Package name
    # ------------------------------------------------------------------
    @property
    def name_parts(self) -> tuple[str, str]:
        return parse_package_name(self.manifest.name, self.settings.prefix)

    @property
    def organization_name(self) -> str:
        return self.name_parts[0]

    @organization_name.setter
    def organization_name(self, value: str) -> None:
        self.set_name_parts(value, self.package_name)

    @property
    def package_name(self) -> str:
        return self.name_parts[1]

    @package_name.setter
    def package_name(self, value: str) -> None:
        self.set_name_parts(self.organization_name, value)

    def set_name_parts(self, organization: str, package: str) -> str:
        self.manifest.name = compose_package_name(
            organization, package, self.settings.prefix
        )
        return self.manifest.name

    # ------------------------------------------------------------------
    # Platform version
    # ------------------------------------------------------------------
    @property
    def platform_version(self) -> tuple[int, int]:
        return split_platform_version(self.manifest.unity, self.settings.default_unity)

    def set_platform_version(self, major: int, minor: int) -> str:
        self.manifest.unity = join_platform_version(major, minor)
        return self.manifest.unity

    # ------------------------------------------------------------------
    # Optional release
    # ------------------------------------------------------------------
    @property
    def has_minimal_version(self) -> bool:
        return self._release.enabled

    @has_minimal_version.setter
    def has_minimal_version(self, flag: bool) -> None:
        self._release.set_enabled(flag)

    @property
    def release(self) -> str | None:
        return self._release.value

    @release.setter
    def release(self, text: str | None) -> None:
        self._release.set_text(text)


__all__ = ["ManifestSession", "SessionState"]
