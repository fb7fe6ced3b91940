"""Tk form for editing a ``package.json``.

:class:`ManifestEditor` renders a :class:`~pkgmanifest.session.ManifestSession`
as a form.  Entry widgets write straight into the session's document on
every keystroke so Apply needs no commit step; the split package name, the
platform version and the optional release string go through the session
helpers.  Revert reloads from disk and rebinds every widget.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

try:  # pragma: no cover - tkinter availability depends on the env
    import tkinter as tk
    from tkinter import messagebox, ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    ttk = None  # type: ignore
    messagebox = None  # type: ignore

from ...errors import ManifestError
from ...naming import sanitize_name_part
from ...session import ManifestSession
from ...settings import Settings
from .list_editor import SELF, Column, ListEditor

logger = logging.getLogger(__name__)

APP_TITLE = "Edit Package Manifest"

_HIDE_HELP = (
    "If unchecked, the assets in this package will always be visible in the "
    "Project window and Object Picker.\n(Default: hidden)"
)


class ManifestEditor(tk.Toplevel if tk is not None else object):  # pragma: no cover - exercised via tk tests
    def __init__(self, master: tk.Misc, session: ManifestSession) -> None:
        if tk is None:  # pragma: no cover - environment guard
            raise RuntimeError("tkinter is required for ManifestEditor")
        super().__init__(master)
        self.session = session
        self.title(APP_TITLE)
        self.geometry("700x800")
        self.minsize(400, 500)
        self._vars: list[tuple[tk.Variable, Callable[[], object]]] = []
        self._lists: list[tuple[ListEditor, Callable[[], object]]] = []
        self._loading = False
        if session.valid:
            self._build()
            self._pull()
        else:
            self._build_invalid()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_invalid(self) -> None:
        frm = ttk.Frame(self, padding=12)
        frm.pack(fill="both", expand=True)
        ttk.Label(frm, text="Invalid or missing package.json.").pack(anchor="w")
        ttk.Button(frm, text="Close", command=self.destroy).pack(anchor="w", pady=8)

    def _build(self) -> None:
        s = self.session
        body = ttk.Frame(self, padding=8)
        body.pack(fill="both", expand=True)

        info = ttk.LabelFrame(body, text="Information", padding=6)
        info.pack(fill="x")
        self.package_var = self._entry(info, "Name", lambda: s.package_name, self._on_name)
        self.org_var = self._entry(
            info, "Organization name", lambda: s.organization_name, self._on_name
        )
        self.identifier_var = tk.StringVar()
        ttk.Label(info, textvariable=self.identifier_var, foreground="gray").pack(
            anchor="w", padx=4
        )
        self._entry(info, "Display Name", lambda: s.manifest.display_name,
                    lambda v: setattr(s.manifest, "display_name", v))
        self._entry(info, "Version", lambda: s.manifest.version,
                    lambda v: setattr(s.manifest, "version", v))
        self.major_var = self._entry(info, "Major", lambda: s.platform_version[0],
                                     self._on_platform)
        self.minor_var = self._entry(info, "Minor", lambda: s.platform_version[1],
                                     self._on_platform)

        self.minimal_var = tk.BooleanVar()
        self._vars.append((self.minimal_var, lambda: s.has_minimal_version))
        ttk.Checkbutton(
            info,
            text="Minimal Unity Version",
            variable=self.minimal_var,
            command=self._on_minimal_toggled,
        ).pack(anchor="w", padx=4)
        row = ttk.Frame(info)
        row.pack(fill="x")
        ttk.Label(row, text="Release", width=20).pack(side="left", padx=4)
        self.release_var = tk.StringVar()
        self._vars.append((self.release_var, lambda: s.release))
        self.release_entry = ttk.Entry(row, textvariable=self.release_var)
        self.release_entry.pack(side="left", fill="x", expand=True)
        self.release_var.trace_add("write", lambda *_: self._on_release())

        desc = ttk.LabelFrame(body, text="Description", padding=6)
        desc.pack(fill="x", pady=(8, 0))
        self.description_text = tk.Text(desc, height=4, wrap="word")
        self.description_text.pack(fill="x")
        self.description_text.bind("<<Modified>>", self._on_description)

        self.deps_editor = self._list(
            body,
            "Dependencies",
            lambda: s.dependencies,
            [Column("name", "Name", "name", 300), Column("version", "Version", "version", 120)],
        )
        self.keywords_editor = self._list(
            body, "Keywords", lambda: s.keywords, [Column("value", "Keyword", SELF, 300)]
        )
        self.samples_editor = self._list(
            body,
            "Samples",
            lambda: s.samples,
            [
                Column("display_name", "Display Name", "display_name"),
                Column("description", "Description", "description"),
                Column("path", "Path", "path"),
            ],
        )

        author = ttk.LabelFrame(body, text="Author", padding=6)
        author.pack(fill="x", pady=(8, 0))
        for label, attr in (("Name", "name"), ("Email", "email"), ("URL", "url")):
            self._entry(author, label, lambda a=attr: getattr(s.manifest.author, a),
                        lambda v, a=attr: setattr(s.manifest.author, a, v))

        links = ttk.LabelFrame(body, text="Links", padding=6)
        links.pack(fill="x", pady=(8, 0))
        for label, attr in (
            ("Documentation URL", "documentation_url"),
            ("Changelog URL", "changelog_url"),
            ("Licenses URL", "licenses_url"),
        ):
            self._entry(links, label, lambda a=attr: getattr(s.manifest, a),
                        lambda v, a=attr: setattr(s.manifest, a, v))

        advanced = ttk.LabelFrame(body, text="Advanced", padding=6)
        advanced.pack(fill="x", pady=(8, 0))
        ttk.Label(advanced, text=_HIDE_HELP, wraplength=600, justify="left").pack(anchor="w")
        self.hide_var = tk.BooleanVar()
        self._vars.append((self.hide_var, lambda: s.manifest.hide_in_editor))
        ttk.Checkbutton(
            advanced,
            text="Hide In Editor",
            variable=self.hide_var,
            command=lambda: setattr(s.manifest, "hide_in_editor", self.hide_var.get()),
        ).pack(anchor="w")

        footer = ttk.Frame(self, padding=8)
        footer.pack(fill="x")
        ttk.Button(footer, text="Apply", width=12, command=self.on_apply).pack(side="right")
        ttk.Button(footer, text="Revert", width=12, command=self.on_revert).pack(
            side="right", padx=6
        )

    def _entry(
        self,
        master: tk.Widget,
        label: str,
        getter: Callable[[], object],
        setter: Callable[[str], None],
    ) -> tk.StringVar:
        row = ttk.Frame(master)
        row.pack(fill="x", pady=1)
        ttk.Label(row, text=label, width=20).pack(side="left", padx=4)
        var = tk.StringVar()
        ttk.Entry(row, textvariable=var).pack(side="left", fill="x", expand=True)
        self._vars.append((var, getter))

        def _write(*_: object) -> None:
            if not self._loading:
                setter(var.get())

        var.trace_add("write", _write)
        return var

    def _list(
        self,
        master: tk.Widget,
        title: str,
        getter: Callable[[], object],
        columns: list[Column],
    ) -> ListEditor:
        editor = ListEditor(master, getter(), title=title, columns=columns)  # type: ignore[arg-type]
        editor.pack(fill="x", pady=(8, 0))
        self._lists.append((editor, getter))
        return editor

    # ------------------------------------------------------------------
    # Session <-> widgets
    # ------------------------------------------------------------------
    def _pull(self) -> None:
        """Copy session state into the widgets without writing it back."""

        self._loading = True
        try:
            for var, getter in self._vars:
                value = getter()
                if isinstance(var, tk.BooleanVar):
                    var.set(bool(value))
                else:
                    var.set("" if value is None else str(value))
            self.description_text.delete("1.0", "end")
            self.description_text.insert("1.0", self.session.manifest.description or "")
            self.description_text.edit_modified(False)
            for editor, getter in self._lists:
                editor.bind_items(getter())  # type: ignore[arg-type]
        finally:
            self._loading = False
        self._sync_release_state()
        self.identifier_var.set(self.session.manifest.name or "")

    def _on_name(self, _value: str) -> None:
        name = self.session.set_name_parts(self.org_var.get(), self.package_var.get())
        self.identifier_var.set(name)
        # show the parts as they were stored
        org = sanitize_name_part(self.org_var.get())
        pkg = sanitize_name_part(self.package_var.get())
        self._loading = True
        try:
            if self.org_var.get() != org:
                self.org_var.set(org)
            if self.package_var.get() != pkg:
                self.package_var.set(pkg)
        finally:
            self._loading = False

    def _on_platform(self, _value: str) -> None:
        try:
            major = int(self.major_var.get())
            minor = int(self.minor_var.get())
        except ValueError:
            return
        self.session.set_platform_version(major, minor)

    def _on_minimal_toggled(self) -> None:
        self.session.has_minimal_version = self.minimal_var.get()
        if not self.session.has_minimal_version:
            self._loading = True
            try:
                self.release_var.set("")
            finally:
                self._loading = False
        self._sync_release_state()

    def _on_release(self) -> None:
        if not self._loading:
            self.session.release = self.release_var.get()

    def _sync_release_state(self) -> None:
        state = "!disabled" if self.session.has_minimal_version else "disabled"
        self.release_entry.state([state])

    def _on_description(self, _event: object = None) -> None:
        if not self.description_text.edit_modified():
            return
        if not self._loading:
            self.session.manifest.description = self.description_text.get("1.0", "end-1c")
        self.description_text.edit_modified(False)

    # ------------------------------------------------------------------
    # Footer actions
    # ------------------------------------------------------------------
    def on_apply(self) -> None:
        try:
            self.session.save()
        except ManifestError as exc:
            logger.error("save failed: %s", exc)
            if messagebox is not None:
                messagebox.showerror("Save failed", str(exc), parent=self)
            return
        self.destroy()

    def on_revert(self) -> None:
        self.session.revert()
        self._pull()


def launch(path: str | Path, *, settings: Settings | None = None) -> None:  # pragma: no cover - GUI
    """Open the editor for *path* and run the Tk main loop."""

    if tk is None:
        raise RuntimeError("tkinter is required for the manifest editor")
    session = ManifestSession(path, settings=settings)
    session.load()
    root = tk.Tk()
    root.withdraw()
    editor = ManifestEditor(root, session)
    editor.protocol("WM_DELETE_WINDOW", root.destroy)
    editor.bind("<Destroy>", lambda e: root.destroy() if e.widget is editor else None)
    root.mainloop()


__all__ = ["APP_TITLE", "ManifestEditor", "launch"]
