import json

import pytest

try:
    import tkinter as tk
except Exception:  # pragma: no cover - tkinter missing
    tk = None  # type: ignore

from pkgmanifest.session import ManifestSession


def _make_root():
    root = tk.Tk()
    root.withdraw()
    return root


def _session(tmp_path, data):
    path = tmp_path / "package.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    session = ManifestSession(path)
    session.load()
    return session


def _root_or_skip():
    if tk is None:
        pytest.skip("tkinter not available")
    try:
        return _make_root()
    except Exception:
        pytest.skip("no display available")


def test_editor_writes_through_to_session(tmp_path):
    root = _root_or_skip()
    from pkgmanifest.ui.tk import ManifestEditor

    session = _session(
        tmp_path, {"name": "com.acme.widgets", "dependencies": {"a": "1.0.0"}}
    )
    editor = ManifestEditor(root, session)
    assert editor.org_var.get() == "acme"
    editor.org_var.set("Acme Corp!")
    assert session.manifest.name == "com.acme-corp.widgets"
    assert editor.identifier_var.get() == "com.acme-corp.widgets"
    assert editor.org_var.get() == "acme-corp"
    editor.package_var.set("My Widgets")
    assert editor.package_var.get() == "my-widgets"
    assert session.manifest.name == "com.acme-corp.my-widgets"

    editor.major_var.set("2023")
    assert session.manifest.unity.startswith("2023.")

    editor.minimal_var.set(True)
    editor._on_minimal_toggled()
    editor.release_var.set("0f1")
    assert session.release == "0f1"
    editor.minimal_var.set(False)
    editor._on_minimal_toggled()
    assert session.release is None
    assert editor.release_var.get() == ""

    editor.deps_editor._on_add()
    assert len(session.dependencies) == 2
    root.destroy()


def test_editor_revert_rebinds(tmp_path):
    root = _root_or_skip()
    from pkgmanifest.ui.tk import ManifestEditor

    session = _session(tmp_path, {"name": "com.acme.widgets", "keywords": ["ui"]})
    editor = ManifestEditor(root, session)
    editor.keywords_editor._on_add()
    editor.package_var.set("other")
    editor.on_revert()
    assert session.manifest.keywords == ["ui"]
    assert editor.package_var.get() == "widgets"
    assert editor.keywords_editor.items is session.keywords
    root.destroy()


def test_editor_apply_saves_and_closes(tmp_path):
    root = _root_or_skip()
    from pkgmanifest.ui.tk import ManifestEditor

    session = _session(tmp_path, {"name": "com.acme.widgets"})
    editor = ManifestEditor(root, session)
    editor.samples_editor._on_add()
    editor.on_apply()
    saved = json.loads(session.path.read_text(encoding="utf-8"))
    assert saved["samples"] == [{"displayName": "", "description": "", "path": "Samples~/"}]
    assert not editor.winfo_exists()
    root.destroy()


def test_editor_invalid_manifest(tmp_path):
    root = _root_or_skip()
    from pkgmanifest.ui.tk import ManifestEditor

    session = _session(tmp_path, "{ broken")
    editor = ManifestEditor(root, session)
    assert not hasattr(editor, "org_var")
    root.destroy()


def test_editor_missing_manifest_shows_form(tmp_path):
    root = _root_or_skip()
    from pkgmanifest.ui.tk import ManifestEditor

    session = ManifestSession(tmp_path / "package.json")
    session.load()
    editor = ManifestEditor(root, session)
    editor.org_var.set("acme")
    editor.package_var.set("widgets")
    editor.on_apply()
    saved = json.loads(session.path.read_text(encoding="utf-8"))
    assert saved["name"] == "com.acme.widgets"
    root.destroy()
