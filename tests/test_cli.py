from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from pkgmanifest import cli


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("PKGMANIFEST_SETTINGS", str(tmp_path / "settings.ini"))


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "package.json"
    path.write_text(
        json.dumps(
            {
                "name": "com.acme.widgets",
                "version": "1.0.0",
                "unity": "2021.3",
                "dependencies": {"com.acme.core": "1.0.0"},
                "keywords": ["ui"],
            }
        ),
        encoding="utf-8",
    )
    return path


def _read(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_show_json(manifest, capsys):
    assert cli.main(["show", str(manifest)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["name"] == "com.acme.widgets"
    assert out["dependencies"] == {"com.acme.core": "1.0.0"}


def test_show_yaml(manifest, capsys):
    assert cli.main(["show", str(manifest), "--format", "yaml"]) == 0
    out = yaml.safe_load(capsys.readouterr().out)
    assert out["keywords"] == ["ui"]


def test_show_missing_file_is_empty_document(tmp_path, capsys):
    assert cli.main(["show", str(tmp_path / "package.json")]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "dependencies": {},
        "keywords": [],
        "author": {},
        "samples": [],
        "hideInEditor": True,
    }


def test_show_malformed_file(tmp_path, capsys):
    path = tmp_path / "package.json"
    path.write_text("{ not json", encoding="utf-8")
    assert cli.main(["show", str(path)]) == 1
    assert "Invalid package.json" in capsys.readouterr().err


def test_name_creates_missing_file(tmp_path, capsys):
    path = tmp_path / "package.json"
    assert cli.main(["name", str(path), "--org", "acme", "--package", "widgets"]) == 0
    assert capsys.readouterr().out.strip() == "com.acme.widgets"
    assert _read(path)["name"] == "com.acme.widgets"


def test_name_rename(manifest, capsys):
    assert cli.main(["name", str(manifest), "--org", "Acme Corp!"]) == 0
    assert capsys.readouterr().out.strip() == "com.acme-corp.widgets"
    assert _read(manifest)["name"] == "com.acme-corp.widgets"


def test_name_show_only(manifest, capsys):
    before = manifest.read_text(encoding="utf-8")
    assert cli.main(["name", str(manifest)]) == 0
    assert capsys.readouterr().out.strip() == "com.acme.widgets"
    assert manifest.read_text(encoding="utf-8") == before


def test_deps_add_default_and_explicit(manifest, capsys):
    assert cli.main(["deps", "add", str(manifest)]) == 0
    assert cli.main(["deps", "add", str(manifest), "com.acme.ui", "2.1.0"]) == 0
    assert _read(manifest)["dependencies"] == {
        "com.acme.core": "1.0.0",
        "com.example.new-package": "1.0.0",
        "com.acme.ui": "2.1.0",
    }
    capsys.readouterr()
    assert cli.main(["deps", "list", str(manifest)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "com.acme.ui 2.1.0"


def test_deps_add_existing_overrides_version(manifest):
    assert cli.main(["deps", "add", str(manifest), "com.acme.core", "3.0.0"]) == 0
    assert _read(manifest)["dependencies"] == {"com.acme.core": "3.0.0"}


def test_deps_remove(manifest):
    assert cli.main(["deps", "remove", str(manifest), "com.acme.core"]) == 0
    assert _read(manifest)["dependencies"] == {}
    assert cli.main(["deps", "remove", str(manifest), "com.acme.core"]) == 1


def test_keywords(manifest, capsys):
    assert cli.main(["keywords", "add", str(manifest), "tools", "editor"]) == 0
    assert _read(manifest)["keywords"] == ["ui", "tools", "editor"]
    assert cli.main(["keywords", "remove", str(manifest), "ui"]) == 0
    assert cli.main(["keywords", "remove", str(manifest), "missing"]) == 1
    capsys.readouterr()
    assert cli.main(["keywords", "list", str(manifest)]) == 0
    assert capsys.readouterr().out.splitlines() == ["tools", "editor"]


def test_samples_add(manifest, capsys):
    assert cli.main(["samples", "add", str(manifest), "--display-name", "Demo"]) == 0
    assert _read(manifest)["samples"] == [
        {"displayName": "Demo", "description": "", "path": "Samples~/"}
    ]
    assert cli.main(["samples", "list", str(manifest)]) == 0
    assert capsys.readouterr().out.startswith("Demo\tSamples~/")


def test_release_set_and_clear(manifest, capsys):
    assert cli.main(["release", str(manifest), "--set", "0f1"]) == 0
    assert _read(manifest)["unityRelease"] == "0f1"
    assert cli.main(["release", str(manifest), "--set", "   "]) == 0
    assert "unityRelease" not in _read(manifest)
    assert cli.main(["release", str(manifest), "--set", "2f1"]) == 0
    assert cli.main(["release", str(manifest), "--clear"]) == 0
    assert "unityRelease" not in _read(manifest)


def test_check(manifest, tmp_path):
    assert cli.main(["check", str(manifest)]) == 0
    other = tmp_path / "Package.json"
    other.write_text("{}", encoding="utf-8")
    assert cli.main(["check", str(other)]) == 1
    assert cli.main(["check", str(tmp_path / "sub" / "package.json")]) == 1


def test_paths_json(tmp_path, capsys):
    assert cli.main(["paths", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"settings": str((tmp_path / "settings.ini").resolve()), "exists": False}


def test_settings_applied(manifest, tmp_path):
    (tmp_path / "settings.ini").write_text(
        "[pkgmanifest]\ndependency_name = com.acme.placeholder\ndependency_version = 0.0.1\n",
        encoding="utf-8",
    )
    assert cli.main(["deps", "add", str(manifest)]) == 0
    assert _read(manifest)["dependencies"]["com.acme.placeholder"] == "0.0.1"


def test_malformed_settings_reported(manifest, tmp_path, capsys):
    (tmp_path / "settings.ini").write_text("[pkgmanifest]\nindent = wide\n", encoding="utf-8")
    before = manifest.read_text(encoding="utf-8")
    assert cli.main(["deps", "add", str(manifest)]) == 1
    err = capsys.readouterr().err
    assert "Invalid settings file" in err
    assert "invalid indent" in err
    assert manifest.read_text(encoding="utf-8") == before
