from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from .errors import ManifestError, SettingsError
from .paths import settings_file
from .selection import can_invoke
from .session import ManifestSession
from .settings import Settings, read_settings


def _settings() -> Settings:
    path = settings_file()
    try:
        return read_settings(path)
    except SettingsError as exc:
        raise SettingsError(f"Invalid settings file {path}: {exc}") from exc


def _open(path: Path) -> ManifestSession:
    session = ManifestSession(path, settings=_settings())
    session.load()
    if not session.valid:
        raise ManifestError(f"Invalid package.json: {path}")
    return session


def _reconciled(session: ManifestSession) -> dict:
    data = session.manifest.to_dict()
    data["dependencies"] = session.dependencies.to_mapping()
    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def show_cmd(args: argparse.Namespace) -> int:
    session = _open(args.path)
    data = _reconciled(session)
    if args.format == "yaml":
        print(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), end="")
    else:
        print(json.dumps(data, indent=session.settings.indent, ensure_ascii=False))
    return 0


def name_cmd(args: argparse.Namespace) -> int:
    session = _open(args.path)
    org, pkg = session.name_parts
    if args.org is not None:
        org = args.org
    if args.package is not None:
        pkg = args.package
    if args.org is not None or args.package is not None:
        session.set_name_parts(org, pkg)
        session.save()
    print(session.manifest.name)
    return 0


def deps_list(args: argparse.Namespace) -> int:
    session = _open(args.path)
    for dep in session.dependencies:
        print(f"{dep.name} {dep.version}")
    return 0


def deps_add(args: argparse.Namespace) -> int:
    session = _open(args.path)
    dep = session.dependencies.add()
    if args.name is not None:
        dep.name = args.name
    if args.version is not None:
        dep.version = args.version
    session.save()
    print(f"{dep.name} {dep.version}")
    return 0


def deps_remove(args: argparse.Namespace) -> int:
    session = _open(args.path)
    for idx, dep in enumerate(session.dependencies):
        if dep.name == args.name:
            session.dependencies.remove(idx)
            session.save()
            return 0
    print(f"No dependency named {args.name}", file=sys.stderr)
    return 1


def keywords_list(args: argparse.Namespace) -> int:
    session = _open(args.path)
    for word in session.keywords:
        print(word)
    return 0


def keywords_add(args: argparse.Namespace) -> int:
    session = _open(args.path)
    for word in args.words:
        session.keywords.add()
        session.keywords[len(session.keywords) - 1] = word
    session.save()
    return 0


def keywords_remove(args: argparse.Namespace) -> int:
    session = _open(args.path)
    words = list(session.keywords)
    if args.word not in words:
        print(f"No keyword {args.word!r}", file=sys.stderr)
        return 1
    session.keywords.remove(words.index(args.word))
    session.save()
    return 0


def samples_list(args: argparse.Namespace) -> int:
    session = _open(args.path)
    for sample in session.samples:
        print(f"{sample.display_name or ''}\t{sample.path or ''}\t{sample.description or ''}")
    return 0


def samples_add(args: argparse.Namespace) -> int:
    session = _open(args.path)
    session.samples.add()
    session.samples.edit(
        len(session.samples) - 1,
        display_name=args.display_name,
        description=args.description,
        path=args.sample_path,
    )
    session.save()
    return 0


def release_cmd(args: argparse.Namespace) -> int:
    session = _open(args.path)
    if args.clear:
        session.has_minimal_version = False
        session.save()
    elif args.text is not None:
        session.has_minimal_version = True
        session.release = args.text
        session.save()
    print(session.release or "")
    return 0


def check_cmd(args: argparse.Namespace) -> int:
    ok = can_invoke(args.path) and Path(args.path).is_file()
    print("editable" if ok else "not editable")
    return 0 if ok else 1


def edit_cmd(args: argparse.Namespace) -> int:  # pragma: no cover - GUI
    from .ui.tk import launch

    launch(args.path, settings=_settings())
    return 0


def show_paths(args: argparse.Namespace) -> int:
    path = settings_file()
    if args.as_json:
        print(json.dumps({"settings": str(path), "exists": path.is_file()}))
    else:
        print(f"settings: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgmanifest", description="Edit a package.json manifest."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_show = subparsers.add_parser("show", help="Print the manifest.")
    p_show.add_argument("path", type=Path)
    p_show.add_argument("--format", choices=["json", "yaml"], default="json")
    p_show.set_defaults(func=show_cmd)

    p_name = subparsers.add_parser("name", help="Show or change the package name.")
    p_name.add_argument("path", type=Path)
    p_name.add_argument("--org", help="Organization part")
    p_name.add_argument("--package", help="Package part")
    p_name.set_defaults(func=name_cmd)

    # deps group
    p_deps = subparsers.add_parser("deps", help="Manage dependencies.")
    sp_deps = p_deps.add_subparsers(dest="deps_cmd", required=True)

    p_dl = sp_deps.add_parser("list", help="List dependencies")
    p_dl.add_argument("path", type=Path)
    p_dl.set_defaults(func=deps_list)

    p_da = sp_deps.add_parser("add", help="Add a dependency")
    p_da.add_argument("path", type=Path)
    p_da.add_argument("name", nargs="?")
    p_da.add_argument("version", nargs="?")
    p_da.set_defaults(func=deps_add)

    p_dr = sp_deps.add_parser("remove", help="Remove a dependency")
    p_dr.add_argument("path", type=Path)
    p_dr.add_argument("name")
    p_dr.set_defaults(func=deps_remove)

    # keywords group
    p_kw = subparsers.add_parser("keywords", help="Manage keywords.")
    sp_kw = p_kw.add_subparsers(dest="keywords_cmd", required=True)

    p_kl = sp_kw.add_parser("list", help="List keywords")
    p_kl.add_argument("path", type=Path)
    p_kl.set_defaults(func=keywords_list)

    p_ka = sp_kw.add_parser("add", help="Append keywords")
    p_ka.add_argument("path", type=Path)
    p_ka.add_argument("words", nargs="+")
    p_ka.set_defaults(func=keywords_add)

    p_kr = sp_kw.add_parser("remove", help="Remove a keyword")
    p_kr.add_argument("path", type=Path)
    p_kr.add_argument("word")
    p_kr.set_defaults(func=keywords_remove)

    # samples group
    p_samples = subparsers.add_parser("samples", help="Manage samples.")
    sp_samples = p_samples.add_subparsers(dest="samples_cmd", required=True)

    p_sl = sp_samples.add_parser("list", help="List samples")
    p_sl.add_argument("path", type=Path)
    p_sl.set_defaults(func=samples_list)

    p_sa = sp_samples.add_parser("add", help="Add a sample")
    p_sa.add_argument("path", type=Path)
    p_sa.add_argument("--display-name")
    p_sa.add_argument("--description")
    p_sa.add_argument("--path", dest="sample_path")
    p_sa.set_defaults(func=samples_add)

    p_rel = subparsers.add_parser("release", help="Show or change the minimal release.")
    p_rel.add_argument("path", type=Path)
    g_rel = p_rel.add_mutually_exclusive_group()
    g_rel.add_argument("--set", dest="text", help="Require this release")
    g_rel.add_argument("--clear", action="store_true", help="Drop the release")
    p_rel.set_defaults(func=release_cmd)

    p_check = subparsers.add_parser("check", help="Exit 0 if PATH can be edited.")
    p_check.add_argument("path", type=Path)
    p_check.set_defaults(func=check_cmd)

    p_edit = subparsers.add_parser("edit", help="Open the manifest editor window.")
    p_edit.add_argument("path", type=Path)
    p_edit.set_defaults(func=edit_cmd)

    p_paths = subparsers.add_parser("paths", help="Show the settings file location.")
    p_paths.add_argument("--json", dest="as_json", action="store_true")
    p_paths.set_defaults(func=show_paths)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s:%(message)s")
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    try:
        return int(func(args))
    except ManifestError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except SystemExit as exc:  # pragma: no cover - argparse may raise
        return int(exc.code)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
