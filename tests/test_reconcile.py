from __future__ import annotations

from pkgmanifest.model import Dependency, Sample
from pkgmanifest.reconcile import (
    DEFAULT_DEPENDENCY_NAME,
    DEFAULT_SAMPLE_PATH,
    DependencyList,
    KeywordList,
    SampleList,
)


def test_seed_follows_mapping_order():
    deps = DependencyList()
    deps.seed({"b": "2.0.0", "a": "1.0.0"})
    assert list(deps) == [Dependency("b", "2.0.0"), Dependency("a", "1.0.0")]


def test_seed_replaces_existing_rows():
    deps = DependencyList()
    deps.add()
    deps.seed({"a": "1.0.0"})
    assert len(deps) == 1


def test_round_trip_without_edits():
    source = {"a": "1.0.0", "b": "2.0.0"}
    deps = DependencyList()
    deps.seed(source)
    target: dict[str, str] = {"stale": "0.0.1"}
    deps.flush(target)
    assert target == source


def test_last_write_wins_on_duplicates():
    deps = DependencyList()
    deps.items.extend([Dependency("a", "1.0.0"), Dependency("a", "2.0.0")])
    assert deps.to_mapping() == {"a": "2.0.0"}


def test_reorder_changes_flush_order():
    deps = DependencyList()
    deps.seed({"a": "1", "b": "2"})
    assert deps.move(1, -1) is True
    assert list(deps.to_mapping()) == ["b", "a"]


def test_move_out_of_range_is_noop():
    deps = DependencyList()
    deps.seed({"a": "1", "b": "2"})
    assert deps.move(0, -1) is False
    assert deps.move(1, 1) is False
    assert deps.move(5, -1) is False
    assert [d.name for d in deps] == ["a", "b"]


def test_add_dependency_default():
    deps = DependencyList()
    added = deps.add()
    assert list(deps) == [Dependency(DEFAULT_DEPENDENCY_NAME, "1.0.0")]
    assert added is deps[0]


def test_add_dependency_configured_default():
    deps = DependencyList(default_name="com.x.y", default_version="0.1.0")
    assert deps.add() == Dependency("com.x.y", "0.1.0")


def test_remove_returns_entry():
    deps = DependencyList()
    deps.seed({"a": "1", "b": "2"})
    assert deps.remove(0) == Dependency("a", "1")
    assert deps.to_mapping() == {"b": "2"}


def test_keywords_share_backing_list():
    backing = ["ui"]
    kw = KeywordList(backing)
    kw.add()
    kw[1] = "tools"
    kw.move(1, -1)
    assert backing == ["tools", "ui"]
    kw.remove(0)
    assert backing == ["ui"]


def test_keyword_add_default_is_empty():
    kw = KeywordList()
    assert kw.add() == ""


def test_sample_add_and_edit():
    backing: list[Sample] = []
    samples = SampleList(backing)
    samples.add()
    assert backing == [Sample(display_name="", description="", path=DEFAULT_SAMPLE_PATH)]
    samples.edit(0, display_name="Demo", path="Samples~/Demo")
    assert backing[0] == Sample(display_name="Demo", description="", path="Samples~/Demo")
