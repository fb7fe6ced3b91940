"""Ordered, editable lists backing the manifest's collections.

The form shows dependencies, keywords and samples as reorderable lists.
Keywords and samples are stored as arrays, so their lists simply share the
manifest's own ``list`` objects and every edit is live.  Dependencies are
stored as a mapping, which has no useful edit order; :class:`DependencyList`
keeps its own ordered rows and rebuilds the mapping wholesale when
:meth:`DependencyList.flush` runs at save time.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Generic, TypeVar

from .model import Dependency, Sample

T = TypeVar("T")

DEFAULT_DEPENDENCY_NAME = "com.example.new-package"
DEFAULT_DEPENDENCY_VERSION = "1.0.0"
DEFAULT_SAMPLE_PATH = "Samples~/"


class ReconciledList(Generic[T]):
    """Positional list operations shared by the three editable lists."""

    def __init__(self, items: list[T] | None = None) -> None:
        self._items: list[T] = items if items is not None else []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[index] = value

    @property
    def items(self) -> list[T]:
        return self._items

    def new_item(self) -> T:
        raise NotImplementedError

    def add(self) -> T:
        """Append a default entry and return it."""

        item = self.new_item()
        self._items.append(item)
        return item

    def remove(self, index: int) -> T:
        return self._items.pop(index)

    def move(self, index: int, offset: int) -> bool:
        """Swap the entry at *index* with its neighbour at ``index + offset``.

        Returns ``False`` without touching the list when the target is out of
        range.
        """

        new_index = index + offset
        if not (0 <= index < len(self._items) and 0 <= new_index < len(self._items)):
            return False
        self._items[index], self._items[new_index] = (
            self._items[new_index],
            self._items[index],
        )
        return True


class DependencyList(ReconciledList[Dependency]):
    def __init__(
        self,
        *,
        default_name: str = DEFAULT_DEPENDENCY_NAME,
        default_version: str = DEFAULT_DEPENDENCY_VERSION,
    ) -> None:
        super().__init__()
        self.default_name = default_name
        self.default_version = default_version

    def new_item(self) -> Dependency:
        return Dependency(self.default_name, self.default_version)

    def seed(self, mapping: Mapping[str, str]) -> None:
        """Replace the rows with one entry per mapping item, in mapping order."""

        self._items.clear()
        for name, version in mapping.items():
            self._items.append(Dependency(name, version))

    def flush(self, mapping: MutableMapping[str, str]) -> None:
        """Rebuild *mapping* from the rows.

        Rows are applied in order, so a later duplicate name replaces the
        version of an earlier one.
        """

        mapping.clear()
        for dep in self._items:
            mapping[dep.name] = dep.version

    def to_mapping(self) -> dict[str, str]:
        out: dict[str, str] = {}
        self.flush(out)
        return out


class KeywordList(ReconciledList[str]):
    def new_item(self) -> str:
        return ""


class SampleList(ReconciledList[Sample]):
    def __init__(
        self, items: list[Sample] | None = None, *, default_path: str = DEFAULT_SAMPLE_PATH
    ) -> None:
        super().__init__(items)
        self.default_path = default_path

    def new_item(self) -> Sample:
        return Sample(display_name="", description="", path=self.default_path)

    def edit(
        self,
        index: int,
        *,
        display_name: str | None = None,
        description: str | None = None,
        path: str | None = None,
    ) -> Sample:
        """Update the given sub-fields of the sample at *index*."""

        sample = self._items[index]
        if display_name is not None:
            sample.display_name = display_name
        if description is not None:
            sample.description = description
        if path is not None:
            sample.path = path
        return sample


__all__ = [
    "DEFAULT_DEPENDENCY_NAME",
    "DEFAULT_DEPENDENCY_VERSION",
    "DEFAULT_SAMPLE_PATH",
    "DependencyList",
    "KeywordList",
    "ReconciledList",
    "SampleList",
]
