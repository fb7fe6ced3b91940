"""Reorderable list widget bound to a :class:`~pkgmanifest.reconcile.ReconciledList`.

:class:`ListEditor` shows the rows of a reconciled list in a ``Treeview``
with a toolbar offering Add, Edit, Remove and up/down moves.  Every
operation goes through the reconciled list, so the widget never holds its own
copy of the data.  ``<<ListChanged>>`` is emitted after each change.

Each column maps to one attribute of the row objects.  Plain ``str`` rows
(keywords) use the special attribute name ``"."``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

try:  # pragma: no cover - importing tkinter is environment dependent
    import tkinter as tk
    from tkinter import simpledialog, ttk
except Exception:  # pragma: no cover - fallback when tkinter missing
    tk = None  # type: ignore
    ttk = None  # type: ignore
    simpledialog = None  # type: ignore

from ...reconcile import ReconciledList

SELF = "."


@dataclass
class Column:
    """Specification for a Treeview column."""

    id: str
    heading: str
    attribute: str
    width: int = 140


class ListEditor(ttk.Frame if ttk is not None else object):  # pragma: no cover - exercised via tk tests
    def __init__(
        self,
        master: tk.Widget,
        items: ReconciledList[Any],
        *,
        title: str,
        columns: Sequence[Column],
    ) -> None:
        if tk is None:  # pragma: no cover - environment guard
            raise RuntimeError("tkinter is required for ListEditor")
        super().__init__(master)
        self.items = items
        self._columns = list(columns)
        self._build(title)
        self.refresh()

    def bind_items(self, items: ReconciledList[Any]) -> None:
        """Point the widget at a new list, e.g. after a revert."""

        self.items = items
        self.refresh()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build(self, title: str) -> None:
        toolbar = ttk.Frame(self)
        toolbar.pack(fill="x", padx=2, pady=2)
        ttk.Label(toolbar, text=title).pack(side="left", padx=(0, 8))
        ttk.Button(toolbar, text="Add", command=self._on_add).pack(side="left")
        ttk.Button(toolbar, text="Edit", command=self._on_edit).pack(side="left")
        ttk.Button(toolbar, text="Remove", command=self._on_remove).pack(side="left")
        ttk.Button(toolbar, text="↑", command=lambda: self._move(-1)).pack(
            side="left", padx=(6, 0)
        )
        ttk.Button(toolbar, text="↓", command=lambda: self._move(1)).pack(side="left")

        self._tree = ttk.Treeview(
            self,
            columns=[c.id for c in self._columns],
            show="headings",
            selectmode="browse",
            height=5,
        )
        for col in self._columns:
            self._tree.heading(col.id, text=col.heading)
            self._tree.column(col.id, width=col.width, anchor="w")
        self._tree.pack(fill="both", expand=True, padx=2, pady=2)
        self._tree.bind("<Double-1>", lambda e: self._on_edit())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._tree.delete(*self._tree.get_children())
        for idx, item in enumerate(self.items):
            self._tree.insert("", "end", iid=str(idx), values=self._item_to_row(item))

    def _item_to_row(self, item: Any) -> list[str]:
        return [str(self._get(item, col.attribute) or "") for col in self._columns]

    @staticmethod
    def _get(item: Any, attribute: str) -> Any:
        return item if attribute == SELF else getattr(item, attribute)

    def _selected_index(self) -> int | None:
        sel = self._tree.selection()
        return int(sel[0]) if sel else None

    def _changed(self, select: int | None = None) -> None:
        self.refresh()
        if select is not None and 0 <= select < len(self.items):
            self._tree.selection_set(str(select))
        self.event_generate("<<ListChanged>>")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def _on_add(self) -> None:
        self.items.add()
        self._changed(len(self.items) - 1)

    def _on_edit(self) -> None:
        idx = self._selected_index()
        if idx is None or simpledialog is None:
            return
        item = self.items[idx]
        for col in self._columns:
            value = simpledialog.askstring(
                col.heading,
                f"{col.heading}:",
                parent=self,
                initialvalue=str(self._get(item, col.attribute) or ""),
            )
            if value is None:
                return
            if col.attribute == SELF:
                self.items[idx] = value
                item = value
            else:
                setattr(item, col.attribute, value)
        self._changed(idx)

    def _on_remove(self) -> None:
        idx = self._selected_index()
        if idx is None:
            return
        self.items.remove(idx)
        self._changed(min(idx, len(self.items) - 1))

    def _move(self, offset: int) -> None:
        idx = self._selected_index()
        if idx is None:
            return
        if self.items.move(idx, offset):
            self._changed(idx + offset)


__all__ = ["Column", "ListEditor", "SELF"]
