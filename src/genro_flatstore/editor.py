# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeEditor - headless editing session over a TreeStore.

The editor is the model side of an editable tree grid: it projects the
store into flat rows for display and turns user actions (add child, delete
subtree, rename, expand/collapse) into store calls. Every mutating action
is checkpointed in an UndoHistory first, so undo/redo restore whole-store
snapshots.

Rendering and dialogs stay outside: rename takes the new label directly
or from a ``prompt`` callable supplied by the UI layer.

Example:
    >>> editor = TreeEditor(TreeStore([{'id': 1, 'parent': None, 'label': 'A'}]))
    >>> editor.toggle_edit_mode()
    True
    >>> child = editor.add_child(1, 'B')
    >>> [(row['level'], row['label']) for row in editor.rows()]
    [(0, 'A'), (1, 'B')]
    >>> editor.undo()
    True
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .exceptions import EditModeError, ItemNotFoundError
from .history import UndoHistory
from .item import ItemId, TreeItem
from .store import TreeStore

logger = logging.getLogger(__name__)

IdFactory = Callable[[TreeStore], ItemId]
Prompt = Callable[[TreeItem], 'str | None']


def next_int_id(store: TreeStore) -> int:
    """Return the highest integer id in store plus one (1 for no int ids)."""
    return max((item.id for item in store if isinstance(item.id, int)), default=0) + 1


class TreeEditor:
    """Editing session: edit mode flag, grid rows, actions and undo/redo."""

    __slots__ = ('store', 'history', 'edit_mode', '_id_factory')

    def __init__(
        self,
        store: TreeStore | None = None,
        history: UndoHistory | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        """Initialize a TreeEditor.

        Args:
            store: The TreeStore to edit. A new empty one if None.
            history: UndoHistory bound to the same store. Created if None.
            id_factory: Callable receiving the store and returning the id
                for a new item. Defaults to next_int_id.

        Raises:
            ValueError: If history records a different store.
        """
        self.store = store if store is not None else TreeStore()
        self.history = history if history is not None else UndoHistory(self.store)
        if self.history.store is not self.store:
            raise ValueError("history is bound to a different store")
        self.edit_mode = False
        self._id_factory = id_factory or next_int_id

    def __repr__(self) -> str:
        mode = 'edit' if self.edit_mode else 'view'
        return f"TreeEditor({mode}, {self.store!r})"

    def toggle_edit_mode(self) -> bool:
        """Switch between view and edit mode; return the new edit_mode."""
        self.edit_mode = not self.edit_mode
        return self.edit_mode

    def _require_edit_mode(self) -> None:
        if not self.edit_mode:
            raise EditModeError("Editor is not in edit mode")

    def _require_item(self, item_id: ItemId) -> TreeItem:
        item = self.store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id!r} not found")
        return item

    # ==================== Actions ====================

    def add_child(
        self,
        parent_id: ItemId | None,
        label: str = 'New item',
        **attr: Any,
    ) -> TreeItem:
        """Create a new item under parent_id (None adds a root item).

        Args:
            parent_id: Id of the parent, or None.
            label: Label of the new item.
            **attr: Extra fields of the new item.

        Returns:
            The new TreeItem.

        Raises:
            EditModeError: If not in edit mode.
            ItemNotFoundError: If parent_id is not None and unknown.
            ValueError: If an extra field uses a reserved name.
        """
        self._require_edit_mode()
        if parent_id is not None:
            self._require_item(parent_id)
        item = TreeItem(self._id_factory(self.store), parent_id, label, attr)
        with self.history.record():
            self.store.add_item(item)
        logger.debug("Added %r under %r", item.id, parent_id)
        return item

    def delete(self, item_id: ItemId) -> list[TreeItem]:
        """Delete item_id with its whole subtree; return the removed items.

        Raises:
            EditModeError: If not in edit mode.
            ItemNotFoundError: If item_id is unknown.
        """
        self._require_edit_mode()
        self._require_item(item_id)
        with self.history.record():
            return self.store.remove_item(item_id)

    def rename(
        self,
        item_id: ItemId,
        label: str | None = None,
        prompt: Prompt | None = None,
    ) -> bool:
        """Change the label of item_id.

        The label is taken from ``label`` or, when that is None, from
        ``prompt(item)``. A None or empty answer cancels the rename and
        records nothing.

        Returns:
            True if the item was renamed, False if cancelled.

        Raises:
            EditModeError: If not in edit mode.
            ItemNotFoundError: If item_id is unknown.
        """
        self._require_edit_mode()
        item = self._require_item(item_id)
        if label is None and prompt is not None:
            label = prompt(item)
        if not label:
            logger.debug("Rename of %r cancelled", item_id)
            return False
        updated = item.copy()
        updated.label = label
        with self.history.record():
            self.store.update_item(updated)
        return True

    def toggle_expanded(self, item_id: ItemId) -> None:
        """Expand or collapse item_id. View state: no history entry."""
        self.store.toggle_expanded(item_id)

    # ==================== Undo / Redo ====================

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # ==================== Rows ====================

    def rows(self, expanded_only: bool = False) -> list[dict[str, Any]]:
        """Flatten the tree into grid rows, depth-first from the roots.

        Each row holds the item's fields plus:
        - level: depth, 0 for roots
        - path: labels from the root down to the item
        - has_children: True if the item has children
        - category: 'group' for items with children, 'element' otherwise

        These four keys take precedence over extra fields of the same name.

        Args:
            expanded_only: If True, descendants of collapsed items are
                left out.

        Returns:
            List of row dicts.
        """
        result: list[dict[str, Any]] = []
        path: list[str] = []
        hidden_below: int | None = None

        for level, item in self.store.walk():
            del path[level:]
            path.append(item.label)
            if hidden_below is not None:
                if level > hidden_below:
                    continue
                hidden_below = None
            has_children = bool(self.store.get_children(item.id))
            row = item.as_dict()
            row.update(
                level=level,
                path=list(path),
                has_children=has_children,
                category='group' if has_children else 'element',
            )
            result.append(row)
            if expanded_only and has_children and not item.expanded:
                hidden_below = level

        return result
