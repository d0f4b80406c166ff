# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore - A flat, id-indexed tree of labeled items.

This module provides the TreeStore class, the container at the heart of
genro-flatstore. The tree is kept as an ordered list of TreeItem records
plus a dict from id to item, so lookups are O(1) while parent/child
relations are derived from each item's ``parent`` field on demand.

Key Features:
    - **Flat storage**: One ordered list, order = load/insertion order
    - **O(1) lookup**: Internal dict keyed by item id
    - **Strict ids**: ``1`` and ``'1'`` are different ids, no coercion
    - **Tolerant reads**: Unknown ids give empty results, never errors
    - **Cascading delete**: Removing an item removes all its descendants
    - **Snapshots**: Deep copies of the whole list for undo/redo

Example:
    Basic usage::

        store = TreeStore([
            {'id': 1, 'parent': None, 'label': 'A'},
            {'id': 2, 'parent': 1, 'label': 'B'},
            {'id': 3, 'parent': 1, 'label': 'C'},
            {'id': 4, 'parent': 2, 'label': 'D'},
        ])
        [i.id for i in store.get_all_parents(4)]   # [4, 2, 1]
        store.remove_item(2)
        [i.id for i in store.get_all()]            # [1, 3]
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from ..exceptions import CycleError, DuplicateIdError
from ..item import ItemId, TreeItem, same_id
from .loading import coerce_item, load_from_list, load_from_treestore

logger = logging.getLogger(__name__)


def _key(item_id: Any) -> tuple[type, Any]:
    """Hashable key that keeps 1 and '1' apart."""
    return type(item_id), item_id


def _is_child_of(item: TreeItem, parent_id: ItemId | None) -> bool:
    if parent_id is None:
        return item.parent is None
    return same_id(item.parent, parent_id)


class TreeStore:
    """A flat tree of TreeItem records with O(1) lookup by id.

    TreeStore provides:
    - get_item(id), get_children(id): Direct lookups
    - get_all_children(id), get_all_parents(id): Transitive queries
    - add_item / remove_item / update_item: Mutations keeping list and index in sync
    - build_tree(): Nested projection with ``children`` populated
    - get_snapshot / restore_from_snapshot: Whole-store checkpoints

    Attributes:
        raise_on_error: Strict mode flag, see __init__.

    Example:
        >>> store = TreeStore([{'id': 1, 'parent': None, 'label': 'root'}])
        >>> store.add_item({'id': 2, 'parent': 1, 'label': 'child'})
        TreeItem(2, parent=1, label='child')
        >>> [c.label for c in store.get_children(1)]
        ['child']
    """

    __slots__ = ('_items', '_index', 'raise_on_error')

    def __init__(
        self,
        source: list | TreeStore | None = None,
        raise_on_error: bool = False,
    ) -> None:
        """Initialize a TreeStore.

        Args:
            source: Optional initial data. Can be:
                - list: TreeItem instances or dicts ({'id', 'parent', 'label', ...})
                - TreeStore: Deep copy of another TreeStore
            raise_on_error: If False (default), anomalies are tolerated:
                duplicate ids overwrite the index entry (last writer wins)
                and cyclic parent chains are cut where they loop.
                If True, duplicate ids raise DuplicateIdError and cycles
                met during traversal raise CycleError.

        Example:
            >>> TreeStore([{'id': 1, 'parent': None, 'label': 'A'}])
            >>> TreeStore(other_store)  # copy
            >>> TreeStore(items, raise_on_error=True)  # strict mode
        """
        self._items: list[TreeItem] = []
        self._index: dict[ItemId, TreeItem] = {}
        self.raise_on_error = raise_on_error

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: list | TreeStore) -> None:
        """Load data from source into this TreeStore.

        Raises:
            TypeError: If source is not a list or TreeStore.
        """
        if isinstance(source, TreeStore):
            load_from_treestore(self, source)
        elif isinstance(source, list):
            load_from_list(self, source)
        else:
            raise TypeError(
                f"source must be list or TreeStore, not {type(source).__name__}"
            )

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeStore({[item.id for item in self._items]})"

    def __len__(self) -> int:
        """Return the number of items in the store."""
        return len(self._items)

    def __iter__(self) -> Iterator[TreeItem]:
        """Iterate over items in backing order."""
        return iter(list(self._items))

    def __contains__(self, item_id: Any) -> bool:
        return self._lookup(item_id) is not None

    # ==================== Index Utilities ====================

    def _lookup(self, item_id: Any) -> TreeItem | None:
        """Get item by id with strict type matching."""
        if item_id is None:
            return None
        item = self._index.get(item_id)
        if item is not None and same_id(item.id, item_id):
            return item
        return None

    def _insert_item(self, item: TreeItem) -> None:
        """Append item to the list and register it in the index.

        Raises:
            DuplicateIdError: If the id is taken and raise_on_error is set.
        """
        if self._lookup(item.id) is not None:
            if self.raise_on_error:
                raise DuplicateIdError(f"Id {item.id!r} already present")
            logger.warning("Duplicate id %r: index entry overwritten", item.id)
        self._items.append(item)
        self._index[item.id] = item

    def _rebuild_index(self) -> None:
        self._index.clear()
        for item in self._items:
            self._index[item.id] = item

    def _on_cycle(self, item_id: ItemId, operation: str) -> None:
        """Report a cyclic parent chain: raise in strict mode, log otherwise."""
        message = f"Cycle detected at id {item_id!r} during {operation}"
        if self.raise_on_error:
            raise CycleError(message)
        logger.warning("%s: traversal cut", message)

    # ==================== Read API ====================

    def get_all(self) -> list[TreeItem]:
        """Return all items in backing order.

        The list is a new one; the items in it are the live stored objects.
        """
        return list(self._items)

    def get_item(self, item_id: ItemId) -> TreeItem | None:
        """Get item by id, or None if not found."""
        return self._lookup(item_id)

    def get_children(self, item_id: ItemId | None) -> list[TreeItem]:
        """Return direct children of item_id in backing order.

        Passing None returns the root items. An unknown id returns an
        empty list.
        """
        return [item for item in self._items if _is_child_of(item, item_id)]

    def get_roots(self) -> list[TreeItem]:
        """Return the items whose parent is None."""
        return self.get_children(None)

    def get_all_children(self, item_id: ItemId | None) -> list[TreeItem]:
        """Return every descendant of item_id, excluding item_id itself.

        Uses an explicit worklist; the order of the result is not part of
        the contract.

        Args:
            item_id: Id whose descendants are wanted.

        Returns:
            List of descendant items, empty for leaves and unknown ids.

        Raises:
            CycleError: If the parent chain loops and raise_on_error is set.
        """
        result: list[TreeItem] = []
        start = _key(item_id)
        expanded: set[tuple[type, Any]] = {start}
        stack: list[ItemId | None] = [item_id]

        while stack:
            current = stack.pop()
            for child in self.get_children(current):
                key = _key(child.id)
                if key == start:
                    self._on_cycle(child.id, 'get_all_children')
                    continue
                result.append(child)
                if key not in expanded:
                    expanded.add(key)
                    stack.append(child.id)

        return result

    def get_all_parents(self, item_id: ItemId) -> list[TreeItem]:
        """Return the ancestor chain of item_id, self first, root last.

        A parent id that resolves to nothing ends the chain early: the
        partial chain gathered so far is returned.

        Returns:
            List starting with the item itself; empty if item_id is unknown.

        Raises:
            CycleError: If the parent chain loops and raise_on_error is set.
        """
        result: list[TreeItem] = []
        seen: set[tuple[type, Any]] = set()
        current = self._lookup(item_id)

        while current is not None:
            key = _key(current.id)
            if key in seen:
                self._on_cycle(current.id, 'get_all_parents')
                break
            seen.add(key)
            result.append(current)
            if current.parent is None:
                break
            parent = self._lookup(current.parent)
            if parent is None:
                logger.warning(
                    "Dangling parent %r on item %r: ancestry truncated",
                    current.parent, current.id,
                )
            current = parent

        return result

    def has_complete_ancestry(self, item_id: ItemId) -> bool:
        """True if the ancestor chain of item_id ends at a real root.

        False for unknown ids and for chains cut by a dangling parent
        or a cycle.
        """
        chain = self.get_all_parents(item_id)
        return bool(chain) and chain[-1].parent is None

    def walk(self) -> Iterator[tuple[int, TreeItem]]:
        """Yield (level, item) pairs depth-first, starting from the roots.

        Items not reachable from a root (dangling parents, pure cycles) are
        not visited. Uses an explicit stack, so depth is not bounded by the
        recursion limit.

        Example:
            >>> for level, item in store.walk():
            ...     print('  ' * level + item.label)
        """
        stack = [(0, item) for item in reversed(self.get_children(None))]
        path: list[tuple[type, Any]] = []
        on_path: set[tuple[type, Any]] = set()

        while stack:
            level, item = stack.pop()
            on_path.difference_update(path[level:])
            del path[level:]
            key = _key(item.id)
            if key in on_path:
                self._on_cycle(item.id, 'walk')
                continue
            yield level, item
            path.append(key)
            on_path.add(key)
            stack.extend(
                (level + 1, child) for child in reversed(self.get_children(item.id))
            )

    def build_tree(self) -> list[TreeItem]:
        """Return nested copies of the root items with ``children`` populated.

        The flat store is not modified: every node is a fresh copy.
        """
        def _build(parent_id: ItemId | None, ancestors: frozenset) -> list[TreeItem]:
            nodes = []
            for child in self.get_children(parent_id):
                key = _key(child.id)
                if key in ancestors:
                    self._on_cycle(child.id, 'build_tree')
                    continue
                node = child.copy()
                node.children = _build(child.id, ancestors | {key})
                nodes.append(node)
            return nodes

        return _build(None, frozenset())

    # ==================== Write API ====================

    def add_item(self, item: TreeItem | dict[str, Any]) -> TreeItem:
        """Append an item to the store.

        The parent is not checked. A duplicate id overwrites the index entry
        (two list entries then share the id) unless raise_on_error is set.

        Args:
            item: TreeItem or dict form of an item.

        Returns:
            The stored TreeItem.

        Raises:
            DuplicateIdError: If the id is taken and raise_on_error is set.
        """
        item = coerce_item(item)
        self._insert_item(item)
        return item

    def remove_item(self, item_id: ItemId) -> list[TreeItem]:
        """Remove item_id and all of its descendants.

        The set of ids to drop is computed first, then the list is filtered
        and the index entries deleted.

        Returns:
            The removed items in backing order.
        """
        doomed = [item_id] + [item.id for item in self.get_all_children(item_id)]
        keys = {_key(i) for i in doomed}

        removed = [item for item in self._items if _key(item.id) in keys]
        self._items = [item for item in self._items if _key(item.id) not in keys]
        for i in doomed:
            if self._lookup(i) is not None:
                del self._index[i]

        logger.debug("Removed %d items under %r", len(removed), item_id)
        return removed

    def update_item(self, item: TreeItem | dict[str, Any]) -> bool:
        """Replace the stored item having the same id, keeping its position.

        Update never creates: an unknown id leaves the store unchanged.

        Returns:
            True if an item was replaced, False otherwise.
        """
        item = coerce_item(item)
        for position, existing in enumerate(self._items):
            if same_id(existing.id, item.id):
                self._items[position] = item
                self._index[item.id] = item
                return True
        logger.debug("update_item: id %r not found, ignored", item.id)
        return False

    def toggle_expanded(self, item_id: ItemId) -> None:
        """Flip the 'expanded' field of item_id through update_item.

        An absent field counts as False. Unknown ids are ignored.
        """
        item = self._lookup(item_id)
        if item is None:
            return
        updated = item.copy()
        updated.attr['expanded'] = not item.expanded
        self.update_item(updated)

    def clear(self) -> None:
        """Remove all items."""
        self._items = []
        self._index.clear()

    # ==================== Snapshots ====================

    def get_snapshot(self) -> list[TreeItem]:
        """Return a deep copy of the whole item list."""
        return [item.copy() for item in self._items]

    def restore_from_snapshot(self, snapshot: list[TreeItem | dict[str, Any]]) -> None:
        """Replace the store content with a deep copy of snapshot.

        The index is rebuilt from scratch, last writer wins on duplicate ids.
        Afterwards get_all() equals the snapshot item by item.
        """
        self._items = [coerce_item(entry).copy() for entry in snapshot]
        self._rebuild_index()
        logger.debug("Restored snapshot of %d items", len(self._items))
