# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Undo/redo history built on whole-store snapshots.

Every checkpoint is a full deep copy of the store (get_snapshot), so undo
and redo are plain restores. Cost is O(n) per checkpoint.

Example:
    >>> history = UndoHistory(store)
    >>> history.checkpoint()
    >>> store.add_item({'id': 9, 'parent': 1, 'label': 'new'})
    >>> history.undo()
    True
    >>> 9 in store
    False
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from .item import TreeItem
    from .store import TreeStore

logger = logging.getLogger(__name__)


class UndoHistory:
    """Two stacks of snapshots (undo and redo) for one TreeStore."""

    __slots__ = ('store', 'limit', '_undo', '_redo')

    def __init__(self, store: TreeStore, limit: int | None = None) -> None:
        """Initialize an UndoHistory.

        Args:
            store: The TreeStore whose state is recorded.
            limit: Maximum number of undo steps kept. Oldest snapshots are
                dropped first. None means unbounded.

        Raises:
            ValueError: If limit is lower than 1.
        """
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.store = store
        self.limit = limit
        self._undo: list[list[TreeItem]] = []
        self._redo: list[list[TreeItem]] = []

    def __repr__(self) -> str:
        return f"UndoHistory(undo={len(self._undo)}, redo={len(self._redo)})"

    def __len__(self) -> int:
        """Return the number of undo steps available."""
        return len(self._undo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def checkpoint(self) -> None:
        """Record the current store state. Call before mutating.

        Any pending redo steps are discarded.
        """
        self._undo.append(self.store.get_snapshot())
        if self.limit is not None and len(self._undo) > self.limit:
            del self._undo[0]
        self._redo.clear()

    def undo(self) -> bool:
        """Restore the most recent checkpoint.

        Returns:
            True if a step was undone, False if there was nothing to undo.
        """
        if not self._undo:
            return False
        self._redo.append(self.store.get_snapshot())
        self.store.restore_from_snapshot(self._undo.pop())
        logger.debug("Undo: %d steps left", len(self._undo))
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone step.

        Returns:
            True if a step was redone, False if there was nothing to redo.
        """
        if not self._redo:
            return False
        self._undo.append(self.store.get_snapshot())
        self.store.restore_from_snapshot(self._redo.pop())
        logger.debug("Redo: %d steps left", len(self._redo))
        return True

    def clear(self) -> None:
        """Forget every recorded step."""
        self._undo.clear()
        self._redo.clear()

    @contextmanager
    def record(self) -> Iterator[UndoHistory]:
        """Checkpoint, run the block, and roll back if it raises.

        On error the store is restored to the checkpoint and both stacks
        are put back as they were before the block.

        Example:
            >>> with history.record():
            ...     store.remove_item(2)
        """
        undo, redo = list(self._undo), list(self._redo)
        self.checkpoint()
        saved = self._undo[-1]
        try:
            yield self
        except Exception:
            self.store.restore_from_snapshot(saved)
            logger.debug("Block failed: store rolled back")
            self._undo[:] = undo
            self._redo[:] = redo
            raise
