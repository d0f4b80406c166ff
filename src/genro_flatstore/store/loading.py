# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions that fill a TreeStore from a source."""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

from ..item import TreeItem

if TYPE_CHECKING:
    from .core import TreeStore

logger = logging.getLogger(__name__)


def coerce_item(entry: Any) -> TreeItem:
    """Return entry as a TreeItem, converting a dict if needed.

    TreeItem instances are returned as they are, not copied.

    Raises:
        TypeError: If entry is neither a TreeItem nor a dict.
    """
    if isinstance(entry, TreeItem):
        return entry
    if isinstance(entry, dict):
        return TreeItem.from_dict(entry)
    raise TypeError(
        f"item must be TreeItem or dict, not {type(entry).__name__}"
    )


def load_from_list(store: TreeStore, source: list) -> None:
    """Append every entry of source to store, in order.

    Args:
        store: Target TreeStore.
        source: List of TreeItem or dicts with at least an 'id' key.

    Example:
        >>> load_from_list(store, [
        ...     {'id': 1, 'parent': None, 'label': 'A'},
        ...     TreeItem(2, 1, 'B'),
        ... ])
    """
    for entry in source:
        store._insert_item(coerce_item(entry))
    logger.debug("Loaded %d items from list", len(source))


def load_from_treestore(store: TreeStore, source: TreeStore) -> None:
    """Append deep copies of every item held by source."""
    for item in source:
        store._insert_item(item.copy())
    logger.debug("Copied %d items from %r", len(source), source)
