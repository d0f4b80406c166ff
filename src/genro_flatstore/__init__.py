# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-FlatStore - Flat, id-indexed trees with undo/redo editing.

A lightweight, zero-dependency library holding a tree as an ordered list of
labeled items plus an id index, with a headless editing session on top.
"""

__version__ = "0.1.0"

from .editor import TreeEditor, next_int_id
from .exceptions import (
    CycleError,
    DuplicateIdError,
    EditModeError,
    ItemNotFoundError,
    TreeStoreError,
)
from .history import UndoHistory
from .item import TreeItem
from .store import TreeStore

__all__ = [
    # Core classes
    "TreeStore",
    "TreeItem",
    # Editing
    "UndoHistory",
    "TreeEditor",
    "next_int_id",
    # Exceptions
    "TreeStoreError",
    "DuplicateIdError",
    "CycleError",
    "ItemNotFoundError",
    "EditModeError",
]
