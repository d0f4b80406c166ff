# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore exceptions."""

from __future__ import annotations


class TreeStoreError(Exception):
    """Base exception for TreeStore errors."""

    pass


class DuplicateIdError(TreeStoreError):
    """Raised in strict mode when an id is already present in the store."""

    pass


class CycleError(TreeStoreError):
    """Raised in strict mode when a parent chain loops back on itself."""

    pass


class ItemNotFoundError(TreeStoreError, KeyError):
    """Raised when an editor action targets an unknown id."""

    pass


class EditModeError(TreeStoreError):
    """Raised when the editor is asked to mutate outside edit mode."""

    pass
