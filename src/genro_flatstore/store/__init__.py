# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeStore package - Flat, id-indexed tree container.

The package is organized into:
- core: Main TreeStore class with queries, mutations and snapshots
- loading: Functions for loading items from a list or another TreeStore

Example:
    >>> from genro_flatstore import TreeStore
    >>> store = TreeStore([{'id': 1, 'parent': None, 'label': 'root'}])
    >>> store.get_item(1).label
    'root'
"""

from .core import TreeStore

__all__ = ["TreeStore"]
