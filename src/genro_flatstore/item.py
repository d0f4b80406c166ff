# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeItem record stored by TreeStore."""

from __future__ import annotations

import copy
from typing import Any, Union

ItemId = Union[str, int]

_RESERVED = ('id', 'parent', 'label', 'children')


def check_id(value: Any, field: str = 'id', nullable: bool = False) -> None:
    """Raise TypeError unless value is a usable item id.

    Ids are str or int. bool is rejected because it would hash and compare
    equal to 0 and 1.
    """
    if value is None and nullable:
        return
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(
            f"{field} must be str or int, not {type(value).__name__}"
        )


def check_fields(fields: dict[str, Any]) -> None:
    """Raise ValueError if fields use a reserved name (id, parent, label, children)."""
    reserved = [k for k in fields if k in _RESERVED]
    if reserved:
        raise ValueError(f"Reserved field names: {', '.join(reserved)}")


def same_id(a: Any, b: Any) -> bool:
    """Strict id equality: 1 and '1' are different ids."""
    return type(a) is type(b) and a == b


class TreeItem:
    """A labeled record in a flat tree.

    Each item has:
    - id: Unique identifier (str or int)
    - parent: Id of the parent item, or None for a root item
    - label: Display text
    - attr: Dictionary of extra fields carried through every store operation
    - children: None on stored items; nested TreeItem list on build_tree() copies

    Example:
        >>> item = TreeItem(2, 1, 'B', color='red')
        >>> item.parent
        1
        >>> item.get_attr('color')
        'red'
    """

    __slots__ = ('id', 'parent', 'label', 'attr', 'children')

    def __init__(
        self,
        id: ItemId,
        parent: ItemId | None = None,
        label: str = '',
        _attr: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a TreeItem.

        Args:
            id: The item's unique id.
            parent: Id of the parent item, None for a root.
            label: Display text.
            _attr: Optional dictionary of extra fields.
            **kwargs: Additional extra fields as keyword arguments.

        Raises:
            TypeError: If id or parent is not a str or int.
            ValueError: If an extra field uses a reserved name.
        """
        check_id(id)
        check_id(parent, field='parent', nullable=True)
        self.id = id
        self.parent = parent
        self.label = label
        fields = dict(_attr) if _attr else {}
        fields.update(kwargs)
        check_fields(fields)
        self.attr: dict[str, Any] = fields
        self.children: list[TreeItem] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeItem:
        """Build an item from its flat dict form.

        Keys other than id, parent, label and children become extra fields.
        A 'children' list is converted recursively.

        Raises:
            KeyError: If 'id' is missing.
        """
        extra = {k: v for k, v in data.items() if k not in _RESERVED}
        item = cls(data['id'], data.get('parent'), data.get('label', ''), extra)
        children = data.get('children')
        if children is not None:
            item.children = [
                c if isinstance(c, TreeItem) else cls.from_dict(c)
                for c in children
            ]
        return item

    def as_dict(self) -> dict[str, Any]:
        """Flatten to {'id', 'parent', 'label', **attr} (plus 'children' if set)."""
        result: dict[str, Any] = {
            'id': self.id,
            'parent': self.parent,
            'label': self.label,
        }
        result.update(copy.deepcopy(self.attr))
        if self.children is not None:
            result['children'] = [c.as_dict() for c in self.children]
        return result

    def copy(self) -> TreeItem:
        """Return a deep, independent copy."""
        clone = TreeItem(self.id, self.parent, self.label, copy.deepcopy(self.attr))
        if self.children is not None:
            clone.children = [c.copy() for c in self.children]
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> TreeItem:
        return self.copy()

    def __copy__(self) -> TreeItem:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeItem):
            return NotImplemented
        return (
            same_id(self.id, other.id)
            and (self.parent is None and other.parent is None
                 or same_id(self.parent, other.parent))
            and self.label == other.label
            and self.attr == other.attr
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TreeItem({self.id!r}, parent={self.parent!r}, label={self.label!r})"

    @property
    def is_root(self) -> bool:
        """True if this item has no parent."""
        return self.parent is None

    @property
    def expanded(self) -> bool:
        """The 'expanded' extra field, False when absent."""
        return bool(self.attr.get('expanded', False))

    def get_attr(self, attr: str | None = None, default: Any = None) -> Any:
        """Get extra field value or all extra fields.

        Args:
            attr: Field name. If None, returns all extra fields.
            default: Default value if field not found.

        Returns:
            Field value, default, or dict of all extra fields.
        """
        if attr is None:
            return self.attr
        return self.attr.get(attr, default)

    def set_attr(self, _attr: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """Set extra fields on the item.

        Args:
            _attr: Dictionary of fields to set.
            **kwargs: Additional fields as keyword arguments.

        Raises:
            ValueError: If a reserved field name (id, parent, label, children)
                is used.
        """
        fields = dict(_attr) if _attr else {}
        fields.update(kwargs)
        check_fields(fields)
        self.attr.update(fields)
