# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreeItem."""

import pytest

from genro_flatstore import TreeItem
from genro_flatstore.item import same_id


class TestTreeItem:
    """Tests for TreeItem construction and fields."""

    def test_create_simple_item(self):
        """Test creating an item with id, parent and label."""
        item = TreeItem(2, 1, 'B')
        assert item.id == 2
        assert item.parent == 1
        assert item.label == 'B'
        assert item.attr == {}
        assert item.children is None

    def test_create_root_defaults(self):
        """Test default parent and label."""
        item = TreeItem('root')
        assert item.parent is None
        assert item.label == ''
        assert item.is_root is True

    def test_extra_fields(self):
        """Test extra fields from dict and kwargs."""
        item = TreeItem(1, None, 'A', {'color': 'red'}, size=10)
        assert item.attr == {'color': 'red', 'size': 10}

    def test_invalid_id_type_raises(self):
        """Test that ids other than str or int are rejected."""
        with pytest.raises(TypeError, match="id must be str or int"):
            TreeItem(1.5)
        with pytest.raises(TypeError, match="id must be str or int"):
            TreeItem(True)
        with pytest.raises(TypeError, match="parent must be str or int"):
            TreeItem(1, [1])

    def test_expanded_defaults_to_false(self):
        """Test expanded property."""
        assert TreeItem(1).expanded is False
        assert TreeItem(1, expanded=True).expanded is True

    def test_get_attr(self):
        """Test get_attr method."""
        item = TreeItem(1, None, 'A', color='red')
        assert item.get_attr('color') == 'red'
        assert item.get_attr('missing') is None
        assert item.get_attr('missing', 'default') == 'default'
        assert item.get_attr() == {'color': 'red'}

    def test_set_attr(self):
        """Test set_attr method."""
        item = TreeItem(1)
        item.set_attr({'color': 'red'}, size=10)
        assert item.attr == {'color': 'red', 'size': 10}

    def test_set_attr_reserved_raises(self):
        """Test set_attr refuses the fixed field names."""
        item = TreeItem(1)
        with pytest.raises(ValueError, match="Reserved"):
            item.set_attr(parent=2)

    def test_init_reserved_fields_raise(self):
        """Test extra fields cannot shadow id, parent, label or children."""
        with pytest.raises(ValueError, match="Reserved field names: id"):
            TreeItem(1, None, 'A', {'id': 'zzz'})
        with pytest.raises(ValueError, match="Reserved field names: parent"):
            TreeItem(1, None, 'A', {'parent': 99})
        with pytest.raises(ValueError, match="Reserved field names: children"):
            TreeItem(1, None, 'A', children=[])

    def test_repr(self):
        """Test string representation."""
        repr_str = repr(TreeItem(4, 2, 'D'))
        assert '4' in repr_str
        assert 'D' in repr_str


class TestTreeItemEquality:
    """Tests for strict id comparison."""

    def test_same_id(self):
        """Test numeric and string ids are different."""
        assert same_id(1, 1)
        assert same_id('1', '1')
        assert not same_id(1, '1')

    def test_equal_items(self):
        """Test items with same fields compare equal."""
        assert TreeItem(1, None, 'A', x=1) == TreeItem(1, None, 'A', x=1)

    def test_mixed_type_ids_not_equal(self):
        """Test 1 and '1' items differ."""
        assert TreeItem(1, None, 'A') != TreeItem('1', None, 'A')
        assert TreeItem(2, 1, 'B') != TreeItem(2, '1', 'B')

    def test_unhashable(self):
        """Test items are mutable records, not hashable."""
        with pytest.raises(TypeError):
            hash(TreeItem(1))


class TestTreeItemConversion:
    """Tests for dict conversion and copying."""

    def test_from_dict(self):
        """Test unknown keys become extra fields."""
        item = TreeItem.from_dict({'id': 3, 'parent': 1, 'label': 'C', 'color': 'red'})
        assert item.id == 3
        assert item.parent == 1
        assert item.label == 'C'
        assert item.attr == {'color': 'red'}

    def test_from_dict_missing_id_raises(self):
        """Test that id is required."""
        with pytest.raises(KeyError):
            TreeItem.from_dict({'label': 'x'})

    def test_from_dict_with_children(self):
        """Test nested children are converted."""
        item = TreeItem.from_dict({
            'id': 1, 'parent': None, 'label': 'A',
            'children': [{'id': 2, 'parent': 1, 'label': 'B'}],
        })
        assert item.children == [TreeItem(2, 1, 'B')]

    def test_as_dict(self):
        """Test flattening to dict."""
        item = TreeItem(2, 1, 'B', color='red')
        assert item.as_dict() == {'id': 2, 'parent': 1, 'label': 'B', 'color': 'red'}

    def test_as_dict_with_children(self):
        """Test children appear only when populated."""
        item = TreeItem(1, None, 'A')
        item.children = [TreeItem(2, 1, 'B')]
        assert item.as_dict()['children'] == [{'id': 2, 'parent': 1, 'label': 'B'}]

    def test_dict_round_trip(self):
        """Test from_dict(as_dict()) keeps the item."""
        item = TreeItem('x', 'y', 'label', tags=['a', 'b'])
        assert TreeItem.from_dict(item.as_dict()) == item

    def test_copy_is_deep(self):
        """Test copy shares no nested objects."""
        item = TreeItem(1, None, 'A', tags=['a'])
        clone = item.copy()
        assert clone == item
        assert clone is not item
        clone.attr['tags'].append('b')
        assert item.attr['tags'] == ['a']
