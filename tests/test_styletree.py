"""
Style tree tests

Tests key creation, overwrite vs accumulation and merging.
"""

import pytest

from themecss.config import AppSettings
from themecss.lib.styletree import StyleTree


class TestEmptyTree:
    """Test a tree nothing was written to"""

    def test_empty(self):
        """New trees have no keys"""
        tree = StyleTree()
        assert len(tree) == 0
        assert not tree
        assert tree.asDict() == {}

    def test_value_get_creates_nothing(self):
        """Reading a missing key doesn't create it"""
        tree = StyleTree()
        assert tree.value_get('global', 'body', 'color') is None
        assert tree.asDict() == {}


class TestWrites:
    """Test scalar and multi-valued writes"""

    def test_set_overwrites(self):
        """Later scalar writes win"""
        tree = StyleTree()
        tree.value_set('global', 'body', 'color', 'red')
        tree.value_set('global', 'body', 'color', 'blue')
        assert tree.asDict() == {'global': {'body': {'color': 'blue'}}}

    def test_write_multi_valued_accumulates(self):
        """Multi-valued properties collect values in order"""
        tree = StyleTree()
        tree.value_write('global', 'body', 'background-image', 'url(a.png)')
        tree.value_write('global', 'body', 'background-image', 'url(b.png)')
        assert tree.value_get('global', 'body', 'background-image') == ['url(a.png)', 'url(b.png)']

    def test_write_scalar_property_overwrites(self):
        """Other properties are overwritten by value_write"""
        tree = StyleTree()
        tree.value_write('global', 'body', 'color', 'red')
        tree.value_write('global', 'body', 'color', 'blue')
        assert tree.value_get('global', 'body', 'color') == 'blue'

    def test_append_promotes_scalar(self):
        """A stored scalar becomes the first list entry"""
        tree = StyleTree()
        tree.value_set('global', 'body', 'background', '#fff')
        tree.value_append('global', 'body', 'background', 'linear-gradient(red, blue)')
        assert tree.value_get('global', 'body', 'background') == ['#fff', 'linear-gradient(red, blue)']

    def test_custom_multi_valued_properties(self):
        """The multi-valued set comes from settings"""
        tree = StyleTree(AppSettings(multi_valued_properties=['mask-image']))
        tree.value_write('global', 'body', 'mask-image', 'a')
        tree.value_write('global', 'body', 'background-image', 'b')
        tree.value_write('global', 'body', 'background-image', 'c')
        assert tree.asDict() == {'global': {'body': {'mask-image': ['a'], 'background-image': 'c'}}}

    def test_insertion_order(self):
        """Buckets and selectors keep insertion order"""
        tree = StyleTree()
        tree.value_set('(max-width: 600px)', 'h1', 'font-size', '2em')
        tree.value_set('global', 'h1', 'font-size', '3em')
        tree.value_set('global', 'a', 'color', 'red')
        assert tree.mediaQueries_list() == ['(max-width: 600px)', 'global']
        assert [element for _, element, _ in tree.blocks_iterate()] == ['h1', 'h1', 'a']

    def test_asdict_is_a_copy(self):
        """Changing the exported dict doesn't change the tree"""
        tree = StyleTree()
        tree.value_append('global', 'body', 'background', 'red')
        exported = tree.asDict()
        exported['global']['body']['background'].append('blue')
        assert tree.value_get('global', 'body', 'background') == ['red']


class TestMerge:
    """Test merging trees"""

    def test_merge(self):
        """Scalars are overwritten, multi-valued properties extended"""
        first = StyleTree()
        first.value_set('global', 'body', 'color', 'red')
        first.value_append('global', 'body', 'background-image', 'url(a.png)')

        second = StyleTree()
        second.value_set('global', 'body', 'color', 'blue')
        second.value_append('global', 'body', 'background-image', 'url(b.png)')
        second.value_set('print', 'body', 'color', 'black')

        first.tree_merge(second)
        assert first.asDict() == {
            'global': {'body': {'color': 'blue', 'background-image': ['url(a.png)', 'url(b.png)']}},
            'print': {'body': {'color': 'black'}},
        }

    def test_merge_string_into_empty_tree(self):
        """A multi-valued string is copied as it is when the key is new"""
        source = StyleTree()
        source.value_set('global', '.hero', 'background', '#eee')

        target = StyleTree()
        target.tree_merge(source)
        assert target.value_get('global', '.hero', 'background') == '#eee'

    def test_merge_string_into_existing_value(self):
        """A multi-valued string extends a value already present"""
        source = StyleTree()
        source.value_set('global', '.hero', 'background', '#eee')

        target = StyleTree()
        target.value_set('global', '.hero', 'background', '#fff')
        target.tree_merge(source)
        assert target.value_get('global', '.hero', 'background') == ['#fff', '#eee']

    def test_equality(self):
        """Trees compare by content"""
        first = StyleTree()
        second = StyleTree()
        first.value_set('global', 'a', 'color', 'red')
        second.value_set('global', 'a', 'color', 'red')
        assert first == second
        assert first == {'global': {'a': {'color': 'red'}}}
