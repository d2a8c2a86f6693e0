"""
Field processor tests

Tests how default, background and image fields write into the style tree.
"""

import pytest

from themecss.config import AppSettings
from themecss.lib.processors import (
    ProcessorContext,
    ProcessorRegistry,
    default_process,
    background_process,
    image_process,
)
from themecss.lib.properties import PropertyValueTransformer
from themecss.lib.styletree import StyleTree
from themecss.models.rule import OutputRule


@pytest.fixture
def context():
    return ProcessorContext(transformer=PropertyValueTransformer(), settings=AppSettings())


class TestDefaultProcessor:
    """Test one-declaration output"""

    def test_scalar_written(self, context):
        """Scalars are written under the property"""
        tree = StyleTree()
        default_process(OutputRule(element='h1', property='color'), '#333', tree, context)
        assert tree.asDict() == {'global': {'h1': {'color': '#333'}}}

    def test_multi_valued_appended(self, context):
        """background values accumulate"""
        tree = StyleTree()
        rule = OutputRule(element='body', property='background')
        default_process(rule, '-webkit-linear-gradient(red, blue)', tree, context)
        default_process(rule, 'linear-gradient(red, blue)', tree, context)
        assert tree.value_get('global', 'body', 'background') == [
            '-webkit-linear-gradient(red, blue)',
            'linear-gradient(red, blue)',
        ]

    def test_mapping_transformed_to_string(self, context):
        """Mappings are written when the transformer reduces them"""
        tree = StyleTree()
        rule = OutputRule(element='body', property='background-position', suffix=' !important')
        default_process(rule, {'x': 'left', 'y': 'top'}, tree, context)
        assert tree.value_get('global', 'body', 'background-position') == 'left top !important'

    def test_mapping_not_written(self, context):
        """Other mappings are skipped"""
        tree = StyleTree()
        default_process(OutputRule(element='body', property='color'), {'color': 'red'}, tree, context)
        assert tree.asDict() == {}


class TestBackgroundProcessor:
    """Test background field output"""

    def test_color_only_adds_shorthand(self, context):
        """A color without an image is also written as background"""
        tree = StyleTree()
        background_process(OutputRule(element='body'), {'background-color': '#fff'}, tree, context)
        assert tree.asDict() == {'global': {'body': {'background': '#fff', 'background-color': '#fff'}}}

    def test_empty_image_adds_shorthand(self, context):
        """An empty image counts as no image"""
        tree = StyleTree()
        value = {'background-color': '#fff', 'background-image': ''}
        background_process(OutputRule(element='body'), value, tree, context)
        assert tree.value_get('global', 'body', 'background') == '#fff'
        assert tree.value_get('global', 'body', 'background-image') is None

    def test_all_sub_properties(self, context):
        """Each present sub-property is written and transformed"""
        tree = StyleTree()
        value = {
            'background-image': 'img/hero.jpg',
            'background-color': '#000',
            'background-repeat': 'no-repeat',
            'background-position': {'x': 'center', 'y': 'top'},
            'background-size': 'cover',
            'background-attachment': '',
        }
        background_process(OutputRule(element='.hero'), value, tree, context)
        assert tree.asDict() == {'global': {'.hero': {
            'background-image': 'url("img/hero.jpg")',
            'background-color': '#000',
            'background-repeat': 'no-repeat',
            'background-position': 'center top',
            'background-size': 'cover',
        }}}

    def test_default_element(self, context):
        """Rules without an element style body"""
        tree = StyleTree()
        background_process(OutputRule(), {'background-size': 'cover'}, tree, context)
        assert tree.asDict() == {'global': {'body': {'background-size': 'cover'}}}

    def test_scalar_ignored(self, context):
        """Background fields need a mapping"""
        tree = StyleTree()
        background_process(OutputRule(element='body'), '#fff', tree, context)
        assert tree.asDict() == {}


class TestImageProcessor:
    """Test image field output"""

    def test_mapping_url(self, context):
        """The url entry is used"""
        tree = StyleTree()
        rule = OutputRule(element='.logo', property='background-image')
        image_process(rule, {'url': 'logo.png', 'width': 200}, tree, context)
        assert tree.value_get('global', '.logo', 'background-image') == 'url("logo.png")'

    def test_mapping_choice(self, context):
        """A choice picks another entry"""
        tree = StyleTree()
        rule = OutputRule(element='.logo', property='background-image', choice='thumbnail')
        image_process(rule, {'url': 'logo.png', 'thumbnail': 'logo-small.png'}, tree, context)
        assert tree.value_get('global', '.logo', 'background-image') == 'url("logo-small.png")'

    def test_mapping_without_url(self, context):
        """Nothing is written without url or choice"""
        tree = StyleTree()
        image_process(OutputRule(element='.logo', property='background-image'), {'id': 4}, tree, context)
        assert tree.asDict() == {}

    def test_scalar_written_directly(self, context):
        """Resolved scalars are written as they are"""
        tree = StyleTree()
        image_process(OutputRule(element='.logo', property='content'), 'url(a.svg)', tree, context)
        assert tree.value_get('global', '.logo', 'content') == 'url(a.svg)'


class TestRegistry:
    """Test processor lookup"""

    def test_builtins(self):
        """default, background and image are registered"""
        assert ProcessorRegistry().processors_list() == ['background', 'default', 'image']

    def test_unknown_type_uses_default(self):
        """Unknown field types fall back to default"""
        registry = ProcessorRegistry()
        assert registry.spec_get('color').name == 'default'
        assert registry.spec_get(None).name == 'default'

    def test_background_needs_no_property(self):
        """Background rules don't need a property"""
        spec = ProcessorRegistry().spec_get('background')
        assert spec.requires_property is False
        assert spec.requires_element is False
