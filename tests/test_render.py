"""
CSS rendering tests

Tests serialization of style trees to stylesheet text.
"""

import pytest

from themecss.config import AppSettings
from themecss.lib.engine import OutputEngine
from themecss.lib.render import styleTree_toCSS, mediaQuery_wrap
from themecss.lib.styletree import StyleTree


class TestRender:
    """Test stylesheet text"""

    def test_empty_tree(self):
        """Nothing renders to nothing"""
        assert styleTree_toCSS(StyleTree()) == ""

    def test_global_block(self):
        """Default bucket blocks have no @media wrapper"""
        tree = StyleTree()
        tree.value_set('global', 'body', 'color', '#333')
        tree.value_set('global', 'body', 'margin', '0')
        assert styleTree_toCSS(tree, minify=False) == "body {\n    color: #333;\n    margin: 0;\n}\n"

    def test_media_query_block(self):
        """Other buckets are wrapped in @media"""
        tree = StyleTree()
        tree.value_set('global', 'body', 'color', '#333')
        tree.value_set('max-width: 600px', 'body', 'color', 'red')
        assert styleTree_toCSS(tree, minify=False) == (
            "body {\n    color: #333;\n}\n"
            "\n"
            "@media (max-width: 600px) {\n    body {\n        color: red;\n    }\n}\n"
        )

    def test_multi_valued_declarations(self):
        """Each accumulated value becomes its own declaration"""
        tree = StyleTree()
        tree.value_append('global', '.btn', 'background', '-webkit-linear-gradient(red, blue)')
        tree.value_append('global', '.btn', 'background', 'linear-gradient(red, blue)')
        assert styleTree_toCSS(tree, minify=True) == (
            ".btn{background:-webkit-linear-gradient(red, blue);background:linear-gradient(red, blue);}"
        )

    def test_minified_media(self):
        """Minified output has no whitespace between blocks"""
        tree = StyleTree()
        tree.value_set('(min-width: 768px)', 'a,b', 'color', 'red')
        assert styleTree_toCSS(tree, minify=True) == "@media (min-width: 768px){a,b{color:red;}}"

    def test_minify_from_settings(self):
        """minify defaults to the settings value"""
        tree = StyleTree()
        tree.value_set('global', 'a', 'color', 'red')
        assert styleTree_toCSS(tree, settings=AppSettings(minify_output=True)) == "a{color:red;}"

    def test_engine_output(self):
        """Built trees render directly"""
        tree = OutputEngine().styleTree_build(
            [{'element': ['h2', 'h1'], 'property': 'font-family'}], 'Open Sans'
        )
        assert styleTree_toCSS(tree, minify=True) == 'h1,h2{font-family:"Open Sans";}'


class TestMediaQueryWrap:
    """Test @media preludes"""

    def test_bare_condition(self):
        """Bare conditions get parentheses"""
        assert mediaQuery_wrap('max-width: 600px') == '@media (max-width: 600px)'

    def test_parenthesized_condition(self):
        """Parenthesized conditions are not wrapped twice"""
        assert mediaQuery_wrap('(max-width: 600px)') == '@media (max-width: 600px)'

    def test_full_rule_verbatim(self):
        """Complete @media preludes are kept"""
        assert mediaQuery_wrap('@media screen and (min-width: 1px)') == '@media screen and (min-width: 1px)'
