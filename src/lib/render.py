"""
CSS rendering for style trees

Serializes a StyleTree to stylesheet text. Each (media query, selector)
pair becomes one block; buckets other than the default media query are
wrapped in @media.
"""

from typing import List, Optional

from ..config import appsettings, AppSettings
from .styletree import StyleTree, Declarations


def declarations_toCSS(declarations: Declarations, minify: bool = False) -> List[str]:
    """
    Render declarations, one per value of multi-valued properties.

    Example:
        >>> declarations_toCSS({'color': '#333'})
        ['color: #333;']
    """
    separator = ':' if minify else ': '
    lines: List[str] = []
    for property_name, value in declarations.items():
        for entry in (value if isinstance(value, list) else [value]):
            lines.append(f"{property_name}{separator}{entry};")
    return lines


def block_toCSS(element: str, declarations: Declarations, minify: bool = False, indent: str = "") -> str:
    """Render one selector block"""
    lines = declarations_toCSS(declarations, minify)
    if minify:
        return f"{element}{{{''.join(lines)}}}"
    body = ''.join(f"{indent}    {line}\n" for line in lines)
    return f"{indent}{element} {{\n{body}{indent}}}\n"


def mediaQuery_wrap(media_query: str) -> str:
    """@media prelude for a bucket name; full @media rules are kept verbatim"""
    media_query = media_query.strip()
    if media_query.startswith('@media'):
        return media_query
    if media_query.startswith('('):
        return f"@media {media_query}"
    return f"@media ({media_query})"


def styleTree_toCSS(tree: StyleTree, minify: Optional[bool] = None,
                    settings: Optional[AppSettings] = None) -> str:
    """
    Serialize a style tree to CSS text.

    Args:
        tree: Style tree to render
        minify: Compact output (default: settings.minify_output)
        settings: Settings naming the default media query (default: appsettings)

    Returns:
        Stylesheet text, "" for an empty tree
    """
    settings = settings or appsettings
    if minify is None:
        minify = settings.minify_output

    parts: List[str] = []
    for media_query, elements in tree.styles.items():
        if settings.mediaQuery_isDefault(media_query):
            for element, declarations in elements.items():
                parts.append(block_toCSS(element, declarations, minify))
            continue

        indent = "" if minify else "    "
        blocks = ''.join(
            block_toCSS(element, declarations, minify, indent)
            for element, declarations in elements.items()
        )
        if minify:
            parts.append(f"{mediaQuery_wrap(media_query)}{{{blocks}}}")
        else:
            parts.append(f"{mediaQuery_wrap(media_query)} {{\n{blocks}}}\n")

    return ''.join(parts) if minify else '\n'.join(parts)
