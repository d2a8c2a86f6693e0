"""
Property value transformers

Some CSS properties need their value reshaped before it can be emitted:
font stacks need quoting, image references need url() wrapping, and
structured positions collapse into shorthand. Each transformer is a
function (property, value) -> value registered against a property name.
Properties without a transformer pass through unchanged.
"""

import html
import re
from typing import Any, Callable, Dict, List, Optional

from ..models.values import ValueKind, kind_of, value_toString


Transformer = Callable[[str, Any], Any]

# Family names that must never be quoted
GENERIC_FAMILIES = {
    'serif', 'sans-serif', 'monospace', 'cursive', 'fantasy', 'system-ui',
    'ui-serif', 'ui-sans-serif', 'ui-monospace', 'ui-rounded',
    'emoji', 'math', 'fangsong',
    'inherit', 'initial', 'unset', 'revert',
}

# Values that already are background-image function calls (checked from the start)
IMAGE_FUNCTION = re.compile(r"\s*(url|[a-z-]*gradient|image-set|image|cross-fade|element|var)\(", re.IGNORECASE)
IMAGE_KEYWORDS = {'none', 'inherit', 'initial', 'unset', 'revert'}


def fontFamily_transform(property_name: str, value: Any) -> Any:
    """
    Build a font-family stack.

    Accepts a single family, a comma-separated stack or a list of families.
    Families containing spaces are double-quoted unless already quoted;
    generic families are left bare.

    Example:
        >>> fontFamily_transform('font-family', ['Open Sans', 'sans-serif'])
        '"Open Sans", sans-serif'
    """
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        return value
    if kind is ValueKind.LIST:
        families = [html.unescape(value_toString(family)) for family in value]
    else:
        families = html.unescape(value_toString(value)).split(',')

    stack: List[str] = []
    for family in families:
        family = family.strip()
        if not family:
            continue
        if (
            family[0] in '"\''
            or '(' in family
            or family.lower() in GENERIC_FAMILIES
            or ' ' not in family
        ):
            stack.append(family)
        else:
            stack.append(f'"{family}"')
    return ', '.join(stack)


def gradient_build(descriptor: Dict[str, Any]) -> str:
    """
    Build a gradient function call from a descriptor.

    Descriptor keys:
        type: linear (default), radial or conic
        angle / direction / shape: first argument (numbers become degrees)
        colors / stops: color stops, strings or {color, position} mappings
        repeating: use the repeating- variant

    Example:
        >>> gradient_build({'angle': 90, 'colors': ['#fff', '#000']})
        'linear-gradient(90deg, #fff, #000)'
    """
    gradient_type = value_toString(descriptor.get('type') or 'linear')
    if descriptor.get('repeating'):
        gradient_type = f"repeating-{gradient_type}"

    arguments: List[str] = []
    first = descriptor.get('angle', descriptor.get('direction', descriptor.get('shape')))
    if isinstance(first, (int, float)) and not isinstance(first, bool):
        arguments.append(f"{value_toString(first)}deg")
    elif first:
        arguments.append(value_toString(first))

    for stop in descriptor.get('colors') or descriptor.get('stops') or []:
        if kind_of(stop) is ValueKind.MAPPING:
            parts = [value_toString(stop.get('color')), value_toString(stop.get('position'))]
            arguments.append(' '.join(part for part in parts if part))
        else:
            arguments.append(value_toString(stop))

    return f"{gradient_type}-gradient({', '.join(arguments)})"


def backgroundImage_transform(property_name: str, value: Any) -> Any:
    """
    Turn an image reference into a background-image value.

    A mapping with a "url" key uses that URL, a gradient descriptor builds
    the gradient, a plain URL is wrapped in url(""). Values that already
    are image functions or keywords pass through.

    Example:
        >>> backgroundImage_transform('background-image', 'img/bg.png')
        'url("img/bg.png")'
    """
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        if 'url' in value:
            return backgroundImage_transform(property_name, value['url'])
        if 'type' in value or 'colors' in value or 'stops' in value:
            return gradient_build(value)
        return value
    if kind is ValueKind.LIST:
        layers = [backgroundImage_transform(property_name, layer) for layer in value]
        return ', '.join(layer for layer in layers if isinstance(layer, str) and layer)

    image = value_toString(value).strip()
    if not image:
        return image
    if (IMAGE_FUNCTION.match(image) and image.endswith(")")) or image.lower() in IMAGE_KEYWORDS:
        return image
    return f'url("{image}")'


def backgroundPosition_transform(property_name: str, value: Any) -> Any:
    """
    Collapse a structured position into "<x> <y>" shorthand.

    Scalars (keywords, lengths, calc()) are returned unchanged.

    Example:
        >>> backgroundPosition_transform('background-position', {'x': 'left', 'y': '20%'})
        'left 20%'
    """
    kind = kind_of(value)
    if kind is ValueKind.MAPPING:
        x = value.get('x', value.get('horizontal'))
        y = value.get('y', value.get('vertical'))
        if x is None and y is None:
            return value
        x = value_toString(x) or 'center'
        y = value_toString(y) or 'center'
        return f"{x} {y}"
    if kind is ValueKind.LIST:
        return ' '.join(value_toString(axis) for axis in value if value_toString(axis))
    return value


class TransformerRegistry:
    """
    Registry of property value transformers

    Maps CSS property names to transformer functions. Built-in transformers
    are registered on construction; callers add or replace entries with
    register().
    """

    def __init__(self, builtins: bool = True) -> None:
        """
        Initialize the registry.

        Args:
            builtins: Register the font-family, background-image and
                      background-position transformers
        """
        self.transformers: Dict[str, Transformer] = {}
        if builtins:
            self.builtinTransformers_register()

    def register(self, property_name: str, transformer: Transformer) -> None:
        """Register (or replace) the transformer for a property"""
        self.transformers[property_name] = transformer

    def unregister(self, property_name: str) -> None:
        """Remove a property's transformer, if any"""
        self.transformers.pop(property_name, None)

    def get(self, property_name: str) -> Optional[Transformer]:
        """Get the transformer for a property, or None"""
        return self.transformers.get(property_name)

    def properties_list(self) -> List[str]:
        """List properties with a registered transformer"""
        return sorted(self.transformers)

    def __contains__(self, property_name: object) -> bool:
        return property_name in self.transformers

    def builtinTransformers_register(self) -> None:
        """Register the built-in transformers"""
        self.register('font-family', fontFamily_transform)
        self.register('background-image', backgroundImage_transform)
        self.register('background-position', backgroundPosition_transform)


class PropertyValueTransformer:
    """
    Applies registered transformers to property values
    """

    def __init__(self, registry: Optional[TransformerRegistry] = None) -> None:
        self.registry = registry if registry is not None else TransformerRegistry()

    def transform(self, property_name: Optional[str], value: Any) -> Any:
        """
        Transform a value for a CSS property.

        Args:
            property_name: CSS property, None for no transformation
            value: Raw or resolved value

        Returns:
            Transformed value, or the value itself when the property has
            no transformer
        """
        if not property_name:
            return value
        transformer = self.registry.get(property_name)
        if transformer is None:
            return value
        return transformer(property_name, value)

    def __call__(self, property_name: Optional[str], value: Any) -> Any:
        return self.transform(property_name, value)
