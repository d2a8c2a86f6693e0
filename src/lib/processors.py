"""
Field processors for themecss

Each field type writes resolved values into the style tree its own way.
The default processor writes one declaration per rule; composite field
types (backgrounds, images) pick entries out of a mapping value.
Uses ProcessorSpec for metadata and dispatch.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import AppSettings
from ..models.processors import ProcessorSpec
from ..models.rule import OutputRule
from ..models.values import ValueKind, kind_of, value_isEmpty, value_toString
from .properties import PropertyValueTransformer
from .styletree import StyleTree
from .log import LOG


# Sub-properties written by background fields, in output order
BACKGROUND_PROPERTIES: List[str] = [
    'background-image',
    'background-color',
    'background-repeat',
    'background-position',
    'background-size',
    'background-attachment',
]


@dataclass
class ProcessorContext:
    """
    Collaborators a processor writes with

    Attributes:
        transformer: Property value transformer
        settings: Active settings
    """
    transformer: PropertyValueTransformer
    settings: AppSettings


def default_process(rule: OutputRule, value: Any, tree: StyleTree, context: ProcessorContext) -> None:
    """
    Write one declaration for the rule's property.

    Multi-valued properties accumulate; other properties are overwritten.
    Mapping values are written only if the property's transformer reduces
    them to a string (e.g. {x, y} background positions).
    """
    if kind_of(value) is ValueKind.MAPPING:
        transformed = context.transformer.transform(rule.property, value)
        if kind_of(transformed) is not ValueKind.SCALAR:
            LOG(f"Skipping mapping value for {rule.element} {rule.property}", level=3)
            return
        value = f"{rule.prefix}{value_toString(transformed)}{rule.units}{rule.suffix}"
    elif kind_of(value) is ValueKind.LIST:
        LOG(f"Skipping list value for {rule.element} {rule.property}", level=3)
        return

    tree.value_write(rule.media_query, rule.element, rule.property, value_toString(value))


def background_process(rule: OutputRule, value: Any, tree: StyleTree, context: ProcessorContext) -> None:
    """
    Write each background sub-property present in the value.

    A background color without an image is also written as the
    "background" shorthand for browsers that only honor the shorthand.
    """
    if kind_of(value) is not ValueKind.MAPPING:
        LOG(f"Background value for {rule.element} is not a mapping", level=3)
        return

    element = rule.element or context.settings.background_default_element
    transform = context.transformer.transform

    for property_name in BACKGROUND_PROPERTIES:
        entry = value.get(property_name)
        if (
            property_name == 'background-color'
            and not value_isEmpty(entry)
            and value_isEmpty(value.get('background-image'))
        ):
            tree.value_set(rule.media_query, element, 'background',
                           value_toString(transform(property_name, entry)))

        if not value_isEmpty(entry):
            transformed = transform(property_name, entry)
            if kind_of(transformed) is ValueKind.SCALAR and not value_isEmpty(transformed):
                tree.value_set(rule.media_query, element, property_name, value_toString(transformed))


def image_process(rule: OutputRule, value: Any, tree: StyleTree, context: ProcessorContext) -> None:
    """
    Write an image field's URL under the rule's property.

    For mapping values the choice entry is used when a choice is set,
    otherwise the "url" entry; without either nothing is written.
    """
    transform = context.transformer.transform

    if kind_of(value) is ValueKind.MAPPING:
        if rule.choice is not None:
            if rule.choice not in value:
                return
            image = transform(rule.property, value[rule.choice])
        elif 'url' in value:
            image = transform(rule.property, value['url'])
        else:
            return
        if kind_of(image) is ValueKind.SCALAR:
            tree.value_set(rule.media_query, rule.element, rule.property, value_toString(image))
        return

    if kind_of(value) is ValueKind.SCALAR:
        tree.value_set(rule.media_query, rule.element, rule.property, value_toString(value))


class ProcessorRegistry:
    """
    Registry of field processors

    Maps field types to ProcessorSpec objects. Unknown field types fall
    back to the default processor.
    """

    def __init__(self) -> None:
        """Initialize the registry and register the built-in processors"""
        self.specs: Dict[str, ProcessorSpec] = {}
        self.builtinProcessors_register()

    def register(self, spec: ProcessorSpec) -> None:
        """Register a processor specification"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def spec_get(self, field_type: Optional[str]) -> ProcessorSpec:
        """Get the processor for a field type, falling back to default"""
        if field_type and field_type in self.specs:
            return self.specs[field_type]
        return self.specs['default']

    def processors_list(self) -> List[str]:
        """List registered processor names (without aliases)"""
        return sorted({spec.name for spec in self.specs.values()})

    def builtinProcessors_register(self) -> None:
        """Register the default, background and image processors"""
        self.register(ProcessorSpec(
            name='default',
            handler=default_process,
            description="One declaration per rule under the rule's property",
        ))
        self.register(ProcessorSpec(
            name='background',
            handler=background_process,
            description="Background sub-properties from a mapping value",
            requires_element=False,
            requires_property=False,
        ))
        self.register(ProcessorSpec(
            name='image',
            handler=image_process,
            description="Image URL from a scalar or an image mapping",
        ))
