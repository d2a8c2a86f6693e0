"""
Field processor specification model

Describes how a field type writes a resolved value into the style tree.
Used by ProcessorRegistry to dispatch rules by field type.
"""

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass
class ProcessorSpec:
    """
    Specification for a field processor

    Attributes:
        name: Field type name (e.g., "default", "background", "image")
        handler: Write function (rule, value, tree, processor_context) -> None
        description: Human-readable description
        requires_element: Rules without an element are skipped
        requires_property: Rules without a property are skipped
        aliases: Alternative field type names handled by the same processor
    """
    name: str
    handler: Callable
    description: str = ""
    requires_element: bool = True
    requires_property: bool = True
    aliases: List[str] = field(default_factory=list)

    def matches(self, field_type: str) -> bool:
        """Check if this spec handles a field type"""
        return field_type == self.name or field_type in self.aliases
