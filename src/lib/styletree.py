"""
Style tree accumulator

Nested mapping of media query -> selector -> property -> value, built up
rule by rule. Multi-valued properties collect every value written to them
in order; all other properties keep the last value written.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..config import appsettings, AppSettings


StyleValue = Union[str, List[str]]
Declarations = Dict[str, StyleValue]


class StyleTree:
    """
    Nested style accumulator for one build

    Keys are created on demand, so a tree nothing was written to is empty.
    Dicts keep insertion order, which is the order blocks are rendered in.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings
        self.styles: Dict[str, Dict[str, Declarations]] = {}

    def declarations_get(self, media_query: str, element: str) -> Declarations:
        """Get (creating if needed) the declarations of a selector in a bucket"""
        return self.styles.setdefault(media_query, {}).setdefault(element, {})

    def value_set(self, media_query: str, element: str, property_name: str, value: str) -> None:
        """Write a value, replacing any previous one"""
        self.declarations_get(media_query, element)[property_name] = value

    def value_append(self, media_query: str, element: str, property_name: str, value: str) -> None:
        """
        Append a value to a multi-valued property.

        A scalar already stored under the key is promoted to a one-element
        list before the new value is appended.
        """
        declarations = self.declarations_get(media_query, element)
        existing = declarations.get(property_name)
        if existing is None:
            declarations[property_name] = [value]
        elif isinstance(existing, list):
            existing.append(value)
        else:
            declarations[property_name] = [existing, value]

    def value_write(self, media_query: str, element: str, property_name: str, value: str) -> None:
        """Append for multi-valued properties, set for everything else"""
        if self.settings.property_isMultiValued(property_name):
            self.value_append(media_query, element, property_name, value)
        else:
            self.value_set(media_query, element, property_name, value)

    def value_get(self, media_query: str, element: str, property_name: str) -> Optional[StyleValue]:
        """Get a stored value without creating any keys"""
        return self.styles.get(media_query, {}).get(element, {}).get(property_name)

    def mediaQueries_list(self) -> List[str]:
        """List media query buckets in insertion order"""
        return list(self.styles)

    def blocks_iterate(self) -> Iterator[Tuple[str, str, Declarations]]:
        """Iterate (media_query, element, declarations) in insertion order"""
        for media_query, elements in self.styles.items():
            for element, declarations in elements.items():
                yield media_query, element, declarations

    def tree_merge(self, other: "StyleTree") -> "StyleTree":
        """
        Merge another tree into this one.

        Multi-valued properties already present extend, anything else is
        copied over as it is, replacing any previous value.

        Returns:
            self, for chaining
        """
        for media_query, element, declarations in other.blocks_iterate():
            for property_name, value in declarations.items():
                existing = self.value_get(media_query, element, property_name)
                if self.settings.property_isMultiValued(property_name) and existing is not None:
                    for entry in (value if isinstance(value, list) else [value]):
                        self.value_append(media_query, element, property_name, entry)
                else:
                    self.value_set(media_query, element, property_name,
                                   list(value) if isinstance(value, list) else value)
        return self

    def asDict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Plain nested dict copy of the tree"""
        return {
            media_query: {
                element: {
                    property_name: list(value) if isinstance(value, list) else value
                    for property_name, value in declarations.items()
                }
                for element, declarations in elements.items()
            }
            for media_query, elements in self.styles.items()
        }

    def __len__(self) -> int:
        return len(self.styles)

    def __bool__(self) -> bool:
        return bool(self.styles)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StyleTree):
            return self.asDict() == other.asDict()
        if isinstance(other, dict):
            return self.asDict() == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"StyleTree({self.asDict()!r})"
