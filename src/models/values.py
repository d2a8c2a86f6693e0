"""
Value shape models

A field value is one of three shapes: a scalar (string or number), an
ordered list of scalars, or a mapping of sub-keys to values. ValueKind tags
the shape once so the resolver and processors dispatch on the tag.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Mapping, Union


class ValueKind(Enum):
    """Shape of a field value"""
    SCALAR = "scalar"      # "10px", 12, "#fff"
    LIST = "list"          # ["Open Sans", "sans-serif"]
    MAPPING = "mapping"    # {"background-color": "#fff", "background-image": ""}


def kind_of(value: Any) -> ValueKind:
    """
    Tag a raw value with its shape.

    Args:
        value: Any field value

    Returns:
        MAPPING for mappings, LIST for lists and tuples, SCALAR otherwise
    """
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    return ValueKind.SCALAR


def value_isEmpty(value: Any) -> bool:
    """
    Emptiness test used by exclusion and background output.

    None, "", "0", 0, 0.0, False and empty containers are empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, set, Mapping)):
        return len(value) == 0
    return False


def value_toString(value: Any) -> str:
    """String form of a scalar as it appears in CSS ("1" for True, "" for None/False)"""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _number_parse(value: Any) -> Union[float, None]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def value_looseEquals(left: Any, right: Any) -> bool:
    """
    Loose equality between two scalars.

    Numeric-looking values compare as numbers ("10" equals 10 and "10.0"),
    anything else compares by string form.
    """
    if left is None or right is None:
        # None compares as ""
        other = right if left is None else left
        if other is None:
            return True
        if isinstance(other, str):
            return other == ""
        return value_isEmpty(other)
    left_number = _number_parse(left)
    right_number = _number_parse(right)
    if left_number is not None and right_number is not None:
        return left_number == right_number
    return value_toString(left) == value_toString(right)


@dataclass
class ResolvedValue:
    """
    Result of resolving one output rule against a field value

    Attributes:
        value: Final value. A formatted string for scalar values, or the
               pattern-substituted mapping left for the field processor.
        excluded: The rule matched one of its exclusions and must not be
                  processed any further
    """
    value: Any
    excluded: bool = False

    @property
    def kind(self) -> ValueKind:
        """Shape of the resolved value"""
        return kind_of(self.value)
