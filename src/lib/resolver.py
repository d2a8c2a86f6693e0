"""
Value resolver for output rules

Turns one field value into the value one output rule emits:

    1. exclude check   - suppress the rule for excluded values
    2. sanitize        - optional rule callback
    3. value pattern   - "calc($ * 2)" with $ replaced by the value
    4. pattern replace - tokens replaced by stored configuration values
    5. format          - prefix + value + units + suffix for scalars

Mapping values come out unformatted so field processors can format each
entry themselves.
"""

import copy
from typing import Any, Callable, Optional

from ..config import appsettings, AppSettings
from ..models.rule import OutputRule, FieldContext
from ..models.values import (
    ResolvedValue,
    ValueKind,
    kind_of,
    value_isEmpty,
    value_looseEquals,
    value_toString,
)
from .log import LOG


Lookup = Callable[[str, str], Any]
Transform = Callable[[Optional[str], Any], Any]


def lookup_none(config_id: str, key: str) -> Any:
    """Lookup used when no configuration store is connected"""
    return None


def _transform_identity(property_name: Optional[str], value: Any) -> Any:
    return value


def _members_setEqual(left: Any, right: Any) -> bool:
    """Order- and duplicate-independent comparison of two sequences by string form"""
    return {value_toString(member) for member in left} == {value_toString(member) for member in right}


class ValueResolver:
    """
    Resolves field values against output rules

    The resolver never modifies the rule it is given, and mapping values
    are copied before substitution so the caller's value stays intact.
    """

    def __init__(
        self,
        lookup: Optional[Lookup] = None,
        transform: Optional[Transform] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            lookup: get_config_value(config_id, key) used by pattern_replace
            transform: (property, value) -> value applied before formatting
            settings: Settings providing the value token (default: appsettings)
        """
        self.lookup = lookup or lookup_none
        self.transform = transform or _transform_identity
        self.settings = settings or appsettings

    def resolve(
        self,
        rule: OutputRule,
        raw_value: Any,
        field_context: Optional[FieldContext] = None,
    ) -> ResolvedValue:
        """
        Resolve a raw field value for one rule.

        Args:
            rule: Normalized output rule
            raw_value: Field value (scalar, list or mapping)
            field_context: Field information, used for the config id

        Returns:
            ResolvedValue. When excluded, value is the raw value and the
            caller must not process the rule any further.
        """
        field_context = field_context or FieldContext(config_id=self.settings.default_config_id)

        if self.exclusion_matches(rule, raw_value):
            LOG(f"Value {raw_value!r} excluded for {rule.element} {rule.property}", level=3)
            return ResolvedValue(value=raw_value, excluded=True)

        value = self.sanitize_apply(rule, raw_value)
        value = self.valuePattern_apply(rule, value)
        value = self.patternReplace_apply(rule, value, field_context.config_id)
        return ResolvedValue(value=self.value_format(rule, value), excluded=False)

    def exclusion_matches(self, rule: OutputRule, raw_value: Any) -> bool:
        """
        Check the raw value against the empty value and the rule's exclusions.

        An entry matches when:
            - both the value and the entry are lists with the same members
            - a choice is set and value[choice] loosely equals the entry
            - the entry equals the value exactly
            - the entry is "" and the value is empty

        First match wins.
        """
        if isinstance(raw_value, str) and raw_value == "":
            return True

        kind = kind_of(raw_value)
        for exclude in rule.exclude:
            if kind is ValueKind.LIST and kind_of(exclude) is ValueKind.LIST:
                if _members_setEqual(raw_value, exclude):
                    return True
            if (
                kind is ValueKind.MAPPING
                and rule.choice is not None
                and rule.choice in raw_value
                and value_looseEquals(raw_value[rule.choice], exclude)
            ):
                return True
            if type(exclude) is type(raw_value) and exclude == raw_value:
                return True
            if isinstance(exclude, str) and exclude == "" and value_isEmpty(raw_value):
                return True
        return False

    def sanitize_apply(self, rule: OutputRule, value: Any) -> Any:
        """Apply the rule's sanitize callback, ignoring non-callables"""
        if rule.sanitize_callback is None:
            return value
        if not callable(rule.sanitize_callback):
            LOG(f"Ignoring non-callable sanitize_callback {rule.sanitize_callback!r}", level=3)
            return value
        return rule.sanitize_callback(copy.deepcopy(value))

    def valuePattern_apply(self, rule: OutputRule, value: Any) -> Any:
        """
        Substitute the value into the rule's value pattern.

        Scalars become pattern strings. For mappings every non-mapping
        entry is substituted, or only the choice entry when a choice is set.
        Lists substitute each member.

        Example:
            value_pattern "calc($ * 2)" with "10px" gives "calc(10px * 2)"
        """
        pattern = rule.value_pattern
        if not pattern:
            return value

        kind = kind_of(value)
        if kind is ValueKind.SCALAR:
            return self.pattern_substitute(pattern, value)
        if kind is ValueKind.LIST:
            return [self.pattern_substitute(pattern, member) for member in value]

        substituted = dict(value)
        for key, entry in value.items():
            if kind_of(entry) is ValueKind.MAPPING:
                continue
            if rule.choice is not None and key != rule.choice:
                continue
            substituted[key] = self.pattern_substitute(pattern, entry)
        return substituted

    def pattern_substitute(self, pattern: str, value: Any) -> Any:
        """Replace the value token in a pattern, leaving lists in place"""
        if kind_of(value) is ValueKind.LIST:
            return value
        return pattern.replace(self.settings.value_token, value_toString(value))

    def replacement_get(self, config_id: str, lookup_key: str) -> str:
        """Fetch a pattern_replace replacement ("" when the lookup misses)"""
        replacement = self.lookup(config_id, lookup_key)
        if replacement is None or replacement is False:
            return ""
        return value_toString(replacement)

    def patternReplace_apply(self, rule: OutputRule, value: Any, config_id: str) -> Any:
        """
        Replace pattern_replace tokens with stored configuration values.

        For mappings, an entry whose value is itself a key of the mapping
        takes the value stored under that key before replacement.
        """
        if not rule.pattern_replace:
            return value

        kind = kind_of(value)
        if kind is ValueKind.MAPPING:
            value = dict(value)
        elif kind is ValueKind.LIST:
            value = list(value)
        else:
            value = value_toString(value)

        for token, lookup_key in rule.pattern_replace.items():
            replacement = self.replacement_get(config_id, lookup_key)
            if kind is ValueKind.MAPPING:
                replaced = {}
                for key, entry in value.items():
                    subject = entry
                    if isinstance(entry, str) and entry in value:
                        subject = value[entry]
                    if kind_of(subject) is ValueKind.SCALAR:
                        subject = value_toString(subject).replace(token, replacement)
                    replaced[key] = subject
                value = replaced
            elif kind is ValueKind.LIST:
                value = [value_toString(member).replace(token, replacement) for member in value]
            else:
                value = value.replace(token, replacement)
        return value

    def value_format(self, rule: OutputRule, value: Any) -> Any:
        """
        Transform and wrap the value with prefix, units and suffix.

        Mappings are returned as they are. Lists are formatted only when
        the property's transformer turns them into a string.
        """
        kind = kind_of(value)
        if kind is ValueKind.MAPPING:
            return value

        value = self.transform(rule.property, value)
        if kind_of(value) is not ValueKind.SCALAR:
            return value
        return f"{rule.prefix}{value_toString(value)}{rule.units}{rule.suffix}"
