"""
Output rule model and normalization

An output rule maps a field's value to one CSS declaration (or, for
background fields, a set of declarations). Rules arrive as plain mappings
from field definitions and are normalized into OutputRule instances with
every default filled in.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..config import appsettings, AppSettings


class RuleError(Exception):
    """Raised when an output rule cannot be normalized"""
    pass


class RenderContext(Enum):
    """
    Where the generated styles will be used

    The value strings are what callers and the CLI pass in.
    """
    FRONTEND = "frontend"              # public page
    EDITOR_PREVIEW = "editorPreview"   # admin / block editor preview


# Rule context names as written in rule definitions
CONTEXT_EDITOR = "editor"
CONTEXT_FRONT = "front"


@dataclass
class FieldContext:
    """
    Field-level information shared by all rules of one field

    Attributes:
        config_id: Configuration id for value lookups
        field_type: Selects the field processor (default, background, image)
        field_key: The field's key in the configuration store
    """
    config_id: str = "global"
    field_type: str = "default"
    field_key: str = ""


@dataclass
class OutputRule:
    """
    One normalized output rule

    Attributes:
        element: Selector string (lists are already deduplicated, sorted and
                 comma-joined), None if the rule has no element
        property: CSS property name, None for processors that don't need one
        media_query: Media query bucket
        prefix: Prepended to scalar values
        units: Appended to scalar values, before suffix
        suffix: Appended to scalar values
        sanitize_callback: Optional hook applied to the value before patterns
        value_pattern: Template in which the value token is replaced by the value
        pattern_replace: token -> lookup key in the configuration store
        exclude: Values that suppress the rule
        choice: Sub-key of a mapping value that acts as "the value"
        context: Render contexts ("editor", "front") the rule applies in
    """
    element: Optional[str] = None
    property: Optional[str] = None
    media_query: str = "global"
    prefix: str = ""
    units: str = ""
    suffix: str = ""
    sanitize_callback: Optional[Callable[[Any], Any]] = None
    value_pattern: str = "$"
    pattern_replace: Dict[str, str] = field(default_factory=dict)
    exclude: List[Any] = field(default_factory=list)
    choice: Optional[str] = None
    context: Optional[List[str]] = None

    def context_allows(self, render_context: RenderContext) -> bool:
        """
        Check the rule's context against the current render context.

        In an editor preview only rules that explicitly opt into "editor"
        apply. On the frontend, rules without a context always apply and
        rules with one must include "front".
        """
        if render_context is RenderContext.EDITOR_PREVIEW:
            return self.context is not None and CONTEXT_EDITOR in self.context
        if self.context is not None and CONTEXT_FRONT not in self.context:
            return False
        return True


def element_normalize(element: Union[str, Sequence[str], None]) -> Optional[str]:
    """
    Turn a selector or list of selectors into one selector key.

    Lists are deduplicated, sorted and joined with commas.

    Args:
        element: Selector string or sequence of selector strings

    Returns:
        Selector string, or None when no selector is given

    Raises:
        RuleError: If element is neither a string nor a sequence of strings

    Example:
        >>> element_normalize(["b", "a", "a"])
        'a,b'
    """
    if element is None:
        return None
    if isinstance(element, str):
        return element or None
    if isinstance(element, (list, tuple)):
        selectors = []
        for selector in element:
            if not isinstance(selector, str):
                raise RuleError(f"Selector must be a string, got {type(selector).__name__}")
            selectors.append(selector)
        if not selectors:
            return None
        return ','.join(sorted(set(selectors)))
    raise RuleError(f"Element must be a string or a list, got {type(element).__name__}")


def _string_get(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise RuleError(f"Rule key '{key}' must be a string")
    return str(value)


def rule_fromDict(data: Any, settings: Optional[AppSettings] = None) -> OutputRule:
    """
    Normalize a rule mapping into an OutputRule.

    Missing keys take their defaults. Unknown keys are ignored.

    Args:
        data: Rule mapping as written in a field's output list
        settings: Settings providing defaults (default: appsettings)

    Returns:
        Normalized OutputRule

    Raises:
        RuleError: If the rule or one of its keys has an unusable shape
    """
    settings = settings or appsettings

    if isinstance(data, OutputRule):
        return data
    if not isinstance(data, Mapping):
        raise RuleError(f"Output rule must be a mapping, got {type(data).__name__}")

    property_name = data.get('property')
    if property_name is not None and not isinstance(property_name, str):
        raise RuleError("Rule key 'property' must be a string")

    pattern_replace = data.get('pattern_replace') or {}
    if not isinstance(pattern_replace, Mapping):
        raise RuleError("Rule key 'pattern_replace' must be a mapping")

    exclude = data.get('exclude')
    if exclude is None:
        exclude = []
    elif not isinstance(exclude, (list, tuple)):
        raise RuleError("Rule key 'exclude' must be a list")

    context = data.get('context')
    if isinstance(context, str):
        context = [context]
    elif context is not None:
        if not isinstance(context, (list, tuple)):
            raise RuleError("Rule key 'context' must be a list")
        context = [str(name) for name in context]

    choice = data.get('choice')
    if choice is not None and choice != "":
        choice = str(choice)
    else:
        choice = None

    # Empty or non-string patterns disable substitution
    value_pattern = data.get('value_pattern', settings.value_token)
    if not isinstance(value_pattern, str):
        value_pattern = ""

    return OutputRule(
        element=element_normalize(data.get('element')),
        property=property_name or None,
        media_query=_string_get(data, 'media_query', settings.default_media_query),
        prefix=_string_get(data, 'prefix', ""),
        units=_string_get(data, 'units', ""),
        suffix=_string_get(data, 'suffix', ""),
        sanitize_callback=data.get('sanitize_callback'),
        value_pattern=value_pattern,
        pattern_replace={str(k): str(v) for k, v in pattern_replace.items()},
        exclude=list(exclude),
        choice=choice,
        context=context,
    )


def renderContext_parse(name: Union[str, RenderContext, None],
                        settings: Optional[AppSettings] = None) -> RenderContext:
    """
    Parse a render context name ("frontend" or "editorPreview").

    Raises:
        ValueError: If the name is not a known render context
    """
    if isinstance(name, RenderContext):
        return name
    settings = settings or appsettings
    return RenderContext(name or settings.default_render_context)
