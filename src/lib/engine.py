"""
Output engine for themecss

Builds the style tree for a field value from the field's output rules.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from ..config import appsettings, AppSettings
from ..models.rule import (
    FieldContext,
    RenderContext,
    RuleError,
    rule_fromDict,
    renderContext_parse,
)
from .log import LOG
from .processors import ProcessorContext, ProcessorRegistry
from .properties import PropertyValueTransformer
from .resolver import Lookup, ValueResolver
from .styletree import StyleTree


class OutputEngine:
    """
    Builds style trees from output rules

    Responsibilities:
    - Normalize each rule
    - Resolve the field value per rule
    - Gate rules by render context
    - Dispatch to the field type's processor

    Every build creates its own StyleTree; the engine keeps no per-build
    state, so one engine can serve many builds.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        transformer: Optional[PropertyValueTransformer] = None,
        processors: Optional[ProcessorRegistry] = None,
        lookup: Optional[Lookup] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            settings: Settings (default: appsettings)
            transformer: Property value transformer (default: built-ins)
            processors: Field processor registry (default: built-ins)
            lookup: get_config_value(config_id, key) for pattern_replace
        """
        self.settings = settings or appsettings
        self.transformer = transformer or PropertyValueTransformer()
        self.processors = processors or ProcessorRegistry()
        self.resolver = ValueResolver(
            lookup=lookup,
            transform=self.transformer.transform,
            settings=self.settings,
        )

    def exclusion_abortsRuleSet(self) -> bool:
        """
        Whether one excluded rule stops the remaining rules of the field.

        This is the established behavior. With abort_on_exclude disabled an
        excluded rule only skips itself.
        """
        return self.settings.abort_on_exclude

    def styleTree_build(
        self,
        rules: Sequence[Any],
        raw_value: Any,
        field_context: Optional[FieldContext] = None,
        render_context: Union[RenderContext, str, None] = None,
    ) -> StyleTree:
        """
        Build the style tree for one field value.

        Rules are applied in order: later rules overwrite earlier scalar
        values at the same key and extend multi-valued properties.

        Args:
            rules: Output rules (mappings or OutputRule instances)
            raw_value: The field's current value
            field_context: Field type and config id
            render_context: FRONTEND or EDITOR_PREVIEW (or their names)

        Returns:
            A new StyleTree
        """
        field_context = field_context or FieldContext(config_id=self.settings.default_config_id)
        render_context = renderContext_parse(render_context, self.settings)
        spec = self.processors.spec_get(field_context.field_type)
        processor_context = ProcessorContext(transformer=self.transformer, settings=self.settings)

        tree = StyleTree(self.settings)

        for index, rule_data in enumerate(rules):
            try:
                rule = rule_fromDict(rule_data, self.settings)
            except RuleError as e:
                LOG(f"Rule {index} skipped: {e}", level=3)
                continue

            resolved = self.resolver.resolve(rule, raw_value, field_context)
            if resolved.excluded:
                if self.exclusion_abortsRuleSet():
                    LOG(f"Rule {index} excluded, remaining rules not processed", level=3)
                    break
                LOG(f"Rule {index} excluded", level=3)
                continue

            if not rule.context_allows(render_context):
                LOG(f"Rule {index} skipped in {render_context.value} context", level=3)
                continue

            if spec.requires_element and not rule.element:
                LOG(f"Rule {index} skipped: no element", level=3)
                continue
            if spec.requires_property and not rule.property:
                LOG(f"Rule {index} skipped: no property", level=3)
                continue

            spec.handler(rule, resolved.value, tree, processor_context)

        LOG(f"Built {len(tree)} media query bucket(s) from {len(rules)} rule(s)", level=2)
        return tree

    def fields_build(
        self,
        fields: Iterable[Mapping[str, Any]],
        store: Optional[Any] = None,
        render_context: Union[RenderContext, str, None] = None,
    ) -> StyleTree:
        """
        Build one style tree for a list of field definitions.

        Field definition keys:
            key: Field key in the configuration store
            type: Field type (default, background, image)
            config_id: Configuration id (default: settings.default_config_id)
            value: Field value; read from the store when absent
            default: Value used when neither value nor a stored value exists
            output: List of output rules

        Args:
            fields: Field definitions
            store: ConfigStore providing storedValue_get() for fields without a value
            render_context: FRONTEND or EDITOR_PREVIEW

        Returns:
            Combined StyleTree, merged in field order
        """
        combined = StyleTree(self.settings)

        for definition in fields:
            config_id = str(definition.get('config_id') or self.settings.default_config_id)
            field_key = str(definition.get('key') or "")
            field_context = FieldContext(
                config_id=config_id,
                field_type=str(definition.get('type') or 'default'),
                field_key=field_key,
            )

            if 'value' in definition:
                value = definition['value']
            else:
                value = store.storedValue_get(config_id, field_key) if store is not None else None
                if value is None:
                    value = definition.get('default', "")

            output = definition.get('output') or []
            if not isinstance(output, (list, tuple)):
                LOG(f"Field '{field_key}' skipped: output must be a list", level=2)
                continue

            LOG(f"Building field '{field_key}' ({field_context.field_type})", level=2)
            combined.tree_merge(
                self.styleTree_build(output, value, field_context, render_context)
            )

        return combined


def styles_build(
    rules: Sequence[Any],
    raw_value: Any,
    field_context: Optional[FieldContext] = None,
    render_context: Union[RenderContext, str, None] = None,
    lookup: Optional[Lookup] = None,
) -> Dict[str, Dict[str, Dict[str, Any]]]:
    """
    Build the nested style dict for one field value with a default engine.

    Example:
        >>> styles_build([{'element': 'body', 'property': 'color'}], '#333')
        {'global': {'body': {'color': '#333'}}}
    """
    engine = OutputEngine(lookup=lookup)
    return engine.styleTree_build(rules, raw_value, field_context, render_context).asDict()
