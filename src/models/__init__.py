"""
Models package for themecss

Contains data structures and type definitions for the style build.
"""

from .state import ProgramState, pipeline
from .rule import (
    OutputRule,
    FieldContext,
    RenderContext,
    RuleError,
    rule_fromDict,
    element_normalize,
    renderContext_parse,
)
from .values import ValueKind, ResolvedValue, kind_of
from .processors import ProcessorSpec

__all__ = [
    "ProgramState",
    "pipeline",
    "OutputRule",
    "FieldContext",
    "RenderContext",
    "RuleError",
    "rule_fromDict",
    "element_normalize",
    "renderContext_parse",
    "ValueKind",
    "ResolvedValue",
    "kind_of",
    "ProcessorSpec",
]
