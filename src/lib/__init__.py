"""
themecss - Output rules to stylesheets

Turns a field value and its declarative output rules into a nested
media query -> selector -> property -> value style tree.
"""

__version__ = "1.0.0"

from .engine import OutputEngine, styles_build
from .resolver import ValueResolver
from .styletree import StyleTree
from .properties import PropertyValueTransformer, TransformerRegistry
from .processors import ProcessorRegistry
from .store import ConfigStore, StoreError
from .render import styleTree_toCSS
from .log import LOG, state_connectToLogger

__all__ = [
    "OutputEngine",
    "styles_build",
    "ValueResolver",
    "StyleTree",
    "PropertyValueTransformer",
    "TransformerRegistry",
    "ProcessorRegistry",
    "ConfigStore",
    "StoreError",
    "styleTree_toCSS",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
