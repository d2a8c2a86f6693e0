"""
themecss - Output rules to stylesheets

Rule evaluation and value transformation for theme customization: a field
value plus its output rules become the CSS declarations to emit.
"""

__version__ = "1.0.0"

from .lib import (
    OutputEngine,
    styles_build,
    StyleTree,
    ConfigStore,
    styleTree_toCSS,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "OutputEngine",
    "styles_build",
    "StyleTree",
    "ConfigStore",
    "styleTree_toCSS",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
