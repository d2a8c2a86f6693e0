"""
Configuration store for themecss

Holds the saved values fields read their value from, and the values
pattern_replace tokens are looked up in. Values are grouped by config id:

    global:
      body_color: "#333"
      accent: "#0073aa"
    my_theme:
      typography:
        font-family: Roboto

Stores can be built in memory or loaded from a YAML file.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class StoreError(Exception):
    """Raised when a configuration store cannot be loaded"""
    pass


class ConfigStore:
    """
    Saved configuration values, grouped by config id
    """

    def __init__(self, values: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        """
        Create a store.

        Args:
            values: Mapping of config id -> {key: value}
        """
        self.values: Dict[str, Dict[str, Any]] = {}
        for config_id, entries in (values or {}).items():
            self.values[str(config_id)] = dict(entries or {})

    @classmethod
    def fromYAML(cls, path: Union[str, Path]) -> "ConfigStore":
        """
        Load a store from a YAML file.

        Raises:
            StoreError: If the file doesn't exist or can't be parsed
        """
        path = Path(path)
        if not path.exists():
            raise StoreError(f"Configuration file not found: {path}")
        try:
            with open(path, 'r') as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreError(f"Failed to parse {path.name}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise StoreError(f"{path.name} must contain a mapping of config ids")
        return cls(data)

    def value_get(self, config_id: str, key: str, default: Any = None) -> Any:
        """
        Get a value from a config id's entries.

        Supports nested keys with dot notation:
          store.value_get('global', 'typography.font-family')

        Args:
            config_id: Configuration id
            key: Value key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Stored value or default
        """
        value: Any = self.values.get(config_id, {})
        if key in value:
            return value[key]

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def value_set(self, config_id: str, key: str, value: Any) -> None:
        """Store a value under a config id"""
        self.values.setdefault(config_id, {})[key] = value

    def storedValue_get(self, config_id: str, field_key: str) -> Any:
        """A field's saved value, or None"""
        return self.value_get(config_id, field_key)

    def configValue_get(self, config_id: str, key: str) -> Any:
        """Lookup used for pattern_replace tokens, None when missing"""
        return self.value_get(config_id, key)

    def configIds_list(self) -> List[str]:
        """List config ids with stored values"""
        return sorted(self.values)

    def __repr__(self) -> str:
        return f"ConfigStore(config_ids={self.configIds_list()!r})"
