"""Default-value configuration entries for permission nodes.

Every node owns a config entry supplying its default. Leaves own a
``BooleanConfigEntry``; groups own a ``ConfigEntryGroup`` that aggregates the
entries of their children, so a whole subtree's defaults can be loaded from
and dumped to one nested mapping.
"""

import logging
from typing import Any, Dict, Optional

from ....core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigEntry:
    """Base class for named configuration entries."""
    
    def __init__(self, name: str, description: Optional[str] = None):
        self.name = name
        self.description = description
    
    def parse(self, data: Any) -> Any:
        """Apply raw configuration data and return the resulting value."""
        raise NotImplementedError
    
    def dump(self) -> Any:
        """Return the current value in the form ``parse`` accepts."""
        raise NotImplementedError


class BooleanConfigEntry(ConfigEntry):
    """A boolean setting with a static default and an optional configured value."""
    
    def __init__(self, name: str, default: bool = False, description: Optional[str] = None):
        super().__init__(name, description)
        if not isinstance(default, bool):
            raise ConfigurationError(f"Default for '{name}' must be a boolean, got {default!r}")
        self.default = default
        self._value: Optional[bool] = None
    
    def get(self) -> bool:
        return self.default if self._value is None else self._value
    
    def set(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ConfigurationError(f"Value for '{self.name}' must be a boolean, got {value!r}")
        self._value = value
    
    def reset(self) -> None:
        self._value = None
    
    def parse(self, data: Any) -> bool:
        """Use ``data`` if it is a boolean, otherwise fall back to the default."""
        if isinstance(data, bool):
            self._value = data
        else:
            if data is not None:
                logger.warning(f"Ignoring non-boolean value {data!r} for permission default '{self.name}'")
            self._value = None
        return self.get()
    
    def dump(self) -> bool:
        return self.get()
    
    def __repr__(self) -> str:
        return f"BooleanConfigEntry({self.name!r}, value={self.get()})"


class ConfigEntryGroup(ConfigEntry):
    """Composite entry holding child entries by name."""
    
    def __init__(self, name: str, entries: Optional[list] = None, description: Optional[str] = None):
        super().__init__(name, description)
        self.entries: Dict[str, ConfigEntry] = {}
        for entry in entries or []:
            self.add_entry(entry)
    
    def add_entry(self, entry: ConfigEntry) -> None:
        self.entries[entry.name] = entry
    
    def remove_entry(self, entry: ConfigEntry) -> None:
        if self.entries.get(entry.name) is entry:
            del self.entries[entry.name]
    
    def parse(self, data: Any) -> Dict[str, Any]:
        """Distribute a nested mapping to child entries by name.

        Children missing from ``data`` fall back to their own defaults.
        """
        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"Ignoring non-mapping value {data!r} for permission group '{self.name}'")
            data = {}
        
        unknown = set(data) - set(self.entries)
        if unknown:
            logger.warning(f"Unknown permission defaults under '{self.name}': {sorted(unknown)}")
        
        return {name: entry.parse(data.get(name)) for name, entry in self.entries.items()}
    
    def dump(self) -> Dict[str, Any]:
        return {name: entry.dump() for name, entry in self.entries.items()}
    
    def __repr__(self) -> str:
        return f"ConfigEntryGroup({self.name!r}, entries={list(self.entries)})"
