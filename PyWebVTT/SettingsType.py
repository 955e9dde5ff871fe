from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Options dictionary for the parser and compiler with type-safe getters
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        """Get a boolean setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return False

        if isinstance(value, bool):
            return value
        elif isinstance(value, str):
            lower_val = value.lower()
            if lower_val == 'true':
                return True
            elif lower_val == 'false':
                return False

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, filtering out None values"""
        if hasattr(other, 'items'):
            if isinstance(other, SettingsType):
                other = dict(other)
            if isinstance(other, dict):
                other = {k: v for k, v in other.items() if v is not None}
        kwds = {k: v for k, v in kwds.items() if v is not None}
        super().update(other, **kwds)

def BuildOptions(options : Mapping[str,SettingType]|None = None, **overrides : SettingType) -> SettingsType:
    """
    Combine an options mapping with keyword overrides. Overrides that are None are ignored.
    """
    settings = SettingsType(options)
    settings.update(overrides)
    return settings
