from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

_TRUE_VALUES = { 'true', 'yes', 'on', '1' }
_FALSE_VALUES = { 'false', 'no', 'off', '0' }

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with a restricted range of value types and type-safe getters
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        """Get a boolean setting, accepting common string spellings"""
        value = self.get(key, default)
        if value is None:
            return False

        if isinstance(value, bool):
            return value
        elif isinstance(value, int):
            return value != 0
        elif isinstance(value, str):
            lower_val = value.strip().lower()
            if lower_val in _TRUE_VALUES:
                return True
            elif lower_val in _FALSE_VALUES:
                return False

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

    def get_int(self, key: str, default: int|None = None) -> int|None:
        """Get an integer setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int,float)):
            return int(value)
        elif isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to int")

    def get_str(self, key: str, default: str|None = None) -> str|None:
        """Get a string setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return None
        elif isinstance(value, str):
            return value
        elif isinstance(value, (int, float, bool)):
            return str(value)
        elif isinstance(value, list):
            return ', '.join(str(v) for v in value)

        return str(value)

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, ignoring None values so they do not mask defaults"""
        if hasattr(other, 'items'):
            other = {k: v for k, v in dict(other).items() if v is not None}
        kwds = {k: v for k, v in kwds.items() if v is not None}
        super().update(other, **kwds)
