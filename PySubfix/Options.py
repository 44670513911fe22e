from __future__ import annotations

import os
from collections.abc import Mapping

from PySubfix.SettingsType import SettingType, SettingsType

def _env_bool(name : str, default : bool) -> bool:
    return SettingsType({name: os.getenv(name, str(default))}).get_bool(name, default)

def default_settings() -> SettingsType:
    """
    Default settings, which may be overridden by environment variables
    """
    return SettingsType({
        'clean': _env_bool('SUBFIX_CLEAN', False),
        'ignore_existing': _env_bool('SUBFIX_IGNORE_EXISTING', False),
        'omit_default': _env_bool('SUBFIX_OMIT_DEFAULT', True),
        'keep_white': _env_bool('SUBFIX_KEEP_WHITE', False),
    })

class Options(SettingsType):
    """
    Settings for a repositioning run.

    clean           - strip every existing {\\anN} tag before assigning positions
    ignore_existing - keep a leading {\\anN} tag verbatim and reserve its position
    omit_default    - do not write the tag for the default (bottom-centre) position
    keep_white      - keep a pure white colour inherited from an ASS style
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        super().__init__(default_settings())

        if settings:
            self.update(settings)

    @property
    def clean(self) -> bool:
        return self.get_bool('clean')

    @property
    def ignore_existing(self) -> bool:
        return self.get_bool('ignore_existing')

    @property
    def omit_default(self) -> bool:
        return self.get_bool('omit_default', True)

    @property
    def keep_white(self) -> bool:
        return self.get_bool('keep_white')

    @property
    def omit_white(self) -> bool:
        return not self.keep_white
