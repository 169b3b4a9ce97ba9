# Copyright 2025 The ccedit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
from configparser import ConfigParser

from ccedit import platform

LOG = logging.getLogger(__name__)

DEFAULTS = {
    'bridge': {
        'port': '',
        'baudrate': '115200',
        'timeout': '1.0',
        'autosync': 'False',
        'debounce': '0.5',
    },
    'defaults': {
        'power_dbm': '10',
        'preset_name': 'Custom',
    },
}


class CceditConfig:
    def __init__(self, basepath, name="ccedit.config"):
        self.__basepath = basepath
        self.__name = name

        self.__config = ConfigParser(interpolation=None)

        cfg = os.path.join(basepath, name)
        if os.path.exists(cfg):
            try:
                self.__config.read(cfg, encoding='utf-8-sig')
            except UnicodeDecodeError:
                LOG.warning('Failed to read config as UTF-8; '
                            'falling back to default encoding')
                self.__config.read(cfg)

    def save(self):
        os.makedirs(self.__basepath, exist_ok=True)
        cfg = os.path.join(self.__basepath, self.__name)
        with open(cfg, "w", encoding='utf-8') as cfg_file:
            self.__config.write(cfg_file)

    def get(self, key, section):
        if self.__config.has_option(section, key):
            return self.__config.get(section, key)
        return DEFAULTS.get(section, {}).get(key)

    def set(self, key, value, section):
        if not self.__config.has_section(section):
            self.__config.add_section(section)

        self.__config.set(section, key, str(value))

    def is_defined(self, key, section):
        return self.__config.has_option(section, key)

    def remove_option(self, section, key):
        self.__config.remove_option(section, key)

        if not self.__config.items(section):
            self.__config.remove_section(section)


class ConfigProxy:
    def __init__(self, config, section):
        self._config = config
        self._section = section

    def get(self, key, section=None, default=None):
        value = self._config.get(key, section or self._section)
        return default if value is None else value

    def set(self, key, value, section=None):
        return self._config.set(key, value, section or self._section)

    def is_defined(self, key, section=None):
        return self._config.is_defined(key, section or self._section)

    def get_int(self, key, section=None, default=0):
        value = self.get(key, section)
        if value in (None, ''):
            return default
        try:
            return int(value)
        except ValueError:
            LOG.warning('Config %s.%s=%r is not an integer',
                        section or self._section, key, value)
            return default

    def get_float(self, key, section=None, default=0.0):
        value = self.get(key, section)
        if value in (None, ''):
            return default
        try:
            return float(value)
        except ValueError:
            LOG.warning('Config %s.%s=%r is not a number',
                        section or self._section, key, value)
            return default

    def get_bool(self, key, section=None, default=False):
        value = self.get(key, section)
        if value in (None, ''):
            return default
        return value.strip().lower() in ('1', 'true', 'yes', 'on')

    def set_bool(self, key, value, section=None):
        self.set(key, value and 'True' or 'False', section)


_CONFIG = None


def get(section="bridge"):
    global _CONFIG

    if not _CONFIG:
        _CONFIG = CceditConfig(platform.get_platform().config_dir())

    return ConfigProxy(_CONFIG, section)
