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

import os
import platform as _pyplatform
import logging
from pathlib import Path

LOG = logging.getLogger(__name__)


class Platform:
    """Base class for platform-specific functions"""

    def __init__(self, basepath):
        self._base = basepath

    def config_dir(self):
        """Return the preferred configuration file directory"""
        return self._base

    def filter_filename(self, filename):
        """Filter @filename for platform-forbidden characters"""
        return filename

    def config_file(self, filename):
        """Return the full path to a config file with @filename"""
        return os.path.join(self.config_dir(),
                            self.filter_filename(filename))

    def default_dir(self):
        """Return the default directory for this platform"""
        return "."

    def os_version_string(self):
        """Return a string that describes the OS/platform version"""
        return "Unknown Operating System"


class UnixPlatform(Platform):
    """A platform module suitable for UNIX systems"""
    def __init__(self, basepath):
        if not basepath:
            basepath = os.path.join(self.default_dir(), ".ccedit")
        super().__init__(str(basepath))

    def default_dir(self):
        return str(Path.home())

    def filter_filename(self, filename):
        return filename.replace("/", "")

    def os_version_string(self):
        return " ".join([_pyplatform.system(), _pyplatform.release()])


class Win32Platform(Platform):
    """A platform module suitable for Windows systems"""
    def __init__(self, basepath=None):
        if not basepath:
            appdata = os.getenv("APPDATA")
            if not appdata:
                appdata = "C:\\"
            basepath = os.path.abspath(os.path.join(appdata, "ccedit"))
        super().__init__(basepath)

    def default_dir(self):
        return os.path.abspath(os.path.join(os.getenv("USERPROFILE", "."),
                                            "Desktop"))

    def filter_filename(self, filename):
        for char in "/\\:*?\"<>|":
            filename = filename.replace(char, "")

        return filename

    def os_version_string(self):
        return "Windows %s" % _pyplatform.release()


def _get_platform(basepath):
    if os.name == "nt":
        return Win32Platform(basepath)
    else:
        return UnixPlatform(basepath)


PLATFORM = None


def get_platform(basepath=None):
    """Return the platform singleton

    CCEDIT_CONFIG_DIR in the environment overrides the default
    configuration directory.
    """
    global PLATFORM

    if not PLATFORM:
        PLATFORM = _get_platform(basepath or os.getenv("CCEDIT_CONFIG_DIR"))
        LOG.debug("Config dir is %s", PLATFORM.config_dir())

    return PLATFORM
