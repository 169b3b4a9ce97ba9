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

import enum


class ErrorCode(enum.IntEnum):
    """Numbered error codes carried in bridge error responses"""
    INVALID_JSON = 1
    UNKNOWN_COMMAND = 2
    INVALID_ADDRESS = 3
    DEVICE_UNAVAILABLE = 4
    WRITE_FAILED = 5


class InvalidValueError(Exception):
    """An invalid value for a given parameter was used"""
    pass


class InvalidDataError(Exception):
    """Preset text could not be decoded"""
    pass


class CatalogError(Exception):
    """The register catalog contains an inconsistent definition"""
    pass


class ProtocolError(Exception):
    """A bridge command was malformed or not recognized"""

    def __init__(self, code, msg):
        super().__init__(msg)
        self.code = ErrorCode(code)
        self.msg = msg


class BridgeError(Exception):
    """An error occurred while talking to the bridge device"""
    pass


class NotConnectedError(BridgeError):
    """A command was issued while the bridge is not connected"""

    def __init__(self, msg=None):
        super().__init__(msg or 'Not connected')


class BridgeCommandError(BridgeError):
    """The bridge device answered a command with an error response"""

    def __init__(self, code, msg):
        super().__init__('Device error %i: %s' % (code, msg))
        self.code = code
        self.msg = msg
