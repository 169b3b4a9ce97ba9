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

"""Line-delimited JSON commands and responses exchanged with the bridge.

Every message is one JSON object followed by a newline.  Commands carry a
``cmd`` tag, responses a ``type`` tag.
"""

import json
import logging

from ccedit.errors import ErrorCode, ProtocolError
from ccedit.patable import PA_TABLE_SIZE
from ccedit.registers import MAX_ADDRESS, NUM_REGISTERS

LOG = logging.getLogger(__name__)

MAX_LINE = 1024


def _dumps(obj):
    return json.dumps(obj, separators=(',', ':'))


def _encode(obj):
    return (_dumps(obj) + '\n').encode('ascii')


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def check_address(addr):
    if not _is_int(addr) or not 0 <= addr <= MAX_ADDRESS:
        raise ProtocolError(ErrorCode.INVALID_ADDRESS,
                            'Invalid address %r' % (addr,))
    return addr


def check_value(value, what='value'):
    if not _is_int(value) or not 0 <= value <= 0xFF:
        raise ProtocolError(ErrorCode.INVALID_JSON,
                            'Invalid %s %r' % (what, value))
    return value


def check_pa_table(pa_table):
    if (not isinstance(pa_table, (list, tuple)) or
            len(pa_table) != PA_TABLE_SIZE):
        raise ProtocolError(ErrorCode.INVALID_JSON,
                            'pa_table must be a list of %i bytes' % (
                                PA_TABLE_SIZE))
    return tuple(check_value(v, 'PA table entry') for v in pa_table)


class RegisterSet:
    """A validated sparse map of register address to byte value

    Keys may be ints or the decimal strings used on the wire.
    """

    def __init__(self, registers):
        if not isinstance(registers, dict):
            raise ProtocolError(ErrorCode.INVALID_JSON,
                                'registers must be an object')
        if len(registers) > NUM_REGISTERS:
            raise ProtocolError(ErrorCode.INVALID_JSON,
                                'Too many registers (%i > %i)' % (
                                    len(registers), NUM_REGISTERS))
        self._values = {}
        for key, value in registers.items():
            addr = key
            if isinstance(key, str):
                if not (key.isascii() and key.isdigit()):
                    raise ProtocolError(ErrorCode.INVALID_ADDRESS,
                                        'Invalid address %r' % key)
                addr = int(key)
            self._values[check_address(addr)] = check_value(value)

    def items(self):
        return sorted(self._values.items())

    def to_dict(self):
        return {str(addr): value for addr, value in self.items()}

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        return (isinstance(other, RegisterSet) and
                self._values == other._values)

    def __repr__(self):
        return 'RegisterSet(%r)' % dict(self.items())


class Command:
    name = None

    def to_dict(self):
        return {'cmd': self.name}

    def encode(self):
        return _encode(self.to_dict())

    def __eq__(self, other):
        return (type(self) is type(other) and
                self.to_dict() == other.to_dict())

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, _dumps(self.to_dict()))


class WriteRegister(Command):
    name = 'write_register'

    def __init__(self, addr, value):
        self.addr = check_address(addr)
        self.value = check_value(value)

    def to_dict(self):
        return {'cmd': self.name, 'addr': self.addr, 'value': self.value}


class WriteBulk(Command):
    name = 'write_bulk'

    def __init__(self, registers, pa_table=None):
        if not isinstance(registers, RegisterSet):
            registers = RegisterSet(registers)
        self.registers = registers
        if pa_table is not None:
            pa_table = check_pa_table(pa_table)
        self.pa_table = pa_table

    def to_dict(self):
        result = {'cmd': self.name, 'registers': self.registers.to_dict()}
        if self.pa_table is not None:
            result['pa_table'] = list(self.pa_table)
        return result


class ReadRegister(Command):
    name = 'read_register'

    def __init__(self, addr):
        self.addr = check_address(addr)

    def to_dict(self):
        return {'cmd': self.name, 'addr': self.addr}


class Ping(Command):
    name = 'ping'


def _load_object(line, what):
    if isinstance(line, bytes):
        try:
            line = line.decode('utf-8')
        except UnicodeDecodeError:
            raise ProtocolError(ErrorCode.INVALID_JSON,
                                'Invalid %s encoding' % what)
    try:
        obj = json.loads(line)
    except (ValueError, RecursionError) as e:
        raise ProtocolError(ErrorCode.INVALID_JSON,
                            'Invalid JSON: %s' % e)
    if not isinstance(obj, dict):
        raise ProtocolError(ErrorCode.INVALID_JSON,
                            'Expected a JSON object')
    return obj


def _address_field(obj):
    if 'addr' not in obj:
        raise ProtocolError(ErrorCode.INVALID_ADDRESS, 'Missing addr')
    return check_address(obj['addr'])


def parse_command(line):
    """Parse one command line (str or bytes) into a Command

    Raises ProtocolError carrying the error code to send back.
    """
    obj = _load_object(line, 'command')
    cmd = obj.get('cmd')
    if not isinstance(cmd, str):
        raise ProtocolError(ErrorCode.INVALID_JSON, 'Missing cmd')

    if cmd == WriteRegister.name:
        addr = _address_field(obj)
        if 'value' not in obj:
            raise ProtocolError(ErrorCode.INVALID_JSON, 'Missing value')
        return WriteRegister(addr, obj['value'])
    elif cmd == WriteBulk.name:
        if 'registers' not in obj:
            raise ProtocolError(ErrorCode.INVALID_JSON, 'Missing registers')
        return WriteBulk(obj['registers'], obj.get('pa_table'))
    elif cmd == ReadRegister.name:
        return ReadRegister(_address_field(obj))
    elif cmd == Ping.name:
        return Ping()
    else:
        raise ProtocolError(ErrorCode.UNKNOWN_COMMAND,
                            'Unknown command %r' % cmd)


class Response:
    type = None

    def to_dict(self):
        return {'type': self.type}

    def encode(self):
        return _encode(self.to_dict())

    def __eq__(self, other):
        return (type(self) is type(other) and
                self.to_dict() == other.to_dict())

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, _dumps(self.to_dict()))


class Ack(Response):
    type = 'ack'

    def to_dict(self):
        return {'type': self.type, 'success': True}


class Data(Response):
    type = 'data'

    def __init__(self, value):
        self.value = value

    def to_dict(self):
        return {'type': self.type, 'value': self.value}


class Error(Response):
    type = 'error'

    def __init__(self, code, msg):
        self.code = ErrorCode(code)
        self.msg = msg

    @classmethod
    def from_exception(cls, exc):
        return cls(exc.code, exc.msg)

    def to_dict(self):
        return {'type': self.type, 'code': int(self.code), 'msg': self.msg}


def parse_response(line):
    """Parse one response line into a Response"""
    obj = _load_object(line, 'response')
    rtype = obj.get('type')
    if rtype == Ack.type:
        return Ack()
    elif rtype == Data.type:
        return Data(check_value(obj.get('value')))
    elif rtype == Error.type:
        try:
            return Error(obj.get('code'), str(obj.get('msg', '')))
        except ValueError:
            raise ProtocolError(ErrorCode.INVALID_JSON,
                                'Unknown error code %r' % obj.get('code'))
    else:
        raise ProtocolError(ErrorCode.INVALID_JSON,
                            'Unknown response type %r' % (rtype,))
