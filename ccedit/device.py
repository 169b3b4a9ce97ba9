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

"""Device side of the bridge: execute commands against a CC1101.

The dispatcher handles one line at a time and always produces exactly one
response; malformed input becomes an error response, never an exception.
"""

import logging
import threading

from ccedit import errors
from ccedit.errors import ErrorCode
from ccedit import protocol
from ccedit.patable import DEFAULT_PA_TABLE
from ccedit.registers import CATALOG

LOG = logging.getLogger(__name__)
TRACE = logging.getLogger('ccedit.trace.device')


class DeviceWriteError(Exception):
    """The radio refused or failed a register write"""
    pass


class RegisterDevice:
    """Interface to the radio the dispatcher drives"""

    @property
    def available(self):
        return True

    def write_register(self, addr, value):
        raise NotImplementedError()

    def write_bulk(self, pairs):
        """Write each (addr, value) of @pairs in order"""
        for addr, value in pairs:
            self.write_register(addr, value)

    def write_patable(self, values):
        raise NotImplementedError()

    def read_register(self, addr):
        raise NotImplementedError()


class MemoryDevice(RegisterDevice):
    """A CC1101 stand-in that keeps its registers in memory"""

    def __init__(self, catalog=CATALOG):
        self.registers = catalog.defaults()
        self.pa_table = list(DEFAULT_PA_TABLE)
        self.is_available = True
        self.fail_writes = False

    @property
    def available(self):
        return self.is_available

    def write_register(self, addr, value):
        if self.fail_writes:
            raise DeviceWriteError('Write of 0x%02X failed' % addr)
        self.registers[addr] = value

    def write_bulk(self, pairs):
        if self.fail_writes:
            raise DeviceWriteError('Bulk write failed')
        self.registers.update(pairs)

    def write_patable(self, values):
        if self.fail_writes:
            raise DeviceWriteError('PA table write failed')
        self.pa_table = list(values)

    def read_register(self, addr):
        return self.registers.get(addr, 0)


class CommandDispatcher:
    def __init__(self, device):
        self.device = device
        self.commands_processed = 0
        self.status = 'Waiting for commands...'
        self._lock = threading.Lock()

    def _execute(self, cmd):
        if isinstance(cmd, protocol.Ping):
            self.status = 'Ping OK'
            return protocol.Ack()

        if self.device is None or not self.device.available:
            return protocol.Error(ErrorCode.DEVICE_UNAVAILABLE,
                                  'Device not available')

        if isinstance(cmd, protocol.WriteRegister):
            LOG.info('Write reg 0x%02X = 0x%02X', cmd.addr, cmd.value)
            try:
                self.device.write_register(cmd.addr, cmd.value)
            except DeviceWriteError as e:
                LOG.warning('Write failed: %s', e)
                return protocol.Error(ErrorCode.WRITE_FAILED, 'Write failed')
            self.status = 'Wrote 0x%02X->0x%02X' % (cmd.addr, cmd.value)
        elif isinstance(cmd, protocol.WriteBulk):
            LOG.info('Write bulk: %i regs', len(cmd.registers))
            try:
                self.device.write_bulk(cmd.registers.items())
                if cmd.pa_table is not None:
                    self.device.write_patable(cmd.pa_table)
            except DeviceWriteError as e:
                LOG.warning('Bulk write failed: %s', e)
                return protocol.Error(ErrorCode.WRITE_FAILED,
                                      'Bulk write failed')
            self.status = 'Bulk: %i regs' % len(cmd.registers)
        elif isinstance(cmd, protocol.ReadRegister):
            value = self.device.read_register(cmd.addr)
            self.status = 'Read 0x%02X=0x%02X' % (cmd.addr, value)
            return protocol.Data(value)
        else:
            return protocol.Error(ErrorCode.UNKNOWN_COMMAND,
                                  'Unknown command')
        return protocol.Ack()

    def handle_line(self, line):
        """Parse and execute one command line, returning the Response"""
        with self._lock:
            try:
                cmd = protocol.parse_command(line)
            except errors.ProtocolError as e:
                LOG.warning('Rejected command %r: %s', line, e.msg)
                return protocol.Error.from_exception(e)
            response = self._execute(cmd)
            if not isinstance(response, protocol.Error):
                self.commands_processed += 1
            return response


class LineReader:
    """Split a byte stream into lines

    Lines end at CR or LF; empty lines are skipped.  A line longer than
    @limit bytes is thrown away up to its terminator.
    """

    def __init__(self, limit=protocol.MAX_LINE):
        self.limit = limit
        self._buffer = bytearray()
        self._overflow = False

    def feed(self, data):
        """Consume @data and return the list of complete lines"""
        lines = []
        for byte in data:
            if byte in b'\r\n':
                if self._overflow:
                    self._overflow = False
                elif self._buffer:
                    lines.append(bytes(self._buffer))
                self._buffer.clear()
            elif self._overflow:
                continue
            elif len(self._buffer) >= self.limit - 1:
                LOG.warning('Discarding line longer than %i bytes',
                            self.limit)
                self._buffer.clear()
                self._overflow = True
            else:
                self._buffer.append(byte)
        return lines


def serve(port, dispatcher, stop_event=None):
    """Answer commands arriving on @port until @stop_event is set

    @port is an open pyserial port (or anything with read/write).
    """
    reader = LineReader()
    LOG.info('Serving bridge commands on %s', getattr(port, 'port', port))
    while stop_event is None or not stop_event.is_set():
        data = port.read(getattr(port, 'in_waiting', 0) or 1)
        if not data:
            continue
        for line in reader.feed(data):
            response = dispatcher.handle_line(line)
            port.write(response.encode())
            TRACE.debug('%s -> %s', line, response)
